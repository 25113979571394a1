"""
Module `analytics.calibration` converts Landsat digital numbers (DN) to top
of atmosphere (TOA) quantities using the rescaling factors carried in each
scene's metadata.

Formulas
--------
Radiance:               L = ML * Qcal + AL
Reflectance:            p' = Mp * Qcal + Ap
Solar angle correction: p = p' / sin(SE)  or  p = p' / cos(SZ), SZ = 90 - SE
Brightness temperature: T = K2 / ln(K1 / L + 1)

ML/AL are RADIANCE_MULT_BAND_x/RADIANCE_ADD_BAND_x, Mp/Ap are
REFLECTANCE_MULT_BAND_x/REFLECTANCE_ADD_BAND_x, SE is SUN_ELEVATION in
degrees and K1/K2 are the thermal conversion constants of the band.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

import ee

from geet.core.errors import UnsupportedSensorError
from geet.core.logger import Logger
from geet.ingestion.sensorspec import Sensor, SensorSpec

logger = Logger.get_logger(__name__)

_DEG_TO_RAD = math.pi / 180


class SolarAngle(str, Enum):
    """Solar angle correction mode for Landsat 8 reflectance."""

    SE = "SE"  # local sun elevation angle
    SZ = "SZ"  # local solar zenith angle


def _band_name(band: Union[int, str]) -> tuple[str, str]:
    """Return ``(band number, band label)`` for 10, '10' or 'B10'."""
    num = str(band).upper().lstrip("B")
    return num, f"B{num}"


def _linear_rescale(image: ee.Image, band: Union[int, str], prefix: str, suffix: str):
    num, label = _band_name(band)
    dn = image.select(label)
    mult = ee.Number(image.get(f"{prefix}_MULT_BAND_{num}"))
    add = ee.Number(image.get(f"{prefix}_ADD_BAND_{num}"))
    return dn.expression(
        "(M * image) + A", {"M": mult, "A": add, "image": dn}
    ).rename(f"{label}_{suffix}")


def toa_radiance(image: ee.Image, band: Union[int, str]) -> ee.Image:
    """DN to TOA spectral radiance (W / (m2 * srad * um)) for one band."""
    return _linear_rescale(image, band, "RADIANCE", "TOA_Radiance")


def toa_reflectance(image: ee.Image, band: Union[int, str]) -> ee.Image:
    """DN to TOA planetary reflectance, without solar angle correction."""
    return _linear_rescale(image, band, "REFLECTANCE", "TOA_Reflectance")


def solar_angle_elevation(image: ee.Image, raw_reflectance: ee.Image) -> ee.Image:
    """Divide reflectance by the sine of the scene's sun elevation."""
    sun_elevation = ee.Number(image.get("SUN_ELEVATION"))
    sin_elevation = sun_elevation.multiply(_DEG_TO_RAD).sin()
    return raw_reflectance.divide(sin_elevation).rename("TOA_Reflectance_SE")


def solar_angle_zenith(image: ee.Image, raw_reflectance: ee.Image) -> ee.Image:
    """Divide reflectance by the cosine of the solar zenith (90 - elevation)."""
    sun_elevation = ee.Number(image.get("SUN_ELEVATION"))
    solar_zenith = ee.Number(90).subtract(sun_elevation)
    cos_zenith = solar_zenith.multiply(_DEG_TO_RAD).cos()
    return raw_reflectance.divide(cos_zenith).rename("TOA_Reflectance_SZ")


def toa_reflectance_l8(
    image: ee.Image,
    band: Union[int, str],
    solar_angle: Union[SolarAngle, str, None] = SolarAngle.SZ,
) -> ee.Image:
    """
    Landsat 8 TOA reflectance with solar angle correction.

    ``solar_angle`` is 'SE' (sun elevation) or 'SZ' (solar zenith). Any other
    value is reported and replaced by 'SZ'.
    """
    try:
        mode = SolarAngle(solar_angle.upper() if solar_angle else SolarAngle.SZ)
    except (AttributeError, ValueError):
        logger.warning(
            "Invalid solar angle mode %r: use 'SE' for the local sun elevation "
            "angle or 'SZ' for the local solar zenith angle. Falling back to 'SZ'.",
            solar_angle,
        )
        mode = SolarAngle.SZ

    raw = _linear_rescale(image, band, "REFLECTANCE", f"TOA_Reflectance_{mode.value}")
    if mode is SolarAngle.SE:
        return solar_angle_elevation(image, raw)
    return solar_angle_zenith(image, raw)


def brightness_temperature(
    image: ee.Image, band: str, k1, k2
) -> ee.Image:
    """
    TOA brightness temperature (K) from a TOA radiance band.

    *k1* and *k2* may be plain numbers or ee.Number values read from metadata.
    """
    semlog = image.expression("K1 / L + 1", {"K1": k1, "L": image.select(band)})
    return image.expression(
        "K2 / LOG", {"K2": k2, "LOG": semlog.log()}
    ).rename(f"{band}_BT")


def _fixed_constants_temp(image: ee.Image, sensor: Sensor) -> ee.Image:
    spec = SensorSpec.for_sensor(sensor)
    band = spec.band("THERMAL")
    constants = spec.thermal_constants[band]
    return brightness_temperature(image, band, constants["k1"], constants["k2"])


def brightness_temp_l5(image: ee.Image) -> ee.Image:
    """Landsat 5 brightness temperature from B6 (K1 607.76, K2 1260.56)."""
    return _fixed_constants_temp(image, Sensor.L5)


def brightness_temp_l7(image: ee.Image) -> ee.Image:
    """Landsat 7 brightness temperature from B6 (K1 666.09, K2 1282.71)."""
    return _fixed_constants_temp(image, Sensor.L7)


def brightness_temp_l8(image: ee.Image, single: bool = False) -> ee.Image:
    """
    Landsat 8 brightness temperature using the K1/K2 constants of the scene
    metadata.

    The double-band mode (``single=False``, the default) is meant to cover
    B11 too, but only B10 is converted in either mode. Call
    :func:`brightness_temperature` with the ``K*_CONSTANT_BAND_11`` values to
    convert B11.
    """
    k1_10 = ee.Number(image.get("K1_CONSTANT_BAND_10"))
    k2_10 = ee.Number(image.get("K2_CONSTANT_BAND_10"))
    if not single:
        logger.warning("Double-band brightness temperature converts B10 only")
    return brightness_temperature(image, "B10", k1_10, k2_10)


def brightness_temp(
    image: ee.Image, sensor: Union[Sensor, str], single: bool = False
) -> ee.Image:
    """Dispatch to the brightness temperature conversion of *sensor*."""
    parsed = Sensor.parse(sensor)
    if parsed is Sensor.L5:
        return brightness_temp_l5(image)
    if parsed is Sensor.L7:
        return brightness_temp_l7(image)
    if parsed is Sensor.L8:
        return brightness_temp_l8(image, single=single)
    raise UnsupportedSensorError(sensor, [s.value for s in Sensor])
