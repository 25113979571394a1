"""
Module `ingestion.indices` provides spectral index computation for Landsat
images by loading formulas from `resources/index_formulas.json` and resolving
band roles through the sensor's SensorSpec.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ee import Image

from geet.core.errors import UnsupportedIndexError, UnsupportedNdwiConventionError
from geet.core.logger import Logger
from .sensorspec import Sensor, SensorSpec

logger = Logger.get_logger(__name__)

_FORMULA_PATH = (
    Path(__file__).resolve().parent.parent / "resources" / "index_formulas.json"
)
with open(_FORMULA_PATH, "r", encoding="utf-8") as _f:
    INDEX_REGISTRY = json.load(_f)


class SpectralIndex(str, Enum):
    """Spectral indices available for L5 and L8 images."""

    NDVI = "NDVI"
    NDWI = "NDWI"
    NDBI = "NDBI"
    NRVI = "NRVI"
    EVI = "EVI"
    SAVI = "SAVI"
    GOSAVI = "GOSAVI"

    @classmethod
    def parse(cls, value: Union["SpectralIndex", str]) -> "SpectralIndex":
        """Return the SpectralIndex for *value* (case-insensitive) or raise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedIndexError(value, [i.value for i in cls])


class NdwiConvention(str, Enum):
    """Band pair used for NDWI."""

    GREEN_NIR = "green_nir"
    RED_SWIR1 = "red_swir1"

    @classmethod
    def parse(cls, value: Union["NdwiConvention", str]) -> "NdwiConvention":
        """Return the NdwiConvention for *value* (case-insensitive) or raise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedNdwiConventionError(value, [c.value for c in cls])


# NDWI band pair applied when the caller does not choose one. Computing every
# index uses (GREEN, NIR); asking for NDWI by name uses (RED, SWIR1).
NDWI_DEFAULT_ALL = NdwiConvention.GREEN_NIR
NDWI_DEFAULT_NAMED = NdwiConvention.RED_SWIR1


def _formula(index: SpectralIndex, ndwi_convention: NdwiConvention) -> dict:
    formula = INDEX_REGISTRY[index.value]
    if index is SpectralIndex.NDWI and ndwi_convention is NdwiConvention.RED_SWIR1:
        variant = formula["variants"][ndwi_convention.value]
        return {**formula, **variant}
    return formula


def compute_index(
    img: Image,
    sensor: Union[Sensor, str],
    index: Union[SpectralIndex, str],
    ndwi_convention: Union[NdwiConvention, str, None] = None,
) -> Image:
    """
    Compute a named spectral index on an EE Image of the given sensor.

    Args:
        img: ee.Image with the sensor's native band labels (B1, B2, ...).
        sensor: 'L5' or 'L8'.
        index: one of SpectralIndex (case-insensitive).
        ndwi_convention: band pair for NDWI; defaults to NDWI_DEFAULT_NAMED.

    Returns:
        Single-band ee.Image named by the canonical index name.
    """
    spec = SensorSpec.for_index_sensor(sensor)
    idx = SpectralIndex.parse(index)
    convention = NDWI_DEFAULT_NAMED
    if ndwi_convention:
        convention = NdwiConvention.parse(ndwi_convention)
    formula = _formula(idx, convention)
    bands = [spec.band(role) for role in formula["bands"]]
    logger.debug("Computing %s for %s from bands %s", idx.value, spec.sensor.value, bands)

    if formula.get("method") == "normalized_difference":
        return img.normalizedDifference(bands).rename(idx.value)

    token_map = {}
    for role, band in zip(formula["bands"], bands):
        token_map[role.upper()] = img.select(band)
    for param_key, param_val in formula.get("params", {}).items():
        token_map[param_key.upper()] = param_val
    return img.expression(formula["expr"], token_map).rename(idx.value)


def _as_index_list(index: Union[SpectralIndex, str, Iterable]) -> List[SpectralIndex]:
    if isinstance(index, (SpectralIndex, str)):
        return [SpectralIndex.parse(index)]
    return [SpectralIndex.parse(i) for i in index]


def spectral_indices(
    image: Image,
    sensor: Union[Sensor, str],
    index: Union[SpectralIndex, str, Sequence[Union[SpectralIndex, str]], None] = None,
    ndwi_convention: Union[NdwiConvention, str, None] = None,
) -> Image:
    """
    Append spectral index bands to *image*.

    With ``index=None`` all seven indices are added (NDVI, NDWI, NDBI, NRVI,
    EVI, SAVI, GOSAVI); otherwise only the named index or indices. Unknown
    sensors raise UnsupportedSensorError and unknown names
    UnsupportedIndexError before any band is computed.
    """
    SensorSpec.for_index_sensor(sensor)
    if index is None:
        indices = list(SpectralIndex)
        convention = NDWI_DEFAULT_ALL
    else:
        indices = _as_index_list(index)
        convention = NDWI_DEFAULT_NAMED
    if ndwi_convention:
        convention = NdwiConvention.parse(ndwi_convention)

    result = image
    for idx in indices:
        result = result.addBands(compute_index(image, sensor, idx, convention))
    return result


def index_names() -> List[str]:
    """Return the canonical names of all supported indices."""
    return [i.value for i in SpectralIndex]
