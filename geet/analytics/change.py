"""Two-date change detection by thresholding a spectral index."""

from __future__ import annotations

from typing import Union

import ee

from geet.core.errors import UnsupportedIndexError
from geet.core.logger import Logger
from geet.ingestion.indices import (
    NDWI_DEFAULT_NAMED,
    NdwiConvention,
    SpectralIndex,
    compute_index,
)
from geet.ingestion.sensorspec import Sensor, SensorSpec

logger = Logger.get_logger(__name__)

CHANGE_INDICES = (SpectralIndex.NDVI, SpectralIndex.NDWI, SpectralIndex.NDBI)


def detect_change(
    img1: ee.Image,
    img2: ee.Image,
    sensor: Union[Sensor, str],
    index: Union[SpectralIndex, str],
    threshold: float,
    ndwi_convention: Union[NdwiConvention, str, None] = None,
) -> ee.Image:
    """
    Threshold *index* on both images and add the two binary masks.

    Pixels where the index is ``>= threshold`` count as 1, so the result is
    0 (neither date), 1 (one date) or 2 (both dates). The band is named
    ``<INDEX>_CD``.
    """
    SensorSpec.for_index_sensor(sensor)
    idx = SpectralIndex.parse(index)
    if idx not in CHANGE_INDICES:
        raise UnsupportedIndexError(idx.value, [i.value for i in CHANGE_INDICES])
    convention = NDWI_DEFAULT_NAMED
    if ndwi_convention:
        convention = NdwiConvention.parse(ndwi_convention)
    logger.debug("%s change detection at threshold %s", idx.value, threshold)

    mask1 = compute_index(img1, sensor, idx, convention).select(idx.value).gte(threshold)
    mask2 = compute_index(img2, sensor, idx, convention).select(idx.value).gte(threshold)
    return mask1.add(mask2).rename(f"{idx.value}_CD")


def simple_ndvi_change_detection(img1, img2, sensor, threshold) -> ee.Image:
    """NDVI change between two dates; see :func:`detect_change`."""
    return detect_change(img1, img2, sensor, SpectralIndex.NDVI, threshold)


def simple_ndwi_change_detection(img1, img2, sensor, threshold) -> ee.Image:
    """NDWI change between two dates; see :func:`detect_change`."""
    return detect_change(img1, img2, sensor, SpectralIndex.NDWI, threshold)


def simple_ndbi_change_detection(img1, img2, sensor, threshold) -> ee.Image:
    """NDBI change between two dates; see :func:`detect_change`."""
    return detect_change(img1, img2, sensor, SpectralIndex.NDBI, threshold)
