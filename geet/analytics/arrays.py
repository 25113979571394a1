"""
Compute spectral indices and calibrations in-memory with NumPy.

These mirror the Earth Engine formulas used elsewhere in geet and work on
scalars or arrays of band values, e.g. pixels already downloaded or values
used to sanity-check a server-side result.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping

import numpy as np

from geet.core.errors import UnsupportedIndexError
from geet.ingestion.indices import INDEX_REGISTRY

SAVI_L = INDEX_REGISTRY["SAVI"]["params"]["L"]
GOSAVI_Y = INDEX_REGISTRY["GOSAVI"]["params"]["Y"]


def normalized_difference(a, b):
    """(a - b) / (a + b)."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return (a - b) / (a + b)


def ndvi(red, nir):
    """Normalized Difference Vegetation Index."""
    return normalized_difference(nir, red)


def ndwi(green, nir):
    """Normalized Difference Water Index, (GREEN - NIR) / (GREEN + NIR)."""
    return normalized_difference(green, nir)


def ndbi(swir1, nir):
    """Normalized Difference Built-up Index."""
    return normalized_difference(swir1, nir)


def nrvi(red, nir):
    """Normalized Ratio Vegetation Index."""
    ratio = np.asarray(red, dtype=float) / np.asarray(nir, dtype=float)
    return (ratio - 1) / (ratio + 1)


def evi(red, nir, blue):
    """Enhanced Vegetation Index."""
    red, nir, blue = (np.asarray(x, dtype=float) for x in (red, nir, blue))
    return 2.5 * (nir - red) / (nir + 6 * red - 7.5 * blue + 1)


def savi(red, nir, L=SAVI_L):
    """Soil Adjusted Vegetation Index."""
    red, nir = np.asarray(red, dtype=float), np.asarray(nir, dtype=float)
    return (1 + L) * (nir - red) / (nir + red + L)


def gosavi(green, nir, Y=GOSAVI_Y):
    """Green Optimized Soil Adjusted Vegetation Index."""
    green, nir = np.asarray(green, dtype=float), np.asarray(nir, dtype=float)
    return (nir - green) / (nir + green + Y)


# index name -> (function, band roles in argument order)
INDEX_FUNCTIONS: Dict[str, tuple[Callable, tuple[str, ...]]] = {
    "NDVI": (ndvi, ("RED", "NIR")),
    "NDWI": (ndwi, ("GREEN", "NIR")),
    "NDBI": (ndbi, ("SWIR1", "NIR")),
    "NRVI": (nrvi, ("RED", "NIR")),
    "EVI": (evi, ("RED", "NIR", "BLUE")),
    "SAVI": (savi, ("RED", "NIR")),
    "GOSAVI": (gosavi, ("GREEN", "NIR")),
}


def evaluate_index(index: str, bands: Mapping[str, object]):
    """
    Evaluate *index* from a mapping of band roles ('RED', 'NIR', ...) to values.
    """
    key = str(index).upper()
    if key not in INDEX_FUNCTIONS:
        raise UnsupportedIndexError(index, list(INDEX_FUNCTIONS))
    func, roles = INDEX_FUNCTIONS[key]
    missing = [r for r in roles if r not in bands]
    if missing:
        raise KeyError(f"{key} needs band roles {missing}")
    return func(*(bands[r] for r in roles))


def change_mask(before, after, threshold):
    """Sum of the ``>= threshold`` masks of two index arrays (0, 1 or 2)."""
    return (np.asarray(before) >= threshold).astype(int) + (
        np.asarray(after) >= threshold
    ).astype(int)


def linear_rescale(dn, mult, add):
    """DN to TOA radiance or reflectance: mult * dn + add."""
    return mult * np.asarray(dn, dtype=float) + add


def brightness_temperature(radiance, k1, k2):
    """TOA brightness temperature (K): k2 / ln(k1 / L + 1)."""
    return k2 / np.log(k1 / np.asarray(radiance, dtype=float) + 1)
