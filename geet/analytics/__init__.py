"""Analytics helpers: change detection, classification, calibration, filters."""

from .change import (
    detect_change,
    simple_ndbi_change_detection,
    simple_ndvi_change_detection,
    simple_ndwi_change_detection,
)
from .classification import (
    CartParams,
    KMeansParams,
    RandomForestParams,
    SvmParams,
    cart,
    classify,
    kmeans,
    random_forest,
    rf,
    svm,
)
from .calibration import (
    SolarAngle,
    brightness_temp,
    brightness_temp_l5,
    brightness_temp_l7,
    brightness_temp_l8,
    brightness_temperature,
    toa_radiance,
    toa_reflectance,
    toa_reflectance_l8,
)
from .filters import majority, texture

__all__ = [
    "detect_change",
    "simple_ndvi_change_detection",
    "simple_ndwi_change_detection",
    "simple_ndbi_change_detection",
    "SvmParams",
    "CartParams",
    "RandomForestParams",
    "KMeansParams",
    "svm",
    "cart",
    "random_forest",
    "rf",
    "classify",
    "kmeans",
    "SolarAngle",
    "toa_radiance",
    "toa_reflectance",
    "toa_reflectance_l8",
    "brightness_temperature",
    "brightness_temp",
    "brightness_temp_l5",
    "brightness_temp_l7",
    "brightness_temp_l8",
    "texture",
    "majority",
]
