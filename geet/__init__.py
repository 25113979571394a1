"""
geet: small helpers to write Google Earth Engine apps with less code.

Spectral indices, change detection, classification, radiometric calibration,
neighborhood filters and map presets for Landsat 5/7/8 imagery.
"""

from geet.core.errors import (
    GeetError,
    InvalidClassCountError,
    MissingParameterError,
    ParameterTypeError,
    UnknownColorError,
    UnsupportedClassifierError,
    UnsupportedCollectionError,
    UnsupportedIndexError,
    UnsupportedNdwiConventionError,
    UnsupportedSensorError,
    UnsupportedYearError,
)
from geet.ingestion import (
    CollectionKind,
    NdwiConvention,
    Sensor,
    SensorSpec,
    SpectralIndex,
    compute_index,
    filter_date_range,
    load_image,
    spectral_indices,
)
from geet.analytics import (
    CartParams,
    KMeansParams,
    RandomForestParams,
    SolarAngle,
    SvmParams,
    brightness_temp,
    brightness_temp_l5,
    brightness_temp_l7,
    brightness_temp_l8,
    brightness_temperature,
    cart,
    classify,
    detect_change,
    kmeans,
    majority,
    random_forest,
    rf,
    simple_ndbi_change_detection,
    simple_ndvi_change_detection,
    simple_ndwi_change_detection,
    svm,
    texture,
    toa_radiance,
    toa_reflectance,
    toa_reflectance_l8,
)
from geet.visualization import (
    COLOR,
    MapSurface,
    color,
    plot_change,
    plot_class,
    plot_clusters,
    plot_ndvi,
    plot_ndwi,
    plot_rgb,
)

__version__ = "0.1.0"
