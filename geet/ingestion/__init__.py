"""Ingestion package: sensors, spectral indices and Earth Engine access."""

from .sensorspec import Sensor, SensorSpec
from .indices import NdwiConvention, SpectralIndex, compute_index, spectral_indices
from .eemanager import EarthEngineManager, ee_manager, filter_date_range
from .loader import CollectionKind, LoadedImage, load_image

__all__ = [
    "Sensor",
    "SensorSpec",
    "SpectralIndex",
    "NdwiConvention",
    "compute_index",
    "spectral_indices",
    "EarthEngineManager",
    "ee_manager",
    "filter_date_range",
    "CollectionKind",
    "LoadedImage",
    "load_image",
]
