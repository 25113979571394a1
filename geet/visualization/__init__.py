"""Visualization helpers."""

from .palettes import COLOR, color
from .presets import CHANGE_VIS, NDVI_VIS, NDWI_VIS, TRUE_COLOR, class_vis
from .map_surface import (
    MapLayer,
    MapSurface,
    plot_change,
    plot_class,
    plot_clusters,
    plot_ndvi,
    plot_ndwi,
    plot_rgb,
)

__all__ = [
    "COLOR",
    "color",
    "TRUE_COLOR",
    "NDVI_VIS",
    "NDWI_VIS",
    "CHANGE_VIS",
    "class_vis",
    "MapLayer",
    "MapSurface",
    "plot_rgb",
    "plot_ndvi",
    "plot_ndwi",
    "plot_class",
    "plot_change",
    "plot_clusters",
]
