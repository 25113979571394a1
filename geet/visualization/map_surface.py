"""Render Earth Engine images as tile layers on a Folium map."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import ee
import folium
from folium.raster_layers import TileLayer

from geet.core.config import ConfigManager
from geet.core.logger import Logger
from .presets import (
    CHANGE_VIS,
    NDVI_VIS,
    NDWI_VIS,
    TRUE_COLOR,
    as_params,
    class_vis,
)

EE_ATTRIBUTION = 'Map data &copy; <a href="https://earthengine.google.com/">Google Earth Engine</a>'


@dataclass
class MapLayer:
    """A layer registered on a MapSurface."""

    name: str
    vis_params: Dict[str, Any] = field(default_factory=dict)
    url: str = ""
    shown: bool = True


class MapSurface:
    """
    A Folium map onto which Earth Engine images are added as named layers.
    """

    def __init__(
        self,
        center: Optional[Sequence[float]] = None,
        zoom: Optional[int] = None,
        config: ConfigManager | None = None,
        logger=None,
    ) -> None:
        default_center, default_zoom = (config or ConfigManager()).get_map_view()
        self.map = folium.Map(
            location=list(center) if center is not None else default_center,
            zoom_start=zoom if zoom is not None else default_zoom,
        )
        self.layers: List[MapLayer] = []
        self._layer_control: Optional[folium.LayerControl] = None
        self.logger = logger or Logger.get_logger(__name__)

    def add_layer(
        self,
        image: ee.Image,
        vis_params: Optional[Mapping[str, Any]] = None,
        name: str = "layer",
        shown: bool = True,
    ) -> MapLayer:
        """Request map tiles for *image* and add them as a TileLayer."""
        params = as_params(vis_params or {})
        map_id = image.getMapId(params)
        url = map_id["tile_fetcher"].url_format
        TileLayer(
            tiles=url,
            attr=EE_ATTRIBUTION,
            name=name,
            overlay=True,
            control=True,
            show=shown,
        ).add_to(self.map)
        layer = MapLayer(name=name, vis_params=params, url=url, shown=shown)
        self.layers.append(layer)
        self.logger.debug("Added layer %s", name)
        return layer

    def layer_names(self) -> List[str]:
        return [layer.name for layer in self.layers]

    def save(self, path: str) -> str:
        """Write the map, with a layer switcher, to an HTML file."""
        if self._layer_control is None:
            self._layer_control = folium.LayerControl(
                position="topright", collapsed=False
            ).add_to(self.map)
        self.map.save(path)
        self.logger.info("Map written to %s", path)
        return path


def plot_rgb(surface: MapSurface, image: ee.Image, title: str = "rgb") -> MapLayer:
    """True color composite (B4, B3, B2 stretched to 0.3)."""
    return surface.add_layer(image, TRUE_COLOR, title)


def plot_ndvi(surface: MapSurface, image: ee.Image, title: str = "ndvi") -> MapLayer:
    """NDVI from red (-1) to green (1)."""
    return surface.add_layer(image, NDVI_VIS, title)


def plot_ndwi(surface: MapSurface, image: ee.Image, title: str = "ndwi") -> MapLayer:
    """NDWI from cyan (-1) to blue (1)."""
    return surface.add_layer(image, NDWI_VIS, title)


def plot_class(
    surface: MapSurface,
    image: ee.Image,
    num_classes: int,
    title: str = "class_final",
) -> MapLayer:
    """Classification map with 2 to 5 classes."""
    return surface.add_layer(image, class_vis(num_classes), title)


def plot_change(surface: MapSurface, image: ee.Image, title: str = "change") -> MapLayer:
    """Change detection sum: black (0), red (1), green (2)."""
    return surface.add_layer(image, CHANGE_VIS, title)


def plot_clusters(
    surface: MapSurface, image: ee.Image, title: str = "clusters"
) -> MapLayer:
    """Clusters with random colors."""
    return surface.add_layer(image.randomVisualizer(), {}, title)
