"""
Module `geo.aoi` converts regions of interest and training samples from local
representations (shapely geometries, GeoJSON, vector files, lon/lat pairs)
into Earth Engine objects.
"""

import os
from typing import Any, Mapping, Sequence, Union

import ee
import geopandas as gpd
from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

RegionLike = Union[ee.Geometry, BaseGeometry, Mapping[str, Any], Sequence[float], str]


def read_vector(path: str) -> gpd.GeoDataFrame:
    """Read a vector file with GeoPandas, reprojected to EPSG:4326."""
    gdf = gpd.read_file(path)
    if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(epsg=4326)
    return gdf


def to_ee_geometry(region: RegionLike) -> ee.Geometry:
    """
    Return an ee.Geometry for *region*.

    Accepted inputs:
      - an ee.Geometry (returned unchanged)
      - a shapely geometry
      - a GeoJSON geometry, Feature or FeatureCollection mapping
      - a ``(lon, lat)`` pair, converted to a point
      - a path to a vector file (all features are dissolved)
      - a ``"lon,lat"`` string
    """
    if isinstance(region, ee.Geometry):
        return region
    if isinstance(region, BaseGeometry):
        return ee.Geometry(mapping(region))
    if isinstance(region, str):
        if os.path.exists(region):
            gdf = read_vector(region)
            return ee.Geometry(mapping(unary_union(list(gdf.geometry))))
        parts = [p.strip() for p in region.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Cannot interpret region {region!r}")
        return ee.Geometry.Point([float(parts[0]), float(parts[1])])
    if isinstance(region, Mapping):
        kind = region.get("type")
        if kind == "FeatureCollection":
            geoms = [shape(f["geometry"]) for f in region.get("features", [])]
            return ee.Geometry(mapping(unary_union(geoms)))
        if kind == "Feature":
            return ee.Geometry(region["geometry"])
        return ee.Geometry(dict(region))
    if isinstance(region, Sequence) and len(region) == 2:
        lon, lat = region
        return ee.Geometry.Point([float(lon), float(lat)])
    raise TypeError(f"Unsupported region type: {type(region).__name__}")


def features_from_file(path: str, class_property: str) -> ee.FeatureCollection:
    """
    Build an ee.FeatureCollection of labeled samples from a local vector file.
    Only the geometry and *class_property* of each row are sent to Earth Engine.
    """
    gdf = read_vector(path)
    if class_property not in gdf.columns:
        raise KeyError(f"Column '{class_property}' not found in {path}")
    features = []
    for _, row in gdf.iterrows():
        value = row[class_property]
        # numpy scalars are not JSON serializable
        props = {class_property: value.item() if hasattr(value, "item") else value}
        features.append(ee.Feature(ee.Geometry(mapping(row.geometry)), props))
    return ee.FeatureCollection(features)


def load_training_data(source: str, class_property: str) -> ee.FeatureCollection:
    """Return training samples from a local vector file or an EE asset id."""
    if os.path.exists(source):
        return features_from_file(source, class_property)
    return ee.FeatureCollection(source)

