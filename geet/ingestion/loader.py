"""
Module `ingestion.loader` fetches a single, least-cloudy Landsat scene for a
year and location. Handy for debugging or trying out the other helpers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import ee

from geet.core.errors import (
    MissingParameterError,
    UnsupportedCollectionError,
    UnsupportedYearError,
)
from geet.core.logger import Logger
from geet.geo.aoi import RegionLike, to_ee_geometry
from .eemanager import EarthEngineManager, ee_manager
from .sensorspec import Sensor

logger = Logger.get_logger(__name__)

_COLLECTIONS_PATH = (
    Path(__file__).resolve().parent.parent / "resources" / "collections.json"
)
with open(_COLLECTIONS_PATH, "r", encoding="utf-8") as _f:
    COLLECTIONS = json.load(_f)

# First year served by Landsat 8, and the earliest Landsat 5 year supported
L8_FIRST_YEAR = 2013
L5_FIRST_YEAR = 1985

DEFAULT_ROI = (-43.25, -22.90)


class CollectionKind(str, Enum):
    """Processing level of the loaded scene."""

    RAW = "RAW"
    TOA = "TOA"
    SR = "SR"

    @classmethod
    def parse(cls, value: Union["CollectionKind", str]) -> "CollectionKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedCollectionError(value, [c.value for c in cls])


@dataclass
class LoadedImage:
    """A scene returned by :func:`load_image` plus what is needed to display it."""

    image: ee.Image
    collection_id: str
    sensor: Sensor
    vis_params: Dict[str, Any] = field(default_factory=dict)
    title: str = "loadImg"


def sensor_for_year(year: int) -> Sensor:
    """Return the Landsat sensor whose archive covers *year*."""
    if year >= L8_FIRST_YEAR:
        return Sensor.L8
    if year >= L5_FIRST_YEAR:
        return Sensor.L5
    raise UnsupportedYearError(year, [f">= {L5_FIRST_YEAR}"])


def resolve_collection(
    year: int, collection: Union[CollectionKind, str] = CollectionKind.TOA
) -> tuple[Sensor, str, Dict[str, Any]]:
    """Return ``(sensor, collection_id, vis_params)`` for a year and collection kind."""
    sensor = sensor_for_year(year)
    kind = CollectionKind.parse(collection)
    entry = COLLECTIONS[sensor.value][kind.value]
    return sensor, entry["id"], dict(entry["vis"])


def load_image(
    year: Optional[int] = None,
    collection: Union[CollectionKind, str] = CollectionKind.TOA,
    roi: Optional[RegionLike] = None,
    title: str = "loadImg",
    manager: EarthEngineManager = ee_manager,
) -> LoadedImage:
    """
    Load the least cloudy scene of *year* intersecting *roi*.

    Years from 2013 on come from Landsat 8, 1985 to 2012 from Landsat 5.
    The default roi is a point over Rio de Janeiro.
    """
    if year is None:
        raise MissingParameterError("year", "the acquisition year selects the sensor")
    sensor, collection_id, vis_params = resolve_collection(int(year), collection)
    region = to_ee_geometry(roi if roi is not None else DEFAULT_ROI)
    logger.info("Loading %s scene for %s from %s", sensor.value, year, collection_id)

    scenes = manager.get_image_collection(
        collection_id, f"{year}-01-01", f"{year}-12-31", region
    )
    image = ee.Image(scenes.sort("CLOUD_COVER").first())
    return LoadedImage(
        image=image,
        collection_id=collection_id,
        sensor=sensor,
        vis_params=vis_params,
        title=f"{title}_{year}",
    )
