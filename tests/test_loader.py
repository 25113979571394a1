"""Tests for the least-cloudy scene loader."""

import pytest

from geet.core.errors import (
    MissingParameterError,
    UnsupportedCollectionError,
    UnsupportedYearError,
)
from geet.ingestion.eemanager import EarthEngineManager
from geet.ingestion.loader import (
    COLLECTIONS,
    CollectionKind,
    load_image,
    resolve_collection,
    sensor_for_year,
)
from geet.ingestion.sensorspec import Sensor


@pytest.mark.parametrize(
    "year, sensor", [(2013, Sensor.L8), (2020, Sensor.L8), (2012, Sensor.L5), (1985, Sensor.L5)]
)
def test_sensor_for_year(year, sensor):
    assert sensor_for_year(year) is sensor


def test_year_before_archive():
    with pytest.raises(UnsupportedYearError):
        sensor_for_year(1984)


def test_every_collection_has_rgb_vis():
    for sensor in ("L5", "L8"):
        for kind in CollectionKind:
            entry = COLLECTIONS[sensor][kind.value]
            assert entry["id"].startswith("LANDSAT/")
            assert len(entry["vis"]["bands"]) == 3


def test_resolve_collection_copies_vis():
    sensor, cid, vis = resolve_collection(2020, "toa")
    assert sensor is Sensor.L8
    assert cid == "LANDSAT/LC08/C02/T1_TOA"
    vis["max"] = 99
    assert COLLECTIONS["L8"]["TOA"]["vis"]["max"] == 0.3


def test_unknown_collection():
    with pytest.raises(UnsupportedCollectionError):
        resolve_collection(2020, "L1T")


def test_load_image_requires_year():
    with pytest.raises(MissingParameterError):
        load_image()


def test_load_image_picks_least_cloudy(fake_ee):
    loaded = load_image(2016, "SR", manager=EarthEngineManager())
    assert loaded.image is fake_ee.collection_image
    assert loaded.sensor is Sensor.L8
    assert loaded.collection_id == "LANDSAT/LC08/C02/T1_L2"
    assert loaded.title == "loadImg_2016"
    assert loaded.vis_params["bands"] == ["SR_B4", "SR_B3", "SR_B2"]

    rec = fake_ee.recorder
    assert rec.find("filterDate")[0][1] == ("2016-01-01", "2016-12-31")
    assert rec.find("sort")[0][1] == ("CLOUD_COVER",)
    (_, (region,), _), = rec.find("filterBounds")
    assert region.geojson == {"type": "Point", "coordinates": [-43.25, -22.90]}


def test_load_image_l5_with_roi(fake_ee):
    loaded = load_image(1999, CollectionKind.TOA, roi=(10.0, 20.0), title="scene")
    assert loaded.sensor is Sensor.L5
    assert loaded.collection_id == "LANDSAT/LT05/C02/T1_TOA"
    assert loaded.title == "scene_1999"
    (_, (region,), _), = fake_ee.recorder.find("filterBounds")
    assert region.geojson["coordinates"] == [10.0, 20.0]
