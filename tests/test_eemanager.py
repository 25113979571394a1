"""
Tests for EarthEngineManager: initialization, retries and collection retrieval.
"""

# pylint: disable=W0621,W0613

import json
from unittest.mock import MagicMock

import ee
import pytest
from ee import EEException
from google.oauth2.credentials import Credentials

from geet.ingestion import eemanager
from geet.ingestion.eemanager import EarthEngineManager, ee_manager, filter_date_range


def test_initialize_does_not_raise():
    """initialize() calls the (stubbed) ee.Initialize without error."""
    ee_manager.project = None
    ee_manager.credential_path = None
    ee_manager.initialize()


def test_initialize_passes_project(monkeypatch):
    monkeypatch.delenv("EARTHENGINE_TOKEN", raising=False)
    captured = {}
    monkeypatch.setattr(
        ee, "Initialize", lambda creds=None, project=None: captured.update(project=project)
    )
    EarthEngineManager(project="my-project").initialize()
    assert captured["project"] == "my-project"


def test_project_from_env(monkeypatch):
    monkeypatch.setenv("GEET_EE_PROJECT", "env-project")
    assert EarthEngineManager().project == "env-project"


def test_initialize_with_env_token(monkeypatch):
    """initialize() uses EARTHENGINE_TOKEN without prompting."""
    token_info = {
        "refresh_token": "abc",
        "client_id": "id",
        "client_secret": "secret",
    }
    monkeypatch.setenv("EARTHENGINE_TOKEN", json.dumps(token_info))

    captured = {}

    def fake_initialize(creds=None, project=None):
        captured["creds"] = creds
        captured["project"] = project

    monkeypatch.setattr(ee, "Initialize", fake_initialize)
    EarthEngineManager().initialize()

    assert isinstance(captured.get("creds"), Credentials)


def test_initialize_authenticates_on_failure(monkeypatch):
    monkeypatch.delenv("EARTHENGINE_TOKEN", raising=False)
    calls = []

    def fake_initialize(creds=None, project=None):
        calls.append("init")
        if len(calls) == 1:
            raise EEException("not initialized")

    monkeypatch.setattr(ee, "Initialize", fake_initialize)
    monkeypatch.setattr(ee, "Authenticate", lambda: calls.append("auth"))
    EarthEngineManager().initialize()
    assert calls == ["init", "auth", "init"]


def test_safe_get_info_retries(monkeypatch):
    monkeypatch.setattr(eemanager.time, "sleep", lambda s: None)
    obj = MagicMock()
    obj.getInfo.side_effect = [EEException("timeout"), {"ok": True}]

    assert EarthEngineManager().safe_get_info(obj) == {"ok": True}
    assert obj.getInfo.call_count == 2


def test_safe_get_info_raises_after_max_retries(monkeypatch):
    monkeypatch.setattr(eemanager.time, "sleep", lambda s: None)
    obj = MagicMock()
    obj.getInfo.side_effect = EEException("boom")

    with pytest.raises(EEException):
        EarthEngineManager().safe_get_info(obj, max_retries=2)
    assert obj.getInfo.call_count == 2


def test_get_image_collection_filters(fake_ee):
    region = object()
    coll = EarthEngineManager().get_image_collection(
        "LANDSAT/LC08/C02/T1_TOA", "2020-01-01", "2020-12-31", region
    )
    assert coll.collection_id == "LANDSAT/LC08/C02/T1_TOA"
    assert fake_ee.recorder.find("filterDate") == [
        ("filterDate", ("2020-01-01", "2020-12-31"), {})
    ]
    assert fake_ee.recorder.find("filterBounds")[0][1] == (region,)


def test_filter_date_range(fake_ee):
    coll = ee.ImageCollection("LANDSAT/LC08/C02/T1_TOA")
    filter_date_range(coll, 6, 8)
    (_, args, _), = fake_ee.recorder.find("filter")
    assert args[0] == ("calendarRange", 6, 8, "month")


def test_filter_date_range_rejects_unknown_field():
    with pytest.raises(ValueError):
        filter_date_range(MagicMock(), 1, 2, field="fortnight")
