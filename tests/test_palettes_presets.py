"""Tests for the color table and visualization presets."""

import pytest

from geet.core.errors import InvalidClassCountError, UnknownColorError
from geet.visualization.palettes import COLOR, color
from geet.visualization.presets import (
    CHANGE_VIS,
    NDVI_VIS,
    TRUE_COLOR,
    as_params,
    class_vis,
)


@pytest.mark.parametrize(
    "name, hex_code",
    [
        ("water", "0066ff"),
        ("FOREST", "009933"),
        ("Pasture", "99cc00"),
        ("urban", "ff0000"),
        ("shadow", "000000"),
        ("null", "808080"),
    ],
)
def test_color_lookup(name, hex_code):
    assert color(name) == hex_code


def test_unknown_color():
    with pytest.raises(UnknownColorError) as exc:
        color("lava")
    assert "water" in str(exc.value)


def test_color_table_is_read_only():
    with pytest.raises(TypeError):
        COLOR["WATER"] = "ffffff"


def test_class_vis_ranges():
    for n in range(2, 6):
        vis = class_vis(n)
        assert vis["min"] == 0
        assert vis["max"] == n - 1
        assert len(vis["palette"]) == n


def test_class_vis_palettes():
    assert class_vis(2)["palette"] == ["000000", "808080"]
    assert class_vis(3)["palette"] == ["ff0000", "009933", "0066ff"]
    assert class_vis(5)["palette"][-1] == "000000"


@pytest.mark.parametrize("n", [0, 1, 6])
def test_class_vis_rejects_count(n):
    with pytest.raises(InvalidClassCountError):
        class_vis(n)


def test_change_preset():
    assert CHANGE_VIS["min"] == 0
    assert CHANGE_VIS["max"] == 2
    assert CHANGE_VIS["palette"] == ("000000", "ff0000", "99cc00")


def test_as_params_returns_fresh_lists():
    params = as_params(TRUE_COLOR)
    assert params == {"bands": ["B4", "B3", "B2"], "max": 0.3}
    params["bands"].append("B1")
    assert TRUE_COLOR["bands"] == ("B4", "B3", "B2")
    assert as_params(NDVI_VIS)["palette"] == ["FF0000", "00FF00"]
