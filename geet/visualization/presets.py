"""
Visualization parameter bundles passed to Earth Engine when a layer is
rendered. Each accessor returns a fresh dict so callers may tweak it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping

from geet.core.errors import InvalidClassCountError
from .palettes import COLOR

TRUE_COLOR: Mapping[str, Any] = MappingProxyType(
    {"bands": ("B4", "B3", "B2"), "max": 0.3}
)
NDVI_VIS: Mapping[str, Any] = MappingProxyType(
    {"min": -1, "max": 1, "palette": ("FF0000", "00FF00")}
)
NDWI_VIS: Mapping[str, Any] = MappingProxyType(
    {"min": -1, "max": 1, "palette": ("00FFFF", "0000FF")}
)
CHANGE_VIS: Mapping[str, Any] = MappingProxyType(
    {"min": 0, "max": 2, "palette": (COLOR["SHADOW"], COLOR["URBAN"], COLOR["PASTURE"])}
)

CLASS_PALETTES: Mapping[int, tuple[str, ...]] = MappingProxyType(
    {
        2: (COLOR["SHADOW"], COLOR["NULL"]),
        3: (COLOR["URBAN"], COLOR["FOREST"], COLOR["WATER"]),
        4: (COLOR["URBAN"], COLOR["FOREST"], COLOR["PASTURE"], COLOR["WATER"]),
        5: (
            COLOR["URBAN"],
            COLOR["FOREST"],
            COLOR["PASTURE"],
            COLOR["WATER"],
            COLOR["SHADOW"],
        ),
    }
)


def as_params(preset: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a preset into the plain dict/list form Earth Engine expects."""
    return {k: list(v) if isinstance(v, tuple) else v for k, v in preset.items()}


def class_vis(num_classes: int) -> Dict[str, Any]:
    """Categorical visualization for a classification map with 2 to 5 classes."""
    if num_classes not in CLASS_PALETTES:
        raise InvalidClassCountError(num_classes, sorted(CLASS_PALETTES))
    return {
        "min": 0,
        "max": num_classes - 1,
        "palette": list(CLASS_PALETTES[num_classes]),
    }
