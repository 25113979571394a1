"""
Module `ingestion.sensorspec` defines the Sensor descriptor and the SensorSpec
class, which encapsulates per-sensor metadata (band-role mapping, thermal
constants) loaded from `resources/sensor_specs.json`.
"""

import json
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from geet.core.errors import UnsupportedSensorError


class Sensor(str, Enum):
    """Landsat instruments known to geet."""

    L5 = "L5"
    L7 = "L7"
    L8 = "L8"

    @classmethod
    def parse(cls, value: Union["Sensor", str]) -> "Sensor":
        """Return the Sensor for *value* (case-insensitive) or raise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedSensorError(value, [s.value for s in cls])


# Sensors for which band-role formulas (spectral indices, change detection) apply
INDEX_SENSORS = (Sensor.L5, Sensor.L8)


class SensorSpec:
    """
    Holds metadata for a sensor: band-role table and thermal constants.
    Instances are immutable views over the JSON registry.
    """

    _registry: Optional[dict] = None

    def __init__(
        self,
        sensor: Sensor,
        name: str,
        bands: Mapping[str, str],
        thermal_constants: Mapping[str, Mapping[str, float]] | None = None,
        spectral_indices: bool = True,
    ):
        self.sensor = sensor
        self.name = name
        self.bands = MappingProxyType(dict(bands))
        self.thermal_constants = MappingProxyType(
            {k: MappingProxyType(dict(v)) for k, v in (thermal_constants or {}).items()}
        )
        self.spectral_indices = spectral_indices

    def __repr__(self) -> str:
        return f"SensorSpec({self.sensor.value!r})"

    def band(self, role: str) -> str:
        """Return the physical band label for a semantic *role* (e.g. 'NIR')."""
        key = role.upper()
        if key not in self.bands:
            raise KeyError(f"Sensor {self.sensor.value} has no '{key}' band")
        return self.bands[key]

    @classmethod
    def _load_registry(cls) -> dict:
        """Load sensor specs from resources/sensor_specs.json."""
        if cls._registry is None:
            base = Path(__file__).resolve().parent.parent
            spec_file = base / "resources" / "sensor_specs.json"
            with open(spec_file, "r", encoding="utf-8") as f:
                cls._registry = json.load(f)
        return cls._registry

    @classmethod
    def for_sensor(cls, sensor: Union[Sensor, str]) -> "SensorSpec":
        """
        Factory method: create a SensorSpec for a sensor descriptor by reading the registry.
        """
        parsed = Sensor.parse(sensor)
        spec = cls._load_registry().get(parsed.value)
        if spec is None:
            raise UnsupportedSensorError(sensor, list(cls._load_registry()))
        return cls(
            sensor=parsed,
            name=spec.get("name", parsed.value),
            bands=spec["bands"],
            thermal_constants=spec.get("thermal_constants"),
            spectral_indices=spec.get("spectral_indices", True),
        )

    @classmethod
    def for_index_sensor(cls, sensor: Union[Sensor, str]) -> "SensorSpec":
        """
        Like :meth:`for_sensor` but restricted to sensors with index formulas.
        """
        spec = cls.for_sensor(sensor)
        if not spec.spectral_indices:
            raise UnsupportedSensorError(sensor, [s.value for s in INDEX_SENSORS])
        return spec
