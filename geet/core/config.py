"""core.config
---------------

Configuration loader/manager for geet. Provides a central API for
loading settings from YAML/TOML/JSON and retrieving them via
:py:meth:`ConfigManager.get`.
"""

import os
import json
import yaml
import toml

from geet.core.errors import GeetError


class ConfigValidationError(GeetError):
    """Raised when configuration loading or validation fails."""


class ConfigManager:
    """
    Loads and manages configuration from file or defaults.
    Holds the default hyperparameters used by the classification helpers
    and the initial view of rendered maps.
    """

    # Sampling scale (meters) for training data
    DEFAULT_SAMPLE_SCALE: int = 30

    # Support vector machine
    DEFAULT_SVM_KERNEL: str = "RBF"
    DEFAULT_SVM_COST: float = 10

    # Random forest
    DEFAULT_RF_TREES: int = 10

    # k-means clustering
    DEFAULT_KMEANS_CLUSTERS: int = 15
    DEFAULT_KMEANS_SCALE: int = 30
    DEFAULT_KMEANS_PIXELS: int = 5000

    # Initial map view (lat, lon) centred on Rio de Janeiro
    DEFAULT_MAP_CENTER: tuple[float, float] = (-22.90, -43.25)
    DEFAULT_MAP_ZOOM: int = 8

    def __init__(self, config_path=None):
        self.config = {
            "sample_scale": self.DEFAULT_SAMPLE_SCALE,
            "svm_kernel": self.DEFAULT_SVM_KERNEL,
            "svm_cost": self.DEFAULT_SVM_COST,
            "rf_trees": self.DEFAULT_RF_TREES,
            "kmeans_clusters": self.DEFAULT_KMEANS_CLUSTERS,
            "kmeans_scale": self.DEFAULT_KMEANS_SCALE,
            "kmeans_pixels": self.DEFAULT_KMEANS_PIXELS,
            "map_center": list(self.DEFAULT_MAP_CENTER),
            "map_zoom": self.DEFAULT_MAP_ZOOM,
        }
        if config_path:
            self.load(config_path)

    def load(self, path: str) -> None:
        """
        Load configuration from a file (YAML, TOML, or JSON).
        Overwrites existing keys in self.config.
        """
        ext = os.path.splitext(path)[1].lower()
        if ext not in (".yaml", ".yml", ".toml", ".json"):
            raise ConfigValidationError(f"Unsupported config format: {ext}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                elif ext == ".toml":
                    data = toml.load(f)
                else:
                    data = json.load(f)
        except Exception as e:
            raise ConfigValidationError(
                f"Failed to load config from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {path} did not produce a dict")
        self.config.update(data)

    def get(self, key, default=None):
        """
        Retrieve a configuration value by key, or return `default` if not present.

        Args:
            key (str): The configuration parameter to look up.
            default:  The value to return if `key` is not found.
        """
        return self.config.get(key, default)

    def merge(self, other: "ConfigManager") -> None:
        """
        Merge another ConfigManager into this one.
        Values in other.config override this.config.
        """
        if not isinstance(other, ConfigManager):
            raise TypeError("Can only merge ConfigManager instances")
        self.config.update(other.config)

    def get_map_view(self) -> tuple[list[float], int]:
        """Return the ``(center, zoom)`` used when creating a new map."""
        center = self.get("map_center", list(self.DEFAULT_MAP_CENTER))
        if not isinstance(center, (list, tuple)) or len(center) != 2:
            raise ConfigValidationError(
                f"map_center must be a [lat, lon] pair, got {center!r}"
            )
        return [float(center[0]), float(center[1])], int(
            self.get("map_zoom", self.DEFAULT_MAP_ZOOM)
        )
