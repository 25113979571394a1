"""core.errors
---------------

Typed errors raised by geet helpers. Every error derives from
:class:`GeetError` and from :class:`ValueError`, so callers may branch on the
specific kind or catch the whole family.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class GeetError(Exception):
    """Base class for all geet errors."""


class _ChoiceError(GeetError, ValueError):
    """An input value that is not one of the accepted choices."""

    kind = "value"

    def __init__(self, value: Any, choices: Optional[Iterable[Any]] = None):
        self.value = value
        self.choices = tuple(choices) if choices is not None else ()
        msg = f"Unsupported {self.kind} {value!r}"
        if self.choices:
            msg += f". Choose from: {', '.join(str(c) for c in self.choices)}"
        super().__init__(msg)


class UnsupportedSensorError(_ChoiceError):
    """Sensor descriptor is not recognized or not valid for the operation."""

    kind = "sensor"


class UnsupportedIndexError(_ChoiceError):
    """Spectral index name is not recognized or not valid for the operation."""

    kind = "index"


class UnsupportedCollectionError(_ChoiceError):
    """Collection kind passed to the image loader is not RAW, TOA or SR."""

    kind = "collection"


class UnsupportedYearError(_ChoiceError):
    """Acquisition year is outside every supported sensor's range."""

    kind = "year"


class InvalidClassCountError(_ChoiceError):
    """Number of classes has no categorical palette."""

    kind = "number of classes"


class UnknownColorError(_ChoiceError):
    """Color token is not part of the palette table."""

    kind = "color"


class UnsupportedNdwiConventionError(_ChoiceError):
    """NDWI band pair is neither green_nir nor red_swir1."""

    kind = "NDWI convention"


class MissingParameterError(GeetError, ValueError):
    """A required parameter was not supplied."""

    def __init__(self, name: str, hint: str = ""):
        self.name = name
        msg = f"Missing required parameter '{name}'"
        if hint:
            msg += f": {hint}"
        super().__init__(msg)


class UnsupportedClassifierError(_ChoiceError):
    """Classifier name is not one of the supported supervised methods."""

    kind = "classifier"


class ParameterTypeError(GeetError, TypeError):
    """A parameter structure does not match the operation it was passed to."""

    def __init__(self, name: str, expected: type, got: Any):
        self.name = name
        self.expected = expected
        super().__init__(
            f"'{name}' must be {expected.__name__}, got {type(got).__name__}"
        )
