"""Color table shared by the visualization presets."""

from types import MappingProxyType

from geet.core.errors import UnknownColorError

COLOR = MappingProxyType(
    {
        "WATER": "0066ff",
        "FOREST": "009933",
        "PASTURE": "99cc00",
        "URBAN": "ff0000",
        "SHADOW": "000000",
        "NULL": "808080",
    }
)


def color(name: str) -> str:
    """
    Return the hex color of a class token: water, forest, pasture, urban,
    shadow or null (case-insensitive).
    """
    key = name.strip().upper() if isinstance(name, str) else name
    if key not in COLOR:
        raise UnknownColorError(name, [c.lower() for c in COLOR])
    return COLOR[key]
