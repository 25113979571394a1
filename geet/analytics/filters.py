"""Neighborhood filters over a circular kernel."""

import ee


def _check_radius(radius) -> None:
    if radius <= 0:
        raise ValueError(f"Kernel radius must be positive, got {radius}")


def texture(image: ee.Image, radius: float) -> ee.Image:
    """
    Local standard deviation of every band within *radius* pixels.
    Bigger radii generalize the result more.
    """
    _check_radius(radius)
    return image.reduceNeighborhood(
        reducer=ee.Reducer.stdDev(), kernel=ee.Kernel.circle(radius)
    )


def majority(image: ee.Image, radius: float) -> ee.Image:
    """
    Modal value within *radius* pixels; clears the salt-and-pepper effect of
    a classification map.
    """
    _check_radius(radius)
    return image.reduceNeighborhood(
        reducer=ee.Reducer.mode(), kernel=ee.Kernel.circle(radius)
    )
