"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

"""
Bounding regions and their split into per-agent vertical strips.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike
from shapely import Polygon, box

from ..errors import InvalidRegion

LatLng = tuple[float, float]


@dataclass(frozen=True)
class BoundingRegion:
    """
    Axis-aligned geographic rectangle in degrees.
    """

    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: float

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounds as (lat_min, lat_max, lng_min, lng_max)."""
        return (self.lat_min, self.lat_max, self.lng_min, self.lng_max)

    @property
    def width(self) -> float:
        """Longitude span in degrees."""
        return self.lng_max - self.lng_min

    @property
    def height(self) -> float:
        """Latitude span in degrees."""
        return self.lat_max - self.lat_min

    @property
    def top_left(self) -> LatLng:
        return (self.lat_max, self.lng_min)

    @property
    def bottom_right(self) -> LatLng:
        return (self.lat_min, self.lng_max)

    @property
    def center(self) -> LatLng:
        return (
            0.5 * (self.lat_min + self.lat_max),
            0.5 * (self.lng_min + self.lng_max),
        )

    @property
    def shape(self) -> Polygon:
        """Region as a shapely polygon in (lng, lat) coordinates."""
        return box(self.lng_min, self.lat_min, self.lng_max, self.lat_max)

    def padded(self, padding: float) -> "BoundingRegion":
        """
        Returns the region grown by `padding` times its span on every side.
        """
        dlat = self.height * padding
        dlng = self.width * padding
        return BoundingRegion(
            self.lat_min - dlat,
            self.lat_max + dlat,
            self.lng_min - dlng,
            self.lng_max + dlng,
        )


@dataclass(frozen=True)
class SubRegion(BoundingRegion):
    """
    Strip of a parent region assigned to the agent with the same index.

    `strip_width` is the nominal width shared by every strip of a partition.
    Edge longitudes accumulate rounding, so the area is taken from this
    width and equal strips get identical areas.
    """

    index: int = 0
    strip_width: float = None


def region_from_points(first: ArrayLike, second: ArrayLike) -> BoundingRegion:
    """
    Builds the bounding region spanned by two (lat, lng) points given in any
    order. The result is validated before being returned.

    Raises
    ------
    InvalidRegion
        If the points share a latitude or a longitude.
    """
    points = np.array([first, second], dtype=float)
    if points.shape != (2, 2):
        raise InvalidRegion("Selection points must be (lat, lng) pairs")
    lat_min, lng_min = points.min(axis=0)
    lat_max, lng_max = points.max(axis=0)
    region = BoundingRegion(
        float(lat_min), float(lat_max), float(lng_min), float(lng_max)
    )
    validate_region(region)
    return region


def validate_region(region: BoundingRegion) -> None:
    """
    Checks that the region has finite, ordered and non-degenerate bounds.

    Raises
    ------
    InvalidRegion
        If any bound is not finite, the bounds are inverted, or the region
        has zero width or height.
    """
    bounds = region.bounds
    if not all(math.isfinite(b) for b in bounds):
        raise InvalidRegion(f"Region bounds must be finite: {bounds}")
    if region.lat_min > region.lat_max or region.lng_min > region.lng_max:
        raise InvalidRegion(f"Region bounds are inverted: {bounds}")
    if region.width == 0.0 or region.height == 0.0:
        raise InvalidRegion(f"Region is degenerate (zero width or height): {bounds}")


def area(region: BoundingRegion) -> float:
    """
    Rectangular area in square degrees, without geodesic correction.
    """
    if isinstance(region, SubRegion) and region.strip_width is not None:
        return region.height * region.strip_width
    return region.height * region.width


def partition(region: BoundingRegion, n: int) -> list[SubRegion]:
    """
    Splits the region longitude span into `n` equal-width vertical strips.

    All strips share the full latitude span and are ordered west to east by
    index. The east edge of the last strip is snapped to the parent edge so
    the strips cover the parent exactly.

    Parameters
    ----------
    region : BoundingRegion
        Parent region to split.
    n : int
        Number of strips, at least 1.

    Returns
    -------
    list[SubRegion]
        The `n` strips, contiguous and non-overlapping.

    Raises
    ------
    InvalidRegion
        If `n < 1` or the region is degenerate.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise InvalidRegion(f"Cannot partition a region into {n} strips")
    validate_region(region)

    strip_width = region.width / n
    edges = region.lng_min + np.arange(n + 1) * strip_width
    edges[-1] = region.lng_max

    return [
        SubRegion(
            lat_min=region.lat_min,
            lat_max=region.lat_max,
            lng_min=float(edges[i]),
            lng_max=float(edges[i + 1]),
            index=i,
            strip_width=strip_width,
        )
        for i in range(n)
    ]
