"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

import numpy as np

from ..math.partition import BoundingRegion, LatLng, area

MIN_SPEED = 0.00005  # deg/tick
MAX_SPEED = 0.0005  # deg/tick
ROW_PITCH = 0.0005  # deg


class BoustrophedonPath:
    """
    Lawnmower sweep over a rectangular region, advanced one step per call.

    The sweep starts at the top-left corner (lat_max, lng_min) heading east.
    Each call moves `speed` degrees along the current row; when a row edge is
    passed the position is clamped to that edge, dropped one `row_pitch`
    south and the direction is flipped. Once the latitude reaches `lat_min`
    every further call returns the same terminal point.
    """

    def __init__(
        self,
        region: BoundingRegion,
        speed: float,
        row_pitch: float = ROW_PITCH,
    ) -> None:
        if speed <= 0.0:
            raise ValueError("Speed must be positive")
        if row_pitch <= 0.0:
            raise ValueError("Row pitch must be positive")
        self.region = region
        self.speed = speed
        self.row_pitch = row_pitch

        self.lat = region.lat_max
        self.lng = region.lng_min
        self.direction = 1

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lng)

    @property
    def finished(self) -> bool:
        return self.lat <= self.region.lat_min

    def __call__(self) -> LatLng:
        if self.finished:
            return (self.region.lat_min, self.lng)

        self.lng += self.direction * self.speed
        if self.lng > self.region.lng_max:
            self.lng = self.region.lng_max
            self._next_row(direction=-1)
        elif self.lng < self.region.lng_min:
            self.lng = self.region.lng_min
            self._next_row(direction=+1)

        return (self.lat, self.lng)

    def _next_row(self, direction: int) -> None:
        self.lat = max(self.lat - self.row_pitch, self.region.lat_min)
        self.direction = direction


def make_trajectory(
    region: BoundingRegion, speed: float, row_pitch: float = ROW_PITCH
) -> BoustrophedonPath:
    return BoustrophedonPath(region, speed, row_pitch)


def normalized_speed(
    region_area: float,
    largest_area: float,
    min_speed: float = MIN_SPEED,
    max_speed: float = MAX_SPEED,
) -> float:
    """
    Linear speed between `min_speed` and `max_speed` proportional to the
    region area, so the largest region moves at `max_speed`.
    """
    if largest_area <= 0.0:
        raise ValueError("Largest area must be positive")
    if region_area >= largest_area:
        return max_speed
    return min_speed + (max_speed - min_speed) * (region_area / largest_area)


def normalized_speeds(
    regions: list[BoundingRegion],
    min_speed: float = MIN_SPEED,
    max_speed: float = MAX_SPEED,
) -> np.ndarray:
    """
    Speed for every region of a partition, normalized by the largest area.

    Returns
    -------
    np.ndarray
        A (N,) array of speeds in degrees per tick.
    """
    areas = np.array([area(r) for r in regions], dtype=float)
    if areas.size == 0:
        return areas
    largest = areas.max()
    return np.array(
        [normalized_speed(a, largest, min_speed, max_speed) for a in areas]
    )
