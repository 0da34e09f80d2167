"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass, field

from ..math.partition import LatLng, SubRegion
from ..mobility.boustrophedon import ROW_PITCH, BoustrophedonPath


@dataclass
class ScanAgent:
    """
    Plain-data state of one scanning agent.

    The agent owns the sweep path of its sub-region. Render adapters read
    `position`, `color` and `finished` and never mutate the agent.
    """

    agent_id: int
    region: SubRegion
    speed: float
    color: str
    row_pitch: float = ROW_PITCH
    finished: bool = False
    ticks: int = 0
    path: BoustrophedonPath = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = BoustrophedonPath(self.region, self.speed, self.row_pitch)

    @property
    def position(self) -> LatLng:
        return self.path.position

    @property
    def direction(self) -> int:
        return self.path.direction

    @property
    def progress(self) -> float:
        """
        Fraction of the latitude span already swept, between 0 and 1.
        """
        lat = self.position[0]
        swept = (self.region.lat_max - lat) / self.region.height
        return min(max(swept, 0.0), 1.0)

    def step(self) -> LatLng:
        """
        Advances the agent one tick along its path and returns the new
        position. Finished agents stay where they are.
        """
        if self.finished:
            return self.position
        pos = self.path()
        self.ticks += 1
        if pos[0] <= self.region.lat_min:
            self.finished = True
        return pos

    def __repr__(self) -> str:
        lat, lng = self.position
        return (
            f"ScanAgent(id={self.agent_id}, color='{self.color}', "
            f"position=[{lat:.5f}, {lng:.5f}] deg, speed={self.speed:.6f} deg/tick, "
            f"finished={self.finished})"
        )
