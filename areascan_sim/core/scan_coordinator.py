"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum

from ..agents import ScanAgent
from ..errors import InvalidAgentCount
from ..math.geo import region_area_km2
from ..math.partition import BoundingRegion, partition
from ..mobility.boustrophedon import normalized_speeds
from ..rendering import CoverageRenderer, MapSurface
from ..utils.logger import create_logger
from .config import ScanConfig


class ScanState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


def validate_agent_count(num_agents: int, config: ScanConfig) -> None:
    """
    Raises InvalidAgentCount unless `num_agents` is an integer within the
    configured range.
    """
    if isinstance(num_agents, bool) or not isinstance(num_agents, int):
        raise InvalidAgentCount(f"Agent count must be an integer, got {num_agents!r}")
    if not config.min_agents <= num_agents <= config.max_agents:
        raise InvalidAgentCount(
            f"Agent count must be between {config.min_agents} and "
            f"{config.max_agents}, got {num_agents}"
        )


@dataclass
class ScanSession:
    """
    One scan of a bounding region by a set of agents.
    """

    session_id: int
    region: BoundingRegion
    agents: list[ScanAgent]
    state: ScanState = ScanState.RUNNING
    tick_count: int = 0
    marker_handles: dict[int, int] = field(default_factory=dict)
    boundary_handle: int = None
    message_handle: int = None

    @property
    def num_agents(self) -> int:
        return len(self.agents)

    @property
    def all_finished(self) -> bool:
        return all(agent.finished for agent in self.agents)

    @property
    def active_count(self) -> int:
        return sum(not agent.finished for agent in self.agents)

    @property
    def progress(self) -> float:
        if not self.agents:
            return 0.0
        return sum(agent.progress for agent in self.agents) / len(self.agents)

    def summary(self, title: str) -> str:
        noun = "agent" if self.num_agents == 1 else "agents"
        return (
            f"{title}\n"
            f"{self.num_agents} {noun}, {region_area_km2(self.region):.2f} km² "
            f"in {self.tick_count} ticks"
        )


class ScanCoordinator:
    """
    Owns the active scan session and advances all of its agents in lockstep.

    The session completes on the first tick in which every agent has
    finished its sweep. At that point the agent markers are removed, the
    region boundary is drawn, the view is fitted to it and a summary
    message is shown.
    """

    def __init__(
        self,
        surface: MapSurface,
        renderer: CoverageRenderer,
        config: ScanConfig = None,
    ) -> None:
        self.surface = surface
        self.renderer = renderer
        self.config = config if config is not None else ScanConfig()

        self.session: ScanSession = None
        self._session_ids = itertools.count(1)

        self.logger = create_logger(name="ScanCoordinator", level="INFO")

    @property
    def state(self) -> ScanState:
        return self.session.state if self.session is not None else ScanState.IDLE

    def is_active(self, session: ScanSession) -> bool:
        """
        True while `session` is the current session and still running.
        """
        return session is self.session and session.state is ScanState.RUNNING

    def start(self, region: BoundingRegion, num_agents: int) -> ScanSession:
        """
        Partitions the region, creates one agent per strip and makes the new
        session the active one. Any previous session is cancelled.

        Raises
        ------
        InvalidAgentCount
            If `num_agents` is outside the configured range.
        InvalidRegion
            If the region is degenerate.
        """
        validate_agent_count(num_agents, self.config)
        subregions = partition(region, num_agents)
        speeds = normalized_speeds(
            subregions, self.config.min_speed, self.config.max_speed
        )

        self.cancel()

        agents = [
            ScanAgent(
                agent_id=sub.index,
                region=sub,
                speed=float(speed),
                color=self.config.agent_colors[sub.index],
                row_pitch=self.config.row_pitch,
            )
            for sub, speed in zip(subregions, speeds)
        ]
        session = ScanSession(
            session_id=next(self._session_ids), region=region, agents=agents
        )
        for agent in agents:
            session.marker_handles[agent.agent_id] = self.surface.add_marker(
                agent.position, agent.color, self.config.marker_size
            )
        self.renderer.clear()
        self.session = session

        self.logger.info(
            f"Scan {session.session_id} started with {num_agents} agents over "
            f"lat [{region.lat_min:.5f}, {region.lat_max:.5f}], "
            f"lng [{region.lng_min:.5f}, {region.lng_max:.5f}], "
            f"speeds {[round(a.speed, 6) for a in agents]} deg/tick"
        )
        return session

    def tick(self, session: ScanSession) -> bool:
        """
        Advances every unfinished agent of `session` by one step and paints
        the area it has covered.

        Returns
        -------
        bool
            True if the session is still running and wants another frame.
        """
        if not self.is_active(session):
            return False

        session.tick_count += 1
        for agent in session.agents:
            if agent.finished:
                continue
            position = agent.step()
            self.surface.move_marker(session.marker_handles[agent.agent_id], position)
            self._paint_coverage(agent, position)
            if agent.finished:
                self.logger.debug(
                    f"Agent {agent.agent_id} finished after {agent.ticks} ticks"
                )

        if session.all_finished:
            self._complete(session)

        self.surface.render(self.renderer)
        return session.state is ScanState.RUNNING

    def cancel(self) -> None:
        """
        Discards the active session and removes everything it has drawn.
        """
        session = self.session
        if session is None:
            return
        for handle in session.marker_handles.values():
            self.surface.remove_marker(handle)
        session.marker_handles.clear()
        if session.boundary_handle is not None:
            self.surface.remove_shape(session.boundary_handle)
        if session.message_handle is not None:
            self.surface.remove_overlay_message(session.message_handle)
        session.state = ScanState.IDLE
        self.session = None
        self.renderer.clear()
        self.logger.info(f"Scan {session.session_id} discarded")

    def _paint_coverage(self, agent: ScanAgent, position) -> None:
        # Band from the strip's top-left corner down to the current row
        top_left = self.surface.project(agent.region.top_left)
        current = self.surface.project(position)
        self.renderer.paint_rect(
            top_left[0],
            current[1],
            current[0],
            top_left[1],
            agent.color,
            self.config.coverage_alpha,
        )

    def _complete(self, session: ScanSession) -> None:
        for handle in session.marker_handles.values():
            self.surface.remove_marker(handle)
        session.marker_handles.clear()

        session.state = ScanState.COMPLETED
        session.boundary_handle = self.surface.add_shape(
            session.region, self.config.boundary_color, self.config.boundary_weight
        )
        self.surface.fit_view(session.region, self.config.fit_padding)
        session.message_handle = self.surface.show_overlay_message(
            session.summary(self.config.completion_title), session.region.center
        )
        self.logger.info(
            f"Scan {session.session_id} completed in {session.tick_count} ticks "
            f"({region_area_km2(session.region):.2f} km²)"
        )
