"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from typing import Callable

from ..rendering import CoverageRenderer, MapSurface
from ..utils.logger import create_logger
from .config import ScanConfig
from .frame_scheduler import FrameScheduler, ScanLoop
from .scan_coordinator import ScanCoordinator, ScanSession
from .session import (
    AgentCountSelected,
    Alert,
    AppState,
    CancelScan,
    ClearSurface,
    DrawSelection,
    Effect,
    Event,
    MapClicked,
    ResetRequested,
    ResetView,
    ScanFinished,
    StartScan,
    initial_state,
    transition,
)

StateListener = Callable[[AppState], None]
AlertListener = Callable[[str], None]
FrameListener = Callable[[ScanSession], None]


class ScanController:
    """
    Owns the application state and carries out the effects of each event
    on the map surface, the coverage overlay and the scan loop.
    """

    def __init__(
        self,
        surface: MapSurface,
        scheduler: FrameScheduler,
        config: ScanConfig = None,
        renderer: CoverageRenderer = None,
    ) -> None:
        self.config = config if config is not None else ScanConfig()
        self.surface = surface
        self.scheduler = scheduler
        self.renderer = (
            renderer if renderer is not None else CoverageRenderer(*surface.size)
        )
        self.coordinator = ScanCoordinator(surface, self.renderer, self.config)
        self.loop = ScanLoop(
            self.coordinator,
            scheduler,
            on_finished=self._on_scan_finished,
            on_frame=self._on_frame,
        )

        self.state = initial_state(self.config)
        self.selection_handle: int = None
        self.alerts: list[str] = []

        self._state_listeners: list[StateListener] = []
        self._alert_listeners: list[AlertListener] = []
        self._frame_listeners: list[FrameListener] = []

        self.logger = create_logger(name="ScanController", level="INFO")

        self.surface.on_view_changed(self._on_view_changed)

    @property
    def session(self) -> ScanSession:
        return self.coordinator.session

    @property
    def active_agents(self) -> tuple[int, int]:
        """
        Agents still sweeping and total agents, as shown by the counter.
        """
        session = self.coordinator.session
        if session is None:
            return (self.state.agent_count, self.state.agent_count)
        return (session.active_count, session.num_agents)

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def add_alert_listener(self, listener: AlertListener) -> None:
        self._alert_listeners.append(listener)

    def add_frame_listener(self, listener: FrameListener) -> None:
        self._frame_listeners.append(listener)

    def click(self, lat: float, lng: float) -> AppState:
        return self.handle(MapClicked(lat, lng))

    def select_agent_count(self, count: int) -> AppState:
        return self.handle(AgentCountSelected(count))

    def reset(self) -> AppState:
        return self.handle(ResetRequested())

    def handle(self, event: Event) -> AppState:
        self.state, effects = transition(self.state, event, self.config)
        for effect in effects:
            self._apply(effect)
        for listener in self._state_listeners:
            listener(self.state)
        return self.state

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, CancelScan):
            self.scheduler.cancel()
            self.coordinator.cancel()
            if self.selection_handle is not None:
                self.surface.remove_shape(self.selection_handle)
                self.selection_handle = None

        elif isinstance(effect, DrawSelection):
            self.selection_handle = self.surface.add_shape(
                effect.region, self.config.boundary_color, self.config.selection_weight
            )

        elif isinstance(effect, StartScan):
            session = self.coordinator.start(effect.region, effect.num_agents)
            self.loop.start(session)

        elif isinstance(effect, ClearSurface):
            self.surface.clear_layers()
            self.selection_handle = None
            self.renderer.clear()
            self.surface.render(self.renderer)

        elif isinstance(effect, ResetView):
            self.surface.set_view(self.config.default_center, self.config.default_span)
            self.logger.info("View and selection reset")

        elif isinstance(effect, Alert):
            self.logger.warning(effect.message)
            self.alerts.append(effect.message)
            for listener in self._alert_listeners:
                listener(effect.message)

        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _on_scan_finished(self, session: ScanSession) -> None:
        if session is self.coordinator.session:
            self.handle(ScanFinished())

    def _on_frame(self, session: ScanSession) -> None:
        for listener in self._frame_listeners:
            listener(session)

    def _on_view_changed(self, size: tuple[int, int]) -> None:
        self.renderer.resize(*size)
        self.surface.render(self.renderer)

    def __repr__(self) -> str:
        active, total = self.active_agents
        return f"ScanController(state={self.coordinator.state.value}, agents={active}/{total})"
