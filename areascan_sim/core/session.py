"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

"""
Application state for the selection gesture and scan lifecycle.

`transition` is a pure function: it maps the current state and an input
event to the next state and a list of effects for the controller to carry
out. It never touches the map, the overlay or the agents.
"""

from dataclasses import dataclass, field, replace

from ..errors import InvalidRegion
from ..math.partition import BoundingRegion, LatLng, region_from_points
from .config import ScanConfig
from .scan_coordinator import ScanState, validate_agent_count


@dataclass(frozen=True)
class SelectionGesture:
    """Points captured so far for the next selection rectangle."""

    points: tuple[LatLng, ...] = ()

    @property
    def click_count(self) -> int:
        return len(self.points)

    @property
    def complete(self) -> bool:
        return self.click_count == 2

    def add(self, point: LatLng) -> "SelectionGesture":
        return SelectionGesture(self.points + (tuple(point),))


@dataclass(frozen=True)
class AppState:
    gesture: SelectionGesture = field(default_factory=SelectionGesture)
    agent_count: int = 1
    scan_state: ScanState = ScanState.IDLE
    region: BoundingRegion = None


def initial_state(config: ScanConfig) -> AppState:
    return AppState(agent_count=config.default_agents)


# Events


@dataclass(frozen=True)
class MapClicked:
    lat: float
    lng: float


@dataclass(frozen=True)
class AgentCountSelected:
    count: int


@dataclass(frozen=True)
class ResetRequested:
    pass


@dataclass(frozen=True)
class ScanFinished:
    pass


Event = MapClicked | AgentCountSelected | ResetRequested | ScanFinished


# Effects


@dataclass(frozen=True)
class CancelScan:
    """Discard the current scan and everything it drew."""


@dataclass(frozen=True)
class DrawSelection:
    region: BoundingRegion


@dataclass(frozen=True)
class StartScan:
    region: BoundingRegion
    num_agents: int


@dataclass(frozen=True)
class ClearSurface:
    """Erase the coverage overlay and every layer above the base map."""


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class Alert:
    message: str


Effect = CancelScan | DrawSelection | StartScan | ClearSurface | ResetView | Alert


def transition(
    state: AppState, event: Event, config: ScanConfig
) -> tuple[AppState, list[Effect]]:
    """
    Computes the next application state for `event`.

    Raises
    ------
    InvalidAgentCount
        If an AgentCountSelected event carries a count outside the configured
        range. The state is left unchanged.
    """
    if isinstance(event, MapClicked):
        return _on_map_clicked(state, event)

    if isinstance(event, AgentCountSelected):
        validate_agent_count(event.count, config)
        return replace(state, agent_count=event.count), []

    if isinstance(event, ResetRequested):
        return initial_state(config), [CancelScan(), ClearSurface(), ResetView()]

    if isinstance(event, ScanFinished):
        if state.scan_state is not ScanState.RUNNING:
            return state, []
        return replace(state, scan_state=ScanState.COMPLETED), []

    raise TypeError(f"Unknown event: {event!r}")


def _on_map_clicked(state: AppState, event: MapClicked) -> tuple[AppState, list[Effect]]:
    effects: list[Effect] = []

    # A new rectangle replaces whatever scan is on the map
    if state.gesture.click_count == 0 and state.scan_state is not ScanState.IDLE:
        effects.append(CancelScan())
        state = replace(state, scan_state=ScanState.IDLE, region=None)

    gesture = state.gesture.add((event.lat, event.lng))
    if not gesture.complete:
        return replace(state, gesture=gesture), effects

    try:
        region = region_from_points(*gesture.points)
    except InvalidRegion as e:
        effects.append(Alert(f"Invalid selection: {e}"))
        return replace(state, gesture=SelectionGesture()), effects

    effects.append(DrawSelection(region))
    effects.append(StartScan(region, state.agent_count))
    new_state = replace(
        state,
        gesture=SelectionGesture(),
        scan_state=ScanState.RUNNING,
        region=region,
    )
    return new_state, effects
