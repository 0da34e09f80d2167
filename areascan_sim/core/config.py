from dataclasses import dataclass

from ..mobility.boustrophedon import MAX_SPEED, MIN_SPEED, ROW_PITCH


@dataclass
class ScanConfig:
    min_speed: float = MIN_SPEED
    max_speed: float = MAX_SPEED
    row_pitch: float = ROW_PITCH
    min_agents: int = 1
    max_agents: int = 5
    default_agents: int = 1
    agent_colors: tuple[str, ...] = ("red", "blue", "orange", "purple", "green")
    coverage_alpha: float = 0x33 / 255
    marker_size: float = 10.0
    boundary_color: str = "green"
    selection_weight: float = 1.0
    boundary_weight: float = 2.0
    fit_padding: float = 0.05
    default_center: tuple[float, float] = (20.0, 0.0)  # lat, lng
    default_span: tuple[float, float] = (140.0, 300.0)  # lat, lng
    search_span: float = 0.02
    suggest_delay_ms: int = 300
    fps: float = 60.0
    completion_title: str = "Scanning Completed: Zoomable Map"

    def __post_init__(self) -> None:
        if not 0.0 < self.min_speed <= self.max_speed:
            raise ValueError("Speeds must satisfy 0 < min_speed <= max_speed")
        if self.row_pitch <= 0.0:
            raise ValueError("Row pitch must be positive")
        if not 1 <= self.min_agents <= self.max_agents:
            raise ValueError("Agent range must satisfy 1 <= min_agents <= max_agents")
        if not self.min_agents <= self.default_agents <= self.max_agents:
            raise ValueError("Default agent count is outside the agent range")
        if len(self.agent_colors) < self.max_agents:
            raise ValueError("Need one agent color per agent")
        if not 0.0 < self.coverage_alpha <= 1.0:
            raise ValueError("Coverage alpha must be in (0, 1]")
        if self.fps <= 0.0:
            raise ValueError("Frame rate must be positive")
        if self.suggest_delay_ms < 0:
            raise ValueError("Suggestion delay must not be negative")
