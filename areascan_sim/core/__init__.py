from .config import ScanConfig
from .scan_coordinator import (
    ScanCoordinator,
    ScanSession,
    ScanState,
    validate_agent_count,
)
from .frame_scheduler import FrameScheduler, ManualFrameScheduler, ScanLoop
from .session import (
    AppState,
    SelectionGesture,
    initial_state,
    transition,
)
from .scan_controller import ScanController
