from .logger import create_logger, LogLevel
from .exit_signal import register_exit_signal
