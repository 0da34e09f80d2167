import signal
import sys
from typing import Callable


def register_exit_signal(
    on_exit: Callable[[], None] = None, sig: int = signal.SIGINT
) -> None:
    """
    Install a handler that runs `on_exit` (if given) and exits cleanly.
    """

    def exit_handler(signum, frame):
        sig_name = signal.Signals(signum).name
        print(f"\nReceived signal: {sig_name} ({signum}), stopping scan...")
        if on_exit is not None:
            on_exit()
        sys.exit(0)

    signal.signal(sig, exit_handler)
