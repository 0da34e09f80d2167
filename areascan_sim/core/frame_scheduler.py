"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from abc import ABC, abstractmethod
from collections import deque
from functools import partial
from typing import Callable

from .scan_coordinator import ScanCoordinator, ScanSession, ScanState

FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """
    Host primitive that runs a callback on the next animation frame.
    """

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> None:
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drops every frame requested and not yet run."""
        pass


class ManualFrameScheduler(FrameScheduler):
    """
    Scheduler whose frames only run when explicitly stepped.
    """

    def __init__(self) -> None:
        self.pending: deque[FrameCallback] = deque()
        self.frames_run = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self.pending.append(callback)

    def cancel(self) -> None:
        self.pending.clear()

    def run_frame(self) -> bool:
        """
        Runs the callbacks that were pending when called. Callbacks requested
        while running are left for the next frame.
        """
        if not self.pending:
            return False
        callbacks = list(self.pending)
        self.pending.clear()
        for callback in callbacks:
            callback()
        self.frames_run += 1
        return True

    def run_until_idle(self, max_frames: int = None) -> int:
        """
        Runs frames until nothing is pending or `max_frames` is reached and
        returns the number of frames run.
        """
        frames = 0
        while max_frames is None or frames < max_frames:
            if not self.run_frame():
                break
            frames += 1
        return frames


class ScanLoop:
    """
    Drives a scan session frame by frame on a FrameScheduler.

    A frame only requests the next one while its own session is still the
    coordinator's active running session, so replacing or cancelling a
    session stops the old loop on its next frame.
    """

    def __init__(
        self,
        coordinator: ScanCoordinator,
        scheduler: FrameScheduler,
        on_finished: Callable[[ScanSession], None] = None,
        on_frame: Callable[[ScanSession], None] = None,
    ) -> None:
        self.coordinator = coordinator
        self.scheduler = scheduler
        self.on_finished = on_finished
        self.on_frame = on_frame

    def start(self, session: ScanSession) -> None:
        """Runs the first frame immediately and schedules the rest."""
        self._frame(session)

    def _frame(self, session: ScanSession) -> None:
        if not self.coordinator.is_active(session):
            return
        keep_running = self.coordinator.tick(session)
        if self.on_frame is not None:
            self.on_frame(session)
        if keep_running:
            self.scheduler.request_frame(partial(self._frame, session))
        elif session.state is ScanState.COMPLETED and self.on_finished is not None:
            self.on_finished(session)
