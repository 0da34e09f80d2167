from areascan_sim.core import ManualFrameScheduler, ScanCoordinator, ScanLoop, ScanState
from areascan_sim.rendering import CoverageRenderer


def make_loop(surface, config):
    coordinator = ScanCoordinator(surface, CoverageRenderer(*surface.size), config)
    scheduler = ManualFrameScheduler()
    finished = []
    frames = []
    loop = ScanLoop(
        coordinator, scheduler, on_finished=finished.append, on_frame=frames.append
    )
    return coordinator, scheduler, loop, finished, frames


def test_manual_scheduler_runs_only_pending_callbacks():
    scheduler = ManualFrameScheduler()
    calls = []

    def again():
        calls.append("again")

    def first():
        calls.append("first")
        scheduler.request_frame(again)

    scheduler.request_frame(first)
    assert scheduler.run_frame()
    assert calls == ["first"]
    assert scheduler.run_frame()
    assert calls == ["first", "again"]
    assert not scheduler.run_frame()


def test_loop_runs_scan_to_completion(surface, config, small_region):
    coordinator, scheduler, loop, finished, frames = make_loop(surface, config)
    session = coordinator.start(small_region, 2)

    loop.start(session)
    assert session.tick_count == 1  # first frame runs immediately
    scheduler.run_until_idle(max_frames=10_000)

    assert session.state is ScanState.COMPLETED
    assert finished == [session]
    assert len(frames) == session.tick_count
    assert not scheduler.pending


def test_replaced_session_stops_its_loop(surface, config, small_region):
    coordinator, scheduler, loop, finished, frames = make_loop(surface, config)
    old = coordinator.start(small_region, 2)
    loop.start(old)
    scheduler.run_frame()
    assert old.tick_count == 2

    new = coordinator.start(small_region, 3)
    loop.start(new)
    assert len(scheduler.pending) == 2  # one stale frame, one live frame

    scheduler.run_frame()
    assert old.tick_count == 2
    assert new.tick_count == 2
    assert len(scheduler.pending) == 1

    scheduler.run_until_idle(max_frames=10_000)
    assert finished == [new]


def test_cancelled_session_stops_its_loop(surface, config, small_region):
    coordinator, scheduler, loop, finished, frames = make_loop(surface, config)
    session = coordinator.start(small_region, 1)
    loop.start(session)
    coordinator.cancel()

    scheduler.run_until_idle()
    assert session.tick_count == 1
    assert finished == []
