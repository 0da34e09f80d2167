import math

import pytest

from areascan_sim.core import ScanCoordinator, ScanState
from areascan_sim.errors import InvalidAgentCount, InvalidRegion
from areascan_sim.math import BoundingRegion
from areascan_sim.mobility import BoustrophedonPath
from areascan_sim.rendering import CoverageRenderer

MAX_TICKS = 10_000


@pytest.fixture
def coordinator(surface, config) -> ScanCoordinator:
    return ScanCoordinator(surface, CoverageRenderer(*surface.size), config)


def ticks_to_finish(agent) -> int:
    path = BoustrophedonPath(agent.region, agent.speed, agent.row_pitch)
    ticks = 0
    while not path.finished:
        path()
        ticks += 1
    return ticks


def run_session(coordinator, session) -> list[int]:
    """Ticks the session to the end and returns the number of unfinished
    agents seen before each tick."""
    unfinished = []
    while True:
        unfinished.append(session.active_count)
        if not coordinator.tick(session):
            break
        assert session.tick_count < MAX_TICKS
    return unfinished


def test_start_places_agents_at_strip_corners(coordinator, surface, small_region):
    session = coordinator.start(small_region, 3)
    assert coordinator.state is ScanState.RUNNING
    assert session.num_agents == 3
    assert len(surface.markers) == 3
    for i, agent in enumerate(session.agents):
        assert agent.agent_id == i
        assert agent.position == agent.region.top_left
        assert agent.direction == 1
        assert not agent.finished
        assert agent.color == coordinator.config.agent_colors[i]
    assert [a.region.lng_min for a in session.agents] == pytest.approx(
        [0.0, 0.004 / 3, 0.008 / 3]
    )


@pytest.mark.parametrize("num_agents", [0, 6, 2.0, None])
def test_start_rejects_bad_agent_count(coordinator, small_region, num_agents):
    with pytest.raises(InvalidAgentCount):
        coordinator.start(small_region, num_agents)
    assert coordinator.state is ScanState.IDLE


def test_start_rejects_degenerate_region(coordinator):
    with pytest.raises(InvalidRegion):
        coordinator.start(BoundingRegion(1.0, 1.0, 0.0, 1.0), 2)


def test_completes_on_the_tick_the_last_agent_finishes(coordinator, small_region):
    session = coordinator.start(small_region, 3)
    expected = max(ticks_to_finish(agent) for agent in session.agents)

    unfinished = run_session(coordinator, session)

    assert session.state is ScanState.COMPLETED
    assert session.tick_count == expected
    assert all(agent.finished for agent in session.agents)
    assert unfinished[-1] > 0  # still running before the final tick


def test_waits_for_every_agent(coordinator, small_region):
    session = coordinator.start(small_region, 2)
    early = session.agents[0]
    while not early.finished:
        early.step()
    late_ticks = ticks_to_finish(session.agents[1])

    run_session(coordinator, session)

    assert session.state is ScanState.COMPLETED
    assert session.tick_count == late_ticks


def test_equal_strips_finish_together(coordinator):
    region = BoundingRegion(lat_min=0.0, lat_max=0.005, lng_min=0.0, lng_max=0.004)
    session = coordinator.start(region, 4)
    assert len({agent.speed for agent in session.agents}) == 1

    run_session(coordinator, session)

    finish_ticks = [agent.ticks for agent in session.agents]
    num_rows = math.ceil(region.height / coordinator.config.row_pitch) + 1
    assert max(finish_ticks) - min(finish_ticks) <= num_rows
    assert session.tick_count == max(finish_ticks)


def test_completion_draws_boundary_and_summary(coordinator, surface, small_region):
    session = coordinator.start(small_region, 2)
    run_session(coordinator, session)

    assert surface.markers == {}
    (shape,) = surface.shapes.values()
    assert shape["region"] == small_region
    assert shape["color"] == "green"
    assert shape["weight"] == 2.0
    (message,) = surface.messages.values()
    assert message["content"].startswith("Scanning Completed")
    assert "2 agents" in message["content"]
    assert "km²" in message["content"]
    assert message["anchor"] == small_region.center
    assert surface.view.bounds == pytest.approx(small_region.padded(0.05).bounds)


def test_ticks_paint_coverage(coordinator, surface, small_region):
    session = coordinator.start(small_region, 1)
    assert coordinator.renderer.is_blank()
    for _ in range(20):
        coordinator.tick(session)
    assert not coordinator.renderer.is_blank()
    x, y = surface.project(small_region.top_left)
    r, g, b, a = coordinator.renderer.pixels[int(y) + 1, int(x) + 1]
    assert a > 0.0
    assert (r, g, b) == pytest.approx((1.0, 0.0, 0.0))


def test_coverage_only_grows(coordinator, small_region):
    session = coordinator.start(small_region, 2)
    previous = coordinator.renderer.pixels[:, :, 3].copy()
    while coordinator.tick(session):
        current = coordinator.renderer.pixels[:, :, 3]
        assert (current >= previous).all()
        previous = current.copy()


def test_stale_session_does_not_tick(coordinator, small_region):
    old = coordinator.start(small_region, 2)
    coordinator.tick(old)
    new = coordinator.start(small_region, 3)
    assert old.state is ScanState.IDLE
    assert not coordinator.tick(old)
    assert old.tick_count == 1
    assert coordinator.tick(new)


def test_cancel_removes_markers_and_coverage(coordinator, surface, small_region):
    session = coordinator.start(small_region, 3)
    for _ in range(5):
        coordinator.tick(session)
    coordinator.cancel()
    assert coordinator.session is None
    assert coordinator.state is ScanState.IDLE
    assert surface.markers == {}
    assert coordinator.renderer.is_blank()
    coordinator.cancel()  # no session left, nothing to do
