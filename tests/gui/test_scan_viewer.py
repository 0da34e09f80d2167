import pytest
import requests
from matplotlib.backend_bases import MouseEvent

from areascan_sim.core import ScanState
from areascan_sim.gui import ScanViewer


def suggestion_labels(viewer: ScanViewer) -> list[str]:
    return [t.get_text() for t in viewer.suggestion_texts]


def test_reset_restores_default_agent_count(viewer):
    viewer.agent_selector.set_active(3)
    assert viewer.controller.state.agent_count == 4

    viewer.reset()
    assert viewer.controller.state.agent_count == viewer.config.default_agents
    assert viewer.agent_selector.value_selected == "1 Drone"
    assert viewer.controller.state.scan_state is ScanState.IDLE


def test_reset_clears_search(viewer, lookup_session):
    viewer.search_box.set_val("Barcelona")
    viewer.refresh_suggestions("Barcelona")
    assert viewer.search_marker is not None

    viewer.reset()
    assert viewer.search_box.text == ""
    assert viewer.search_marker is None
    assert not viewer.surface.markers
    assert viewer.suggestions == []
    assert suggestion_labels(viewer) == [""] * 5


def test_submit_centers_on_best_match(viewer, lookup_session):
    viewer.search_box.set_val("Barcelona")
    assert lookup_session.queries == ["Barcelona"]
    assert viewer.surface.view.center == pytest.approx((41.3828939, 2.1774322))
    marker = viewer.surface.markers[viewer.search_marker]
    assert marker.get_label() == "Barcelona, Catalonia, Spain"
    assert viewer.status_text.get_text() == "Centered on Barcelona, Catalonia, Spain"


def test_blank_submit_is_rejected_without_a_request(viewer, lookup_session):
    viewer.search_box.set_val("   ")
    assert lookup_session.queries == []
    assert viewer.status_text.get_text() == "Enter a place name first"


def test_submit_reports_missing_place(make_viewer, lookup_session):
    lookup_session.data = []
    viewer = make_viewer(lookup_session)
    viewer.search_box.set_val("Nowhere at all")
    assert viewer.search_marker is None
    assert viewer.status_text.get_text() == "Place not found"


def test_submit_reports_lookup_failure(make_viewer, lookup_session):
    lookup_session.error = requests.ConnectionError("offline")
    viewer = make_viewer(lookup_session)
    viewer.search_box.set_val("Barcelona")
    assert viewer.search_marker is None
    assert viewer.status_text.get_text() == "Search failed"


def test_suggestions_listed_for_long_queries(viewer, lookup_session):
    viewer.refresh_suggestions("Barc")
    assert lookup_session.queries == ["Barc"]
    assert suggestion_labels(viewer)[:3] == [
        "1. Barcelona, Catalonia, Spain",
        "2. Barcelona, Anzoategui, Venezuela",
        "",
    ]


def test_short_queries_clear_suggestions(viewer, lookup_session):
    viewer.refresh_suggestions("Barc")
    viewer.refresh_suggestions("Ba")
    assert lookup_session.queries == ["Barc"]
    assert viewer.suggestions == []
    assert suggestion_labels(viewer) == [""] * 5


def test_selecting_a_suggestion_centers_on_it(viewer, lookup_session):
    viewer.refresh_suggestions("Barcelona")
    viewer.select_suggestion(1)
    assert viewer.surface.view.center == pytest.approx((10.1333, -64.6833))
    assert viewer.search_box.text == "Barcelona, Anzoategui, Venezuela"
    assert suggestion_labels(viewer) == [""] * 5
    # filling the box with the chosen label does not search again
    assert lookup_session.queries == ["Barcelona"]


def test_typing_is_debounced(timers, make_viewer, lookup_session):
    viewer = make_viewer(lookup_session)
    timers.clear()
    viewer._on_search_text_changed("Bar")
    viewer._on_search_text_changed("Barc")
    first, second = timers
    assert first.stopped
    assert second.single_shot
    assert second.interval == viewer.config.suggest_delay_ms
    assert lookup_session.queries == []

    second.fire()
    assert lookup_session.queries == ["Barc"]
    assert suggestion_labels(viewer)[0] == "1. Barcelona, Catalonia, Spain"


def test_map_click_hides_suggestions(viewer):
    viewer.refresh_suggestions("Barc")
    x, y = viewer.ax.transData.transform((0.0, 0.0))
    event = MouseEvent("button_press_event", viewer.fig.canvas, x, y, button=1)
    viewer._on_click(event)
    assert viewer.suggestions == []
    assert viewer.controller.state.gesture.click_count == 1
