import matplotlib

matplotlib.use("Agg")

import pytest
import requests
from matplotlib import pyplot as plt
from matplotlib.backend_bases import FigureCanvasBase

from areascan_sim.core import ScanConfig
from areascan_sim.gui import ScanViewer
from areascan_sim.lookup import PlaceLookup

RESULTS = [
    {"display_name": "Barcelona, Catalonia, Spain", "lat": "41.3828939", "lon": "2.1774322"},
    {"display_name": "Barcelona, Anzoategui, Venezuela", "lat": "10.1333", "lon": "-64.6833"},
]


class FakeResponse:
    def __init__(self, data):
        self.data = data

    def raise_for_status(self):
        pass

    def json(self):
        return self.data


class FakeSession:
    def __init__(self, data=RESULTS, error: Exception = None):
        self.data = data
        self.error = error
        self.queries = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.queries.append(params["q"])
        if self.error is not None:
            raise self.error
        return FakeResponse(self.data)


class FakeTimer:
    """Canvas timer stand-in that only fires when told to."""

    def __init__(self, interval):
        self.interval = interval
        self.single_shot = False
        self.callbacks = []
        self.started = False
        self.stopped = False

    def add_callback(self, func, *args):
        self.callbacks.append((func, args))

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def fire(self):
        for func, args in self.callbacks:
            func(*args)


@pytest.fixture
def timers(monkeypatch):
    """Replaces `new_timer` on every canvas with one that records FakeTimers."""
    created = []

    def new_timer(canvas, interval=None, callbacks=None):
        timer = FakeTimer(interval)
        created.append(timer)
        return timer

    monkeypatch.setattr(FigureCanvasBase, "new_timer", new_timer)
    return created


@pytest.fixture
def lookup_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_viewer():
    """Builds viewers whose place lookup answers from a FakeSession."""
    viewers = []

    def make(session: FakeSession) -> ScanViewer:
        viewer = ScanViewer(ScanConfig(), lookup=PlaceLookup(session=session))
        viewers.append(viewer)
        return viewer

    yield make
    for viewer in viewers:
        plt.close(viewer.fig)


@pytest.fixture
def viewer(make_viewer, lookup_session) -> ScanViewer:
    return make_viewer(lookup_session)
