import pytest

from areascan_sim.core import ManualFrameScheduler, ScanConfig, ScanController
from areascan_sim.math import BoundingRegion
from areascan_sim.rendering import StaticMapSurface


@pytest.fixture
def config() -> ScanConfig:
    return ScanConfig()


@pytest.fixture
def small_region() -> BoundingRegion:
    # 10 rows of 0.0005 deg, a handful of steps per row
    return BoundingRegion(lat_min=0.0, lat_max=0.005, lng_min=0.0, lng_max=0.004)


@pytest.fixture
def surface(small_region, config) -> StaticMapSurface:
    return StaticMapSurface(small_region.padded(config.fit_padding), width=400, height=300)


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def controller(surface, scheduler, config) -> ScanController:
    return ScanController(surface, scheduler, config)
