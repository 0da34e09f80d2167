from .coverage_renderer import CoverageRenderer
from .map_surface import MapSurface, StaticMapSurface
