from .partition import (
    BoundingRegion,
    SubRegion,
    LatLng,
    area,
    partition,
    region_from_points,
    validate_region,
)
from .geo import geo2enu, region_size_m, region_area_km2
