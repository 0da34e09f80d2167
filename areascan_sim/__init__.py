from .errors import InvalidAgentCount, InvalidRegion, LookupFailed
from .math import BoundingRegion, SubRegion, partition, region_from_points
from .core import ScanConfig, ScanController, ScanCoordinator, ScanState
