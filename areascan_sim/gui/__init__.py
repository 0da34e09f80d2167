from .matplotlib_surface import MatplotlibMapSurface, MatplotlibFrameScheduler
from .scan_viewer import ScanViewer
