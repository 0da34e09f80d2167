from .scan_agent import ScanAgent
