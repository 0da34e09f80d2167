"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from matplotlib import pyplot as plt

from areascan_sim.core import ScanConfig
from areascan_sim.gui import ScanViewer
from areascan_sim.utils import register_exit_signal

config = ScanConfig(fps=60.0)
gui = ScanViewer(config, fig_size=(13, 7))

register_exit_signal(on_exit=lambda: plt.close("all"))
gui.show()
