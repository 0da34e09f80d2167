"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from matplotlib import pyplot as plt

from areascan_sim.core import ManualFrameScheduler, ScanConfig, ScanController
from areascan_sim.math import region_from_points
from areascan_sim.rendering import StaticMapSurface

num_agents = 3
first_corner = (41.392, 2.160)  # lat, lng
second_corner = (41.387, 2.170)

config = ScanConfig()
region = region_from_points(first_corner, second_corner)
surface = StaticMapSurface(region.padded(config.fit_padding), width=800, height=500)
scheduler = ManualFrameScheduler()
controller = ScanController(surface, scheduler, config)

controller.select_agent_count(num_agents)
controller.click(*first_corner)
controller.click(*second_corner)

frames = scheduler.run_until_idle()
session = controller.session
print(f"Frames run: {frames + 1}")
for agent in session.agents:
    print(f"- {agent!r} after {agent.ticks} ticks")
for message in surface.messages.values():
    print(message["content"])

plt.imsave("coverage_overlay.png", controller.renderer.pixels)
print("Coverage overlay saved to coverage_overlay.png")
