"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.image import AxesImage
from matplotlib.lines import Line2D
from matplotlib.text import Annotation
from numpy.typing import ArrayLike

from ..core.frame_scheduler import FrameCallback, FrameScheduler
from ..math.partition import BoundingRegion, LatLng
from ..rendering import CoverageRenderer, MapSurface


class MatplotlibMapSurface(MapSurface):
    """
    Map surface drawn on a matplotlib axes with longitude on x and latitude
    on y. The coverage overlay is an image stretched over the current view.
    """

    def __init__(self, ax: Axes) -> None:
        super().__init__()
        self.ax = ax
        self.fig = ax.figure

        self.markers: dict[int, Line2D] = {}
        self.shapes: dict[int, Line2D] = {}
        self.messages: dict[int, Annotation] = {}
        self.coverage_image: AxesImage = None
        self._setting_view = False

        self._configure_axes()
        self.ax.callbacks.connect("xlim_changed", self._on_limits_changed)
        self.ax.callbacks.connect("ylim_changed", self._on_limits_changed)
        self.fig.canvas.mpl_connect("resize_event", self._on_resize)

    @property
    def size(self) -> tuple[int, int]:
        bbox = self.ax.bbox
        return (max(int(round(bbox.width)), 1), max(int(round(bbox.height)), 1))

    @property
    def view(self) -> BoundingRegion:
        lng_min, lng_max = self.ax.get_xlim()
        lat_min, lat_max = self.ax.get_ylim()
        return BoundingRegion(lat_min, lat_max, lng_min, lng_max)

    def project(self, latlng: ArrayLike) -> np.ndarray:
        lat, lng = np.asarray(latlng, dtype=float)
        x, y = self.ax.transData.transform((lng, lat))
        bbox = self.ax.bbox
        return np.array([x - bbox.x0, bbox.y1 - y])

    def add_marker(
        self, position: LatLng, color: str, size: float = 10.0, title: str = None
    ) -> int:
        lat, lng = position
        (marker,) = self.ax.plot(
            [lng], [lat], "o", color=color, markersize=size, label=title, zorder=5
        )
        handle = self._new_handle()
        self.markers[handle] = marker
        return handle

    def move_marker(self, handle: int, position: LatLng) -> None:
        lat, lng = position
        self.markers[handle].set_data([lng], [lat])

    def remove_marker(self, handle: int) -> None:
        marker = self.markers.pop(handle, None)
        if marker is not None:
            marker.remove()

    def add_shape(self, region: BoundingRegion, color: str, weight: float) -> int:
        (line,) = self.ax.plot(
            *region.shape.exterior.coords.xy, "-", color=color, linewidth=weight, zorder=4
        )
        handle = self._new_handle()
        self.shapes[handle] = line
        return handle

    def remove_shape(self, handle: int) -> None:
        shape = self.shapes.pop(handle, None)
        if shape is not None:
            shape.remove()

    def show_overlay_message(self, content: str, anchor: LatLng) -> int:
        lat, lng = anchor
        message = self.ax.annotate(
            content,
            xy=(lng, lat),
            ha="center",
            va="center",
            bbox=dict(boxstyle="round", facecolor="white", alpha=0.9),
            zorder=10,
        )
        handle = self._new_handle()
        self.messages[handle] = message
        return handle

    def remove_overlay_message(self, handle: int) -> None:
        message = self.messages.pop(handle, None)
        if message is not None:
            message.remove()

    def clear_layers(self) -> None:
        for handle in list(self.markers):
            self.remove_marker(handle)
        for handle in list(self.shapes):
            self.remove_shape(handle)
        for handle in list(self.messages):
            self.remove_overlay_message(handle)

    def set_view(self, center: LatLng, span: tuple[float, float]) -> None:
        lat, lng = center
        dlat, dlng = 0.5 * span[0], 0.5 * span[1]
        self._setting_view = True
        try:
            self.ax.set_xlim(lng - dlng, lng + dlng)
            self.ax.set_ylim(lat - dlat, lat + dlat)
        finally:
            self._setting_view = False
        self._notify_view_changed()

    def render(self, coverage: CoverageRenderer) -> None:
        lng_min, lng_max = self.ax.get_xlim()
        lat_min, lat_max = self.ax.get_ylim()
        extent = (lng_min, lng_max, lat_min, lat_max)
        if self.coverage_image is None:
            self.coverage_image = self.ax.imshow(
                coverage.pixels,
                extent=extent,
                origin="upper",
                aspect="auto",
                interpolation="nearest",
                zorder=3,
            )
        else:
            self.coverage_image.set_data(coverage.pixels)
            self.coverage_image.set_extent(extent)
        self.fig.canvas.draw_idle()

    def _configure_axes(self) -> None:
        self.ax.set_title("Area scan")
        self.ax.set_xlabel("Longitude (deg)")
        self.ax.set_ylabel("Latitude (deg)")
        self.ax.grid(True, alpha=0.3)
        self.ax.set_autoscale_on(False)

    def _on_limits_changed(self, ax: Axes) -> None:
        if not self._setting_view:
            self._notify_view_changed()

    def _on_resize(self, event) -> None:
        self._notify_view_changed()


class MatplotlibFrameScheduler(FrameScheduler):
    """
    Runs each requested frame on a single-shot timer of the figure canvas.
    """

    def __init__(self, fig: Figure, fps: float = 60.0) -> None:
        self.fig = fig
        self.interval = max(int(1000.0 / fps), 1)  # ms
        self._timers = []

    def request_frame(self, callback: FrameCallback) -> None:
        timer = self.fig.canvas.new_timer(interval=self.interval)
        timer.single_shot = True
        timer.add_callback(self._run, timer, callback)
        self._timers.append(timer)
        timer.start()

    def cancel(self) -> None:
        for timer in self._timers:
            timer.stop()
        self._timers.clear()

    def _run(self, timer, callback: FrameCallback) -> None:
        if timer in self._timers:
            self._timers.remove(timer)
        callback()
