"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

import itertools
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from ..math.partition import BoundingRegion, LatLng
from .coverage_renderer import CoverageRenderer

ViewChangedCallback = Callable[[tuple[int, int]], None]


class MapSurface(ABC):
    """
    Map the scan engine draws on: projection, markers, shapes and messages.

    Screen points have their origin at the top-left corner of the view, x
    growing east and y growing south. Every add_* method returns an integer
    handle used to update or remove the item later.
    """

    def __init__(self) -> None:
        self._handles = itertools.count()
        self._view_callbacks: list[ViewChangedCallback] = []

    @property
    @abstractmethod
    def size(self) -> tuple[int, int]:
        """View size (width, height) in pixels."""
        pass

    @property
    @abstractmethod
    def view(self) -> BoundingRegion:
        """Geographic region currently in view."""
        pass

    @abstractmethod
    def project(self, latlng: ArrayLike) -> np.ndarray:
        """Screen point [x, y] in pixels of a (lat, lng) position."""
        pass

    @abstractmethod
    def add_marker(
        self, position: LatLng, color: str, size: float = 10.0, title: str = None
    ) -> int:
        pass

    @abstractmethod
    def move_marker(self, handle: int, position: LatLng) -> None:
        pass

    @abstractmethod
    def remove_marker(self, handle: int) -> None:
        pass

    @abstractmethod
    def add_shape(self, region: BoundingRegion, color: str, weight: float) -> int:
        pass

    @abstractmethod
    def remove_shape(self, handle: int) -> None:
        pass

    @abstractmethod
    def show_overlay_message(self, content: str, anchor: LatLng) -> int:
        pass

    @abstractmethod
    def remove_overlay_message(self, handle: int) -> None:
        pass

    @abstractmethod
    def clear_layers(self) -> None:
        """Removes every marker, shape and message, keeping the base map."""
        pass

    @abstractmethod
    def set_view(self, center: LatLng, span: tuple[float, float]) -> None:
        """Centers the view with the given (lat, lng) span in degrees."""
        pass

    @abstractmethod
    def render(self, coverage: CoverageRenderer) -> None:
        """Presents the current frame, including the coverage overlay."""
        pass

    def fit_view(self, region: BoundingRegion, padding: float = 0.0) -> None:
        padded = region.padded(padding)
        self.set_view(padded.center, (padded.height, padded.width))

    def on_view_changed(self, callback: ViewChangedCallback) -> None:
        """Registers a callback receiving the new view size on pan or zoom."""
        self._view_callbacks.append(callback)

    def _notify_view_changed(self) -> None:
        for callback in self._view_callbacks:
            callback(self.size)

    def _new_handle(self) -> int:
        return next(self._handles)


class StaticMapSurface(MapSurface):
    """
    Display-less surface with a linear (plate carree) projection.

    Items are kept in plain dictionaries so the scan engine can run headless
    and tests can inspect what would have been drawn.
    """

    def __init__(
        self,
        view: BoundingRegion,
        width: int = 800,
        height: int = 600,
    ) -> None:
        super().__init__()
        self._view = view
        self._size = (int(width), int(height))

        self.markers: dict[int, dict] = {}
        self.shapes: dict[int, dict] = {}
        self.messages: dict[int, dict] = {}
        self.frames_rendered = 0

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def view(self) -> BoundingRegion:
        return self._view

    def project(self, latlng: ArrayLike) -> np.ndarray:
        lat, lng = np.asarray(latlng, dtype=float)
        width, height = self._size
        x = (lng - self._view.lng_min) / self._view.width * width
        y = (self._view.lat_max - lat) / self._view.height * height
        return np.array([x, y])

    def add_marker(
        self, position: LatLng, color: str, size: float = 10.0, title: str = None
    ) -> int:
        handle = self._new_handle()
        self.markers[handle] = {
            "position": tuple(position),
            "color": color,
            "size": size,
            "title": title,
        }
        return handle

    def move_marker(self, handle: int, position: LatLng) -> None:
        self.markers[handle]["position"] = tuple(position)

    def remove_marker(self, handle: int) -> None:
        self.markers.pop(handle, None)

    def add_shape(self, region: BoundingRegion, color: str, weight: float) -> int:
        handle = self._new_handle()
        self.shapes[handle] = {"region": region, "color": color, "weight": weight}
        return handle

    def remove_shape(self, handle: int) -> None:
        self.shapes.pop(handle, None)

    def show_overlay_message(self, content: str, anchor: LatLng) -> int:
        handle = self._new_handle()
        self.messages[handle] = {"content": content, "anchor": tuple(anchor)}
        return handle

    def remove_overlay_message(self, handle: int) -> None:
        self.messages.pop(handle, None)

    def clear_layers(self) -> None:
        self.markers.clear()
        self.shapes.clear()
        self.messages.clear()

    def set_view(self, center: LatLng, span: tuple[float, float]) -> None:
        lat, lng = center
        dlat, dlng = 0.5 * span[0], 0.5 * span[1]
        view = BoundingRegion(lat - dlat, lat + dlat, lng - dlng, lng + dlng)
        unchanged = np.allclose(view.bounds, self._view.bounds, rtol=0.0, atol=1e-12)
        self._view = view
        if not unchanged:
            self._notify_view_changed()

    def resize(self, width: int, height: int) -> None:
        self._size = (int(width), int(height))
        self._notify_view_changed()

    def render(self, coverage: CoverageRenderer) -> None:
        self.frames_rendered += 1
