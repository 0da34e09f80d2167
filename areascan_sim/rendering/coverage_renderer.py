"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

import matplotlib.colors as mcolors
import numpy as np


class CoverageRenderer:
    """
    Persistent RGBA drawing surface where scanned area accumulates.

    Pixel (0, 0) is the top-left corner of the view, matching the screen
    points returned by the map surface projection. Rectangles are composited
    with source-over alpha blending, so repeated paints only ever increase
    the opacity of a pixel.
    """

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self.pixels: np.ndarray = None
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        """
        Resizes the surface to the given pixel size. Resizing clears it.
        """
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.pixels = np.zeros((height, width, 4), dtype=float)

    def clear(self) -> None:
        self.pixels[...] = 0.0

    def is_blank(self) -> bool:
        return not np.any(self.pixels[:, :, 3] > 0.0)

    def painted_fraction(self) -> float:
        """Fraction of the surface pixels with non-zero opacity."""
        return float(np.mean(self.pixels[:, :, 3] > 0.0))

    def paint_rect(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: str,
        alpha: float,
    ) -> bool:
        """
        Blends a translucent rectangle between two screen corners.

        Corners may be given in any order and the rectangle is clipped to
        the surface.

        Parameters
        ----------
        x0, y0, x1, y1 : float
            Opposite corners in screen pixels.
        color : str
            Any matplotlib color specification.
        alpha : float
            Opacity of the painted layer, in (0, 1].

        Returns
        -------
        bool
            True if at least one pixel was painted.
        """
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"Alpha must be in (0, 1], got {alpha}")

        left, right = sorted((x0, x1))
        top, bottom = sorted((y0, y1))
        c0 = max(int(round(left)), 0)
        c1 = min(int(round(right)), self.width)
        r0 = max(int(round(top)), 0)
        r1 = min(int(round(bottom)), self.height)
        if c0 >= c1 or r0 >= r1:
            return False

        rgb = np.array(mcolors.to_rgb(color))
        dst = self.pixels[r0:r1, c0:c1]
        dst_alpha = dst[:, :, 3:4]
        out_alpha = alpha + dst_alpha * (1.0 - alpha)
        dst[:, :, 0:3] = (
            rgb * alpha + dst[:, :, 0:3] * dst_alpha * (1.0 - alpha)
        ) / out_alpha
        dst[:, :, 3:4] = out_alpha
        return True
