"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

"""
Geographic to ENU conversion utilities.
"""

import numpy as np
from numpy.typing import ArrayLike

from .partition import BoundingRegion

LATDEG2METERS = 111320


def geo2enu(geo: ArrayLike, home: ArrayLike) -> np.ndarray:
    """
    Converts geographic coordinates (latitude, longitude) to local East-North
    coordinates in meters, relative to a reference point.

    Parameters
    ----------
    geo : ArrayLike
        Geographic coordinates [latitude, longitude] in degrees.
        Can be a (2,) array for a single point or an (N, 2) array for multiple points.
    home : ArrayLike
        Reference geographic coordinates [latitude, longitude] in degrees.
        Must be a (2,) array.

    Returns
    -------
    np.ndarray
        Local coordinates [E, N] in meters, with the same shape as `geo`.
    """
    geo = np.asarray(geo, dtype=float)
    home = np.asarray(home, dtype=float)
    if home.shape != (2,):
        raise ValueError("Home must be a (2,) array.")

    geo_2d = np.atleast_2d(geo)

    en = np.zeros_like(geo_2d)
    dlat = geo_2d[:, 0] - home[0]
    dlon = geo_2d[:, 1] - home[1]
    en[:, 0] = dlon * LATDEG2METERS * np.cos(np.deg2rad(home[0]))  # East
    en[:, 1] = dlat * LATDEG2METERS  # North

    return en.reshape(geo.shape)


def region_size_m(region: BoundingRegion) -> np.ndarray:
    """
    Width and height [E, N] of the region in meters, measured at its center.
    """
    corners = np.array(
        [[region.lat_min, region.lng_min], [region.lat_max, region.lng_max]]
    )
    enu = geo2enu(corners, home=region.center)
    return np.abs(enu[1] - enu[0])


def region_area_km2(region: BoundingRegion) -> float:
    """
    Approximate ground area of the region in square kilometers.
    """
    width, height = region_size_m(region)
    return float(width * height / 1e6)
