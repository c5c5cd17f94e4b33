"""
Distance models for consecutive GPS fixes.

Two interchangeable strategies:
- HaversineDistance: great-circle distance on a sphere of mean Earth radius
- GeodesicDistance: shortest path on the WGS84 ellipsoid (pyproj.Geod)

A model is built once per run and passed into the filter; neither keeps
mutable state after construction.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np
from pyproj import Geod

from pacesplits.errors import InvalidParameter

EARTH_MEAN_RADIUS_M = 6371000.0
WGS84_SEMI_MAJOR_AXIS_M = 6378137.0
WGS84_FLATTENING = 1 / 298.257223563


class DistanceModel:
    name = "base"

    def distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Distance in meters between two (lat, lon) pairs given in degrees."""
        raise NotImplementedError

    def pairwise(self, latitudes: Sequence[float], longitudes: Sequence[float]) -> np.ndarray:
        """
        Distances between consecutive coordinates, vectorised.

        Element i is the distance from point i to point i + 1, so the result
        has one element fewer than the inputs and keeps document order.
        """
        raise NotImplementedError


class HaversineDistance(DistanceModel):
    name = "haversine"

    def __init__(self, radius_m: float = EARTH_MEAN_RADIUS_M):
        self.radius_m = radius_m

    def _haversine(self, lat1, lon1, lat2, lon2):
        lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
        lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)

        dlat = lat2_rad - lat1_rad
        dlon = lon2_rad - lon1_rad

        a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        return self.radius_m * c

    def distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        return float(self._haversine(lat1, lon1, lat2, lon2))

    def pairwise(self, latitudes: Sequence[float], longitudes: Sequence[float]) -> np.ndarray:
        lat = np.asarray(latitudes, dtype=float)
        lon = np.asarray(longitudes, dtype=float)
        if lat.size < 2:
            return np.zeros(0)
        return self._haversine(lat[:-1], lon[:-1], lat[1:], lon[1:])


class GeodesicDistance(DistanceModel):
    name = "geodesic"

    def __init__(self, a: float = WGS84_SEMI_MAJOR_AXIS_M, f: float = WGS84_FLATTENING):
        self.geod = Geod(a=a, f=f)

    def distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        # pyproj takes longitude first
        _, _, dist = self.geod.inv(lon1, lat1, lon2, lat2)
        return float(dist)

    def pairwise(self, latitudes: Sequence[float], longitudes: Sequence[float]) -> np.ndarray:
        lat = np.asarray(latitudes, dtype=float)
        lon = np.asarray(longitudes, dtype=float)
        if lat.size < 2:
            return np.zeros(0)
        _, _, dist = self.geod.inv(lon[:-1], lat[:-1], lon[1:], lat[1:])
        return np.asarray(dist, dtype=float)


def make_distance_model(name: str) -> DistanceModel:
    if name == "haversine":
        return HaversineDistance()
    if name == "geodesic":
        return GeodesicDistance()
    raise InvalidParameter(f"Unknown distance model: {name!r}")
