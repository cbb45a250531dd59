"""GeoPoint value object — immutable (lat, lng) pair."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @classmethod
    def from_raw(cls, lat: str | float | None, lng: str | float | None) -> GeoPoint | None:
        """Build a point from raw form values. Returns None if either side is unusable."""
        if lat is None or lng is None:
            return None
        if isinstance(lat, str) and not lat.strip():
            return None
        if isinstance(lng, str) and not lng.strip():
            return None
        try:
            return cls(latitude=float(lat), longitude=float(lng))
        except (TypeError, ValueError):
            return None
