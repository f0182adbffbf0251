"""Project campus locations onto the AR camera overlay.

Screen coordinates are percentages of the viewport. The projection is
stateless: callers re-run it on every heading or position update.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from campus_portal.geo.geodesy import GeoPoint, bearing, distance

FIELD_OF_VIEW_HALF_ANGLE = 60.0
HORIZONTAL_SPREAD = 40.0
MAX_DISTANCE_M = 500.0
MIN_SCALE = 0.6

CATEGORY_COLORS = {
    "academic": "#3b82f6",
    "administrative": "#8b5cf6",
    "library": "#10b981",
    "canteen": "#f59e0b",
    "sports": "#ef4444",
    "hostel": "#ec4899",
    "parking": "#6b7280",
    "other": "#64748b",
}


class Locatable(Protocol):
    id: str
    name: str
    category: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Marker:
    id: str
    name: str
    category: str
    color: str
    x: float
    y: float
    scale: float
    distance: float
    bearing: float
    relative_angle: float


def category_color(category: str | None) -> str:
    return CATEGORY_COLORS.get(category or "", CATEGORY_COLORS["other"])


def relative_angle(target_bearing: float, heading: float) -> float:
    """Signed angle from the device heading to the target, in [-180, 180]."""
    angle = target_bearing - (heading % 360)
    if angle < -180:
        angle += 360
    if angle > 180:
        angle -= 360
    return angle


def is_visible(angle: float) -> bool:
    return abs(angle) <= FIELD_OF_VIEW_HALF_ANGLE


def screen_x(angle: float) -> float:
    return 50 + (angle / FIELD_OF_VIEW_HALF_ANGLE) * HORIZONTAL_SPREAD


def screen_y(distance_m: float) -> float:
    # Nearer targets sit lower on screen.
    return max(20.0, min(80.0, 30 + (distance_m / MAX_DISTANCE_M) * 40))


def marker_scale(distance_m: float) -> float:
    return max(MIN_SCALE, 1 - distance_m / MAX_DISTANCE_M)


def project_location(viewer: GeoPoint, heading: float, location: Locatable) -> Marker | None:
    """Project one location, or None when it is outside the field of view."""
    target_bearing = bearing(viewer.lat, viewer.lon, location.latitude, location.longitude)
    target_distance = distance(viewer.lat, viewer.lon, location.latitude, location.longitude)

    angle = relative_angle(target_bearing, heading)
    if not is_visible(angle):
        return None

    return Marker(
        id=location.id,
        name=location.name,
        category=location.category,
        color=category_color(location.category),
        x=screen_x(angle),
        y=screen_y(target_distance),
        scale=marker_scale(target_distance),
        distance=target_distance,
        bearing=target_bearing,
        relative_angle=angle,
    )


def project_markers(viewer: GeoPoint | None, heading: float, locations: Iterable[Locatable]) -> list[Marker]:
    if viewer is None:
        return []
    markers = []
    for location in locations:
        marker = project_location(viewer, heading, location)
        if marker is not None:
            markers.append(marker)
    return markers
