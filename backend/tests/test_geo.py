"""Tests for geodesy helpers and the AR marker projector."""

import math
from types import SimpleNamespace

import pytest

from campus_portal.geo.geodesy import EARTH_RADIUS_M, GeoPoint, bearing, distance
from campus_portal.geo.projector import (
    CATEGORY_COLORS,
    is_visible,
    marker_scale,
    project_location,
    project_markers,
    relative_angle,
    screen_x,
    screen_y,
)

CAMPUS = (26.2183, 78.1828)


def _location(lat: float, lon: float, name: str = "Library", category: str = "library", id: str = "loc-1"):
    return SimpleNamespace(id=id, name=name, category=category, latitude=lat, longitude=lon)


def test_distance_same_point_is_zero() -> None:
    assert distance(*CAMPUS, *CAMPUS) == 0.0
    assert distance(-90, 0, -90, 0) == 0.0


def test_distance_one_degree_of_latitude() -> None:
    expected = EARTH_RADIUS_M * math.pi / 180
    assert distance(0, 0, 1, 0) == pytest.approx(expected, rel=1e-9)


def test_distance_is_symmetric() -> None:
    a = distance(26.2183, 78.1828, 26.2201, 78.1850)
    b = distance(26.2201, 78.1850, 26.2183, 78.1828)
    assert a == pytest.approx(b)
    assert 250 < a < 320


def test_distance_nan_propagates() -> None:
    assert math.isnan(distance(float("nan"), 0, 1, 1))


def test_bearing_cardinal_directions() -> None:
    assert bearing(0, 0, 1, 0) == pytest.approx(0.0)
    assert bearing(0, 0, 0, 1) == pytest.approx(90.0)
    assert bearing(1, 0, 0, 0) == pytest.approx(180.0)
    assert bearing(0, 1, 0, 0) == pytest.approx(270.0)


def test_bearing_coincident_points_defined() -> None:
    assert bearing(*CAMPUS, *CAMPUS) == 0.0


@pytest.mark.parametrize("lat1", [-89.9, -45.0, 0.0, 26.2, 89.9])
@pytest.mark.parametrize("lon1", [-179.9, -10.0, 0.0, 78.18, 179.9])
def test_bearing_range(lat1: float, lon1: float) -> None:
    for lat2, lon2 in [(-60, 170), (0, 0), (lat1, lon1), (lat1 + 0.0001, lon1), (45, -120), (-0.0001, 179.99)]:
        value = bearing(lat1, lon1, lat2, lon2)
        assert 0 <= value < 360


@pytest.mark.parametrize("target", [0.0, 0.5, 90.0, 179.0, 181.0, 270.0, 359.9])
@pytest.mark.parametrize("heading", [0.0, 1.0, 90.0, 180.0, 359.9, 360.0, 725.0, -30.0])
def test_relative_angle_range(target: float, heading: float) -> None:
    assert -180 <= relative_angle(target, heading) <= 180


def test_relative_angle_wraps() -> None:
    assert relative_angle(10, 350) == pytest.approx(20)
    assert relative_angle(350, 10) == pytest.approx(-20)
    assert relative_angle(90, 30) == 60


def test_visibility_boundary_is_inclusive() -> None:
    assert is_visible(60.0)
    assert is_visible(-60.0)
    assert not is_visible(60.0001)
    assert not is_visible(-60.0001)


def test_projection_at_field_of_view_edge() -> None:
    viewer = GeoPoint(lat=0.0, lon=0.0)
    due_east = _location(0.0, 0.001)

    edge = project_location(viewer, 30.0, due_east)
    assert edge is not None
    assert edge.relative_angle == 60.0
    assert edge.x == pytest.approx(90.0)

    assert project_location(viewer, 29.9999, due_east) is None


def test_screen_coordinates() -> None:
    assert screen_x(0) == 50
    assert screen_x(-60) == pytest.approx(10)
    assert screen_y(0) == 30
    assert screen_y(250) == pytest.approx(50)
    assert screen_y(5000) == 80
    assert marker_scale(0) == 1
    assert marker_scale(100) == pytest.approx(0.8)
    assert marker_scale(250) == 0.6
    assert marker_scale(10_000) == 0.6


def test_project_markers_filters_and_colors() -> None:
    viewer = GeoPoint(lat=0.0, lon=0.0)
    north = _location(0.001, 0.0, name="North Gate", category="administrative", id="n")
    south = _location(-0.001, 0.0, name="South Hostel", category="hostel", id="s")
    unknown = _location(0.001, 0.0001, name="Kiosk", category="kiosk", id="k")

    markers = project_markers(viewer, 0.0, [north, south, unknown])

    assert [m.id for m in markers] == ["n", "k"]
    assert markers[0].color == CATEGORY_COLORS["administrative"]
    assert markers[1].color == CATEGORY_COLORS["other"]
    assert markers[0].distance == pytest.approx(111.19, abs=0.1)
    assert 20 <= markers[0].y <= 80


def test_project_markers_without_viewer() -> None:
    assert project_markers(None, 0.0, [_location(0, 0)]) == []
