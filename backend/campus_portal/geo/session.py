"""AR overlay session.

Owns the two resources the overlay needs while it is on screen: the camera
stream and the device-orientation subscription. Both are acquired on entry and
released on exit, including when the body raises.

    with ARSession(locations, open_camera, orientation, on_frame) as session:
        session.update_position(lat, lon)
        ...
"""

from __future__ import annotations

from typing import Callable, Iterable, Protocol

from campus_portal.geo.geodesy import GeoPoint
from campus_portal.geo.projector import Locatable, Marker, project_markers


class CameraStream(Protocol):
    def stop(self) -> None: ...


class OrientationSource(Protocol):
    def subscribe(self, handler: Callable[[float | None], None]) -> Callable[[], None]:
        """Register `handler` for compass updates; returns the unsubscribe callable."""
        ...


class SessionClosed(RuntimeError):
    pass


class ARSession:
    def __init__(
        self,
        locations: Iterable[Locatable],
        open_camera: Callable[[], CameraStream],
        orientation: OrientationSource,
        on_frame: Callable[[list[Marker]], None],
        viewer: GeoPoint | None = None,
    ):
        self.locations = list(locations)
        self.viewer = viewer
        self.heading = 0.0
        self.last_frame: list[Marker] = []
        self._open_camera = open_camera
        self._orientation = orientation
        self._on_frame = on_frame
        self._camera: CameraStream | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> "ARSession":
        self._camera = self._open_camera()
        self._active = True
        try:
            self._unsubscribe = self._orientation.subscribe(self.update_heading)
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the orientation subscription and the camera. Safe to call twice."""
        self._active = False
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        camera, self._camera = self._camera, None
        try:
            if unsubscribe is not None:
                unsubscribe()
        finally:
            if camera is not None:
                camera.stop()

    def update_heading(self, alpha: float | None) -> list[Marker]:
        # Some devices report no compass reading; keep the last heading.
        if alpha is not None:
            self.heading = alpha
        return self._render()

    def update_position(self, lat: float, lon: float) -> list[Marker]:
        self.viewer = GeoPoint(lat=lat, lon=lon)
        return self._render()

    def _render(self) -> list[Marker]:
        if not self._active:
            raise SessionClosed("AR session is not active")
        self.last_frame = project_markers(self.viewer, self.heading, self.locations)
        self._on_frame(self.last_frame)
        return self.last_frame
