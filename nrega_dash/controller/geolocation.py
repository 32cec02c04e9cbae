"""Geolocation capability seen from the controller."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from ..core.models import Position

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Any], None]


class GeolocationProvider(Protocol):
    def get_current_position(self, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        """Report the position through exactly one of the callbacks.

        Callbacks may fire synchronously or later from another thread.
        """
        ...


class FixedPosition:
    """Provider that always reports the same coordinates (CLI, tests)."""

    def __init__(self, latitude: float, longitude: float):
        self.position = Position(latitude=latitude, longitude=longitude)

    def get_current_position(self, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        on_success(self.position)


class DeniedPosition:
    """Provider whose user refused the permission prompt."""

    def __init__(self, reason: str = "User denied Geolocation"):
        self.reason = reason

    def get_current_position(self, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        on_error(self.reason)


def as_position(value: Any) -> Position:
    """Accept a ``Position``, a ``{latitude, longitude}`` mapping or an object with ``coords``."""
    if isinstance(value, Position):
        return value
    coords = getattr(value, "coords", value)
    if isinstance(coords, dict):
        return Position(float(coords["latitude"]), float(coords["longitude"]))
    return Position(float(coords.latitude), float(coords.longitude))
