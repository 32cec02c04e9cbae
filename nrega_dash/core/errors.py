"""Error taxonomy and user message mapping."""

from __future__ import annotations

from .enums import MessageKey
from .logging_config import get_logger

logger = get_logger(__name__)


class DashboardError(Exception):
    """Base exception for dashboard errors."""
    pass


class DataFetchError(DashboardError):
    """A data service call failed (transport, HTTP status or payload shape)."""
    pass


class GeolocationError(DashboardError):
    """Base for geolocation failures; none of them are fatal."""
    pass


class GeolocationUnsupportedError(GeolocationError):
    """The host environment has no geolocation capability."""
    pass


class PermissionDeniedError(GeolocationError):
    """The geolocation capability reported an error (usually denied permission)."""
    pass


class LocationLookupError(GeolocationError):
    """Coordinates were obtained but the reverse lookup failed."""
    pass


class UnknownLocaleError(DashboardError, KeyError):
    """Requested locale code has no catalog."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Unknown locale: {self.code!r}"


def message_key_for(error: BaseException) -> MessageKey:
    """Map an error to the translation key shown to the user.

    Subclasses are checked before their bases so each geolocation branch
    keeps its own message.
    """
    if isinstance(error, GeolocationUnsupportedError):
        key = MessageKey.GEOLOCATION_UNSUPPORTED
    elif isinstance(error, PermissionDeniedError):
        key = MessageKey.PERMISSION_DENIED
    elif isinstance(error, (LocationLookupError, GeolocationError)):
        key = MessageKey.DETECTING_ERROR
    elif isinstance(error, DataFetchError):
        key = MessageKey.FETCH_ERROR
    else:
        key = MessageKey.UNKNOWN_ERROR
    logger.debug(
        "Mapped error to message key",
        extra={"error_type": type(error).__name__, "message_key": key.value},
    )
    return key
