"""Tests for the error taxonomy and its user message mapping."""
from __future__ import annotations

import pytest

from nrega_dash.core.enums import MessageKey
from nrega_dash.core.errors import (
    DashboardError,
    DataFetchError,
    GeolocationError,
    GeolocationUnsupportedError,
    LocationLookupError,
    PermissionDeniedError,
    UnknownLocaleError,
    message_key_for,
)


@pytest.mark.parametrize(
    "error, key",
    [
        (GeolocationUnsupportedError("no api"), MessageKey.GEOLOCATION_UNSUPPORTED),
        (PermissionDeniedError("denied"), MessageKey.PERMISSION_DENIED),
        (LocationLookupError("lookup"), MessageKey.DETECTING_ERROR),
        (GeolocationError("other"), MessageKey.DETECTING_ERROR),
        (DataFetchError("down"), MessageKey.FETCH_ERROR),
        (RuntimeError("boom"), MessageKey.UNKNOWN_ERROR),
    ],
)
def test_message_key_for(error, key) -> None:
    assert message_key_for(error) is key


def test_hierarchy() -> None:
    for cls in (DataFetchError, GeolocationError, UnknownLocaleError):
        assert issubclass(cls, DashboardError)
    for cls in (GeolocationUnsupportedError, PermissionDeniedError, LocationLookupError):
        assert issubclass(cls, GeolocationError)


def test_every_message_key_is_translated(catalog) -> None:
    for code in catalog.codes():
        resolver = catalog.resolver(code)
        for key in MessageKey:
            assert resolver.resolve_strict(key.value) != key.value


def test_unknown_locale_error_is_key_error() -> None:
    with pytest.raises(KeyError):
        raise UnknownLocaleError("xx")
