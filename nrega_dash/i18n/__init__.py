"""Locale-aware label resolution.

Usage:
    from nrega_dash.i18n import LocaleSession, default_catalog

    session = LocaleSession(default_catalog(), "hi")
    session.resolver.resolve_tolerant("months.April", "April")  # "अप्रैल"
    session.resolver.resolve_strict("districts.Unknown")        # "districts.Unknown"
"""

from .catalog import LocaleCatalog, LocaleSession, default_catalog
from .resolver import LabelResolver, Locale, flatten_messages

__all__ = [
    "LabelResolver",
    "Locale",
    "LocaleCatalog",
    "LocaleSession",
    "default_catalog",
    "flatten_messages",
]
