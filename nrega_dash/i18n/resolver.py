"""Locale values and the strict/tolerant label resolver.

A ``Locale`` is an immutable, flattened key -> string table. A
``LabelResolver`` is bound to exactly one ``Locale``; switching language means
asking for a new resolver, so no resolved string can outlive the locale it
came from.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def flatten_messages(nested: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested mapping into dotted keys.

    ``{"months": {"April": "अप्रैल"}}`` becomes ``{"months.April": "अप्रैल"}``.
    ``None`` leaves are dropped; other scalars are stringified.
    """
    flat: dict[str, str] = {}
    for key, value in nested.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_messages(value, path))
        elif value is not None:
            flat[path] = str(value)
    return flat


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    """Replace ``{name}`` placeholders; unknown names are left as written."""
    if not params:
        return template

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return _PLACEHOLDER.sub(_sub, template)


@dataclass(frozen=True)
class Locale:
    code: str
    name: str
    messages: Mapping[str, str] = field(default_factory=dict, compare=False)
    fallback: Locale | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @classmethod
    def from_mapping(
        cls,
        code: str,
        nested: Mapping[str, Any],
        *,
        name: str | None = None,
        fallback: Locale | None = None,
    ) -> Locale:
        return cls(code=code, name=name or code, messages=flatten_messages(nested), fallback=fallback)

    def lookup(self, key: str) -> str | None:
        """Find ``key`` here or along the fallback chain; empty strings miss."""
        seen: set[str] = set()
        locale: Locale | None = self
        while locale is not None and locale.code not in seen:
            seen.add(locale.code)
            value = locale.messages.get(key)
            if value:
                return value
            locale = locale.fallback
        return None


class LabelResolver:
    """Resolve dotted keys against one locale."""

    def __init__(self, locale: Locale):
        self.locale = locale

    @property
    def code(self) -> str:
        return self.locale.code

    def resolve_strict(self, key: str, **params: Any) -> str:
        """Translated string, or ``key`` itself on a miss."""
        value = self.locale.lookup(key)
        if value is None:
            return key
        return interpolate(value, params)

    def resolve_tolerant(self, key: str, fallback: str, **params: Any) -> str:
        """Translated string, or ``fallback`` verbatim on a miss.

        Use this whenever the key is built from open-vocabulary data such as
        a month or district name.
        """
        value = self.locale.lookup(key)
        if value is None:
            return fallback
        return interpolate(value, params)

    def __repr__(self) -> str:
        return f"LabelResolver(locale={self.locale.code!r})"
