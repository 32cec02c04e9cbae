from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import UnknownLocaleError
from ..core.logging_config import get_logger
from .resolver import LabelResolver, Locale, flatten_messages

logger = get_logger(__name__)

PACKAGE_LOCALES_DIR = Path(__file__).parent / "locales"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class LocaleCatalog:
    """All known locales, keyed by code.

    Locale files are YAML documents with ``name``, optional ``fallback`` (the
    code of another locale) and a nested ``messages`` mapping.
    """

    def __init__(self, locales: Mapping[str, Locale], default_code: str = "en"):
        if default_code not in locales:
            raise UnknownLocaleError(default_code)
        self._locales = dict(locales)
        self.default_code = default_code

    @classmethod
    def from_documents(
        cls, documents: Mapping[str, Mapping[str, Any]], default_code: str = "en"
    ) -> LocaleCatalog:
        """Build linked ``Locale`` values from parsed locale documents."""
        built: dict[str, Locale] = {}

        def build(code: str, chain: tuple[str, ...]) -> Locale:
            if code in built:
                return built[code]
            doc = documents[code]
            parent_code = doc.get("fallback")
            parent = None
            if parent_code and parent_code in documents and parent_code not in chain:
                parent = build(parent_code, chain + (code,))
            elif parent_code:
                logger.warning(
                    "Ignoring locale fallback",
                    extra={"locale": code, "fallback": parent_code},
                )
            built[code] = Locale(
                code=code,
                name=str(doc.get("name") or code),
                messages=flatten_messages(doc.get("messages") or {}),
                fallback=parent,
            )
            return built[code]

        for code in documents:
            build(code, ())
        return cls(built, default_code=default_code)

    @classmethod
    def load(cls, *dirs: Path | None, default_code: str = "en") -> LocaleCatalog:
        """Load ``*.yaml`` locale files; later directories extend earlier ones.

        A later file for an existing code merges its messages over the
        earlier ones, so a deployment can add or patch strings without
        touching the shipped tables.
        """
        documents: dict[str, dict[str, Any]] = {}
        for directory in (PACKAGE_LOCALES_DIR, *dirs):
            if directory is None or not directory.is_dir():
                continue
            for path in sorted(directory.glob("*.yaml")):
                doc = _load_yaml(path)
                code = path.stem
                existing = documents.setdefault(code, {"messages": {}})
                if "name" in doc:
                    existing["name"] = doc["name"]
                if "fallback" in doc:
                    existing["fallback"] = doc["fallback"]
                existing["messages"] = _deep_merge(existing["messages"], doc.get("messages") or {})
                logger.debug("Loaded locale file", extra={"locale": code, "path": str(path)})
        return cls.from_documents(documents, default_code=default_code)

    def codes(self) -> list[str]:
        return sorted(self._locales)

    def __contains__(self, code: object) -> bool:
        return code in self._locales

    def __iter__(self) -> Iterable[Locale]:
        return iter(self._locales[c] for c in self.codes())

    def get(self, code: str) -> Locale:
        try:
            return self._locales[code]
        except KeyError:
            raise UnknownLocaleError(code) from None

    def resolver(self, code: str | None = None) -> LabelResolver:
        return LabelResolver(self.get(code or self.default_code))


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def default_catalog() -> LocaleCatalog:
    """Catalog of the shipped locales only."""
    return LocaleCatalog.load()


class LocaleSession:
    """The active locale for one user session.

    ``resolver`` builds a new ``LabelResolver`` on every access, so callers that
    re-resolve after ``switch`` always see the new locale.
    """

    def __init__(self, catalog: LocaleCatalog, code: str | None = None):
        self.catalog = catalog
        self._code = catalog.get(code or catalog.default_code).code

    @property
    def code(self) -> str:
        return self._code

    @property
    def resolver(self) -> LabelResolver:
        return LabelResolver(self.catalog.get(self._code))

    def switch(self, code: str) -> LabelResolver:
        locale = self.catalog.get(code)
        if locale.code != self._code:
            logger.info("Switched locale", extra={"from": self._code, "to": locale.code})
        self._code = locale.code
        return LabelResolver(locale)
