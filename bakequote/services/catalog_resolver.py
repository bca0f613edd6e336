"""Merge a tenant's catalog overrides over the platform defaults."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from bakequote.schemas.catalog import CatalogEntry
from bakequote.services.catalog_defaults import CATALOG_CATEGORIES, default_entries, entry_model

logger = logging.getLogger(__name__)

OverrideDocument = Mapping[str, Any]


def _parse_override_entry(category: str, raw: Any) -> CatalogEntry | None:
    """Parse one override entry leniently.

    Fields that fail validation are dropped instead of failing the whole
    entry. Only entries without a usable id are skipped.
    """
    model = entry_model(category)
    if isinstance(raw, CatalogEntry):
        return raw if isinstance(raw, model) else model.model_validate(raw.model_dump(exclude_unset=True))
    if not isinstance(raw, Mapping) or raw.get("id") in (None, ""):
        logger.warning("[PRICING] Skipping %s override entry without id: %r", category, raw)
        return None

    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        bad_keys = {err["loc"][0] for err in exc.errors() if err["loc"]}
        logger.warning(
            "[PRICING] Ignoring invalid fields %s on %s override entry id=%s",
            sorted(str(key) for key in bad_keys),
            category,
            raw.get("id"),
        )
        cleaned = {key: value for key, value in raw.items() if key not in bad_keys}

    try:
        return model.model_validate(cleaned)
    except ValidationError:
        logger.warning("[PRICING] Skipping unparseable %s override entry id=%r", category, raw.get("id"))
        return None


def _override_entries(category: str, override: OverrideDocument | None) -> list[CatalogEntry]:
    if not override:
        return []
    raw_entries = override.get(category)
    if not raw_entries or not isinstance(raw_entries, Iterable):
        return []

    entries: list[CatalogEntry] = []
    seen_ids: set[str] = set()
    for raw in raw_entries:
        entry = _parse_override_entry(category, raw)
        if entry is None:
            continue
        if entry.id in seen_ids:
            logger.warning("[PRICING] Duplicate %s override id=%s; keeping first occurrence", category, entry.id)
            continue
        seen_ids.add(entry.id)
        entries.append(entry)
    return entries


def _apply_override(default: CatalogEntry, override: CatalogEntry) -> CatalogEntry:
    """Return the default entry with every field the override sets replaced."""
    updates = {name: getattr(override, name) for name in override.model_fields_set}
    return default.model_copy(update=updates)


def resolve(category: str, override: OverrideDocument | None = None) -> list[CatalogEntry]:
    """Resolve one category: defaults in declared order, then custom-only entries in insertion order."""
    defaults = default_entries(category)
    overrides = _override_entries(category, override)
    if not overrides:
        return list(defaults)

    overrides_by_id: dict[str, CatalogEntry] = {entry.id: entry for entry in overrides}
    resolved: list[CatalogEntry] = []
    default_id_set: set[str] = set()
    for default in defaults:
        default_id_set.add(default.id)
        custom = overrides_by_id.get(default.id)
        resolved.append(default if custom is None else _apply_override(default, custom))

    resolved.extend(entry for entry in overrides if entry.id not in default_id_set)
    return resolved


def active_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Keep only selectable entries (``enabled`` not explicitly false)."""
    return [entry for entry in entries if entry.is_active]


@dataclass(frozen=True)
class ResolvedCatalog:
    """Snapshot of every resolved category for one tenant."""

    categories: Mapping[str, tuple[CatalogEntry, ...]]
    _index: Mapping[str, Mapping[str, CatalogEntry]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {name: {entry.id: entry for entry in entries} for name, entries in self.categories.items()}
        object.__setattr__(self, "_index", index)

    def entries(self, category: str) -> tuple[CatalogEntry, ...]:
        return self.categories[category]

    def find(self, category: str, entry_id: str | None) -> CatalogEntry | None:
        if entry_id is None:
            return None
        return self._index.get(category, {}).get(entry_id)

    def as_document(self, *, active_only: bool = False) -> dict[str, list[dict[str, Any]]]:
        """Serialize to the camelCase catalog document used by the API."""
        document: dict[str, list[dict[str, Any]]] = {}
        for name, entries in self.categories.items():
            selected = active_entries(entries) if active_only else list(entries)
            document[name] = [entry.model_dump(mode="json", by_alias=True) for entry in selected]
        return document


def resolve_catalog(override: OverrideDocument | None = None) -> ResolvedCatalog:
    """Resolve all categories at once."""
    return ResolvedCatalog(categories={category: tuple(resolve(category, override)) for category in CATALOG_CATEGORIES})
