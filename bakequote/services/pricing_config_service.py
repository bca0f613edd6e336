"""Read and edit a baker's catalog override document."""

from __future__ import annotations

import copy
import logging
from typing import Any

from sqlalchemy.orm import Session

from bakequote.models.baker import Baker
from bakequote.schemas.catalog import AddonEntry, CatalogEntry, FlatPriceEntry, SizeEntry, TenantCatalogOverride, TreatEntry
from bakequote.services.catalog_defaults import default_ids, ensure_category, entry_model
from bakequote.services.catalog_resolver import ResolvedCatalog, resolve, resolve_catalog

logger = logging.getLogger(__name__)


class DefaultEntryRemovalError(Exception):
    """Raised when removing a platform default entry; defaults can only be disabled."""


class CatalogEntryNotFoundError(Exception):
    """Raised when an entry id is neither a default nor present in the override."""


class InvalidCatalogEntryError(ValueError):
    """Raised when an edited entry breaks a pricing constraint."""


def get_override(baker: Baker) -> dict[str, list[dict[str, Any]]]:
    """Return a deep copy of the baker's override document."""
    return copy.deepcopy(baker.calculator_config or {})


def get_resolved_catalog(baker: Baker) -> ResolvedCatalog:
    return resolve_catalog(baker.calculator_config)


def check_entry_constraints(entry: CatalogEntry) -> None:
    """Validate the editor-side constraints the resolver itself does not enforce."""
    if not entry.id.strip():
        raise InvalidCatalogEntryError("Entry id is required")
    if isinstance(entry, SizeEntry) and entry.base_price < 0:
        raise InvalidCatalogEntryError("Base price cannot be negative")
    if isinstance(entry, (FlatPriceEntry, AddonEntry)) and entry.price < 0:
        raise InvalidCatalogEntryError("Price cannot be negative")
    if isinstance(entry, AddonEntry) and entry.min_attendees is not None and entry.min_attendees < 0:
        raise InvalidCatalogEntryError("Minimum attendees cannot be negative")
    if isinstance(entry, TreatEntry):
        if entry.unit_price < 0:
            raise InvalidCatalogEntryError("Unit price cannot be negative")
        if entry.min_quantity < 1:
            raise InvalidCatalogEntryError("Minimum quantity must be at least 1")


def parse_entry(category: str, data: dict[str, Any]) -> CatalogEntry:
    """Strictly parse one editor payload into the category's entry model."""
    entry = entry_model(category).model_validate(data)
    check_entry_constraints(entry)
    return entry


def _dump_entry(entry: CatalogEntry) -> dict[str, Any]:
    return entry.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _save(db: Session, baker: Baker, document: dict[str, list[dict[str, Any]]]) -> None:
    # JSON columns do not track in-place mutation; always assign a new document.
    baker.calculator_config = document
    db.add(baker)
    db.commit()
    db.refresh(baker)


def replace_override(db: Session, baker: Baker, override: TenantCatalogOverride) -> ResolvedCatalog:
    """Replace the whole override document."""
    for category in override.model_fields_set:
        for entry in getattr(override, category) or []:
            check_entry_constraints(entry)
    _save(db, baker, override.to_document())
    logger.info("[PRICING] Override replaced for baker_id=%s", baker.id)
    return get_resolved_catalog(baker)


def upsert_entry(db: Session, baker: Baker, category: str, entry: CatalogEntry) -> list[CatalogEntry]:
    """Add or replace one entry by id and return the resolved category."""
    ensure_category(category)
    document = get_override(baker)
    entries = list(document.get(category) or [])
    payload = _dump_entry(entry)

    for index, existing in enumerate(entries):
        if isinstance(existing, dict) and existing.get("id") == entry.id:
            entries[index] = payload
            break
    else:
        entries.append(payload)

    document[category] = entries
    _save(db, baker, document)
    logger.info("[PRICING] Upserted %s entry id=%s for baker_id=%s", category, entry.id, baker.id)
    return resolve(category, baker.calculator_config)


def remove_entry(db: Session, baker: Baker, category: str, entry_id: str) -> list[CatalogEntry]:
    """Remove a custom entry; default entries cannot be removed."""
    ensure_category(category)
    if entry_id in default_ids(category):
        raise DefaultEntryRemovalError(f"Default {category} entry '{entry_id}' can only be disabled")

    document = get_override(baker)
    entries = list(document.get(category) or [])
    remaining = [item for item in entries if not (isinstance(item, dict) and item.get("id") == entry_id)]
    if len(remaining) == len(entries):
        raise CatalogEntryNotFoundError(entry_id)

    document[category] = remaining
    _save(db, baker, document)
    logger.info("[PRICING] Removed %s entry id=%s for baker_id=%s", category, entry_id, baker.id)
    return resolve(category, baker.calculator_config)


def set_entry_enabled(db: Session, baker: Baker, category: str, entry_id: str, enabled: bool) -> list[CatalogEntry]:
    """Toggle ``enabled`` on an entry, adding a partial override for defaults when needed."""
    ensure_category(category)
    document = get_override(baker)
    entries = list(document.get(category) or [])

    for index, existing in enumerate(entries):
        if isinstance(existing, dict) and existing.get("id") == entry_id:
            entries[index] = {**existing, "enabled": enabled}
            break
    else:
        if entry_id not in default_ids(category):
            raise CatalogEntryNotFoundError(entry_id)
        entries.append({"id": entry_id, "enabled": enabled})

    document[category] = entries
    _save(db, baker, document)
    return resolve(category, baker.calculator_config)
