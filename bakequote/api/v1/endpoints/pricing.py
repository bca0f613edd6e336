"""Baker pricing configuration endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bakequote.core.security import get_current_baker
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.schemas.catalog import CatalogEntry, CatalogEntryToggle, TenantCatalogOverride
from bakequote.services.catalog_defaults import UnknownCategoryError, ensure_category
from bakequote.services.pricing_config_service import (
    CatalogEntryNotFoundError,
    DefaultEntryRemovalError,
    InvalidCatalogEntryError,
    get_override,
    get_resolved_catalog,
    parse_entry,
    remove_entry,
    replace_override,
    set_entry_enabled,
    upsert_entry,
)

router: APIRouter = APIRouter()


def _category_or_404(category: str) -> str:
    try:
        return ensure_category(category)
    except UnknownCategoryError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown catalog category") from exc


def _serialize(entries: list[CatalogEntry]) -> list[dict[str, Any]]:
    return [entry.model_dump(mode="json", by_alias=True) for entry in entries]


@router.get("/catalog")
def get_catalog(current_baker: Baker = Depends(get_current_baker)) -> dict[str, list[dict[str, Any]]]:
    """Resolved catalog including disabled entries."""
    return get_resolved_catalog(current_baker).as_document()


@router.get("/override")
def get_override_document(current_baker: Baker = Depends(get_current_baker)) -> dict[str, Any]:
    return get_override(current_baker)


@router.put("/override")
def put_override(
    payload: TenantCatalogOverride,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> dict[str, list[dict[str, Any]]]:
    try:
        catalog = replace_override(db, current_baker, payload)
    except InvalidCatalogEntryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return catalog.as_document()


@router.put("/{category}/entries")
def put_entry(
    category: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[dict[str, Any]]:
    """Add or replace one entry by id."""
    category = _category_or_404(category)
    try:
        entry = parse_entry(category, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    except InvalidCatalogEntryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _serialize(upsert_entry(db, current_baker, category, entry))


@router.delete("/{category}/entries/{entry_id}")
def delete_entry(
    category: str,
    entry_id: str,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[dict[str, Any]]:
    category = _category_or_404(category)
    try:
        entries = remove_entry(db, current_baker, category, entry_id)
    except DefaultEntryRemovalError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CatalogEntryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catalog entry not found") from exc
    return _serialize(entries)


@router.post("/{category}/entries/{entry_id}/enabled")
def toggle_entry(
    category: str,
    entry_id: str,
    payload: CatalogEntryToggle,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[dict[str, Any]]:
    category = _category_or_404(category)
    try:
        entries = set_entry_enabled(db, current_baker, category, entry_id, payload.enabled)
    except CatalogEntryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catalog entry not found") from exc
    return _serialize(entries)
