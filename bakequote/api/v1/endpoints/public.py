"""Public order-page endpoints: tenant profile, catalog, estimates and submissions."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.schemas.auth import PublicBakerResponse
from bakequote.schemas.featured import FeaturedItemResponse
from bakequote.schemas.lead import CalculatorSubmitRequest, CalculatorSubmitResponse
from bakequote.schemas.order_config import EstimateRequest, PricedTotals
from bakequote.services.catalog_resolver import resolve_catalog
from bakequote.services.featured_service import list_public_featured_items
from bakequote.services.lead_payload import SubmissionValidationError, validate_treat_selections
from bakequote.services.lead_service import BakerNotFoundError, LeadLimitReachedError, get_baker_by_slug, submit_calculator
from bakequote.services.order_totals import compute_total

router: APIRouter = APIRouter()


def _baker_or_404(db: Session, slug: str | None) -> Baker:
    if not slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tenant slug is required")
    try:
        return get_baker_by_slug(db, slug)
    except BakerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Baker not found") from exc


def _validation_error(exc: SubmissionValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"field": exc.field, "message": exc.message},
    )


@router.get("/baker/{slug}", response_model=PublicBakerResponse)
def get_public_baker(slug: str, db: Session = Depends(get_db)) -> Baker:
    return _baker_or_404(db, slug)


@router.get("/baker/{slug}/catalog")
def get_public_catalog(slug: str, db: Session = Depends(get_db)) -> dict[str, list[dict[str, Any]]]:
    """Resolved catalog with disabled entries hidden."""
    baker = _baker_or_404(db, slug)
    return resolve_catalog(baker.calculator_config).as_document(active_only=True)


@router.get("/baker/{slug}/featured", response_model=list[FeaturedItemResponse])
def get_public_featured(slug: str, db: Session = Depends(get_db)) -> list:
    baker = _baker_or_404(db, slug)
    return list_public_featured_items(db, baker.id)


@router.post("/calculator/estimate", response_model=PricedTotals)
def estimate(
    payload: EstimateRequest,
    tenant: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> PricedTotals:
    """Running total for the order page."""
    baker = _baker_or_404(db, tenant)
    catalog = resolve_catalog(baker.calculator_config)
    try:
        validate_treat_selections(payload.configuration, catalog)
    except SubmissionValidationError as exc:
        raise _validation_error(exc) from exc
    return compute_total(payload.configuration, catalog)


@router.post("/calculator/submit", response_model=CalculatorSubmitResponse)
def submit(
    payload: CalculatorSubmitRequest,
    tenant: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> CalculatorSubmitResponse:
    baker = _baker_or_404(db, tenant)
    try:
        lead = submit_calculator(db, baker, payload)
    except SubmissionValidationError as exc:
        raise _validation_error(exc) from exc
    except LeadLimitReachedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"message": "This bakery is not accepting new requests right now.", "limitReached": True},
        ) from exc
    return CalculatorSubmitResponse(lead_id=lead.id)
