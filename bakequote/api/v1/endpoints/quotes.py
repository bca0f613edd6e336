"""Quote endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from bakequote.core.security import get_current_baker
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.models.quote import Quote
from bakequote.schemas.quote import (
    QuoteCreateRequest,
    QuoteItemsUpdate,
    QuoteResponse,
    QuoteStatusUpdate,
    QuoteSummaryResponse,
)
from bakequote.services.lead_service import get_lead
from bakequote.services.quote_service import (
    InvalidQuoteStatusError,
    LeadWithoutCustomerError,
    create_quote_from_lead,
    delete_quote,
    duplicate_quote,
    get_quote,
    list_quotes,
    replace_quote_items,
    set_quote_status,
)

router: APIRouter = APIRouter()


def _quote_or_404(db: Session, baker: Baker, quote_id: int) -> Quote:
    quote = get_quote(db, baker.id, quote_id)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    return quote


@router.get("/", response_model=list[QuoteSummaryResponse])
def read_quotes(
    quote_status: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[Quote]:
    return list_quotes(db, current_baker.id, quote_status)


@router.post("/", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def create_quote(
    payload: QuoteCreateRequest,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Quote:
    """Create a draft quote pre-filled from one of the baker's leads."""
    lead = get_lead(db, current_baker.id, payload.lead_id)
    if lead is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
    try:
        return create_quote_from_lead(db, current_baker, lead, payload.tax_rate)
    except LeadWithoutCustomerError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Lead has no customer") from exc


@router.get("/{quote_id}", response_model=QuoteResponse)
def read_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Quote:
    return _quote_or_404(db, current_baker, quote_id)


@router.put("/{quote_id}/items", response_model=QuoteResponse)
def update_quote_items(
    quote_id: int,
    payload: QuoteItemsUpdate,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Quote:
    quote = _quote_or_404(db, current_baker, quote_id)
    try:
        return replace_quote_items(db, quote, payload.items, payload.tax_rate)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.patch("/{quote_id}/status", response_model=QuoteResponse)
def update_quote_status(
    quote_id: int,
    payload: QuoteStatusUpdate,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Quote:
    quote = _quote_or_404(db, current_baker, quote_id)
    try:
        return set_quote_status(db, quote, payload.status)
    except InvalidQuoteStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{quote_id}/duplicate", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def copy_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Quote:
    """Copy a quote and its line items into a new draft."""
    quote = _quote_or_404(db, current_baker, quote_id)
    return duplicate_quote(db, current_baker, quote)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Response:
    quote = _quote_or_404(db, current_baker, quote_id)
    delete_quote(db, quote)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
