"""Lead endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bakequote.core.security import get_current_baker
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.models.lead import Lead
from bakequote.schemas.lead import LeadResponse, LeadStatusUpdate
from bakequote.services.lead_service import InvalidLeadStatusError, get_lead, list_leads, set_lead_status

router: APIRouter = APIRouter()


def _lead_or_404(db: Session, baker: Baker, lead_id: int) -> Lead:
    lead = get_lead(db, baker.id, lead_id)
    if lead is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
    return lead


@router.get("/", response_model=list[LeadResponse])
def read_leads(
    lead_status: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[Lead]:
    return list_leads(db, current_baker.id, lead_status)


@router.get("/{lead_id}", response_model=LeadResponse)
def read_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Lead:
    return _lead_or_404(db, current_baker, lead_id)


@router.patch("/{lead_id}/status", response_model=LeadResponse)
def update_lead_status(
    lead_id: int,
    payload: LeadStatusUpdate,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Lead:
    lead = _lead_or_404(db, current_baker, lead_id)
    try:
        return set_lead_status(db, lead, payload.status)
    except InvalidLeadStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
