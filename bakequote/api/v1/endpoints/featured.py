"""Featured item endpoints for the baker dashboard."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bakequote.core.security import get_current_baker
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.models.featured_item import FeaturedItem
from bakequote.schemas.featured import FeaturedItemCreate, FeaturedItemResponse
from bakequote.services.featured_service import create_featured_item, list_featured_items

router: APIRouter = APIRouter()


@router.post("/", response_model=FeaturedItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: FeaturedItemCreate,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> FeaturedItem:
    if payload.featured_start and payload.featured_end and payload.featured_end < payload.featured_start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Featured window ends before it starts")
    return create_featured_item(
        db,
        baker_id=current_baker.id,
        label=payload.label.strip(),
        price=payload.price,
        description=payload.description,
        featured_start=payload.featured_start,
        featured_end=payload.featured_end,
    )


@router.get("/", response_model=list[FeaturedItemResponse])
def read_items(
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[FeaturedItem]:
    return list_featured_items(db, current_baker.id)
