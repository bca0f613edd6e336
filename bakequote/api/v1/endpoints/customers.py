"""Customer endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bakequote.core.security import get_current_baker
from bakequote.db.session import get_db
from bakequote.models.baker import Baker
from bakequote.models.customer import Customer
from bakequote.schemas.customer import CustomerCreate, CustomerResponse
from bakequote.services.customer_service import (
    CustomerExistsError,
    InvalidCustomerError,
    create_customer,
    list_customers,
)

router: APIRouter = APIRouter()


@router.get("/", response_model=list[CustomerResponse])
def read_customers(
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> list[Customer]:
    return list_customers(db, current_baker.id)


@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def add_customer(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
    current_baker: Baker = Depends(get_current_baker),
) -> Customer:
    try:
        return create_customer(db, current_baker.id, name=payload.name, email=payload.email, phone=payload.phone)
    except InvalidCustomerError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CustomerExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Customer with this email already exists",
        ) from exc
