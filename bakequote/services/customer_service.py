"""Customer records for a baker."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakequote.models.customer import Customer
from bakequote.services.lead_payload import EMAIL_PATTERN

logger = logging.getLogger(__name__)


class CustomerExistsError(Exception):
    """Raised when the baker already has a customer with this email."""


class InvalidCustomerError(ValueError):
    """Raised for a customer record that fails validation."""


def get_customer_by_email(db: Session, baker_id: int, email: str) -> Customer | None:
    return db.scalar(select(Customer).where(Customer.baker_id == baker_id, Customer.email == email).limit(1))


def list_customers(db: Session, baker_id: int) -> list[Customer]:
    query = select(Customer).where(Customer.baker_id == baker_id)
    return db.scalars(query.order_by(Customer.created_at.desc(), Customer.id.desc())).all()


def create_customer(db: Session, baker_id: int, *, name: str, email: str, phone: str | None = None) -> Customer:
    normalized_email = email.strip()
    if not EMAIL_PATTERN.match(normalized_email):
        raise InvalidCustomerError("Please enter a valid email")
    if get_customer_by_email(db, baker_id, normalized_email) is not None:
        raise CustomerExistsError(normalized_email)

    customer = Customer(
        baker_id=baker_id,
        name=name.strip(),
        email=normalized_email,
        phone=(phone or "").strip() or None,
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)
    logger.info("[CUSTOMERS] Customer id=%s created for baker_id=%s", customer.id, baker_id)
    return customer
