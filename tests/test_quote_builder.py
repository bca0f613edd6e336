"""Quote builder tests: line items from leads, totals and quote API."""

from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from bakequote.db.base import Base
from bakequote.db import session as db_session
from bakequote.main import app
from bakequote.models import Lead
from bakequote.schemas.quote import QuoteLineItem
from bakequote.services.catalog_resolver import resolve_catalog
from bakequote.services.quote_service import line_items_from_payload, quote_totals


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _auth_headers(client: TestClient, email: str, business_name: str) -> dict[str, str]:
    register_response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "secret123", "business_name": business_name},
    )
    assert register_response.status_code == 201

    login_response = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": "secret123"},
    )
    assert login_response.status_code == 200
    token = login_response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def test_line_items_for_cake_payload() -> None:
    payload = {
        "category": "cake",
        "tiers": [
            {"size": "10-round", "shape": "round", "flavor": "lemon", "frosting": "fondant"},
            {"size": "6-round", "shape": "round", "flavor": "vanilla", "frosting": "buttercream"},
        ],
        "decorations": ["fresh-flowers"],
        "addons": [
            {"id": "full-sweets-table"},
            {"id": "dipped-strawberries", "quantity": "0.5"},
        ],
        "deliveryOption": "extended",
        "fastQuote": False,
    }

    items = line_items_from_payload(payload, resolve_catalog())

    assert [item.name for item in items] == [
        'Tier 1: 10" Round',
        'Tier 2: 6" Round',
        "Fresh Flowers",
        "Full Sweets Table",
        "Chocolate Dipped Strawberries",
        "Extended Delivery (15-30 miles)",
    ]
    assert [item.category for item in items] == ["cake", "cake", "decoration", "addon", "addon", "delivery"]
    assert items[0].unit_price == Decimal("125")
    assert items[0].description == "Round, Lemon, Fondant"
    assert items[3].description == "20 guests"
    assert items[3].unit_price == Decimal("100")
    assert items[4].description == "0.5 dozen"
    assert [item.sort_order for item in items] == list(range(6))


def test_line_items_for_treats_and_fast_quote() -> None:
    catalog = resolve_catalog()
    treats = line_items_from_payload(
        {"category": "treat", "treats": [{"id": "cupcakes-mini", "quantity": 3}], "deliveryOption": "pickup"},
        catalog,
    )
    fast = line_items_from_payload(
        {"fastQuote": True, "featuredItemId": 4, "featuredItemLabel": "Pie Box", "unitPrice": "18.00", "quantity": 2},
        catalog,
    )

    assert len(treats) == 1
    assert treats[0].quantity == Decimal("3")
    assert treats[0].unit_price == Decimal("24")
    assert treats[0].description == "Per dozen, bite-sized"
    assert fast[0].name == "Pie Box"
    assert fast[0].quantity * fast[0].unit_price == Decimal("36.00")


def test_unreadable_payload_gives_no_items() -> None:
    assert line_items_from_payload(None, resolve_catalog()) == []
    assert line_items_from_payload({"category": "pie"}, resolve_catalog()) == []


def test_quote_totals_use_per_quote_rate() -> None:
    items = [
        QuoteLineItem(name="Cake", unit_price=Decimal("75")),
        QuoteLineItem(name="Cookies", quantity=Decimal("2"), unit_price=Decimal("12.5"), category="treat"),
    ]

    default_totals = quote_totals(items)
    custom_totals = quote_totals(items, Decimal("0.1"))

    assert default_totals.subtotal == Decimal("100.00")
    assert default_totals.tax_amount == Decimal("8.00")
    assert default_totals.total == Decimal("108.00")
    assert custom_totals.subtotal == Decimal("100.00")
    assert custom_totals.total == Decimal("110.00")
    with pytest.raises(ValueError):
        quote_totals(items, Decimal("-0.1"))


def test_quote_from_lead_matches_lead_estimate(tmp_path: Path, monkeypatch) -> None:
    """A quote pre-filled from a lead totals to the lead's estimate and marks it quoted."""
    engine = _build_test_engine(tmp_path / "test_quote_from_lead.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    contact = {
        "name": "Katherine Johnson",
        "email": "katherine@example.com",
        "phone": "555-222-3333",
        "eventType": "birthday",
        "eventDate": "2026-12-05",
        "deliveryAddress": "12 Orbit Way",
    }
    cake = {
        "category": "cake",
        "tiers": [{"size": "8-round", "shape": "square", "flavor": "vanilla", "frosting": "buttercream"}],
        "decorations": ["sprinkles"],
        "deliveryOption": "local",
    }

    with TestClient(app) as client:
        headers = _auth_headers(client, "quotes@example.com", "Quote Bakery")
        submit = client.post(
            "/api/v1/public/calculator/submit?tenant=quote-bakery",
            json={"contact": contact, "order": {"configuration": cake}},
        )
        lead_id = submit.json()["leadId"]
        created = client.post("/api/v1/quotes/", json={"leadId": lead_id}, headers=headers)
        quote_id = created.json()["id"]
        updated = client.put(
            f"/api/v1/quotes/{quote_id}/items",
            json={
                "items": [
                    {"name": "Custom cake", "unitPrice": "120", "category": "cake"},
                    {"name": "Candles", "quantity": "2", "unitPrice": "2.50"},
                ],
                "taxRate": "0.1",
            },
            headers=headers,
        )
        bad_category = client.put(
            f"/api/v1/quotes/{quote_id}/items",
            json={"items": [{"name": "Mystery", "unitPrice": "1", "category": "unknown"}]},
            headers=headers,
        )
        sent = client.patch(f"/api/v1/quotes/{quote_id}/status", json={"status": "sent"}, headers=headers)
        bad_status = client.patch(f"/api/v1/quotes/{quote_id}/status", json={"status": "lost"}, headers=headers)
        missing_lead = client.post("/api/v1/quotes/", json={"leadId": lead_id + 50}, headers=headers)

    assert created.status_code == 201
    body = created.json()
    assert body["quoteNumber"].endswith("-0001")
    assert body["status"] == "draft"
    assert [item["category"] for item in body["items"]] == ["cake", "decoration", "delivery"]
    assert Decimal(body["subtotal"]) == Decimal("105.00")
    assert Decimal(body["taxAmount"]) == Decimal("8.40")
    assert Decimal(body["total"]) == Decimal("113.40")

    assert updated.status_code == 200
    assert Decimal(updated.json()["subtotal"]) == Decimal("125.00")
    assert Decimal(updated.json()["taxRate"]) == Decimal("0.1")
    assert Decimal(updated.json()["total"]) == Decimal("137.50")
    assert [item["name"] for item in updated.json()["items"]] == ["Custom cake", "Candles"]
    assert bad_category.status_code == 400
    assert sent.json()["status"] == "sent"
    assert bad_status.status_code == 400
    assert missing_lead.status_code == 404

    with testing_session_local() as db:
        lead = db.get(Lead, lead_id)
        assert lead.status == "quoted"
        assert lead.estimated_total == Decimal("113.40")


def test_lead_status_updates(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "test_lead_status.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    contact = {"name": "Mary Jackson", "email": "mary@example.com", "phone": "555-444-5555"}
    treats = {"category": "treat", "treats": [{"id": "brownies", "quantity": 2}]}

    with TestClient(app) as client:
        headers = _auth_headers(client, "leads@example.com", "Lead Bakery")
        other_headers = _auth_headers(client, "other@example.com", "Other Bakery")
        submit = client.post(
            "/api/v1/public/calculator/submit?tenant=lead-bakery",
            json={"contact": contact, "order": {"configuration": treats}},
        )
        lead_id = submit.json()["leadId"]
        contacted = client.patch(f"/api/v1/leads/{lead_id}/status", json={"status": "Contacted"}, headers=headers)
        invalid = client.patch(f"/api/v1/leads/{lead_id}/status", json={"status": "archived"}, headers=headers)
        listed = client.get("/api/v1/leads/?status=contacted", headers=headers)
        foreign = client.get(f"/api/v1/leads/{lead_id}", headers=other_headers)

    assert contacted.status_code == 200
    assert contacted.json()["status"] == "contacted"
    assert invalid.status_code == 400
    assert [lead["id"] for lead in listed.json()] == [lead_id]
    assert foreign.status_code == 404


def test_quote_list_duplicate_delete_and_deposit(tmp_path: Path, monkeypatch) -> None:
    """Quotes list newest first, copy into a new draft, delete, and split deposit from balance."""
    engine = _build_test_engine(tmp_path / "test_quote_lifecycle.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    contact = {
        "name": "Dorothy Vaughan",
        "email": "dorothy@example.com",
        "phone": "555-666-7777",
        "eventType": "wedding",
        "deliveryAddress": "3 Langley Road",
    }
    cake = {
        "category": "cake",
        "tiers": [{"size": "8-round", "shape": "square", "flavor": "vanilla", "frosting": "buttercream"}],
        "decorations": ["sprinkles"],
        "deliveryOption": "local",
    }

    with TestClient(app) as client:
        headers = _auth_headers(client, "copies@example.com", "Copy Bakery")
        other_headers = _auth_headers(client, "elsewhere@example.com", "Elsewhere Bakery")
        submit = client.post(
            "/api/v1/public/calculator/submit?tenant=copy-bakery",
            json={"contact": contact, "order": {"configuration": cake}},
        )
        created = client.post("/api/v1/quotes/", json={"leadId": submit.json()["leadId"]}, headers=headers)
        quote_id = created.json()["id"]
        duplicated = client.post(f"/api/v1/quotes/{quote_id}/duplicate", headers=headers)
        copy_id = duplicated.json()["id"]
        client.patch(f"/api/v1/quotes/{copy_id}/status", json={"status": "sent"}, headers=headers)
        listed = client.get("/api/v1/quotes/", headers=headers)
        drafts = client.get("/api/v1/quotes/?status=draft", headers=headers)
        foreign_list = client.get("/api/v1/quotes/", headers=other_headers)
        foreign_copy = client.post(f"/api/v1/quotes/{quote_id}/duplicate", headers=other_headers)

        profile = client.patch("/api/v1/auth/me", json={"deposit_percentage": 25}, headers=headers)
        reread = client.get(f"/api/v1/quotes/{quote_id}", headers=headers)
        bad_deposit = client.patch("/api/v1/auth/me", json={"deposit_percentage": 120}, headers=headers)

        deleted = client.delete(f"/api/v1/quotes/{quote_id}", headers=headers)
        after_delete = client.get(f"/api/v1/quotes/{quote_id}", headers=headers)
        third = client.post(f"/api/v1/quotes/{copy_id}/duplicate", headers=headers)

    original = created.json()
    assert Decimal(original["total"]) == Decimal("113.40")
    assert Decimal(original["depositAmount"]) == Decimal("56.70")
    assert Decimal(original["balanceDue"]) == Decimal("56.70")
    assert original["customerName"] == "Dorothy Vaughan"

    assert duplicated.status_code == 201
    copy = duplicated.json()
    assert copy["quoteNumber"].endswith("-0002")
    assert copy["title"] == f"{original['title']} (Copy)"
    assert copy["status"] == "draft"
    assert copy["customerId"] == original["customerId"]
    assert Decimal(copy["total"]) == Decimal(original["total"])
    assert [(item["name"], item["totalPrice"]) for item in copy["items"]] == [
        (item["name"], item["totalPrice"]) for item in original["items"]
    ]

    assert listed.status_code == 200
    assert [quote["id"] for quote in listed.json()] == [copy_id, quote_id]
    assert listed.json()[0]["customerName"] == "Dorothy Vaughan"
    assert [quote["id"] for quote in drafts.json()] == [quote_id]
    assert foreign_list.json() == []
    assert foreign_copy.status_code == 404

    assert profile.status_code == 200
    assert profile.json()["deposit_percentage"] == 25
    assert Decimal(reread.json()["depositAmount"]) == Decimal("28.35")
    assert Decimal(reread.json()["balanceDue"]) == Decimal("85.05")
    assert bad_deposit.status_code == 422

    assert deleted.status_code == 204
    assert after_delete.status_code == 404
    assert third.json()["quoteNumber"].endswith("-0003")
