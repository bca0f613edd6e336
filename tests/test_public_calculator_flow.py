"""Public order page flow: estimates, submissions, quotas and fast quotes."""

from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from bakequote.db.base import Base
from bakequote.db import session as db_session
from bakequote.main import app
from bakequote.models import Customer, Lead


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


def _setup(tmp_path: Path, monkeypatch, name: str) -> sessionmaker:
    engine = _build_test_engine(tmp_path / name)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


CONTACT = {
    "name": "Grace Hopper",
    "email": "grace@example.com",
    "phone": "555-987-6543",
    "eventType": "wedding",
    "eventDate": "2026-11-20",
    "guestCount": 40,
}

CAKE = {
    "category": "cake",
    "tiers": [{"size": "8-round", "shape": "square", "flavor": "vanilla", "frosting": "buttercream"}],
    "decorations": ["sprinkles"],
    "addons": [],
    "deliveryOption": "pickup",
}


def test_public_profile_and_catalog(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch, "test_public_profile.db")

    with TestClient(app) as client:
        _auth_headers(client, "profile@example.com", "Profile Pastry")
        profile = client.get("/api/v1/public/baker/profile-pastry")
        catalog = client.get("/api/v1/public/baker/profile-pastry/catalog")
        unknown = client.get("/api/v1/public/baker/nobody")

    assert profile.status_code == 200
    assert profile.json()["business_name"] == "Profile Pastry"
    assert "email" not in profile.json()
    assert catalog.status_code == 200
    assert [item["id"] for item in catalog.json()["deliveryOptions"]] == ["pickup", "local", "extended"]
    assert unknown.status_code == 404


def test_estimate_uses_tenant_catalog(tmp_path: Path, monkeypatch) -> None:
    """Estimates price against the tenant's own overrides."""
    _setup(tmp_path, monkeypatch, "test_public_estimate.db")

    with TestClient(app) as client:
        headers = _auth_headers(client, "estimate@example.com", "Estimate Cakes")
        default_estimate = client.post(
            "/api/v1/public/calculator/estimate?tenant=estimate-cakes",
            json={"configuration": CAKE},
        )
        client.put(
            "/api/v1/pricing/shapes/entries",
            json={"id": "square", "priceModifier": 20},
            headers=headers,
        )
        custom_estimate = client.post(
            "/api/v1/public/calculator/estimate?tenant=estimate-cakes",
            json={"configuration": CAKE},
        )
        no_tenant = client.post("/api/v1/public/calculator/estimate", json={"configuration": CAKE})

    assert default_estimate.status_code == 200
    assert default_estimate.json()["subtotal"] == "80.00"
    assert default_estimate.json()["deliveryTotal"] == "0.00"
    assert default_estimate.json()["tax"] == "6.40"
    assert default_estimate.json()["total"] == "86.40"
    assert custom_estimate.json()["total"] == "97.20"
    assert no_tenant.status_code == 400


def test_submit_creates_lead_and_customer(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch, "test_public_submit.db")

    with TestClient(app) as client:
        _auth_headers(client, "submit@example.com", "Submit Bakery")
        response = client.post(
            "/api/v1/public/calculator/submit?tenant=submit-bakery",
            json={"contact": CONTACT, "order": {"configuration": CAKE}},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    with testing_session_local() as db:
        lead = db.get(Lead, body["leadId"])
        assert lead is not None
        assert lead.status == "new"
        assert lead.is_fast_quote is False
        assert lead.estimated_total == Decimal("86.40")
        assert lead.calculator_payload["tiers"][0]["shape"] == "square"
        customer = db.scalar(select(Customer).where(Customer.id == lead.customer_id))
        assert customer.email == "grace@example.com"


def test_submit_validation_errors_name_the_field(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch, "test_public_validation.db")
    delivery_cake = {**CAKE, "deliveryOption": "local"}

    with TestClient(app) as client:
        _auth_headers(client, "validate@example.com", "Validate Bakery")
        missing_address = client.post(
            "/api/v1/public/calculator/submit?tenant=validate-bakery",
            json={"contact": CONTACT, "order": {"configuration": delivery_cake}},
        )
        bad_email = client.post(
            "/api/v1/public/calculator/submit?tenant=validate-bakery",
            json={"contact": {**CONTACT, "email": "grace"}, "order": {"configuration": CAKE}},
        )
        unknown_tenant = client.post(
            "/api/v1/public/calculator/submit?tenant=missing-bakery",
            json={"contact": CONTACT, "order": {"configuration": CAKE}},
        )

    assert missing_address.status_code == 422
    assert missing_address.json()["detail"]["field"] == "deliveryAddress"
    assert bad_email.status_code == 422
    assert bad_email.json()["detail"]["field"] == "email"
    assert unknown_tenant.status_code == 404


def test_free_plan_lead_limit(tmp_path: Path, monkeypatch) -> None:
    """The sixth lead of the month on the free plan is refused with limitReached."""
    testing_session_local = _setup(tmp_path, monkeypatch, "test_public_limit.db")

    with TestClient(app) as client:
        _auth_headers(client, "limit@example.com", "Limit Bakery")
        responses = [
            client.post(
                "/api/v1/public/calculator/submit?tenant=limit-bakery",
                json={"contact": {**CONTACT, "email": f"guest{index}@example.com"}, "order": {"configuration": CAKE}},
            )
            for index in range(6)
        ]

    assert [response.status_code for response in responses[:5]] == [200] * 5
    assert responses[5].status_code == 403
    assert responses[5].json()["detail"]["limitReached"] is True

    with testing_session_local() as db:
        assert db.query(Lead).count() == 5


def test_lead_estimate_is_frozen_after_price_change(tmp_path: Path, monkeypatch) -> None:
    """Editing prices later never changes the total stored on an earlier lead."""
    _setup(tmp_path, monkeypatch, "test_public_frozen.db")

    with TestClient(app) as client:
        headers = _auth_headers(client, "frozen@example.com", "Frozen Bakery")
        submit = client.post(
            "/api/v1/public/calculator/submit?tenant=frozen-bakery",
            json={"contact": CONTACT, "order": {"configuration": CAKE}},
        )
        client.put(
            "/api/v1/pricing/sizes/entries",
            json={"id": "8-round", "basePrice": 99},
            headers=headers,
        )
        lead = client.get(f"/api/v1/leads/{submit.json()['leadId']}", headers=headers)
        new_estimate = client.post(
            "/api/v1/public/calculator/estimate?tenant=frozen-bakery",
            json={"configuration": CAKE},
        )

    assert lead.status_code == 200
    assert Decimal(lead.json()["estimatedTotal"]) == Decimal("86.40")
    assert new_estimate.json()["total"] == "123.12"


def test_fast_quote_submission(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch, "test_public_fast_quote.db")

    with TestClient(app) as client:
        headers = _auth_headers(client, "fast@example.com", "Fast Bakery")
        created = client.post(
            "/api/v1/featured/",
            json={"label": "Holiday Cookie Box", "price": "42.50"},
            headers=headers,
        )
        item_id = created.json()["id"]
        featured = client.get("/api/v1/public/baker/fast-bakery/featured")
        submitted = client.post(
            "/api/v1/public/calculator/submit?tenant=fast-bakery",
            json={"contact": CONTACT, "order": {"fastQuote": True, "featuredItemId": item_id, "quantity": 2}},
        )
        unknown_item = client.post(
            "/api/v1/public/calculator/submit?tenant=fast-bakery",
            json={"contact": CONTACT, "order": {"fastQuote": True, "featuredItemId": item_id + 100}},
        )

    assert created.status_code == 201
    assert [item["label"] for item in featured.json()] == ["Holiday Cookie Box"]
    assert submitted.status_code == 200
    assert unknown_item.status_code == 422
    assert unknown_item.json()["detail"]["field"] == "featuredItemId"

    with testing_session_local() as db:
        lead = db.get(Lead, submitted.json()["leadId"])
        assert lead.is_fast_quote is True
        assert lead.estimated_total == Decimal("91.80")
        assert lead.calculator_payload["featuredItemLabel"] == "Holiday Cookie Box"
        assert "tiers" not in lead.calculator_payload


def test_treat_quantities_below_minimum_are_rejected(tmp_path: Path, monkeypatch) -> None:
    """Mini cupcakes sell at least two dozen; one dozen is refused, not priced."""
    testing_session_local = _setup(tmp_path, monkeypatch, "test_public_treat_minimum.db")
    below_minimum = {"category": "treat", "treats": [{"id": "cupcakes-mini", "quantity": 1}]}
    repeated = {
        "category": "treat",
        "treats": [{"id": "brownies", "quantity": 1}, {"id": "brownies", "quantity": 1}],
    }
    at_minimum = {"category": "treat", "treats": [{"id": "cupcakes-mini", "quantity": 2}]}

    with TestClient(app) as client:
        _auth_headers(client, "treats@example.com", "Treat Bakery")
        estimate = client.post(
            "/api/v1/public/calculator/estimate?tenant=treat-bakery",
            json={"configuration": below_minimum},
        )
        submit = client.post(
            "/api/v1/public/calculator/submit?tenant=treat-bakery",
            json={"contact": CONTACT, "order": {"configuration": below_minimum}},
        )
        duplicate = client.post(
            "/api/v1/public/calculator/submit?tenant=treat-bakery",
            json={"contact": CONTACT, "order": {"configuration": repeated}},
        )
        accepted = client.post(
            "/api/v1/public/calculator/estimate?tenant=treat-bakery",
            json={"configuration": at_minimum},
        )

    assert estimate.status_code == 422
    assert estimate.json()["detail"]["field"] == "treats"
    assert submit.status_code == 422
    assert submit.json()["detail"]["field"] == "treats"
    assert duplicate.status_code == 422
    assert duplicate.json()["detail"]["field"] == "treats"
    assert accepted.status_code == 200
    assert accepted.json()["treatsTotal"] == "48.00"

    with testing_session_local() as db:
        assert db.query(Lead).count() == 0


def test_treat_minimum_follows_tenant_override(tmp_path: Path, monkeypatch) -> None:
    """A baker raising a treat's minimum changes what the order page accepts."""
    _setup(tmp_path, monkeypatch, "test_public_treat_override.db")
    three_dozen = {"category": "treat", "treats": [{"id": "brownies", "quantity": 3}]}

    with TestClient(app) as client:
        headers = _auth_headers(client, "minimum@example.com", "Minimum Bakery")
        before = client.post(
            "/api/v1/public/calculator/estimate?tenant=minimum-bakery",
            json={"configuration": three_dozen},
        )
        client.put(
            "/api/v1/pricing/treats/entries",
            json={"id": "brownies", "minQuantity": 4},
            headers=headers,
        )
        after = client.post(
            "/api/v1/public/calculator/estimate?tenant=minimum-bakery",
            json={"configuration": three_dozen},
        )

    assert before.status_code == 200
    assert after.status_code == 422
    assert "minimum order of 4" in after.json()["detail"]["message"]
