"""Payment endpoints end to end: HTTP -> authorization -> SQLite."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from models import Business, Card, Payment, Recharge
from security import hash_secret

EXPIRY = date.today() + timedelta(days=365)


@pytest.fixture
def seeded(test_db):
    """Physical card 1 (balance 100), virtual card 2 backed by it, retail business 9."""
    physical = Card(
        id=1, number="5555444433332222", holder_name="ADA LOVELACE", expiry=EXPIRY,
        type="retail", password=hash_secret("1234"), security_code=hash_secret("321"),
    )
    virtual = Card(
        id=2, number="4000123412341234", holder_name="ADA LOVELACE", expiry=EXPIRY,
        type="retail", password=hash_secret("9999"), security_code=hash_secret("777"),
        is_virtual=True, original_card_id=1,
    )
    test_db.add_all([
        physical,
        virtual,
        Business(id=9, name="Corner Shop", type="retail"),
        Business(id=10, name="Bistro", type="restaurant"),
        Recharge(card_id=1, amount=Decimal("100")),
    ])
    test_db.commit()
    return test_db


def payments_in(db):
    db.expire_all()
    return [(p.card_id, Decimal(p.amount), p.business_id) for p in db.query(Payment).all()]


def test_point_of_sale_payment_is_recorded(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 1, "amountPaid": 100, "password": "1234", "businessId": 9,
    })

    assert res.status_code == 201
    assert payments_in(seeded) == [(1, Decimal("100"), 9)]


def test_point_of_sale_insufficient_funds_returns_401(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 1, "amountPaid": 101, "password": "1234", "businessId": 9,
    })

    assert res.status_code == 401
    assert res.json() == {"error": {"code": "UNAUTHORIZED", "message": "insufficient funds"}}
    assert payments_in(seeded) == []


def test_point_of_sale_rejects_virtual_card(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 2, "amountPaid": 10, "password": "9999", "businessId": 9,
    })

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "virtual card not allowed at point of sale"


def test_point_of_sale_unknown_card_returns_404(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 99, "amountPaid": 10, "password": "1234", "businessId": 9,
    })

    assert res.status_code == 404
    assert res.json() == {"error": {"code": "NOT_FOUND", "message": "Card not found"}}


def test_point_of_sale_type_mismatch_returns_401(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 1, "amountPaid": 10, "password": "1234", "businessId": 10,
    })

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "type mismatch"
    assert payments_in(seeded) == []


def test_online_virtual_payment_charges_backing_card(client, seeded):
    res = client.post("/payments/online", json={
        "cardNumber": "4000123412341234",
        "holderName": "ADA LOVELACE",
        "expirationDate": EXPIRY.isoformat(),
        "securityCode": "777",
        "amountPaid": 50,
        "businessId": 9,
    })

    assert res.status_code == 201
    assert payments_in(seeded) == [(1, Decimal("50"), 9)]


def test_online_wrong_security_code_returns_401(client, seeded):
    res = client.post("/payments/online", json={
        "cardNumber": "5555444433332222",
        "holderName": "ADA LOVELACE",
        "expirationDate": EXPIRY.isoformat(),
        "securityCode": "000",
        "amountPaid": 50,
        "businessId": 9,
    })

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "invalid credential"


def test_point_of_sale_body_cannot_carry_security_code(client, seeded):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 1, "amountPaid": 10, "password": "1234", "businessId": 9, "securityCode": "321",
    })

    assert res.status_code == 422


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_amount_is_rejected(client, seeded, amount):
    res = client.post("/payments/point-of-sale", json={
        "cardId": 1, "amountPaid": amount, "password": "1234", "businessId": 9,
    })

    assert res.status_code == 422
    assert payments_in(seeded) == []


def test_online_body_requires_card_details(client, seeded):
    res = client.post("/payments/online", json={
        "cardId": 1, "amountPaid": 10, "securityCode": "321", "businessId": 9,
    })

    assert res.status_code == 422
