"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("LOG_FILE", "")

from types import SimpleNamespace

import pytest
import stripe
from fastapi.testclient import TestClient

from charityconnect.core.config import Settings
from charityconnect.database.database import Database
from charityconnect.main import create_app
from charityconnect.services.notifications import SmsNotifier
from charityconnect.services.payments import PaymentGateway

SMS_FROM = "+15005550006"


class FakePaymentIntents:
    """Stand-in for stripe.PaymentIntent's create/retrieve classmethods."""

    def __init__(self):
        self.statuses = {}
        self.intents = {}
        self.created = []

    def create(self, **params):
        self.created.append(params)
        intent_id = f"pi_test_{len(self.created)}"
        self.statuses[intent_id] = "requires_payment_method"
        self.intents[intent_id] = (params["amount"], params["currency"])
        return SimpleNamespace(id=intent_id, client_secret=f"{intent_id}_secret_test")

    def retrieve(self, intent_id, **params):
        if intent_id not in self.statuses:
            raise stripe.InvalidRequestError(f"No such payment_intent: '{intent_id}'", "intent")
        amount, currency = self.intents.get(intent_id, (0, "inr"))
        return SimpleNamespace(
            id=intent_id, status=self.statuses[intent_id], amount=amount, currency=currency
        )

    def succeed(self, intent_id):
        self.statuses[intent_id] = "succeeded"
        return intent_id


class FakeTwilioClient:
    def __init__(self):
        self.sent = []
        self.fail = False
        self.messages = self

    def create(self, body, from_, to):
        if self.fail:
            raise RuntimeError("Twilio unreachable")
        self.sent.append({"body": body, "from": from_, "to": to})
        return SimpleNamespace(sid=f"SM{len(self.sent):032d}")


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="",
        ENVIRONMENT="test",
        LOG_FILE="",
        STRIPE_SECRET_KEY="sk_test_dummy",
        TWILIO_ACCOUNT_SID="ACtest",
        TWILIO_AUTH_TOKEN="token",
        TWILIO_PHONE_NUMBER=SMS_FROM,
    )


@pytest.fixture
def database():
    db = Database()
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def payment_intents():
    return FakePaymentIntents()


@pytest.fixture
def sms_client():
    return FakeTwilioClient()


@pytest.fixture
def notifier(sms_client):
    return SmsNotifier(from_number=SMS_FROM, client=sms_client)


@pytest.fixture
def gateway(payment_intents):
    return PaymentGateway("sk_test_dummy", "inr", intents=payment_intents)


@pytest.fixture
def app(test_settings, database, gateway, notifier):
    return create_app(
        settings=test_settings,
        database=database,
        payment_gateway=gateway,
        notifier=notifier,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def donor_payload(email="a@x.com", name="Asha Rao", city="Mumbai", phone="9876543210"):
    return {
        "name": name,
        "email": email,
        "phone": phone,
        "address": "12 Marine Drive",
        "city": city,
        "state": "Maharashtra",
        "pincode": "400001",
    }


def item_payload(category="books", **donor):
    return {
        "donor": donor_payload(**donor),
        "item": {
            "category": category,
            "condition": "good",
            "description": "School textbooks, grades 5-8",
            "quantity": 12,
        },
        "pickup": {"date": "2026-10-20", "timeSlot": "morning", "instructions": "Ring twice"},
    }


def needy_payload(name="Ravi Kumar", needs=None, city="Pune"):
    return {
        "name": name,
        "age": 54,
        "gender": "male",
        "phone": "9123456780",
        "familySize": 4,
        "address": "Plot 7, Hadapsar",
        "city": city,
        "state": "Maharashtra",
        "pincode": "411028",
        "needs": needs or ["food", "medical"],
        "situation": "Lost employment after an injury; family needs groceries and medicines.",
        "income": "3000",
        "reporterName": "Meena Shah",
        "reporterPhone": "9988776655",
        "reporterEmail": "meena@example.org",
        "reporterRelationship": "neighbor",
    }


@pytest.fixture
def make_donor_payload():
    return donor_payload


@pytest.fixture
def make_item_payload():
    return item_payload


@pytest.fixture
def make_needy_payload():
    return needy_payload
