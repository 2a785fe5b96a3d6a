"""
Donation service and collaborator tests.
"""
import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from charityconnect.core.exceptions import NotFoundError, PaymentError, PaymentUnavailableError
from charityconnect.core.utils import mask_database_url, mask_email, mask_phone
from charityconnect.models import Donor, MonetaryDonation, SmsLog
from charityconnect.schemas.donation import MonetaryDonationRequest
from charityconnect.schemas.donor import DonorCreate
from charityconnect.services import donations as donation_service
from charityconnect.services.donations import (
    get_donor_profile,
    get_or_create_donor,
    mark_payment_completed,
    submit_monetary_donation,
    update_item_donation_status,
)
from charityconnect.services.notifications import SmsNotifier, monetary_donation_message
from charityconnect.services.payments import PaymentGateway, to_minor_units


def donor_data(email="a@x.com", name="Asha Rao"):
    return DonorCreate(name=name, email=email, phone="9876543210", city="Mumbai")


def money_request(amount, intent_id, email="a@x.com"):
    return MonetaryDonationRequest(
        donor=donor_data(email),
        donation={"amount": amount, "purpose": "education"},
        payment_intent_id=intent_id,
    )


class TestDonorLookup:
    def test_same_email_resolves_to_one_donor(self, db_session):
        first = get_or_create_donor(db_session, donor_data())
        db_session.commit()
        second = get_or_create_donor(db_session, donor_data(name="Someone Else"))
        assert first.id == second.id
        assert db_session.query(Donor).count() == 1

    def test_email_is_case_insensitive(self, db_session):
        first = get_or_create_donor(db_session, donor_data("Asha@X.com"))
        db_session.commit()
        second = get_or_create_donor(db_session, donor_data("asha@x.com"))
        assert first.id == second.id
        assert first.email == "asha@x.com"

    def test_concurrent_insert_falls_back_to_existing_row(self, db_session, monkeypatch):
        existing = get_or_create_donor(db_session, donor_data(name="X"))
        db_session.commit()

        real_lookup = donation_service.get_donor_by_email
        calls = []

        def lookup_missing_first(db, email):
            # The first lookup runs before the other writer's row is visible
            calls.append(email)
            if len(calls) == 1:
                return None
            return real_lookup(db, email)

        monkeypatch.setattr(donation_service, "get_donor_by_email", lookup_missing_first)
        donor = get_or_create_donor(db_session, donor_data(name="Y"))
        db_session.commit()

        assert len(calls) == 2
        assert donor.id == existing.id
        assert donor.name == "X"
        assert db_session.query(Donor).count() == 1

    def test_blank_required_text_is_rejected(self):
        with pytest.raises(ValidationError):
            DonorCreate(name="   ", email="a@x.com", phone="9876543210")
        with pytest.raises(ValidationError):
            DonorCreate(name="Asha", email="a@x.com", phone="  ")

    def test_profile_masks_contact_details(self, db_session):
        get_or_create_donor(db_session, donor_data("john@x.com", "John"))
        db_session.commit()
        profile = get_donor_profile(db_session, "john@x.com")
        assert profile.email == "j**n@x.com"
        assert profile.phone == "98******10"

    def test_profile_unknown_email(self, db_session):
        with pytest.raises(NotFoundError):
            get_donor_profile(db_session, "nobody@x.com")


class TestPaymentCompletion:
    def test_completion_is_one_shot(self, db_session):
        donor = get_or_create_donor(db_session, donor_data())
        donation = MonetaryDonation(donor_id=donor.id, amount=Decimal("500"), purpose="general")
        db_session.add(donation)
        db_session.commit()
        assert donation.status == "pending"

        mark_payment_completed(db_session, donation, "pi_first")
        mark_payment_completed(db_session, donation, "pi_second")
        assert donation.status == "completed"
        assert donation.stripe_payment_intent_id == "pi_first"

    def test_intent_cannot_settle_two_donations(self, db_session, gateway, payment_intents, notifier):
        gateway.create_intent(500)
        payment_intents.succeed("pi_test_1")
        first = submit_monetary_donation(db_session, money_request(500, "pi_test_1"), gateway, notifier)
        assert first.status == "completed"

        with pytest.raises(PaymentError, match="already been recorded"):
            submit_monetary_donation(db_session, money_request(500, "pi_test_1"), gateway, notifier)
        assert db_session.query(MonetaryDonation).count() == 1

    def test_payment_intent_id_is_unique(self, db_session):
        donor = get_or_create_donor(db_session, donor_data())
        db_session.add(MonetaryDonation(
            donor_id=donor.id, amount=Decimal("1"), purpose="general", stripe_payment_intent_id="pi_dup",
        ))
        db_session.commit()
        db_session.add(MonetaryDonation(
            donor_id=donor.id, amount=Decimal("1"), purpose="general", stripe_payment_intent_id="pi_dup",
        ))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_claimed_amount_must_match_intent(self, db_session, gateway, payment_intents, notifier):
        gateway.create_intent(1)
        payment_intents.succeed("pi_test_1")
        with pytest.raises(PaymentError, match="does not match"):
            submit_monetary_donation(db_session, money_request(1000000, "pi_test_1"), gateway, notifier)
        assert db_session.query(MonetaryDonation).count() == 0
        assert db_session.query(Donor).count() == 0


class TestItemDonationStatus:
    def test_unknown_id(self, db_session):
        with pytest.raises(NotFoundError):
            update_item_donation_status(db_session, uuid.uuid4(), "scheduled")


class TestPaymentGateway:
    def test_unconfigured_gateway(self, payment_intents):
        gateway = PaymentGateway("", intents=payment_intents)
        with pytest.raises(PaymentUnavailableError):
            gateway.create_intent(100)
        with pytest.raises(PaymentUnavailableError):
            gateway.ensure_succeeded("pi_test_1", 100)

    def test_amount_sent_in_minor_units(self, gateway, payment_intents):
        secret = gateway.create_intent(499.99)
        assert secret == "pi_test_1_secret_test"
        assert payment_intents.created[0]["amount"] == 49999
        assert payment_intents.created[0]["currency"] == "inr"
        assert payment_intents.created[0]["metadata"] == {"type": "donation"}

    @pytest.mark.parametrize("amount, minor", [
        (1, 100),
        ("250.5", 25050),
        (Decimal("0.29"), 29),
        (19.99, 1999),
    ])
    def test_to_minor_units(self, amount, minor):
        assert to_minor_units(amount) == minor

    def test_unsucceeded_intent_is_rejected(self, gateway):
        gateway.create_intent(100)
        with pytest.raises(PaymentError, match="Payment not completed"):
            gateway.ensure_succeeded("pi_test_1", 100)

    def test_unknown_intent_is_rejected(self, gateway):
        with pytest.raises(PaymentError, match="Unable to verify payment"):
            gateway.ensure_succeeded("pi_missing", 100)

    def test_succeeded_intent_passes(self, gateway, payment_intents):
        gateway.create_intent(100)
        payment_intents.succeed("pi_test_1")
        gateway.ensure_succeeded("pi_test_1", Decimal("100.00"))

    def test_amount_mismatch_is_rejected(self, gateway, payment_intents):
        gateway.create_intent(1)
        payment_intents.succeed("pi_test_1")
        with pytest.raises(PaymentError, match="does not match"):
            gateway.ensure_succeeded("pi_test_1", 1000000)

    def test_currency_mismatch_is_rejected(self, payment_intents):
        PaymentGateway("sk_test_dummy", "usd", intents=payment_intents).create_intent(100)
        payment_intents.succeed("pi_test_1")
        gateway = PaymentGateway("sk_test_dummy", "inr", intents=payment_intents)
        with pytest.raises(PaymentError, match="does not match"):
            gateway.ensure_succeeded("pi_test_1", 100)


class TestSmsNotifier:
    def test_sent_attempt_is_logged_with_sid(self, db_session, notifier):
        log = notifier.send(db_session, "9876543210", "hello")
        assert log.status == "sent"
        assert log.twilio_sid.startswith("SM")

    def test_delivery_failure_is_logged_not_raised(self, db_session, notifier, sms_client):
        sms_client.fail = True
        log = notifier.send(db_session, "9876543210", "hello")
        assert log.status == "failed"
        assert log.twilio_sid is None

    def test_unconfigured_notifier_logs_failure(self, db_session):
        log = SmsNotifier().send(db_session, "9876543210", "hello")
        assert log.status == "failed"
        assert db_session.query(SmsLog).count() == 1

    def test_monetary_message_formats_amount(self):
        message = monetary_donation_message("Asha", Decimal("1500"))
        assert "₹1,500.00" in message
        assert message.endswith("- Team HAID")


class TestMasking:
    def test_mask_email(self):
        assert mask_email("john@x.com") == "j**n@x.com"

    def test_mask_phone_short_values_unchanged(self):
        assert mask_phone("123") == "123"

    def test_mask_database_url_hides_password(self):
        masked = mask_database_url("postgresql://user:secret@db:5432/app")
        assert "secret" not in masked
