"""
Needy-person lifecycle tests: the transition table in isolation and the
service against a real session.
"""
import uuid

import pytest

from charityconnect.core.exceptions import InvalidTransitionError, NotFoundError
from charityconnect.models import NeedyPerson, SmsLog
from charityconnect.schemas.needy_person import NeedyPersonCreate
from charityconnect.services.needy_lifecycle import (
    TRANSITIONS,
    NeedyAction,
    apply_transition,
    change_status,
    register_needy_person,
)


def state(person):
    return person.verified, person.status


def fresh():
    return NeedyPerson(status="pending", verified=False)


class TestApplyTransition:
    @pytest.mark.parametrize("action, expected", [
        (NeedyAction.VERIFY, (True, "verified")),
        (NeedyAction.REJECT, (False, "rejected")),
        (NeedyAction.HELPED, (True, "helped")),
        (NeedyAction.UNHELP, (True, "verified")),
        (NeedyAction.UNVERIFY, (False, "pending")),
        (NeedyAction.UNREJECT, (False, "pending")),
    ])
    def test_each_action_sets_both_fields(self, action, expected):
        person = fresh()
        apply_transition(person, action)
        assert state(person) == expected

    def test_every_action_has_a_transition(self):
        assert set(TRANSITIONS) == set(NeedyAction)

    @pytest.mark.parametrize("action", list(NeedyAction))
    def test_actions_are_idempotent(self, action):
        person = fresh()
        apply_transition(person, action)
        once = state(person)
        apply_transition(person, action)
        assert state(person) == once

    def test_unverify_undoes_verify(self):
        person = fresh()
        apply_transition(person, NeedyAction.VERIFY)
        apply_transition(person, NeedyAction.UNVERIFY)
        assert state(person) == (False, "pending")

    def test_unreject_undoes_reject(self):
        person = fresh()
        apply_transition(person, NeedyAction.REJECT)
        apply_transition(person, NeedyAction.UNREJECT)
        assert state(person) == (False, "pending")

    def test_unhelp_returns_to_verified_not_pending(self):
        person = fresh()
        apply_transition(person, NeedyAction.VERIFY)
        apply_transition(person, NeedyAction.HELPED)
        apply_transition(person, NeedyAction.UNHELP)
        assert state(person) == (True, "verified")

    def test_permissive_mode_applies_out_of_order_action(self, caplog):
        person = fresh()
        with caplog.at_level("WARNING"):
            apply_transition(person, NeedyAction.HELPED)
        assert state(person) == (True, "helped")
        assert "from status 'pending'" in caplog.text

    def test_strict_mode_rejects_out_of_order_action(self):
        person = fresh()
        with pytest.raises(InvalidTransitionError):
            apply_transition(person, NeedyAction.HELPED, strict=True)
        assert state(person) == (False, "pending")

    def test_strict_mode_allows_listed_sources(self):
        person = fresh()
        apply_transition(person, NeedyAction.VERIFY, strict=True)
        apply_transition(person, NeedyAction.HELPED, strict=True)
        assert state(person) == (True, "helped")


def registration(**overrides):
    data = {
        "name": "Ravi Kumar",
        "age": 54,
        "gender": "male",
        "phone": "9123456780",
        "family_size": 4,
        "address": "Plot 7, Hadapsar",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411028",
        "needs": ["food"],
        "situation": "Needs groceries",
        "reporter_name": "Meena Shah",
        "reporter_phone": "9988776655",
        "reporter_email": "meena@example.org",
        "reporter_relationship": "neighbor",
    }
    data.update(overrides)
    return NeedyPersonCreate(**data)


class TestChangeStatus:
    def test_registration_starts_pending_and_notifies_reporter(self, db_session, notifier, sms_client):
        person = register_needy_person(db_session, registration(), notifier)
        assert state(person) == (False, "pending")
        assert sms_client.sent[-1]["to"] == "9988776655"
        assert "Ravi Kumar" in sms_client.sent[-1]["body"]

    @pytest.mark.parametrize("action, notified", [
        (NeedyAction.VERIFY, True),
        (NeedyAction.REJECT, True),
        (NeedyAction.HELPED, True),
        (NeedyAction.UNHELP, False),
        (NeedyAction.UNVERIFY, False),
        (NeedyAction.UNREJECT, False),
    ])
    def test_notifications_follow_action(self, db_session, notifier, action, notified):
        person = register_needy_person(db_session, registration(), notifier)
        before = db_session.query(SmsLog).count()
        change_status(db_session, person.id, action, notifier)
        after = db_session.query(SmsLog).count()
        assert (after - before == 1) is notified

    def test_persists_transition(self, db_session, notifier):
        person = register_needy_person(db_session, registration(), notifier)
        change_status(db_session, person.id, NeedyAction.VERIFY, notifier)
        db_session.expire_all()
        stored = db_session.get(NeedyPerson, person.id)
        assert state(stored) == (True, "verified")

    def test_unknown_person(self, db_session, notifier):
        with pytest.raises(NotFoundError):
            change_status(db_session, uuid.uuid4(), NeedyAction.VERIFY, notifier)

    def test_strict_failure_does_not_notify(self, db_session, notifier):
        person = register_needy_person(db_session, registration(), notifier)
        before = db_session.query(SmsLog).count()
        with pytest.raises(InvalidTransitionError):
            change_status(db_session, person.id, NeedyAction.UNHELP, notifier, strict=True)
        assert db_session.query(SmsLog).count() == before
