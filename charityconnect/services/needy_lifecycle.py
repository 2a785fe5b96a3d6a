"""
Needy-person registration and the admin-driven verification lifecycle.

States are encoded by the (verified, status) pair:

    pending   (False, "pending")
    verified  (True,  "verified")
    helped    (True,  "helped")
    rejected  (False, "rejected")

Every admin action is a single field-set described in ``TRANSITIONS``. By
default the lifecycle is permissive: an action taken from a state outside
its ``sources`` is logged and applied anyway, and concurrent actions on one
record are last-write-wins. With ``strict=True`` the same table is enforced.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from charityconnect.core.exceptions import InvalidTransitionError, NotFoundError
from charityconnect.models.needy_person import NeedyPerson, NeedyStatus
from charityconnect.schemas.needy_person import NeedyPersonCreate
from charityconnect.services import notifications
from charityconnect.services.notifications import SmsNotifier

logger = logging.getLogger(__name__)


class NeedyAction(str, enum.Enum):
    VERIFY = "verify"
    REJECT = "reject"
    HELPED = "helped"
    UNHELP = "unhelp"
    UNVERIFY = "unverify"
    UNREJECT = "unreject"


@dataclass(frozen=True)
class Transition:
    status: NeedyStatus
    verified: bool
    sources: FrozenSet[NeedyStatus]
    message: str
    notify: Optional[Callable[[str, str], str]] = None


TRANSITIONS: Dict[NeedyAction, Transition] = {
    NeedyAction.VERIFY: Transition(
        status=NeedyStatus.VERIFIED,
        verified=True,
        sources=frozenset({NeedyStatus.PENDING}),
        message="Request has been verified successfully",
        notify=notifications.verified_message,
    ),
    NeedyAction.REJECT: Transition(
        status=NeedyStatus.REJECTED,
        verified=False,
        sources=frozenset({NeedyStatus.PENDING}),
        message="Request has been rejected",
        notify=notifications.rejected_message,
    ),
    NeedyAction.HELPED: Transition(
        status=NeedyStatus.HELPED,
        verified=True,
        sources=frozenset({NeedyStatus.VERIFIED}),
        message="Person has been marked as helped",
        notify=notifications.helped_message,
    ),
    NeedyAction.UNHELP: Transition(
        status=NeedyStatus.VERIFIED,
        verified=True,
        sources=frozenset({NeedyStatus.HELPED}),
        message="Person has been moved back to verified",
    ),
    NeedyAction.UNVERIFY: Transition(
        status=NeedyStatus.PENDING,
        verified=False,
        sources=frozenset({NeedyStatus.VERIFIED}),
        message="Verification has been undone",
    ),
    NeedyAction.UNREJECT: Transition(
        status=NeedyStatus.PENDING,
        verified=False,
        sources=frozenset({NeedyStatus.REJECTED}),
        message="Rejection has been undone",
    ),
}


def register_needy_person(db: Session, data: NeedyPersonCreate, notifier: SmsNotifier) -> NeedyPerson:
    person = NeedyPerson(**data.model_dump())
    db.add(person)
    db.commit()
    db.refresh(person)
    logger.info(f"Needy person {person.id} registered by {data.reporter_email}")

    notifier.send(db, data.reporter_phone, notifications.registration_message(data.reporter_name, data.name))
    return person


def list_needy_persons(db: Session) -> List[NeedyPerson]:
    return db.query(NeedyPerson).order_by(NeedyPerson.created_at.desc()).all()


def get_needy_person(db: Session, person_id: UUID) -> NeedyPerson:
    person = db.query(NeedyPerson).filter(NeedyPerson.id == person_id).first()
    if not person:
        raise NotFoundError("Needy person not found")
    return person


def apply_transition(person: NeedyPerson, action: NeedyAction, strict: bool = False) -> Transition:
    """Set the fields for ``action`` on ``person`` in place."""
    transition = TRANSITIONS[action]
    current = person.status
    if current not in {source.value for source in transition.sources}:
        if strict:
            raise InvalidTransitionError(f"Cannot {action.value} a request in status '{current}'")
        logger.warning(f"Applying '{action.value}' to needy person {person.id} from status '{current}'")
    person.verified = transition.verified
    person.status = transition.status.value
    return transition


def change_status(
    db: Session,
    person_id: UUID,
    action: NeedyAction,
    notifier: SmsNotifier,
    strict: bool = False,
) -> NeedyPerson:
    """Run one admin action and notify the reporter where the action calls for it."""
    person = get_needy_person(db, person_id)
    previous = person.status
    transition = apply_transition(person, action, strict=strict)
    db.commit()
    db.refresh(person)
    logger.info(f"Needy person {person_id}: {action.value} ({previous} -> {person.status})")

    if transition.notify is not None:
        notifier.send(db, person.reporter_phone, transition.notify(person.reporter_name, person.name))
    return person
