from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging
from charityconnect.database.database import get_db
from charityconnect.api.deps import get_app_settings, get_notifier
from charityconnect.core.config import Settings
from charityconnect.schemas.needy_person import (
    NeedyActionResult,
    NeedyPersonCreate,
    NeedyPersonResponse,
    NeedyRegistrationResult,
)
from charityconnect.services import needy_lifecycle
from charityconnect.services.needy_lifecycle import NeedyAction, TRANSITIONS
from charityconnect.services.notifications import SmsNotifier

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=NeedyRegistrationResult)
def register_needy_person(
    payload: NeedyPersonCreate,
    db: Session = Depends(get_db),
    notifier: SmsNotifier = Depends(get_notifier),
):
    """Register a person in need; the record starts pending and unverified."""
    person = needy_lifecycle.register_needy_person(db, payload, notifier)
    return NeedyRegistrationResult(person=NeedyPersonResponse.model_validate(person))


@router.get("", response_model=List[NeedyPersonResponse])
async def get_needy_persons(db: Session = Depends(get_db)):
    """All registered needy persons, newest first."""
    return [NeedyPersonResponse.model_validate(p) for p in needy_lifecycle.list_needy_persons(db)]


@router.get("/{person_id}", response_model=NeedyPersonResponse)
async def get_needy_person(person_id: UUID, db: Session = Depends(get_db)):
    return NeedyPersonResponse.model_validate(needy_lifecycle.get_needy_person(db, person_id))


@router.post("/{person_id}/{action}", response_model=NeedyActionResult)
def change_needy_status(
    person_id: UUID,
    action: NeedyAction,
    db: Session = Depends(get_db),
    notifier: SmsNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_app_settings),
):
    """Apply one admin action: verify, reject, helped, unhelp, unverify or unreject."""
    person = needy_lifecycle.change_status(
        db, person_id, action, notifier, strict=settings.STRICT_NEEDY_TRANSITIONS
    )
    return NeedyActionResult(
        person=NeedyPersonResponse.model_validate(person),
        message=TRANSITIONS[action].message,
    )
