"""
Donation submission and donor lookup-or-create.
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from charityconnect.core.exceptions import NotFoundError, PaymentError
from charityconnect.core.utils import mask_email, mask_phone
from charityconnect.models.donation import ItemDonation, MonetaryDonation, MonetaryDonationStatus
from charityconnect.models.donor import Donor
from charityconnect.schemas.donation import (
    ItemDonationRequest,
    ItemDonationResponse,
    MonetaryDonationRequest,
    MonetaryDonationResponse,
)
from charityconnect.schemas.donor import DonorCreate
from charityconnect.schemas.lookup import DonorProfileResponse
from charityconnect.services.notifications import (
    SmsNotifier,
    item_donation_message,
    monetary_donation_message,
)
from charityconnect.services.payments import PaymentGateway

logger = logging.getLogger(__name__)


def get_donor_by_email(db: Session, email: str):
    return db.query(Donor).filter(Donor.email == email.strip().lower()).first()


def get_or_create_donor(db: Session, donor_data: DonorCreate) -> Donor:
    """
    Return the donor registered under ``donor_data.email``, creating it first
    if needed. The insert runs in a savepoint so a concurrent first-time
    submission for the same email falls back to the row that won.
    """
    donor = get_donor_by_email(db, donor_data.email)
    if donor:
        return donor

    donor = Donor(**donor_data.model_dump())
    try:
        with db.begin_nested():
            db.add(donor)
    except IntegrityError:
        logger.info(f"Donor {donor_data.email} created concurrently; reusing existing row")
        donor = get_donor_by_email(db, donor_data.email)
        if donor is None:
            raise
    else:
        logger.info(f"Donor created: {donor.email}")
    return donor


def submit_item_donation(db: Session, request: ItemDonationRequest, notifier: SmsNotifier) -> ItemDonation:
    donor = get_or_create_donor(db, request.donor)
    pickup = request.pickup

    donation = ItemDonation(
        donor_id=donor.id,
        category=request.item.category,
        condition=request.item.condition,
        description=request.item.description,
        quantity=request.item.quantity,
        pickup_date=pickup.date if pickup else None,
        pickup_time_slot=pickup.time_slot if pickup else None,
        pickup_instructions=pickup.instructions if pickup else None,
    )
    db.add(donation)
    db.commit()
    db.refresh(donation)
    logger.info(f"Item donation {donation.id} ({donation.category}) recorded for donor {donor.email}")

    notifier.send(db, donor.phone, item_donation_message(donor.name, request.item.category))
    return donation


def submit_monetary_donation(
    db: Session,
    request: MonetaryDonationRequest,
    gateway: PaymentGateway,
    notifier: SmsNotifier,
) -> MonetaryDonation:
    intent_id = request.payment_intent_id
    if get_donation_by_payment_intent(db, intent_id):
        logger.warning(f"Payment intent {intent_id} already recorded; rejecting resubmission")
        raise PaymentError("Payment has already been recorded")

    # Verify with the collaborator before any write
    gateway.ensure_succeeded(intent_id, request.donation.amount)

    donor = get_or_create_donor(db, request.donor)
    donation = MonetaryDonation(
        donor_id=donor.id,
        amount=request.donation.amount,
        purpose=request.donation.purpose,
        message=request.donation.message,
        stripe_payment_intent_id=intent_id,
    )
    db.add(donation)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Payment intent {intent_id} recorded concurrently; rejecting resubmission")
        raise PaymentError("Payment has already been recorded") from None

    mark_payment_completed(db, donation, intent_id)
    logger.info(f"Monetary donation {donation.id} of {donation.amount} completed for donor {donor.email}")

    notifier.send(db, donor.phone, monetary_donation_message(donor.name, request.donation.amount))
    return donation


def get_donation_by_payment_intent(db: Session, payment_intent_id: str):
    return db.query(MonetaryDonation).filter(
        MonetaryDonation.stripe_payment_intent_id == payment_intent_id
    ).first()


def mark_payment_completed(db: Session, donation: MonetaryDonation, payment_intent_id: str) -> MonetaryDonation:
    """One-shot pending -> completed stamp; a settled donation is left as is."""
    if donation.status == MonetaryDonationStatus.COMPLETED.value:
        logger.warning(f"Monetary donation {donation.id} already completed; ignoring {payment_intent_id}")
        return donation
    donation.stripe_payment_intent_id = payment_intent_id
    donation.status = MonetaryDonationStatus.COMPLETED.value
    db.commit()
    db.refresh(donation)
    return donation


def list_item_donations(db: Session) -> List[ItemDonation]:
    return db.query(ItemDonation).order_by(ItemDonation.created_at.desc()).all()


def list_monetary_donations(db: Session) -> List[MonetaryDonation]:
    return db.query(MonetaryDonation).order_by(MonetaryDonation.created_at.desc()).all()


def update_item_donation_status(db: Session, donation_id: UUID, status: str) -> ItemDonation:
    donation = db.query(ItemDonation).filter(ItemDonation.id == donation_id).first()
    if not donation:
        raise NotFoundError("Item donation not found")
    previous = donation.status
    donation.status = status
    db.commit()
    db.refresh(donation)
    logger.info(f"Item donation {donation_id} status {previous} -> {status}")
    return donation


def get_donor_profile(db: Session, email: str) -> DonorProfileResponse:
    """Donor and their donations, with email and phone masked."""
    donor = get_donor_by_email(db, email)
    if not donor:
        raise NotFoundError("Donor not found")
    return DonorProfileResponse(
        id=donor.id,
        name=donor.name,
        email=mask_email(donor.email),
        phone=mask_phone(donor.phone),
        city=donor.city,
        state=donor.state,
        created_at=donor.created_at,
        item_donations=[ItemDonationResponse.model_validate(d) for d in donor.item_donations],
        monetary_donations=[MonetaryDonationResponse.model_validate(d) for d in donor.monetary_donations],
    )
