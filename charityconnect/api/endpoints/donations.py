from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
import logging
from charityconnect.database.database import get_db
from charityconnect.api.deps import get_notifier, get_payment_gateway
from charityconnect.schemas.donation import (
    DonationListResponse,
    ItemDonationRequest,
    ItemDonationResponse,
    ItemDonationResult,
    ItemStatusUpdate,
    MonetaryDonationRequest,
    MonetaryDonationResponse,
    MonetaryDonationResult,
)
from charityconnect.services import donations as donation_service
from charityconnect.services.notifications import SmsNotifier
from charityconnect.services.payments import PaymentGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/items", response_model=ItemDonationResult)
def create_item_donation(
    payload: ItemDonationRequest,
    db: Session = Depends(get_db),
    notifier: SmsNotifier = Depends(get_notifier),
):
    """Submit an item donation; the donor is looked up or created by email."""
    donation = donation_service.submit_item_donation(db, payload, notifier)
    return ItemDonationResult(donation=ItemDonationResponse.model_validate(donation))


@router.post("/money", response_model=MonetaryDonationResult)
def create_monetary_donation(
    payload: MonetaryDonationRequest,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    notifier: SmsNotifier = Depends(get_notifier),
):
    """Record a monetary donation once its payment intent has succeeded."""
    donation = donation_service.submit_monetary_donation(db, payload, gateway, notifier)
    return MonetaryDonationResult(donation=MonetaryDonationResponse.model_validate(donation))


@router.get("", response_model=DonationListResponse)
async def get_donations(db: Session = Depends(get_db)):
    """All item and monetary donations, newest first, with donor display fields."""
    return DonationListResponse(
        item_donations=[
            ItemDonationResponse.model_validate(d) for d in donation_service.list_item_donations(db)
        ],
        monetary_donations=[
            MonetaryDonationResponse.model_validate(d) for d in donation_service.list_monetary_donations(db)
        ],
    )


@router.patch("/items/{donation_id}/status", response_model=ItemDonationResponse)
async def update_item_donation_status(
    donation_id: UUID,
    payload: ItemStatusUpdate,
    db: Session = Depends(get_db),
):
    """Advance the pickup status of an item donation."""
    donation = donation_service.update_item_donation_status(db, donation_id, payload.status.value)
    return ItemDonationResponse.model_validate(donation)
