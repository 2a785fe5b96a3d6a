from fastapi import APIRouter, Depends
import logging
from charityconnect.api.deps import get_payment_gateway
from charityconnect.schemas.donation import PaymentIntentRequest, PaymentIntentResponse
from charityconnect.services.payments import PaymentGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    payload: PaymentIntentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Create a payment intent for a monetary donation."""
    client_secret = gateway.create_intent(payload.amount)
    return PaymentIntentResponse(client_secret=client_secret)
