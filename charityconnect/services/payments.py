"""Stripe payment collaborator."""
import logging
from decimal import ROUND_HALF_UP, Decimal

import stripe

from charityconnect.core.exceptions import PaymentError, PaymentUnavailableError

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"


def to_minor_units(amount) -> int:
    """Major currency units (rupees) to the integer minor units Stripe expects."""
    return int((Decimal(str(amount)) * 100).to_integral_value(rounding=ROUND_HALF_UP))


class PaymentGateway:
    """
    Issues payment intents and confirms them before a donation is settled.

    ``intents`` is anything exposing Stripe's ``create``/``retrieve``
    classmethods; it defaults to ``stripe.PaymentIntent``.
    """

    def __init__(self, secret_key: str = "", currency: str = "inr", intents=None):
        self.secret_key = secret_key
        self.currency = currency
        self._intents = intents if intents is not None else stripe.PaymentIntent

    @classmethod
    def from_settings(cls, settings) -> "PaymentGateway":
        if not settings.payments_configured:
            logger.warning("Stripe not configured: STRIPE_SECRET_KEY not provided")
        return cls(settings.STRIPE_SECRET_KEY, settings.PAYMENT_CURRENCY)

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    def create_intent(self, amount: float) -> str:
        """Create an intent for ``amount`` major units and return its client secret."""
        if not self.configured:
            raise PaymentUnavailableError()
        intent = self._intents.create(
            api_key=self.secret_key,
            amount=to_minor_units(amount),
            currency=self.currency,
            metadata={"type": "donation"},
        )
        logger.info(f"Payment intent created: {intent.id}")
        return intent.client_secret

    def ensure_succeeded(self, intent_id: str, amount) -> None:
        """
        Raise unless the collaborator reports the intent as succeeded for
        exactly ``amount`` major units in the configured currency.
        """
        if not self.configured:
            raise PaymentUnavailableError()
        try:
            intent = self._intents.retrieve(intent_id, api_key=self.secret_key)
        except stripe.StripeError as e:
            logger.warning(f"Payment intent {intent_id} lookup failed: {e}")
            raise PaymentError(f"Unable to verify payment: {e.user_message or e}") from e
        if intent.status != SUCCEEDED:
            logger.info(f"Payment intent {intent_id} not completed (status={intent.status})")
            raise PaymentError("Payment not completed")
        expected = to_minor_units(amount)
        if intent.amount != expected or (intent.currency or "").lower() != self.currency.lower():
            logger.warning(
                f"Payment intent {intent_id} is for {intent.amount} {intent.currency}, "
                f"donation claims {expected} {self.currency}"
            )
            raise PaymentError("Payment amount does not match donation")
