"""
SMS notification collaborator.

Delivery is best-effort: every attempt is written to ``sms_logs`` as either
``sent`` or ``failed`` and nothing is ever raised back to the request.
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session
from twilio.rest import Client

from charityconnect.core.exceptions import NotificationFailure
from charityconnect.models.sms_log import SmsLog, SmsStatus

logger = logging.getLogger(__name__)

SIGNATURE = "- Team HAID"


def item_donation_message(donor_name: str, category: str) -> str:
    return (
        f"Thank you {donor_name} for your kind donation of {category}. "
        f"Your contribution will help the needy. Our team will contact you soon for pickup. {SIGNATURE}"
    )


def monetary_donation_message(donor_name: str, amount: Decimal) -> str:
    return (
        f"Thank you {donor_name} for your generous donation of ₹{amount:,.2f}. "
        f"Your contribution will make a real difference in helping those in need. {SIGNATURE}"
    )


def registration_message(reporter_name: str, person_name: str) -> str:
    return (
        f"Thank you {reporter_name} for registering {person_name} with HAID. "
        f"Our team will verify the information and contact you soon. {SIGNATURE}"
    )


def verified_message(reporter_name: str, person_name: str) -> str:
    return (
        f"Dear {reporter_name}, the registration of {person_name} has been verified. "
        f"Our volunteers will reach out with assistance soon. {SIGNATURE}"
    )


def rejected_message(reporter_name: str, person_name: str) -> str:
    return (
        f"Dear {reporter_name}, we could not verify the registration of {person_name}. "
        f"Please contact us if you have more information. {SIGNATURE}"
    )


def helped_message(reporter_name: str, person_name: str) -> str:
    return (
        f"Dear {reporter_name}, {person_name} has received assistance through HAID. "
        f"Thank you for letting us know. {SIGNATURE}"
    )


class SmsNotifier:
    """Twilio-backed sender that records every attempt."""

    def __init__(self, account_sid: str = "", auth_token: str = "", from_number: str = "",
                 client: Optional[Client] = None):
        self.from_number = from_number
        self._client = client
        if self._client is None and account_sid and auth_token:
            self._client = Client(account_sid, auth_token)

    @classmethod
    def from_settings(cls, settings) -> "SmsNotifier":
        if not settings.sms_configured:
            logger.warning("SMS service not configured: Twilio credentials missing")
            return cls()
        return cls(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN, settings.TWILIO_PHONE_NUMBER)

    @property
    def configured(self) -> bool:
        return self._client is not None and bool(self.from_number)

    def _deliver(self, phone: str, message: str) -> str:
        if not self.configured:
            raise NotificationFailure("SMS service not configured")
        try:
            result = self._client.messages.create(body=message, from_=self.from_number, to=phone)
        except Exception as e:
            raise NotificationFailure(str(e)) from e
        return result.sid

    def send(self, db: Session, phone: str, message: str) -> Optional[SmsLog]:
        """Attempt delivery once and audit the outcome. Never raises."""
        sid = None
        status = SmsStatus.FAILED
        try:
            sid = self._deliver(phone, message)
            status = SmsStatus.SENT
            logger.info(f"SMS sent successfully: {sid}")
        except NotificationFailure as e:
            logger.warning(f"SMS to {phone} not delivered: {e}")

        try:
            log = SmsLog(phone=phone, message=message, status=status.value, twilio_sid=sid)
            db.add(log)
            db.commit()
            db.refresh(log)
            return log
        except Exception as e:
            logger.error(f"Failed to record SMS log for {phone}: {e}")
            db.rollback()
            return None
