import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from charityconnect.database.database import Base, utcnow


class ItemDonationStatus(str, enum.Enum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    COLLECTED = "collected"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class MonetaryDonationStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class DonorDisplayMixin:
    """Donor display fields exposed on donation listings."""

    @property
    def donor_name(self) -> Optional[str]:
        return self.donor.name if self.donor else None

    @property
    def donor_email(self) -> Optional[str]:
        return self.donor.email if self.donor else None

    @property
    def donor_phone(self) -> Optional[str]:
        return self.donor.phone if self.donor else None

    @property
    def donor_city(self) -> Optional[str]:
        return self.donor.city if self.donor else None


class ItemDonation(DonorDisplayMixin, Base):
    __tablename__ = "item_donations"

    kind = "item"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    donor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("donors.id"), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    condition: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    pickup_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    pickup_time_slot: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    pickup_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ItemDonationStatus.PENDING.value
    )
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    donor: Mapped["Donor"] = relationship("Donor", back_populates="item_donations", lazy="joined")


class MonetaryDonation(DonorDisplayMixin, Base):
    __tablename__ = "monetary_donations"

    kind = "monetary"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    donor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("donors.id"), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    purpose: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # One donation per confirmed intent
    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=MonetaryDonationStatus.PENDING.value
    )
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    donor: Mapped["Donor"] = relationship("Donor", back_populates="monetary_donations", lazy="joined")
