import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from charityconnect.database.database import Base, utcnow


class NeedyStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    HELPED = "helped"
    REJECTED = "rejected"


class NeedyPerson(Base):
    __tablename__ = "needy_persons"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(16), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    family_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    state: Mapped[str] = mapped_column(String(128), nullable=False)
    pincode: Mapped[str] = mapped_column(String(16), nullable=False)
    needs: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    situation: Mapped[str] = mapped_column(Text, nullable=False)
    income: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    reporter_name: Mapped[str] = mapped_column(Text, nullable=False)
    reporter_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    reporter_email: Mapped[str] = mapped_column(String(320), nullable=False)
    reporter_relationship: Mapped[str] = mapped_column(String(64), nullable=False)
    # No version column: concurrent admin actions are last-write-wins
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=NeedyStatus.PENDING.value)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
