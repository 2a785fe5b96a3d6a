from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, field_validator

from charityconnect.models.donation import ItemDonationStatus
from charityconnect.schemas.common import CamelModel, blank_to_none, to_optional_str
from charityconnect.schemas.donor import DonorCreate


class ItemDetails(CamelModel):
    category: str = Field(..., min_length=1)
    condition: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    quantity: Optional[str] = None

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_as_text(cls, v):
        return to_optional_str(v)


class PickupDetails(CamelModel):
    date: Optional[str] = None
    time_slot: Optional[str] = None
    instructions: Optional[str] = None

    @field_validator('date', 'time_slot', 'instructions', mode='before')
    @classmethod
    def empty_as_missing(cls, v):
        return to_optional_str(v)


class MonetaryDetails(CamelModel):
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    purpose: str = Field(..., min_length=1)
    message: Optional[str] = None

    @field_validator('message', mode='before')
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class ItemDonationRequest(CamelModel):
    donor: DonorCreate
    item: ItemDetails
    pickup: Optional[PickupDetails] = None


class MonetaryDonationRequest(CamelModel):
    donor: DonorCreate
    donation: MonetaryDetails
    payment_intent_id: str = Field(..., min_length=1)


class ItemStatusUpdate(CamelModel):
    status: ItemDonationStatus


class PaymentIntentRequest(CamelModel):
    amount: float = Field(..., gt=0)


class PaymentIntentResponse(CamelModel):
    client_secret: str


class DonorDisplayFields(CamelModel):
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    donor_phone: Optional[str] = None
    donor_city: Optional[str] = None


class ItemDonationResponse(DonorDisplayFields):
    kind: Literal["item"] = "item"
    id: UUID
    donor_id: UUID
    category: str
    condition: str
    description: str
    quantity: Optional[str] = None
    pickup_date: Optional[str] = None
    pickup_time_slot: Optional[str] = None
    pickup_instructions: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class MonetaryDonationResponse(DonorDisplayFields):
    kind: Literal["monetary"] = "monetary"
    id: UUID
    donor_id: UUID
    amount: Decimal
    purpose: str
    message: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


DonationRecord = Annotated[
    Union[ItemDonationResponse, MonetaryDonationResponse],
    Field(discriminator="kind"),
]


class ItemDonationResult(CamelModel):
    success: bool = True
    donation: ItemDonationResponse


class MonetaryDonationResult(CamelModel):
    success: bool = True
    donation: MonetaryDonationResponse


class DonationListResponse(CamelModel):
    item_donations: List[ItemDonationResponse]
    monetary_donations: List[MonetaryDonationResponse]

