from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from charityconnect.schemas.common import CamelModel, blank_to_none


class DonorCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    pan: Optional[str] = None

    @field_validator('address', 'city', 'state', 'pincode', 'pan', mode='before')
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator('email', mode='after')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class DonorResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    pan: Optional[str] = None
    created_at: Optional[datetime] = None
