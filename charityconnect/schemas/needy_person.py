from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from charityconnect.schemas.common import CamelModel, blank_to_none


class NeedyPersonCreate(CamelModel):
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=150)
    gender: str = Field(..., min_length=1)
    phone: Optional[str] = None
    family_size: Optional[int] = Field(None, ge=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)
    needs: List[str] = Field(..., min_length=1)
    situation: str = Field(..., min_length=1)
    income: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    reporter_name: str = Field(..., min_length=1)
    reporter_phone: str = Field(..., min_length=1)
    reporter_email: EmailStr
    reporter_relationship: str = Field(..., min_length=1)

    @field_validator('phone', 'family_size', 'income', mode='before')
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator('needs', mode='after')
    @classmethod
    def strip_needs(cls, v):
        needs = [need.strip() for need in v if need and need.strip()]
        if not needs:
            raise ValueError("At least one need must be selected")
        return needs


class NeedyPersonResponse(CamelModel):
    id: UUID
    name: str
    age: int
    gender: str
    phone: Optional[str] = None
    family_size: Optional[int] = None
    address: str
    city: str
    state: str
    pincode: str
    needs: List[str]
    situation: str
    income: Optional[Decimal] = None
    reporter_name: str
    reporter_phone: str
    reporter_email: str
    reporter_relationship: str
    verified: bool
    status: str
    created_at: Optional[datetime] = None


class NeedyRegistrationResult(CamelModel):
    success: bool = True
    person: NeedyPersonResponse


class NeedyActionResult(CamelModel):
    success: bool = True
    person: NeedyPersonResponse
    message: str
