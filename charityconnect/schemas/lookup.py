from datetime import datetime
from typing import List, Optional
from uuid import UUID

from charityconnect.schemas.common import CamelModel
from charityconnect.schemas.donation import DonationRecord, ItemDonationResponse, MonetaryDonationResponse
from charityconnect.schemas.donor import DonorResponse
from charityconnect.schemas.needy_person import NeedyPersonResponse


class DonorProfileResponse(CamelModel):
    """Donor lookup by email; contact details are masked."""
    id: UUID
    name: str
    email: str
    phone: str
    city: Optional[str] = None
    state: Optional[str] = None
    created_at: Optional[datetime] = None
    item_donations: List[ItemDonationResponse] = []
    monetary_donations: List[MonetaryDonationResponse] = []


class SearchResponse(CamelModel):
    query: str
    type: str
    donors: List[DonorResponse] = []
    needy_persons: List[NeedyPersonResponse] = []
    donations: List[DonationRecord] = []
    total: int = 0


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    uptime: str
    version: str
    environment: str
    storage: str
