from datetime import datetime
from typing import Optional
from uuid import UUID

from charityconnect.schemas.common import CamelModel


class SmsLogResponse(CamelModel):
    id: UUID
    phone: str
    message: str
    status: str
    twilio_sid: Optional[str] = None
    created_at: Optional[datetime] = None
