"""Full-table exports as JSON records or CSV."""
import enum
import logging
from typing import Any, Dict, List, Tuple, Type

import pandas as pd
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from charityconnect.core.exceptions import NotFoundError
from charityconnect.models.donation import ItemDonation, MonetaryDonation
from charityconnect.models.donor import Donor
from charityconnect.models.needy_person import NeedyPerson
from charityconnect.models.sms_log import SmsLog
from charityconnect.schemas.common import CamelModel
from charityconnect.schemas.donation import ItemDonationResponse, MonetaryDonationResponse
from charityconnect.schemas.donor import DonorResponse
from charityconnect.schemas.needy_person import NeedyPersonResponse
from charityconnect.schemas.sms_log import SmsLogResponse

logger = logging.getLogger(__name__)


class ExportFormat(str, enum.Enum):
    JSON = "json"
    CSV = "csv"


EXPORTS: Dict[str, Tuple[Any, Type[CamelModel]]] = {
    "donors": (Donor, DonorResponse),
    "item-donations": (ItemDonation, ItemDonationResponse),
    "monetary-donations": (MonetaryDonation, MonetaryDonationResponse),
    "needy": (NeedyPerson, NeedyPersonResponse),
    "sms-logs": (SmsLog, SmsLogResponse),
}


def export_records(db: Session, export_type: str) -> Tuple[List[str], List[Dict[str, Any]]]:
    """Return (columns, rows) for one table, rows serialized as on the wire."""
    if export_type not in EXPORTS:
        raise NotFoundError(f"Unknown export type '{export_type}'")
    model, schema = EXPORTS[export_type]
    rows = db.query(model).order_by(model.created_at.desc()).all()
    columns = [to_camel(name) for name in schema.model_fields]
    records = [schema.model_validate(row).model_dump(mode="json", by_alias=True) for row in rows]
    logger.info(f"Exporting {len(records)} {export_type} records")
    return columns, records


def to_csv(columns: List[str], records: List[Dict[str, Any]]) -> str:
    flattened = [
        {key: "; ".join(value) if isinstance(value, list) else value for key, value in record.items()}
        for record in records
    ]
    frame = pd.DataFrame(flattened, columns=columns)
    return frame.to_csv(index=False)
