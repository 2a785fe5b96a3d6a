from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from typing import List
import logging
from charityconnect.database.database import get_db
from charityconnect.core.exceptions import InvalidInputError
from charityconnect.models.sms_log import SmsLog
from charityconnect.schemas.lookup import DonorProfileResponse, SearchResponse
from charityconnect.schemas.sms_log import SmsLogResponse
from charityconnect.services import donations as donation_service
from charityconnect.services.export import ExportFormat, export_records, to_csv
from charityconnect.services.search import SearchType, search

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/sms-logs", response_model=List[SmsLogResponse])
async def get_sms_logs(db: Session = Depends(get_db)):
    """Audit trail of every SMS attempt, newest first."""
    logs = db.query(SmsLog).order_by(SmsLog.created_at.desc()).all()
    return [SmsLogResponse.model_validate(log) for log in logs]


@router.get("/donors/{email}", response_model=DonorProfileResponse)
async def get_donor(email: str, db: Session = Depends(get_db)):
    """Look up a donor by email. Email and phone are masked in the response."""
    return donation_service.get_donor_profile(db, email)


@router.get("/search", response_model=SearchResponse)
async def search_records(
    q: str = Query("", description="Text to match"),
    type: SearchType = Query(SearchType.ALL),
    db: Session = Depends(get_db),
):
    return search(db, q, type)


@router.get("/export/{export_type}")
async def export_data(
    export_type: str,
    format: str = Query(ExportFormat.JSON.value),
    db: Session = Depends(get_db),
):
    """Export a full table as JSON (default) or CSV."""
    try:
        export_format = ExportFormat(format.lower())
    except ValueError:
        raise InvalidInputError(
            "Validation error",
            errors=[{"field": "format", "message": "Format must be 'json' or 'csv'"}],
        ) from None

    columns, records = export_records(db, export_type)
    if export_format == ExportFormat.CSV:
        return Response(
            content=to_csv(columns, records),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_type}.csv"'},
        )
    return JSONResponse(content=records)
