from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from charityconnect.database.database import get_db
from charityconnect.schemas.analytics import AnalyticsSummary
from charityconnect.services.analytics import get_analytics

router = APIRouter()


@router.get("", response_model=AnalyticsSummary)
async def read_analytics(response: Response, db: Session = Depends(get_db)):
    """Dashboard statistics, recomputed from every table on each call."""
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    return get_analytics(db)
