import enum
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from charityconnect.core.exceptions import InvalidInputError
from charityconnect.models.donation import ItemDonation, MonetaryDonation
from charityconnect.models.donor import Donor
from charityconnect.models.needy_person import NeedyPerson
from charityconnect.schemas.donation import ItemDonationResponse, MonetaryDonationResponse
from charityconnect.schemas.donor import DonorResponse
from charityconnect.schemas.lookup import SearchResponse
from charityconnect.schemas.needy_person import NeedyPersonResponse

logger = logging.getLogger(__name__)

MAX_RESULTS = 50


class SearchType(str, enum.Enum):
    ALL = "all"
    DONORS = "donors"
    NEEDY = "needy"
    DONATIONS = "donations"


def _like(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search(db: Session, query: str, search_type: SearchType = SearchType.ALL) -> SearchResponse:
    """Case-insensitive substring search across donors, needy persons and donations."""
    term = (query or "").strip()
    if not term:
        raise InvalidInputError(
            "Validation error", errors=[{"field": "q", "message": "Search query is required"}]
        )
    pattern = _like(term)
    result = SearchResponse(query=term, type=search_type.value)

    if search_type in (SearchType.ALL, SearchType.DONORS):
        donors = db.query(Donor).filter(or_(
            Donor.name.ilike(pattern, escape="\\"),
            Donor.email.ilike(pattern, escape="\\"),
            Donor.city.ilike(pattern, escape="\\"),
        )).order_by(Donor.created_at.desc()).limit(MAX_RESULTS).all()
        result.donors = [DonorResponse.model_validate(d) for d in donors]

    if search_type in (SearchType.ALL, SearchType.NEEDY):
        persons = db.query(NeedyPerson).filter(or_(
            NeedyPerson.name.ilike(pattern, escape="\\"),
            NeedyPerson.city.ilike(pattern, escape="\\"),
            NeedyPerson.situation.ilike(pattern, escape="\\"),
        )).order_by(NeedyPerson.created_at.desc()).limit(MAX_RESULTS).all()
        result.needy_persons = [NeedyPersonResponse.model_validate(p) for p in persons]

    if search_type in (SearchType.ALL, SearchType.DONATIONS):
        items = db.query(ItemDonation).filter(or_(
            ItemDonation.category.ilike(pattern, escape="\\"),
            ItemDonation.description.ilike(pattern, escape="\\"),
        )).order_by(ItemDonation.created_at.desc()).limit(MAX_RESULTS).all()
        money = db.query(MonetaryDonation).filter(
            MonetaryDonation.purpose.ilike(pattern, escape="\\")
        ).order_by(MonetaryDonation.created_at.desc()).limit(MAX_RESULTS).all()
        result.donations = (
            [ItemDonationResponse.model_validate(d) for d in items]
            + [MonetaryDonationResponse.model_validate(d) for d in money]
        )

    result.total = len(result.donors) + len(result.needy_persons) + len(result.donations)
    logger.info(f"Search '{term}' ({search_type.value}) matched {result.total} records")
    return result
