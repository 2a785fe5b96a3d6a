"""
Analytics aggregation.

``compute_analytics`` is a pure function of the rows it is given and the
reference time; ``get_analytics`` loads every table and calls it on each
request. Nothing is cached or maintained incrementally.
"""
import logging
from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from charityconnect.models.donation import ItemDonation, MonetaryDonation, MonetaryDonationStatus
from charityconnect.models.donor import Donor
from charityconnect.models.needy_person import NeedyPerson, NeedyStatus
from charityconnect.schemas.analytics import (
    AnalyticsSummary,
    CategoryCount,
    MonthlyTrendPoint,
    RegionCount,
)

logger = logging.getLogger(__name__)

TREND_MONTHS = 6
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def trailing_months(now: datetime, count: int = TREND_MONTHS) -> List[Tuple[int, int]]:
    """(year, month) pairs for the last ``count`` calendar months, oldest first."""
    months = []
    for offset in range(count - 1, -1, -1):
        index = now.year * 12 + (now.month - 1) - offset
        months.append((index // 12, index % 12 + 1))
    return months


def _as_utc(value: datetime) -> datetime:
    # Naive values are stored UTC; aware ones may arrive in the session time zone
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def _month_key(created_at: Optional[datetime]) -> Optional[Tuple[int, int]]:
    if created_at is None:
        return None
    created_at = _as_utc(created_at)
    return created_at.year, created_at.month


def _is_completed(donation) -> bool:
    return donation.status == MonetaryDonationStatus.COMPLETED.value


def _amount(donation) -> Decimal:
    return Decimal(str(donation.amount))


def _counts(values: Iterable[str]) -> List[Tuple[str, int]]:
    return list(Counter(values).items())


def compute_analytics(
    donors: Sequence,
    item_donations: Sequence,
    monetary_donations: Sequence,
    needy_persons: Sequence,
    now: Optional[datetime] = None,
) -> AnalyticsSummary:
    """Aggregate dashboard statistics from the full contents of each store."""
    now = _as_utc(now or datetime.now(timezone.utc))

    completed = [d for d in monetary_donations if _is_completed(d)]
    total_monetary = sum((_amount(d) for d in completed), Decimal("0"))

    monthly_trend = []
    for year, month in trailing_months(now):
        key = (year, month)
        month_items = [d for d in item_donations if _month_key(d.created_at) == key]
        month_money = [d for d in monetary_donations if _month_key(d.created_at) == key]
        month_amount = sum((_amount(d) for d in month_money if _is_completed(d)), Decimal("0"))
        monthly_trend.append(MonthlyTrendPoint(
            month=MONTH_NAMES[month - 1],
            count=len(month_items) + len(month_money),
            amount=float(month_amount),
        ))

    needs = (need for person in needy_persons for need in (person.needs or []))
    # Region counts donors, not donations
    cities = (donor.city for donor in donors if donor.city)

    return AnalyticsSummary(
        total_donations=len(item_donations) + len(monetary_donations),
        total_monetary_amount=float(total_monetary),
        total_item_donations=len(item_donations),
        people_helped=sum(1 for p in needy_persons if p.verified),
        active_cases=sum(1 for p in needy_persons if p.status == NeedyStatus.PENDING.value),
        monthly_trend=monthly_trend,
        donations_by_category=[
            CategoryCount(category=category, count=count)
            for category, count in _counts(d.category for d in item_donations)
        ],
        needs_by_category=[
            CategoryCount(category=category, count=count) for category, count in _counts(needs)
        ],
        donations_by_region=[
            RegionCount(region=region, count=count) for region, count in _counts(cities)
        ],
    )


def get_analytics(db: Session, now: Optional[datetime] = None) -> AnalyticsSummary:
    summary = compute_analytics(
        donors=db.query(Donor).all(),
        item_donations=db.query(ItemDonation).all(),
        monetary_donations=db.query(MonetaryDonation).all(),
        needy_persons=db.query(NeedyPerson).all(),
        now=now,
    )
    logger.debug(f"Analytics computed: {summary.total_donations} donations, {summary.people_helped} verified")
    return summary
