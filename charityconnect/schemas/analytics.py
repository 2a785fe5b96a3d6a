from typing import List

from charityconnect.schemas.common import CamelModel


class MonthlyTrendPoint(CamelModel):
    month: str
    count: int
    amount: float


class CategoryCount(CamelModel):
    category: str
    count: int


class RegionCount(CamelModel):
    region: str
    count: int


class AnalyticsSummary(CamelModel):
    total_donations: int
    total_monetary_amount: float
    total_item_donations: int
    # Counts verified records, not status == "helped"
    people_helped: int
    active_cases: int
    monthly_trend: List[MonthlyTrendPoint]
    donations_by_category: List[CategoryCount]
    needs_by_category: List[CategoryCount]
    donations_by_region: List[RegionCount]
