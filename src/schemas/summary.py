from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from src.shared.base import BaseSchema


class SummaryFilters(BaseSchema):
    period: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    attendant: Optional[str] = None


class SalesSummary(BaseSchema):
    scheduled_total: float
    paid_total: float
    receivable_total: float
    failed_total: float
    direct_sales_total: float
    investment_total: float
    profit: float
    roi: float
    funnel_chart: List[float]
    composition_chart: List[float]


class SummaryResponse(BaseSchema):
    period_start: datetime
    period_end: datetime
    time_window: str
    attendant_code: Optional[str] = None
    summary: SalesSummary
