from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from src.shared.base import BaseSchema


class ReportFilters(BaseSchema):
    period: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class AttendantRankingRow(BaseSchema):
    rank: int
    attendant_code: str
    attendant_name: str
    paid_total_cents: int
    paid_total: float
    scheduled_count: int
    failed_count: int


class AttendantRankingResponse(BaseSchema):
    period_start: datetime
    period_end: datetime
    time_window: str
    rankings: List[AttendantRankingRow]


class CampaignReportRow(BaseSchema):
    rank: int
    campaign_code: str
    campaign_name: str
    paid_count: int
    revenue: float
    cost: float
    profit: float
    roi: float


class CampaignReportResponse(BaseSchema):
    period_start: datetime
    period_end: datetime
    time_window: str
    campaigns: List[CampaignReportRow]
