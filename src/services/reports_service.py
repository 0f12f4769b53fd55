from __future__ import annotations

from datetime import datetime
from typing import Callable

from src.analytics.sales_summary import rank_attendants, rank_campaigns
from src.repositories.registry_repository import AttendantsRepository, CampaignsRepository
from src.repositories.sales_repository import SalesRepository
from src.schemas.reports import (
    AttendantRankingResponse,
    CampaignReportResponse,
    ReportFilters,
)
from src.shared.time import DateRange, local_now, resolve_report_window


class ReportsService:
    def __init__(
        self,
        sales_repository: SalesRepository,
        attendants_repository: AttendantsRepository,
        campaigns_repository: CampaignsRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.sales_repository = sales_repository
        self.attendants_repository = attendants_repository
        self.campaigns_repository = campaigns_repository
        self.clock = clock

    def _resolve_window(self, filters: ReportFilters) -> DateRange:
        return resolve_report_window(
            filters.period, filters.start_date, filters.end_date, now=self.clock()
        )

    def build_attendant_ranking(self, filters: ReportFilters) -> AttendantRankingResponse:
        window = self._resolve_window(filters)
        sales = self.sales_repository.list_by_date_range(window.start, window.end)
        attendants = {attendant.code: attendant for attendant in self.attendants_repository.list_all()}
        return AttendantRankingResponse(
            period_start=window.start,
            period_end=window.end,
            time_window=window.label,
            rankings=rank_attendants(sales, attendants),
        )

    def build_campaign_report(self, filters: ReportFilters) -> CampaignReportResponse:
        window = self._resolve_window(filters)
        sales = self.sales_repository.list_by_date_range(window.start, window.end)
        campaigns = self.campaigns_repository.list_all()
        return CampaignReportResponse(
            period_start=window.start,
            period_end=window.end,
            time_window=window.label,
            campaigns=rank_campaigns(sales, campaigns),
        )
