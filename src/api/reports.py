from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_reports_service
from src.schemas.reports import AttendantRankingResponse, CampaignReportResponse, ReportFilters
from src.services.reports_service import ReportsService
from src.shared.response import REPORT_CURRENCY, Meta, ResponseEnvelope, build_meta

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_filters(
    period: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> ReportFilters:
    return ReportFilters(period=period, start_date=start_date, end_date=end_date)


def _build_meta(source: str, time_window: str) -> Meta:
    return build_meta(source, time_window, currency=REPORT_CURRENCY)


@router.get("/attendants")
def attendants_report(
    filters: ReportFilters = Depends(get_report_filters),
    service: ReportsService = Depends(get_reports_service),
) -> ResponseEnvelope[AttendantRankingResponse]:
    data = service.build_attendant_ranking(filters)
    return ResponseEnvelope(
        data=data, pagination=None, meta=_build_meta("sales,attendants", data.time_window)
    )


@router.get("/campaigns")
def campaigns_report(
    filters: ReportFilters = Depends(get_report_filters),
    service: ReportsService = Depends(get_reports_service),
) -> ResponseEnvelope[CampaignReportResponse]:
    data = service.build_campaign_report(filters)
    return ResponseEnvelope(
        data=data, pagination=None, meta=_build_meta("sales,campaigns", data.time_window)
    )
