from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_summary_service
from src.schemas.summary import SummaryFilters, SummaryResponse
from src.services.summary_service import SummaryService
from src.shared.response import REPORT_CURRENCY, ResponseEnvelope, build_meta

router = APIRouter(prefix="/summary", tags=["summary"])


def get_summary_filters(
    period: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    attendant: Optional[str] = Query(default=None),
) -> SummaryFilters:
    return SummaryFilters(
        period=period,
        start_date=start_date,
        end_date=end_date,
        attendant=attendant,
    )


@router.get("")
def sales_summary(
    filters: SummaryFilters = Depends(get_summary_filters),
    service: SummaryService = Depends(get_summary_service),
) -> ResponseEnvelope[SummaryResponse]:
    data = service.build_summary(filters)
    meta = build_meta("sales,attendants,settings", data.time_window, currency=REPORT_CURRENCY)
    return ResponseEnvelope(data=data, pagination=None, meta=meta)
