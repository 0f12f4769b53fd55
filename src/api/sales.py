from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_sales_service
from src.schemas.sales import (
    SaleAttendantAssignRequest,
    SaleDetail,
    SaleListFilters,
    SaleStatusUpdateRequest,
)
from src.services.sales_service import SalesService
from src.shared.response import REPORT_CURRENCY, Meta, ResponseEnvelope, build_meta, paginate_list

router = APIRouter(prefix="/sales", tags=["sales"])


def get_sale_list_filters(
    status: Optional[str] = Query(default=None),
    attendant: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
) -> SaleListFilters:
    return SaleListFilters(status=status, attendant=attendant, search=search)


def _build_meta(time_window: str = "all") -> Meta:
    return build_meta("sales", time_window, currency=REPORT_CURRENCY)


@router.get("")
def list_sales(
    filters: SaleListFilters = Depends(get_sale_list_filters),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=100, ge=1, le=1000),
    service: SalesService = Depends(get_sales_service),
) -> ResponseEnvelope[List[SaleDetail]]:
    data = service.list_sales(filters)
    paged_data, pagination = paginate_list(data, page, page_size)
    return ResponseEnvelope(data=paged_data, pagination=pagination, meta=_build_meta())


@router.patch("/{transaction_id}/status")
def update_sale_status(
    transaction_id: str,
    request: SaleStatusUpdateRequest,
    service: SalesService = Depends(get_sales_service),
) -> ResponseEnvelope[SaleDetail]:
    data = service.update_status(transaction_id, request.status)
    return ResponseEnvelope(data=data, pagination=None, meta=_build_meta("now"))


@router.patch("/{transaction_id}/attendant")
def assign_sale_attendant(
    transaction_id: str,
    request: SaleAttendantAssignRequest,
    service: SalesService = Depends(get_sales_service),
) -> ResponseEnvelope[SaleDetail]:
    data = service.assign_attendant(transaction_id, request.attendant_code)
    return ResponseEnvelope(data=data, pagination=None, meta=_build_meta("now"))
