from __future__ import annotations

from math import ceil
from typing import Generic, Optional, Sequence, TypeVar

from src.shared.base import BaseSchema
from src.shared.time import local_now


T = TypeVar("T")

CALCULATION_VERSION = "v1"
REPORT_CURRENCY = "BRL"


class Pagination(BaseSchema):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str = CALCULATION_VERSION
    currency: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    pagination: Optional[Pagination] = None
    meta: Optional[Meta] = None


def build_meta(source: str, time_window: str = "now", currency: Optional[str] = None) -> Meta:
    return Meta(
        as_of_date=local_now().date().isoformat(),
        source=source,
        time_window=time_window,
        currency=currency,
    )


def build_pagination(page: int, page_size: int, total_items: int) -> Pagination:
    total_pages = ceil(total_items / page_size) if page_size else 0
    return Pagination(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


def paginate_list(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], Pagination]:
    pagination = build_pagination(page, page_size, len(items))
    start_index = (page - 1) * page_size
    return list(items[start_index : start_index + page_size]), pagination
