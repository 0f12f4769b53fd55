from __future__ import annotations

from datetime import datetime

from src.shared import response
from src.shared.response import build_meta, paginate_list


def test_meta_date_follows_report_clock(monkeypatch):
    # 23:30 in the report zone can already be the next day on a UTC host.
    monkeypatch.setattr(response, "local_now", lambda: datetime(2024, 3, 15, 23, 30, 0))
    meta = build_meta("sales", "today", currency="BRL")
    assert meta.as_of_date == "2024-03-15"
    assert meta.calculation_version == "v1"
    assert meta.model_dump(by_alias=True)["asOfDate"] == "2024-03-15"


def test_paginate_list_slices_pages():
    items, pagination = paginate_list(list(range(5)), page=2, page_size=2)
    assert items == [2, 3]
    assert pagination.total_pages == 3
    assert pagination.total_items == 5
