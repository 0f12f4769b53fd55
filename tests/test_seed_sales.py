from __future__ import annotations

from datetime import datetime

from scripts.seed_sales import build_seed_sales
from src.analytics.status import classify_status
from src.models.sales import StatusClass
from src.shared.time import resolve_date_range


def test_seed_sales_cover_each_period():
    now = datetime(2024, 3, 15, 18, 0, 0)
    sales = list(build_seed_sales(now))
    assert len(sales) == 20
    assert len({sale.transaction_id for sale in sales}) == 20

    today = resolve_date_range(period="today", now=now)
    today_ids = {sale.transaction_id for sale in sales if today.start <= sale.updated_at <= today.end}
    assert today_ids == {f"today-0{index}" for index in range(1, 6)}

    last_month = resolve_date_range(period="last_month", now=now)
    assert sum(last_month.start <= sale.updated_at <= last_month.end for sale in sales) == 5


def test_seed_sales_use_known_statuses():
    sales = list(build_seed_sales(datetime(2024, 3, 15, 18, 0, 0)))
    assert all(classify_status(sale.status_text, sale.status_code) != StatusClass.UNKNOWN for sale in sales)
    unassigned = [sale for sale in sales if sale.transaction_id == "today-04"][0]
    assert unassigned.attendant_code == "nao_definido"
