from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from src.analytics.attribution import normalize_code
from src.analytics.sales_summary import compute_summary
from src.models.sales import UNASSIGNED_ATTENDANT_CODE
from src.repositories.registry_repository import AttendantsRepository, SettingsRepository
from src.repositories.sales_repository import SalesRepository
from src.schemas.summary import SummaryFilters, SummaryResponse
from src.shared.time import local_now, resolve_report_window

ALL_ATTENDANTS_VALUES = frozenset({"todos", "all"})


def scoped_attendant_code(value: Optional[str]) -> Optional[str]:
    normalized = normalize_code(value)
    if not normalized or normalized in ALL_ATTENDANTS_VALUES:
        return None
    return normalized


class SummaryService:
    def __init__(
        self,
        sales_repository: SalesRepository,
        attendants_repository: AttendantsRepository,
        settings_repository: SettingsRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.sales_repository = sales_repository
        self.attendants_repository = attendants_repository
        self.settings_repository = settings_repository
        self.clock = clock

    def build_summary(self, filters: SummaryFilters) -> SummaryResponse:
        window = resolve_report_window(
            filters.period, filters.start_date, filters.end_date, now=self.clock()
        )
        attendant_code = scoped_attendant_code(filters.attendant)
        sales = self.sales_repository.list_by_date_range(window.start, window.end, attendant_code)
        summary = compute_summary(sales, self._cost_baseline(attendant_code))
        return SummaryResponse(
            period_start=window.start,
            period_end=window.end,
            time_window=window.label,
            attendant_code=attendant_code,
            summary=summary,
        )

    def _cost_baseline(self, attendant_code: Optional[str]) -> Decimal:
        if attendant_code and attendant_code != UNASSIGNED_ATTENDANT_CODE:
            attendant = self.attendants_repository.find_by_code(attendant_code)
            return attendant.monthly_cost if attendant else Decimal("0")
        return self.settings_repository.get_monthly_investment()
