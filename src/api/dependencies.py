from __future__ import annotations

from functools import lru_cache

from src.repositories.registry_repository import (
    AttendantsRepository,
    CampaignsRepository,
    SettingsRepository,
)
from src.repositories.sales_repository import SalesRepository
from src.services.postback_service import PostbackService
from src.services.reports_service import ReportsService
from src.services.sales_service import SalesService
from src.services.summary_service import SummaryService


@lru_cache
def get_sales_repository() -> SalesRepository:
    return SalesRepository()


@lru_cache
def get_attendants_repository() -> AttendantsRepository:
    return AttendantsRepository()


@lru_cache
def get_campaigns_repository() -> CampaignsRepository:
    return CampaignsRepository()


@lru_cache
def get_settings_repository() -> SettingsRepository:
    return SettingsRepository()


def get_postback_service() -> PostbackService:
    return PostbackService(
        sales_repository=get_sales_repository(),
        attendants_repository=get_attendants_repository(),
        campaigns_repository=get_campaigns_repository(),
    )


def get_summary_service() -> SummaryService:
    return SummaryService(
        sales_repository=get_sales_repository(),
        attendants_repository=get_attendants_repository(),
        settings_repository=get_settings_repository(),
    )


def get_reports_service() -> ReportsService:
    return ReportsService(
        sales_repository=get_sales_repository(),
        attendants_repository=get_attendants_repository(),
        campaigns_repository=get_campaigns_repository(),
    )


def get_sales_service() -> SalesService:
    return SalesService(
        sales_repository=get_sales_repository(),
        attendants_repository=get_attendants_repository(),
    )
