from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import (
    get_postback_service,
    get_reports_service,
    get_sales_service,
    get_summary_service,
)
from src.core.errors import StorageError
from src.main import create_app
from src.models.sales import (
    UNASSIGNED_ATTENDANT,
    UNDEFINED_CAMPAIGN,
    AttendantRecord,
    CampaignRecord,
    SaleRecord,
    SettingsRecord,
)
from src.services.postback_service import PostbackService
from src.services.reports_service import ReportsService
from src.services.sales_service import SalesService
from src.services.summary_service import SummaryService

FIXED_NOW = datetime(2024, 3, 15, 10, 0, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


class InMemorySalesRepository:
    def __init__(self) -> None:
        self.records: Dict[str, SaleRecord] = {}
        self.upsert_calls = 0

    def add(self, **fields: Any) -> SaleRecord:
        record = SaleRecord(**fields)
        self.records[record.transaction_id] = record
        return record

    def upsert(self, record: SaleRecord) -> SaleRecord:
        self.upsert_calls += 1
        self.records[record.transaction_id] = record
        return record

    def get(self, transaction_id: str) -> Optional[SaleRecord]:
        return self.records.get(transaction_id)

    def list_by_date_range(
        self, start: datetime, end: datetime, attendant_code: Optional[str] = None
    ) -> List[SaleRecord]:
        return [
            record
            for record in self.records.values()
            if record.activity_at is not None
            and start <= record.activity_at <= end
            and (attendant_code is None or record.attendant_code == attendant_code)
        ]

    def list_sales(
        self, attendant_code: Optional[str] = None, search: Optional[str] = None
    ) -> List[SaleRecord]:
        records = list(self.records.values())
        if attendant_code:
            records = [record for record in records if record.attendant_code == attendant_code]
        if search:
            term = search.lower()
            records = [
                record
                for record in records
                if term in (record.client_name or "").lower()
                or term in (record.client_email or "").lower()
                or term in record.transaction_id.lower()
            ]
        return records

    def update(self, transaction_id: str, payload: Dict[str, Any]) -> Optional[SaleRecord]:
        record = self.records.get(transaction_id)
        if record is None:
            return None
        updated = SaleRecord.model_validate({**record.model_dump(), **payload})
        self.records[transaction_id] = updated
        return updated


class StubAttendantsRepository:
    def __init__(self, records: List[AttendantRecord], fail: bool = False) -> None:
        self.records = {record.code: record for record in records}
        self.fail = fail
        self.lookups: List[str] = []

    def find_by_code(self, code: str) -> Optional[AttendantRecord]:
        if self.fail:
            raise StorageError("attendants table unavailable")
        normalized = code.strip().lower()
        self.lookups.append(normalized)
        if normalized == UNASSIGNED_ATTENDANT.code:
            return UNASSIGNED_ATTENDANT
        return self.records.get(normalized)

    def list_all(self) -> List[AttendantRecord]:
        return [UNASSIGNED_ATTENDANT] + list(self.records.values())


class StubCampaignsRepository:
    def __init__(self, records: List[CampaignRecord], fail: bool = False) -> None:
        self.records = {record.code: record for record in records}
        self.fail = fail

    def find_by_code(self, code: str) -> Optional[CampaignRecord]:
        if self.fail:
            raise StorageError("campaigns table unavailable")
        if code == UNDEFINED_CAMPAIGN.code:
            return UNDEFINED_CAMPAIGN
        return self.records.get(code)

    def list_all(self) -> List[CampaignRecord]:
        return [UNDEFINED_CAMPAIGN] + list(self.records.values())


class StubSettingsRepository:
    def __init__(self, monthly_investment: Decimal = Decimal("0")) -> None:
        self.record = SettingsRecord(user_name="Ana", monthly_investment=monthly_investment)

    def get(self) -> SettingsRecord:
        return self.record

    def get_monthly_investment(self) -> Decimal:
        return self.record.monthly_investment


@pytest.fixture()
def sales_repository() -> InMemorySalesRepository:
    return InMemorySalesRepository()


@pytest.fixture()
def attendants_repository() -> StubAttendantsRepository:
    return StubAttendantsRepository(
        [
            AttendantRecord(code="joao", name="João", monthly_cost=Decimal("200")),
            AttendantRecord(code="mari", name="Maria", monthly_cost=Decimal("150")),
            AttendantRecord(code="luci", name="Luciana", monthly_cost=Decimal("0")),
        ]
    )


@pytest.fixture()
def campaigns_repository() -> StubCampaignsRepository:
    return StubCampaignsRepository(
        [
            CampaignRecord(code="promo1", name="Promo Março", cost=Decimal("100")),
            CampaignRecord(code="blackfr", name="Black Friday", cost=Decimal("50")),
        ]
    )


@pytest.fixture()
def settings_repository() -> StubSettingsRepository:
    return StubSettingsRepository(monthly_investment=Decimal("200"))


@pytest.fixture()
def postback_service(sales_repository, attendants_repository, campaigns_repository) -> PostbackService:
    return PostbackService(
        sales_repository=sales_repository,
        attendants_repository=attendants_repository,
        campaigns_repository=campaigns_repository,
        clock=fixed_clock,
    )


@pytest.fixture()
def summary_service(sales_repository, attendants_repository, settings_repository) -> SummaryService:
    return SummaryService(
        sales_repository=sales_repository,
        attendants_repository=attendants_repository,
        settings_repository=settings_repository,
        clock=fixed_clock,
    )


@pytest.fixture()
def reports_service(sales_repository, attendants_repository, campaigns_repository) -> ReportsService:
    return ReportsService(
        sales_repository=sales_repository,
        attendants_repository=attendants_repository,
        campaigns_repository=campaigns_repository,
        clock=fixed_clock,
    )


@pytest.fixture()
def sales_service(sales_repository, attendants_repository) -> SalesService:
    return SalesService(
        sales_repository=sales_repository,
        attendants_repository=attendants_repository,
        clock=fixed_clock,
    )


@pytest.fixture()
def client(postback_service, summary_service, reports_service, sales_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_postback_service] = lambda: postback_service
    app.dependency_overrides[get_summary_service] = lambda: summary_service
    app.dependency_overrides[get_reports_service] = lambda: reports_service
    app.dependency_overrides[get_sales_service] = lambda: sales_service
    return TestClient(app)
