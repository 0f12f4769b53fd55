from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from src.analytics.attribution import normalize_code
from src.core.config import get_settings
from src.core.supabase import SupabaseClient
from src.models.sales import (
    UNASSIGNED_ATTENDANT,
    UNDEFINED_CAMPAIGN,
    AttendantRecord,
    CampaignRecord,
    SettingsRecord,
)
from src.shared.money import to_decimal

SETTINGS_ROW_ID = 1


class AttendantsRepository:
    def __init__(self, client: Optional[SupabaseClient] = None) -> None:
        self.client = client or SupabaseClient()
        self.table = get_settings().attendants_table

    def find_by_code(self, code: str) -> Optional[AttendantRecord]:
        normalized = normalize_code(code)
        if not normalized:
            return None
        if normalized == UNASSIGNED_ATTENDANT.code:
            return UNASSIGNED_ATTENDANT
        rows, _ = self.client.select(
            table=self.table,
            select="code,name,monthly_cost",
            filters=[("code", f"eq.{normalized}")],
            limit=1,
        )
        if not rows:
            return None
        return self._to_record(rows[0])

    def list_all(self) -> List[AttendantRecord]:
        rows, _ = self.client.select(
            table=self.table,
            select="code,name,monthly_cost",
            order="name.asc",
        )
        records = [self._to_record(row) for row in rows if row.get("code") and row.get("name")]
        return [UNASSIGNED_ATTENDANT] + [
            record for record in records if record.code != UNASSIGNED_ATTENDANT.code
        ]

    @staticmethod
    def _to_record(row: dict) -> AttendantRecord:
        return AttendantRecord(
            code=normalize_code(row.get("code")) or "",
            name=str(row.get("name") or "").strip(),
            monthly_cost=to_decimal(row.get("monthly_cost")),
        )


class CampaignsRepository:
    def __init__(self, client: Optional[SupabaseClient] = None) -> None:
        self.client = client or SupabaseClient()
        self.table = get_settings().campaigns_table

    def find_by_code(self, code: str) -> Optional[CampaignRecord]:
        normalized = normalize_code(code)
        if not normalized:
            return None
        if normalized == UNDEFINED_CAMPAIGN.code:
            return UNDEFINED_CAMPAIGN
        rows, _ = self.client.select(
            table=self.table,
            select="code,name,cost",
            filters=[("code", f"eq.{normalized}")],
            limit=1,
        )
        if not rows:
            return None
        return self._to_record(rows[0])

    def list_all(self) -> List[CampaignRecord]:
        rows, _ = self.client.select(
            table=self.table,
            select="code,name,cost",
            order="name.asc",
        )
        records = [self._to_record(row) for row in rows if row.get("code") and row.get("name")]
        return [UNDEFINED_CAMPAIGN] + [
            record for record in records if record.code != UNDEFINED_CAMPAIGN.code
        ]

    @staticmethod
    def _to_record(row: dict) -> CampaignRecord:
        return CampaignRecord(
            code=normalize_code(row.get("code")) or "",
            name=str(row.get("name") or "").strip(),
            cost=to_decimal(row.get("cost")),
        )


class SettingsRepository:
    def __init__(self, client: Optional[SupabaseClient] = None) -> None:
        self.client = client or SupabaseClient()
        self.table = get_settings().settings_table

    def get(self) -> SettingsRecord:
        rows, _ = self.client.select(
            table=self.table,
            select="user_name,user_email,monthly_investment",
            filters=[("id", f"eq.{SETTINGS_ROW_ID}")],
            limit=1,
        )
        if not rows:
            return SettingsRecord()
        row = rows[0]
        return SettingsRecord(
            user_name=str(row.get("user_name") or ""),
            user_email=str(row.get("user_email") or ""),
            monthly_investment=to_decimal(row.get("monthly_investment")),
        )

    def get_monthly_investment(self) -> Decimal:
        return self.get().monthly_investment
