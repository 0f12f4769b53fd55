from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from src.core.config import get_settings
from src.core.supabase import SupabaseClient
from src.models.sales import SaleRecord

SALE_COLUMNS = (
    "transaction_id,status_code,status_text,client_email,client_name,client_document,"
    "client_phone,product_name,total_value_cents,created_at,updated_at,attendant_code,"
    "attendant_name,campaign_code,campaign_name,raw_payload"
)
SEARCH_COLUMNS = ("client_email", "client_name", "client_document", "transaction_id", "product_name")


def _search_term(value: str) -> str:
    # Quoted PostgREST values cannot carry quotes or backslashes.
    return value.replace('"', "").replace("\\", "").strip()


class SalesRepository:
    def __init__(self, client: Optional[SupabaseClient] = None) -> None:
        self.client = client or SupabaseClient()
        self.table = get_settings().sales_table

    def upsert(self, record: SaleRecord) -> SaleRecord:
        rows = self.client.insert(
            table=self.table,
            payload=record.model_dump(mode="json"),
            upsert=True,
            on_conflict="transaction_id",
        )
        if not rows:
            return record
        return SaleRecord.model_validate(rows[0])

    def get(self, transaction_id: str) -> Optional[SaleRecord]:
        rows, _ = self.client.select(
            table=self.table,
            select=SALE_COLUMNS,
            filters=[("transaction_id", f"eq.{transaction_id}")],
            limit=1,
        )
        if not rows:
            return None
        return SaleRecord.model_validate(rows[0])

    def list_by_date_range(
        self,
        start: datetime,
        end: datetime,
        attendant_code: Optional[str] = None,
    ) -> List[SaleRecord]:
        start_iso = start.isoformat()
        end_iso = end.isoformat()
        # Window applies to updated_at, falling back to created_at when it is null.
        filters: List[Tuple[str, str]] = [
            (
                "or",
                f"(and(updated_at.gte.{start_iso},updated_at.lte.{end_iso}),"
                f"and(updated_at.is.null,created_at.gte.{start_iso},created_at.lte.{end_iso}))",
            )
        ]
        if attendant_code:
            filters.append(("attendant_code", f"eq.{attendant_code}"))
        rows = self.client.select_all(
            table=self.table,
            select=SALE_COLUMNS,
            filters=filters,
            order="transaction_id.asc",
        )
        return [SaleRecord.model_validate(row) for row in rows]

    def list_sales(
        self,
        attendant_code: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[SaleRecord]:
        filters: List[Tuple[str, str]] = []
        if attendant_code:
            filters.append(("attendant_code", f"eq.{attendant_code}"))
        term = _search_term(search) if search else ""
        if term:
            conditions = ",".join(f'{column}.ilike."*{term}*"' for column in SEARCH_COLUMNS)
            filters.append(("or", f"({conditions})"))
        rows = self.client.select_all(
            table=self.table,
            select=SALE_COLUMNS,
            filters=filters,
            order="created_at.desc.nullslast,transaction_id.asc",
        )
        return [SaleRecord.model_validate(row) for row in rows]

    def update(self, transaction_id: str, payload: Dict[str, Any]) -> Optional[SaleRecord]:
        rows = self.client.update(
            table=self.table,
            payload=payload,
            filters=[("transaction_id", f"eq.{transaction_id}")],
        )
        if not rows:
            return None
        return SaleRecord.model_validate(rows[0])
