from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from src.analytics.attribution import is_valid_attendant_code, normalize_code
from src.analytics.status import classify_status, parse_status_class
from src.core.errors import NotFoundError, ValidationError
from src.models.sales import UNASSIGNED_ATTENDANT, UNASSIGNED_ATTENDANT_NAME, SaleRecord
from src.repositories.registry_repository import AttendantsRepository
from src.repositories.sales_repository import SalesRepository
from src.schemas.sales import SaleDetail, SaleListFilters
from src.shared.money import cents_to_amount, currency_float, format_brl
from src.shared.time import local_now

MANUAL_STATUS_MAP: Dict[str, Tuple[int, str]] = {
    "pago": (3, "Pago"),
    "frustrado": (5, "Frustrado"),
}


def build_sale_detail(record: SaleRecord) -> SaleDetail:
    value_amount = None
    if record.total_value_cents is not None:
        value_amount = currency_float(cents_to_amount(record.total_value_cents))
    return SaleDetail(
        transaction_id=record.transaction_id,
        status_code=record.status_code,
        status_text=record.status_text,
        status_class=classify_status(record.status_text, record.status_code),
        client_email=record.client_email,
        client_name=record.client_name,
        client_document=record.client_document,
        client_phone=record.client_phone,
        product_name=record.product_name,
        total_value_cents=record.total_value_cents,
        value_amount=value_amount,
        formatted_value=format_brl(record.total_value_cents),
        created_at=record.created_at,
        updated_at=record.updated_at,
        formatted_date=record.created_at.strftime("%d/%m/%Y") if record.created_at else None,
        attendant_code=record.attendant_code,
        attendant_name=record.attendant_name or UNASSIGNED_ATTENDANT_NAME,
        campaign_code=record.campaign_code,
        campaign_name=record.campaign_name,
    )


def matches_status(sale: SaleDetail, status: str) -> bool:
    normalized = status.strip().lower()
    if not normalized:
        return True
    if parse_status_class(normalized) == sale.status_class:
        return True
    if normalized in (sale.status_text or "").lower():
        return True
    return sale.status_code is not None and str(sale.status_code) == normalized


class SalesService:
    def __init__(
        self,
        sales_repository: SalesRepository,
        attendants_repository: AttendantsRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.sales_repository = sales_repository
        self.attendants_repository = attendants_repository
        self.clock = clock

    def list_sales(self, filters: SaleListFilters) -> List[SaleDetail]:
        records = self.sales_repository.list_sales(
            attendant_code=normalize_code(filters.attendant),
            search=filters.search.strip() if filters.search else None,
        )
        sales = [build_sale_detail(record) for record in records]
        if filters.status:
            sales = [sale for sale in sales if matches_status(sale, filters.status)]
        return sales

    def update_status(self, transaction_id: str, status: Optional[str]) -> SaleDetail:
        normalized_status = status.strip().lower() if isinstance(status, str) else ""
        status_info = MANUAL_STATUS_MAP.get(normalized_status)
        if status_info is None:
            raise ValidationError('status must be either "pago" or "frustrado".')
        status_code, status_text = status_info
        updated = self.sales_repository.update(
            transaction_id,
            {
                "status_code": status_code,
                "status_text": status_text,
                "updated_at": self.clock().isoformat(),
            },
        )
        if updated is None:
            raise NotFoundError("Sale not found.")
        return build_sale_detail(updated)

    def assign_attendant(self, transaction_id: str, attendant_code: Optional[str]) -> SaleDetail:
        normalized_code = normalize_code(attendant_code)
        if not normalized_code:
            raise ValidationError("A valid attendant code is required.")
        if normalized_code == UNASSIGNED_ATTENDANT.code:
            attendant = UNASSIGNED_ATTENDANT
        else:
            if not is_valid_attendant_code(normalized_code):
                raise ValidationError("A valid 4-character code is required.")
            found = self.attendants_repository.find_by_code(normalized_code)
            if found is None:
                raise NotFoundError("Attendant not found.")
            attendant = found
        updated = self.sales_repository.update(
            transaction_id,
            {"attendant_code": attendant.code, "attendant_name": attendant.name},
        )
        if updated is None:
            raise NotFoundError("Sale not found.")
        return build_sale_detail(updated)
