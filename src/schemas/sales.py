from __future__ import annotations

from datetime import datetime
from typing import Optional

from src.models.sales import StatusClass
from src.shared.base import BaseSchema


class SaleDetail(BaseSchema):
    transaction_id: str
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    status_class: StatusClass
    client_email: Optional[str] = None
    client_name: Optional[str] = None
    client_document: Optional[str] = None
    client_phone: Optional[str] = None
    product_name: Optional[str] = None
    total_value_cents: Optional[int] = None
    value_amount: Optional[float] = None
    formatted_value: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    formatted_date: Optional[str] = None
    attendant_code: str
    attendant_name: str
    campaign_code: str
    campaign_name: Optional[str] = None


class SaleListFilters(BaseSchema):
    status: Optional[str] = None
    attendant: Optional[str] = None
    search: Optional[str] = None


class SaleStatusUpdateRequest(BaseSchema):
    status: Optional[str] = None


class SaleAttendantAssignRequest(BaseSchema):
    attendant_code: Optional[str] = None


class PostbackAcknowledgement(BaseSchema):
    message: str
    sale: SaleDetail


class PostbackUrl(BaseSchema):
    url: str
