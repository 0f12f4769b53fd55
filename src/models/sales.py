from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

UNASSIGNED_ATTENDANT_CODE = "nao_definido"
UNASSIGNED_ATTENDANT_NAME = "Não Definido"
UNDEFINED_CAMPAIGN_CODE = "nao_definida"
UNDEFINED_CAMPAIGN_NAME = "Não Definida"


class StatusClass(str, Enum):
    SCHEDULED = "scheduled"
    PAID = "paid"
    FAILED = "failed"
    IN_COLLECTION = "in_collection"
    UNKNOWN = "unknown"


class SaleRecord(BaseModel):
    transaction_id: str
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    client_email: Optional[str] = None
    client_name: Optional[str] = None
    client_document: Optional[str] = None
    client_phone: Optional[str] = None
    product_name: Optional[str] = None
    total_value_cents: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    attendant_code: str = UNASSIGNED_ATTENDANT_CODE
    attendant_name: Optional[str] = None
    campaign_code: str = UNDEFINED_CAMPAIGN_CODE
    campaign_name: Optional[str] = None
    raw_payload: Optional[Dict[str, Any]] = Field(default_factory=dict)

    @field_validator("attendant_code", mode="before")
    @classmethod
    def _default_attendant_code(cls, value: object) -> object:
        return value or UNASSIGNED_ATTENDANT_CODE

    @field_validator("campaign_code", mode="before")
    @classmethod
    def _default_campaign_code(cls, value: object) -> object:
        return value or UNDEFINED_CAMPAIGN_CODE

    @property
    def activity_at(self) -> Optional[datetime]:
        return self.updated_at or self.created_at


class AttendantRecord(BaseModel):
    code: str
    name: str
    monthly_cost: Decimal = Decimal("0")


class CampaignRecord(BaseModel):
    code: str
    name: str
    cost: Decimal = Decimal("0")


class SettingsRecord(BaseModel):
    user_name: str = ""
    user_email: str = ""
    monthly_investment: Decimal = Decimal("0")


UNASSIGNED_ATTENDANT = AttendantRecord(code=UNASSIGNED_ATTENDANT_CODE, name=UNASSIGNED_ATTENDANT_NAME)
UNDEFINED_CAMPAIGN = CampaignRecord(code=UNDEFINED_CAMPAIGN_CODE, name=UNDEFINED_CAMPAIGN_NAME)
