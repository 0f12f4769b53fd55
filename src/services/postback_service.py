from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional
from zoneinfo import ZoneInfo

from src.analytics.attribution import build_candidate_codes, parse_contact_metadata, resolve_attendant
from src.core.config import get_settings
from src.core.errors import MissingTransactionIdError, StorageError
from src.models.sales import UNASSIGNED_ATTENDANT, AttendantRecord, SaleRecord
from src.repositories.registry_repository import AttendantsRepository, CampaignsRepository
from src.repositories.sales_repository import SalesRepository
from src.schemas.sales import SaleDetail
from src.services.sales_service import build_sale_detail
from src.shared.time import local_now

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        numeric = float(str(value).strip())
    except ValueError:
        return None
    if not numeric.is_integer():
        return None
    return int(numeric)


def _optional_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(get_settings().report_timezone)).replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def get_postback_url(base_url: str) -> str:
    settings = get_settings()
    if settings.postback_url:
        return settings.postback_url
    return f"{base_url.rstrip('/')}{settings.api_prefix}/postback"


class PostbackService:
    def __init__(
        self,
        sales_repository: SalesRepository,
        attendants_repository: AttendantsRepository,
        campaigns_repository: CampaignsRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.sales_repository = sales_repository
        self.attendants_repository = attendants_repository
        self.campaigns_repository = campaigns_repository
        self.clock = clock

    def ingest(self, payload: Mapping[str, Any]) -> SaleDetail:
        transaction_id = _optional_text(payload.get("transaction_id"))
        if not transaction_id:
            raise MissingTransactionIdError()

        now = self.clock()
        client_email = _optional_text(payload.get("client_email"))
        metadata = parse_contact_metadata(client_email)
        attendant = self._resolve_attendant(transaction_id, client_email)
        campaign_name = self._resolve_campaign_name(transaction_id, metadata.campaign_code)

        record = SaleRecord(
            transaction_id=transaction_id,
            status_code=_optional_int(payload.get("status_code")),
            status_text=_optional_text(payload.get("status_text")),
            client_email=client_email,
            client_name=_optional_text(payload.get("client_name")),
            client_document=_optional_text(
                payload.get("client_document", payload.get("client_cpf"))
            ),
            client_phone=_optional_text(payload.get("client_phone")),
            product_name=_optional_text(payload.get("product_name")),
            total_value_cents=_optional_int(payload.get("total_value_cents")),
            created_at=_optional_timestamp(payload.get("created_at")) or now,
            updated_at=_optional_timestamp(payload.get("updated_at")) or now,
            attendant_code=attendant.code,
            attendant_name=attendant.name,
            campaign_code=metadata.campaign_code,
            campaign_name=campaign_name,
            raw_payload=dict(payload),
        )

        try:
            stored = self.sales_repository.upsert(record)
        except StorageError:
            logger.exception("failed to store sale", extra={"transaction_id": transaction_id})
            raise
        logger.info(
            "sale stored",
            extra={
                "transaction_id": transaction_id,
                "attendant_code": stored.attendant_code,
                "campaign_code": stored.campaign_code,
            },
        )
        return build_sale_detail(stored)

    def _resolve_attendant(self, transaction_id: str, client_email: Optional[str]) -> AttendantRecord:
        candidates = build_candidate_codes(client_email)
        try:
            attendant = resolve_attendant(candidates, self.attendants_repository.find_by_code)
        except StorageError:
            logger.exception(
                "failed to resolve attendant from email", extra={"transaction_id": transaction_id}
            )
            return UNASSIGNED_ATTENDANT
        return attendant or UNASSIGNED_ATTENDANT

    def _resolve_campaign_name(self, transaction_id: str, campaign_code: str) -> Optional[str]:
        try:
            campaign = self.campaigns_repository.find_by_code(campaign_code)
        except StorageError:
            logger.exception(
                "failed to resolve campaign from code",
                extra={"transaction_id": transaction_id, "campaign_code": campaign_code},
            )
            return None
        if campaign is None:
            return None
        return campaign.name.strip() or None
