from __future__ import annotations

from datetime import datetime

import pytest

from src.core.config import get_settings
from src.core.errors import MissingTransactionIdError, StorageError
from src.analytics.status import classify_status
from src.models.sales import StatusClass
from src.services.postback_service import get_postback_url

FIXED_NOW = datetime(2024, 3, 15, 10, 0, 0)


def _payload(**overrides):
    payload = {
        "transaction_id": "t1",
        "status_code": 2,
        "status_text": "Agendado",
        "client_email": "joao.silva@example.com",
        "client_name": "Cliente Um",
        "client_cpf": "123.456.789-00",
        "product_name": "Curso",
        "total_value_cents": 15000,
    }
    payload.update(overrides)
    return payload


def test_ingest_attributes_attendant_from_email(postback_service, sales_repository):
    sale = postback_service.ingest(_payload())
    assert sale.transaction_id == "t1"
    assert sale.attendant_code == "joao"
    assert sale.attendant_name == "João"
    assert sale.status_class == StatusClass.SCHEDULED
    assert sale.formatted_value == "R$ 150,00"
    stored = sales_repository.get("t1")
    assert stored.client_document == "123.456.789-00"
    assert stored.created_at == FIXED_NOW
    assert stored.updated_at == FIXED_NOW
    assert stored.raw_payload["client_name"] == "Cliente Um"


def test_ingest_is_idempotent_per_transaction(postback_service, sales_repository):
    postback_service.ingest(_payload(transaction_id="dup"))
    postback_service.ingest(_payload(transaction_id="dup", status_code=3, status_text="Pago"))
    assert list(sales_repository.records) == ["dup"]
    assert sales_repository.get("dup").status_text == "Pago"
    assert sales_repository.upsert_calls == 2


def test_ingest_requires_transaction_id(postback_service, sales_repository):
    with pytest.raises(MissingTransactionIdError):
        postback_service.ingest(_payload(transaction_id="  "))
    with pytest.raises(MissingTransactionIdError):
        postback_service.ingest({})
    assert sales_repository.records == {}


def test_ingest_unknown_email_falls_back_to_sentinel(postback_service):
    sale = postback_service.ingest(_payload(client_email="zz@example.com"))
    assert sale.attendant_code == "nao_definido"
    assert sale.attendant_name == "Não Definido"


def test_ingest_without_email(postback_service):
    sale = postback_service.ingest(_payload(client_email=None))
    assert sale.attendant_code == "nao_definido"
    assert sale.campaign_code == "nao_definida"


def test_ingest_survives_registry_outage(
    postback_service, sales_repository, attendants_repository, campaigns_repository
):
    attendants_repository.fail = True
    campaigns_repository.fail = True
    sale = postback_service.ingest(_payload(client_email="joao+promo1@example.com"))
    assert sale.attendant_code == "nao_definido"
    assert sale.attendant_name == "Não Definido"
    assert sale.campaign_code == "promo1"
    assert sale.campaign_name is None
    assert "t1" in sales_repository.records


def test_ingest_reads_campaign_tag(postback_service):
    sale = postback_service.ingest(_payload(client_email="mari+promo1@example.com"))
    assert sale.attendant_code == "mari"
    assert sale.campaign_code == "promo1"
    assert sale.campaign_name == "Promo Março"


def test_ingest_converts_timestamps_to_local_time(postback_service):
    sale = postback_service.ingest(
        _payload(created_at="2024-03-14T12:00:00Z", updated_at="2024-03-14T12:30:00.250-03:00")
    )
    assert sale.created_at == datetime(2024, 3, 14, 9, 0, 0)
    assert sale.updated_at == datetime(2024, 3, 14, 12, 30, 0)


def test_ingest_coerces_numeric_strings(postback_service):
    sale = postback_service.ingest(_payload(status_code="3", status_text=None, total_value_cents="2500"))
    assert sale.status_code == 3
    assert sale.status_class == StatusClass.PAID
    assert sale.total_value_cents == 2500


def test_ingest_propagates_storage_failure(postback_service, sales_repository):
    def failing_upsert(record):
        raise StorageError("sales table unavailable")

    sales_repository.upsert = failing_upsert
    with pytest.raises(StorageError):
        postback_service.ingest(_payload())


def test_ingest_paid_sale_from_prefixed_email(postback_service, sales_repository):
    sale = postback_service.ingest(
        {
            "transaction_id": "t1",
            "status_text": "Pago",
            "total_value_cents": 150000,
            "client_email": "joaocliente@x.com",
        }
    )
    stored = sales_repository.get("t1")
    assert stored.attendant_code == "joao"
    assert stored.total_value_cents == 150000
    assert classify_status(stored.status_text, stored.status_code) == StatusClass.PAID
    assert sale.status_class == StatusClass.PAID


def test_postback_url_prefers_configured_value(monkeypatch):
    monkeypatch.setenv("POSTBACK_URL", "https://hooks.example.com/postback")
    get_settings.cache_clear()
    try:
        assert get_postback_url("http://localhost:8000/") == "https://hooks.example.com/postback"
    finally:
        get_settings.cache_clear()


def test_postback_url_built_from_base_url(monkeypatch):
    monkeypatch.delenv("POSTBACK_URL", raising=False)
    get_settings.cache_clear()
    try:
        assert get_postback_url("http://localhost:8000/") == "http://localhost:8000/api/v1/postback"
    finally:
        get_settings.cache_clear()
