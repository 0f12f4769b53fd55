from __future__ import annotations

import pytest

from src.analytics.status import classify_status, parse_status_class
from src.models.sales import StatusClass


@pytest.mark.parametrize(
    ("text", "code", "expected"),
    [
        ("Pago", 3, StatusClass.PAID),
        ("Aprovado", None, StatusClass.PAID),
        ("Agendado", 2, StatusClass.SCHEDULED),
        ("Aguardando pagamento", None, StatusClass.SCHEDULED),
        ("Frustrado", 5, StatusClass.FAILED),
        ("Reembolsado", None, StatusClass.FAILED),
        ("Em Cobrança", 4, StatusClass.IN_COLLECTION),
        ("Recorrência", None, StatusClass.IN_COLLECTION),
    ],
)
def test_classify_status_by_text(text, code, expected):
    assert classify_status(text, code) == expected


def test_text_wins_over_code():
    assert classify_status("Pago", 5) == StatusClass.PAID
    assert classify_status("Cancelado", 3) == StatusClass.FAILED


def test_code_used_when_text_does_not_match():
    assert classify_status(None, 3) == StatusClass.PAID
    assert classify_status("", "2") == StatusClass.SCHEDULED
    assert classify_status("processando", 4) == StatusClass.IN_COLLECTION


def test_unknown_when_nothing_matches():
    assert classify_status(None, None) == StatusClass.UNKNOWN
    assert classify_status("processando", 9) == StatusClass.UNKNOWN
    assert classify_status("processando", "abc") == StatusClass.UNKNOWN


def test_classifier_is_total():
    texts = [None, "", "PAGO", "agendado", "x", "frustrado", "cobranca"]
    codes = [None, 0, 1, 2, 3, 4, 5, "7", 2.5, True]
    for text in texts:
        for code in codes:
            assert isinstance(classify_status(text, code), StatusClass)


def test_parse_status_class_accepts_aliases_and_values():
    assert parse_status_class("Pago") == StatusClass.PAID
    assert parse_status_class("cobranca") == StatusClass.IN_COLLECTION
    assert parse_status_class("scheduled") == StatusClass.SCHEDULED
    assert parse_status_class("nope") is None
    assert parse_status_class(None) is None
