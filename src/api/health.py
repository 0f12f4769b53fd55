from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from src.core.config import get_settings
from src.shared.response import ResponseEnvelope, build_meta


router = APIRouter(tags=["health"])


def _health_payload() -> ResponseEnvelope[Dict[str, str]]:
    data = {"status": "ok", "environment": get_settings().environment}
    return ResponseEnvelope(data=data, meta=build_meta("system"))


@router.get("/health")
def health_check() -> ResponseEnvelope[Dict[str, str]]:
    return _health_payload()


@router.get("/healthz")
def health_check_liveness() -> ResponseEnvelope[Dict[str, str]]:
    return _health_payload()
