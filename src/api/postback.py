from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from src.api.dependencies import get_postback_service
from src.schemas.sales import PostbackAcknowledgement, PostbackUrl
from src.services.postback_service import PostbackService, get_postback_url
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/postback", tags=["postback"])


@router.post("", status_code=status.HTTP_201_CREATED)
def receive_postback(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: PostbackService = Depends(get_postback_service),
) -> ResponseEnvelope[PostbackAcknowledgement]:
    sale = service.ingest(payload or {})
    data = PostbackAcknowledgement(message="Sale stored successfully.", sale=sale)
    return ResponseEnvelope(data=data, pagination=None, meta=build_meta("postback"))


@router.get("/url")
def postback_url(request: Request) -> ResponseEnvelope[PostbackUrl]:
    data = PostbackUrl(url=get_postback_url(str(request.base_url)))
    return ResponseEnvelope(data=data, pagination=None, meta=build_meta("postback"))
