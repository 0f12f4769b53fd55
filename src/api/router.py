from __future__ import annotations

from fastapi import APIRouter

from src.api.health import router as health_router
from src.api.postback import router as postback_router
from src.api.reports import router as reports_router
from src.api.sales import router as sales_router
from src.api.summary import router as summary_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(postback_router)
api_router.include_router(summary_router)
api_router.include_router(reports_router)
api_router.include_router(sales_router)
