from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from user_proxy.services.health_check import check_services_health

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    return await check_services_health(request.app.state.http_client, request.app.state.settings)


@router.get("/metrics")
async def metrics():
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
