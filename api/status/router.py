"""
Top-level status endpoints: health check, root greeting, API banner.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from . import schemas, service

router = APIRouter()


@router.get("/health", response_model=schemas.HealthResponse)
def health() -> schemas.HealthResponse:
    return service.health()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return service.ROOT_MESSAGE


@router.get("/api", response_model=schemas.ApiStatusResponse)
def api_status() -> schemas.ApiStatusResponse:
    return service.api_status()
