"""
Pydantic schemas for status endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float


class ApiStatusResponse(BaseModel):
    message: str
