"""
Liveness information for the status endpoints.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

from . import schemas

ROOT_MESSAGE = "Hello from acquisitions api"
# Spelling is part of the public response contract.
API_MESSAGE = "Aquisitions API is running!"

_started_at = time.monotonic()


def uptime_s() -> float:
    return time.monotonic() - _started_at


def health() -> schemas.HealthResponse:
    return schemas.HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=uptime_s(),
    )


def api_status() -> schemas.ApiStatusResponse:
    return schemas.ApiStatusResponse(message=API_MESSAGE)
