"""
Endpoint checks for the smoke harness.

Each check takes a `SmokeResponse` and raises `SmokeCheckFailed` on the
first mismatch. `run_smoke_checks` runs all of them against a live listener
and reports every outcome; one failing check never stops the others.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from .client import SmokeResponse, make_request
from .server import TEST_PORT

# Expected literals of the public response contract, spelling included. Kept
# separate from `status.service` so the checks also hold a deployed build to it.
ROOT_MESSAGE = "Hello from acquisitions api"
API_MESSAGE = "Aquisitions API is running!"

logger = logging.getLogger(__name__)


class SmokeCheckFailed(AssertionError):
    pass


def _expect_status(response: SmokeResponse, expected: int = 200) -> None:
    if response.status_code != expected:
        raise SmokeCheckFailed(
            f"Expected status {expected}, got {response.status_code}: {response.data[:200]!r}"
        )


def _json_body(response: SmokeResponse) -> dict[str, Any]:
    try:
        payload = json.loads(response.data)
    except ValueError as exc:
        raise SmokeCheckFailed(f"Body is not valid JSON: {response.data[:200]!r}") from exc
    if not isinstance(payload, dict):
        raise SmokeCheckFailed(f"Expected a JSON object, got {type(payload).__name__}.")
    return payload


def check_health(response: SmokeResponse) -> None:
    _expect_status(response)
    payload = _json_body(response)
    if payload.get("status") != "OK":
        raise SmokeCheckFailed(f"Expected status 'OK', got {payload.get('status')!r}.")
    if not payload.get("timestamp"):
        raise SmokeCheckFailed("Health payload has no timestamp.")
    uptime = payload.get("uptime")
    # bool is an int subclass but not a valid uptime.
    if isinstance(uptime, bool) or not isinstance(uptime, (int, float)):
        raise SmokeCheckFailed(f"Expected numeric uptime, got {uptime!r}.")


def check_root(response: SmokeResponse) -> None:
    _expect_status(response)
    if response.data != ROOT_MESSAGE:
        raise SmokeCheckFailed(f"Expected body {ROOT_MESSAGE!r}, got {response.data!r}.")


def check_api(response: SmokeResponse) -> None:
    _expect_status(response)
    payload = _json_body(response)
    if payload.get("message") != API_MESSAGE:
        raise SmokeCheckFailed(f"Expected message {API_MESSAGE!r}, got {payload.get('message')!r}.")


SMOKE_CHECKS: dict[str, Callable[[SmokeResponse], None]] = {
    "/health": check_health,
    "/": check_root,
    "/api": check_api,
}


@dataclass(frozen=True)
class CheckResult:
    path: str
    ok: bool
    error: str | None = None


async def run_smoke_checks(*, host: str = "localhost", port: int = TEST_PORT) -> list[CheckResult]:
    results: list[CheckResult] = []
    for path, check in SMOKE_CHECKS.items():
        try:
            response = await make_request(path, host=host, port=port)
            check(response)
        except (SmokeCheckFailed, httpx.TransportError) as exc:
            logger.warning("smoke_check_failed path=%s error=%s", path, exc)
            results.append(CheckResult(path=path, ok=False, error=str(exc) or type(exc).__name__))
            continue
        logger.info("smoke_check_passed path=%s", path)
        results.append(CheckResult(path=path, ok=True))
    return results
