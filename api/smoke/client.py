"""
Minimal HTTP request primitive for the smoke checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from .server import TEST_PORT


@dataclass(frozen=True)
class SmokeResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    data: str = ""


async def make_request(
    path: str,
    *,
    host: str = "localhost",
    port: int = TEST_PORT,
    timeout_s: float = 30.0,
) -> SmokeResponse:
    """
    GET `path` and return the status, headers and the full body as text.

    Transport failures (refused, reset, timeout) raise `httpx.TransportError`
    subclasses unchanged. There are no retries.
    """
    async with httpx.AsyncClient(base_url=f"http://{host}:{port}", timeout=timeout_s) as client:
        async with client.stream(
            "GET",
            path,
            headers={"Content-Type": "application/json"},
        ) as resp:
            chunks = [chunk async for chunk in resp.aiter_text()]
            return SmokeResponse(
                status_code=resp.status_code,
                headers=dict(resp.headers),
                data="".join(chunks),
            )
