"""
FastAPI dependencies for shared app state.
"""

from __future__ import annotations

from fastapi import Request

from .cookies import CookiePolicy


def get_cookie_policy(request: Request) -> CookiePolicy:
    return request.app.state.cookie_policy
