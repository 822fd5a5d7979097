"""
Cookie policy helpers.

All cookie writes and clears go through one `CookiePolicy` so the security
attributes (HttpOnly, Secure, SameSite, Max-Age) stay the same everywhere.
A call site can still override single attributes, e.g. a longer `max_age`.

Option keys are the keyword arguments of Starlette's `Response.set_cookie`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from .config import Settings

# 15 minutes.
DEFAULT_MAX_AGE_S = 15 * 60
DEFAULT_SAMESITE = "strict"

# `delete_cookie` always expires immediately and takes no lifetime arguments.
_LIFETIME_KEYS = frozenset({"max_age", "expires"})

CookieOptions = dict[str, Any]


@runtime_checkable
class CookieWriter(Protocol):
    def set_cookie(self, key: str, value: str = "", **kwargs: Any) -> Any: ...

    def delete_cookie(self, key: str, **kwargs: Any) -> Any: ...


@runtime_checkable
class CookieSource(Protocol):
    @property
    def cookies(self) -> Mapping[str, str]: ...


class CookiePolicy:
    def __init__(self, *, is_production: bool) -> None:
        self.is_production = bool(is_production)

    @classmethod
    def from_settings(cls, settings: Settings) -> CookiePolicy:
        return cls(is_production=settings.is_production)

    def get_options(self) -> CookieOptions:
        return {
            "httponly": True,
            "secure": self.is_production,
            "samesite": DEFAULT_SAMESITE,
            "max_age": DEFAULT_MAX_AGE_S,
        }

    def _merged(self, overrides: Mapping[str, Any]) -> CookieOptions:
        return {**self.get_options(), **overrides}

    def set(self, response: CookieWriter, name: str, value: str, **overrides: Any) -> None:
        response.set_cookie(name, value, **self._merged(overrides))

    def clear(self, response: CookieWriter, name: str, **overrides: Any) -> Any:
        options = {k: v for k, v in self._merged(overrides).items() if k not in _LIFETIME_KEYS}
        return response.delete_cookie(name, **options)

    def get(self, request: CookieSource, name: str) -> str | None:
        """
        Look up `name` in the request's parsed cookie mapping.

        Requests without a parsed `cookies` mapping yield None.
        """
        cookies = getattr(request, "cookies", None)
        if not isinstance(cookies, Mapping):
            return None
        return cookies.get(name)
