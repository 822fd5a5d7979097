import types
import typing

import pytest
from fastapi import Depends, FastAPI, Request, Response
from starlette.testclient import TestClient

from core.config import Settings
from core.cookies import CookiePolicy, CookieSource, CookieWriter
from core.dependencies import get_cookie_policy


class RecordingResponse:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []

    def set_cookie(self, key: str, value: str = "", **kwargs: typing.Any) -> None:
        self.calls.append(("set", (key, value), kwargs))

    def delete_cookie(self, key: str, **kwargs: typing.Any) -> str:
        self.calls.append(("delete", (key,), kwargs))
        return "deleted"


def test_default_options() -> None:
    policy = CookiePolicy(is_production=False)
    assert policy.get_options() == {
        "httponly": True,
        "secure": False,
        "samesite": "strict",
        "max_age": 900,
    }


def test_options_are_fresh_and_stable() -> None:
    policy = CookiePolicy(is_production=True)
    first = policy.get_options()
    first["max_age"] = 1
    assert policy.get_options() == {
        "httponly": True,
        "secure": True,
        "samesite": "strict",
        "max_age": 900,
    }
    assert policy.get_options() == policy.get_options()


@pytest.mark.parametrize(
    "environment, secure",
    [("production", True), ("development", False), ("test", False)],
)
def test_secure_follows_environment(environment: str, secure: bool) -> None:
    policy = CookiePolicy.from_settings(Settings(environment=environment))
    assert policy.get_options()["secure"] is secure


def test_secure_is_false_by_default() -> None:
    assert CookiePolicy.from_settings(Settings()).get_options()["secure"] is False


def test_set_merges_overrides() -> None:
    response = RecordingResponse()
    CookiePolicy(is_production=False).set(response, "refresh", "xyz", max_age=3600, path="/auth")
    assert response.calls == [
        (
            "set",
            ("refresh", "xyz"),
            {"httponly": True, "secure": False, "samesite": "strict", "max_age": 3600, "path": "/auth"},
        )
    ]


def test_clear_passes_through_result_and_drops_lifetime() -> None:
    response = RecordingResponse()
    result = CookiePolicy(is_production=True).clear(response, "token", path="/api")
    assert result == "deleted"
    assert response.calls == [
        ("delete", ("token",), {"httponly": True, "secure": True, "samesite": "strict", "path": "/api"})
    ]


def test_response_errors_propagate() -> None:
    class ClosedResponse(RecordingResponse):
        def set_cookie(self, key: str, value: str = "", **kwargs: typing.Any) -> None:
            raise RuntimeError("headers already sent")

    with pytest.raises(RuntimeError, match="headers already sent"):
        CookiePolicy(is_production=False).set(ClosedResponse(), "token", "abc")


def test_set_writes_set_cookie_header() -> None:
    response = Response()
    CookiePolicy(is_production=False).set(response, "token", "abc")
    header = response.headers["set-cookie"]
    assert header.startswith("token=abc;")
    assert "HttpOnly" in header
    assert "Max-Age=900" in header
    assert "SameSite=strict" in header
    assert "Secure" not in header


def test_set_marks_secure_in_production() -> None:
    response = Response()
    CookiePolicy(is_production=True).set(response, "token", "abc")
    assert "Secure" in response.headers["set-cookie"]


def test_clear_expires_cookie() -> None:
    response = Response()
    CookiePolicy(is_production=False).clear(response, "token")
    header = response.headers["set-cookie"]
    assert header.startswith("token=")
    assert "Max-Age=0" in header
    assert "HttpOnly" in header


def test_get_reads_parsed_cookies() -> None:
    policy = CookiePolicy(is_production=False)
    request = types.SimpleNamespace(cookies={"token": "abc"})
    assert policy.get(request, "token") == "abc"
    assert policy.get(request, "missing") is None


def test_get_without_parsed_cookies() -> None:
    policy = CookiePolicy(is_production=False)
    assert policy.get(types.SimpleNamespace(), "token") is None
    assert policy.get(types.SimpleNamespace(cookie={"token": "abc"}), "token") is None
    assert policy.get(types.SimpleNamespace(headers={"cookie": "token=abc"}), "token") is None


def test_starlette_objects_satisfy_protocols() -> None:
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
    assert isinstance(Response(), CookieWriter)
    assert isinstance(request, CookieSource)


def test_policy_dependency_round_trip(app_factory: typing.Callable[..., FastAPI]) -> None:
    app = app_factory(environment="production")

    @app.post("/session")
    def open_session(response: Response, policy: CookiePolicy = Depends(get_cookie_policy)) -> dict:
        policy.set(response, "token", "abc")
        return {"ok": True}

    @app.delete("/session")
    def close_session(response: Response, policy: CookiePolicy = Depends(get_cookie_policy)) -> dict:
        policy.clear(response, "token")
        return {"ok": True}

    @app.get("/session")
    def read_session(request: Request, policy: CookiePolicy = Depends(get_cookie_policy)) -> dict:
        return {"token": policy.get(request, "token")}

    with TestClient(app) as client:
        opened = client.post("/session")
        assert opened.status_code == 200
        header = opened.headers["set-cookie"]
        assert header.startswith("token=abc;")
        assert "Secure" in header

        assert client.get("/session", headers={"Cookie": "token=abc"}).json() == {"token": "abc"}
        assert client.get("/session", headers={"Cookie": "other=1"}).json() == {"token": None}

        closed = client.delete("/session")
        assert "Max-Age=0" in closed.headers["set-cookie"]
