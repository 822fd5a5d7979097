import typing

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from core.config import Settings
from main import create_app


class AppFactory(typing.Protocol):  # pragma: nocover
    def __call__(self, **settings: typing.Any) -> FastAPI:
        ...


@pytest.fixture
def app_factory() -> AppFactory:
    def factory(**settings: typing.Any) -> FastAPI:
        return create_app(Settings(**settings))

    return factory


@pytest.fixture
def app(app_factory: AppFactory) -> FastAPI:
    return app_factory()


@pytest.fixture
def client(app: FastAPI) -> typing.Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client

