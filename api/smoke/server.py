"""
Real-socket listener for end-to-end checks.

uvicorn runs in a daemon thread with its own event loop, so the caller's
loop (pytest-asyncio, click command) is free to issue requests against it.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from typing import Any

import uvicorn

# Differs from the default app port (3000) so a live instance is not hit.
TEST_PORT = 3001

logger = logging.getLogger(__name__)


class SmokeServerError(RuntimeError):
    pass


class ServerState(enum.Enum):
    NOT_STARTED = "not_started"
    LISTENING = "listening"
    CLOSED = "closed"


class SmokeServer:
    def __init__(
        self,
        app: Any,
        *,
        host: str = "127.0.0.1",
        port: int = TEST_PORT,
        startup_timeout_s: float = 5.0,
    ) -> None:
        self.app = app
        self.host = host
        self.port = port
        self.startup_timeout_s = startup_timeout_s
        self._state = ServerState.NOT_STARTED
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._exit_code: int | str | None = None

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _run(self) -> None:
        # uvicorn calls sys.exit() when it cannot bind; keep that inside the thread.
        try:
            self._server.run()
        except SystemExit as exc:
            self._exit_code = exc.code

    def start(self) -> None:
        if self._state is not ServerState.NOT_STARTED:
            raise SmokeServerError(f"Server cannot be started from state {self._state.value}.")

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
            lifespan="on",
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._run,
            name=f"smoke-server-{self.port}",
            daemon=True,
        )
        self._thread.start()

        deadline = time.monotonic() + self.startup_timeout_s
        while not self._server.started:
            if not self._thread.is_alive():
                self._state = ServerState.CLOSED
                raise SmokeServerError(
                    f"Server exited before listening on {self.base_url} (exit code {self._exit_code})."
                )
            if time.monotonic() > deadline:
                self.close()
                raise SmokeServerError(
                    f"Server did not start listening on {self.base_url} within {self.startup_timeout_s}s."
                )
            time.sleep(0.01)

        self._state = ServerState.LISTENING
        logger.info("smoke_server_listening url=%s", self.base_url)

    def close(self) -> None:
        if self._state is ServerState.CLOSED:
            return None
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join()
        was_listening = self._state is ServerState.LISTENING
        self._state = ServerState.CLOSED
        if was_listening:
            logger.info("smoke_server_closed url=%s", self.base_url)

    def __enter__(self) -> SmokeServer:
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
