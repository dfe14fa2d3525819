"""Admin server lifecycle: non-blocking start and deadline-bound drain."""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI
import uvicorn

from admin_gateway.core.config import AdminSettings
from admin_gateway.core.errors import route_template
from admin_gateway.core.logging import setup_logging

logger = logging.getLogger(__name__)

FORCE_EXIT_GRACE_SECONDS = 1.0


class ShutdownTimeoutError(RuntimeError):
    """In-flight requests did not finish before the shutdown deadline."""


def describe_routes(app: FastAPI) -> list[str]:
    """One ``METHOD | /path`` line per entry of the app's route table."""
    table = getattr(app.state, "route_table", ())
    return [f"{method:<6} | {route_template(path)}" for method, path in table]


class AdminServer:
    """Serve an admin app on the administrative port from a background thread."""

    def __init__(self, app: FastAPI, settings: AdminSettings) -> None:
        self.app = app
        self.settings = settings
        self._server = self._build_server()
        self._thread: threading.Thread | None = None

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_level=self.settings.log_level.lower(),
            access_log=False,
            server_header=False,
            date_header=False,
            timeout_graceful_shutdown=self.settings.shutdown_timeout_seconds,
        )
        return uvicorn.Server(config)

    @property
    def started(self) -> bool:
        return self._server.started

    def run(self) -> None:
        """Start serving and return immediately."""
        if self._thread is not None:
            if self._thread.is_alive():
                raise RuntimeError("admin server is already running")
            self._reset()

        setup_logging(self.settings.logging_policy)
        logger.info("admin server listening at %s", self.settings.port)
        for line in describe_routes(self.app):
            logger.info("PORT %s | %s", self.settings.port, line)

        self._thread = threading.Thread(target=self._serve, name="admin-server", daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        try:
            self._server.run()
        except Exception:
            logger.exception("error admin server listening")
            raise

    def _reset(self) -> None:
        self._thread = None
        self._server = self._build_server()

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop accepting connections and drain in-flight requests.

        Raises ``ShutdownTimeoutError`` when the drain does not finish within
        ``timeout`` seconds; the remaining connections are then force closed
        and the server can be started again once they are gone.
        """
        if self._thread is None:
            return
        if not self._thread.is_alive():
            self._reset()
            return
        deadline = self.settings.shutdown_timeout_seconds if timeout is None else timeout

        self._server.should_exit = True
        self._thread.join(deadline)
        if self._thread.is_alive():
            self._server.force_exit = True
            self._thread.join(FORCE_EXIT_GRACE_SECONDS)
            if not self._thread.is_alive():
                self._reset()
            logger.info("error shutting down admin server: drain exceeded %ss", deadline)
            raise ShutdownTimeoutError(f"admin server did not drain within {deadline} seconds")

        self._reset()
        logger.info("admin server stopped")
