"""Cached delivery of the admin documentation assets."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
import posixpath
import time

from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

DIST_PREFIX = "/dist"
STATIC_FILES = ("/admin.html", "/admin.yaml")

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}


def is_static_path(path: str) -> bool:
    return path in STATIC_FILES or path == DIST_PREFIX or path.startswith(f"{DIST_PREFIX}/")


def content_type_for(path: str) -> str | None:
    """Content type for a known extension, ``None`` for anything else."""
    return CONTENT_TYPES.get(posixpath.splitext(path)[1].lower())


def time_etag(clock: Callable[[], float] = time.time) -> str:
    return f'"{int(clock()):x}"'


class StaticCacheMiddleware(BaseHTTPMiddleware):
    """Cache headers and conditional request short-circuit for static assets.

    Any non-empty ``If-None-Match`` yields 304 without comparing it to the
    ETag, which is derived from the current second.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_age_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(app)
        self.max_age_seconds = max_age_seconds
        self.clock = clock

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not is_static_path(path):
            return await call_next(request)

        headers = {
            "Cache-Control": f"public, max-age={self.max_age_seconds}",
            "ETag": time_etag(self.clock),
        }
        if request.headers.get("if-none-match"):
            return Response(status_code=304, headers=headers)

        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        content_type = content_type_for(path)
        if content_type and response.status_code < 400:
            response.headers["content-type"] = content_type
        return response


def _file_endpoint(file_path: Path) -> Callable[[], FileResponse]:
    def serve() -> FileResponse:
        if not file_path.is_file():
            raise StarletteHTTPException(status_code=404, detail=f"{file_path.name} is not available")
        return FileResponse(file_path)

    return serve


def register_static_routes(app: FastAPI, docs_dir: str) -> None:
    """Serve ``dist/`` and the admin documentation files from ``docs_dir``."""
    root = Path(docs_dir)
    dist = root / "dist"
    if dist.is_dir():
        app.mount(DIST_PREFIX, StaticFiles(directory=dist), name="dist")
    else:
        logger.info("static dist directory %s not found, /dist is not served", dist)

    for route_path in STATIC_FILES:
        app.add_api_route(
            route_path,
            _file_endpoint(root / route_path.lstrip("/")),
            methods=["GET"],
            include_in_schema=False,
        )
