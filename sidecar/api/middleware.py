import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Download routes name the file here; browsers hide it from scripts unless exposed.
EXPOSED_HEADERS = ["Content-Disposition"]


def parse_allowed_origins(value: str | None = None) -> list[str]:
    """ALLOWED_ORIGINS is comma-separated; unset or empty means any origin."""
    if value is None:
        value = os.getenv("ALLOWED_ORIGINS", "")
    origins = [o.strip() for o in value.split(",") if o.strip()]
    return origins or ["*"]


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Prevent browsers from caching API responses (reports contain patient data)."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


class CORSErrorWrapper:
    """Raw ASGI wrapper that ensures CORS headers on ALL responses.

    BaseHTTPMiddleware turns exceptions from call_next() into bare 500
    responses that never pass through CORSMiddleware, so the browser would
    hide the error body from the upload page. This wrapper sits outside
    everything and adds the headers to any response still missing them.
    """

    def __init__(self, app: ASGIApp, allowed_origins: list[str]) -> None:
        self.app = app
        self.allowed_origins = allowed_origins

    def _origin_allowed(self, origin: str) -> bool:
        return "*" in self.allowed_origins or origin in self.allowed_origins

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_origin = next(
            (value.decode("latin-1") for name, value in scope.get("headers", []) if name == b"origin"),
            None,
        )
        if not request_origin or not self._origin_allowed(request_origin):
            await self.app(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                if not any(name == b"access-control-allow-origin" for name, _ in headers):
                    headers += [
                        (b"access-control-allow-origin", request_origin.encode()),
                        (b"access-control-allow-credentials", b"true"),
                    ]
                    message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_cors)


def add_cors_middleware(app: FastAPI, origins: list[str] | None = None) -> None:
    origins = origins or parse_allowed_origins()

    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=EXPOSED_HEADERS,
    )
    # Outermost: ensure CORS headers even on bare 500s from BaseHTTPMiddleware
    app.add_middleware(CORSErrorWrapper, allowed_origins=origins)
