import logging
import os
import re
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.audit import AuditMiddleware
from api.middleware import add_cors_middleware
from api.rate_limit import limiter, rate_limit_exceeded_handler
from api.routes import router
from server import get_host, get_port, start_server
from storage import get_data_dir, get_workbook

_logger = logging.getLogger(__name__)

_SENTRY_DSN = os.getenv("SENTRY_DSN", "")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LOG_MAX_BYTES = 5 * 1024 * 1024
_LOG_BACKUPS = 5

# PHI patterns to scrub from error reports (covers HIPAA Safe Harbor identifiers)
_PHI_PATTERNS = [
    re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),                    # SSN
    re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"),        # dates
    re.compile(r"\b[A-Z]{1,2}\d{6,10}\b"),                    # MRN
    re.compile(r"\b\d{10}\b"),                                 # phone
    re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"),  # email
    re.compile(r"(?i)(?:patient|name)\s*[:=]\s*[^\n,;]{2,40}"),  # labeled patient name
    re.compile(r"(?i)\b[\w\- ]{1,80}\.(?:pdf|docx|txt)\b"),     # uploaded file names
]


def _scrub_phi(text: str) -> str:
    for pattern in _PHI_PATTERNS:
        text = pattern.sub("[REDACTED]", text)
    return text


def get_log_dir() -> str:
    log_dir = os.getenv("LOG_DIR") or os.path.join(get_data_dir(), "logs")
    os.makedirs(log_dir, exist_ok=True)
    return log_dir


def configure_logging(log_dir: str | None = None, level: int = logging.INFO) -> None:
    """Console plus rotating combined.log and error.log under LOG_DIR."""
    log_dir = log_dir or get_log_dir()
    formatter = logging.Formatter(_LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)

    combined = RotatingFileHandler(
        os.path.join(log_dir, "combined.log"), maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUPS,
    )
    combined.setFormatter(formatter)

    errors = RotatingFileHandler(
        os.path.join(log_dir, "error.log"), maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUPS,
    )
    errors.setLevel(logging.ERROR)
    errors.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in (console, combined, errors):
        root.addHandler(handler)


def _init_sentry() -> None:
    if not _SENTRY_DSN:
        return
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.starlette import StarletteIntegration

    def before_send(event, hint):
        # Scrub PHI from exception values
        if "exception" in event:
            for exc_info in event["exception"].get("values", []):
                if exc_info.get("value"):
                    exc_info["value"] = _scrub_phi(exc_info["value"])
        # Scrub breadcrumbs
        for bc in event.get("breadcrumbs", {}).get("values", []):
            if bc.get("message"):
                bc["message"] = _scrub_phi(bc["message"])
        return event

    sentry_sdk.init(
        dsn=_SENTRY_DSN,
        environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
        integrations=[FastApiIntegration(), StarletteIntegration()],
        before_send=before_send,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the data directory exists before the first upload."""
    workbook = get_workbook()
    _logger.info("Clinical history log: %s", workbook.path)
    yield


def create_app() -> FastAPI:
    _init_sentry()
    app = FastAPI(title="Clinical History Sidecar", version="1.0.0", lifespan=lifespan)
    # Middleware order (inner -> outer): Audit -> NoCache -> CORS
    # CORS must be outermost so ALL responses (including 500s) get headers.
    app.add_middleware(AuditMiddleware)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    add_cors_middleware(app)

    # Catch-all exception handler so unhandled errors still return JSON
    # with CORS headers (instead of a bare 500 that the browser blocks).
    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."},
        )

    app.include_router(router)
    return app


if __name__ == "__main__":
    configure_logging()
    app = create_app()
    start_server(app, get_port(), get_host())
