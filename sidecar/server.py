import logging
import os

import uvicorn

_logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"


def get_port() -> int:
    return int(os.getenv("PORT", str(DEFAULT_PORT)))


def get_host() -> str:
    # Localhost only unless HOST is set explicitly
    return os.getenv("HOST", DEFAULT_HOST)


def start_server(app, port: int, host: str = DEFAULT_HOST):
    _logger.info("Clinical History server listening on %s:%d", host, port)
    print(f"PORT:{port}", flush=True)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="warning",
    )
