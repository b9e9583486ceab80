"""
Process bootstrap.

Wires configuration, logging, the connection pool and the
repo -> service -> app chain, then serves until the listener stops.

uvicorn handles SIGINT/SIGTERM: it stops accepting connections, lets
in-flight requests finish and returns from `Server.run()`.

Run with:
    calendar-events
or
    python backend/server.py
"""

import logging
import sys

import uvicorn

from db import create_pool
from errors import ServerError
from main import create_app
from repo_events import EventRepo
from service_events import EventService
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
POOL_OPEN_TIMEOUT = 10.0


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def run(settings: Settings = default_settings) -> None:
    """Serve the API until a shutdown signal arrives.

    Returns normally after a graceful shutdown. Raises `ServerError` if
    the listener could not start; pool errors propagate unchanged.
    """

    configure_logging(settings.log_level)

    pool = create_pool(settings)
    try:
        pool.open(wait=True, timeout=POOL_OPEN_TIMEOUT)
        app = create_app(EventService(EventRepo(pool)))
        config = uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
        server = uvicorn.Server(config)

        logger.info("Server starting on address %s:%d", settings.host, settings.port)
        try:
            server.run()
        except SystemExit as e:
            # uvicorn exits the process when it cannot bind
            raise ServerError(f"listener on {settings.host}:{settings.port} failed to start") from e
        if not server.started:
            raise ServerError(f"listener on {settings.host}:{settings.port} failed to start")
        logger.info("Server stopped")
    finally:
        pool.close()


def main() -> None:
    """Console entry point."""

    try:
        run()
    except Exception:
        logger.exception("error running app")
        sys.exit(1)


if __name__ == "__main__":
    main()
