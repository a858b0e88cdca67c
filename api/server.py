"""
Command-line entrypoint for spahost.

Validates the content root, then runs the application under uvicorn until
the process is terminated. Startup failures exit with status 1.

Usage:
    spahost --dir ./build --port 4173
"""

import logging
import sys
from typing import List, Optional

import uvicorn

from api.main import configure_logging, create_app
from core.config import ServerSettings, parse_settings
from core.errors import BindFailedError, StartupError
from core.root import ContentRoot, resolve_content_root
from observability.metrics import metrics

logger = logging.getLogger("spahost.server")


class SPAServer(uvicorn.Server):
    """uvicorn server that announces the served root once the socket is bound."""

    def __init__(self, config: uvicorn.Config, content_root: ContentRoot, port: str):
        super().__init__(config)
        self.content_root = content_root
        self.port = port

    async def startup(self, sockets=None):
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Serving %s on http://localhost:%s", self.content_root.root, self.port)


def build_server(settings: ServerSettings, content_root: ContentRoot) -> SPAServer:
    config = uvicorn.Config(
        create_app(content_root),
        host=settings.host,
        port=settings.port_number,
        log_config=None,
        log_level=settings.log_level,
        timeout_keep_alive=settings.keep_alive_timeout,
        timeout_graceful_shutdown=settings.graceful_shutdown_timeout,
        limit_concurrency=settings.limit_concurrency,
    )
    return SPAServer(config, content_root=content_root, port=settings.port)


def serve(settings: ServerSettings, content_root: ContentRoot) -> None:
    """
    Run the server until it is stopped.

    Raises:
        BindFailedError: If the listener never came up
    """
    address = f"{settings.host}:{settings.port}"
    server = build_server(settings, content_root)
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits on bind errors
        if not server.started:
            raise BindFailedError(f"could not listen on {address}", path=content_root.root) from e
        raise
    if not server.started:
        raise BindFailedError(f"could not listen on {address}", path=content_root.root)


def main(argv: Optional[List[str]] = None) -> None:
    settings = parse_settings(argv)
    configure_logging(settings.log_level)

    try:
        content_root = resolve_content_root(settings.dir)
        if settings.metrics_port:
            try:
                metrics.start_exporter(settings.metrics_port, addr=settings.host)
            except OSError as e:
                raise BindFailedError(f"could not expose metrics on port {settings.metrics_port}: {e}") from e
        serve(settings, content_root)
    except StartupError as e:
        logger.critical("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
