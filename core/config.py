"""
Configuration for spahost.

Command-line flags are parsed with argparse and validated into a pydantic
model. Ambient options (logging, metrics, tracing) default from the
environment, with a .env file loaded if present.
"""

import argparse
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

# Load environment variables
load_dotenv()

DEFAULT_PORT = "4173"
DEFAULT_DIR = "./build"
LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


class ServerSettings(BaseModel):
    """Validated server settings."""
    port: str = Field(default=DEFAULT_PORT, description="TCP port to bind on all interfaces")
    dir: str = Field(default=DEFAULT_DIR, description="Directory whose contents are served")
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    log_level: str = Field(default="info", description="Root logger level")
    keep_alive_timeout: int = Field(default=5, ge=0, description="Idle keep-alive timeout in seconds")
    graceful_shutdown_timeout: int = Field(default=10, ge=0, description="Seconds to drain connections on shutdown")
    limit_concurrency: Optional[int] = Field(default=None, ge=1, description="Maximum concurrent connections")
    metrics_port: Optional[int] = Field(default=None, ge=1, le=65535, description="Port for the Prometheus endpoint")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not v.isdigit() or not 1 <= int(v) <= 65535:
            raise ValueError("port must be a number between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return v

    @property
    def port_number(self) -> int:
        return int(self.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spahost",
        description="Serve a built single-page application with index.html fallback.",
    )
    parser.add_argument("--port", default=DEFAULT_PORT, help="port to listen on (default: %(default)s)")
    parser.add_argument("--dir", default=DEFAULT_DIR, help="directory to serve (default: %(default)s)")
    parser.add_argument("--host", default="0.0.0.0", help="interface to bind (default: %(default)s)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"), help="logging level (default: %(default)s)")
    parser.add_argument("--keep-alive-timeout", type=int, default=5, help="idle connection timeout in seconds")
    parser.add_argument("--graceful-shutdown-timeout", type=int, default=10, help="seconds to wait for open connections on shutdown")
    parser.add_argument("--limit-concurrency", type=int, default=None, help="maximum number of concurrent connections")
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=int(os.getenv("METRICS_PORT")) if os.getenv("METRICS_PORT") else None,
        help="serve Prometheus metrics on this port",
    )
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> ServerSettings:
    """
    Parse command-line arguments into ServerSettings.

    Validation failures are reported as usage errors, so the process exits
    with status 2 like any other bad flag.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return ServerSettings(**vars(args))
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        parser.error(messages)
