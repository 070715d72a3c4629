"""Server settings and logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Literal

from pydantic import BaseModel, ConfigDict

from tinybrain_mcp.envelope import PROTOCOL_VERSION
from tinybrain_mcp.version import __version__

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ServerSettings(BaseModel):
    """Static identity advertised by ``initialize`` plus runtime knobs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "tinybrain-mcp"
    version: str = __version__
    protocol_version: str = PROTOCOL_VERSION
    log_level: LogLevel = "INFO"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout is reserved for protocol responses."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
