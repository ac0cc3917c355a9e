"""Logging setup for the manifest server.

stdout carries JSON-RPC frames, so every handler installed here writes to
stderr unless a stream is passed in explicitly.
"""

import logging
import sys
from typing import Optional, TextIO

from .utils.request_context import format_request_id, get_request_id, get_rpc_method

LOG_FORMAT = "%(asctime)s [%(request_tag)s] %(levelname)s %(name)s: %(message)s"
PLAIN_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class RequestContextFormatter(logging.Formatter):
    """Formatter that tags each record with the active request.

    Example:
        2025-08-07 14:30:15,123 [req_a1b2c3 prompts/get] WARNING
        manifest_mcp_server.mcp_server.prompts.attachments: Instructions resource not found
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        super().__init__(fmt or LOG_FORMAT, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record.request_tag = format_request_id(get_request_id(), get_rpc_method())
        return super().format(record)


def setup_logging(
    log_level: str = "INFO",
    include_request_id: bool = True,
    stream: Optional[TextIO] = None,
):
    """
    Replace the root logger's handlers with a single console handler.

    Args:
        log_level (str): Level name such as 'DEBUG' or 'info'.
        include_request_id (bool): Tag records with the active request.
        stream: Destination for log output (defaults to sys.stderr).

    Raises:
        ValueError: If the level name is unknown.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    if include_request_id:
        handler.setFormatter(RequestContextFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
