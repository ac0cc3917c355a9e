"""MCP Server implementation for prompt and resource manifests."""

from .server import ManifestMCPServer

from .utils import (
    safe_json_dumps,
    sanitize_error,
)

__all__ = [
    "ManifestMCPServer",
    "safe_json_dumps",
    "sanitize_error",
]
