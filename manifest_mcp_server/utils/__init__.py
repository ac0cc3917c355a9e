"""Shared utilities for the manifest server."""

from .request_context import (
    generate_request_id,
    get_request_id,
    set_request_id,
    get_rpc_method,
    set_rpc_method,
    format_request_id,
    request_scope,
)

__all__ = [
    "generate_request_id",
    "get_request_id",
    "set_request_id",
    "get_rpc_method",
    "set_rpc_method",
    "format_request_id",
    "request_scope",
]
