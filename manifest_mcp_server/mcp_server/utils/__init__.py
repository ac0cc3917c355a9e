"""
MCP Server Utilities Package

Modules:
    serialization: JSON serialization of response envelopes
    errors: Error message sanitization for client-facing errors
"""

from .serialization import safe_json_dumps
from .errors import sanitize_error

__all__ = [
    "safe_json_dumps",
    "sanitize_error",
]
