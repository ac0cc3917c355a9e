"""Per-request context for log correlation.

The stdio transport handles one input line at a time. Each line is bound to a
fresh ``req_xxxxxx`` id, and the dispatcher adds the JSON-RPC method once the
line has been decoded, so every log record can be traced back to the request
that produced it.
"""

import secrets
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

REQUEST_ID_CONTEXT: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
RPC_METHOD_CONTEXT: ContextVar[Optional[str]] = ContextVar("rpc_method", default=None)

UNKNOWN_REQUEST_ID = "req_unknown"


def generate_request_id() -> str:
    """Return a new id of the form ``req_`` followed by six hex digits."""
    return f"req_{secrets.token_hex(3)}"


def get_request_id() -> Optional[str]:
    return REQUEST_ID_CONTEXT.get()


def set_request_id(request_id: str) -> None:
    REQUEST_ID_CONTEXT.set(request_id)


def get_rpc_method() -> Optional[str]:
    return RPC_METHOD_CONTEXT.get()


def set_rpc_method(method: Optional[str]) -> None:
    """Record the JSON-RPC method being served by the current request."""
    RPC_METHOD_CONTEXT.set(method)


def format_request_id(request_id: Optional[str], method: Optional[str] = None) -> str:
    """Render the request tag used in log lines.

    Examples:
        >>> format_request_id('req_a1b2c3')
        'req_a1b2c3'
        >>> format_request_id('req_a1b2c3', 'prompts/get')
        'req_a1b2c3 prompts/get'
        >>> format_request_id(None)
        'req_unknown'
    """
    tag = request_id or UNKNOWN_REQUEST_ID
    return f"{tag} {method}" if method else tag


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of a block.

    The method slot starts empty inside the block. Both values are restored
    on exit, including when the block raises.
    """
    current_id = request_id or generate_request_id()
    id_token = REQUEST_ID_CONTEXT.set(current_id)
    method_token = RPC_METHOD_CONTEXT.set(None)
    try:
        yield current_id
    finally:
        RPC_METHOD_CONTEXT.reset(method_token)
        REQUEST_ID_CONTEXT.reset(id_token)
