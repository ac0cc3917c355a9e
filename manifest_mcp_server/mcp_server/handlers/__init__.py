"""JSON-RPC request handling."""

from .dispatcher import RequestDispatcher, success_response, error_response

__all__ = ["RequestDispatcher", "success_response", "error_response"]
