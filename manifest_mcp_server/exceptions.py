"""Exception hierarchy for the manifest server.

Each error that can reach a client carries the JSON-RPC error code it maps to,
so the dispatcher can shape the error envelope without a lookup table.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from mcp.types import INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, INTERNAL_ERROR


class ManifestServerError(Exception):
    """Base exception for all manifest server errors."""

    code: int = INTERNAL_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_error(self) -> Dict[str, Any]:
        """Return the JSON-RPC ``error`` member for this exception."""
        return {"code": self.code, "message": self.message}


class MalformedManifestError(ManifestServerError):
    """A prompt file could not be parsed into a prompt definition."""

    kind = "MalformedManifest"

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.kind}: {self.path.name}: {reason}")


class PromptNotFoundError(ManifestServerError):
    code = INVALID_PARAMS
    default_message = "Prompt not found"

    def __init__(self, prompt_id: Optional[str] = None):
        self.prompt_id = prompt_id
        super().__init__()


class ResourceNotFoundError(ManifestServerError):
    code = INVALID_PARAMS
    default_message = "Resource not found"

    def __init__(self, resource_name: Optional[str] = None):
        self.resource_name = resource_name
        super().__init__()


class MethodNotFoundError(ManifestServerError):
    code = METHOD_NOT_FOUND
    default_message = "Method not found"

    def __init__(self, method: Optional[str] = None):
        self.method = method
        super().__init__()


class InvalidRequestError(ManifestServerError):
    code = INVALID_REQUEST
    default_message = "Invalid Request"
