"""JSON-RPC method dispatch for the manifest server."""

import json
import logging
from typing import Any, Callable, Dict, Optional

from mcp.types import (
    INTERNAL_ERROR,
    PARSE_ERROR,
    Implementation,
    PromptsCapability,
    ResourcesCapability,
    ServerCapabilities,
)

from ...config import ServerConfig
from ...utils.request_context import set_rpc_method
from ...exceptions import (
    InvalidRequestError,
    ManifestServerError,
    MethodNotFoundError,
    PromptNotFoundError,
    ResourceNotFoundError,
)
from ..prompts.attachments import AttachmentResolver
from ..prompts.catalog import PromptCatalog
from ..resources.store import ResourceStore, mime_type_for
from ..utils.errors import sanitize_error

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

Handler = Callable[[Dict[str, Any]], Dict[str, Any]]


def success_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


class RequestDispatcher:
    """
    Maps JSON-RPC methods onto the prompt catalog and resource store.

    The dispatcher keeps no state between requests; every call reads the
    manifest tree again. Lookup failures and unknown methods become error
    envelopes, and unexpected exceptions become -32603 errors so one bad
    request never stops the server.
    """

    def __init__(
        self,
        config: ServerConfig,
        catalog: PromptCatalog,
        store: ResourceStore,
        resolver: AttachmentResolver,
    ):
        self.config = config
        self.catalog = catalog
        self.store = store
        self.resolver = resolver
        self._handlers: Dict[str, Handler] = {
            "initialize": self.handle_initialize,
            "ping": self.handle_ping,
            "prompts/list": self.handle_list_prompts,
            "prompts/get": self.handle_get_prompt,
            "resources/list": self.handle_list_resources,
            "resources/read": self.handle_read_resource,
        }

    @property
    def methods(self):
        return list(self._handlers)

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        """
        Handle one raw input line.

        Args:
            line: A single line of transport input

        Returns:
            Response envelope, or None for blank lines and notifications
        """
        if not line.strip():
            return None

        try:
            request = json.loads(line)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Discarding malformed request line: {e}")
            return error_response(None, PARSE_ERROR, f"Parse error: {e}")

        return self.dispatch(request)

    def dispatch(self, request: Any) -> Optional[Dict[str, Any]]:
        """
        Dispatch a parsed request to its method handler.

        Args:
            request: Decoded JSON value from the transport

        Returns:
            Response envelope, or None if the request is a notification
        """
        if not isinstance(request, dict):
            return error_response(None, **InvalidRequestError().to_error())

        request_id = request.get("id")
        is_notification = "id" not in request
        method = request.get("method")
        params = request.get("params")
        if not isinstance(params, dict):
            params = {}
        set_rpc_method(method if isinstance(method, str) else None)

        logger.debug(f"Dispatching {method!r} (id={request_id!r})")

        try:
            handler = self._handlers.get(method) if isinstance(method, str) else None
            if handler is None:
                raise MethodNotFoundError(method)
            result = handler(params)
        except ManifestServerError as e:
            if is_notification:
                logger.debug(f"Ignoring failed notification {method!r}: {e.message}")
                return None
            logger.info(f"Request {method!r} failed: {e.message}")
            return error_response(request_id, **e.to_error())
        except Exception as e:
            logger.exception(f"Unexpected error handling {method!r}")
            if is_notification:
                return None
            return error_response(
                request_id, INTERNAL_ERROR, f"Internal error: {sanitize_error(e)}"
            )

        if is_notification:
            return None
        return success_response(request_id, result)

    def handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        client = params.get("clientInfo") or {}
        logger.info(f"Initialize from client {client.get('name', 'unknown')!r}")

        capabilities = ServerCapabilities(
            prompts=PromptsCapability(listChanged=False),
            resources=ResourcesCapability(subscribe=False, listChanged=False),
        )
        server_info = Implementation(
            name=self.config.server_name, version=self.config.server_version
        )
        return {
            "protocolVersion": self.config.protocol_version,
            "capabilities": capabilities.model_dump(exclude_none=True),
            "serverInfo": server_info.model_dump(exclude_none=True),
        }

    def handle_ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    def handle_list_prompts(self, params: Dict[str, Any]) -> Dict[str, Any]:
        prompts = [
            {
                "name": prompt.catalog_name,
                "description": prompt.description or "",
                "arguments": prompt.argument_dicts(),
            }
            for prompt in self.catalog.list_all()
        ]
        return {"prompts": prompts}

    def handle_get_prompt(self, params: Dict[str, Any]) -> Dict[str, Any]:
        prompt_id = params.get("name")
        resolved = self.catalog.resolve_by_id(prompt_id if isinstance(prompt_id, str) else None)
        if resolved is None:
            raise PromptNotFoundError(prompt_id)

        return {
            "description": resolved.definition.description or "",
            "messages": self.resolver.build_messages(resolved),
        }

    def handle_list_resources(self, params: Dict[str, Any]) -> Dict[str, Any]:
        descriptions = self.config.resource_descriptions
        resources = [
            {
                "uri": f"{self.config.resource_uri_prefix}{name}",
                "name": name,
                "description": descriptions.get(name, ""),
                "mimeType": mime_type_for(name),
            }
            for name in self.store.list_resources()
        ]
        return {"resources": resources}

    def handle_read_resource(self, params: Dict[str, Any]) -> Dict[str, Any]:
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise ResourceNotFoundError(None)

        prefix = self.config.resource_uri_prefix
        name = uri[len(prefix):] if uri.startswith(prefix) else uri

        content = self.store.read_resource(name)
        if content is None:
            raise ResourceNotFoundError(name)

        return {
            "contents": [
                {
                    "uri": uri,
                    "mimeType": mime_type_for(name),
                    "text": content,
                }
            ]
        }
