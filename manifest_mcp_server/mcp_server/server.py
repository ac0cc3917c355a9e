"""Stdio MCP server for prompt and resource manifests.

Wires the resource store, prompt catalog, attachment resolver and dispatcher
together from a single ``ServerConfig`` and runs the line-oriented transport:
one JSON-RPC request per input line, one JSON value per output line.
"""

import io
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from ..config import ServerConfig
from ..utils.request_context import request_scope
from .handlers.dispatcher import RequestDispatcher
from .prompts.attachments import AttachmentResolver
from .prompts.catalog import PromptCatalog
from .resources.store import ResourceStore
from .utils.serialization import safe_json_dumps

logger = logging.getLogger(__name__)

STARTUP_NOTICE = "MCP server started on stdio"


def decode_leniently(stream: TextIO) -> TextIO:
    """Replace undecodable input bytes with U+FFFD instead of raising.

    A line with invalid UTF-8 then reaches the dispatcher as ordinary text and
    is answered like any other malformed request.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        try:
            reconfigure(errors="replace")
        except io.UnsupportedOperation as e:
            logger.warning(f"Input stream keeps strict decoding: {e}")
    return stream


class ManifestMCPServer:
    """Manifest MCP Server.

    The manifest root comes from the injected configuration; nothing is read
    from module globals. Requests are handled strictly one at a time.
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self.store = ResourceStore(config.resource_root)
        self.catalog = PromptCatalog(config.prompt_root, suffix=config.prompt_suffix)
        self.resolver = AttachmentResolver(self.store, config.special_attachments)
        self.dispatcher = RequestDispatcher(config, self.catalog, self.store, self.resolver)

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        """Handle one input line under its own request ID."""
        with request_scope():
            return self.dispatcher.handle_line(line)

    def serve(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        notice_stream: Optional[TextIO] = None,
    ) -> int:
        """
        Run the transport loop until the input stream is exhausted.

        Args:
            input_stream: Request lines (defaults to sys.stdin)
            output_stream: Response lines (defaults to sys.stdout)
            notice_stream: Human-readable startup notice (defaults to sys.stderr)

        Returns:
            int: Number of responses written
        """
        input_stream = decode_leniently(input_stream or sys.stdin)
        output_stream = output_stream or sys.stdout
        notice_stream = notice_stream or sys.stderr

        notice_stream.write(STARTUP_NOTICE + "\n")
        notice_stream.flush()
        logger.info(f"Serving manifests from {self.config.manifest_root}")

        written = 0
        for line in input_stream:
            response = self.handle_line(line)
            if response is None:
                continue
            try:
                output_stream.write(safe_json_dumps(response) + "\n")
                output_stream.flush()
            except BrokenPipeError:
                logger.info("Client disconnected, stopping")
                break
            written += 1

        logger.info(f"Input closed after {written} responses")
        return written
