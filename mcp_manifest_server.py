#!/usr/bin/env python3
"""
Manifest MCP Server Entry Point

Starts the manifest server on stdio for MCP client integration. Requests are
read one JSON-RPC message per line from stdin, responses are written one per
line to stdout, and log output goes to stderr.

Usage:
    python mcp_manifest_server.py [--config CONFIG_FILE] [--manifest-root DIR] [--log-level LEVEL]
"""

import sys
import logging
import argparse
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from manifest_mcp_server.config import load_config
from manifest_mcp_server.logging_utils import setup_logging
from manifest_mcp_server.mcp_server import ManifestMCPServer


def main() -> int:
    """Main entry point for the manifest MCP server."""
    parser = argparse.ArgumentParser(description="Manifest MCP Server")
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--manifest-root", "-m",
        type=str,
        help="Directory containing prompts/ and resources/"
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config, manifest_root=args.manifest_root)
    except Exception as e:
        sys.stderr.write(f"Failed to load configuration: {e}\n")
        return 1

    setup_logging(args.log_level or config.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Manifest root: {config.manifest_root}")

    server = ManifestMCPServer(config)
    try:
        server.serve()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
