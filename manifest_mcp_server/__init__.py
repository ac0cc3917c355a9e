"""
Manifest MCP Server

Serves prompt templates and text resources from a manifest directory tree to
MCP clients over line-delimited JSON-RPC.
"""

# Logging is configured at app entry point via manifest_mcp_server/logging_utils.py
# No need to configure logging here.

__version__ = "1.0.0"
__author__ = "Manifest MCP Server Team"
__description__ = "MCP server exposing file-based prompt and resource manifests"
