"""Pytest configuration and shared fixtures."""

import json
import os
import logging

import pytest

from manifest_mcp_server.config import ServerConfig
from manifest_mcp_server.mcp_server import ManifestMCPServer

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    env_vars_to_clean = [
        "MANIFEST_ROOT",
        "MCP_PROMPT_SUFFIX",
        "MCP_RESOURCE_URI_PREFIX",
        "MCP_SERVER_NAME",
        "MCP_SERVER_VERSION",
        "LOG_LEVEL",
    ]

    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


class ManifestBuilder:
    """Writes prompt and resource files below a temporary manifest root."""

    def __init__(self, root):
        self.root = root
        (root / "prompts").mkdir(parents=True, exist_ok=True)
        (root / "resources").mkdir(parents=True, exist_ok=True)

    def prompt(self, relative_path, data):
        path = self.root / "prompts" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def resource(self, relative_path, content):
        path = self.root / "resources" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def manifest(tmp_path):
    """Empty manifest tree with prompts/ and resources/ directories."""
    return ManifestBuilder(tmp_path / "manifests")


@pytest.fixture
def server_config(manifest):
    return ServerConfig(manifest_root=manifest.root)


@pytest.fixture
def server(server_config):
    return ManifestMCPServer(server_config)


@pytest.fixture
def rpc(server):
    """Call a JSON-RPC method on the dispatcher and return the envelope."""

    def call(method, params=None, request_id=1):
        request = {"jsonrpc": "2.0", "id": request_id, "method": method}
        if params is not None:
            request["params"] = params
        return server.dispatcher.dispatch(request)

    return call
