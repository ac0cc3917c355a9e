"""Tests for error sanitization, serialization and the exception hierarchy."""

import json
from pathlib import Path

import pytest

from manifest_mcp_server.exceptions import (
    InvalidRequestError,
    MalformedManifestError,
    ManifestServerError,
    MethodNotFoundError,
    PromptNotFoundError,
    ResourceNotFoundError,
)
from manifest_mcp_server.mcp_server.utils import safe_json_dumps, sanitize_error


class TestSanitizeError:
    def test_simple_error_message(self):
        assert sanitize_error(ValueError("Simple error message")) == "Simple error message"

    def test_home_directory_replacement(self):
        home_path = str(Path.home())
        result = sanitize_error(FileNotFoundError(f"{home_path}/manifests/prompts/a.json not found"))
        assert home_path not in result
        assert "a.json not found" in result

    def test_full_path_removal(self):
        result = sanitize_error(OSError("cannot read /srv/manifests/resources/guide.md"))
        assert "/srv/manifests/resources/" not in result
        assert "guide.md" in result

    def test_long_error_message_truncation(self):
        result = sanitize_error(RuntimeError("Error: " + "A" * 300))
        assert len(result) == 203
        assert result.endswith("...")


class TestSafeJsonDumps:
    def test_single_line_output(self):
        encoded = safe_json_dumps({"text": "one\ntwo"})
        assert "\n" not in encoded
        assert json.loads(encoded) == {"text": "one\ntwo"}

    def test_non_ascii_kept(self):
        assert "ü" in safe_json_dumps({"text": "ü"})

    def test_unserializable_falls_back(self):
        decoded = json.loads(safe_json_dumps({"obj": object()}))
        assert decoded["error"].startswith("Serialization failed")


class TestExceptions:
    @pytest.mark.parametrize(
        "error,code,message",
        [
            (PromptNotFoundError("x"), -32602, "Prompt not found"),
            (ResourceNotFoundError("x"), -32602, "Resource not found"),
            (MethodNotFoundError("x"), -32601, "Method not found"),
            (InvalidRequestError(), -32600, "Invalid Request"),
            (ManifestServerError(), -32603, "Internal error"),
        ],
    )
    def test_error_members(self, error, code, message):
        assert error.to_error() == {"code": code, "message": message}

    def test_malformed_manifest(self):
        error = MalformedManifestError("team/broken.json", "Expecting value")

        assert error.kind == "MalformedManifest"
        assert error.path == Path("team/broken.json")
        assert "broken.json" in str(error)
        assert "Expecting value" in str(error)
