"""Configuration management for the Manifest MCP Server."""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

try:
    import tomli
    TOML_AVAILABLE = True
except ImportError:
    TOML_AVAILABLE = False


PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_RESOURCE_DESCRIPTIONS: Dict[str, str] = {
    "company-overall-information.md": "Company background and history",
    "name-instructions.md": "Instructions for addressing users by name",
    "system-instruction.md": "System-level instructions for security and output",
    "engineering-handbook.md": "Engineering component and severity mapping",
}


class ServerConfig(BaseModel):
    """Configuration for the manifest server."""

    manifest_root: Path = Field(..., description="Directory holding prompts/ and resources/")
    prompts_dir: str = Field(default="prompts", description="Prompt tree below the manifest root")
    resources_dir: str = Field(default="resources", description="Resource tree below the manifest root")
    prompt_suffix: str = Field(default=".json", description="File suffix of prompt definitions")
    resource_uri_prefix: str = Field(default="resource:///", description="URI prefix for resources")
    protocol_version: str = Field(default="2024-11-05", description="Reported MCP protocol version")
    server_name: str = Field(default="mcp-poc-server", description="Reported server name")
    server_version: str = Field(default="1.0.0", description="Reported server version")
    special_attachments: Dict[str, List[str]] = Field(
        default_factory=lambda: {"ask-name": ["company"]},
        description="Prompt id to resource directories attached to that prompt",
    )
    resource_descriptions: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_RESOURCE_DESCRIPTIONS),
        description="Descriptions reported by resources/list, keyed by file name",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('prompt_suffix')
    @classmethod
    def validate_prompt_suffix(cls, v: str) -> str:
        """Validate that the suffix looks like a file extension."""
        if not v or not v.startswith('.'):
            raise ValueError(f"prompt_suffix must start with '.': {v!r}")
        return v

    @field_validator('prompts_dir', 'resources_dir', 'resource_uri_prefix')
    @classmethod
    def validate_required_strings(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def prompt_root(self) -> Path:
        return self.manifest_root / self.prompts_dir

    @property
    def resource_root(self) -> Path:
        return self.manifest_root / self.resources_dir


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a YAML, TOML or JSON file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger = logging.getLogger(__name__)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}

            elif config_path.suffix.lower() == '.toml':
                if not TOML_AVAILABLE:
                    raise ImportError("tomli is required for TOML config files. Install with: pip install tomli")
                return tomli.load(f.buffer)

            elif config_path.suffix.lower() == '.json':
                return json.load(f) or {}

            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    except Exception as e:
        logger.error(f"Failed to load config file {config_path}: {e}")
        raise


def find_config_file() -> Optional[Path]:
    """Find configuration file in standard locations."""
    search_paths = [
        Path.cwd() / "manifest-mcp.yaml",
        Path.cwd() / "manifest-mcp.yml",
        Path.cwd() / "manifest-mcp.toml",
        Path.cwd() / "manifest-mcp.json",
        Path.cwd() / ".manifest-mcp.yaml",
        Path.cwd() / ".manifest-mcp.yml",
        Path.cwd() / ".manifest-mcp.toml",
        Path.cwd() / ".manifest-mcp.json",
        Path.home() / ".config" / "manifest-mcp" / "config.yaml",
        Path.home() / ".config" / "manifest-mcp" / "config.yml",
        Path.home() / ".config" / "manifest-mcp" / "config.toml",
        Path.home() / ".config" / "manifest-mcp" / "config.json",
    ]

    for config_path in search_paths:
        if config_path.exists():
            return config_path

    return None


def resolve_manifest_root(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Locate the manifest directory.

    An explicit location always wins. Otherwise ``./manifests`` is preferred
    over the ``manifests`` directory next to the installed package, and
    ``./manifests`` is returned when neither exists.
    """
    if explicit:
        return Path(explicit).expanduser()

    candidates = [Path.cwd() / "manifests", PROJECT_ROOT / "manifests"]
    for candidate in candidates:
        if candidate.is_dir():
            return candidate

    return candidates[0]


def merge_config(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dictionaries with override taking precedence."""
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    manifest_root: Optional[Union[str, Path]] = None,
) -> ServerConfig:
    """Load configuration from multiple sources with priority order.

    Priority (highest to lowest):
    1. Explicit manifest_root argument
    2. Environment variables (including a .env file)
    3. Specified or auto-discovered config file
    4. Default values
    """
    logger = logging.getLogger(__name__)

    config_data: Dict[str, Any] = {}

    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            config_data = load_config_file(config_path)
            logger.info(f"Loaded configuration from: {config_path}")
        else:
            raise FileNotFoundError(f"Specified config file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path:
            config_data = load_config_file(config_path)
            logger.info(f"Auto-discovered configuration file: {config_path}")

    load_dotenv(find_dotenv(usecwd=True))

    env_config = {
        "manifest_root": os.getenv("MANIFEST_ROOT"),
        "prompt_suffix": os.getenv("MCP_PROMPT_SUFFIX"),
        "resource_uri_prefix": os.getenv("MCP_RESOURCE_URI_PREFIX"),
        "server_name": os.getenv("MCP_SERVER_NAME"),
        "server_version": os.getenv("MCP_SERVER_VERSION"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    env_config = {k: v for k, v in env_config.items() if v is not None}

    final_config = merge_config(config_data, env_config)

    final_config["manifest_root"] = resolve_manifest_root(
        manifest_root or final_config.get("manifest_root")
    )

    return ServerConfig(**final_config)
