"""Command-line interface for the Manifest MCP Server."""

import json
import sys
import logging
from typing import Optional

import click

from .config import load_config
from .logging_utils import setup_logging
from .mcp_server import ManifestMCPServer
from .mcp_server.resources.store import mime_type_for
from .utils.request_context import generate_request_id, set_request_id


@click.group()
@click.option(
    "--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)"
)
@click.option(
    "--config", "--config-file", help="Path to configuration file (YAML, TOML, or JSON)"
)
@click.option(
    "--manifest-root",
    type=click.Path(file_okay=False),
    help="Directory containing prompts/ and resources/",
)
@click.option("--request-id", help="Specific request ID to use for tracing (optional)")
@click.pass_context
def cli(
    ctx,
    log_level: Optional[str],
    config: Optional[str],
    manifest_root: Optional[str],
    request_id: Optional[str],
):
    """Manifest MCP Server - prompts and resources over stdio JSON-RPC."""
    ctx.ensure_object(dict)

    request_id = request_id or generate_request_id()
    set_request_id(request_id)
    ctx.obj["request_id"] = request_id

    try:
        app_config = load_config(config_file=config, manifest_root=manifest_root)
    except Exception as e:
        click.echo(f"❌ Failed to load configuration: {e}", err=True)
        sys.exit(1)
    ctx.obj["config"] = app_config

    # CLI flag overrides config
    effective_log_level = log_level or app_config.log_level
    try:
        setup_logging(effective_log_level, include_request_id=True)
    except ValueError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    logger = logging.getLogger(__name__)
    logger.debug(f"Using manifest root: {app_config.manifest_root}")

    ctx.obj["server"] = ManifestMCPServer(app_config)


@cli.command()
@click.pass_context
def serve(ctx):
    """Serve prompts and resources over stdio."""
    server: ManifestMCPServer = ctx.obj["server"]
    try:
        server.serve()
    except KeyboardInterrupt:
        pass


@cli.group()
def prompts():
    """Inspect the prompt catalog."""
    pass


@prompts.command("list")
@click.pass_context
def list_prompts(ctx):
    """List all prompts."""
    server: ManifestMCPServer = ctx.obj["server"]
    catalog = server.catalog.list_all()

    if not catalog:
        click.echo("No prompts found.")
        return

    click.echo(f"📝 Found {len(catalog)} prompts:\n")
    for prompt in catalog:
        description = prompt.description or ""
        click.echo(f"  {prompt.catalog_name:<30} {description}")


@prompts.command("show")
@click.argument("name")
@click.pass_context
def show_prompt(ctx, name: str):
    """Show the assembled messages for a prompt."""
    server: ManifestMCPServer = ctx.obj["server"]
    resolved = server.catalog.resolve_by_id(name)
    if resolved is None:
        click.echo(f"❌ Prompt not found: {name}", err=True)
        sys.exit(1)

    result = {
        "description": resolved.definition.description or "",
        "messages": server.resolver.build_messages(resolved),
    }
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@cli.group()
def resources():
    """Inspect the resource tree."""
    pass


@resources.command("list")
@click.pass_context
def list_resources(ctx):
    """List resources at the resource root."""
    server: ManifestMCPServer = ctx.obj["server"]
    names = server.store.list_resources()

    if not names:
        click.echo("No resources found.")
        return

    click.echo(f"📄 Found {len(names)} resources:\n")
    for name in names:
        click.echo(f"  {name:<40} {mime_type_for(name)}")


@resources.command("read")
@click.argument("name")
@click.pass_context
def read_resource(ctx, name: str):
    """Print the content of a resource."""
    server: ManifestMCPServer = ctx.obj["server"]
    content = server.store.read_resource(name)
    if content is None:
        click.echo(f"❌ Resource not found: {name}", err=True)
        sys.exit(1)
    click.echo(content, nl=False)


if __name__ == "__main__":
    cli()
