"""Main CLI application module.

This module provides the main entry point for the kubekit CLI.

Commands:
- apply: Create resources from a manifest file
- describe: Detailed report for a pod, service or deployment
- cluster-info: API endpoint and served versions
- config: Current context namespace
"""

import sys
from typing import Annotated

import typer
from loguru import logger

from kubekit.infra.k8s.errors import KubekitError

from .commands import apply, cluster_info, config_app, describe
from .context import build_cli_context
from .shared.console import console

# Create the main CLI application
app = typer.Typer(
    help="☸️  kubekit - Lightweight Kubernetes API client",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    client_url: Annotated[
        str | None,
        typer.Option(
            "--client-url",
            help="API server URL (overrides environment detection)",
        ),
    ] = None,
) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")

    try:
        ctx.obj = build_cli_context(client_url)
    except KubekitError as e:
        console.handle_error(e.message, e.details)


app.command("apply")(apply)
app.command("describe")(describe)
app.command("cluster-info")(cluster_info)
app.add_typer(config_app, name="config")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
