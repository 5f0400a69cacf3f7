"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from kubekit.cli.shared.console import CLIConsole, console
from kubekit.infra.constants import ClientConstants, DEFAULT_CONSTANTS
from kubekit.infra.k8s.helpers import build_client
from kubekit.infra.k8s.operations import KubernetesClient


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    client: KubernetesClient
    constants: ClientConstants


def build_cli_context(client_url: str | None = None) -> CLIContext:
    """Build a fresh CLIContext."""
    return CLIContext(
        console=console,
        client=build_client(client_url),
        constants=DEFAULT_CONSTANTS,
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
