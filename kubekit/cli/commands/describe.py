"""Describe live objects."""

from typing import Annotated

import typer

from kubekit.cli.context import get_cli_context
from kubekit.cli.shared.console import console, with_error_handling
from kubekit.cli.shared.settings import get_current_namespace
from kubekit.infra.k8s import run_sync
from kubekit.infra.k8s.describe import describe_resource
from kubekit.infra.k8s.errors import UnsupportedKindError


@with_error_handling
def describe(
    ctx: typer.Context,
    kind: Annotated[
        str,
        typer.Argument(help="Resource type (pod, service, deployment)"),
    ],
    name: Annotated[str, typer.Argument(help="Resource name")],
    namespace: Annotated[
        str | None,
        typer.Option(
            "--namespace",
            "-n",
            help="Namespace (defaults to the current context namespace)",
        ),
    ] = None,
) -> None:
    """Show a detailed report for a single resource."""
    cli = get_cli_context(ctx)
    target = namespace or get_current_namespace()

    console.info(f"Describing {kind} {name} in namespace {target}...")

    try:
        lines = run_sync(describe_resource(cli.client, kind, name, target))
    except UnsupportedKindError as e:
        console.warn(e.message)
        return

    console.report(lines)
