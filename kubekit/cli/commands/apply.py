"""Apply manifest files to the cluster."""

from pathlib import Path
from typing import Annotated, Any

import typer

from kubekit.cli.context import get_cli_context
from kubekit.cli.shared.console import console, with_error_handling
from kubekit.infra.k8s import run_sync
from kubekit.infra.k8s.dispatcher import (
    DispatchOutcome,
    OutcomeStatus,
    apply_resources,
    has_failures,
    summarize,
)
from kubekit.infra.k8s.manifest import read_manifest


def _display_kind(outcome: DispatchOutcome) -> str:
    resource: Any = outcome.resource
    if isinstance(resource, dict) and resource.get("kind"):
        return str(resource["kind"])
    return outcome.kind or "Resource"


def _print_progress(kind: str, name: str, namespace: str) -> None:
    console.progress(f'Applying {kind or "resource"} "{name}" in namespace {namespace}...')


def _print_outcome(outcome: DispatchOutcome) -> None:
    kind = _display_kind(outcome)
    if outcome.status is OutcomeStatus.APPLIED:
        console.ok(f'{kind} "{outcome.name}" created/updated successfully')
    elif outcome.status is OutcomeStatus.NOT_IMPLEMENTED:
        console.warn(f'Resource kind "{outcome.kind}" not implemented yet')
    else:
        message = outcome.error.message if outcome.error else "unknown error"
        console.error(
            f'Error applying {outcome.kind or "resource"} "{outcome.name}": {message}',
            outcome.error.details if outcome.error else None,
        )


@with_error_handling
def apply(
    ctx: typer.Context,
    file: Annotated[
        Path,
        typer.Argument(help="Path to a YAML manifest (one or more documents)"),
    ],
    namespace: Annotated[
        str | None,
        typer.Option(
            "--namespace",
            "-n",
            help="Namespace for resources that do not set one",
        ),
    ] = None,
) -> None:
    """Create the resources described in a manifest file.

    Resources are applied in file order. A failing resource does not stop
    the rest of the file; the command exits non-zero if any failed.
    """
    cli = get_cli_context(ctx)

    if not file.exists():
        console.handle_error(f"File not found: {file}")
    if not file.is_file():
        console.handle_error(f"Not a regular file: {file}")

    content = read_manifest(file)

    outcomes = run_sync(
        apply_resources(
            cli.client,
            content,
            namespace=namespace,
            field_manager=cli.constants.FIELD_MANAGER,
            on_progress=_print_progress,
            on_outcome=_print_outcome,
        )
    )

    counts = summarize(outcomes)
    summary = (
        f"Apply completed: {counts[OutcomeStatus.APPLIED]} applied, "
        f"{counts[OutcomeStatus.FAILED]} failed, "
        f"{counts[OutcomeStatus.NOT_IMPLEMENTED]} skipped"
    )

    if has_failures(outcomes):
        console.warn(summary)
        raise typer.Exit(1)
    console.ok(summary)
