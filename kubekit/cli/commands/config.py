"""Local context configuration commands."""

from typing import Annotated

import typer

from kubekit.cli.shared.console import console, with_error_handling
from kubekit.cli.shared.settings import get_current_namespace, set_current_namespace

config_app = typer.Typer(
    name="config",
    help="Manage the current context namespace.",
    no_args_is_help=True,
)


@config_app.command("get-context")
@with_error_handling
def get_context() -> None:
    """Display the current context."""
    console.ok(f"Current namespace: {get_current_namespace()}")


@config_app.command("set-context")
@with_error_handling
def set_context(
    current: Annotated[
        bool,
        typer.Option("--current", help="Modify the current context"),
    ] = False,
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Namespace to use by default"),
    ] = None,
) -> None:
    """Set the namespace of the current context."""
    if not current:
        console.handle_error("Missing --current flag")
    if not namespace:
        console.handle_error("Missing --namespace")

    set_current_namespace(namespace)
    console.ok(f'Namespace set to "{namespace}"')
