"""Console output for kubekit commands.

All user-facing output goes through ``CLIConsole`` so commands share one
set of markers and one way of turning errors into exit codes.
"""

from collections.abc import Callable, Iterable
from functools import wraps

import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel
from rich.status import Status
from rich.text import Text

from kubekit.infra.k8s.errors import KubekitError, TransportError


class CLIConsole:
    """Rich console wrapper for kubekit output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def status(self, status: str) -> Status:
        return self.console.status(status)

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def progress(self, msg: str) -> None:
        self.console.print(Text(msg, style="blue"))

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def error(self, msg: str, details: str | None = None) -> None:
        self.console.print(f"[red]❌[/red] {msg}")
        if details:
            self.console.print(Text(f"   {details}", style="dim"))

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def report(self, lines: Iterable[str]) -> None:
        """Print pre-formatted report lines without markup processing."""
        for line in lines:
            self.console.print(Text(line))

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Print an error and exit.

        Args:
            message: Error message to display
            details: Optional additional details, shown in a panel
            exit_code: Exit code to use
        """
        self.console.print(f"\n[bold red]❌ {message}[/bold red]\n")
        if details:
            self.console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)

    def fail(self, error: KubekitError) -> None:
        """Report a kubekit error and exit with status 1."""
        if isinstance(error, TransportError) and error.retryable:
            self.console.print(
                "[dim]The failure looks transient; running the command again may succeed.[/dim]"
            )
        self.handle_error(error.message, error.details)

    def print_header(self, title: str, style: str = "blue") -> None:
        self.console.print(
            Panel.fit(f"[bold {style}]{title}[/bold {style}]", border_style=style)
        )

    def print_subheader(self, title: str) -> None:
        self.console.print(f"\n[bold underline]{title}[/bold underline]")


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator turning kubekit errors into a formatted message and exit 1.

    Ctrl-C exits with 130. Other exceptions propagate unchanged.
    """

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except KubekitError as e:
            console.fail(e)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
