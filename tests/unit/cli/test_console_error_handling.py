import io

import pytest
import typer
from rich.console import Console

from kubekit.cli.shared.console import CLIConsole, with_error_handling
from kubekit.infra.k8s.errors import HttpError, KubekitError


def test_with_error_handling_handles_kubekit_error():
    @with_error_handling
    def _command() -> None:
        raise KubekitError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_transport_error():
    @with_error_handling
    def _command() -> None:
        raise HttpError(500, "internal")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_passes_other_errors_through():
    @with_error_handling
    def _command() -> None:
        raise RuntimeError("unexpected")

    with pytest.raises(RuntimeError):
        _command()


def _capture() -> tuple[CLIConsole, io.StringIO]:
    buffer = io.StringIO()
    return CLIConsole(Console(file=buffer, width=200)), buffer


def test_fail_adds_hint_for_retryable_errors():
    cli_console, buffer = _capture()

    with pytest.raises(typer.Exit):
        cli_console.fail(HttpError(503, "unavailable"))

    output = buffer.getvalue()
    assert "HTTP error! status: 503" in output
    assert "Response body: unavailable" in output
    assert "transient" in output


def test_fail_without_hint_for_client_errors():
    cli_console, buffer = _capture()

    with pytest.raises(typer.Exit):
        cli_console.fail(HttpError(404, "not found"))

    assert "transient" not in buffer.getvalue()


def test_report_prints_lines_verbatim():
    cli_console, buffer = _capture()

    cli_console.report(["Labels:", "  [app]=web"])

    assert buffer.getvalue().splitlines() == ["Labels:", "  [app]=web"]
