"""Shared fixtures for kubekit tests."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from kubekit.infra.constants import DEFAULT_CONSTANTS
from kubekit.infra.k8s.config import ConnectionConfig
from kubekit.infra.k8s.operations import KubernetesClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear connection env vars and point local settings at a temp file."""
    for name in (
        DEFAULT_CONSTANTS.API_URL_ENV,
        DEFAULT_CONSTANTS.SERVICE_HOST_ENV,
        DEFAULT_CONSTANTS.SERVICE_PORT_ENV,
        DEFAULT_CONSTANTS.TIMEOUT_ENV,
    ):
        monkeypatch.delenv(name, raising=False)

    settings_path = tmp_path / "kubekit" / "config.yaml"
    monkeypatch.setenv(DEFAULT_CONSTANTS.SETTINGS_PATH_ENV, str(settings_path))
    return settings_path


@pytest.fixture
def make_client() -> Callable[..., KubernetesClient]:
    """Build a KubernetesClient whose requests go to an in-memory handler."""

    def _make(
        handler: Handler,
        endpoint: str = "https://k8s.test:6443",
        token: str | None = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int = DEFAULT_CONSTANTS.DEFAULT_TIMEOUT_MS,
    ) -> KubernetesClient:
        config = ConnectionConfig(
            endpoint=endpoint,
            token=token,
            headers=headers or {},
            timeout_ms=timeout_ms,
        )
        return KubernetesClient(config, transport=httpx.MockTransport(handler))

    return _make
