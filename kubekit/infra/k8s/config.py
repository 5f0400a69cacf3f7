"""Connection configuration resolution.

Builds a ready-to-use ConnectionConfig from layered sources, in the same
order client-go uses: explicit override, in-cluster service account, then
the kubectl proxy on localhost.

These helpers are plain functions: they read process environment and the
service account mount, and never need a constructed client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from kubekit.infra.constants import DEFAULT_CONSTANTS
from kubekit.infra.k8s.errors import ConfigurationError


@dataclass(frozen=True)
class ConnectionConfig:
    """Resolved connection settings for one APIClient."""

    endpoint: str
    token: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_CONSTANTS.DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ConfigurationError("Connection endpoint must not be empty")
        if self.timeout_ms <= 0:
            raise ConfigurationError(
                f"Timeout must be a positive number of milliseconds, got {self.timeout_ms}"
            )


def detect_endpoint(fallback: str = DEFAULT_CONSTANTS.DEFAULT_ENDPOINT) -> str:
    """Detect the Kubernetes API endpoint from environment variables.

    Priority:
        1. KUBERNETES_API_URL (explicit override)
        2. KUBERNETES_SERVICE_HOST + KUBERNETES_SERVICE_PORT (in-cluster)
        3. fallback (defaults to http://127.0.0.1:8001, i.e. kubectl proxy)

    Args:
        fallback: Endpoint returned when no environment variable is set

    Returns:
        The endpoint URL
    """
    explicit = os.getenv(DEFAULT_CONSTANTS.API_URL_ENV)
    if explicit:
        return explicit

    host = os.getenv(DEFAULT_CONSTANTS.SERVICE_HOST_ENV)
    if host:
        port = os.getenv(
            DEFAULT_CONSTANTS.SERVICE_PORT_ENV, DEFAULT_CONSTANTS.DEFAULT_SERVICE_PORT
        )
        return f"https://{host}:{port}"

    return fallback


def read_service_account_token(
    path: str | Path = DEFAULT_CONSTANTS.SA_TOKEN_PATH,
) -> str | None:
    """Read the mounted service account bearer token.

    Args:
        path: Location of the token file

    Returns:
        The stripped token, or None when not running in a pod or the file
        is unreadable
    """
    try:
        value = Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug(f"No service account token at {path}: {exc}")
        return None
    return value or None


def get_service_account_ca_path(
    path: str | Path = DEFAULT_CONSTANTS.SA_CA_PATH,
) -> str | None:
    """Return the service account CA certificate path if it exists.

    The CLI uses this to trust the cluster's API server certificate.
    """
    return str(path) if Path(path).is_file() else None


def _timeout_from_env() -> int:
    raw = os.getenv(DEFAULT_CONSTANTS.TIMEOUT_ENV)
    if not raw:
        return DEFAULT_CONSTANTS.DEFAULT_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise ConfigurationError(
            f"{DEFAULT_CONSTANTS.TIMEOUT_ENV} must be a positive integer, got '{raw}'"
        )
    return value


def get_in_cluster_config() -> ConnectionConfig:
    """Build configuration for usage inside a Kubernetes pod.

    Equivalent to client-go's ``rest.InClusterConfig()``.

    Raises:
        ConfigurationError: If the token file or the in-cluster environment
            variables are missing
    """
    endpoint = detect_endpoint()
    token = read_service_account_token()

    if not token:
        raise ConfigurationError(
            "Unable to load in-cluster config: service account token not found at "
            f"{DEFAULT_CONSTANTS.SA_TOKEN_PATH}. Are you running inside a Kubernetes pod?"
        )
    if endpoint == DEFAULT_CONSTANTS.DEFAULT_ENDPOINT:
        raise ConfigurationError(
            f"Unable to load in-cluster config: {DEFAULT_CONSTANTS.SERVICE_HOST_ENV} "
            "is not set. Are you running inside a Kubernetes pod?"
        )

    return ConnectionConfig(
        endpoint=endpoint, token=token, timeout_ms=_timeout_from_env()
    )


def get_default_config(
    fallback_endpoint: str = DEFAULT_CONSTANTS.DEFAULT_ENDPOINT,
) -> ConnectionConfig:
    """Build configuration with automatic detection.

    Tries in-cluster first and falls back to the kubectl proxy at
    localhost:8001. Equivalent to client-go's ``BuildConfigFromFlags("", "")``.
    """
    try:
        return get_in_cluster_config()
    except ConfigurationError as e:
        logger.debug(f"In-cluster config unavailable, using {fallback_endpoint}: {e}")

    try:
        timeout_ms = _timeout_from_env()
    except ConfigurationError as e:
        logger.warning(f"{e.message}; using default timeout")
        timeout_ms = DEFAULT_CONSTANTS.DEFAULT_TIMEOUT_MS
    return ConnectionConfig(endpoint=fallback_endpoint, timeout_ms=timeout_ms)
