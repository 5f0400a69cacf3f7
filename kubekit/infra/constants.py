"""Client constants and configuration defaults.

This module centralizes the environment variable names, service account
mount paths, and default values used by the configuration resolver,
transport client and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ClientConstants:
    """Constants for connecting to the Kubernetes API.

    All attributes are class-level and immutable.
    """

    # Environment variables
    API_URL_ENV: str = "KUBERNETES_API_URL"
    SERVICE_HOST_ENV: str = "KUBERNETES_SERVICE_HOST"
    SERVICE_PORT_ENV: str = "KUBERNETES_SERVICE_PORT"
    TIMEOUT_ENV: str = "KUBEKIT_TIMEOUT_MS"
    SETTINGS_PATH_ENV: str = "KUBEKIT_CONFIG"

    # Service account mount (in-cluster)
    SA_TOKEN_PATH: str = "/var/run/secrets/kubernetes.io/serviceaccount/token"
    SA_CA_PATH: str = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"

    # kubectl proxy convention
    DEFAULT_ENDPOINT: str = "http://127.0.0.1:8001"
    DEFAULT_SERVICE_PORT: str = "443"

    # Timeouts
    DEFAULT_TIMEOUT_MS: int = 10000

    # Namespaces
    DEFAULT_NAMESPACE: str = "default"

    # Server-side conflict attribution for write operations
    FIELD_MANAGER: str = "kubekit-cli"

    @property
    def default_settings_path(self) -> Path:
        """Get path to the local CLI settings file."""
        return Path.home() / ".kubekit" / "config.yaml"


DEFAULT_CONSTANTS = ClientConstants()
