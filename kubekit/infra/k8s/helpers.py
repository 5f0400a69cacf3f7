from __future__ import annotations

import ssl

from loguru import logger

from kubekit.infra.k8s.config import (
    ConnectionConfig,
    get_default_config,
    get_service_account_ca_path,
)
from kubekit.infra.k8s.operations import KubernetesClient


def resolve_config(client_url: str | None = None) -> ConnectionConfig:
    """Resolve the connection config, honouring an explicit endpoint.

    Args:
        client_url: Endpoint given on the command line, if any

    Returns:
        The explicit endpoint without credentials when given, otherwise the
        in-cluster config or the kubectl proxy fallback
    """
    if client_url:
        return ConnectionConfig(endpoint=client_url)
    return get_default_config()


def get_tls_verify() -> bool | ssl.SSLContext:
    """Trust the service account CA when it is mounted."""
    ca_path = get_service_account_ca_path()
    if ca_path is None:
        return True
    logger.debug(f"Trusting cluster CA at {ca_path}")
    return ssl.create_default_context(cafile=ca_path)


def build_client(client_url: str | None = None) -> KubernetesClient:
    """Get a KubernetesClient for the current environment."""
    return KubernetesClient(resolve_config(client_url), verify=get_tls_verify())
