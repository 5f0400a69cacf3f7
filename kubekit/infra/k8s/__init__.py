"""Kubernetes client layer.

This module provides connection configuration resolution, the HTTP
transport, the generated operation surface and manifest dispatch.

Example:
    from kubekit.infra.k8s import KubernetesClient, get_default_config, run_sync

    client = KubernetesClient(get_default_config())
    deployment = run_sync(
        client.read_apps_v1_namespaced_deployment(
            path={"namespace": "default", "name": "web"}
        )
    )
"""

from .config import (
    ConnectionConfig,
    detect_endpoint,
    get_default_config,
    get_in_cluster_config,
    get_service_account_ca_path,
    read_service_account_token,
)
from .dispatcher import (
    DispatchOutcome,
    OutcomeStatus,
    apply_resource,
    apply_resources,
    normalize_manifest,
    resolve_namespace,
)
from .errors import (
    ConfigurationError,
    DecodeError,
    HttpError,
    KubekitError,
    NetworkError,
    RequestTimeoutError,
    TransportError,
    UnknownOperationError,
    UnsupportedKindError,
    ValidationError,
)
from .operations import KubernetesClient, OperationSpec
from .transport import APIClient, RequestDescriptor
from .utils import run_sync

__all__ = [
    # Configuration
    "ConnectionConfig",
    "detect_endpoint",
    "read_service_account_token",
    "get_service_account_ca_path",
    "get_in_cluster_config",
    "get_default_config",
    # Clients
    "APIClient",
    "KubernetesClient",
    "RequestDescriptor",
    "OperationSpec",
    # Dispatch
    "DispatchOutcome",
    "OutcomeStatus",
    "normalize_manifest",
    "resolve_namespace",
    "apply_resource",
    "apply_resources",
    # Errors
    "KubekitError",
    "ConfigurationError",
    "ValidationError",
    "UnsupportedKindError",
    "UnknownOperationError",
    "TransportError",
    "RequestTimeoutError",
    "NetworkError",
    "HttpError",
    "DecodeError",
    # Utilities
    "run_sync",
]
