"""Apply parsed manifest documents through the operation surface.

Resources are applied strictly one after another: later documents may
depend on earlier ones (a Deployment on its Secret), and progress output
stays in file order. A failing resource is recorded and the batch
continues.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from kubekit.infra.constants import DEFAULT_CONSTANTS
from kubekit.infra.k8s.errors import KubekitError, UnsupportedKindError, ValidationError
from kubekit.infra.k8s.operations import KubernetesClient

# Lower-cased kind -> create operation
APPLY_OPERATIONS: dict[str, str] = {
    "deployment": "create_apps_v1_namespaced_deployment",
    "service": "create_core_v1_namespaced_service",
    "pod": "create_core_v1_namespaced_pod",
    "configmap": "create_core_v1_namespaced_config_map",
    "secret": "create_core_v1_namespaced_secret",
    "serviceaccount": "create_core_v1_namespaced_service_account",
    "persistentvolumeclaim": "create_core_v1_namespaced_persistent_volume_claim",
    "statefulset": "create_apps_v1_namespaced_stateful_set",
    "daemonset": "create_apps_v1_namespaced_daemon_set",
    "job": "create_batch_v1_namespaced_job",
    "cronjob": "create_batch_v1_namespaced_cron_job",
    "ingress": "create_networking_v1_namespaced_ingress",
}


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    FAILED = "failed"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass
class DispatchOutcome:
    """Result of applying one resource document."""

    resource: Any
    status: OutcomeStatus
    kind: str = ""
    name: str = ""
    namespace: str = ""
    error: KubekitError | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.APPLIED

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


ProgressCallback = Callable[[str, str, str], None]
OutcomeCallback = Callable[[DispatchOutcome], None]


def normalize_manifest(content: Any) -> list[Any]:
    """Turn parsed manifest content into an ordered list of documents.

    A list is used as-is, a ``kind: List`` document is unwrapped to its
    ``items``, and anything else becomes a one-element list.
    """
    if content is None:
        return []
    if isinstance(content, list):
        return content
    if (
        isinstance(content, Mapping)
        and content.get("kind") == "List"
        and isinstance(content.get("items"), list)
    ):
        return content["items"]
    return [content]


def _metadata(resource: Any) -> Mapping[str, Any]:
    if not isinstance(resource, Mapping):
        return {}
    metadata = resource.get("metadata")
    return metadata if isinstance(metadata, Mapping) else {}


def resolve_namespace(resource: Any, namespace: str | None = None) -> str:
    """Pick the target namespace for a resource.

    Document namespace wins over the caller's namespace, which wins over
    ``default``.
    """
    return (
        _metadata(resource).get("namespace")
        or namespace
        or DEFAULT_CONSTANTS.DEFAULT_NAMESPACE
    )


def identify_resource(resource: Any) -> tuple[str, str]:
    """Return the lower-cased kind and the name of a resource document.

    Raises:
        ValidationError: If the document is not a mapping or lacks either
    """
    if not isinstance(resource, Mapping):
        raise ValidationError("Resource must be a mapping")

    kind = str(resource.get("kind") or "").lower()
    name = _metadata(resource).get("name")
    if not kind:
        raise ValidationError("Resource must have a kind")
    if not name:
        raise ValidationError("Resource must have a name")
    return kind, str(name)


async def apply_resource(
    client: KubernetesClient,
    resource: Any,
    namespace: str,
    *,
    field_manager: str = DEFAULT_CONSTANTS.FIELD_MANAGER,
) -> DispatchOutcome:
    """Create one resource in the cluster.

    Args:
        client: Client exposing the operation surface
        resource: Parsed resource document
        namespace: Target namespace
        field_manager: Identity recorded by the server for this write

    Returns:
        APPLIED or NOT_IMPLEMENTED outcome

    Raises:
        ValidationError: If the document has no kind or no metadata.name
        TransportError: If the API call fails
    """
    kind, name = identify_resource(resource)

    operation_id = APPLY_OPERATIONS.get(kind)
    if operation_id is None:
        logger.info(f"Resource kind '{kind}' not implemented yet, skipping {name}")
        return DispatchOutcome(
            resource,
            OutcomeStatus.NOT_IMPLEMENTED,
            kind,
            name,
            namespace,
            error=UnsupportedKindError(kind),
        )

    await client.invoke(
        operation_id,
        path={"namespace": namespace},
        query={"pretty": "true", "fieldManager": field_manager},
        body=resource,
    )
    logger.debug(f"Applied {kind} {namespace}/{name}")
    return DispatchOutcome(resource, OutcomeStatus.APPLIED, kind, name, namespace)


async def apply_resources(
    client: KubernetesClient,
    content: Any,
    *,
    namespace: str | None = None,
    field_manager: str = DEFAULT_CONSTANTS.FIELD_MANAGER,
    on_progress: ProgressCallback | None = None,
    on_outcome: OutcomeCallback | None = None,
) -> list[DispatchOutcome]:
    """Apply every document of a parsed manifest, in order.

    Args:
        client: Client exposing the operation surface
        content: Parsed manifest (list, ``kind: List`` or single document)
        namespace: Namespace used for documents that do not set one
        field_manager: Identity recorded by the server for each write
        on_progress: Called with (kind, name, namespace) before each attempt
            on a document that has both a kind and a name
        on_outcome: Called with each outcome as soon as it is known

    Returns:
        One outcome per document, in document order
    """
    outcomes: list[DispatchOutcome] = []

    for resource in normalize_manifest(content):
        target = resolve_namespace(resource, namespace)
        kind = str(resource.get("kind") or "") if isinstance(resource, Mapping) else ""
        name = str(_metadata(resource).get("name") or "")

        try:
            if on_progress is not None:
                on_progress(*identify_resource(resource), target)
            outcome = await apply_resource(
                client, resource, target, field_manager=field_manager
            )
        except KubekitError as e:
            logger.warning(f"Failed to apply {kind or 'resource'} '{name}': {e}")
            outcome = DispatchOutcome(
                resource, OutcomeStatus.FAILED, kind.lower(), name, target, error=e
            )
        if on_outcome is not None:
            on_outcome(outcome)
        outcomes.append(outcome)

    return outcomes


def summarize(outcomes: list[DispatchOutcome]) -> dict[OutcomeStatus, int]:
    """Count outcomes per status."""
    counts = dict.fromkeys(OutcomeStatus, 0)
    for outcome in outcomes:
        counts[outcome.status] += 1
    return counts


def has_failures(outcomes: list[DispatchOutcome]) -> bool:
    return any(outcome.failed for outcome in outcomes)
