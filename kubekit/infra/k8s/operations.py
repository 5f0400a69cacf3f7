"""Generated operation surface.

Instead of hand-writing one method per (group, kind, verb), the operation
table is expanded at import time from ``resources.yaml``. Every operation
goes through ``KubernetesClient.invoke`` so request/response handling lives
only in the transport.

Example:
    client = KubernetesClient(get_default_config())
    pods = run_sync(
        client.invoke("list_core_v1_namespaced_pod", path={"namespace": "default"})
    )
    # Equivalent attribute form:
    pods = run_sync(client.list_core_v1_namespaced_pod(path={"namespace": "default"}))
"""

from __future__ import annotations

import re
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass
from functools import partial
from importlib.resources import files
from typing import Any, Literal
from urllib.parse import quote

import pydantic
import yaml
from loguru import logger
from pydantic import BaseModel, Field

from kubekit.infra.k8s.errors import UnknownOperationError, ValidationError
from kubekit.infra.k8s.transport import QUERY_METHODS, APIClient, RequestDescriptor

Verb = Literal["list", "read", "create", "replace", "patch", "delete"]

ALL_VERBS: tuple[Verb, ...] = ("list", "read", "create", "replace", "patch", "delete")

# verb -> (HTTP method, targets a single named item)
VERB_METHODS: dict[str, tuple[str, bool]] = {
    "list": ("GET", False),
    "read": ("GET", True),
    "create": ("POST", False),
    "replace": ("PUT", True),
    "patch": ("PATCH", True),
    "delete": ("DELETE", True),
}

_PATH_PARAM = re.compile(r"\{(\w+)\}")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class ResourceSchema(BaseModel):
    """One API resource as described in resources.yaml."""

    group: str = "core"
    version: str
    kind: str
    plural: str
    namespaced: bool = True
    verbs: list[Verb] = Field(default_factory=lambda: list(ALL_VERBS))

    @property
    def base_path(self) -> str:
        if self.group == "core":
            return f"/api/{self.version}"
        return f"/apis/{self.group}/{self.version}"

    @property
    def id_prefix(self) -> str:
        # networking.k8s.io -> networking
        return f"{self.group.split('.')[0]}_{self.version}"

    @property
    def snake_kind(self) -> str:
        return _CAMEL_BOUNDARY.sub("_", self.kind).lower()


class ResourceCatalog(BaseModel):
    resources: list[ResourceSchema]


@dataclass(frozen=True)
class OperationSpec:
    """A single generated operation."""

    operation_id: str
    method: str
    path_template: str
    kind: str | None = None
    namespaced: bool = False

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PATH_PARAM.findall(self.path_template))

    def render_path(self, params: Mapping[str, Any]) -> str:
        """Fill the path template from the given parameters.

        Raises:
            ValidationError: If a required path parameter is missing
        """
        missing = [p for p in self.path_params if not params.get(p)]
        if missing:
            raise ValidationError(
                f"Operation {self.operation_id} requires path parameter(s): "
                f"{', '.join(missing)}"
            )
        return _PATH_PARAM.sub(
            lambda m: quote(str(params[m.group(1)]), safe=""), self.path_template
        )


def load_resource_catalog(text: str | None = None) -> ResourceCatalog:
    """Load and validate the resource schema.

    Args:
        text: YAML content; defaults to the packaged resources.yaml

    Raises:
        ValueError: If the YAML is malformed or fails validation
    """
    if text is None:
        text = (
            files("kubekit.infra.k8s")
            .joinpath("resources.yaml")
            .read_text(encoding="utf-8")
        )
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing resource schema: {e}") from e

    try:
        return ResourceCatalog(**(loaded or {}))
    except pydantic.ValidationError as e:
        raise ValueError(f"Invalid resource schema: {e}") from e


def build_operations(catalog: ResourceCatalog) -> dict[str, OperationSpec]:
    """Expand a resource catalog into the operation table."""
    operations: dict[str, OperationSpec] = {
        "get_core_api_versions": OperationSpec("get_core_api_versions", "GET", "/api/"),
        "get_api_versions": OperationSpec("get_api_versions", "GET", "/apis/"),
    }

    for schema in catalog.resources:
        if schema.namespaced:
            collection = f"{schema.base_path}/namespaces/{{namespace}}/{schema.plural}"
            scope = "namespaced_"
        else:
            collection = f"{schema.base_path}/{schema.plural}"
            scope = ""

        for verb in schema.verbs:
            method, item = VERB_METHODS[verb]
            operation_id = f"{verb}_{schema.id_prefix}_{scope}{schema.snake_kind}"
            operations[operation_id] = OperationSpec(
                operation_id=operation_id,
                method=method,
                path_template=f"{collection}/{{name}}" if item else collection,
                kind=schema.kind,
                namespaced=schema.namespaced,
            )

    logger.debug(f"Generated {len(operations)} API operations")
    return operations


OPERATIONS: dict[str, OperationSpec] = build_operations(load_resource_catalog())


class KubernetesClient(APIClient):
    """APIClient with the generated operation surface attached."""

    operations: Mapping[str, OperationSpec] = OPERATIONS

    async def invoke(
        self,
        operation_id: str,
        *,
        path: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """Call an operation by id.

        Args:
            operation_id: Generated operation id
            path: Path parameters (namespace, name)
            query: Query parameters
            body: JSON request body
            headers: Per-call headers
            timeout_ms: Per-call timeout

        Returns:
            Decoded JSON response

        Raises:
            UnknownOperationError: If the id is not in the operation table
            ValidationError: If a path parameter is missing
        """
        spec = self.operations.get(operation_id)
        if spec is None:
            raise UnknownOperationError(operation_id)

        return await self.execute(
            RequestDescriptor(
                spec.render_path(path or {}),
                spec.method,
                query=query,
                body=None if spec.method in QUERY_METHODS else body,
                headers=headers,
                timeout_ms=timeout_ms,
            )
        )

    def __getattr__(self, name: str) -> Callable[..., Coroutine[Any, Any, Any]]:
        if not name.startswith("_") and name in type(self).operations:
            return partial(self.invoke, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
