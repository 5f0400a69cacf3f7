"""Fixed-format textual reports for live objects, in the style of
``kubectl describe``.

Each ``describe_*`` function takes the decoded API object and returns the
report as a list of lines.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from kubekit.infra.k8s.errors import UnsupportedKindError
from kubekit.infra.k8s.operations import KubernetesClient

EVENTS_PLACEHOLDER = "  <Events not available in this implementation>"

# Lower-cased kind -> read operation
DESCRIBE_OPERATIONS: dict[str, str] = {
    "pod": "read_core_v1_namespaced_pod",
    "service": "read_core_v1_namespaced_service",
    "deployment": "read_apps_v1_namespaced_deployment",
}


def _fmt(value: Any, default: str = "<none>") -> str:
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _compact(value: Any) -> str:
    return json.dumps(value or {}, separators=(",", ":"))


def _ports(container: dict[str, Any]) -> str:
    ports = [str(p.get("containerPort")) for p in container.get("ports") or []]
    return ", ".join(ports) or "<none>"


def describe_pod(pod: dict[str, Any]) -> list[str]:
    metadata = pod.get("metadata") or {}
    spec = pod.get("spec") or {}
    status = pod.get("status") or {}

    lines = [
        f"Name:         {_fmt(metadata.get('name'))}",
        f"Namespace:    {_fmt(metadata.get('namespace'))}",
        f"Priority:     {spec.get('priority') or 0}",
        f"Node:         {spec.get('nodeName') or '<none>'}",
        f"Start Time:   {status.get('startTime') or '<unknown>'}",
        "",
        "Labels:",
    ]
    for key, value in (metadata.get("labels") or {}).items():
        lines.append(f"  {key}={value}")

    lines += [
        "",
        f"Status:       {_fmt(status.get('phase'))}",
        f"IP:           {_fmt(status.get('podIP'))}",
        "",
        "Containers:",
    ]

    statuses = {s.get("name"): s for s in status.get("containerStatuses") or []}
    for container in spec.get("containers") or []:
        lines += [
            f"  {container.get('name')}:",
            f"    Image:      {_fmt(container.get('image'))}",
            f"    Ports:      {_ports(container)}",
        ]
        container_status = statuses.get(container.get("name"))
        if container_status:
            lines += [
                f"    Ready:      {_fmt(container_status.get('ready'))}",
                f"    Restarts:   {_fmt(container_status.get('restartCount'), '0')}",
            ]
            states = list((container_status.get("state") or {}).items())
            if states:
                state, details = states[0]
                lines.append(f"    State:      {state}")
                if isinstance(details, dict):
                    for key, value in details.items():
                        lines.append(f"      {key}: {_fmt(value)}")
        lines.append("")

    lines += ["Events:", EVENTS_PLACEHOLDER]
    return lines


def describe_service(service: dict[str, Any]) -> list[str]:
    metadata = service.get("metadata") or {}
    spec = service.get("spec") or {}

    lines = [
        f"Name:              {_fmt(metadata.get('name'))}",
        f"Namespace:         {_fmt(metadata.get('namespace'))}",
        f"Labels:            {_compact(metadata.get('labels'))}",
        f"Selector:          {_compact(spec.get('selector'))}",
        f"Type:              {_fmt(spec.get('type'))}",
        f"IP:                {_fmt(spec.get('clusterIP'))}",
    ]

    if spec.get("ports"):
        lines += ["", "Ports:"]
        for port in spec["ports"]:
            lines.append(
                f"  {port.get('name') or '<unnamed>'}: "
                f"{_fmt(port.get('port'))}/{_fmt(port.get('protocol'))} "
                f"-> {_fmt(port.get('targetPort'))}"
            )

    lines += [
        "",
        f"Session Affinity: {spec.get('sessionAffinity') or 'None'}",
        "",
        "Events:",
        EVENTS_PLACEHOLDER,
    ]
    return lines


def describe_deployment(deployment: dict[str, Any]) -> list[str]:
    metadata = deployment.get("metadata") or {}
    spec = deployment.get("spec") or {}
    status = deployment.get("status") or {}

    replicas = (
        f"{status.get('replicas') or 0} desired | "
        f"{status.get('updatedReplicas') or 0} updated | "
        f"{status.get('readyReplicas') or 0} ready | "
        f"{status.get('availableReplicas') or 0} available"
    )
    lines = [
        f"Name:               {_fmt(metadata.get('name'))}",
        f"Namespace:          {_fmt(metadata.get('namespace'))}",
        f"CreationTimestamp:  {_fmt(metadata.get('creationTimestamp'))}",
        f"Labels:             {_compact(metadata.get('labels'))}",
        f"Annotations:        {_compact(metadata.get('annotations'))}",
        f"Selector:           {_compact((spec.get('selector') or {}).get('matchLabels'))}",
        f"Replicas:           {replicas}",
        f"StrategyType:       {_fmt((spec.get('strategy') or {}).get('type'))}",
    ]

    containers = ((spec.get("template") or {}).get("spec") or {}).get("containers")
    if containers:
        lines += ["", "Containers:"]
        for container in containers:
            env = ", ".join(
                f"{e.get('name')}={_fmt(e.get('value'), '')}"
                for e in container.get("env") or []
            )
            lines += [
                f"  {container.get('name')}:",
                f"    Image:      {_fmt(container.get('image'))}",
                f"    Ports:      {_ports(container)}",
                f"    Environment: {env or '<none>'}",
                "",
            ]

    if status.get("conditions"):
        lines += ["", "Conditions:", "  Type           Status  Reason"]
        for condition in status["conditions"]:
            lines.append(
                f"  {_fmt(condition.get('type'), ''):<15}"
                f"{_fmt(condition.get('status'), ''):<8}"
                f"{condition.get('reason') or ''}"
            )

    lines += ["", "Events:", EVENTS_PLACEHOLDER]
    return lines


DESCRIBERS: dict[str, Callable[[dict[str, Any]], list[str]]] = {
    "pod": describe_pod,
    "service": describe_service,
    "deployment": describe_deployment,
}


async def describe_resource(
    client: KubernetesClient, kind: str, name: str, namespace: str
) -> list[str]:
    """Fetch a live object and render its report.

    Raises:
        UnsupportedKindError: If there is no report for this kind
        TransportError: If the API call fails
    """
    kind = kind.lower()
    operation_id = DESCRIBE_OPERATIONS.get(kind)
    if operation_id is None:
        raise UnsupportedKindError(kind)

    obj = await client.invoke(
        operation_id, path={"namespace": namespace, "name": name}
    )
    return DESCRIBERS[kind](obj or {})
