"""Display cluster information."""

from typing import Any

import typer

from kubekit.cli.context import get_cli_context
from kubekit.cli.shared.console import console, with_error_handling
from kubekit.infra.k8s import KubernetesClient, run_sync


async def _fetch_versions(client: KubernetesClient) -> tuple[Any, Any]:
    core = await client.invoke("get_core_api_versions")
    groups = await client.invoke("get_api_versions")
    return core or {}, groups or {}


@with_error_handling
def cluster_info(ctx: typer.Context) -> None:
    """Show the API endpoint and the API versions it serves."""
    cli = get_cli_context(ctx)

    console.print_header("Kubernetes cluster info")
    console.print(f"Endpoint: {cli.client.config.endpoint}")

    with console.status("Querying API server..."):
        core, groups = run_sync(_fetch_versions(cli.client))

    console.print_subheader("API Versions:")
    for version in core.get("versions") or []:
        console.print(f"  {version}")

    console.print_subheader("API Groups:")
    for group in groups.get("groups") or []:
        preferred = (group.get("preferredVersion") or {}).get("groupVersion")
        console.print(f"  {group.get('name')} ({preferred or '<unknown>'})")
