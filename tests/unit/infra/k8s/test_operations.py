"""Tests for the generated operation surface."""

import json

import httpx
import pytest

from kubekit.infra.k8s.errors import UnknownOperationError, ValidationError
from kubekit.infra.k8s.operations import (
    OPERATIONS,
    OperationSpec,
    ResourceSchema,
    build_operations,
    load_resource_catalog,
)


class TestCatalog:
    """Tests for loading and expanding the resource catalog."""

    def test_packaged_catalog_loads(self) -> None:
        catalog = load_resource_catalog()

        kinds = {resource.kind for resource in catalog.resources}
        assert {"Pod", "Service", "Deployment", "ConfigMap", "Secret"} <= kinds

    def test_malformed_yaml_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Error parsing resource schema"):
            load_resource_catalog("resources: [unclosed")

    def test_invalid_schema_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid resource schema"):
            load_resource_catalog("resources:\n  - kind: Pod\n")

    def test_unknown_verb_rejected(self) -> None:
        text = (
            "resources:\n"
            "  - version: v1\n"
            "    kind: Pod\n"
            "    plural: pods\n"
            "    verbs: [watch]\n"
        )
        with pytest.raises(ValueError):
            load_resource_catalog(text)

    def test_schema_naming(self) -> None:
        schema = ResourceSchema(
            group="networking.k8s.io", version="v1", kind="IngressClass", plural="ingressclasses"
        )

        assert schema.base_path == "/apis/networking.k8s.io/v1"
        assert schema.id_prefix == "networking_v1"
        assert schema.snake_kind == "ingress_class"
        assert ResourceSchema(version="v1", kind="Pod", plural="pods").base_path == "/api/v1"

    def test_build_operations_restricts_verbs(self) -> None:
        catalog = load_resource_catalog(
            "resources:\n"
            "  - version: v1\n"
            "    kind: Event\n"
            "    plural: events\n"
            "    verbs: [list, read]\n"
        )

        operations = build_operations(catalog)

        assert "list_core_v1_namespaced_event" in operations
        assert "read_core_v1_namespaced_event" in operations
        assert "create_core_v1_namespaced_event" not in operations


class TestGeneratedOperations:
    """Tests for the packaged operation table."""

    @pytest.mark.parametrize(
        ("operation_id", "method", "template"),
        [
            (
                "create_apps_v1_namespaced_deployment",
                "POST",
                "/apis/apps/v1/namespaces/{namespace}/deployments",
            ),
            (
                "read_core_v1_namespaced_service",
                "GET",
                "/api/v1/namespaces/{namespace}/services/{name}",
            ),
            ("list_core_v1_namespace", "GET", "/api/v1/namespaces"),
            ("patch_core_v1_node", "PATCH", "/api/v1/nodes/{name}"),
            (
                "replace_core_v1_namespaced_config_map",
                "PUT",
                "/api/v1/namespaces/{namespace}/configmaps/{name}",
            ),
            (
                "delete_batch_v1_namespaced_cron_job",
                "DELETE",
                "/apis/batch/v1/namespaces/{namespace}/cronjobs/{name}",
            ),
            ("get_core_api_versions", "GET", "/api/"),
            ("get_api_versions", "GET", "/apis/"),
        ],
    )
    def test_operation_table(self, operation_id: str, method: str, template: str) -> None:
        spec = OPERATIONS[operation_id]

        assert spec.method == method
        assert spec.path_template == template

    def test_render_path_quotes_values(self) -> None:
        spec = OperationSpec("read_x", "GET", "/api/v1/namespaces/{namespace}/pods/{name}")

        assert spec.path_params == ("namespace", "name")
        assert spec.render_path({"namespace": "dev", "name": "a/b"}) == (
            "/api/v1/namespaces/dev/pods/a%2Fb"
        )

    def test_render_path_missing_param(self) -> None:
        spec = OPERATIONS["read_core_v1_namespaced_pod"]

        with pytest.raises(ValidationError, match="name"):
            spec.render_path({"namespace": "default"})


class TestKubernetesClient:
    """Tests for invoking operations."""

    @pytest.mark.asyncio
    async def test_invoke_create(self, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json={"kind": "Deployment"})

        client = make_client(handler)
        body = {"kind": "Deployment", "metadata": {"name": "web"}}

        result = await client.invoke(
            "create_apps_v1_namespaced_deployment",
            path={"namespace": "dev"},
            body=body,
        )

        assert result == {"kind": "Deployment"}
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/apis/apps/v1/namespaces/dev/deployments"
        assert json.loads(requests[0].content) == body

    @pytest.mark.asyncio
    async def test_attribute_access(self, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"items": []})

        client = make_client(handler)

        result = await client.list_core_v1_namespaced_pod(
            path={"namespace": "default"}, query={"labelSelector": "app=web"}
        )

        assert result == {"items": []}
        assert requests[0].url.path == "/api/v1/namespaces/default/pods"
        assert requests[0].url.params["labelSelector"] == "app=web"

    @pytest.mark.asyncio
    async def test_read_drops_body(self, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        client = make_client(handler)

        await client.invoke(
            "read_core_v1_namespaced_pod",
            path={"namespace": "default", "name": "web"},
            body={"ignored": True},
        )

        assert requests[0].content == b""

    @pytest.mark.asyncio
    async def test_unknown_operation(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200, json={}))

        with pytest.raises(UnknownOperationError) as excinfo:
            await client.invoke("create_core_v1_namespaced_widget")

        assert isinstance(excinfo.value, KeyError)
        assert str(excinfo.value) == "Unknown operation: create_core_v1_namespaced_widget"

    def test_unknown_attribute(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200, json={}))

        with pytest.raises(AttributeError):
            client.create_core_v1_namespaced_widget  # noqa: B018
