"""HTTP transport for the Kubernetes API.

Executes one request at a time against a resolved ConnectionConfig:
merges headers, injects the bearer token, bounds the call with a deadline,
encodes the body and classifies failures into TransportError subclasses.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass
from ssl import SSLContext
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger

from kubekit.infra.k8s.config import ConnectionConfig
from kubekit.infra.k8s.errors import (
    DecodeError,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    ValidationError,
)

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

# Verbs that carry parameters in the query string and never send a body
QUERY_METHODS = frozenset({"GET", "DELETE"})

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class RequestDescriptor:
    """A single API call, built per request and never persisted."""

    path: str
    method: str = "GET"
    query: Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] | None = None
    timeout_ms: int | None = None
    form: bool = False

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(
                f"Timeout must be a positive number of milliseconds, got {self.timeout_ms}"
            )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        # labelSelector=[a, b] -> "a,b"
        return ",".join(_query_value(v) for v in value)
    return str(value)


def _query_params(query: Mapping[str, Any] | None) -> dict[str, str]:
    if not query:
        return {}
    return {k: _query_value(v) for k, v in query.items() if v is not None}


class APIClient:
    """Asynchronous client for a Kubernetes-style REST API.

    A fresh ``httpx.AsyncClient`` is opened per call, so an APIClient is not
    bound to any event loop and carries no mutable state between calls.

    Example:
        client = APIClient(get_default_config())
        pods = run_sync(client.get("/api/v1/namespaces/default/pods"))
    """

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        verify: bool | SSLContext = True,
    ) -> None:
        """Initialize the client.

        Args:
            config: Resolved connection configuration
            transport: Optional httpx transport (used by tests)
            verify: TLS verification setting passed to httpx
        """
        self._config = config
        self._default_headers = dict(config.headers)
        self._transport = transport
        self._verify = verify

    @property
    def config(self) -> ConnectionConfig:
        """Get the connection configuration."""
        return self._config

    # =========================================================================
    # Request building
    # =========================================================================

    def build_url(self, path: str, query: Mapping[str, Any] | None = None) -> str:
        """Resolve a request path against the configured endpoint.

        Args:
            path: API path, e.g. ``/api/v1/namespaces``
            query: Optional query parameters

        Returns:
            Full request URL (or path when the endpoint is a relative mount)
        """
        endpoint = self._config.endpoint
        params = _query_params(query)

        if endpoint.startswith("/"):
            # Relative proxy mount such as '/api/k8s'
            url = f"{endpoint.rstrip('/')}/{path.lstrip('/')}"
            encoded = urlencode(params)
            return f"{url}?{encoded}" if encoded else url

        resolved = httpx.URL(endpoint).join(path)
        if params:
            resolved = resolved.copy_merge_params(params)
        return str(resolved)

    def resolve_headers(self, descriptor: RequestDescriptor) -> dict[str, str]:
        """Merge default, auth and per-call headers.

        Per-call headers take highest priority.
        """
        merged = dict(self._default_headers)
        if self._config.token:
            merged["Authorization"] = f"Bearer {self._config.token}"
        if descriptor.method not in QUERY_METHODS:
            merged["Content-Type"] = (
                FORM_CONTENT_TYPE if descriptor.form else JSON_CONTENT_TYPE
            )
        if descriptor.headers:
            merged.update(descriptor.headers)
        return merged

    @staticmethod
    def encode_body(descriptor: RequestDescriptor) -> str | None:
        """Serialize the request body, or None for verbs without one.

        Raises:
            ValidationError: If the body cannot be serialized (for example a
                self-referencing document built from YAML aliases)
        """
        if descriptor.method in QUERY_METHODS or descriptor.body is None:
            return None
        try:
            if descriptor.form:
                return urlencode(descriptor.body)
            return json.dumps(descriptor.body, default=str)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Cannot encode request body for {descriptor.method} {descriptor.path}",
                details=str(e),
            ) from e

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        """Execute one request and return the decoded JSON response.

        Args:
            descriptor: The request to send

        Returns:
            Parsed JSON body, or None for an empty success response

        Raises:
            RequestTimeoutError: The deadline elapsed before a response arrived
            NetworkError: The request never reached a server
            HttpError: The server answered with a non-success status
            DecodeError: The success response was not valid JSON
        """
        method = descriptor.method
        url = self.build_url(
            descriptor.path, descriptor.query if method in QUERY_METHODS else None
        )
        headers = self.resolve_headers(descriptor)
        content = self.encode_body(descriptor)
        timeout_ms = descriptor.timeout_ms or self._config.timeout_ms

        logger.debug(f"{method} {url} (timeout {timeout_ms}ms)")

        try:
            response = await asyncio.wait_for(
                self._send(method, url, headers, content, timeout_ms),
                timeout=timeout_ms / 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {url} timed out after {timeout_ms}ms")
            raise RequestTimeoutError(url, timeout_ms) from e
        except httpx.DecodingError as e:
            logger.warning(f"{method} {url} returned an undecodable body: {e}")
            raise DecodeError(f"Cannot decode response from {url}", details=str(e)) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e

        return self._decode(method, url, response)

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: str | None,
        timeout_ms: int,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport,
            verify=self._verify,
            timeout=timeout_ms / 1000,
        ) as http:
            return await http.request(method, url, headers=headers, content=content)

    @staticmethod
    def _decode(method: str, url: str, response: httpx.Response) -> Any:
        if not response.is_success:
            logger.warning(f"{method} {url} -> {response.status_code}")
            raise HttpError(response.status_code, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON in response from {url}",
                details=response.text[:500],
            ) from e

    # =========================================================================
    # HTTP method helpers
    # =========================================================================

    async def get(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        return await self.execute(
            RequestDescriptor(
                path, "GET", query=query, headers=headers, timeout_ms=timeout_ms
            )
        )

    async def post(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        return await self.execute(
            RequestDescriptor(
                path,
                "POST",
                query=query,
                body=body,
                headers=headers,
                timeout_ms=timeout_ms,
            )
        )

    async def put(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        return await self.execute(
            RequestDescriptor(
                path,
                "PUT",
                query=query,
                body=body,
                headers=headers,
                timeout_ms=timeout_ms,
            )
        )

    async def patch(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
        form: bool = False,
    ) -> Any:
        """Send a PATCH request.

        Args:
            form: URL-encode the body instead of sending JSON
        """
        return await self.execute(
            RequestDescriptor(
                path,
                "PATCH",
                query=query,
                body=body,
                headers=headers,
                timeout_ms=timeout_ms,
                form=form,
            )
        )

    async def delete(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        return await self.execute(
            RequestDescriptor(
                path, "DELETE", query=query, headers=headers, timeout_ms=timeout_ms
            )
        )
