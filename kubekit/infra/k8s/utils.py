"""Bridge from synchronous CLI code to the async client."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Drive ``coro`` to completion and return its result.

    Without a running event loop the coroutine gets a fresh loop. When a loop
    is already running in this thread (e.g. inside an async test or a
    notebook), a worker thread runs it on its own loop instead. APIClient
    holds no loop-bound state, so the same client works on either loop.

    Example:
        versions = run_sync(client.invoke("get_core_api_versions"))
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()
