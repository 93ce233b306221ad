"""Async-to-sync bridge utilities.

The pipeline is asyncio-based; the CLI is synchronous. This module provides
the one place where coroutines are driven from sync code.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import nest_asyncio

# Apply nest_asyncio to allow nested event loops (needed when the CLI is invoked
# from an environment that already runs a loop, e.g. a notebook)
nest_asyncio.apply()


def run_async_in_sync[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine in a sync context safely."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    return loop.run_until_complete(coro)
