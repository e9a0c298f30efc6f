"""
Fan-out/fan-in helpers for coroutine work units.

Results always come back in submission order, whatever order the units finish
in, so downstream sorting never depends on scheduling. Units share the event
loop thread; concurrency here only overlaps waiting.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")


async def run_all(
    factories: Iterable[Callable[[], Awaitable[T]]],
    concurrent: bool = True,
    limit: int = 8,
) -> List[T]:
    """
    Run coroutine factories and join their results.

    Args:
        factories: Zero-argument callables returning awaitables
        concurrent: Schedule units as concurrent tasks (else one after another)
        limit: Max units in flight when concurrent

    Returns:
        Results in the order the factories were given

    Example:
        >>> results = await run_all([lambda: fetch(1), lambda: fetch(2)], limit=4)
    """
    factories = list(factories)

    if not concurrent:
        return [await factory() for factory in factories]

    semaphore = asyncio.Semaphore(limit)

    async def bounded(factory: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await factory()

    tasks = [asyncio.ensure_future(bounded(factory)) for factory in factories]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        # One failed unit fails the join; stop the siblings instead of orphaning them
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
