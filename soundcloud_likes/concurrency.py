import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable

from soundcloud_likes.exceptions import AllAttemptsFailedError

logger = logging.getLogger(__name__)


async def first_success[T](attempts: Iterable[Awaitable[T]]) -> T:
    """Runs all attempts concurrently and returns the first successful result.

    The remaining attempts are cancelled as soon as one succeeds. If every
    attempt fails, an :class:`AllAttemptsFailedError` carrying the individual
    errors is raised.
    """
    tasks = [asyncio.ensure_future(attempt) for attempt in attempts]
    errors: list[BaseException] = []
    try:
        for next_done in asyncio.as_completed(tasks):
            try:
                return await next_done
            except Exception as e:
                logger.debug(f"Attempt failed: {e!r}")
                errors.append(e)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
    raise AllAttemptsFailedError(f"All {len(tasks)} attempts failed", errors)


async def ordered_map[T, R](
    func: Callable[[T], Awaitable[R]],
    items: AsyncIterable[T],
    limit: int = 5,
) -> AsyncIterator[R]:
    """Applies ``func`` to ``items`` with at most ``limit`` calls in flight.

    Results are yielded in the order of ``items``, not in completion order.
    A pool of ``limit`` workers drains a bounded work queue and tags every
    result with the sequence number of its item; results that finish early
    wait in a reorder buffer until all of their predecessors were yielded.
    The first error of the producer or a worker cancels the others and is
    re-raised as is.
    Consumers must not await other work between items: the task group
    cancels the consuming task wherever it waits when a worker fails.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    work: asyncio.Queue[tuple[int, T] | None] = asyncio.Queue(maxsize=limit)
    finished: dict[int, R] = {}
    changed = asyncio.Condition()
    total: int | None = None

    async def feed():
        nonlocal total
        count = 0
        async for item in items:
            await work.put((count, item))
            count += 1
        for _ in range(limit):
            await work.put(None)
        async with changed:
            total = count
            changed.notify_all()

    async def worker():
        while (entry := await work.get()) is not None:
            index, item = entry
            result = await func(item)
            async with changed:
                finished[index] = result
                changed.notify_all()

    next_index = 0
    try:
        async with asyncio.TaskGroup() as tg:
            tg.create_task(feed())
            for _ in range(limit):
                tg.create_task(worker())
            while True:
                async with changed:
                    await changed.wait_for(lambda: next_index in finished or total == next_index)
                    if next_index not in finished:
                        break
                    result = finished.pop(next_index)
                yield result
                next_index += 1
    except ExceptionGroup as group:
        raise group.exceptions[0] from None
