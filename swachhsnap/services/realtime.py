"""
Real-time snapshot feed.

Dashboards subscribe to a collection and receive the complete, current result
set on subscription and again after every committed change. Each delivery
replaces the previous one; there are no deltas. Writers publish from the
request threadpool, subscribers consume on the event loop, and loaders run in
the threadpool so one slow query never holds up another feed.
"""
import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Dict, List, Set, TypeVar

from fastapi.concurrency import run_in_threadpool


logger = logging.getLogger(__name__)

T = TypeVar("T")

COMPLAINTS = "complaints"
EVENTS = "volunteer_events"


@dataclass(eq=False)
class _Subscriber:
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue


class SnapshotHub:
    """Fan-out of change notifications to snapshot subscribers."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, Set[_Subscriber]] = {}
        self._lock = threading.Lock()

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscribers.get(collection, ()))

    def publish(self, collection: str) -> None:
        """Signal that a collection changed. Safe to call from any thread."""
        with self._lock:
            subscribers = list(self._subscribers.get(collection, ()))

        for subscriber in subscribers:
            try:
                subscriber.loop.call_soon_threadsafe(_notify, subscriber.queue)
            except RuntimeError:
                if not subscriber.loop.is_closed():
                    raise
                self._remove(collection, subscriber)

    @asynccontextmanager
    async def subscribe(
        self,
        collection: str,
        loader: Callable[[], List[T]],
    ) -> AsyncIterator[AsyncIterator[List[T]]]:
        """
        Subscribe to full snapshots of a collection.

        ``loader`` is a blocking call that runs the (already filtered) query
        and returns the result set. The subscription is released when the
        ``async with`` block exits.

        Usage:
            async with hub.subscribe(COMPLAINTS, load) as snapshots:
                async for snapshot in snapshots:
                    ...
        """
        # Size one: a pending notification already implies a fresh snapshot.
        subscriber = _Subscriber(loop=asyncio.get_running_loop(), queue=asyncio.Queue(maxsize=1))
        with self._lock:
            self._subscribers.setdefault(collection, set()).add(subscriber)
        logger.debug("realtime.subscribe collection=%s", collection)
        try:
            yield _snapshots(subscriber.queue, loader)
        finally:
            self._remove(collection, subscriber)
            logger.debug("realtime.unsubscribe collection=%s", collection)

    def _remove(self, collection: str, subscriber: _Subscriber) -> None:
        with self._lock:
            subscribers = self._subscribers.get(collection)
            if subscribers is None:
                return
            subscribers.discard(subscriber)
            if not subscribers:
                del self._subscribers[collection]


def _notify(queue: asyncio.Queue) -> None:
    if not queue.full():
        queue.put_nowait(None)


async def _snapshots(queue: asyncio.Queue, loader: Callable[[], List[T]]) -> AsyncIterator[List[T]]:
    yield await run_in_threadpool(loader)
    while True:
        await queue.get()
        yield await run_in_threadpool(loader)


hub = SnapshotHub()
