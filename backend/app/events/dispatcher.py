"""In-process publish/subscribe channel.

Handlers run synchronously inside ``publish`` in registration order. When a
handler hands back an awaitable (an ``async def`` listener), it is scheduled
as a background task and ``publish`` returns without waiting for it. Failures
never reach the publisher: they are logged here, in one place.
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from functools import partial
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Handler]] = defaultdict(list)
        self._tasks: set[asyncio.Task] = set()

    def subscribe(self, event_name: str, handler: Handler) -> Handler:
        self._handlers[event_name].append(handler)
        return handler

    def listeners(self, event_name: str) -> list[Handler]:
        return list(self._handlers.get(event_name, ()))

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def publish(self, event_name: str, *payload: Any) -> bool:
        """Invoke every handler for ``event_name``; True if there was at least one."""
        handlers = self.listeners(event_name)
        for handler in handlers:
            try:
                result = handler(*payload)
            except Exception:
                logger.exception("Listener %r for event %r failed", _name(handler), event_name)
                continue
            if inspect.isawaitable(result):
                self._spawn(event_name, handler, result)
        return bool(handlers)

    def _spawn(self, event_name: str, handler: Handler, awaitable: Awaitable[Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            logger.error(
                "Listener %r for event %r returned an awaitable outside a running loop; dropped",
                _name(handler),
                event_name,
            )
            return

        task = loop.create_task(_await(awaitable), name=f"event:{event_name}")
        self._tasks.add(task)
        task.add_done_callback(partial(self._on_task_done, event_name, handler))

    def _on_task_done(self, event_name: str, handler: Handler, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Listener %r for event %r was cancelled", _name(handler), event_name)
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Listener %r for event %r failed",
                _name(handler),
                event_name,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def drain(self) -> None:
        """Wait for every in-flight listener task, including ones spawned meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__
