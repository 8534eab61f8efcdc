"""Serial completion delivery for a LIFX client.

Requests issued through one client run concurrently, but their completions are
handed to callers through a single FIFO worker owned by that client:

- Only one completion handler runs at a time, including async handlers that
  await in the middle of their work.
- Completions are delivered in the order their responses arrived, which is not
  necessarily the order the requests were issued.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import TypeAlias

    from pylifxhttp.models import Completion

    CompletionHandler: TypeAlias = Callable[[Completion[Any]], Awaitable[None] | None]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class PendingDelivery:
    """A completion waiting to be handed to its caller.

    Attributes:
        completion: The finished operation result.
        handler: Optional callback to invoke with the completion.
        future: Future resolved once the handler has run.
        timestamp: When the completion was queued.
    """

    completion: Completion[Any]
    handler: CompletionHandler | None
    future: asyncio.Future[Completion[Any]]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class CompletionDispatcher:
    """Single-consumer delivery queue bound to one client.

    Example:
        ```python
        dispatcher = CompletionDispatcher(name="lifx")

        async def on_complete(completion: Completion[Light]) -> None:
            await store(completion.records)

        # Handlers for concurrent deliveries never overlap
        await asyncio.gather(
            dispatcher.deliver(first, on_complete),
            dispatcher.deliver(second, on_complete),
        )
        await dispatcher.shutdown()
        ```
    """

    def __init__(self, name: str = "lifx") -> None:
        """Initialize the dispatcher.

        Args:
            name: Label used in log messages.
        """
        self._name = name
        # Queue and worker are created lazily so they bind to the running event loop
        self._queue: asyncio.Queue[PendingDelivery] | None = None
        self._worker_task: asyncio.Task[None] | None = None
        self._delivered = 0

    @property
    def pending_count(self) -> int:
        """Get number of completions waiting for delivery."""
        return self._queue.qsize() if self._queue is not None else 0

    @property
    def delivered_count(self) -> int:
        """Get number of completions delivered so far."""
        return self._delivered

    @property
    def is_running(self) -> bool:
        """Check if the delivery worker is running."""
        return self._worker_task is not None and not self._worker_task.done()

    async def deliver(
        self,
        completion: Completion[T],
        handler: Callable[[Completion[T]], Awaitable[None] | None] | None = None,
    ) -> Completion[T]:
        """Queue a completion and wait until it has been delivered.

        Args:
            completion: The finished operation result.
            handler: Optional callback, sync or async, invoked on the delivery worker.

        Returns:
            The same completion, once the handler has returned.

        Raises:
            Exception: Whatever the handler raised.
            asyncio.CancelledError: If the dispatcher shut down before delivery.
        """
        self._ensure_worker_running()
        assert self._queue is not None

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Completion[Any]] = loop.create_future()
        self._queue.put_nowait(PendingDelivery(completion=completion, handler=handler, future=future))

        return await future

    def _ensure_worker_running(self) -> None:
        """Ensure the background delivery worker is running."""
        if self._worker_task is None or self._worker_task.done():
            self._queue = asyncio.Queue()
            self._worker_task = asyncio.create_task(self._process_deliveries())

    async def _process_deliveries(self) -> None:
        """Background task that delivers completions one at a time."""
        _LOGGER.debug("Completion dispatcher %s started", self._name)
        assert self._queue is not None

        try:
            while True:
                pending = await self._queue.get()
                try:
                    await self._run_delivery(pending)
                finally:
                    self._queue.task_done()
        except asyncio.CancelledError:
            _LOGGER.debug("Completion dispatcher %s cancelled", self._name)
            raise
        finally:
            _LOGGER.debug("Completion dispatcher %s stopped", self._name)

    async def _run_delivery(self, pending: PendingDelivery) -> None:
        """Invoke a handler and resolve its future."""
        try:
            if pending.handler is not None:
                outcome = pending.handler(pending.completion)
                if inspect.isawaitable(outcome):
                    await outcome
        except asyncio.CancelledError:
            pending.future.cancel()
            raise
        except Exception as exc:
            _LOGGER.exception("Completion handler failed for %s", pending.completion.request.url)
            if not pending.future.done():
                pending.future.set_exception(exc)
        else:
            if not pending.future.done():
                pending.future.set_result(pending.completion)
        finally:
            self._delivered += 1

    async def shutdown(self) -> None:
        """Stop the delivery worker.

        Completions still waiting in the queue are cancelled.
        """
        if self._worker_task is not None:
            self._worker_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker_task
            self._worker_task = None

        if self._queue is not None:
            cancelled = 0
            while not self._queue.empty():
                pending = self._queue.get_nowait()
                if not pending.future.done():
                    pending.future.cancel()
                    cancelled += 1
            if cancelled:
                _LOGGER.debug("Cancelled %d undelivered completion(s)", cancelled)
            self._queue = None

        _LOGGER.debug("Completion dispatcher %s shutdown complete", self._name)
