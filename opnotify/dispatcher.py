"""Single-consumer notification dispatcher."""

import asyncio
import concurrent.futures
import logging
from typing import Mapping, Optional

from opnotify.backends import Backend, default_backends
from opnotify.config import Settings, settings as default_settings
from opnotify.errors import ConfigurationUnresolved, DeliveryError, DispatcherClosed
from opnotify.models import BackendVariant, NotificationRequest

logger = logging.getLogger(__name__)

_CLOSE = object()


class Dispatcher:
    """
    Drains queued notification requests one at a time, in arrival order.

    Producers call ``enqueue``; a single consumer (``run``) selects the
    configured backend for each request and delivers it. Failures are
    logged on the request's logger and never stop the loop.

    Shutdown: ``close`` stops intake, and ``run`` returns once every request
    accepted before the close has been processed.
    """

    def __init__(
        self,
        backends: Optional[Mapping[BackendVariant, Backend]] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.backends = dict(backends) if backends is not None else default_backends(self.settings)
        self.processed = 0
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=self.settings.queue_maxsize)
        self._closed = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def pending(self) -> int:
        return self._queue.qsize()

    # --- Intake ---

    async def enqueue(self, request: NotificationRequest) -> None:
        """Queue a request, waiting for a free slot if the queue is bounded."""
        if self._closed:
            raise DispatcherClosed("dispatcher is closed")
        await self._queue.put(request)

    def enqueue_nowait(self, request: NotificationRequest) -> None:
        if self._closed:
            raise DispatcherClosed("dispatcher is closed")
        self._queue.put_nowait(request)

    def enqueue_threadsafe(self, request: NotificationRequest) -> concurrent.futures.Future:
        """Queue a request from a thread other than the dispatcher's loop."""
        if self._loop is None:
            raise RuntimeError("dispatcher is not running")
        return asyncio.run_coroutine_threadsafe(self.enqueue(request), self._loop)

    # --- Lifecycle ---

    def start(self) -> asyncio.Task:
        """Spawn the consumer loop as a task on the running loop."""
        if self._task is None:
            self._loop = asyncio.get_running_loop()
            self._task = asyncio.create_task(self.run(), name="notification-dispatcher")
        return self._task

    async def close(self) -> None:
        """Stop accepting requests. Already queued requests are still delivered."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSE)

    async def join(self) -> None:
        """Wait until every queued request has been processed."""
        await self._queue.join()

    async def aclose(self) -> None:
        """Close intake and wait for the consumer to drain the queue."""
        await self.close()
        if self._task is not None:
            await self._task

    # --- Consumer ---

    async def run(self) -> None:
        self._loop = asyncio.get_running_loop()
        logger.info("Notification dispatcher started")

        while True:
            item = await self._queue.get()
            try:
                if item is _CLOSE:
                    break
                await self._process(item)
            finally:
                self._queue.task_done()

        # Producers that were blocked on a full queue when close() ran
        while not self._queue.empty():
            item = self._queue.get_nowait()
            try:
                if item is not _CLOSE:
                    await self._process(item)
            finally:
                self._queue.task_done()

        logger.info("Notification dispatcher stopped after %d notifications", self.processed)

    async def _process(self, request: NotificationRequest) -> None:
        self.processed += 1
        log = request.logger
        resolved = request.backend

        if resolved is None:
            log.warning("%s", ConfigurationUnresolved(request.notification.name))
            return

        backend = self.backends.get(resolved.variant)
        if backend is None:
            log.warning("No backend registered for %s", resolved.variant.value)
            return

        try:
            await backend.deliver(request, resolved.config)
        except DeliveryError as e:
            log.warning("Failed to send notifications. %s", e)
        except Exception as e:
            log.warning("Failed to send notifications. %s", e, exc_info=True)
        else:
            log.debug("Sent notification")
