"""Progress observation for submissions.

A progress sink is any callable taking a ``ProgressEvent``. The
orchestrator never lets a sink failure affect the submission.
"""

import asyncio
from typing import Callable

import structlog

from infrastructure.resilience.retry.models import ProgressEvent

logger = structlog.get_logger()

ProgressSink = Callable[[ProgressEvent], None]


class ProgressChannel:
    """Bounded buffer of progress events.

    Usable directly as a ``progress_sink``. When the buffer is full new
    events are dropped and counted, so a slow consumer never blocks a
    submission.

    Example:
        channel = ProgressChannel(capacity=32)
        config = ResilienceConfig(progress_sink=channel)

        result = await orchestrator.submit(operation, config)
        for event in channel.drain():
            print(event.stage, event.attempt)
    """

    def __init__(self, capacity: int = 64) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._queue: asyncio.Queue[ProgressEvent] = asyncio.Queue(maxsize=capacity)
        self.dropped = 0

    def __call__(self, event: ProgressEvent) -> None:
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.debug(
                "progress_event_dropped",
                stage=event.stage.value,
                attempt=event.attempt,
                dropped=self.dropped,
            )

    def __len__(self) -> int:
        return self._queue.qsize()

    async def get(self) -> ProgressEvent:
        """Wait for the next event."""
        return await self._queue.get()

    def drain(self) -> list[ProgressEvent]:
        """Remove and return every buffered event, oldest first."""
        events = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return events
