"""Bounded FIFO channels connecting pipeline stages.

A channel links exactly one producer stage to one consumer stage.
Sends block while the buffer is full, receives block while it is empty,
and closing is a one-time producer event that ends consumer iteration
once buffered values are drained.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Iterator, TypeVar

from core.errors import ChannelAbortedError, ChannelClosedError, PipelineConfigError

T = TypeVar("T")


class Channel(Generic[T]):
    """Capacity-limited, ordered conduit between two stages."""

    def __init__(self, name: str, capacity: int) -> None:
        if capacity < 1:
            raise PipelineConfigError(
                f"Channel '{name}' capacity must be at least 1, got {capacity}."
            )
        self._name = name
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._condition = threading.Condition()
        self._closed = False
        self._aborted = False
        self._sent_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    @property
    def sent_count(self) -> int:
        """Return how many values were accepted so far."""
        with self._condition:
            return self._sent_count

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)

    def send(self, item: T) -> None:
        """Enqueue one value, blocking while the buffer is full.

        Raises:
            ChannelClosedError: If the channel was already closed.
            ChannelAbortedError: If the channel is torn down while waiting.
        """
        with self._condition:
            while True:
                if self._aborted:
                    raise ChannelAbortedError(f"Channel '{self._name}' was aborted.")
                if self._closed:
                    raise ChannelClosedError(
                        f"Cannot send on closed channel '{self._name}'. "
                        "A stage must close its outbound channel only after its last send."
                    )
                if len(self._items) < self._capacity:
                    break
                self._condition.wait()
            self._items.append(item)
            self._sent_count += 1
            self._condition.notify_all()

    def close(self) -> None:
        """Signal that no further values will be sent.

        Raises:
            ChannelClosedError: If the channel was already closed.
        """
        with self._condition:
            if self._closed:
                raise ChannelClosedError(f"Channel '{self._name}' is already closed.")
            self._closed = True
            self._condition.notify_all()

    def abort(self) -> None:
        """Tear the channel down and wake every blocked sender and receiver."""
        with self._condition:
            self._aborted = True
            self._condition.notify_all()

    def __iter__(self) -> Iterator[T]:
        """Yield values in send order until the channel is closed and drained.

        Raises:
            ChannelAbortedError: If the channel is torn down while waiting.
        """
        while True:
            with self._condition:
                while not self._items and not self._closed and not self._aborted:
                    self._condition.wait()
                if self._aborted:
                    raise ChannelAbortedError(f"Channel '{self._name}' was aborted.")
                if not self._items:
                    return
                item = self._items.popleft()
                self._condition.notify_all()
            yield item
