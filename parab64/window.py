"""Bounded, order-preserving execution of chunk transforms.

Up to ``workers`` chunks run on a thread pool at once. Results are written to
the sink strictly in submission order: when the window is full the oldest
task is awaited and written before the next chunk is admitted, so a task that
finishes early simply waits its turn.
"""

import collections
import concurrent.futures
import typing

from .errors import SinkUnavailable, TaskFailure


class OrderedWindow:
    def __init__(
        self,
        transform: typing.Callable[[bytes], bytes],
        sink,
        workers: int,
        *,
        on_written: typing.Optional[typing.Callable[[int, int, int], None]] = None,
    ):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self.sink = sink
        self.submitted = 0
        self.written = 0
        self.bytes_written = 0
        self._transform = transform
        self._on_written = on_written
        self._pending: "collections.deque[tuple[int, int, concurrent.futures.Future]]" = collections.deque()
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="parab64",
        )

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    def admit(self, chunk: bytes) -> None:
        """Start a task for ``chunk``, first draining the oldest one if full."""
        if len(self._pending) >= self.workers:
            self._drain_one()
        future = self._executor.submit(self._transform, chunk)
        self._pending.append((self.submitted, len(chunk), future))
        self.submitted += 1

    def drain_all(self) -> None:
        while self._pending:
            self._drain_one()

    def _drain_one(self) -> None:
        sequence, size, future = self._pending.popleft()
        try:
            result = future.result()
        except Exception as exc:
            raise TaskFailure(sequence, exc) from exc
        try:
            self.sink.write(result)
        except OSError as exc:
            raise SinkUnavailable(f"Writing output failed: {exc}") from exc
        self.written += 1
        self.bytes_written += len(result)
        if self._on_written:
            self._on_written(sequence, size, len(result))

    def close(self) -> None:
        # no cancellation: tasks already submitted run to completion
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "OrderedWindow":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["OrderedWindow"]
