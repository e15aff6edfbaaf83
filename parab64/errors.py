"""Error kinds raised by the transcoder.

Malformed decode input is never an error; only I/O problems on either end of
the pipe and faults inside a worker task abort a run.
"""


class Parab64Error(Exception):
    """Base class for every terminal failure of a transcoding run."""


class SourceUnavailable(Parab64Error):
    """The input could not be opened or read."""


class SinkUnavailable(Parab64Error):
    """The output could not be opened or written."""


class TaskFailure(Parab64Error):
    """A chunk transform raised while running on the worker pool."""

    def __init__(self, sequence: int, cause: BaseException):
        self.sequence = sequence
        self.cause = cause
        super().__init__(f"chunk #{sequence} failed: {cause!r}")


__all__ = ["Parab64Error", "SinkUnavailable", "SourceUnavailable", "TaskFailure"]
