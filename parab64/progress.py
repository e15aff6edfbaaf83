import shutil
import sys
import threading
import time
import typing

import colorama

PROGRESS_BAR_WIDTH = 30


def human_readable_size(num_bytes: int) -> str:
    units = ["B", "KiB", "MiB", "GiB"]
    value = float(num_bytes)
    for unit in units:
        if value < 1024.0 or unit == units[-1]:
            return f"{value:.2f} {unit}"
        value /= 1024.0
    return f"{value:.2f} TiB"


class ProgressReporter:
    """Single-line textual progress bar for one transcoding run."""

    def __init__(
        self,
        label: str,
        total: typing.Optional[int] = None,
        stream=None,
        min_interval: float = 0.1,
        *,
        color: bool = True,
    ):
        self.label = label
        self.total = total if total and total > 0 else None
        self.stream = stream or sys.stderr
        self._min_interval = max(0.0, float(min_interval))
        self._is_tty = bool(getattr(self.stream, "isatty", lambda: False)())
        self.processed = 0
        self._last_render = 0.0
        self._printed = False
        self._lock = threading.Lock()
        self._term_width = shutil.get_terminal_size().columns
        self._green = colorama.Fore.GREEN if color else ""
        self._reset = colorama.Fore.RESET if color else ""

    def _render_bar(self, fraction: float) -> str:
        fraction = max(0.0, min(1.0, fraction))
        filled = int(fraction * PROGRESS_BAR_WIDTH)
        if filled >= PROGRESS_BAR_WIDTH:
            return f"({self._green}{'❚' * PROGRESS_BAR_WIDTH}{self._reset})"
        return f"({'❚' * filled}{' ' * (PROGRESS_BAR_WIDTH - filled)})"

    def _line(self, processed: int) -> str:
        if self.total is None:
            return f"{self.label} {human_readable_size(processed)}"
        fraction = processed / self.total
        return (
            f"{self.label} {self._render_bar(fraction)} {min(fraction, 1.0) * 100:3.0f}%"
            f" {human_readable_size(processed)} / {human_readable_size(self.total)}"
        )

    def _write(self, line: str, force: bool = False) -> None:
        now = time.monotonic()
        if not force and self._printed and (now - self._last_render) < self._min_interval:
            return
        line = line[:self._term_width]
        if self._is_tty:
            self.stream.write("\r\x1b[2K" + line)
        elif force:
            # non-tty streams only get the final line
            self.stream.write(line + "\n")
        self.stream.flush()
        self._printed = True
        self._last_render = now

    def update(self, processed: int, total: typing.Optional[int] = None) -> None:
        with self._lock:
            self.processed = processed
            if total:
                self.total = total
            self._write(self._line(processed))

    def finish(self, processed: typing.Optional[int] = None) -> None:
        with self._lock:
            if processed is None:
                processed = self.processed
            if self.total is None:
                self.total = processed or None
            self._write(self._line(processed), force=True)
            if self._is_tty:
                self.stream.write("\n")
                self.stream.flush()
            self._printed = False


__all__ = ["ProgressReporter", "human_readable_size"]
