"""Bounded reads from the source, aligned to encoding-group boundaries."""

from .alphabet import STANDARD_ALPHABET, Alphabet
from .config import DECODE, ENCODE, MODES
from .errors import SourceUnavailable


class ChunkReader:
    """Pull chunks from a binary source exposing ``read(n)``.

    In encode mode every chunk but the last is exactly ``chunk_size`` bytes,
    which must be a multiple of 3. In decode mode a chunk is read up to
    ``chunk_size`` characters and then extended one character at a time until
    it holds a multiple of 4 meaningful symbols, so no group straddles two
    chunks.
    """

    def __init__(self, source, chunk_size: int, mode: str = ENCODE, alphabet: Alphabet = STANDARD_ALPHABET):
        if mode not in MODES:
            raise ValueError(f"Unknown transcoding mode: {mode!r}")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if mode == ENCODE and chunk_size % 3:
            raise ValueError(f"Encode chunk size must be a multiple of 3, got {chunk_size}")
        self.source = source
        self.chunk_size = chunk_size
        self.mode = mode
        self.alphabet = alphabet
        self.bytes_read = 0
        self.chunks_read = 0
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _read(self, size: int) -> bytes:
        try:
            data = self.source.read(size)
        except OSError as exc:
            raise SourceUnavailable(f"Reading input failed: {exc}") from exc
        if not data:
            self._exhausted = True
            return b""
        self.bytes_read += len(data)
        return data

    def _fill(self, size: int) -> bytes:
        # pipes and sockets may return short reads before the end of input
        parts = []
        remaining = size
        while remaining > 0:
            data = self._read(remaining)
            if not data:
                break
            parts.append(data)
            remaining -= len(data)
        return b"".join(parts)

    def _align(self, chunk: bytes) -> bytes:
        count = self.alphabet.count_symbols(chunk)
        if count % 4 == 0:
            return chunk
        buf = bytearray(chunk)
        while count % 4:
            extra = self._read(1)
            if not extra:
                break
            buf += extra
            count += self.alphabet.count_symbols(extra)
        return bytes(buf)

    def read(self) -> bytes:
        """Return the next chunk, or ``b""`` once the source is exhausted."""
        if self._exhausted:
            return b""
        chunk = self._fill(self.chunk_size)
        if not chunk:
            return b""
        if self.mode == DECODE and not self._exhausted:
            chunk = self._align(chunk)
        self.chunks_read += 1
        return chunk

    def __iter__(self):
        while True:
            chunk = self.read()
            if not chunk:
                return
            yield chunk


__all__ = ["ChunkReader"]
