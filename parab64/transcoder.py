"""Driver: source -> chunk reader -> ordered worker window -> sink."""

import contextlib
import io
import os
import pathlib
import typing

from .alphabet import STANDARD_ALPHABET, Alphabet
from .config import DECODE, ENCODE, TranscodeConfig
from .errors import SinkUnavailable, SourceUnavailable
from .reader import ChunkReader
from .window import OrderedWindow
from .workers import decode_chunk, encode_chunk

ProgressCallback = typing.Callable[[int, typing.Optional[int]], None]


def _transform_for(mode: str, alphabet: Alphabet) -> typing.Callable[[bytes], bytes]:
    worker = encode_chunk if mode == ENCODE else decode_chunk
    if alphabet is STANDARD_ALPHABET:
        return worker
    return lambda chunk: worker(chunk, alphabet)


def transcode_stream(
    source,
    sink,
    mode: str,
    *,
    chunk_size: typing.Optional[int] = None,
    workers: typing.Optional[int] = None,
    progress_cb: typing.Optional[ProgressCallback] = None,
    total: typing.Optional[int] = None,
    alphabet: Alphabet = STANDARD_ALPHABET,
) -> int:
    """Run one transcoding pass and return the number of bytes written."""
    config = TranscodeConfig.resolve(mode, chunk_size, workers)
    reader = ChunkReader(source, config.chunk_size, mode, alphabet)
    processed = 0

    def _on_written(_sequence: int, consumed: int, _produced: int) -> None:
        nonlocal processed
        processed += consumed
        progress_cb(processed, total)

    with OrderedWindow(
        _transform_for(mode, alphabet),
        sink,
        config.workers,
        on_written=_on_written if progress_cb else None,
    ) as window:
        for chunk in reader:
            window.admit(chunk)
        window.drain_all()
    return window.bytes_written


def encode_stream(source, sink, **kwargs) -> int:
    return transcode_stream(source, sink, ENCODE, **kwargs)


def decode_stream(source, sink, **kwargs) -> int:
    return transcode_stream(source, sink, DECODE, **kwargs)


def _same_file(src: pathlib.Path, dst: pathlib.Path) -> bool:
    try:
        return dst.exists() and os.path.samefile(src, dst)
    except OSError:
        return False


def transcode_file(
    src_path,
    dst_path,
    mode: str,
    *,
    chunk_size: typing.Optional[int] = None,
    workers: typing.Optional[int] = None,
    progress_cb: typing.Optional[ProgressCallback] = None,
    alphabet: Alphabet = STANDARD_ALPHABET,
) -> int:
    """Transcode ``src_path`` into ``dst_path``.

    Both files are opened before any chunk is scheduled, and both are closed
    on every exit path. A destination left behind by a failed run is removed.
    """
    src = pathlib.Path(src_path)
    dst = pathlib.Path(dst_path)
    TranscodeConfig.resolve(mode, chunk_size, workers)
    if _same_file(src, dst):
        raise SinkUnavailable(f"Refusing to overwrite the input file: {dst}")

    created = False
    try:
        with contextlib.ExitStack() as stack:
            try:
                source = stack.enter_context(open(src, "rb"))
                total = os.fstat(source.fileno()).st_size
            except OSError as exc:
                raise SourceUnavailable(f"Cannot open input {src}: {exc}") from exc
            try:
                sink = stack.enter_context(open(dst, "wb"))
            except OSError as exc:
                raise SinkUnavailable(f"Cannot open output {dst}: {exc}") from exc
            created = True
            return transcode_stream(
                source,
                sink,
                mode,
                chunk_size=chunk_size,
                workers=workers,
                progress_cb=progress_cb,
                total=total,
                alphabet=alphabet,
            )
    except BaseException:
        if created:
            dst.unlink(missing_ok=True)
        raise


def encode_file(src_path, dst_path, **kwargs) -> int:
    return transcode_file(src_path, dst_path, ENCODE, **kwargs)


def decode_file(src_path, dst_path, **kwargs) -> int:
    return transcode_file(src_path, dst_path, DECODE, **kwargs)


def encode_bytes(data, **kwargs) -> bytes:
    sink = io.BytesIO()
    encode_stream(io.BytesIO(bytes(data)), sink, **kwargs)
    return sink.getvalue()


def decode_bytes(text, **kwargs) -> bytes:
    if isinstance(text, str):
        text = text.encode("utf-8")
    sink = io.BytesIO()
    decode_stream(io.BytesIO(bytes(text)), sink, **kwargs)
    return sink.getvalue()


__all__ = [
    "decode_bytes",
    "decode_file",
    "decode_stream",
    "encode_bytes",
    "encode_file",
    "encode_stream",
    "transcode_file",
    "transcode_stream",
]
