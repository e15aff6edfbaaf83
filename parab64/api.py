"""Convenience wrappers over the chunked transcoder."""

from .transcoder import decode_bytes, decode_file, encode_bytes, encode_file


def b64encode(data, chunk_size: int | None = None, workers: int | None = None) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return encode_bytes(data, chunk_size=chunk_size, workers=workers).decode("ascii")


def b64decode(text, chunk_size: int | None = None, workers: int | None = None) -> bytes:
    return decode_bytes(text, chunk_size=chunk_size, workers=workers)


def b64encodefile(file: str, output: str | None = None, chunk_size: int | None = None, workers: int | None = None):
    output = output or f"{file}.b64"
    encode_file(file, output, chunk_size=chunk_size, workers=workers)
    return output


def b64decodefile(file: str, output: str | None = None, chunk_size: int | None = None, workers: int | None = None):
    output = output or default_decoded_path(file)
    decode_file(file, output, chunk_size=chunk_size, workers=workers)
    return output


def default_decoded_path(file: str) -> str:
    if file.lower().endswith(".b64") and len(file) > 4:
        return file[:-4]
    return f"{file}.bin"


__all__ = [
    "b64decode",
    "b64decodefile",
    "b64encode",
    "b64encodefile",
    "default_decoded_path",
]
