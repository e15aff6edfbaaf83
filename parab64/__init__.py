from .alphabet import STANDARD_ALPHABET, Alphabet
from .api import b64decode, b64decodefile, b64encode, b64encodefile
from .config import DECODE, ENCODE, TranscodeConfig
from .errors import Parab64Error, SinkUnavailable, SourceUnavailable, TaskFailure
from .reader import ChunkReader
from .transcoder import (
    decode_bytes,
    decode_file,
    decode_stream,
    encode_bytes,
    encode_file,
    encode_stream,
)
from .version import __version__
from .window import OrderedWindow
from .workers import decode_chunk, encode_chunk

__all__ = [
    "Alphabet",
    "ChunkReader",
    "DECODE",
    "ENCODE",
    "OrderedWindow",
    "Parab64Error",
    "STANDARD_ALPHABET",
    "SinkUnavailable",
    "SourceUnavailable",
    "TaskFailure",
    "TranscodeConfig",
    "__version__",
    "b64decode",
    "b64decodefile",
    "b64encode",
    "b64encodefile",
    "decode_bytes",
    "decode_chunk",
    "decode_file",
    "decode_stream",
    "encode_bytes",
    "encode_chunk",
    "encode_file",
    "encode_stream",
]
