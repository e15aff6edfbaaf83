"""The 64-symbol table shared by both workers."""

import string

import numpy as np

STANDARD_SYMBOLS = (string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/").encode("ascii")
PAD_SYMBOL = b"="
NOISE = -1
PAD_CODE = 64


class Alphabet:
    """Immutable forward/reverse lookup between 6-bit values and symbols."""

    __slots__ = ("symbols", "pad", "encode_table", "decode_table", "_noise")

    def __init__(self, symbols: bytes = STANDARD_SYMBOLS, pad: bytes = PAD_SYMBOL):
        symbols = bytes(symbols)
        pad = bytes(pad)
        if len(symbols) != 64 or len(set(symbols)) != 64:
            raise ValueError("Alphabet needs exactly 64 distinct symbols")
        if len(pad) != 1 or pad[0] in symbols:
            raise ValueError("Padding must be a single symbol outside the alphabet")
        if any(not (0x21 <= code <= 0x7E) for code in symbols + pad):
            raise ValueError("Alphabet symbols must be printable ASCII")

        encode_table = np.frombuffer(symbols, dtype=np.uint8).copy()
        decode_table = np.full(256, NOISE, dtype=np.int16)
        decode_table[encode_table] = np.arange(64, dtype=np.int16)
        decode_table[pad[0]] = PAD_CODE
        encode_table.flags.writeable = False
        decode_table.flags.writeable = False
        meaningful = set(symbols + pad)

        object.__setattr__(self, "symbols", symbols)
        object.__setattr__(self, "pad", pad)
        object.__setattr__(self, "encode_table", encode_table)
        object.__setattr__(self, "decode_table", decode_table)
        object.__setattr__(self, "_noise", bytes(b for b in range(256) if b not in meaningful))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols.decode('ascii')!r}, pad={self.pad.decode('ascii')!r})"

    def symbol_at(self, index: int) -> str:
        if not 0 <= index < 64:
            raise IndexError(f"symbol index out of range: {index}")
        return chr(self.symbols[index])

    def index_of(self, symbol) -> "int | None":
        """Return the 6-bit value of ``symbol``, or None for padding and noise."""
        if isinstance(symbol, str):
            if len(symbol) != 1 or not symbol.isascii():
                return None
            symbol = ord(symbol)
        elif isinstance(symbol, (bytes, bytearray)):
            if len(symbol) != 1:
                return None
            symbol = symbol[0]
        value = int(self.decode_table[symbol]) if 0 <= symbol < 256 else NOISE
        return value if 0 <= value < 64 else None

    def count_symbols(self, data) -> int:
        """Count characters that take part in decoding (alphabet plus padding)."""
        return len(bytes(data).translate(None, self._noise))


STANDARD_ALPHABET = Alphabet()

__all__ = ["Alphabet", "PAD_CODE", "PAD_SYMBOL", "STANDARD_ALPHABET", "STANDARD_SYMBOLS"]
