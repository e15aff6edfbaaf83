"""Per-chunk encode and decode transforms.

Both functions are pure: they only look at the buffer they are given and the
alphabet, so any number of them can run side by side on the worker pool.
"""

import numpy as np

from .alphabet import PAD_CODE, STANDARD_ALPHABET, Alphabet


def encode_chunk(data, alphabet: Alphabet = STANDARD_ALPHABET) -> bytes:
    """Encode a byte buffer to ``ceil(n / 3) * 4`` ASCII symbols.

    A trailing group of one or two bytes is padded, so callers that split a
    stream must hand this function chunks whose length is a multiple of 3
    (except for the last one).
    """
    if not len(data):
        return b""
    raw = np.frombuffer(data, dtype=np.uint8)
    total = raw.size
    full = total - total % 3
    table = alphabet.encode_table
    out = b""

    if full:
        groups = raw[:full].reshape(-1, 3)
        a, b, c = groups[:, 0], groups[:, 1], groups[:, 2]
        indices = np.stack(
            (
                a >> 2,
                ((a & 0x03) << 4) | (b >> 4),
                ((b & 0x0F) << 2) | (c >> 6),
                c & 0x3F,
            ),
            axis=1,
        )
        out = table[indices].tobytes()

    tail = total - full
    if tail:
        a = int(raw[full])
        b = int(raw[full + 1]) if tail == 2 else 0
        symbols = alphabet.symbols
        out += bytes((symbols[a >> 2], symbols[((a & 0x03) << 4) | (b >> 4)]))
        out += bytes((symbols[(b & 0x0F) << 2],)) if tail == 2 else alphabet.pad
        out += alphabet.pad
    return out


def decode_chunk(text, alphabet: Alphabet = STANDARD_ALPHABET) -> bytes:
    """Decode every complete group of 4 symbols found in ``text``.

    Characters outside the alphabet are skipped, padding counts as zero bits
    and suppresses the byte it stands in for, and a trailing partial group is
    dropped.
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    if not len(text):
        return b""
    codes = alphabet.decode_table[np.frombuffer(text, dtype=np.uint8)]
    codes = codes[codes >= 0]
    usable = codes.size - codes.size % 4
    if not usable:
        return b""

    groups = codes[:usable].reshape(-1, 4)
    is_pad = groups == PAD_CODE
    values = np.where(is_pad, 0, groups).astype(np.uint8)
    v0, v1, v2, v3 = values[:, 0], values[:, 1], values[:, 2], values[:, 3]
    decoded = np.stack(
        (
            (v0 << 2) | (v1 >> 4),
            ((v1 & 0x0F) << 4) | (v2 >> 2),
            ((v2 & 0x03) << 6) | v3,
        ),
        axis=1,
    )
    keep = np.ones(decoded.shape, dtype=bool)
    keep[:, 1] = ~is_pad[:, 2]
    keep[:, 2] = ~is_pad[:, 3]
    return decoded[keep].tobytes()


__all__ = ["decode_chunk", "encode_chunk"]
