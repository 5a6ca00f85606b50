# sha1_utils.py
# Useful types, errors and rendering helpers

from __future__ import annotations

import typing as t

from typing_extensions import Buffer

ReadableBuffer = Buffer


class HashFinalizedError(RuntimeError):
    """Raised when a finalized hash state is fed or finalized again."""


class DigestInputError(OSError):
    """An input source could not be opened or closed.

    Carries the offending filename so callers can report which input failed.
    """


_HEX_DIGITS: str = "0123456789abcdef"


def hexdump_char(c: int) -> str:
    """Returns the two hex digits of the byte c, e.g. 0x61 -> '61'"""
    return _HEX_DIGITS[c >> 4] + _HEX_DIGITS[c & 0x0F]


def hexdump_word(word: int) -> str:
    """Returns the eight hex digits of a 32-bit word, most significant nibble first"""
    return "".join(hexdump_char((word >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def render_digest(words: t.Iterable[int]) -> str:
    return "".join(hexdump_word(word) for word in words)


def words_to_bytes(words: t.Iterable[int]) -> bytes:
    return b"".join(word.to_bytes(4, "big") for word in words)


def format_line(hexdigest: str, label: str) -> str:
    """Formats a digest the way sha1sum(1) does: `<digest>  <label>`"""
    return f"{hexdigest}  {label}\n"


def dump_block(block: ReadableBuffer, fill: int) -> str:
    """Hex dump of the first *fill* bytes of a block, in 4 byte groups and
    16 bytes per line."""
    data = bytes(block)[:fill]
    lines = []
    for row in range(0, len(data), 16):
        chunk = data[row : row + 16]
        lines.append(
            " ".join(
                "".join(hexdump_char(c) for c in chunk[i : i + 4])
                for i in range(0, len(chunk), 4)
            )
        )
    return "\n".join(lines)
