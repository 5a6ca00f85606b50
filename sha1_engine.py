# sha1_engine.py
# A streaming Python implementation of the SHA-1 secure hash algorithm (NIST FIPS 180-4).

from __future__ import annotations

import copy
import logging
import os
import typing as t
import warnings

from typing_extensions import Self, deprecated

from sha1_constants import (
    BLOCK_SIZE,
    DIGEST_SIZE,
    K,
    LENGTH_OFFSET,
    MASK32,
    MASK64,
    ROUNDS,
    SHA1_INITIAL_HASH_VALUES,
)
from sha1_functions import ch, maj, parity, rotl
from sha1_utils import (
    DigestInputError,
    HashFinalizedError,
    ReadableBuffer,
    dump_block,
    hexdump_word,
    render_digest,
    words_to_bytes,
)

log = logging.getLogger(__name__)

READ_CHUNK_SIZE: int = 4096


class HashState(object):
    """Running state of one SHA-1 computation.

    Bytes are collected into a 64 byte block which is compressed into the
    five state words as soon as it is full and more input arrives. A state
    digests exactly one input; :meth:`finalize` pads the message and makes
    the state read-only.
    """

    __slots__: tuple = (
        "_block",
        "_block_fill",
        "_bit_length",
        "_digest_words",
        "_finalized",
        "blocks_compressed",
    )

    name: str = "sha1"
    digest_size: int = DIGEST_SIZE
    block_size: int = BLOCK_SIZE

    def __init__(self) -> None:
        self._block: bytearray = bytearray(BLOCK_SIZE)
        self._block_fill: int = 0
        self._bit_length: int = 0
        self._digest_words: list = list(SHA1_INITIAL_HASH_VALUES)
        self._finalized: bool = False
        self.blocks_compressed: int = 0

    @property
    def block_fill(self) -> int:
        return self._block_fill

    @property
    def bit_length(self) -> int:
        """Message length in bits, modulo 2**64"""
        return self._bit_length

    @property
    def digest_words(self) -> tuple:
        return tuple(self._digest_words)

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    @deprecated("Use `bit_length >> 32` instead - the length is a single 64-bit counter")
    def hi_length(self) -> int:
        return self._bit_length >> 32

    @property
    @deprecated("Use `bit_length & 0xFFFFFFFF` instead - the length is a single 64-bit counter")
    def lo_length(self) -> int:
        return self._bit_length & MASK32

    def copy(self) -> Self:
        return copy.deepcopy(self)

    def update(self, obj: ReadableBuffer, /) -> None:
        if isinstance(obj, str):
            raise TypeError("Strings must be encoded before hashing")
        if self._finalized:
            raise HashFinalizedError("cannot update a finalized hash state")

        data = memoryview(obj).cast("B")
        offset, size = 0, len(data)

        while offset < size:
            # a full block is only compressed once another byte shows up
            if self._block_fill == BLOCK_SIZE:
                self._compress()
                self._block_fill = 0

            take = min(BLOCK_SIZE - self._block_fill, size - offset)
            self._block[self._block_fill : self._block_fill + take] = data[
                offset : offset + take
            ]
            self._block_fill += take
            offset += take

        self._bit_length = (self._bit_length + 8 * size) & MASK64

    def update_from(self, stream: t.BinaryIO, chunk_size: int = READ_CHUNK_SIZE) -> None:
        """Feeds *stream* to the state until EOF. The stream is not closed."""
        for chunk in iter(lambda: stream.read(chunk_size), b""):
            self.update(chunk)

    def finalize(self) -> tuple:
        """Pads the message, compresses the final block(s) and returns the
        five digest words. See NIST FIPS 180-4, Section 5.1.1"""
        if self._finalized:
            raise HashFinalizedError("hash state has already been finalized")

        # input ended exactly on a block boundary
        if self._block_fill == BLOCK_SIZE:
            self._compress()

        self._pad()
        self._finalized = True
        return self.digest_words

    def digest(self) -> bytes:
        if self._finalized:
            return words_to_bytes(self._digest_words)
        return words_to_bytes(self.copy().finalize())

    def hexdigest(self) -> str:
        if self._finalized:
            return render_digest(self._digest_words)
        return render_digest(self.copy().finalize())

    def _pad(self) -> None:
        block, fill = self._block, self._block_fill

        if fill < LENGTH_OFFSET:
            block[fill] = 0x80
            block[fill + 1 : LENGTH_OFFSET] = bytes(LENGTH_OFFSET - fill - 1)

        elif fill < BLOCK_SIZE:
            # no room left for the length, it goes into an extra block
            block[fill] = 0x80
            block[fill + 1 :] = bytes(BLOCK_SIZE - fill - 1)
            self._block_fill = BLOCK_SIZE
            self._compress()
            block[:LENGTH_OFFSET] = bytes(LENGTH_OFFSET)

        else:
            block[0] = 0x80
            block[1:LENGTH_OFFSET] = bytes(LENGTH_OFFSET - 1)

        log.debug("padding %d byte block, message length %d bits", fill, self._bit_length)

        block[LENGTH_OFFSET:] = self._bit_length.to_bytes(8, "big")
        self._block_fill = BLOCK_SIZE
        self._compress()

    def _compress(self) -> None:
        block = self._block
        tracing = log.isEnabledFor(logging.DEBUG)

        W: list = [int.from_bytes(block[t * 4 : (t + 1) * 4], "big") for t in range(16)]
        for t in range(16, ROUNDS):
            W.append(rotl(W[t - 3] ^ W[t - 8] ^ W[t - 14] ^ W[t - 16], 1))

        if tracing:
            log.debug(
                "block %d, message length so far %d bits:\n%s",
                self.blocks_compressed,
                self._bit_length,
                dump_block(block, self._block_fill),
            )
            for t in range(ROUNDS):
                log.debug("W[%2d] = %s", t, hexdump_word(W[t]))

        a, b, c, d, e = self._digest_words

        for t in range(ROUNDS):
            if t < 20:
                f, k = ch(b, c, d), K[0]
            elif t < 40:
                f, k = parity(b, c, d), K[1]
            elif t < 60:
                f, k = maj(b, c, d), K[2]
            else:
                f, k = parity(b, c, d), K[3]

            temp = (rotl(a, 5) + f + e + W[t] + k) & MASK32
            a, b, c, d, e = temp, a, rotl(b, 30), c, d

            if tracing:
                log.debug("t = %2d: %s", t, " ".join(hexdump_word(x) for x in (a, b, c, d, e)))

        self._digest_words = [
            (x + y) & MASK32 for x, y in zip(self._digest_words, (a, b, c, d, e))
        ]
        self.blocks_compressed += 1


"""
NOTE: The `usedforsecurity` parameter below is primarily advisory. SHA-1 is
not collision resistant, so asking for it with `usedforsecurity=True` emits a
warning. The digest itself is the same either way.
"""


def sha1(string: ReadableBuffer = b"", *, usedforsecurity: bool = True) -> HashState:
    if not isinstance(string, (bytes, bytearray, memoryview)):
        raise TypeError("Strings must be encoded before hashing")

    if usedforsecurity:
        warnings.warn(
            "SHA-1 is not considered secure for cryptographic purposes.",
            UserWarning,
            stacklevel=2,
        )

    h = HashState()
    if string:
        h.update(string)
    return h


sha1.name = HashState.name
sha1.digest_size = DIGEST_SIZE
sha1.block_size = BLOCK_SIZE


def hash_bytes(data: ReadableBuffer) -> str:
    return sha1(data, usedforsecurity=False).hexdigest()


def hash_string(text: str, encoding: str = "utf-8") -> str:
    return hash_bytes(text.encode(encoding))


def hash_stream(stream: t.BinaryIO, chunk_size: int = READ_CHUNK_SIZE) -> str:
    """Digests a binary stream to EOF. Closing it is left to the caller."""
    h = HashState()
    h.update_from(stream, chunk_size)
    return render_digest(h.finalize())


def hash_file(path: t.Union[str, os.PathLike], chunk_size: int = READ_CHUNK_SIZE) -> str:
    """Digests the file at *path*.

    Raises DigestInputError naming the file when it cannot be opened or closed.
    """
    filename = os.fspath(path)

    try:
        stream = open(filename, "rb")
    except OSError as exc:
        raise DigestInputError(exc.errno, exc.strerror, filename) from exc

    try:
        hexdigest = hash_stream(stream, chunk_size)
    except BaseException:
        stream.close()
        raise

    try:
        stream.close()
    except OSError as exc:
        raise DigestInputError(exc.errno, exc.strerror, filename) from exc

    return hexdigest


__all__: list = [
    "HashState",
    "sha1",
    "hash_bytes",
    "hash_string",
    "hash_stream",
    "hash_file",
    "READ_CHUNK_SIZE",
]
