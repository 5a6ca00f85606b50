# sha1_constants.py
# Constants of the SHA-1 secure hash algorithm (NIST FIPS 180-4).

BLOCK_SIZE: int = 64          # bytes per message block
LENGTH_OFFSET: int = BLOCK_SIZE - 8
DIGEST_SIZE: int = 20         # bytes, 160 bits
ROUNDS: int = 80

MASK32: int = 0xFFFFFFFF
MASK64: int = 0xFFFFFFFFFFFFFFFF

# Initial Hash Values
# See definition in NIST FIPS 180-4, Section 5.3.1.
SHA1_INITIAL_HASH_VALUES: tuple = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
    0xC3D2E1F0,
)


# K sub t, one value per 20 rounds: ⌊2³⁰·√x⌋ for x = 2, 3, 5, 10.
# See NIST FIPS 180-4, Section 4.2.1
K: tuple = (
    0x5A827999,
    0x6ED9EBA1,
    0x8F1BBCDC,
    0xCA62C1D6,
)


__all__: list = [var for var in globals().keys() if not var.startswith('_')]
