
from __future__ import annotations

from sha1_constants import MASK32


def rotl(x: int, n: int) -> int:
    '''Rotate Left (circular left shift) of a 32-bit word'''
    return ((x << n) | (x >> (32 - n))) & MASK32


def ch(x: int, y: int, z: int) -> int:
    '''Choice
    _
    SHA-1 -> 0 <= t <= 19'''
    return (x & y) | (~x & z)

def parity(x: int, y: int, z: int) -> int:
    '''Parity
    _
    SHA-1 -> 20 <= t <= 39 and 60 <= t <= 79'''
    return x ^ y ^ z

def maj(x: int, y: int, z: int) -> int:
    '''Majority
    _
    SHA-1 -> 40 <= t <= 59'''
    return (x & y) | (x & z) | (y & z)


__all__: list = ['rotl', 'ch', 'parity', 'maj']
