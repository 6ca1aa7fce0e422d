# SHA-1 (FIPS 180-4)

from __future__ import annotations
import struct
from typing import Tuple

from streaming import MDHasher

IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

K0 = 0x5A827999
K1 = 0x6ED9EBA1
K2 = 0x8F1BBCDC
K3 = 0xCA62C1D6

MASK = 0xFFFFFFFF

_words = struct.Struct('>16I')


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & MASK


def _expand(B: bytes) -> list:
    W = list(_words.unpack(B))
    for j in range(16, 80):
        W.append(_rotl(W[j-3] ^ W[j-8] ^ W[j-14] ^ W[j-16], 1))
    return W


def compress(V: Tuple[int, ...], B: bytes) -> Tuple[int, ...]:
    a, b, c, d, e = V
    W = _expand(B)
    for j in range(80):
        if j < 20:
            f = d ^ (b & (c ^ d))
            k = K0
        elif j < 40:
            f = b ^ c ^ d
            k = K1
        elif j < 60:
            f = (b & c) | (b & d) | (c & d)
            k = K2
        else:
            f = b ^ c ^ d
            k = K3
        t = (_rotl(a, 5) + f + e + k + W[j]) & MASK
        e = d
        d = c
        c = _rotl(b, 30)
        b = a
        a = t
    return (
        (V[0] + a) & MASK, (V[1] + b) & MASK, (V[2] + c) & MASK,
        (V[3] + d) & MASK, (V[4] + e) & MASK
    )


class SHA1(MDHasher):
    name = 'sha1'
    digest_size = 20
    IV = IV
    digest_format = '>5I'
    compress = staticmethod(compress)

    __slots__ = ()


def sha1(data: bytes) -> bytes:
    return SHA1(data).digest()


def sha1_hex(data: bytes) -> str:
    return sha1(data).hex()
