# SHA-256 and SHA-224 (FIPS 180-4)

from __future__ import annotations
import struct
from typing import Tuple

from streaming import MDHasher

IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19
)

# SHA-224 runs the same compression from these seeds and drops the last word
IV_224 = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4
)

K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

MASK = 0xFFFFFFFF

_words = struct.Struct('>16I')


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK


def _sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def _expand(B: bytes) -> list:
    W = list(_words.unpack(B))
    for j in range(16, 64):
        W.append((W[j-16] + _sigma0(W[j-15]) + W[j-7] + _sigma1(W[j-2])) & MASK)
    return W


def compress(V: Tuple[int, ...], B: bytes) -> Tuple[int, ...]:
    A, Bv, C, D, E, F, G, H = V
    W = _expand(B)
    for j in range(64):
        S1 = _rotr(E, 6) ^ _rotr(E, 11) ^ _rotr(E, 25)
        ch = (E & F) ^ (~E & G)
        T1 = (H + S1 + ch + K[j] + W[j]) & MASK
        S0 = _rotr(A, 2) ^ _rotr(A, 13) ^ _rotr(A, 22)
        maj = (A & Bv) ^ (A & C) ^ (Bv & C)
        T2 = (S0 + maj) & MASK
        H = G
        G = F
        F = E
        E = (D + T1) & MASK
        D = C
        C = Bv
        Bv = A
        A = (T1 + T2) & MASK
    return tuple((x + y) & MASK for x, y in zip(V, (A, Bv, C, D, E, F, G, H)))


class SHA256(MDHasher):
    name = 'sha256'
    digest_size = 32
    IV = IV
    digest_format = '>8I'
    compress = staticmethod(compress)

    __slots__ = ()


class SHA224(SHA256):
    name = 'sha224'
    digest_size = 28
    IV = IV_224

    __slots__ = ()


def sha256(data: bytes) -> bytes:
    return SHA256(data).digest()


def sha256_hex(data: bytes) -> str:
    return sha256(data).hex()


def sha224(data: bytes) -> bytes:
    return SHA224(data).digest()


def sha224_hex(data: bytes) -> str:
    return sha224(data).hex()
