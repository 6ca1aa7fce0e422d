# CRC32 (IEEE 802.3, reflected), slicing-by-8

from __future__ import annotations
import struct
from typing import Tuple

from streaming import BlockHasher

POLY = 0xEDB88320
MASK = 0xFFFFFFFF


def _make_tables() -> Tuple[Tuple[int, ...], ...]:
    base = []
    for i in range(256):
        c = i
        for _ in range(8):
            if c & 1:
                c = (c >> 1) ^ POLY
            else:
                c >>= 1
        base.append(c)
    tables = [base]
    # table k: effect of a byte followed by k zero bytes
    for _ in range(7):
        prev = tables[-1]
        tables.append([(prev[i] >> 8) ^ base[prev[i] & 0xFF] for i in range(256)])
    return tuple(tuple(t) for t in tables)


TABLES = _make_tables()

_pair = struct.Struct('<II')


def crc32_update(value: int, data) -> int:
    """\
    Continue a CRC with more data. value is the plain (not inverted) checksum
    of everything before, like the second argument of zlib.crc32.
    """
    T0, T1, T2, T3, T4, T5, T6, T7 = TABLES
    view = memoryview(data).cast('B')
    c = value ^ MASK
    head = len(view) & ~7
    for one, two in _pair.iter_unpack(view[:head]):
        one ^= c
        c = (T7[one & 0xFF] ^ T6[(one >> 8) & 0xFF] ^
             T5[(one >> 16) & 0xFF] ^ T4[one >> 24] ^
             T3[two & 0xFF] ^ T2[(two >> 8) & 0xFF] ^
             T1[(two >> 16) & 0xFF] ^ T0[two >> 24])
    for b in view[head:]:
        c = T0[(c ^ b) & 0xFF] ^ (c >> 8)
    return c ^ MASK


class CRC32(BlockHasher):
    """Byte oriented, so nothing is ever buffered and there is no padding"""
    name = 'crc32'
    block_size = 1
    digest_size = 4

    __slots__ = ()

    def _initial_state(self) -> int:
        return 0

    def update(self, data) -> 'CRC32':
        self._check()
        view = memoryview(data).cast('B')
        self._state = crc32_update(self._state, view)
        self._count += len(view)
        return self

    add = update

    def _finalize(self) -> bytes:
        return self._state.to_bytes(4, 'big')

    @property
    def value(self) -> int:
        self._check()
        return self._state


def crc32(data: bytes, value: int = 0) -> int:
    return crc32_update(value, data)


def crc32_hex(data: bytes) -> str:
    return '{:08x}'.format(crc32(data))
