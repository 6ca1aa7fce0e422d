# Streaming block accumulator shared by the Merkle-Damgard and sponge engines

from __future__ import annotations
import struct
from typing import Any, Callable, Tuple

from errors import ReleasedError


def md_pad(msg_len_bytes: int, byteorder: str = 'big') -> bytes:
    """\
    Merkle-Damgard strengthening for 64 byte blocks: a 0x80 byte, zeros up to
    56 mod 64 and the message length in bits as 64 bit field.
    """
    bit_len = (msg_len_bytes * 8) & ((1 << 64) - 1)
    pad = b'\x80'
    k = (56 - (msg_len_bytes + 1) % 64) % 64
    pad += b'\x00' * k
    pad += bit_len.to_bytes(8, byteorder)
    return pad


class BlockHasher:
    """\
    Base of all engines. Bytes are buffered until a full block is available,
    full blocks are compressed straight from the caller's buffer.

    digest() never modifies the running state: it pads a scratch copy of the
    pending bytes and compresses them into a copy of the state, so add() may
    be called again afterwards.
    """
    name = ''
    block_size = 64
    digest_size = 0

    __slots__ = ("_state", "_buf", "_count")

    def __init__(self, data: bytes | None = None):
        self._buf = bytearray()
        self.reset()
        if data:
            self.update(data)

    # - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - -
    # per algorithm hooks
    def _initial_state(self) -> Any:
        raise NotImplementedError

    def _compress(self, block) -> None:
        raise NotImplementedError

    def _finalize(self) -> bytes:
        raise NotImplementedError

    def _copy_state(self) -> Any:
        return self._state

    # - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - -
    def _check(self) -> None:
        if self._buf is None:
            raise ReleasedError('{} engine has been released'.format(self.name))

    def reset(self) -> None:
        """Start over with the initial state"""
        self._check()
        self._state = self._initial_state()
        self._buf = bytearray()
        self._count = 0

    def update(self, data) -> 'BlockHasher':
        self._check()
        view = memoryview(data).cast('B')
        size = self.block_size
        buf = self._buf
        end = len(view)
        pos = 0
        if buf:
            pos = min(size - len(buf), end)
            buf += view[:pos]
            if len(buf) == size:
                self._compress(buf)
                self._count += size
                del buf[:]
        while end - pos >= size:
            self._compress(view[pos:pos + size])
            self._count += size
            pos += size
        if pos < end:
            buf += view[pos:]
        return self

    add = update

    def digest(self) -> bytes:
        self._check()
        return self._finalize()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> 'BlockHasher':
        self._check()
        h = self.__class__.__new__(self.__class__)
        h._state = self._copy_state()
        h._buf = bytearray(self._buf)
        h._count = self._count
        return h

    def release(self) -> None:
        """Drop the state. Any later use raises ReleasedError."""
        self._state = None
        self._buf = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    def __repr__(self) -> str:
        return '<{} {} object @ 0x{:x}>'.format(self.__class__.__name__, self.name, id(self))


class MDHasher(BlockHasher):
    """64 byte block hash with Merkle-Damgard padding"""
    IV: Tuple[int, ...] = ()
    byteorder = 'big'
    digest_format = ''
    compress: Callable[[Tuple[int, ...], bytes], Tuple[int, ...]]

    __slots__ = ()

    def _initial_state(self) -> Tuple[int, ...]:
        return self.IV

    def _compress(self, block) -> None:
        self._state = self.compress(self._state, block)

    def _finalize(self) -> bytes:
        tmp = self._buf + md_pad(self._count + len(self._buf), self.byteorder)
        st = self._state
        for i in range(0, len(tmp), 64):
            st = self.compress(st, tmp[i:i + 64])
        return struct.pack(self.digest_format, *st)[:self.digest_size]
