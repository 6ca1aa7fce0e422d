# HMAC (RFC 2104) over any engine with block_size, digest_size, update and digest

from __future__ import annotations
from typing import Callable, Optional

_TRANS_5C = bytes((x ^ 0x5C) for x in range(256))
_TRANS_36 = bytes((x ^ 0x36) for x in range(256))


class HMAC:
    """\
    Keyed hash, streaming like the engines it wraps.

    factory is called without arguments and must return a fresh engine, e.g.
    SHA256 or functools.partial(Keccak, 512). Keys longer than the block size
    are hashed first, shorter keys are padded with zeros.
    """

    __slots__ = ("_inner", "_outer", "digest_size", "block_size", "name")

    def __init__(self, factory: Callable, key: bytes, msg: Optional[bytes] = None):
        self._outer = factory()
        self._inner = factory()
        self.digest_size = self._inner.digest_size
        self.block_size = self._inner.block_size
        self.name = 'hmac-' + self._inner.name

        key = bytes(key)
        if len(key) > self.block_size:
            shortened = factory()
            shortened.update(key)
            key = shortened.digest()
        key = key.ljust(self.block_size, b'\x00')
        self._outer.update(key.translate(_TRANS_5C))
        self._inner.update(key.translate(_TRANS_36))
        if msg is not None:
            self.update(msg)

    def update(self, msg: bytes) -> 'HMAC':
        self._inner.update(msg)
        return self

    add = update

    def copy(self) -> 'HMAC':
        other = self.__class__.__new__(self.__class__)
        other._inner = self._inner.copy()
        other._outer = self._outer.copy()
        other.digest_size = self.digest_size
        other.block_size = self.block_size
        other.name = self.name
        return other

    def digest(self) -> bytes:
        outer = self._outer.copy()
        outer.update(self._inner.digest())
        return outer.digest()

    def hexdigest(self) -> str:
        return self.digest().hex()


def hmac(factory: Callable, key: bytes, msg: bytes) -> bytes:
    return HMAC(factory, key, msg).digest()


def hmac_hex(factory: Callable, key: bytes, msg: bytes) -> str:
    return hmac(factory, key, msg).hex()
