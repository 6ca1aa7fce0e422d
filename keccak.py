# Keccak sponge, 1600 bit state

"""\
The state is kept as a flat list of 25 lanes of 64 bits, lane (x, y) at index
x + 5*y. Input blocks and the digest are little endian regardless of the host.

Absorbing a block XORs it into the first rate/8 lanes and runs keccak_f.
Padding is the multi-rate "10*1" with a 0x01 start byte, the same rule for
Keccak and SHA3 (see sha3.py).
"""

from __future__ import annotations
import enum
import struct
from typing import List

from errors import UnsupportedVariantError
from streaming import BlockHasher

ROUNDS = 24

ROUND_CONSTANTS = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)

# rho and pi combined: starting with lane 1, each lane is rotated and moved
# to the next position of this chain
PI_LANES = (
    10, 7, 11, 17, 18, 3, 5, 16, 8, 21, 24, 4,
    15, 23, 19, 13, 12, 2, 20, 14, 22, 9, 6, 1,
)
RHO_OFFSETS = (
    1, 3, 6, 10, 15, 21, 28, 36, 45, 55, 2, 14,
    27, 41, 56, 8, 25, 43, 62, 18, 39, 61, 20, 44,
)

MASK64 = (1 << 64) - 1

STATE_LANES = 25


class KeccakBits(enum.IntEnum):
    """Supported output widths"""
    BITS_224 = 224
    BITS_256 = 256
    BITS_384 = 384
    BITS_512 = 512

    @property
    def digest_size(self) -> int:
        return self.value // 8

    @property
    def block_size(self) -> int:
        return 200 - 2 * self.digest_size


def variant(bits) -> KeccakBits:
    try:
        return KeccakBits(bits)
    except ValueError:
        raise UnsupportedVariantError(
            'unsupported output width {!r}, expected one of {}'.format(
                bits, ', '.join(str(int(b)) for b in KeccakBits))) from None


_lane_formats = {bits: struct.Struct('<{}Q'.format(bits.block_size // 8)) for bits in KeccakBits}


def _rotl64(x: int, n: int) -> int:
    return ((x << n) | (x >> (64 - n))) & MASK64


def keccak_f(A: List[int]) -> None:
    """Keccak-f[1600] on the 25 lanes in place"""
    for rc in ROUND_CONSTANTS:
        # theta
        C = [A[x] ^ A[x + 5] ^ A[x + 10] ^ A[x + 15] ^ A[x + 20] for x in range(5)]
        for x in range(5):
            d = C[(x + 4) % 5] ^ _rotl64(C[(x + 1) % 5], 1)
            for y in range(0, STATE_LANES, 5):
                A[x + y] ^= d
        # rho, pi
        last = A[1]
        for lane, offset in zip(PI_LANES, RHO_OFFSETS):
            A[lane], last = _rotl64(last, offset), A[lane]
        # chi
        for y in range(0, STATE_LANES, 5):
            a0, a1, a2, a3, a4 = A[y:y + 5]
            A[y] = a0 ^ (~a1 & a2)
            A[y + 1] = a1 ^ (~a2 & a3)
            A[y + 2] = a2 ^ (~a3 & a4)
            A[y + 3] = a3 ^ (~a4 & a0)
            A[y + 4] = a4 ^ (~a0 & a1)
        # iota
        A[0] ^= rc


def absorb(A: List[int], block, bits: KeccakBits) -> None:
    for i, word in enumerate(_lane_formats[bits].unpack(block)):
        A[i] ^= word
    keccak_f(A)


def squeeze(A: List[int], digest_size: int) -> bytes:
    # Keccak-224 ends in the middle of a lane, only its low bytes are used
    lanes = (digest_size + 7) // 8
    return b''.join(lane.to_bytes(8, 'little') for lane in A[:lanes])[:digest_size]


class Keccak(BlockHasher):
    padding = 0x01

    __slots__ = ("_bits",)

    def __init__(self, bits=KeccakBits.BITS_256, data: bytes | None = None):
        self._bits = variant(bits)
        super().__init__(data)

    @property
    def bits(self) -> KeccakBits:
        return self._bits

    @property
    def name(self) -> str:
        return 'keccak{}'.format(int(self._bits))

    @property
    def block_size(self) -> int:
        return self._bits.block_size

    @property
    def digest_size(self) -> int:
        return self._bits.digest_size

    def _initial_state(self) -> List[int]:
        return [0] * STATE_LANES

    def _copy_state(self) -> List[int]:
        return list(self._state)

    def _compress(self, block) -> None:
        absorb(self._state, block, self._bits)

    def _finalize(self) -> bytes:
        size = self.block_size
        block = bytearray(self._buf)
        block.append(self.padding)
        block.extend(bytes(size - len(block)))
        block[-1] |= 0x80
        lanes = list(self._state)
        absorb(lanes, block, self._bits)
        return squeeze(lanes, self.digest_size)

    def copy(self) -> 'Keccak':
        h = super().copy()
        h._bits = self._bits
        return h


def keccak(data: bytes, bits=KeccakBits.BITS_256) -> bytes:
    return Keccak(bits, data).digest()


def keccak_hex(data: bytes, bits=KeccakBits.BITS_256) -> str:
    return keccak(data, bits).hex()
