# SHA3 front end of the Keccak sponge

"""\
SHA3 shares the sponge and the 0x01 padding byte with Keccak, so its digests
are identical to Keccak digests of the same width. FIPS 202 domain separation
(0x06) is not applied; existing outputs of this engine stay bit for bit
compatible.
"""

from __future__ import annotations

from keccak import Keccak, KeccakBits

SHA3Bits = KeccakBits


class SHA3(Keccak):
    __slots__ = ()

    @property
    def name(self) -> str:
        return 'sha3-{}'.format(int(self._bits))


def sha3(data: bytes, bits=SHA3Bits.BITS_256) -> bytes:
    return SHA3(bits, data).digest()


def sha3_hex(data: bytes, bits=SHA3Bits.BITS_256) -> str:
    return sha3(data, bits).hex()
