"""\
Streaming contract shared by all engines.

Run tests with: pytest tests -v
"""

import functools
import os

import pytest

from crc32 import CRC32
from errors import ReleasedError
from keccak import Keccak, KeccakBits
from md5 import MD5
from sha1 import SHA1
from sha256 import SHA224, SHA256
from sha3 import SHA3
from streaming import md_pad

FACTORIES = [
    CRC32,
    MD5,
    SHA1,
    SHA224,
    SHA256,
    functools.partial(Keccak, KeccakBits.BITS_224),
    functools.partial(Keccak, KeccakBits.BITS_256),
    functools.partial(Keccak, KeccakBits.BITS_384),
    functools.partial(Keccak, KeccakBits.BITS_512),
    functools.partial(SHA3, KeccakBits.BITS_256),
]

DIGEST_SIZES = [4, 16, 20, 28, 32, 28, 32, 48, 64, 32]

IDS = ['crc32', 'md5', 'sha1', 'sha224', 'sha256',
       'keccak224', 'keccak256', 'keccak384', 'keccak512', 'sha3-256']

MESSAGE = bytes(range(256)) * 3 + b'tail'


def chunked(data, sizes):
    pos = 0
    i = 0
    while pos < len(data):
        n = sizes[i % len(sizes)]
        yield data[pos:pos + n]
        pos += n
        i += 1


@pytest.fixture(params=FACTORIES, ids=IDS)
def factory(request):
    return request.param


class TestIncrementalEquivalence:
    """Any split of the input gives the digest of the whole"""

    def test_whole_vs_constructor(self, factory):
        assert factory().add(MESSAGE).digest() == factory(data=MESSAGE).digest()

    @pytest.mark.parametrize('sizes', [
        [1],
        [3, 5, 7],
        [63, 1],
        [64],
        [65],
        [71, 72, 73],
        [135, 137],
        [0, 200],
    ])
    def test_chunked(self, factory, sizes):
        whole = factory().add(MESSAGE).digest()
        h = factory()
        for chunk in chunked(MESSAGE, sizes):
            h.add(chunk)
        assert h.digest() == whole

    def test_block_size_boundaries(self, factory):
        size = factory().block_size
        for n in (size - 1, size, size + 1, 2 * size):
            data = os.urandom(n)
            h = factory()
            h.add(data[:n // 2])
            h.add(data[n // 2:])
            assert h.digest() == factory().add(data).digest()

    def test_empty_add_is_neutral(self, factory):
        h = factory().add(b'abc')
        before = h.digest()
        h.add(b'')
        assert h.digest() == before

    def test_bytes_like_input(self, factory):
        expected = factory().add(MESSAGE).digest()
        assert factory().add(bytearray(MESSAGE)).digest() == expected
        assert factory().add(memoryview(MESSAGE)).digest() == expected

    def test_update_alias(self, factory):
        assert factory().update(MESSAGE).digest() == factory().add(MESSAGE).digest()


class TestFinalize:

    def test_idempotent(self, factory):
        h = factory().add(MESSAGE)
        assert h.hexdigest() == h.hexdigest()
        assert h.digest() == h.digest()

    def test_peek_then_continue(self, factory):
        first, second = MESSAGE[:100], MESSAGE[100:]
        h = factory().add(first)
        h.hexdigest()
        h.add(second)
        assert h.digest() == factory().add(MESSAGE).digest()

    def test_peek_at_every_step(self, factory):
        h = factory()
        for chunk in chunked(MESSAGE, [17]):
            h.add(chunk)
            h.digest()
        assert h.digest() == factory().add(MESSAGE).digest()

    def test_digest_length(self, factory):
        index = FACTORIES.index(factory)
        h = factory()
        assert h.digest_size == DIGEST_SIZES[index]
        assert len(h.digest()) == DIGEST_SIZES[index]
        assert len(h.add(MESSAGE).digest()) == DIGEST_SIZES[index]

    def test_hex_round_trip(self, factory):
        h = factory().add(MESSAGE)
        text = h.hexdigest()
        assert text == text.lower()
        assert len(text) == 2 * h.digest_size
        assert bytes.fromhex(text) == h.digest()


class TestLifecycle:

    def test_reset(self, factory):
        h = factory().add(b'garbage')
        h.reset()
        h.add(MESSAGE)
        assert h.digest() == factory().add(MESSAGE).digest()

    def test_copy_is_independent(self, factory):
        h = factory().add(MESSAGE[:50])
        clone = h.copy()
        clone.add(b'other')
        h.add(MESSAGE[50:])
        assert h.digest() == factory().add(MESSAGE).digest()
        assert clone.digest() == factory().add(MESSAGE[:50] + b'other').digest()

    def test_release(self, factory):
        h = factory()
        h.release()
        with pytest.raises(ReleasedError):
            h.add(b'x')
        with pytest.raises(ReleasedError):
            h.digest()
        with pytest.raises(ReleasedError):
            h.reset()
        # a second release is harmless
        h.release()

    def test_context_manager(self, factory):
        with factory() as h:
            h.add(MESSAGE)
            result = h.digest()
        assert result == factory().add(MESSAGE).digest()
        with pytest.raises(ReleasedError):
            h.digest()

    def test_rejects_text(self, factory):
        with pytest.raises(TypeError):
            factory().add('text')


class TestPadding:

    @pytest.mark.parametrize('length', [0, 1, 55, 56, 63, 64, 119, 120, 1000])
    def test_md_pad_aligns(self, length):
        assert (length + len(md_pad(length))) % 64 == 0

    def test_md_pad_two_blocks(self):
        # 56 pending bytes leave no room for the length field
        assert len(md_pad(56)) == 72

    def test_md_pad_length_field(self):
        assert md_pad(3, 'big')[-8:] == (24).to_bytes(8, 'big')
        assert md_pad(3, 'little')[-8:] == (24).to_bytes(8, 'little')
        assert md_pad(3)[0] == 0x80
