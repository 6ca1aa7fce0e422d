"""Registry and command line tool"""

import io
import sys

import pytest

import digest
from errors import UnknownAlgorithmError
from keccak import Keccak
from md5 import MD5

EMPTY = [
    'CRC32:      00000000',
    'MD5:        d41d8cd98f00b204e9800998ecf8427e',
    'SHA1:       da39a3ee5e6b4b0d3255bfef95601890afd80709',
    'SHA2/256:   e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855',
    'Keccak/256: c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470',
    'SHA3/256:   c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470',
]


class TestRegistry:

    def test_new(self):
        assert isinstance(digest.new('md5'), MD5)
        assert isinstance(digest.new('SHA3-384'), Keccak)
        assert digest.new('keccak224').digest_size == 28
        assert digest.new('md5', b'abc').hexdigest() == '900150983cd24fb0d6963f7d28e17f72'

    def test_unknown(self):
        with pytest.raises(UnknownAlgorithmError):
            digest.new('sha512')
        with pytest.raises(KeyError):
            digest.new('whirlpool')

    def test_every_registered_name(self):
        for name in digest.ALGORITHMS:
            h = digest.new(name, b'abc')
            assert len(h.digest()) == h.digest_size

    def test_compute_feeds_every_engine(self):
        data = b'x' * 1000
        results = digest.compute(io.BytesIO(data), ['md5', 'sha1', 'crc32'], buffer_size=7)
        assert list(results) == ['md5', 'sha1', 'crc32']
        assert results['md5'] == digest.new('md5', data).hexdigest()
        assert results['sha1'] == digest.new('sha1', data).hexdigest()
        assert results['crc32'] == digest.new('crc32', data).hexdigest()

    def test_self_test(self):
        out = io.StringIO()
        assert digest.self_test(out)
        assert out.getvalue() == ''


class TestCommandLine:

    def test_all_algorithms(self, tmp_path, capsys):
        path = tmp_path / 'empty'
        path.write_bytes(b'')
        assert digest.main([str(path)]) == 0
        assert capsys.readouterr().out.splitlines() == EMPTY

    @pytest.mark.parametrize('option, line', [
        ('--crc', 0),
        ('--md5', 1),
        ('--sha1', 2),
        ('--sha2', 3),
        ('--sha256', 3),
        ('--keccak', 4),
        ('--sha3', 5),
    ])
    def test_single_algorithm(self, tmp_path, capsys, option, line):
        path = tmp_path / 'empty'
        path.write_bytes(b'')
        assert digest.main([str(path), option]) == 0
        assert capsys.readouterr().out.splitlines() == [EMPTY[line]]

    def test_bits(self, tmp_path, capsys):
        path = tmp_path / 'abc'
        path.write_bytes(b'abc')
        assert digest.main([str(path), '--keccak', '--bits', '512']) == 0
        out = capsys.readouterr().out
        assert out.startswith('Keccak/512: ')
        assert out.split()[1] == digest.new('keccak512', b'abc').hexdigest()

    def test_bad_bits(self, tmp_path):
        path = tmp_path / 'abc'
        path.write_bytes(b'abc')
        with pytest.raises(SystemExit) as excinfo:
            digest.main([str(path), '--bits', '100'])
        assert excinfo.value.code == 2

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'abc')))
        assert digest.main(['-', '--md5']) == 0
        assert capsys.readouterr().out == 'MD5:        900150983cd24fb0d6963f7d28e17f72\n'

    def test_missing_file(self, tmp_path, capsys):
        assert digest.main([str(tmp_path / 'missing'), '--md5']) == 2
        assert capsys.readouterr().out == ''

    def test_missing_file_develop(self, tmp_path):
        with pytest.raises(OSError):
            digest.main([str(tmp_path / 'missing'), '--develop'])

    def test_file_required(self):
        with pytest.raises(SystemExit) as excinfo:
            digest.main([])
        assert excinfo.value.code == 2

    def test_options_exclusive(self, tmp_path):
        with pytest.raises(SystemExit):
            digest.main([str(tmp_path), '--md5', '--sha1'])

    def test_self_test_option(self):
        assert digest.main(['--self-test', '-q']) == 0
