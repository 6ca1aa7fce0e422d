#!/usr/bin/env python3
# Digest tool: feeds the same buffer to every enabled engine

"""\
Usage: digest FILE [--crc|--md5|--sha1|--sha2|--sha256|--keccak|--sha3]

FILE may be "-" for standard input. Without an algorithm option all of
CRC32, MD5, SHA1, SHA2/256, Keccak/256 and SHA3/256 are computed.
"""

from __future__ import annotations
import argparse
import functools
import logging
import sys
from typing import BinaryIO, Dict, Iterable, Optional, Sequence

from crc32 import CRC32
from errors import DigestError, UnknownAlgorithmError, UnsupportedVariantError
from keccak import Keccak, KeccakBits, variant
from md5 import MD5
from sha1 import SHA1
from sha256 import SHA224, SHA256
from sha3 import SHA3

# about 1 MByte, divisible by every Keccak rate (144, 136, 104, 72)
BUFFER_SIZE = 144 * 7 * 1024

ALGORITHMS = {
    'crc32': CRC32,
    'md5': MD5,
    'sha1': SHA1,
    'sha224': SHA224,
    'sha256': SHA256,
}
for _bits in KeccakBits:
    ALGORITHMS['keccak{}'.format(int(_bits))] = functools.partial(Keccak, _bits)
for _bits in KeccakBits:
    ALGORITHMS['sha3-{}'.format(int(_bits))] = functools.partial(SHA3, _bits)

# (option, label, registry name) in output order, bits filled in for the sponges
OUTPUTS = (
    ('crc', 'CRC32', 'crc32'),
    ('md5', 'MD5', 'md5'),
    ('sha1', 'SHA1', 'sha1'),
    ('sha256', 'SHA2/256', 'sha256'),
    ('keccak', 'Keccak/{bits}', 'keccak{bits}'),
    ('sha3', 'SHA3/{bits}', 'sha3-{bits}'),
)

# known answers checked by --self-test
VECTORS = (
    ('crc32', b'123456789', 'cbf43926'),
    ('md5', b'', 'd41d8cd98f00b204e9800998ecf8427e'),
    ('md5', b'abc', '900150983cd24fb0d6963f7d28e17f72'),
    ('sha1', b'', 'da39a3ee5e6b4b0d3255bfef95601890afd80709'),
    ('sha1', b'abc', 'a9993e364706816aba3e25717850c26c9cd0d89d'),
    ('sha224', b'', 'd14a028c2a3a2bc9476102bb288234c415a2b01f828ea62ac5b3e42f'),
    ('sha256', b'', 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'),
    ('sha256', b'abc', 'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'),
    ('keccak256', b'', 'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'),
)


def new(name: str, data: Optional[bytes] = None):
    """Return a fresh engine for a registered algorithm name"""
    try:
        factory = ALGORITHMS[name.lower()]
    except KeyError:
        raise UnknownAlgorithmError('unsupported hash type {!r}'.format(name)) from None
    return factory(data=data)


def compute(stream: BinaryIO, names: Iterable[str], buffer_size: int = BUFFER_SIZE) -> Dict[str, str]:
    """\
    Read stream to the end, hashing with one engine per name. Returns the hex
    digests keyed by name, in the order given.
    """
    engines = [(name, new(name)) for name in names]
    buffer = bytearray(buffer_size)
    view = memoryview(buffer)
    total = 0
    while True:
        n = stream.readinto(buffer)
        if not n:
            break
        chunk = view[:n]
        for _, engine in engines:
            engine.add(chunk)
        total += n
    logging.debug('processed {} bytes'.format(total))
    results = {}
    for name, engine in engines:
        results[name] = engine.hexdigest()
        engine.release()
    return results


def self_test(out=None) -> bool:
    if out is None:
        out = sys.stdout
    ok = True
    for name, data, expected in VECTORS:
        got = new(name, data).hexdigest()
        if got == expected:
            logging.debug('{} {!r}: ok'.format(name, data))
        else:
            ok = False
            out.write('{} {!r}: got {} expected {}\n'.format(name, data, got, expected))
    return ok


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='digest',
        description='compute CRC32, MD5, SHA1, SHA2/256, Keccak and SHA3 digests of a file')
    parser.add_argument(
        'filename',
        nargs='?',
        metavar='FILE',
        help='file to read, "-" for standard input')

    group = parser.add_argument_group('Algorithm (default: all)')
    group = group.add_mutually_exclusive_group()
    for flag, hint in (
            ('--crc', 'CRC32'),
            ('--md5', 'MD5'),
            ('--sha1', 'SHA1'),
            ('--sha2', 'SHA2/256'),
            ('--sha256', 'SHA2/256'),
            ('--keccak', 'Keccak'),
            ('--sha3', 'SHA3')):
        group.add_argument(
            flag,
            dest='algorithm',
            action='store_const',
            const='sha256' if flag == '--sha2' else flag[2:],
            help='only compute {}'.format(hint))

    parser.add_argument(
        '--bits',
        type=int,
        default=256,
        help='output width of Keccak and SHA3 (224, 256, 384, 512) default: %(default)s')
    parser.add_argument(
        '--buffer-size',
        type=int,
        default=BUFFER_SIZE,
        metavar='BYTES',
        help='read chunk size, default: %(default)s')
    parser.add_argument(
        '--self-test',
        action='store_true',
        help='verify the built-in test vectors and exit')

    group = parser.add_argument_group('Messages')
    group.add_argument(
        '--develop',
        help='show technical details',
        default=False,
        action='store_true')
    group = group.add_mutually_exclusive_group()
    group.add_argument(
        '-v', '--verbose',
        dest='verbosity',
        help='increase level of messages (can be applied multiple times)',
        default=1,
        action='count')
    group.add_argument(
        '-q', '--quiet',
        dest='verbosity',
        help='disable messages (opposite of --verbose)',
        const=0,
        action='store_const')

    args = parser.parse_args(argv)

    if args.verbosity > 1:
        level = logging.DEBUG
    elif args.verbosity:
        level = logging.INFO
    else:
        level = logging.ERROR
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    if args.develop:
        logging.info('Command line arguments are {}'.format(args))

    if args.self_test:
        if self_test():
            logging.info('all test vectors passed')
            return 0
        return 1

    if args.filename is None:
        parser.error('FILE is required')
    if args.buffer_size <= 0:
        parser.error('--buffer-size must be positive')
    try:
        variant(args.bits)
    except UnsupportedVariantError as e:
        parser.error(str(e))

    selected = [
        (label.format(bits=args.bits), name.format(bits=args.bits))
        for option, label, name in OUTPUTS
        if args.algorithm in (None, option)]
    logging.debug('algorithms: {}'.format(', '.join(name for _, name in selected)))

    try:
        if args.filename == '-':
            results = compute(sys.stdin.buffer, [name for _, name in selected], args.buffer_size)
        else:
            try:
                stream = open(args.filename, 'rb')
            except OSError as e:
                if args.develop:
                    raise
                logging.error("Can't open {!r}: {}".format(args.filename, e.strerror))
                return 2
            with stream:
                results = compute(stream, [name for _, name in selected], args.buffer_size)
    except (DigestError, OSError) as e:
        if args.develop:
            raise
        logging.error('{}'.format(e))
        return 1

    for label, name in selected:
        sys.stdout.write('{:<12}{}\n'.format(label + ':', results[name]))
    return 0


if __name__ == '__main__':
    sys.exit(main())
