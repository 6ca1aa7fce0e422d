# Checksums of whole files, one engine per open file descriptor

from __future__ import annotations
import logging
import os
import stat
from typing import Iterator, Optional, Tuple

from crc32 import CRC32
from md5 import MD5

BUFFER_SIZE = 1024 * 1024

MD5_SUM_ZERO = "d41d8cd98f00b204e9800998ecf8427e"
SHA1_SUM_ZERO = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
SHA224_SUM_ZERO = "d14a028c2a3a2bc9476102bb288234c415a2b01f828ea62ac5b3e42f"
SHA256_SUM_ZERO = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class Checksums(object):
    """Which sums to compute, and the hex results once hash_fd() ran"""

    __slots__ = ['crc_enabled', 'crc_str', 'md5_enabled', 'md5_str']

    def __init__(self, crc: bool = True, md5: bool = True):
        self.crc_enabled = crc
        self.crc_str: Optional[str] = None
        self.md5_enabled = md5
        self.md5_str: Optional[str] = None

    def __repr__(self) -> str:
        return 'Checksums(crc={!r}, md5={!r})'.format(self.crc_str, self.md5_str)


def hash_fd(fd: int, buffer_size: int, checksums: Checksums) -> int:
    """\
    Read the open file from offset 0 to the end and store the enabled sums in
    checksums. Returns the number of bytes read. The file position is not
    used, so several threads may each run this on their own descriptor.
    """
    crc = CRC32() if checksums.crc_enabled else None
    md5 = MD5() if checksums.md5_enabled else None
    total = 0
    while True:
        data = os.pread(fd, buffer_size, total)
        if not data:
            break
        if crc is not None:
            crc.add(data)
        if md5 is not None:
            md5.add(data)
        total += len(data)
    if crc is not None:
        checksums.crc_str = crc.hexdigest()
        crc.release()
    if md5 is not None:
        checksums.md5_str = md5.hexdigest()
        md5.release()
    return total


def hash_file(path: str, crc: bool = True, md5: bool = True,
              buffer_size: int = BUFFER_SIZE) -> Tuple[int, Checksums]:
    checksums = Checksums(crc, md5)
    fd = os.open(path, os.O_RDONLY)
    try:
        size = hash_fd(fd, buffer_size, checksums)
    finally:
        os.close(fd)
    return size, checksums


def walk(root: str, crc: bool = True, md5: bool = True,
         buffer_size: int = BUFFER_SIZE) -> Iterator[Tuple[str, int, Checksums]]:
    """\
    Yield (path, size, checksums) for every regular file below root.
    Symlinks are not followed, files that can not be read are skipped.
    """
    logging.debug('scanning {!r}'.format(root))
    try:
        entries = sorted(os.scandir(root), key=lambda entry: entry.name)
    except OSError as e:
        logging.error('access failed, ignoring: {!r} ({})'.format(root, e.strerror))
        return
    for entry in entries:
        try:
            mode = entry.stat(follow_symlinks=False).st_mode
        except OSError:
            logging.error('access failed, ignoring: {!r}'.format(entry.path))
            continue
        if stat.S_ISDIR(mode):
            yield from walk(entry.path, crc, md5, buffer_size)
        elif stat.S_ISREG(mode):
            try:
                size, checksums = hash_file(entry.path, crc, md5, buffer_size)
            except OSError as e:
                logging.error('access failed, ignoring: {!r} ({})'.format(entry.path, e.strerror))
                continue
            yield entry.path, size, checksums
        else:
            logging.warning('not a regular file, ignoring: {!r}'.format(entry.path))
