# Errors raised by the digest engines and their front ends

class DigestError(Exception):
    """Base class for all errors of this package"""


class UnsupportedVariantError(DigestError, ValueError):
    """Keccak/SHA-3 output width is not one of 224, 256, 384, 512"""


class UnknownAlgorithmError(DigestError, KeyError):
    """No engine registered under the requested name"""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''


class ReleasedError(DigestError, ValueError):
    """Operation on an engine after release()"""
