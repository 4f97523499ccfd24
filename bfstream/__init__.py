"""
Blowfish block encryption of byte streams with plain file-like IO.
"""

__version__ = "0.3.0"
__licence__ = "BSD"
__year__ = "2024"
__author__ = "Predrag Mandic"
__author_email__ = "github@phlogisto.com"


class BfStreamException(Exception):
    """Generic bfstream exception."""
    pass


class UnevenBytesInStream(BfStreamException):
    """Raised when ciphertext length is not a multiple of the block size."""
    pass


class ReadFailed(BfStreamException):
    """Raised when the wrapped source fails to provide data."""
    pass


class WriteFailed(BfStreamException):
    """Raised when the wrapped sink fails to accept data."""
    pass


class BadKeyException(BfStreamException):
    """Raised when a key can not be used to initialize the cipher."""
    pass


class KeyRequired(BfStreamException):
    """Raised when neither key nor key file was provided."""
    pass
