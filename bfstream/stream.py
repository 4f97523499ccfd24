"""
Encrypt and decrypt streams using bfstream.

Create Cry object and use it with `encrypt` and `decrypt` functions.
"""
from bfstream.reader import BlowfishReader
from bfstream.writer import BlowfishWriter

def encrypt(cry, stdin, stdout, chunk_size=None):
    """Encrypt stream.

    Args:
        cry (Cry): bfstream Cry object.
        stdin: Input raw data binary stream (e.g. sys.stdin.buffer)
        stdout: Output encrypted binary stream (e.g. sys.stdout.buffer)
        chunk_size (:obj:`int`, optional): Read size.

    Returns:
        int: Number of raw bytes encrypted.
    """
    with BlowfishWriter(cry, stdout) as writer:
        return writer.encrypt(stdin, chunk_size)

def decrypt(cry, stdin, stdout, chunk_size=None):
    """Decrypt stream.

    Args:
        cry (Cry): bfstream Cry object.
        stdin: Input encrypted binary stream (e.g. sys.stdin.buffer)
        stdout: Output raw data binary stream (e.g. sys.stdout.buffer)
        chunk_size (:obj:`int`, optional): Read size.

    Returns:
        int: Number of raw bytes decrypted.
    """
    total = BlowfishReader(cry, stdin).decrypt(stdout, chunk_size)
    stdout.flush()
    return total
