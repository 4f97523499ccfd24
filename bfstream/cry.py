"""
bfstream encryption functions.

Cry objects `enc_block` and `dec_block` methods are symetric encrypt/decrypt
functions working on exactly one cipher block. Use `get_key_cry` or
`get_keyfile_cry` to generate proper Cry object.

Examples:
    Generate Cry object from inline key:

        get_key_cry("TESTKEY")

    Generate Cry object from key file contents:

        get_keyfile_cry("/path/to/keyfile")
"""
from Crypto.Cipher import Blowfish
from bfstream import BadKeyException
from bfstream.config import enc
import logging


def get_key_cry(key):
    """Generate Cry object from inline key.

    Args:
        key (:obj:`bytes` or :obj:`str`): Cipher key. Strings are UTF-8
            encoded.

    Returns:
        Cry: Cry object ready for encryption use.

    Raises:
        BadKeyException: When key length is not accepted by the cipher.
    """
    if isinstance(key, str):
        key = key.encode()
    return Cry(key)

def get_keyfile_cry(path):
    """Generate Cry object using raw contents of a key file as the key.

    The file is used as is, trailing newline included.

    Args:
        path (str): Key file path.

    Returns:
        Cry: Cry object ready for encryption use.

    Raises:
        BadKeyException: When key file is too big or its contents are not a
            valid key.
    """
    with open(path, 'rb') as f:
        key = f.read(enc.keyfile_max_size + 1)
    if len(key) > enc.keyfile_max_size:
        raise BadKeyException("Key file '{}' is bigger than {} bytes.".format(
            path, enc.keyfile_max_size))
    logging.debug("Loaded %d byte key from '%s'.", len(key), path)
    return Cry(key)


class Cry(object):
    """Contains the cipher state for encryption and decryption of blocks.

    Cry uses Blowfish on single blocks with no chaining and no IV, so the
    same plain text block always maps to the same cipher text block. Once
    created, it may be reused multiple times.

    Attributes:
        bs (int): Cipher block size.
        ks (int): Key size.
    """

    def __init__(self, key):
        """Constructor.

        Keys shorter than the cipher minimum are repeated whole until they
        reach it. Blowfish cycles the key over its subkeys, so the resulting
        cipher is the same one the short key defines.

        Args:
            key (bytes): Plain text Blowfish key.

        Raises:
            BadKeyException: When key is empty or longer than the cipher
                supports.
        """
        if not key:
            raise BadKeyException("Key must not be empty.")
        if len(key) > enc.key_size[-1]:
            raise BadKeyException(
                "Key must be at most {} bytes long, got {}.".format(
                    enc.key_size[-1], len(key)))
        self.bs = enc.block_size
        self.ks = len(key)
        key = bytes(key)
        if len(key) < enc.key_size[0]:
            key *= -(-enc.key_size[0] // len(key))
        self.__cipher = Blowfish.new(key, Blowfish.MODE_ECB)

    def enc_block(self, block):
        """Encrypt exactly one block of bytes.

        Args:
            block (bytes-like): Plain text block of `bs` bytes.

        Returns:
            bytes: Cipher text block.
        """
        if len(block) != self.bs:
            raise ValueError("Block must be {} bytes long.".format(self.bs))
        return self.__cipher.encrypt(bytes(block))

    def dec_block(self, block):
        """Decrypt exactly one block of bytes.

        Args:
            block (bytes-like): Cipher text block of `bs` bytes.

        Returns:
            bytes: Plain text block.
        """
        if len(block) != self.bs:
            raise ValueError("Block must be {} bytes long.".format(self.bs))
        return self.__cipher.decrypt(bytes(block))
