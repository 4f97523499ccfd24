"""
bfstream config.
"""

from Crypto.Cipher import Blowfish

class Objectview(object):
    def __init__(self, d):
        self.__dict__ = d

enc = Objectview(
    {
        "block_size": Blowfish.block_size,
        "key_size": Blowfish.key_size,
        "default_chunk_size": 1024,
        "keyfile_max_size": 4096,
    }
)
