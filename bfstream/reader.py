"""
Decrypting reader.

Wrap any object with a `read(size)` method returning cipher text and read
plain text from it like from a regular binary file::

    with open(path, 'rb') as f:
        data = BlowfishReader(b"TESTKEY", f).read()
"""
from bfstream import BfStreamException, ReadFailed, UnevenBytesInStream
from bfstream.blocks import write_all
from bfstream.config import enc
from bfstream.cry import Cry, get_key_cry
import logging


class BlowfishReader(object):
    """Read-only file-like object returning decrypted data from a source.

    Cipher text is pulled from the source one block at a time. Whatever part
    of the last decrypted block did not fit into the caller's buffer is kept
    and served first on the next read.

    The source is borrowed, it is never closed by the reader.

    Attributes:
        cry (Cry): Cipher used to decrypt blocks.
        source: Object with `read(size)` method returning cipher text and
            b'' at the end of input.
        last_error (BfStreamException): First fatal error seen, or None.
            Once set, every read raises it again.
    """

    def __init__(self, key, source):
        """Constructor.

        Args:
            key (:obj:`Cry`, :obj:`bytes` or :obj:`str`): Cry object or key
                used to create one.
            source: Cipher text source.
        """
        self.cry = key if isinstance(key, Cry) else get_key_cry(key)
        self.source = source
        self.last_error = None
        bs = self.cry.bs
        self._carry = bytearray(bs)
        self._carry_len = 0
        self._cursor = 0
        self._staging = bytearray(bs)
        self._staged_len = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        return False

    def readable(self):
        return True

    def _fill_staging(self):
        """Pull cipher text from source until one full block is staged.

        Returns:
            bool: True when a full block is staged, False on clean end of
                input.

        Raises:
            UnevenBytesInStream: Input ended in the middle of a block.
            ReadFailed: Source raised an IO error.
        """
        bs = self.cry.bs
        while self._staged_len < bs:
            try:
                data = self.source.read(bs - self._staged_len)
            except (OSError, ValueError) as e:
                raise ReadFailed("Source read failed: {}".format(e)) from e
            if not data:
                if self._staged_len:
                    raise UnevenBytesInStream(
                        "Stream ended with {} bytes of an incomplete "
                        "{} byte block.".format(self._staged_len, bs))
                logging.debug("End of cipher text stream.")
                return False
            n = len(data)
            if n > bs - self._staged_len:
                raise ReadFailed(
                    "Source returned {} bytes, {} were requested.".format(
                        n, bs - self._staged_len))
            self._staging[self._staged_len:self._staged_len + n] = data
            self._staged_len += n
        return True

    def readinto(self, buffer):
        """Read decrypted bytes into a pre-allocated writable buffer.

        A fatal error hit after some bytes were already produced is kept in
        `last_error` and raised on the following call, so those bytes are
        still returned.

        Args:
            buffer (bytes-like): Writable destination.

        Returns:
            int: Number of bytes written into buffer. Zero means end of
                stream.

        Raises:
            UnevenBytesInStream: Cipher text is not a multiple of block size.
            ReadFailed: Source raised an IO error.
        """
        if self.last_error is not None:
            raise self.last_error
        count = 0
        with memoryview(buffer) as view, view.cast('B') as dest:
            size = len(dest)
            if self._cursor < self._carry_len:
                count = min(self._carry_len - self._cursor, size)
                dest[:count] = self._carry[self._cursor:self._cursor + count]
                self._cursor += count
            try:
                while count < size:
                    if not self._fill_staging():
                        break
                    self._carry[:] = self.cry.dec_block(self._staging)
                    self._carry_len = len(self._carry)
                    self._staged_len = 0
                    n = min(self._carry_len, size - count)
                    dest[count:count + n] = self._carry[:n]
                    self._cursor = n
                    count += n
            except BfStreamException as e:
                # drop the traceback so it does not pin this frame's views
                self.last_error = e.with_traceback(None)
                if not count:
                    raise self.last_error
                logging.debug(
                    "Deferring '%s' after %d decrypted bytes.", e, count)
        return count

    def read(self, size=-1):
        """Read and return up to size decrypted bytes.

        Args:
            size (:obj:`int`, optional): Maximum number of bytes. Negative
                or None reads until the end of stream. Defaults to -1.

        Returns:
            bytes: Plain text. Empty at the end of stream.
        """
        if size is None or size < 0:
            return self.readall()
        buf = bytearray(size)
        n = self.readinto(buf)
        return bytes(buf[:n])

    def readall(self):
        """Read and return all decrypted bytes until the end of stream."""
        result = bytearray()
        buf = bytearray(enc.default_chunk_size)
        while True:
            n = self.readinto(buf)
            if not n:
                break
            result += buf[:n]
        return bytes(result)

    def decrypt(self, sink, chunk_size=None):
        """Decrypt the whole source into sink.

        Bytes decrypted before an error are written to sink, nothing after
        the error point is.

        Args:
            sink: Object with `write` method receiving plain text.
            chunk_size (:obj:`int`, optional): Scratch buffer size. Defaults
                to `enc.default_chunk_size`.

        Returns:
            int: Number of plain text bytes written to sink.

        Raises:
            UnevenBytesInStream: Cipher text is not a multiple of block size.
            ReadFailed: Source raised an IO error.
            WriteFailed: Sink raised an IO error.
        """
        buf = bytearray(chunk_size or enc.default_chunk_size)
        view = memoryview(buf)
        total = 0
        while True:
            n = self.readinto(buf)
            if not n:
                break
            write_all(sink, view[:n])
            total += n
        logging.debug("Decrypted %d bytes.", total)
        return total
