"""
Encrypting writer.

Wrap any object with `write` and `flush` methods and write plain text to it
like to a regular binary file. Use it as a context manager so the last
partial block gets padded and written::

    with open(path, 'wb') as f, BlowfishWriter(b"TESTKEY", f) as w:
        w.write(data)
"""
from bfstream import ReadFailed, WriteFailed
from bfstream.blocks import iter_splat, write_all, zero_pad
from bfstream.config import enc
from bfstream.cry import Cry, get_key_cry
import logging


class BlowfishWriter(object):
    """Write-only file-like object encrypting data into a sink.

    Every complete block is encrypted and written to the sink right away.
    Only the trailing part of the input that does not fill a whole block is
    kept until more data arrives or `flush` pads it with zero bytes.

    The sink is borrowed, it is never closed by the writer.

    Attributes:
        cry (Cry): Cipher used to encrypt blocks.
        sink: Object with `write` and `flush` methods receiving cipher text.
    """

    def __init__(self, key, sink):
        """Constructor.

        Args:
            key (:obj:`Cry`, :obj:`bytes` or :obj:`str`): Cry object or key
                used to create one.
            sink: Cipher text sink.
        """
        self.cry = key if isinstance(key, Cry) else get_key_cry(key)
        self.sink = sink
        self._pending = bytearray(self.cry.bs)
        self._pending_len = 0
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    @property
    def closed(self):
        return self._closed

    @property
    def pending(self):
        """Number of plain text bytes waiting for a complete block."""
        return self._pending_len

    def writable(self):
        return True

    def _check_open(self):
        if self._closed:
            raise ValueError("I/O operation on closed writer.")

    def _write_block(self, block):
        write_all(self.sink, self.cry.enc_block(block))

    def _consume(self, view):
        bs = self.cry.bs
        if self._pending_len:
            take = min(bs - self._pending_len, len(view))
            self._pending[self._pending_len:self._pending_len + take] = \
                view[:take]
            self._pending_len += take
            view = view[take:]
            if self._pending_len < bs:
                return
            self._pending_len = 0
            self._write_block(self._pending)
        while len(view) >= bs:
            self._write_block(view[:bs])
            view = view[bs:]
        if len(view):
            self._pending[:len(view)] = view
            self._pending_len = len(view)

    def write(self, data):
        """Encrypt data and write all complete blocks to sink.

        Args:
            data (bytes-like): Plain text.

        Returns:
            int: Length of data. All bytes are always accepted.

        Raises:
            WriteFailed: Sink raised an IO error.
        """
        self._check_open()
        view = memoryview(data).cast('B')
        self._consume(view)
        return len(view)

    def writev(self, chunks, splat=1):
        """Vectored write of chunks with the last chunk repeated splat times.

        Args:
            chunks (list): Sequence of bytes-like objects.
            splat (:obj:`int`, optional): Number of times the last chunk is
                written. Defaults to 1.

        Returns:
            int: Number of bytes consumed from chunks, repetitions included.

        Raises:
            WriteFailed: Sink raised an IO error.
        """
        self._check_open()
        consumed = 0
        for view in iter_splat(chunks, splat):
            self._consume(view)
            consumed += len(view)
        return consumed

    def flush(self):
        """Pad and write the pending partial block, then flush sink.

        Raises:
            WriteFailed: Sink raised an IO error.
        """
        self._check_open()
        if self._pending_len:
            logging.debug("Padding last block with %d zero bytes.",
                self.cry.bs - self._pending_len)
            block = zero_pad(self._pending[:self._pending_len], self.cry.bs)
            self._pending_len = 0
            self._write_block(block)
        try:
            self.sink.flush()
        except (OSError, ValueError) as e:
            raise WriteFailed("Sink flush failed: {}".format(e)) from e

    def close(self):
        """Flush the writer and mark it closed. Sink is left open."""
        if self._closed:
            return
        try:
            self.flush()
        finally:
            self._closed = True

    def encrypt(self, source, chunk_size=None):
        """Encrypt everything readable from source and flush.

        Args:
            source: Object with `read(size)` method returning plain text and
                b'' at the end of input.
            chunk_size (:obj:`int`, optional): Read size. Defaults to
                `enc.default_chunk_size`.

        Returns:
            int: Number of plain text bytes encrypted.

        Raises:
            ReadFailed: Source raised an IO error.
            WriteFailed: Sink raised an IO error.
        """
        chunk_size = chunk_size or enc.default_chunk_size
        total = 0
        while True:
            try:
                data = source.read(chunk_size)
            except (OSError, ValueError) as e:
                raise ReadFailed("Source read failed: {}".format(e)) from e
            if not data:
                break
            total += self.write(data)
        self.flush()
        logging.debug("Encrypted %d bytes.", total)
        return total
