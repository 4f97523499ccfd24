"""
Block helpers shared by the reader and the writer.
"""
from bfstream import WriteFailed
from bfstream.config import enc


def zero_pad(data, block_size=enc.block_size):
    """Return data padded with zero bytes up to a multiple of block_size."""
    return bytes(data) + bytes((block_size - len(data)) % block_size)

def write_all(sink, data):
    """Write all of data to sink, retrying on partial writes.

    Sinks returning None from `write` are taken to have accepted everything,
    as buffered file objects are allowed to do.

    Args:
        sink: Object with a `write` method.
        data (bytes-like): Bytes to write.

    Returns:
        int: Number of bytes written.

    Raises:
        WriteFailed: When sink raises an IO error or accepts zero bytes.
    """
    view = memoryview(data).cast('B')
    written = 0
    while written < len(view):
        try:
            n = sink.write(view[written:].tobytes())
        except (OSError, ValueError) as e:
            raise WriteFailed("Sink write failed: {}".format(e)) from e
        if n is None:
            n = len(view) - written
        if n <= 0:
            raise WriteFailed(
                "Sink accepted no bytes, {} left unwritten.".format(
                    len(view) - written))
        written += n
    return written

def iter_splat(chunks, splat=1):
    """Iterate over a chunk list with its last chunk repeated splat times.

    Nothing is copied, every yielded item is a memoryview of the caller's
    chunk. A splat of 0 leaves the last chunk out.

    Args:
        chunks (list): Sequence of bytes-like objects.
        splat (int): Number of times the last chunk is repeated.

    Yields:
        memoryview: Chunks in write order.
    """
    if splat < 0:
        raise ValueError("Splat must not be negative.")
    if not chunks:
        return
    for chunk in chunks[:-1]:
        yield memoryview(chunk).cast('B')
    last = memoryview(chunks[-1]).cast('B')
    for _ in range(splat):
        yield last
