"""
Streamed multipart body.

Presents an ordered list of parts as one forward-only byte stream. Only the
bytes asked for are ever materialized, so a large file part is sent without
loading it into memory.
"""
from bisect import bisect_right
from itertools import accumulate
from typing import Iterator, List, Optional, Sequence

from .parts import Part


class MultipartStream:
    """
    Forward-only reader over a sequence of parts.

    ``requests`` sends any object with ``__iter__`` as a streamed body and
    uses ``__len__`` for the Content-Length, so an instance can be passed
    directly as ``data=``.

    Example:
        >>> stream = MultipartStream([StringPart("stream1"), StringPart("stream2")])
        >>> stream.size
        14
        >>> stream.read(10)
        b'stream1str'
        >>> stream.read(10)
        b'eam2'
        >>> stream.read(10)
        b''
    """

    DEFAULT_CHUNK_SIZE = 64 * 1024

    def __init__(self, parts: Sequence[Part], chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            parts: Parts in body order
            chunk_size: Block size used when the stream is iterated
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self._parts: List[Part] = list(parts)
        sizes = [part.size for part in self._parts]
        # Stream offset at which each part begins
        self._starts: List[int] = [0, *accumulate(sizes)][:-1] if sizes else []
        self._size = sum(sizes)
        self._position = 0
        self._chunk_size = chunk_size

    @property
    def size(self) -> int:
        """Total number of bytes in the stream."""
        return self._size

    @property
    def parts(self) -> List[Part]:
        """Parts in body order."""
        return list(self._parts)

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bytes left to read."""
        return self._size - self._position

    def _part_index(self, position: int) -> int:
        # Zero-size parts share a start with their successor; bisect_right skips them
        return bisect_right(self._starts, position) - 1

    def read(self, length: Optional[int] = -1, buffer: Optional[bytearray] = None) -> bytes:
        """
        Read up to ``length`` bytes from the current position.

        Args:
            length: Maximum bytes to read; negative or None reads everything left
            buffer: Optional reusable buffer whose contents are replaced by
                the bytes read

        Returns:
            The bytes read, ``b""`` once the stream is exhausted
        """
        if length is None or length < 0:
            length = self.remaining

        chunks = []
        wanted = min(length, self.remaining)
        while wanted > 0:
            index = self._part_index(self._position)
            part = self._parts[index]
            data = part.read(self._position - self._starts[index], wanted)
            if not data:
                # Backing store shrank below its recorded size
                break
            chunks.append(data)
            self._position += len(data)
            wanted -= len(data)

        result = b''.join(chunks)
        if buffer is not None:
            buffer[:] = result
        return result

    def readinto(self, buffer: bytearray) -> int:
        """Fill ``buffer`` from the current position and return the byte count."""
        view = memoryview(buffer).cast('B')
        data = self.read(len(view))
        view[:len(data)] = data
        return len(data)

    def readable(self) -> bool:
        return True

    def __len__(self) -> int:
        return self.remaining

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self._chunk_size)
            if not chunk:
                return
            yield chunk

    def __repr__(self) -> str:
        return (
            f"MultipartStream(parts={len(self._parts)}, size={self._size}, "
            f"position={self._position})"
        )
