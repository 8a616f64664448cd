"""
Body parts for streamed multipart requests.

A part is a fixed-size unit of bytes that can be read at any offset.
Reads past the end are clamped to what is left instead of raising, so the
stream composing the parts can poll blindly near part boundaries.
"""
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Union
import os


class Part(ABC):
    """Abstract base class for multipart body parts."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Total number of bytes in the part."""
        pass

    @abstractmethod
    def read(self, offset: int, length: int) -> bytes:
        """
        Read bytes from the part.

        Args:
            offset: Position in the part to start from
            length: Maximum number of bytes to return

        Returns:
            ``min(length, size - offset)`` bytes, or ``b""`` past the end
        """
        pass

    def _clamp(self, offset: int, length: int) -> int:
        """Number of bytes available for a read at ``offset``."""
        if offset < 0 or length < 0:
            raise ValueError(
                f"Offset and length must be non-negative (got {offset}, {length})"
            )
        return max(0, min(length, self.size - offset))


class StringPart(Part):
    """
    In-memory part.

    Text is encoded as UTF-8, so ``size`` is the byte length and not the
    character count.
    """

    def __init__(self, value: Union[str, bytes]):
        if isinstance(value, str):
            value = value.encode('utf-8')
        self._value = bytes(value)

    @property
    def size(self) -> int:
        return len(self._value)

    def read(self, offset: int, length: int) -> bytes:
        count = self._clamp(offset, length)
        if count == 0:
            return b''
        return self._value[offset:offset + count]

    def __repr__(self) -> str:
        return f"StringPart(size={self.size})"


class FilePart(Part):
    """
    Part backed by an open binary file.

    The file object is borrowed: the caller keeps it open for as long as the
    part is read and closes it afterwards. The size is captured once at
    construction; truncating the file later corrupts the stream.

    Reads move the file's cursor, so independent readers must not share
    the same handle.
    """

    def __init__(self, fileobj: BinaryIO, size: Optional[int] = None):
        """
        Args:
            fileobj: Open file object supporting ``seek`` and ``read``
            size: Known size in bytes; measured from the file when omitted
        """
        self._file = fileobj
        self._size = size if size is not None else self._measure(fileobj)

    @staticmethod
    def _measure(fileobj: BinaryIO) -> int:
        try:
            return os.fstat(fileobj.fileno()).st_size
        except (AttributeError, OSError, ValueError):
            pass
        name = getattr(fileobj, 'name', None)
        if isinstance(name, (str, bytes, os.PathLike)):
            return os.path.getsize(name)
        # In-memory file objects: measure by seeking to the end
        position = fileobj.tell()
        fileobj.seek(0, os.SEEK_END)
        size = fileobj.tell()
        fileobj.seek(position)
        return size

    @property
    def size(self) -> int:
        return self._size

    @property
    def fileobj(self) -> BinaryIO:
        """The borrowed file object."""
        return self._file

    @property
    def filename(self) -> str:
        """Base name of the backing file, or ``'file'`` when it has none."""
        name = getattr(self._file, 'name', None)
        if isinstance(name, bytes):
            name = os.fsdecode(name)
        if isinstance(name, (str, os.PathLike)):
            return os.path.basename(os.fspath(name))
        return 'file'

    def read(self, offset: int, length: int) -> bytes:
        count = self._clamp(offset, length)
        if count == 0:
            return b''
        self._file.seek(offset)
        return self._file.read(count)

    def __repr__(self) -> str:
        return f"FilePart(filename={self.filename!r}, size={self.size})"
