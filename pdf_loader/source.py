"""
Random-access view over a PDF byte stream.

PDF parsers seek to the cross-reference table at the end of the file
before reading objects, so a forward-only stream (socket, pipe, upload)
is buffered into memory first.
"""

from __future__ import annotations

from typing import BinaryIO, Union

from .exceptions import SourceReadError

BytesLike = Union[bytes, bytearray, memoryview]


class BufferedReaderAt:
    """
    In-memory random-access reader.

    Usage:
        with open("document.pdf", "rb") as fh:
            source = BufferedReaderAt.from_stream(fh)
        header = source.read_at(8, 0)
    """

    def __init__(self, data: BytesLike):
        self._data = bytes(data)

    @classmethod
    def from_stream(cls, stream: Union[BinaryIO, BytesLike]) -> "BufferedReaderAt":
        """
        Read a binary stream to the end and wrap the bytes.

        Raises:
            SourceReadError: If reading fails or the stream is not binary
        """
        if isinstance(stream, (bytes, bytearray, memoryview)):
            return cls(stream)
        try:
            data = stream.read()
        except OSError as e:
            raise SourceReadError("Failed to read document stream", e) from e
        if not isinstance(data, (bytes, bytearray)):
            raise SourceReadError(
                f"Document stream must yield bytes, got {type(data).__name__}"
            )
        return cls(data)

    def read_at(self, size: int, offset: int) -> bytes:
        """
        Read up to size bytes starting at offset.

        Returns fewer bytes near the end of the data and b"" at or past it.
        """
        if offset < 0:
            raise ValueError(f"Negative offset: {offset}")
        if size < 0:
            raise ValueError(f"Negative size: {size}")
        return self._data[offset:offset + size]

    def getvalue(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)
