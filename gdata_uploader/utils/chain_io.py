"""Lazy concatenation of byte chunks and file handles into one readable body.

A `ChainedStream` knows its total length before anything is read, so the
request can carry an exact Content-Length while the video itself is read
from disk piece by piece as the transport asks for it.

A single `read(n)` keeps pulling from the following segments until `n` bytes
are gathered or the stream ends; segment boundaries never cause short reads.
"""

import io
import os
from typing import BinaryIO, Iterable, Iterator, List, Optional, Union

DEFAULT_CHUNK_SIZE = 64 * 1024  # 64KB, matches httpx's own read size


class Segment:
    """One ordered piece of a chained stream.

    Subclasses set `length` once at construction and implement `_read`.
    `read` never returns bytes past `length`. `source` is the wrapped object.
    """

    length: int = 0
    source = None

    def __init__(self):
        self.consumed = 0

    @property
    def remaining(self) -> int:
        return self.length - self.consumed

    def read(self, size: int) -> bytes:
        size = min(size, self.remaining)
        if size <= 0:
            return b""
        chunk = self._read(size)
        if not isinstance(chunk, bytes):
            raise TypeError(f"{type(self).__name__} source returned {type(chunk).__name__}, expected bytes")
        self.consumed += len(chunk)
        return chunk

    def _read(self, size: int) -> bytes:
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} length={self.length} consumed={self.consumed}>"


class BytesSegment(Segment):
    """In-memory chunk; text is encoded as UTF-8"""

    def __init__(self, data: Union[bytes, bytearray, str]):
        super().__init__()
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)
        self.source = self._data
        self.length = len(self._data)

    def _read(self, size: int) -> bytes:
        return self._data[self.consumed:self.consumed + size]


class FileSegment(Segment):
    """Binary, seekable handle read from its current position.

    The length is taken from the file metadata (or by seeking to the end and
    back for in-memory buffers) without consuming anything. The handle is not
    closed here; it belongs to the caller.
    """

    def __init__(self, handle: BinaryIO):
        super().__init__()
        if isinstance(handle, io.TextIOBase):
            raise TypeError("FileSegment needs a handle opened in binary mode")
        self._handle = self.source = handle
        self.length = self._measure(handle)

    @staticmethod
    def _measure(handle: BinaryIO) -> int:
        position = handle.tell()
        try:
            size = os.fstat(handle.fileno()).st_size
        except (AttributeError, io.UnsupportedOperation, OSError):
            end = handle.seek(0, io.SEEK_END)
            handle.seek(position, io.SEEK_SET)
            size = end
        return max(size - position, 0)

    def _read(self, size: int) -> bytes:
        return self._handle.read(size)


class StreamSegment(Segment):
    """Any readable with a caller-supplied length hint"""

    def __init__(self, stream, length: int):
        super().__init__()
        if length < 0:
            raise ValueError(f"Stream length must be >= 0, got {length}")
        self._stream = self.source = stream
        self.length = length

    def _read(self, size: int) -> bytes:
        return self._stream.read(size)


def _is_seekable(source) -> bool:
    seekable = getattr(source, "seekable", None)
    if seekable is None:
        return hasattr(source, "seek") and hasattr(source, "tell")
    return seekable()


def as_segment(source) -> Segment:
    """Wrap bytes, text or a binary handle in the matching segment type

    Raises:
        TypeError: For streams whose length cannot be known without reading
            them; wrap those in StreamSegment with an explicit length.
    """
    if isinstance(source, Segment):
        return source
    if isinstance(source, (bytes, bytearray, str)):
        return BytesSegment(source)
    if hasattr(source, "read"):
        if _is_seekable(source):
            return FileSegment(source)
        raise TypeError(
            f"Cannot determine the length of non-seekable {type(source).__name__}; "
            f"wrap it in StreamSegment(stream, length)"
        )
    raise TypeError(f"Unsupported stream source: {type(source).__name__}")


class ChainedStream:
    """Read-only byte stream over an ordered list of segments"""

    def __init__(self, sources: Iterable, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._segments: List[Segment] = [as_segment(s) for s in sources]
        self._length = sum(s.length for s in self._segments)
        self._index = 0
        self._position = 0
        self.chunk_size = chunk_size

    def length(self) -> int:
        """Total number of bytes the stream will produce"""
        return self._length

    def tell(self) -> int:
        return self._position

    def readable(self) -> bool:
        return True

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to `size` bytes, crossing segment boundaries as needed.

        A negative or None size reads everything left. Returns b"" once all
        segments are exhausted.

        Raises:
            OSError: If a segment ends before its registered length or its
                source fails to read.
        """
        if size is None or size < 0:
            size = self._length - self._position
        parts = []
        wanted = size
        while wanted > 0 and self._index < len(self._segments):
            segment = self._segments[self._index]
            if segment.remaining == 0:
                self._index += 1
                continue
            chunk = segment.read(wanted)
            if not chunk:
                raise OSError(
                    f"Segment {self._index} ended after {segment.consumed} of "
                    f"{segment.length} bytes; source changed size while streaming"
                )
            parts.append(chunk)
            wanted -= len(chunk)
        data = b"".join(parts)
        self._position += len(data)
        return data

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    def __repr__(self):
        return f"<ChainedStream segments={len(self._segments)} length={self._length} position={self._position}>"
