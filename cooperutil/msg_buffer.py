"""A growable byte buffer with cheap prepends, used for network I/O."""

from __future__ import annotations

import os

BUFFER_DEFAULT_LENGTH = 2048
CRLF = b"\r\n"

_BUFFER_OFFSET = 8
_EXTRA_READ_SIZE = 8192


def _as_bytes(data: bytes | bytearray | memoryview | str | MsgBuffer) -> bytes:
    if isinstance(data, MsgBuffer):
        return data.peek()
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class MsgBuffer:
    """Byte buffer with a readable region between a head and a tail index.

    A few bytes are kept free in front of the data so that small headers can
    be prepended without moving it. Integers are read and written in network
    (big-endian) byte order.
    """

    def __init__(self, length: int = BUFFER_DEFAULT_LENGTH) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        self._head = _BUFFER_OFFSET
        self._init_cap = length
        self._buf = bytearray(length + _BUFFER_OFFSET)
        self._tail = self._head

    def readable_bytes(self) -> int:
        """Number of bytes waiting to be read."""
        return self._tail - self._head

    def writable_bytes(self) -> int:
        """Number of free bytes after the readable data."""
        return len(self._buf) - self._tail

    def __len__(self) -> int:
        return self.readable_bytes()

    def __bytes__(self) -> bytes:
        return self.peek()

    def __getitem__(self, offset: int) -> int:
        if not 0 <= offset < self.readable_bytes():
            raise IndexError("buffer offset out of range")
        return self._buf[self._head + offset]

    def peek(self) -> bytes:
        """Return a copy of the readable data without consuming it."""
        return bytes(self._buf[self._head:self._tail])

    def _require(self, count: int) -> None:
        if self.readable_bytes() < count:
            raise ValueError(
                f"need {count} readable bytes, have {self.readable_bytes()}"
            )

    def _peek_int(self, size: int) -> int:
        self._require(size)
        return int.from_bytes(self._buf[self._head:self._head + size], "big")

    def peek_int8(self) -> int:
        return self._peek_int(1)

    def peek_int16(self) -> int:
        return self._peek_int(2)

    def peek_int32(self) -> int:
        return self._peek_int(4)

    def peek_int64(self) -> int:
        return self._peek_int(8)

    def _read_int(self, size: int) -> int:
        value = self._peek_int(size)
        self.retrieve(size)
        return value

    def read_int8(self) -> int:
        return self._read_int(1)

    def read_int16(self) -> int:
        return self._read_int(2)

    def read_int32(self) -> int:
        return self._read_int(4)

    def read_int64(self) -> int:
        return self._read_int(8)

    def read(self, length: int) -> bytes:
        """Consume and return up to ``length`` bytes."""
        length = min(length, self.readable_bytes())
        data = bytes(self._buf[self._head:self._head + length])
        self.retrieve(length)
        return data

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= self.readable_bytes():
            raise ValueError("offset outside the readable data")

    def read_until(self, offset: int) -> bytes:
        """Consume and return the bytes before ``offset`` (relative to the head)."""
        self._check_offset(offset)
        data = bytes(self._buf[self._head:self._head + offset])
        self.retrieve(offset)
        return data

    def swap(self, other: MsgBuffer) -> None:
        """Exchange the contents of two buffers."""
        self._buf, other._buf = other._buf, self._buf
        self._head, other._head = other._head, self._head
        self._tail, other._tail = other._tail, self._tail
        self._init_cap, other._init_cap = other._init_cap, self._init_cap

    def ensure_writable_bytes(self, length: int) -> None:
        """Make room for at least ``length`` more bytes after the data."""
        if self.writable_bytes() >= length:
            return
        if self._head + self.writable_bytes() >= length + _BUFFER_OFFSET:
            readable = self.readable_bytes()
            self._buf[_BUFFER_OFFSET:_BUFFER_OFFSET + readable] = self._buf[self._head:self._tail]
            self._tail = _BUFFER_OFFSET + readable
            self._head = _BUFFER_OFFSET
            return
        needed = _BUFFER_OFFSET + self.readable_bytes() + length
        doubled = len(self._buf) * 2
        new_len = doubled if doubled > needed else needed
        grown = MsgBuffer(new_len)
        grown.append(self)
        self.swap(grown)

    def append(self, data: bytes | bytearray | memoryview | str | MsgBuffer) -> None:
        """Add data at the end; text is encoded as UTF-8."""
        chunk = _as_bytes(data)
        self.ensure_writable_bytes(len(chunk))
        self._buf[self._tail:self._tail + len(chunk)] = chunk
        self._tail += len(chunk)

    def append_int8(self, value: int) -> None:
        self.append(value.to_bytes(1, "big"))

    def append_int16(self, value: int) -> None:
        self.append(value.to_bytes(2, "big"))

    def append_int32(self, value: int) -> None:
        self.append(value.to_bytes(4, "big"))

    def append_int64(self, value: int) -> None:
        self.append(value.to_bytes(8, "big"))

    def add_in_front(self, data: bytes | bytearray | memoryview | str | MsgBuffer) -> None:
        """Put data in front of the readable bytes."""
        chunk = _as_bytes(data)
        length = len(chunk)
        if self._head >= length:
            self._buf[self._head - length:self._head] = chunk
            self._head -= length
            return
        if length <= self.writable_bytes():
            self._buf[self._head + length:self._tail + length] = self._buf[self._head:self._tail]
            self._buf[self._head:self._head + length] = chunk
            self._tail += length
            return
        total = length + self.readable_bytes()
        new_len = self._init_cap if total < self._init_cap else total
        grown = MsgBuffer(new_len)
        grown.append(chunk)
        grown.append(self)
        self.swap(grown)

    def add_in_front_int8(self, value: int) -> None:
        self.add_in_front(value.to_bytes(1, "big"))

    def add_in_front_int16(self, value: int) -> None:
        self.add_in_front(value.to_bytes(2, "big"))

    def add_in_front_int32(self, value: int) -> None:
        self.add_in_front(value.to_bytes(4, "big"))

    def add_in_front_int64(self, value: int) -> None:
        self.add_in_front(value.to_bytes(8, "big"))

    def retrieve_all(self) -> None:
        """Drop all data, shrinking the storage if it has grown a lot."""
        if len(self._buf) > self._init_cap * 2:
            del self._buf[max(self._init_cap, _BUFFER_OFFSET):]
        self._head = self._tail = _BUFFER_OFFSET

    def retrieve(self, length: int) -> None:
        """Drop ``length`` bytes from the front (all of them if fewer remain)."""
        if length >= self.readable_bytes():
            self.retrieve_all()
            return
        self._head += length

    def retrieve_until(self, offset: int) -> None:
        """Drop the bytes before ``offset`` (relative to the head)."""
        self._check_offset(offset)
        self.retrieve(offset)

    def read_fd(self, fd: int) -> int:
        """Read what is available from ``fd`` into the buffer.

        Returns the number of bytes read; raises OSError on failure.
        """
        writable = self.writable_bytes()
        extra = bytearray(_EXTRA_READ_SIZE)
        if hasattr(os, "readv"):
            with memoryview(self._buf) as view:
                tail_view = view[self._tail:]
                try:
                    buffers = [tail_view, extra] if writable < _EXTRA_READ_SIZE else [tail_view]
                    n = os.readv(fd, buffers)
                finally:
                    tail_view.release()
        else:
            data = os.read(fd, writable + _EXTRA_READ_SIZE)
            n = len(data)
            split = min(n, writable)
            self._buf[self._tail:self._tail + split] = data[:split]
            extra[:n - split] = data[split:]
        if n <= writable:
            self._tail += n
        else:
            self._tail = len(self._buf)
            self.append(extra[:n - writable])
        return n

    def find(self, data: bytes | str) -> int | None:
        """Offset of ``data`` in the readable bytes, or None."""
        needle = _as_bytes(data)
        index = self._buf.find(needle, self._head, self._tail)
        if index == -1 or (not needle and index == self._tail):
            return None
        return index - self._head

    def find_crlf(self) -> int | None:
        """Offset of the first CRLF in the readable bytes, or None."""
        return self.find(CRLF)

    def has_written(self, length: int) -> None:
        """Mark ``length`` bytes after the data as written."""
        if length > self.writable_bytes():
            raise ValueError("length exceeds the writable space")
        self._tail += length

    def unwrite(self, offset: int) -> None:
        """Remove ``offset`` bytes from the end of the data."""
        if offset > self.readable_bytes():
            raise ValueError("offset exceeds the readable data")
        self._tail -= offset