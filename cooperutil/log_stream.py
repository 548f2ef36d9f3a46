"""In-memory text stream used to assemble log lines."""

from __future__ import annotations

from typing import Any

SMALL_BUFFER = 4000
LARGE_BUFFER = 4000 * 1000

_FMT_CAPACITY = 48
_MAX_INTEGER_SIZE = 23
_MAX_FLOAT_SIZE = 32


class FixedBuffer:
    """Text buffer with a fixed capacity; appends that do not fit are refused."""

    def __init__(self, size: int = SMALL_BUFFER) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self._size = size
        self._parts: list[str] = []
        self._length = 0

    def append(self, data: str) -> bool:
        """Store ``data`` if it fits with room to spare; report whether it did."""
        if self.avail() > len(data):
            self._write(data)
            return True
        return False

    def _write(self, data: str) -> None:
        self._parts.append(data)
        self._length += len(data)

    def data(self) -> str:
        """Return the stored text."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def avail(self) -> int:
        """Number of characters still free."""
        return self._size - self._length

    def reset(self) -> None:
        """Drop the stored text."""
        self._parts.clear()
        self._length = 0

    def __len__(self) -> int:
        return self._length


class Fmt:
    """A single value rendered with a printf-style format."""

    def __init__(self, fmt: str, value: Any) -> None:
        text = fmt % (value,)
        if len(text) >= _FMT_CAPACITY:
            raise ValueError(
                f"formatted value is {len(text)} characters; the limit is {_FMT_CAPACITY - 1}"
            )
        self._text = text

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)


class LogStream:
    """Stream that collects log text with ``<<``.

    Text first goes into a small fixed buffer; once that is full, everything
    moves to an unbounded extension and stays there until reset.
    """

    def __init__(self) -> None:
        self._buffer = FixedBuffer(SMALL_BUFFER)
        self._extended: list[str] = []

    def append(self, data: str) -> None:
        """Add text to the stream."""
        if not self._extended:
            if not self._buffer.append(data):
                self._extended.append(self._buffer.data())
                self._extended.append(data)
        else:
            self._extended.append(data)

    def _append_formatted(self, text: str, reserve: int) -> None:
        if not self._extended:
            if self._buffer.avail() >= reserve:
                self._buffer._write(text)
                return
            self._extended.append(self._buffer.data())
        self._extended.append(text)

    def __lshift__(self, value: Any) -> LogStream:
        if isinstance(value, bool):
            self.append("1" if value else "0")
        elif isinstance(value, int):
            self._append_formatted(str(value), _MAX_INTEGER_SIZE)
        elif isinstance(value, float):
            self._append_formatted("%.12g" % value, _MAX_FLOAT_SIZE)
        elif value is None:
            self.append("(null)")
        elif isinstance(value, str):
            self.append(value)
        elif isinstance(value, (bytes, bytearray)):
            self.append(bytes(value).decode("utf-8", errors="replace"))
        else:
            self.append(str(value))
        return self

    def data(self) -> str:
        """Return everything written so far."""
        if self._extended:
            if len(self._extended) > 1:
                self._extended = ["".join(self._extended)]
            return self._extended[0]
        return self._buffer.data()

    def __len__(self) -> int:
        if self._extended:
            return sum(len(part) for part in self._extended)
        return len(self._buffer)

    def reset_buffer(self) -> None:
        """Discard all written text."""
        self._buffer.reset()
        self._extended.clear()