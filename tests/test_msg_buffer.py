import os

import pytest

from cooperutil.msg_buffer import BUFFER_DEFAULT_LENGTH, CRLF, MsgBuffer


def test_new_buffer_is_empty_with_requested_space():
    buf = MsgBuffer()
    assert buf.readable_bytes() == 0
    assert buf.writable_bytes() == BUFFER_DEFAULT_LENGTH
    assert len(MsgBuffer(16)) == 0
    assert MsgBuffer(16).writable_bytes() == 16


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        MsgBuffer(-1)


def test_append_and_read():
    buf = MsgBuffer()
    buf.append(b"hello")
    buf.append(" world")
    assert buf.peek() == b"hello world"
    assert buf.read(5) == b"hello"
    assert buf.peek() == b" world"
    assert buf.read(100) == b" world"
    assert buf.readable_bytes() == 0


def test_append_other_buffer():
    first = MsgBuffer()
    first.append(b"abc")
    second = MsgBuffer()
    second.append(b"xyz")
    first.append(second)
    assert first.peek() == b"abcxyz"
    assert second.peek() == b"xyz"


def test_growth_keeps_data():
    buf = MsgBuffer(4)
    payload = bytes(range(200))
    buf.append(payload)
    assert buf.peek() == payload
    assert len(buf) == len(payload)


@pytest.mark.parametrize(
    "append, read, value",
    [
        ("append_int8", "read_int8", 0xAB),
        ("append_int16", "read_int16", 0xBEEF),
        ("append_int32", "read_int32", 0xDEADBEEF),
        ("append_int64", "read_int64", 0x0123456789ABCDEF),
    ],
)
def test_int_round_trip(append, read, value):
    buf = MsgBuffer()
    getattr(buf, append)(value)
    assert getattr(buf, read)() == value
    assert buf.readable_bytes() == 0


def test_ints_are_big_endian():
    buf = MsgBuffer()
    buf.append_int16(0x0102)
    assert buf.peek() == b"\x01\x02"
    assert buf.peek_int16() == 0x0102
    assert buf.readable_bytes() == 2


@pytest.mark.parametrize(
    "prepend, peek, value",
    [
        ("add_in_front_int8", "peek_int8", 7),
        ("add_in_front_int16", "peek_int16", 0x1234),
        ("add_in_front_int32", "peek_int32", 0x12345678),
        ("add_in_front_int64", "peek_int64", 0x1122334455667788),
    ],
)
def test_add_in_front_ints(prepend, peek, value):
    buf = MsgBuffer()
    buf.append(b"tail")
    getattr(buf, prepend)(value)
    assert getattr(buf, peek)() == value
    assert buf.peek().endswith(b"tail")


def test_peek_int_needs_enough_bytes():
    buf = MsgBuffer()
    buf.append(b"\x01")
    with pytest.raises(ValueError):
        buf.peek_int16()
    with pytest.raises(ValueError):
        MsgBuffer().read_int8()


def test_add_in_front_small_prefix():
    buf = MsgBuffer()
    buf.append(b"world")
    buf.add_in_front(b"hello ")
    assert buf.peek() == b"hello world"


def test_add_in_front_long_prefix_with_room():
    buf = MsgBuffer(64)
    buf.append(b"body")
    prefix = b"a-rather-long-prefix:"
    buf.add_in_front(prefix)
    assert buf.peek() == prefix + b"body"


def test_add_in_front_forces_new_storage():
    buf = MsgBuffer(4)
    buf.append(b"abcd")
    buf.add_in_front(b"0123456789")
    assert buf.peek() == b"0123456789abcd"


def test_ensure_writable_moves_data_forward():
    buf = MsgBuffer(16)
    buf.append(b"0123456789abcdef")
    buf.retrieve(10)
    buf.ensure_writable_bytes(10)
    assert buf.writable_bytes() >= 10
    assert buf.peek() == b"abcdef"


def test_ensure_writable_grows():
    buf = MsgBuffer(8)
    buf.append(b"xy")
    buf.ensure_writable_bytes(1000)
    assert buf.writable_bytes() >= 1000
    assert buf.peek() == b"xy"


def test_retrieve_and_retrieve_all():
    buf = MsgBuffer()
    buf.append(b"abcdef")
    buf.retrieve(2)
    assert buf.peek() == b"cdef"
    buf.retrieve(100)
    assert buf.readable_bytes() == 0
    buf.append(b"again")
    buf.retrieve_all()
    assert buf.peek() == b""


def test_retrieve_all_after_growth_still_usable():
    buf = MsgBuffer(16)
    buf.append(b"x" * 500)
    buf.retrieve_all()
    assert buf.readable_bytes() == 0
    buf.append(b"fresh")
    assert buf.peek() == b"fresh"


def test_find_and_read_until():
    buf = MsgBuffer()
    buf.append(b"GET / HTTP/1.1" + CRLF + b"Host: x")
    offset = buf.find_crlf()
    assert buf.peek()[offset:offset + 2] == CRLF
    line = buf.read_until(offset)
    assert line == b"GET / HTTP/1.1"
    buf.retrieve(2)
    assert buf.peek() == b"Host: x"
    assert buf.find("Host") == 0
    assert buf.find(b"missing") is None
    assert buf.find_crlf() is None


def test_find_ignores_consumed_bytes():
    buf = MsgBuffer()
    buf.append(b"needle-haystack")
    buf.retrieve(7)
    assert buf.find(b"needle") is None


def test_retrieve_until():
    buf = MsgBuffer()
    buf.append(b"key=value")
    buf.retrieve_until(buf.find(b"=") + 1)
    assert buf.peek() == b"value"
    with pytest.raises(ValueError):
        buf.retrieve_until(100)
    with pytest.raises(ValueError):
        buf.read_until(-1)


def test_has_written_and_unwrite():
    buf = MsgBuffer(32)
    buf.append(b"abc")
    buf.has_written(4)
    assert buf.readable_bytes() == 7
    buf.unwrite(4)
    assert buf.peek() == b"abc"
    with pytest.raises(ValueError):
        buf.unwrite(10)
    with pytest.raises(ValueError):
        buf.has_written(buf.writable_bytes() + 1)


def test_getitem():
    buf = MsgBuffer()
    buf.append(b"xyz")
    buf.retrieve(1)
    assert buf[0] == ord("y")
    assert buf[1] == ord("z")
    with pytest.raises(IndexError):
        buf[2]


def test_swap():
    first = MsgBuffer()
    first.append(b"one")
    second = MsgBuffer(4)
    second.append(b"two-two")
    first.swap(second)
    assert first.peek() == b"two-two"
    assert second.peek() == b"one"


def test_read_fd_small():
    read_end, write_end = os.pipe()
    try:
        os.write(write_end, b"hello")
        buf = MsgBuffer()
        assert buf.read_fd(read_end) == 5
        assert buf.peek() == b"hello"
    finally:
        os.close(read_end)
        os.close(write_end)


def test_read_fd_overflows_into_extra_space():
    read_end, write_end = os.pipe()
    payload = bytes(range(256)) * 4
    try:
        os.write(write_end, payload)
        buf = MsgBuffer(4)
        buf.append(b"pre")
        assert buf.read_fd(read_end) == len(payload)
        assert buf.peek() == b"pre" + payload
    finally:
        os.close(read_end)
        os.close(write_end)


def test_read_fd_bad_descriptor():
    read_end, write_end = os.pipe()
    os.close(read_end)
    os.close(write_end)
    with pytest.raises(OSError):
        MsgBuffer().read_fd(read_end)