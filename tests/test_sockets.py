import socket
import threading

import pytest

from mediatheque.sockets import (
    SocketBuffer,
    UnknownHostError,
    connect,
    create_server_socket,
)


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    yield left, right
    left.close()
    right.close()


def test_write_line_appends_newline_on_the_wire(pair):
    left, right = pair
    sent = SocketBuffer(left).write_line("hello")
    assert right.recv(100) == b"hello\n"
    assert sent == len(b"hello\n")


def test_write_line_with_crlf_separator(pair):
    left, right = pair
    sent = SocketBuffer(left, write_separator="\r\n").write_line("hi")
    assert sent == len(b"hi\r\n")
    assert right.recv(100) == b"hi\r\n"


def test_write_line_larger_than_output_buffer(pair):
    left, right = pair
    buf = SocketBuffer(left, out_size=4)
    sent = buf.write_line("abcdefgh")
    reader = SocketBuffer(right)
    assert reader.read_line() == "abcdefgh"
    assert sent == len("abcdefgh") + 1


@pytest.mark.parametrize("raw", [b"one\ntwo\n", b"one\rtwo\r", b"one\r\ntwo\r\n"])
def test_read_line_default_separators(pair, raw):
    left, right = pair
    left.sendall(raw)
    reader = SocketBuffer(right)
    assert reader.read_line() == "one"
    assert reader.read_line() == "two"


def test_read_line_custom_separator(pair):
    left, right = pair
    left.sendall(b"a;b\nc;")
    reader = SocketBuffer(right, read_separator=";")
    assert reader.read_line() == "a"
    assert reader.read_line() == "b\nc"


def test_round_trip_several_lines(pair):
    left, right = pair
    writer, reader = SocketBuffer(left), SocketBuffer(right)
    messages = ["FIND_MEDIA video1", "DISP_ALL", "", "é unicode"]
    for message in messages:
        writer.write_line(message)
    assert [reader.read_line() for _ in messages] == messages


def test_read_line_across_small_input_buffer(pair):
    left, right = pair
    left.sendall(b"a long message\n")
    reader = SocketBuffer(right, in_size=3)
    assert reader.read_line() == "a long message"


def test_split_crlf_yields_empty_line(pair):
    left, right = pair
    reader = SocketBuffer(right)
    left.sendall(b"a\r")
    assert reader.read_line() == "a"
    left.sendall(b"\nb\n")
    assert reader.read_line() == ""
    assert reader.read_line() == "b"


def test_read_line_returns_none_after_shutdown(pair):
    left, right = pair
    left.sendall(b"last\npartial")
    left.shutdown(socket.SHUT_WR)
    reader = SocketBuffer(right)
    assert reader.read_line() == "last"
    assert reader.read_line() is None


def test_read_exact_bytes(pair):
    left, right = pair
    writer, reader = SocketBuffer(left), SocketBuffer(right, in_size=2)
    assert writer.write(b"0123456789") == 10
    assert reader.read(4) == b"0123"
    assert reader.read(6) == b"456789"


def test_read_raises_on_early_close(pair):
    left, right = pair
    left.sendall(b"abc")
    left.shutdown(socket.SHUT_WR)
    with pytest.raises(EOFError):
        SocketBuffer(right).read(10)


def test_invalid_separators_rejected(pair):
    _, right = pair
    with pytest.raises(ValueError):
        SocketBuffer(right, read_separator="ab")
    with pytest.raises(ValueError):
        SocketBuffer(right, write_separator=b"")


def test_invalid_buffer_size_rejected(pair):
    _, right = pair
    with pytest.raises(ValueError):
        SocketBuffer(right, in_size=0)


def test_connect_empty_host_is_unknown():
    with pytest.raises(UnknownHostError) as info:
        connect("", 3331)
    assert info.value.host == ""


def test_server_and_client_exchange_lines():
    server = create_server_socket(0)
    port = server.getsockname()[1]
    replies = []

    def serve():
        conn, _ = server.accept()
        with conn:
            buf = SocketBuffer(conn)
            request = buf.read_line()
            buf.write_line(request.upper())
            replies.append(request)

    thread = threading.Thread(target=serve)
    thread.start()
    try:
        client = connect("127.0.0.1", port)
        with client:
            buf = SocketBuffer(client)
            buf.write_line("ping")
            assert buf.read_line() == "PING"
    finally:
        thread.join(timeout=5)
        server.close()
    assert replies == ["ping"]


def test_connect_refused_raises_oserror():
    server = create_server_socket(0)
    port = server.getsockname()[1]
    server.close()
    with pytest.raises(OSError):
        connect("127.0.0.1", port)