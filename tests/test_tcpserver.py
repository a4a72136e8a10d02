import socket
import threading
import time

import pytest

from mediatheque.sockets import SocketBuffer, create_server_socket
from mediatheque.tcpserver import TCPServer


def _serve_pair(server):
    client, served = socket.socketpair()
    thread = threading.Thread(target=server.handle_connection, args=(served,), daemon=True)
    thread.start()
    return client, served, thread


def test_callback_response_is_sent_back():
    client, _, thread = _serve_pair(TCPServer(lambda request: request.upper()))
    with client:
        buffer = SocketBuffer(client)
        buffer.write_line("hello")
        assert buffer.read_line() == "HELLO"
        buffer.write_line("again")
        assert buffer.read_line() == "AGAIN"
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_without_callback_answers_ok():
    client, _, thread = _serve_pair(TCPServer())
    with client:
        buffer = SocketBuffer(client)
        buffer.write_line("anything")
        assert buffer.read_line() == "OK"


def test_empty_response_is_still_sent():
    client, _, _ = _serve_pair(TCPServer(lambda request: ""))
    with client:
        buffer = SocketBuffer(client)
        buffer.write_line("x")
        assert buffer.read_line() == ""


def test_callback_returning_none_closes_connection():
    client, served, thread = _serve_pair(TCPServer(lambda request: None))
    with client:
        buffer = SocketBuffer(client)
        buffer.write_line("bye")
        assert buffer.read_line() is None
    thread.join(timeout=5)
    assert served.fileno() == -1


def test_client_shutdown_ends_handler_and_closes_socket():
    client, served, thread = _serve_pair(TCPServer())
    client.shutdown(socket.SHUT_WR)
    thread.join(timeout=5)
    client.close()
    assert not thread.is_alive()
    assert served.fileno() == -1


def test_requests_are_passed_without_separator():
    seen = []

    def callback(request):
        seen.append(request)
        return request

    client, _, _ = _serve_pair(TCPServer(callback))
    with client:
        buffer = SocketBuffer(client)
        buffer.write_line("one two")
        assert buffer.read_line() == "one two"
    assert seen == ["one two"]


def test_run_raises_when_port_is_taken():
    occupier = create_server_socket(0)
    with occupier:
        port = occupier.getsockname()[1]
        with pytest.raises(OSError):
            TCPServer().run(port)


def _free_port():
    probe = create_server_socket(0)
    port = probe.getsockname()[1]
    probe.close()
    return port


def test_run_serves_several_clients():
    port = _free_port()
    server = TCPServer(lambda request: request[::-1])
    threading.Thread(target=server.run, args=(port,), daemon=True).start()

    clients = []
    deadline = time.monotonic() + 5
    while len(clients) < 2:
        try:
            clients.append(socket.create_connection(("127.0.0.1", port), timeout=5))
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)

    try:
        first, second = (SocketBuffer(sock) for sock in clients)
        first.write_line("abc")
        second.write_line("xyz")
        assert second.read_line() == "zyx"
        assert first.read_line() == "cba"
    finally:
        for sock in clients:
            sock.close()