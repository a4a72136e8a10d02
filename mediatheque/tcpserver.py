"""A multi-client TCP server answering line-based requests, one thread per client."""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable
from typing import Optional

from .sockets import SocketBuffer, create_server_socket

Callback = Callable[[str], Optional[str]]

DEFAULT_RESPONSE = "OK"

logger = logging.getLogger(__name__)


class TCPServer:
    """Serves IPv4 TCP clients, answering every request line with one response line.

    The callback receives each request and returns the response to send
    back. Returning None closes the connection with that client. Without a
    callback every request is answered with ``OK``.
    """

    def __init__(self, callback: Callback | None = None) -> None:
        self.callback = callback

    def _error(self, message: str) -> None:
        logger.error("TCPServer: %s", message)

    def run(self, port: int) -> None:
        """Bind to *port* and serve connections forever.

        Raises OSError if the port cannot be bound.
        """
        try:
            server_sock = create_server_socket(port)
        except OSError:
            self._error(f"Can't bind on port: {port}")
            raise
        with server_sock:
            while True:
                try:
                    conn, _ = server_sock.accept()
                except OSError:
                    self._error("input connection failed")
                    continue
                threading.Thread(
                    target=self.handle_connection, args=(conn,), daemon=True
                ).start()

    def handle_connection(self, sock: socket.socket) -> None:
        """Answer requests on a connected socket until it closes, then close it."""
        buffer = SocketBuffer(sock)
        with sock:
            while True:
                try:
                    request = buffer.read_line()
                except OSError:
                    self._error("Read error")
                    break
                if request is None:
                    self._error("Connection closed by client")
                    break

                if self.callback is None:
                    response = DEFAULT_RESPONSE
                else:
                    response = self.callback(request)
                    if response is None:
                        self._error("Closing connection with client")
                        break

                try:
                    buffer.write_line(response)
                except OSError:
                    self._error("Write error")
                    break