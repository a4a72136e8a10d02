"""Line-oriented messaging over connected TCP sockets."""

from __future__ import annotations

import socket

DEFAULT_BUFFER_SIZE = 8192
DEFAULT_BACKLOG = 50


class UnknownHostError(OSError):
    """Raised when a host name cannot be resolved to an IPv4 address."""

    def __init__(self, host: str) -> None:
        super().__init__(f"unknown host {host!r}")
        self.host = host


def _as_separator(value: bytes | str, what: str) -> bytes:
    if isinstance(value, str):
        value = value.encode("utf-8")
    if not value:
        raise ValueError(f"{what} must not be empty")
    return bytes(value)


class SocketBuffer:
    """Keeps message boundaries on a connected stream socket.

    One call to :meth:`write_line` on one side matches exactly one call to
    :meth:`read_line` on the other. By default lines are written with a
    trailing ``\\n`` and read up to the first ``\\n``, ``\\r`` or ``\\r\\n``.
    """

    def __init__(
        self,
        sock: socket.socket,
        in_size: int = DEFAULT_BUFFER_SIZE,
        out_size: int = DEFAULT_BUFFER_SIZE,
        read_separator: bytes | str | None = None,
        write_separator: bytes | str = b"\n",
        encoding: str = "utf-8",
    ) -> None:
        if in_size <= 0 or out_size <= 0:
            raise ValueError("buffer sizes must be positive")
        self.socket = sock
        self.in_size = in_size
        self.out_size = out_size
        self.encoding = encoding
        self.read_separator = read_separator
        self.write_separator = write_separator
        self._pending = bytearray()

    @property
    def read_separator(self) -> bytes | None:
        """The single byte ending a line, or None for ``\\n``, ``\\r`` or ``\\r\\n``."""
        return self._read_separator

    @read_separator.setter
    def read_separator(self, value: bytes | str | None) -> None:
        if value is None:
            self._read_separator = None
            return
        separator = _as_separator(value, "read separator")
        if len(separator) != 1:
            raise ValueError("read separator must be a single byte")
        self._read_separator = separator

    @property
    def write_separator(self) -> bytes:
        """The bytes appended to every line written."""
        return self._write_separator

    @write_separator.setter
    def write_separator(self, value: bytes | str) -> None:
        self._write_separator = _as_separator(value, "write separator")

    def _take_line(self) -> bytes | None:
        pending = self._pending
        if self._read_separator is not None:
            index = pending.find(self._read_separator)
            if index < 0:
                return None
            sep_len = 1
        else:
            positions = [i for i in (pending.find(b"\n"), pending.find(b"\r")) if i >= 0]
            if not positions:
                return None
            index = min(positions)
            sep_len = 2 if pending[index : index + 2] == b"\r\n" else 1
        line = bytes(pending[:index])
        del pending[: index + sep_len]
        return line

    def read_line(self) -> str | None:
        """Return the next line without its separator, or None once the peer has shut down."""
        while True:
            line = self._take_line()
            if line is not None:
                return line.decode(self.encoding, errors="replace")
            chunk = self.socket.recv(self.in_size)
            if not chunk:
                self._pending.clear()
                return None
            self._pending += chunk

    def write_line(self, message: str) -> int:
        """Send *message* followed by the write separator; return the bytes sent."""
        payload = message.encode(self.encoding)
        separator = self._write_separator
        if len(payload) + len(separator) <= self.out_size:
            return self.write(payload + separator)
        return self.write(payload) + self.write(separator)

    def read(self, length: int) -> bytes:
        """Return exactly *length* bytes, blocking until they have all arrived.

        Raises EOFError if the peer shuts down first.
        """
        if length < 0:
            raise ValueError("length must not be negative")
        while len(self._pending) < length:
            chunk = self.socket.recv(max(self.in_size, length - len(self._pending)))
            if not chunk:
                received = len(self._pending)
                self._pending.clear()
                raise EOFError(f"connection closed after {received} of {length} bytes")
            self._pending += chunk
        data = bytes(self._pending[:length])
        del self._pending[:length]
        return data

    def write(self, data: bytes) -> int:
        """Send all of *data*; return the number of bytes sent."""
        self.socket.sendall(data)
        return len(data)


def _resolve(host: str) -> str:
    if not host:
        raise UnknownHostError(host)
    try:
        return socket.gethostbyname(host)
    except (socket.gaierror, UnicodeError):
        raise UnknownHostError(host) from None


def connect(host: str, port: int) -> socket.socket:
    """Open an IPv4 TCP connection to *host*:*port*.

    Raises UnknownHostError if the host cannot be resolved and OSError if
    the connection fails.
    """
    address = _resolve(host)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock


def create_server_socket(port: int, backlog: int = DEFAULT_BACKLOG) -> socket.socket:
    """Return an IPv4 TCP socket bound to all interfaces on *port* and listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(("", port))
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise
    return sock