"""Interactive client: sends typed requests to the media server and prints responses."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from .sockets import SocketBuffer, UnknownHostError, connect

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3331
QUIT_COMMAND = "quit"


def run_client(host: str, port: int, stdin: TextIO, stdout: TextIO) -> int:
    """Relay lines from *stdin* to the server and its answers to *stdout*.

    Returns 0 on a normal end, 1 if the server cannot be reached and 2 if
    the exchange fails.
    """
    try:
        sock = connect(host, port)
    except UnknownHostError:
        print(f"Client: Couldn't find host {host}:{port}", file=sys.stderr)
        return 1
    except OSError:
        print(f"Client: Couldn't reach host {host}:{port}", file=sys.stderr)
        return 1

    with sock:
        buffer = SocketBuffer(sock)
        print(f"Client connected to {host}:{port}", file=stdout)
        while True:
            stdout.write("Request: ")
            stdout.flush()
            line = stdin.readline()
            if not line:
                return 0
            request = line.removesuffix("\n")
            if request == QUIT_COMMAND:
                return 0

            try:
                buffer.write_line(request)
            except OSError:
                print("Client: Couldn't send message", file=sys.stderr)
                return 2

            try:
                response = buffer.read_line()
            except OSError:
                response = None
            if response is None:
                print("Client: Couldn't receive message", file=sys.stderr)
                return 2

            # The server cannot send newlines inside a message, so ';' stands for them.
            print(f"Response: {response.replace(';', chr(10))}", file=stdout)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive client on the terminal."""
    parser = argparse.ArgumentParser(description="Send requests to the media server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    return run_client(args.host, args.port, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())