"""Media server: answers text commands about a sample media library over TCP."""

from __future__ import annotations

import argparse
import io
import logging
import sys

from .manager import MediaManager, MediaNotFoundError
from .tcpserver import TCPServer

DEFAULT_PORT = 3331

NOT_FOUND_MESSAGE = "pas trouvé"
NO_MEDIA_MESSAGE = "No media with this name"
UNKNOWN_COMMAND_RESPONSE = "Waiting or try again the server block two seconds some times"

logger = logging.getLogger(__name__)


def sample_manager() -> MediaManager:
    """Return a manager holding a video, a photo, a film and a collection of all three."""
    manager = MediaManager()
    video = manager.create_video("video1", "tralalelo.mp4", 50)
    photo = manager.create_photo("photo1", "photo1.jpg", 50, 50)
    film = manager.create_film("Film2", "film.mp4", 50, None)
    group = manager.create_collection("HAPPY")
    group.extend([video, photo, film])
    return manager


def _flatten(text: str) -> str:
    """Turn every line of *text* into ``line_`` so the result fits on one line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return "".join(f"{line}_" for line in lines)


def _capture(display, *args) -> str:
    out = io.StringIO()
    display(out, *args)
    return _flatten(out.getvalue())


def handle_request(manager: MediaManager, request: str) -> str:
    """Run one command against *manager* and return the response line."""
    logger.info("request: %s", request)
    words = request.split(" ", 2)
    command = words[0]
    argument = words[1] if len(words) > 1 else ""
    logger.info("command: %s", command)

    if command == "FIND_MEDIA":
        try:
            return _capture(manager.display_media, argument)
        except MediaNotFoundError:
            print(NOT_FOUND_MESSAGE)
            return ""
    if command == "FIND_GROUPE":
        try:
            return _capture(manager.display_collection, argument)
        except MediaNotFoundError:
            print(NOT_FOUND_MESSAGE)
            return ""
    if command == "PLAY_MEDIA":
        try:
            manager.play_media(argument)
        except MediaNotFoundError:
            print(NOT_FOUND_MESSAGE)
        except OSError as exc:
            logger.error("could not start player: %s", exc)
        return ""
    if command == "DELETE_MEDIA":
        try:
            manager.delete_media(argument)
        except MediaNotFoundError:
            print(NO_MEDIA_MESSAGE)
        return ""
    if command == "DELETE_COLLECTION":
        try:
            manager.delete_collection(argument)
        except MediaNotFoundError:
            print(NO_MEDIA_MESSAGE)
        return ""
    if command == "DISP_ALL":
        return _capture(manager.display_all)
    return UNKNOWN_COMMAND_RESPONSE


def main(argv: list[str] | None = None) -> int:
    """Start the media server; return 1 if it cannot listen on its port."""
    parser = argparse.ArgumentParser(description="Serve a sample media library over TCP.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    manager = sample_manager()
    server = TCPServer(lambda request: handle_request(manager, request))

    print(f"Starting Server on port {args.port}")
    try:
        server.run(args.port)
    except OSError:
        print(f"Could not start Server on port {args.port}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())