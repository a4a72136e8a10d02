"""Multimedia objects: photos, videos, films and named collections of them."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import ClassVar, TextIO

PLAYER_COMMAND = ("mpv", "--keep-open")


def _next_token(tokens: Iterator[str], what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError(f"unexpected end of data while reading {what}") from None


def _read_unsigned(tokens: Iterator[str], what: str) -> int:
    token = _next_token(tokens, what)
    try:
        value = int(token)
    except ValueError:
        raise ValueError(f"invalid {what}: {token!r}") from None
    if value < 0:
        raise ValueError(f"{what} must not be negative: {value}")
    return value


def _read_float(tokens: Iterator[str], what: str) -> float:
    token = _next_token(tokens, what)
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"invalid {what}: {token!r}") from None


def _launch_player(path: str) -> subprocess.Popen:
    """Start the external player on *path* without waiting for it."""
    return subprocess.Popen([*PLAYER_COMMAND, path])


@dataclass
class MultiMedia(ABC):
    """A named multimedia file located at a path."""

    name: str = ""
    path: str = ""

    class_name: ClassVar[str] = "MultiMedia"

    def display(self, out: TextIO) -> None:
        """Write a human-readable description to *out*."""
        out.write(f"name is : {self.name}\npath is : {self.path}\n")

    @abstractmethod
    def play(self):
        """Open the media in an external player."""

    def write(self, out: TextIO) -> None:
        """Serialize the name and path, one per line."""
        out.write(f"{self.name}\n{self.path}\n")

    def read(self, tokens: Iterator[str]) -> None:
        """Load the name and path from whitespace-separated tokens."""
        self.name = _next_token(tokens, "name")
        self.path = _next_token(tokens, "path")


@dataclass
class Photo(MultiMedia):
    """A photo with a width and height in pixels."""

    width: float = 0.0
    height: float = 0.0

    class_name: ClassVar[str] = "Photo"

    def display(self, out: TextIO) -> None:
        super().display(out)
        out.write(f"\nwidth : {self.width:g}\nheight : {self.height:g}\n")

    def play(self) -> subprocess.Popen:
        return _launch_player(self.path)

    def write(self, out: TextIO) -> None:
        out.write("Photo\n")
        super().write(out)
        out.write(f"{self.width:g}\n{self.height:g}\n")

    def read(self, tokens: Iterator[str]) -> None:
        super().read(tokens)
        self.width = _read_float(tokens, "width")
        self.height = _read_float(tokens, "height")


@dataclass
class Video(MultiMedia):
    """A video with a duration in seconds."""

    duration: int = 0

    class_name: ClassVar[str] = "Video"

    def display(self, out: TextIO) -> None:
        super().display(out)
        out.write(f"\nduration : {self.duration}\n")

    def play(self) -> subprocess.Popen:
        return _launch_player(self.path)

    def write(self, out: TextIO) -> None:
        out.write("Video\n")
        MultiMedia.write(self, out)
        out.write(f"{self.duration}\n")

    def read(self, tokens: Iterator[str]) -> None:
        super().read(tokens)
        self.duration = _read_unsigned(tokens, "duration")


@dataclass
class Film(Video):
    """A video divided into chapters, each given by its duration."""

    chapters: list[int] = field(default_factory=list)

    class_name: ClassVar[str] = "Film"

    def __post_init__(self) -> None:
        self.chapters = list(self.chapters or ())

    @property
    def nb_chapters(self) -> int:
        return len(self.chapters)

    def display(self, out: TextIO) -> None:
        super().display(out)
        listed = "".join(f"{chapter} " for chapter in self.chapters)
        out.write(
            f"Chapters duration are: {listed}, Number of chapters: {self.nb_chapters}\n"
        )

    def write(self, out: TextIO) -> None:
        out.write("Film\n")
        MultiMedia.write(self, out)
        out.write(f"{self.duration}\n{self.nb_chapters}\n")
        out.writelines(f"{chapter}\n" for chapter in self.chapters)

    def read(self, tokens: Iterator[str]) -> None:
        super().read(tokens)
        count = _read_unsigned(tokens, "number of chapters")
        self.chapters = [_read_unsigned(tokens, "chapter") for _ in range(count)]


class Collection(list):
    """A named, ordered group of multimedia objects."""

    class_name: ClassVar[str] = "Collection"

    def __init__(self, name: str = "", media: Iterable[MultiMedia] = ()) -> None:
        super().__init__(media)
        self.name = name

    def __repr__(self) -> str:
        return f"Collection(name={self.name!r}, media={list.__repr__(self)})"

    def display(self, out: TextIO) -> None:
        """Write the collection name followed by each member's description."""
        out.write(f"name of groupe is : {self.name}\n")
        for media in self:
            media.display(out)

    def write(self, out: TextIO) -> None:
        """Serialize the collection marker and name; members are not stored."""
        out.write(f"Collection\n{self.name}\n")

    def read(self, tokens: Iterator[str]) -> None:
        """Load the collection name from whitespace-separated tokens."""
        self.name = _next_token(tokens, "collection name")