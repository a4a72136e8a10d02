"""A registry of named multimedia objects and named collections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from .media import Collection, Film, MultiMedia, Photo, Video

MANAGER_MARKER = "MediaManager"

_MEDIA_TYPES: dict[str, type[MultiMedia]] = {
    cls.class_name: cls for cls in (Photo, Video, Film)
}


class MediaNotFoundError(LookupError):
    """Raised when no media or collection carries the requested name."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"no {kind} named {name!r}")
        self.kind = kind
        self.name = name


class ManagerFormatError(ValueError):
    """Raised when serialized manager data cannot be understood."""


class MediaManager:
    """Creates, finds, plays, deletes and serializes media and collections.

    Media and collections are kept by name; iteration over them, for
    display and serialization, follows name order.
    """

    def __init__(self) -> None:
        self.medias: dict[str, MultiMedia] = {}
        self.collections: dict[str, Collection] = {}

    def __repr__(self) -> str:
        return (
            f"MediaManager(medias={sorted(self.medias)!r}, "
            f"collections={sorted(self.collections)!r})"
        )

    def _sorted_collections(self) -> list[Collection]:
        return [self.collections[name] for name in sorted(self.collections)]

    def _sorted_medias(self) -> list[MultiMedia]:
        return [self.medias[name] for name in sorted(self.medias)]

    def _find_media(self, name: str) -> MultiMedia:
        try:
            return self.medias[name]
        except KeyError:
            raise MediaNotFoundError("media", name) from None

    def _find_collection(self, name: str) -> Collection:
        try:
            return self.collections[name]
        except KeyError:
            raise MediaNotFoundError("collection", name) from None

    def create_photo(self, name: str, path: str, width: float, height: float) -> Photo:
        """Create a photo and register it under *name*, replacing any previous one."""
        photo = Photo(name, path, float(width), float(height))
        self.medias[name] = photo
        return photo

    def create_video(self, name: str, path: str, duration: int) -> Video:
        """Create a video and register it under *name*, replacing any previous one."""
        video = Video(name, path, duration)
        self.medias[name] = video
        return video

    def create_film(
        self, name: str, path: str, duration: int, chapters: Iterable[int] | None
    ) -> Film:
        """Create a film and register it under *name*, replacing any previous one."""
        film = Film(name, path, duration, list(chapters or ()))
        self.medias[name] = film
        return film

    def create_collection(self, name: str) -> Collection:
        """Create an empty collection registered under *name*."""
        collection = Collection(name)
        self.collections[name] = collection
        return collection

    def display_media(self, out: TextIO, name: str) -> None:
        """Describe the media called *name* on *out*."""
        self._find_media(name).display(out)

    def display_collection(self, out: TextIO, name: str) -> None:
        """Describe the collection called *name* and its members on *out*."""
        self._find_collection(name).display(out)

    def play_media(self, name: str):
        """Open the media called *name* in the external player."""
        return self._find_media(name).play()

    def delete_media(self, name: str) -> None:
        """Remove the media called *name*, also from every collection holding it."""
        self._find_media(name)
        del self.medias[name]
        for collection in self.collections.values():
            collection[:] = [media for media in collection if media.name != name]

    def delete_collection(self, name: str) -> None:
        """Remove the collection called *name*; its members stay registered."""
        self._find_collection(name)
        del self.collections[name]

    def display_all(self, out: TextIO) -> None:
        """Describe every collection, in name order."""
        for collection in self._sorted_collections():
            collection.display(out)

    def write(self, out: TextIO) -> None:
        """Serialize all collections, then all media, after a header line."""
        out.write(f"{MANAGER_MARKER}\n")
        for collection in self._sorted_collections():
            collection.write(out)
        for media in self._sorted_medias():
            media.write(out)

    def read(self, stream: TextIO) -> None:
        """Load media and collections written by :meth:`write`.

        Loaded objects replace registered ones of the same name. Nothing is
        changed if the data is malformed.
        """
        tokens = iter(stream.read().split())
        header = next(tokens, None)
        if header != MANAGER_MARKER:
            raise ManagerFormatError(
                f"expected {MANAGER_MARKER!r} header, found {header!r}"
            )

        medias: dict[str, MultiMedia] = {}
        collections: dict[str, Collection] = {}
        for marker in tokens:
            try:
                if marker == Collection.class_name:
                    collection = Collection()
                    collection.read(tokens)
                    collections[collection.name] = collection
                elif marker in _MEDIA_TYPES:
                    media = _MEDIA_TYPES[marker]()
                    media.read(tokens)
                    medias[media.name] = media
                else:
                    raise ManagerFormatError(f"invalid object marker {marker!r}")
            except ManagerFormatError:
                raise
            except ValueError as exc:
                raise ManagerFormatError(str(exc)) from exc

        self.medias.update(medias)
        self.collections.update(collections)