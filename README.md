# mediatheque

A small manager for multimedia items (photos, videos, and films with
chapters) grouped into named collections. You can drive it from Python.
It can also be served to remote clients over a simple line-based TCP
protocol.

## Installation

```
pip install .
```

Playing a photo or a video starts the external `mpv` player in the
background with `mpv --keep-open <path>`. `mpv` must be on your `PATH`
for that one feature.

## Using the library

### Media objects

`mediatheque.media` defines the item types as dataclasses:

- `Photo(name, path, width, height)`
- `Video(name, path, duration)`
- `Film(name, path, duration, chapters)`, where `chapters` is a list of chapter durations. `nb_chapters` gives its length.
- `Collection(name, media=())`, a `list` of items that also carries a `name`.

Each item has the following methods:

- `display(out)` writes a description to a text stream.
- `write(out)` serializes the item.
- `read(tokens)` loads the item from an iterator of whitespace-separated tokens.

Photos and videos also have `play()`, which starts the player and returns the `subprocess.Popen` object.

### The manager

```python
import io
from mediatheque.manager import MediaManager

manager = MediaManager()
video = manager.create_video("video1", "holiday.mp4", 50)
photo = manager.create_photo("photo1", "beach.jpg", 640, 480)
film = manager.create_film("film1", "film.mp4", 120, [30, 40, 50])

group = manager.create_collection("HAPPY")
group.append(video)
group.append(photo)

out = io.StringIO()
manager.display_collection(out, "HAPPY")
print(out.getvalue())
```

| Method | What it does |
| --- | --- |
| `create_photo`, `create_video`, `create_film`, `create_collection` | create an item and register it by name, replacing any item of the same name |
| `display_media`, `display_collection` | describe one item or one collection on a text stream |
| `display_all` | describe every collection, in name order |
| `play_media` | open the item in the external player |
| `delete_media` | remove an item, also from every collection that holds it |
| `delete_collection` | remove a collection; its items stay registered |
| `write`, `read` | save to and load from a text stream |

The manager raises these errors:

- `MediaNotFoundError` (a `LookupError`) when you look up, play or delete a name that does not exist.
- `ManagerFormatError` (a `ValueError`) when `read` is given data that is not a saved manager. In that case nothing is changed.

### Saving and loading

`write` produces a plain text file with the following layout:

- The first line is `MediaManager`.
- Then comes one block per collection, in name order.
- Then comes one block per media item, in name order.
- Each block is introduced by its kind: `Collection`, `Photo`, `Video` or `Film`.

Only a collection's name is saved, not which items it holds. Items are read back as whitespace-separated tokens, so names and paths must not contain spaces. Loaded objects replace registered ones of the same name.

```python
with open("library.txt", "w") as f:
    manager.write(f)

restored = MediaManager()
with open("library.txt") as f:
    restored.read(f)
```

### Networking pieces

`mediatheque.sockets` provides the following:

- `connect(host, port)` opens an IPv4 TCP connection. It raises `UnknownHostError` for a host that cannot be resolved.
- `create_server_socket(port, backlog)` returns a listening socket.
- `SocketBuffer` keeps message boundaries on a connected socket. One `write_line` on one side matches one `read_line` on the other. `read_line` returns `None` once the peer shuts down. `read(length)` and `write(data)` move raw bytes.

`mediatheque.tcpserver.TCPServer(callback)` serves clients, one thread per connection:

- It passes each request line to `callback` and sends back the string it returns.
- If the callback returns `None`, the server closes that connection.
- Without a callback, every request is answered with `OK`.

## Running the server

```
mediatheque-server [--port PORT]
```

The server listens on port 3331 by default. It starts with these sample items:

- `video1`
- `photo1`
- `Film2`
- a collection `HAPPY` holding all three

It exits with status 1 if it cannot listen on the port.

Requests are a command followed by a name:

| Request | Response |
| --- | --- |
| `FIND_MEDIA <name>` | description of the media item |
| `FIND_GROUPE <name>` | description of the collection and its items |
| `DISP_ALL` | description of every collection |
| `PLAY_MEDIA <name>` | empty; plays the item on the server machine |
| `DELETE_MEDIA <name>` | empty; deletes the item |
| `DELETE_COLLECTION <name>` | empty; deletes the collection |

Since a newline ends a message, each line of a description is sent followed by `_`.

When a name is not found, the server prints a notice on its own console and the response is empty. Any other command gets a fixed "try again" message.

## Running the client

```
mediatheque-client [--host HOST] [--port PORT]
```

The client works as follows:

- It connects to `127.0.0.1:3331` by default.
- It reads requests from the terminal, sends each one and prints the response.
- It turns any `;` in a response into a line break.
- Type `quit`, or end the input, to leave.

## What it does not do

The server keeps its library in memory only. It always starts from the built-in sample items, and changes made by clients are lost when it stops; it does not load or save a file. The protocol has no commands to create items or collections, or to add items to a collection; that is only possible from Python.