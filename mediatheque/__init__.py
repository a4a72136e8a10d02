"""Multimedia library manager with file storage, a line-based TCP server and a client."""

__version__ = "0.1.0"