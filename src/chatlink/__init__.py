"""chatlink: chat message link parsing and ordering."""

__version__ = "0.1.0"
