"""Small networking and systems tools usable as commands or modules."""

__version__ = "0.1.0"