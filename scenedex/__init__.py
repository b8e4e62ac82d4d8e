"""Extension filter, directory list, history and SQLite document storage for a video thumbnail browser."""

__version__ = "0.1.0"