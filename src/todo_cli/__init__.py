"""Todo CLI - a personal task tracker for the terminal."""

__version__ = "1.2.0"
