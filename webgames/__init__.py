"""Checkers and rock-paper-scissors games rendered as HTML for CGI."""

__version__ = "0.1.0"
__all__ = ["board", "page", "update", "rps"]