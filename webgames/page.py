"""CGI page that shows a fresh checkers board."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence

from .board import Board

RESPONSE_HEADERS = (
    "Content-Type: text/html\r\n"
    "Cache-Control: no-cache\r\n"
    "X-Content-Type-Options: nosniff\r\n"
    "X-Frame-Options: DENY\r\n"
    "Content-Security-Policy: default-src 'self'; img-src 'self' data:; "
    "style-src 'self' 'unsafe-inline'\r\n"
    "\r\n"
)

_HEAD = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    '<link rel="stylesheet" href="styles.css">\n'
    "<script src='checkers.js'></script>\n"
    "</head>\n"
    "<body>\n"
)

_TAIL = "</body>\n</html>\n"


def render_page(environ: Mapping[str, str]) -> str:
    """Return the complete CGI response for a new game."""
    parts = [RESPONSE_HEADERS, _HEAD]
    try:
        board = Board()
        board.init_pieces()
        parts.append(board.render())
        parts.append(_TAIL)
    except Exception as exc:  # reported to the client rather than crashing the CGI
        parts.append("Content-Type: text/html\n\n")
        parts.append(f"Error: {exc}\n")

    method = environ.get("REQUEST_METHOD")
    if method:
        parts.append("Executed via a web browser.\n")
        parts.append(f"Request Method: {method}\n")
    else:
        parts.append("Executed from the command line or another context.\n")
    return "".join(parts)


def main(argv: Sequence[str] | None = None) -> int:
    """Write the new-game page to standard output."""
    sys.stdout.write(render_page(os.environ))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())