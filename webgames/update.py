"""CGI handler that applies a submitted checkers move."""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Mapping, Sequence
from typing import IO

from .board import BOARD_SIZE, MAX_CONTENT_LENGTH, Board, GameState
from .page import RESPONSE_HEADERS

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_HEX = re.compile(r"\s*([+-]?[0-9a-fA-F]+)")

_EMPTY_STATE = "<input type='hidden' id='currentBoardState' value=''>"

_WINNER_MESSAGES = {
    GameState.WHITE_WIN: "White wins!",
    GameState.BLACK_WIN: "Black wins!",
    GameState.DRAW: "The game is a draw!",
}


def get_post_data(environ: Mapping[str, str], stream: IO) -> str:
    """Read exactly CONTENT_LENGTH bytes of the request body."""
    raw_length = environ.get("CONTENT_LENGTH")
    if raw_length is None:
        raise ValueError("No Content-Length header")
    length = int(raw_length)
    if length < 0 or length > MAX_CONTENT_LENGTH:
        raise ValueError("Input exceeds maximum allowed size")

    data = stream.read(length) if length else b""
    if isinstance(data, bytes):
        data = data.decode("latin-1")
    if len(data) != length:
        raise ValueError("Incomplete data read")
    return data.split("\0", 1)[0]


def _decode_hex(pair: str) -> str:
    match = _LEADING_HEX.match(pair)
    if match is None:
        raise ValueError(f"Invalid escape sequence: %{pair}")
    return chr(int(match.group(1), 16) % 256)


def get_form_value(data: str, key: str) -> str:
    """Return the URL-decoded value of a key in form data, or '' if absent."""
    marker = key + "="
    start = data.find(marker)
    if start < 0:
        return ""
    start += len(marker)
    end = data.find("&", start)
    value = data[start:] if end < 0 else data[start:end]

    decoded = []
    chars = iter(enumerate(value))
    for i, ch in chars:
        if ch == "%" and i + 2 < len(value):
            decoded.append(_decode_hex(value[i + 1 : i + 3]))
            next(chars)
            next(chars)
        elif ch == "+":
            decoded.append(" ")
        else:
            decoded.append(ch)
    return "".join(decoded)


def sanitize_input(text: str) -> str:
    """Keep only ASCII letters, digits, ',', '-' and '_'."""
    result = "".join(
        ch for ch in text if (ch.isascii() and ch.isalnum()) or ch in ",-_"
    )
    if len(result) > MAX_CONTENT_LENGTH:
        raise ValueError("Input too long")
    return result


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"Invalid number: {text}")
    return int(match.group(1))


def _error(message: str) -> str:
    return f"<div id='board'>{message}</div>{_EMPTY_STATE}"


def handle_move(post_data: str) -> str:
    """Apply the move described by form data and return the HTML body."""
    log.debug("Received POST data: [%s]", post_data)
    parts: list[str] = []
    try:
        from_row_text = get_form_value(post_data, "fromRow")
        from_col_text = get_form_value(post_data, "fromCol")
        to_row_text = get_form_value(post_data, "toRow")
        to_col_text = get_form_value(post_data, "toCol")
        board_state = sanitize_input(get_form_value(post_data, "boardAsString"))
        log.debug("boardState: %s", board_state)

        from_row = _to_int(from_row_text) - 1 if from_row_text else -1
        from_col = _to_int(from_col_text) if from_col_text else -1
        to_row = _to_int(to_row_text) - 1 if to_row_text else -1
        to_col = _to_int(to_col_text) if to_col_text else -1

        coords = (from_row, from_col, to_row, to_col)
        if not all(0 <= value < BOARD_SIZE for value in coords):
            raise ValueError("Move coordinates out of range")

        board = Board()
        if board_state:
            board.load_string(board_state)
            if not board.valid_move(*coords):
                raise ValueError("Invalid move")
            parts.append(board.update_board(*coords))
        else:
            log.debug("No board state - initializing new board")
            board.init_pieces()

        if board.state != GameState.ONGOING:
            parts.append(f"<div id='board'>{_WINNER_MESSAGES[board.state]}</div>")
            parts.append(_EMPTY_STATE)
            return "".join(parts)

        parts.append(board.render())
    except Exception as exc:
        log.error("Error processing move: %s", exc)
        parts.append(_error(f"Error processing move: {exc}"))
    return "".join(parts)


def main(argv: Sequence[str] | None = None) -> int:
    """Serve one move request on standard input and output."""
    out = sys.stdout
    out.write(RESPONSE_HEADERS)
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        post_data = get_post_data(os.environ, stream)
    except Exception as exc:
        log.error("Global error processing request: %s", exc)
        out.write(_error(f"Global error processing request: {exc}"))
    else:
        out.write(handle_move(post_data))
    out.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())