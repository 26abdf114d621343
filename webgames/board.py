"""Checkers board: rules, state serialisation and HTML rendering."""

from __future__ import annotations

import copy
import enum
import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path

BOARD_SIZE = 8
MAX_CONTENT_LENGTH = 4096

_COLUMN_LETTERS = "ABCDEFGH"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_BOARD_LOCK = threading.Lock()

_PIECE_IMAGES = {
    2 - 1: "BlackCircle.png",
}


class PieceType(enum.IntEnum):
    """Contents of a square."""

    NONE = 0
    BLACK = 1
    WHITE = 2
    BKING = 3
    WKING = 4


class GameState(enum.Enum):
    """Overall state of a game."""

    ONGOING = 0
    WHITE_WIN = 1
    BLACK_WIN = 2
    DRAW = 3


@dataclass(frozen=True)
class Move:
    """A move as recorded in the board's history."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    was_capture: bool


_IMAGE_FOR = {
    PieceType.BLACK: "BlackCircle.png",
    PieceType.WHITE: "WhiteCircle.png",
    PieceType.WKING: "KingCircle.png",
    PieceType.BKING: "KingCircle.png",
}

_STRING_CODE = {
    PieceType.NONE: "0",
    PieceType.BLACK: "1",
    PieceType.WHITE: "2",
}


def interface_html() -> str:
    """Return the HTML form used to submit a move."""

    def column_select(name: str) -> list[str]:
        lines = [f'        <select name="{name}" required>']
        lines += [
            f'            <option value="{index}">{letter}</option>'
            for index, letter in enumerate(_COLUMN_LETTERS)
        ]
        lines.append("        </select>")
        return lines

    def row_select(name: str) -> list[str]:
        lines = [f'        <select name="{name}" required>']
        lines += [
            f'            <option value="{number}">{number}</option>'
            for number in range(1, BOARD_SIZE + 1)
        ]
        lines.append("        </select>")
        return lines

    lines = [
        '<link rel="stylesheet" href="styles.css">',
        '<form id="moveForm" onsubmit="submitMove(event); return false;">',
        '    <div class="selection">',
        "        From:",
        *column_select("fromCol"),
        *row_select("fromRow"),
        "        To:",
        *column_select("toCol"),
        *row_select("toRow"),
        '        <input type="submit" value="Make Move">',
        '        <input type="hidden" name="boardAsString" id="boardAsString">',
        "    </div>",
        "</form>",
    ]
    return "\n".join(lines) + "\n"


def _parse_token(token: str) -> int:
    match = _LEADING_INT.match(token)
    if match is None:
        raise ValueError("Invalid data format in board state")
    return int(match.group(1))


class Board:
    """An 8x8 checkers board with its pieces, history and turn."""

    def __init__(self) -> None:
        self.rows = BOARD_SIZE
        self.columns = BOARD_SIZE
        self.squares = [[(i + j) % 2 for j in range(self.columns)] for i in range(self.rows)]
        self.pieces = [[PieceType.NONE] * self.columns for _ in range(self.rows)]
        self.history: list[Move] = []
        self.state = GameState.ONGOING
        self.white_turn = True
        self.state_path: str | os.PathLike | None = None

    def init_pieces(self) -> None:
        """Place black pieces on the top three rows and white on the bottom three."""
        for i in range(3):
            for j, square in enumerate(self.squares[i]):
                if square == 0:
                    self.pieces[i][j] = PieceType.BLACK
        for i in range(5, 8):
            for j, square in enumerate(self.squares[i]):
                if square == 0:
                    self.pieces[i][j] = PieceType.WHITE

    def render(self) -> str:
        """Return the move form followed by the board as an HTML table."""
        current = self.to_string()
        parts = [
            interface_html(),
            f"<div id='board' class='table-container' data-board-state='{current}'>",
            "<table class='game-board'>\n",
            "<tr>",
        ]
        parts += [
            f"<td style='font-weight: bold; background-color: white;'>{letter}</td>"
            for letter in _COLUMN_LETTERS[: self.columns]
        ]
        parts.append("</tr>\n")
        for i, (square_row, piece_row) in enumerate(zip(self.squares, self.pieces)):
            parts.append("<tr>")
            for square, piece in zip(square_row, piece_row):
                dark = square == 0
                color = "DarkSlateGrey" if dark else "Cornsilk"
                parts.append(f"<td style='background-color: {color};'>")
                image = _IMAGE_FOR.get(piece)
                if dark and image is not None:
                    parts.append(
                        f"<img class='draggable' src='{image}' width='45' "
                        "height='45' draggable='true'>"
                    )
                parts.append("</td>")
            parts.append(
                f"<td style='font-weight: bold; background-color: white;'>{i + 1}</td>"
            )
            parts.append("</tr>\n")
        parts.append("</table></div>\n")
        parts.append(f"<input type='hidden' id='currentBoardState' value='{current}'>\n")
        return "".join(parts)

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def valid_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Return whether a one-step move or a jump is legal."""
        if not (self._in_bounds(from_row, from_col) and self._in_bounds(to_row, to_col)):
            return False
        piece = self.pieces[from_row][from_col]
        if piece == PieceType.NONE:
            return False
        if self.pieces[to_row][to_col] != PieceType.NONE:
            return False

        row_step = abs(to_row - from_row)
        col_step = abs(to_col - from_col)

        if row_step == 1 and col_step == 1:
            if piece == PieceType.BLACK and to_row <= from_row:
                return False
            if piece == PieceType.WHITE and to_row >= from_row:
                return False
            return True

        if row_step == 2 and col_step == 2:
            middle = self.pieces[(from_row + to_row) // 2][(from_col + to_col) // 2]
            if (piece == PieceType.BLACK and middle == PieceType.WHITE) or (
                piece == PieceType.WHITE and middle == PieceType.BLACK
            ):
                return True
            if (
                piece in (PieceType.BKING, PieceType.WKING)
                and middle != PieceType.NONE
                and middle != piece
            ):
                return True

        return False

    def make_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Play the move if it is legal; return whether it was played."""
        if self.valid_move(from_row, from_col, to_row, to_col):
            self.update_board(from_row, from_col, to_row, to_col)
            return True
        return False

    def _update_pieces(self, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        self.pieces[to_row][to_col] = self.pieces[from_row][from_col]
        self.pieces[from_row][from_col] = PieceType.NONE
        if self.kingable(to_row, to_col):
            self.make_king(to_row, to_col)

    def update_board(self, from_row: int, from_col: int, to_row: int, to_col: int) -> str:
        """Apply a move without checking it, returning the new turn indicator.

        On any failure the pieces are restored and the error is re-raised.
        """
        with _BOARD_LOCK:
            if not (
                self.is_valid_position(from_row, from_col)
                and self.is_valid_position(to_row, to_col)
            ):
                raise ValueError("Invalid position")

            saved = copy.deepcopy(self.pieces)
            is_capture = abs(to_row - from_row) == 2
            try:
                self._update_pieces(from_row, from_col, to_row, to_col)
                if is_capture:
                    self.remove_captured_piece(from_row, from_col, to_row, to_col)
                self.record_move(from_row, from_col, to_row, to_col, is_capture)
                self.update_game_state()
                indicator = self.toggle_turn()
                if self.state_path is not None:
                    self.save_state(self.state_path)
            except BaseException:
                self.pieces = saved
                raise
            return indicator

    def to_string(self) -> str:
        """Serialise the pieces row by row as comma-separated codes.

        Kings have no code and leave their field empty.
        """
        return ",".join(
            _STRING_CODE.get(piece, "") for piece_row in self.pieces for piece in piece_row
        )

    def load_string(self, board_state: str) -> None:
        """Replace the pieces with those described by a serialised board."""
        if not board_state:
            raise ValueError("Empty board state")
        tokens = board_state.split(",")
        if tokens[-1] == "":
            tokens.pop()
        if len(tokens) != self.rows * self.columns:
            raise ValueError("Board state data does not match board dimensions")

        values = []
        for token in tokens:
            value = _parse_token(token)
            if value < 0 or value > 2:
                raise ValueError("Invalid piece value in board state")
            values.append(PieceType(value))

        self.pieces = [
            values[r * self.columns : (r + 1) * self.columns] for r in range(self.rows)
        ]

    def save_state(self, path: str | os.PathLike) -> None:
        """Write the serialised board to a file, replacing it atomically."""
        target = Path(path)
        temp = target.with_name(target.name + ".tmp")
        try:
            with open(temp, "wb") as handle:
                handle.write((self.to_string() + "\n").encode("ascii"))
            os.replace(temp, target)
        except BaseException:
            try:
                temp.unlink()
            except OSError:
                pass
            raise

    def load_state(self, path: str | os.PathLike) -> bool:
        """Load the board from the first line of a file; return whether it worked."""
        try:
            data = Path(path).read_bytes()
        except OSError:
            return False
        if not data:
            return False
        line = data.split(b"\n", 1)[0].decode("latin-1")
        try:
            self.load_string(line)
        except ValueError:
            return False
        return True

    def kingable(self, row: int, col: int) -> bool:
        """Return whether the piece on a square has reached its promotion row."""
        piece = self.pieces[row][col]
        return (piece == PieceType.WHITE and row == 0) or (
            piece == PieceType.BLACK and row == 7
        )

    def make_king(self, row: int, col: int) -> None:
        """Promote the piece on a square if it stands on its promotion row."""
        piece = self.pieces[row][col]
        if piece == PieceType.WHITE and row == 0:
            self.pieces[row][col] = PieceType.WKING
        elif piece == PieceType.BLACK and row == 7:
            self.pieces[row][col] = PieceType.BKING

    def king_valid_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Return whether a diagonal move of any length onto an empty square is possible."""
        if not (self._in_bounds(from_row, from_col) and self._in_bounds(to_row, to_col)):
            return False
        if self.pieces[from_row][from_col] == PieceType.NONE:
            return False
        if self.pieces[to_row][to_col] != PieceType.NONE:
            return False
        row_diff = abs(to_row - from_row)
        col_diff = abs(to_col - from_col)
        return row_diff == col_diff and row_diff > 0

    def checkmate(self) -> bool:
        """Return whether one side has no ordinary (uncrowned) pieces left."""
        flat = [piece for piece_row in self.pieces for piece in piece_row]
        return PieceType.WHITE not in flat or PieceType.BLACK not in flat

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def can_capture(self, row: int, col: int) -> bool:
        """Return whether the piece on a square has a jump available."""
        if not self.is_valid_position(row, col):
            return False
        current = self.pieces[row][col]
        if current == PieceType.NONE:
            return False

        targets = {
            PieceType.BLACK: (PieceType.WHITE, PieceType.WKING),
            PieceType.WHITE: (PieceType.BLACK, PieceType.BKING),
            PieceType.BKING: (PieceType.WHITE, PieceType.WKING, PieceType.BLACK),
            PieceType.WKING: (PieceType.BLACK, PieceType.BKING, PieceType.WHITE),
        }[current]

        for d_row, d_col in ((2, 2), (2, -2), (-2, 2), (-2, -2)):
            new_row, new_col = row + d_row, col + d_col
            if not self.is_valid_position(new_row, new_col):
                continue
            mid_row, mid_col = row + d_row // 2, col + d_col // 2
            if not self.is_valid_position(mid_row, mid_col):
                continue
            if (
                self.pieces[new_row][new_col] == PieceType.NONE
                and self.pieces[mid_row][mid_col] in targets
            ):
                return True
        return False

    def remove_captured_piece(self, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        """Clear the square jumped over by a capture."""
        self.pieces[(from_row + to_row) // 2][(from_col + to_col) // 2] = PieceType.NONE

    def is_game_over(self) -> bool:
        return self.state != GameState.ONGOING

    def update_game_state(self) -> None:
        """Recompute whether the game is won, drawn or still going."""
        if self.checkmate():
            flat = [piece for piece_row in self.pieces for piece in piece_row]
            found_white = any(p in (PieceType.WHITE, PieceType.WKING) for p in flat)
            found_black = any(p in (PieceType.BLACK, PieceType.BKING) for p in flat)
            if not found_white:
                self.state = GameState.BLACK_WIN
            elif not found_black:
                self.state = GameState.WHITE_WIN
            else:
                self.state = GameState.DRAW
            return

        player = PieceType.WHITE if self.white_turn else PieceType.BLACK
        has_moves = any(
            self.valid_move(i, j, i + di, j + dj)
            for i, piece_row in enumerate(self.pieces)
            for j, piece in enumerate(piece_row)
            if piece == player
            for di in range(-2, 3)
            for dj in range(-2, 3)
        )
        self.state = GameState.ONGOING if has_moves else GameState.DRAW

    def record_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int, was_capture: bool
    ) -> None:
        self.history.append(Move(from_row, from_col, to_row, to_col, was_capture))

    def undo_last_move(self) -> bool:
        """Take back the last recorded move; return False if there is none."""
        if not self.history:
            return False
        last = self.history.pop()
        self.pieces[last.from_row][last.from_col] = self.pieces[last.to_row][last.to_col]
        self.pieces[last.to_row][last.to_col] = PieceType.NONE
        if last.was_capture:
            mover = self.pieces[last.from_row][last.from_col]
            mid_row = (last.from_row + last.to_row) // 2
            mid_col = (last.from_col + last.to_col) // 2
            self.pieces[mid_row][mid_col] = (
                PieceType.WHITE if mover == PieceType.BLACK else PieceType.BLACK
            )
        return True

    def toggle_turn(self) -> str:
        """Pass the turn to the other side and return the new turn indicator."""
        self.white_turn = not self.white_turn
        return self.turn_indicator()

    def turn_indicator(self) -> str:
        """Return the HTML showing whose turn it is."""
        css = "white-turn" if self.white_turn else "black-turn"
        name = "White" if self.white_turn else "Black"
        return f"<div id='turnIndicator' class='{css}'>Current Turn: {name}</div>\n"