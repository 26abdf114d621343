# webgames

Two small browser games delivered as CGI programs: checkers and a round of
rock-paper-scissors. Each program reads its request the CGI way (environment
variables and standard input) and writes an HTTP header block followed by
HTML to standard output.

## Installation

```
pip install .
```

## Commands

### `webgames-checkers`

Writes a page with a fresh checkers board: a move form, an 8×8 table with the
pieces in their starting places, and a hidden field `currentBoardState` that
holds the board state. The last lines of the output say whether the program
ran under a web server, which it tells from `REQUEST_METHOD`.

```
webgames-checkers > board.html
```

### `webgames-checkers-move`

Handles a move posted from the form. It reads `CONTENT_LENGTH` bytes (at most
4096) from standard input as a URL-encoded form with the fields `fromRow`,
`fromCol`, `toRow`, `toCol` and `boardAsString`. Rows are numbered 1–8 and
columns 0–7 (A–H). From the board state only ASCII letters, digits, `,`, `-`
and `_` are kept.

If the posted board state is empty, a new board is set up and shown.
Otherwise the move is checked and played, including captures (a two-square
jump removes the piece jumped over) and promotion to king, and the output is
a turn indicator followed by the updated board. A missing `CONTENT_LENGTH`,
an oversized or short body, coordinates off the board, a malformed board
state or an illegal move produce an error message in place of the board.

After a move the game state is recomputed. If one side has no uncrowned
pieces left, the page announces "White wins!", "Black wins!" or a draw; a draw
is also announced when the side to move has no legal move.

```
printf 'fromRow=6&fromCol=1&toRow=5&toCol=0&boardAsString=...' \
  | CONTENT_LENGTH=... webgames-checkers-move
```

Diagnostics are sent through the standard `logging` module under the
`webgames.update` logger.

### `webgames-rps`

Reads one line such as `p1=rock&p2=scissors` from standard input and writes a
page naming the winner, or a tie. A line without both `p1=` and `p2=` raises
`ValueError`.

```
echo 'p1=rock&p2=scissors' | webgames-rps
```

## Library use

The checkers rules live in `webgames.board`:

```python
from webgames.board import Board, GameState

board = Board()
board.init_pieces()
if board.valid_move(5, 1, 4, 0):
    print(board.update_board(5, 1, 4, 0))   # the new turn indicator
print(board.to_string())
print(board.state, board.is_game_over())
```

Rows and columns are 0-based here; black starts on rows 0–2 and white on rows
5–7, on squares where `(row + col) % 2 == 0`. `Board.make_move` plays a move
only if `valid_move` accepts it and returns whether it did.
`Board.undo_last_move` takes back the last recorded move. `Board.render`
returns the form and board as HTML, and `webgames.board.interface_html`
returns the form alone.

`Board.to_string` writes the pieces as 64 comma-separated codes: `0` an empty
square, `1` a black piece, `2` a white piece. Kings have no code and leave
their field empty, so `Board.load_string` does not accept a board that holds
a king. `Board.save_state(path)` writes that form to a file atomically, and
`Board.load_state(path)` reads the first line back and returns whether it
worked. If `Board.state_path` is set, `update_board` saves to it after every
move.

For rock-paper-scissors, `webgames.rps.parse_choices` splits the form line and
`webgames.rps.result_html` builds the result page.

## What it does not do

- It is not a web server: the commands must be run by a server that speaks
  CGI.
- The pages refer to `styles.css`, `checkers.js`, `BlackCircle.png`,
  `WhiteCircle.png` and `KingCircle.png`; these files are not part of the
  package and must be served alongside.
- Nothing is kept between requests. The board arrives with each request,
  whose turn it is is not carried over or enforced, and
  `webgames-checkers-move` saves nothing to disk.

## Running the tests

```
pip install .[test]
pytest
```