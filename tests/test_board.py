import pytest

from webgames.board import Board, GameState, Move, PieceType, interface_html


def board_with(placements):
    """Build a board from {(row, col): code} using the string format."""
    cells = ["0"] * 64
    for (row, col), code in placements.items():
        cells[row * 8 + col] = str(code)
    board = Board()
    board.load_string(",".join(cells))
    return board


def test_new_board_is_empty():
    board = Board()
    assert all(p == PieceType.NONE for row in board.pieces for p in row)
    assert board.to_string().split(",") == ["0"] * 64
    assert board.state == GameState.ONGOING
    assert board.white_turn is True


def test_init_pieces_layout():
    board = Board()
    board.init_pieces()
    assert board.pieces[0][0] == PieceType.BLACK
    assert board.pieces[0][1] == PieceType.NONE
    assert board.pieces[7][7] == PieceType.WHITE
    flat = [p for row in board.pieces for p in row]
    assert flat.count(PieceType.BLACK) == flat.count(PieceType.WHITE)
    assert all(p == PieceType.NONE for row in board.pieces[3:5] for p in row)


def test_string_round_trip():
    board = Board()
    board.init_pieces()
    text = board.to_string()
    other = Board()
    other.load_string(text)
    assert other.pieces == board.pieces
    assert other.to_string() == text


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "Empty board state"),
        ("0,1,2", "does not match"),
        (",".join(["3"] * 64), "Invalid piece value"),
        (",".join(["x"] * 64), "Invalid data format"),
    ],
)
def test_load_string_errors(text, message):
    board = Board()
    board.init_pieces()
    before = board.to_string()
    with pytest.raises(ValueError, match=message):
        board.load_string(text)
    assert board.to_string() == before


def test_valid_simple_moves():
    board = Board()
    board.init_pieces()
    assert board.valid_move(2, 0, 3, 1) is True
    assert board.valid_move(5, 1, 4, 0) is True
    assert board.valid_move(5, 1, 4, 2) is True
    assert board.valid_move(0, 0, 1, 1) is False  # destination occupied
    assert board.valid_move(3, 1, 4, 2) is False  # no piece
    assert board.valid_move(2, 0, -1, 1) is False


def test_regular_pieces_cannot_move_backwards():
    board = board_with({(3, 3): 1, (4, 4): 2})
    assert board.valid_move(3, 3, 2, 2) is False
    assert board.valid_move(4, 4, 5, 5) is False
    assert board.valid_move(3, 3, 4, 2) is True


def test_make_move_updates_board_and_turn():
    board = Board()
    board.init_pieces()
    assert board.make_move(2, 0, 3, 1) is True
    assert board.pieces[2][0] == PieceType.NONE
    assert board.pieces[3][1] == PieceType.BLACK
    assert board.history == [Move(2, 0, 3, 1, False)]
    assert board.white_turn is False


def test_make_move_rejects_illegal():
    board = Board()
    board.init_pieces()
    before = board.to_string()
    assert board.make_move(2, 0, 4, 2) is False
    assert board.to_string() == before
    assert board.history == []


def test_capture_removes_piece_and_wins():
    board = board_with({(2, 2): 1, (3, 3): 2})
    assert board.valid_move(2, 2, 4, 4) is True
    board.update_board(2, 2, 4, 4)
    assert board.pieces[3][3] == PieceType.NONE
    assert board.pieces[4][4] == PieceType.BLACK
    assert board.history[-1].was_capture is True
    assert board.state == GameState.BLACK_WIN
    assert board.is_game_over() is True


def test_undo_capture_restores_pieces():
    board = board_with({(2, 2): 1, (3, 3): 2, (6, 6): 2})
    board.update_board(2, 2, 4, 4)
    assert board.undo_last_move() is True
    assert board.pieces[2][2] == PieceType.BLACK
    assert board.pieces[3][3] == PieceType.WHITE
    assert board.pieces[4][4] == PieceType.NONE
    assert board.undo_last_move() is False


def test_promotion_to_king():
    board = board_with({(6, 0): 1, (1, 1): 2})
    board.update_board(6, 0, 7, 1)
    assert board.pieces[7][1] == PieceType.BKING
    board.update_board(1, 1, 0, 0)
    assert board.pieces[0][0] == PieceType.WKING


def test_kingable_and_make_king():
    board = board_with({(7, 1): 1, (0, 2): 2, (3, 3): 1})
    assert board.kingable(7, 1) is True
    assert board.kingable(0, 2) is True
    assert board.kingable(3, 3) is False
    board.make_king(3, 3)
    assert board.pieces[3][3] == PieceType.BLACK
    board.make_king(7, 1)
    assert board.pieces[7][1] == PieceType.BKING


def test_kings_serialise_as_empty_fields():
    board = board_with({(7, 1): 1})
    board.make_king(7, 1)
    tokens = board.to_string().split(",")
    assert tokens[7 * 8 + 1] == ""
    other = Board()
    with pytest.raises(ValueError):
        other.load_string(board.to_string())


def test_king_moves_any_direction():
    board = board_with({(4, 4): 1})
    board.pieces[4][4] = PieceType.BKING
    assert board.valid_move(4, 4, 3, 3) is True
    assert board.valid_move(4, 4, 5, 5) is True
    assert board.king_valid_move(4, 4, 1, 1) is True
    assert board.king_valid_move(4, 4, 1, 2) is False
    assert board.king_valid_move(4, 4, 4, 4) is False


def test_can_capture():
    board = board_with({(2, 2): 1, (3, 3): 2})
    assert board.can_capture(2, 2) is True
    assert board.can_capture(3, 3) is True
    assert board.can_capture(0, 0) is False
    assert board.can_capture(-1, 0) is False
    blocked = board_with({(2, 2): 1, (3, 3): 2, (4, 4): 2})
    assert blocked.can_capture(2, 2) is False


def test_is_valid_position():
    board = Board()
    assert board.is_valid_position(0, 0) is True
    assert board.is_valid_position(7, 7) is True
    assert board.is_valid_position(8, 0) is False
    assert board.is_valid_position(0, -1) is False


def test_update_board_invalid_position():
    board = Board()
    with pytest.raises(ValueError, match="Invalid position"):
        board.update_board(0, 0, 8, 8)


def test_checkmate_detection():
    assert board_with({(2, 2): 1}).checkmate() is True
    assert board_with({(2, 2): 1, (5, 5): 2}).checkmate() is False


def test_stalemate_is_draw():
    board = board_with({(0, 1): 2, (7, 0): 1})
    board.update_game_state()
    assert board.state == GameState.DRAW


def test_ongoing_when_moves_exist():
    board = Board()
    board.init_pieces()
    board.update_game_state()
    assert board.state == GameState.ONGOING
    assert board.is_game_over() is False


def test_turn_indicator():
    board = Board()
    assert "Current Turn: White" in board.turn_indicator()
    html = board.toggle_turn()
    assert "Current Turn: Black" in html
    assert "black-turn" in html


def test_save_and_load_state(tmp_path):
    board = Board()
    board.init_pieces()
    path = tmp_path / "game_state.txt"
    board.save_state(path)
    assert path.read_text() == board.to_string() + "\n"
    assert not (tmp_path / "game_state.txt.tmp").exists()
    other = Board()
    assert other.load_state(path) is True
    assert other.pieces == board.pieces


def test_load_state_failures(tmp_path):
    board = Board()
    assert board.load_state(tmp_path / "missing.txt") is False
    bad = tmp_path / "bad.txt"
    bad.write_text("1,2\n")
    assert board.load_state(bad) is False


def test_failed_save_rolls_back_pieces(tmp_path):
    board = board_with({(2, 0): 1, (5, 1): 2})
    board.state_path = tmp_path / "missing_dir" / "state.txt"
    before = board.to_string()
    with pytest.raises(OSError):
        board.update_board(2, 0, 3, 1)
    assert board.to_string() == before


def test_render_contains_state_and_images():
    board = Board()
    board.init_pieces()
    html = board.render()
    assert f"data-board-state='{board.to_string()}'" in html
    assert "BlackCircle.png" in html
    assert "WhiteCircle.png" in html
    assert "id='currentBoardState'" in html
    assert html.startswith(interface_html())


def test_interface_html_form():
    html = interface_html()
    assert 'id="moveForm"' in html
    assert '<option value="7">H</option>' in html
    assert '<option value="8">8</option>' in html
    assert 'name="boardAsString"' in html