from webgames.board import Board
from webgames.page import RESPONSE_HEADERS, main, render_page


def _initial_state():
    board = Board()
    board.init_pieces()
    return board.to_string()


def test_page_starts_with_headers():
    page = render_page({})
    assert page.startswith("Content-Type: text/html\r\n")
    assert page.startswith(RESPONSE_HEADERS)


def test_page_contains_initial_board():
    page = render_page({})
    state = _initial_state()
    assert f"data-board-state='{state}'" in page
    assert f"<input type='hidden' id='currentBoardState' value='{state}'>" in page


def test_page_structure_order():
    page = render_page({})
    assert page.index("<!DOCTYPE html>") < page.index("<body>")
    assert page.index("<body>") < page.index("<table class='game-board'>")
    assert page.index("</table></div>") < page.index("</html>")


def test_command_line_context():
    page = render_page({})
    assert page.endswith("Executed from the command line or another context.\n")


def test_browser_context():
    page = render_page({"REQUEST_METHOD": "GET"})
    assert page.endswith("Executed via a web browser.\nRequest Method: GET\n")


def test_main_writes_page(capsys, monkeypatch):
    monkeypatch.delenv("REQUEST_METHOD", raising=False)
    assert main() == 0
    out = capsys.readouterr().out
    assert out == render_page({})