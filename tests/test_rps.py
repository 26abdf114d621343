import io

import pytest

from webgames.rps import main, parse_choices, result_html


def test_parse_choices():
    assert parse_choices("p1=rock&p2=paper") == ("rock", "paper")


def test_parse_choices_reversed_order():
    assert parse_choices("p2=paper&p1=rock") == ("rock", "paper&p1=rock")


def test_parse_choices_missing():
    with pytest.raises(ValueError):
        parse_choices("p1=rock")


def test_tie():
    html = result_html("rock", "rock")
    assert "<p>It's a tie! Both players chose rock.</p>" in html


@pytest.mark.parametrize(
    "first, second",
    [("rock", "scissors"), ("scissors", "paper"), ("paper", "rock")],
)
def test_player_one_wins(first, second):
    html = result_html(first, second)
    assert f"<p>Player 1 wins! {first} beats {second}.</p>" in html


@pytest.mark.parametrize(
    "first, second",
    [("scissors", "rock"), ("paper", "scissors"), ("rock", "paper")],
)
def test_player_two_wins(first, second):
    html = result_html(first, second)
    assert f"<p>Player 2 wins! {second} beats {first}.</p>" in html


def test_unknown_choice_goes_to_player_two():
    html = result_html("lizard", "rock")
    assert "Player 2 wins! rock beats lizard." in html


def test_response_frame():
    html = result_html("rock", "paper")
    assert html.startswith("Content-type: text/html\n\n")
    assert html.endswith("</table></body></html>")


def test_main(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("p1=paper&p2=rock\n"))
    assert main() == 0
    assert capsys.readouterr().out == result_html("paper", "rock")