"""CGI rock-paper-scissors referee."""

from __future__ import annotations

import sys
from collections.abc import Sequence

_BEATS = {
    "rock": "scissors",
    "scissors": "paper",
    "paper": "rock",
}


def parse_choices(line: str) -> tuple[str, str]:
    """Extract the p1 and p2 choices from a query string."""
    pos1 = line.find("p1=")
    pos2 = line.find("p2=")
    if pos1 < 0 or pos2 < 0:
        raise ValueError("Both p1 and p2 must be given")
    start1 = pos1 + 3
    end1 = line.find("&", pos1)
    player1 = line[start1:] if end1 < 0 else line[start1:end1]
    player2 = line[pos2 + 3 :]
    return player1, player2


def result_html(player1_choice: str, player2_choice: str) -> str:
    """Return the CGI response announcing the winner."""
    if player1_choice == player2_choice:
        verdict = f"It's a tie! Both players chose {player1_choice}."
    elif _BEATS.get(player1_choice) == player2_choice:
        verdict = f"Player 1 wins! {player1_choice} beats {player2_choice}."
    else:
        verdict = f"Player 2 wins! {player2_choice} beats {player1_choice}."
    return (
        "Content-type: text/html\n\n"
        "<html><head><title>Game Result</title></head><body>"
        '<table align="center" bgcolor="antiquewhite">'
        "<tr><td><h1>Game Result</h1></td></tr>"
        f"<tr><td><p>{verdict}</p></td></tr>"
        "</table>"
        "</body></html>"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Read one line of form data from standard input and print the result."""
    line = sys.stdin.readline()
    if line.endswith("\n"):
        line = line[:-1]
    player1, player2 = parse_choices(line)
    sys.stdout.write(result_html(player1, player2))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())