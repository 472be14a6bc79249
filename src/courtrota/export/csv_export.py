"""CSV export of a session's rounds.

One row per match. The resting list goes on each round's first row only,
so a spreadsheet shows it once per round.
"""

from __future__ import annotations

import csv
import io
import logging
import os
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from courtrota.models.round import Round

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Round",
    "Court",
    "Team A Player 1",
    "Team A Player 2",
    "Team B Player 1",
    "Team B Player 2",
    "Resting Players",
]
RESTING_SEPARATOR = "; "
EXTRA_MEMBER_SEPARATOR = " & "


def _first(team: list[str]) -> str:
    return team[0] if team else ""


def _second(team: list[str]) -> str:
    # The third player of a 3v2 court shares the second column
    return EXTRA_MEMBER_SEPARATOR.join(team[1:])


def round_rows(game_round: Round) -> list[list[str | int]]:
    """CSV data rows for one round."""
    rows: list[list[str | int]] = []
    for index, match in enumerate(game_round.matches):
        resting = RESTING_SEPARATOR.join(game_round.resting) if index == 0 else ""
        rows.append([
            game_round.round,
            match.court,
            _first(match.team_a),
            _second(match.team_a),
            _first(match.team_b),
            _second(match.team_b),
            resting,
        ])
    return rows


def rounds_to_csv(rounds: Sequence[Round]) -> str:
    """Render every round as CSV text, header first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for game_round in rounds:
        writer.writerows(round_rows(game_round))
    return buffer.getvalue()


def default_export_filename(today: date | None = None) -> str:
    """File name used for exports, e.g. ``badminton-games-2025-03-14.csv``."""
    today = today or date.today()
    return f"badminton-games-{today.isoformat()}.csv"


def _names_directory(path: str | Path) -> bool:
    raw = str(path)
    if raw.endswith(os.sep) or (os.altsep and raw.endswith(os.altsep)):
        return True
    output = Path(path)
    return output.is_dir() or not output.suffix


def write_rounds_csv(rounds: Sequence[Round], path: str | Path) -> Path:
    """Write the CSV export to ``path``.

    A directory, existing or not, gets the default file name. So does any
    path without a file extension or with a trailing separator.
    """
    output = Path(path)
    if _names_directory(path):
        output = output / default_export_filename()
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", newline="", encoding="utf-8") as handle:
        handle.write(rounds_to_csv(rounds))

    logger.info(f"Exported {len(rounds)} rounds to {output}")
    return output
