"""Assignment scoring — weighted penalty for a complete candidate round.

Lower is better. Weights set the priority: repeat partners hurt most, then
repeat opponents, then playing the same court again.
"""

from __future__ import annotations

from collections.abc import Iterable

from courtrota.engine.history import FairnessHistory
from courtrota.models.player import Player, partnership_score
from courtrota.models.round import Match

PARTNERSHIP_WEIGHT = 10
OPPONENT_WEIGHT = 5
COURT_STICKINESS_WEIGHT = 3


def partnership_penalty(matches: Iterable[Match], players_by_name: dict[str, Player]) -> int:
    penalty = 0
    for match in matches:
        for a, b in match.partner_pairs():
            player_a = players_by_name.get(a)
            player_b = players_by_name.get(b)
            if player_a is None or player_b is None:
                continue
            penalty += partnership_score(player_a, player_b) * PARTNERSHIP_WEIGHT
    return penalty


def opponent_penalty(matches: Iterable[Match], history: FairnessHistory) -> int:
    return sum(
        history.opponent_count(a, b) * OPPONENT_WEIGHT
        for match in matches
        for a, b in match.opponent_pairs()
    )


def court_stickiness_penalty(matches: Iterable[Match], history: FairnessHistory) -> int:
    return sum(
        history.court_usage(name, match.court) * COURT_STICKINESS_WEIGHT
        for match in matches
        for name in match.players
    )


def score_assignment(
    matches: list[Match],
    players: Iterable[Player],
    history: FairnessHistory,
) -> float:
    """Score a full round of matches against the session's history.

    Args:
        matches: Candidate matches for every court this round.
        players: Roster records carrying partnership counts.
        history: Court and opponent history from previous rounds.

    Returns:
        Non-negative penalty; identical inputs always give the same score.
    """
    players_by_name = {p.name: p for p in players}
    return float(
        partnership_penalty(matches, players_by_name)
        + opponent_penalty(matches, history)
        + court_stickiness_penalty(matches, history)
    )
