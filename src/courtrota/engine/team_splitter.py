"""Team splitting — divide one court's players into two sides.

Splits are chosen to minimise repeated partnerships:

    2 players → 1v1 (no choice)
    3 players → 2v1, the pair that has partnered least
    4 players → 2v2, the best of the three possible pairings
    5 players → 3v2, the triple with the fewest internal partnerships
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from courtrota.models.player import Player, partnership_score


@dataclass
class TeamSplit:
    """Player names on each side of a court."""
    team_a: list[str]
    team_b: list[str]


def group_partnership_score(players: Sequence[Player]) -> int:
    """Sum of partnership scores over every pair in ``players``."""
    return sum(partnership_score(a, b) for a, b in combinations(players, 2))


def find_best_pair(players: Sequence[Player]) -> list[Player]:
    """The pair with the lowest partnership score (first found on ties)."""
    best_score = float("inf")
    best_pair: list[Player] = []
    for a, b in combinations(players, 2):
        score = partnership_score(a, b)
        if score < best_score:
            best_score = score
            best_pair = [a, b]
    return best_pair


def find_best_triple(players: Sequence[Player]) -> list[Player]:
    """The triple with the lowest summed internal partnership score."""
    best_score = float("inf")
    best_triple: list[Player] = []
    for triple in combinations(players, 3):
        score = group_partnership_score(triple)
        if score < best_score:
            best_score = score
            best_triple = list(triple)
    return best_triple


def find_best_doubles(players: Sequence[Player]) -> TeamSplit:
    """Best of the three ways to pair four players into two teams."""
    p1, p2, p3, p4 = players
    options = [
        ((p1, p2), (p3, p4)),
        ((p1, p3), (p2, p4)),
        ((p1, p4), (p2, p3)),
    ]
    best_a, best_b = min(
        options,
        key=lambda option: partnership_score(*option[0]) + partnership_score(*option[1]),
    )
    return TeamSplit(
        team_a=[p.name for p in best_a],
        team_b=[p.name for p in best_b],
    )


def _split_around(players: Sequence[Player], team: list[Player]) -> TeamSplit:
    chosen = {id(p) for p in team}
    return TeamSplit(
        team_a=[p.name for p in team],
        team_b=[p.name for p in players if id(p) not in chosen],
    )


def split_court(players: Sequence[Player]) -> TeamSplit:
    """Split a court's players into two teams.

    Raises:
        ValueError: If the court does not hold 2 to 5 players.
    """
    size = len(players)
    if size == 2:
        return TeamSplit(team_a=[players[0].name], team_b=[players[1].name])
    if size == 3:
        return _split_around(players, find_best_pair(players))
    if size == 4:
        return find_best_doubles(players)
    if size == 5:
        return _split_around(players, find_best_triple(players))
    raise ValueError(f"Cannot split {size} players into teams (need 2-5)")
