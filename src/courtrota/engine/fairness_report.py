"""Fairness report — how evenly a session has shared out play.

Summarises playing time, rest, partner and opponent variety, and court
spread per player, with min/max/mean/std/range for the headline measures.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from courtrota.engine.history import coerce_rounds
from courtrota.models.player import Player
from courtrota.models.round import Round


@dataclass
class SpreadStats:
    """Distribution summary of one per-player measure."""
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    std: float = 0.0

    @property
    def range(self) -> float:
        return self.max - self.min

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "SpreadStats":
        arr = np.asarray(list(values), dtype=np.float64)
        if arr.size == 0:
            return cls()
        return cls(
            min=float(arr.min()),
            max=float(arr.max()),
            mean=float(arr.mean()),
            std=float(arr.std()),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "min": self.min,
            "max": self.max,
            "mean": round(self.mean, 3),
            "std": round(self.std, 3),
            "range": self.range,
        }


@dataclass
class FairnessReport:
    """Per-player fairness measures for a session."""
    rounds_played: int
    games_played: dict[str, int] = field(default_factory=dict)
    rests: dict[str, int] = field(default_factory=dict)
    distinct_partners: dict[str, int] = field(default_factory=dict)
    distinct_opponents: dict[str, int] = field(default_factory=dict)
    courts_visited: dict[str, int] = field(default_factory=dict)

    @property
    def games_stats(self) -> SpreadStats:
        return SpreadStats.from_values(self.games_played.values())

    @property
    def rest_stats(self) -> SpreadStats:
        return SpreadStats.from_values(self.rests.values())

    @property
    def partner_stats(self) -> SpreadStats:
        return SpreadStats.from_values(self.distinct_partners.values())

    @property
    def opponent_stats(self) -> SpreadStats:
        return SpreadStats.from_values(self.distinct_opponents.values())

    @property
    def total_appearances(self) -> int:
        return sum(self.games_played.values())

    def to_dict(self) -> dict[str, Any]:
        """Serializable dict for JSON export / CLI output."""
        return {
            "rounds_played": self.rounds_played,
            "total_appearances": self.total_appearances,
            "games_played": dict(self.games_played),
            "games_played_stats": self.games_stats.to_dict(),
            "rests": dict(self.rests),
            "rest_stats": self.rest_stats.to_dict(),
            "distinct_partners": dict(self.distinct_partners),
            "partner_stats": self.partner_stats.to_dict(),
            "distinct_opponents": dict(self.distinct_opponents),
            "opponent_stats": self.opponent_stats.to_dict(),
            "courts_visited": dict(self.courts_visited),
        }


def build_fairness_report(players: Sequence[Player], rounds: Sequence[Round]) -> FairnessReport:
    """Build a fairness report for the current roster from the round history.

    Games played come from the player records; variety measures are counted
    from the rounds themselves.
    """
    validated = coerce_rounds(rounds)
    names = [p.name for p in players]

    partners: dict[str, set[str]] = defaultdict(set)
    opponents: dict[str, set[str]] = defaultdict(set)
    courts: dict[str, set[int]] = defaultdict(set)
    rests: dict[str, int] = defaultdict(int)

    for past_round in validated:
        for match in past_round.matches:
            for a, b in match.partner_pairs():
                partners[a].add(b)
                partners[b].add(a)
            for a, b in match.opponent_pairs():
                opponents[a].add(b)
                opponents[b].add(a)
            for name in match.players:
                courts[name].add(match.court)
        for name in past_round.resting:
            rests[name] += 1

    return FairnessReport(
        rounds_played=len(validated),
        games_played={p.name: p.games_played for p in players},
        rests={name: rests[name] for name in names},
        distinct_partners={name: len(partners[name]) for name in names},
        distinct_opponents={name: len(opponents[name]) for name in names},
        courts_visited={name: len(courts[name]) for name in names},
    )
