"""Fairness history — court usage and opponent counts derived from past rounds.

Rebuilt from the full round history on every call; sessions run to tens of
rounds with tens of players, so there is nothing worth caching. Partnership
counts are not derived here: they travel on each ``Player`` record.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from courtrota.models.player import Player
from courtrota.models.round import Round

logger = logging.getLogger(__name__)


@dataclass
class FairnessHistory:
    """Per-player court usage and opponent counts."""

    court_history: dict[str, dict[int, int]] = field(default_factory=dict)
    opponent_history: dict[str, dict[str, int]] = field(default_factory=dict)

    def court_usage(self, name: str, court: int) -> int:
        """Times ``name`` has played on ``court``."""
        return self.court_history.get(name, {}).get(court, 0)

    def court_usage_vector(self, name: str, num_courts: int) -> list[int]:
        """Usage of courts 1..num_courts for ``name``."""
        history = self.court_history.get(name, {})
        return [history.get(court, 0) for court in range(1, num_courts + 1)]

    def opponent_count(self, name: str, opponent: str) -> int:
        """Times ``name`` has faced ``opponent``."""
        return self.opponent_history.get(name, {}).get(opponent, 0)


def coerce_rounds(rounds: Iterable[Round | Mapping[str, Any]]) -> list[Round]:
    """Validate untyped round records into ``Round`` models.

    Raises:
        pydantic.ValidationError: If a record does not have the round shape.
    """
    return [r if isinstance(r, Round) else Round.model_validate(r) for r in rounds]


def build_fairness_history(
    roster: Iterable[Player],
    rounds: Iterable[Round | Mapping[str, Any]],
) -> FairnessHistory:
    """Aggregate court and opponent history for a roster.

    Every roster member gets an entry (possibly empty). Players who appear
    in the history but have since left the roster are still counted, so
    their opponents' totals stay correct.
    """
    court_history: dict[str, dict[int, int]] = {p.name: defaultdict(int) for p in roster}
    opponent_history: dict[str, dict[str, int]] = {name: defaultdict(int) for name in court_history}

    validated = coerce_rounds(rounds)
    for past_round in validated:
        for match in past_round.matches:
            for name in match.players:
                court_history.setdefault(name, defaultdict(int))[match.court] += 1
            for a, b in match.opponent_pairs():
                opponent_history.setdefault(a, defaultdict(int))[b] += 1
                opponent_history.setdefault(b, defaultdict(int))[a] += 1

    logger.debug(f"Fairness history built from {len(validated)} rounds for {len(court_history)} players")
    return FairnessHistory(
        court_history={name: dict(counts) for name, counts in court_history.items()},
        opponent_history={name: dict(counts) for name, counts in opponent_history.items()},
    )
