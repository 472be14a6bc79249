"""Court assignment search — which players share a court this round.

Builds a bounded set of candidate assignments, turns each into matches with
the team splitter, scores them, and keeps the cheapest. Two candidate
families are generated:

  - Court rotation: players who have been stuck on one court are placed
    first, each court taking the players who have used it least. Later
    candidates get a few random swaps that are kept only if they reduce
    court repetition.
  - Shuffled: a random order, nudged so players drift away from courts
    they have used heavily, then filled court by court.

The search is randomised on purpose; pass a seeded ``random.Random`` to
make it reproducible.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from courtrota.engine.history import FairnessHistory
from courtrota.engine.scoring import score_assignment
from courtrota.engine.team_splitter import split_court
from courtrota.models.player import Player
from courtrota.models.round import Match

logger = logging.getLogger(__name__)

ROTATION_CANDIDATES = 15
SHUFFLED_CANDIDATES = 5
MAX_SWAPS_PER_CANDIDATE = 2
SHUFFLE_PASSES = 3
SHUFFLE_SEARCH_RANGE = 6

Assignment = list[list[Player]]


def court_imbalance(usage: Sequence[int]) -> float:
    """How lopsided a player's court usage is (0 when perfectly even)."""
    if not usage:
        return 0.0
    high = max(usage)
    low = min(usage)
    mean = sum(usage) / len(usage)
    return (high - low) + abs(high - mean) + abs(low - mean)


def assign_sequentially(players: Sequence[Player], court_sizes: Sequence[int]) -> Assignment:
    """Fill courts in order from ``players``."""
    assignment: Assignment = []
    index = 0
    for size in court_sizes:
        assignment.append(list(players[index:index + size]))
        index += size
    return assignment


def matches_from_assignment(assignment: Assignment) -> list[Match]:
    """Split each court's players into teams; court *i* becomes court number *i+1*."""
    matches = []
    for court_index, court_players in enumerate(assignment):
        if len(court_players) < 2:
            continue
        split = split_court(court_players)
        matches.append(Match(court=court_index + 1, team_a=split.team_a, team_b=split.team_b))
    return matches


class CourtAssignmentSearch:
    """Search for the lowest-penalty court assignment for one round."""

    def __init__(
        self,
        history: FairnessHistory,
        rng: random.Random | None = None,
        rotation_candidates: int = ROTATION_CANDIDATES,
        shuffled_candidates: int = SHUFFLED_CANDIDATES,
    ):
        self.history = history
        self.rng = rng or random.Random()
        self.rotation_candidates = rotation_candidates
        self.shuffled_candidates = shuffled_candidates

    def search(self, players: Sequence[Player], court_sizes: Sequence[int]) -> list[Match]:
        """Return the best-scoring matches for ``players`` on ``court_sizes``.

        Ties keep the earliest candidate.
        """
        candidates = self.generate_candidates(players, court_sizes)

        best_score = float("inf")
        best_matches: list[Match] = []
        for index, assignment in enumerate(candidates):
            matches = matches_from_assignment(assignment)
            score = score_assignment(matches, players, self.history)
            logger.debug(f"Candidate {index}: score {score}")
            if score < best_score:
                best_score = score
                best_matches = matches

        logger.debug(f"Best of {len(candidates)} candidates scored {best_score}")
        return best_matches

    def generate_candidates(
        self, players: Sequence[Player], court_sizes: Sequence[int],
    ) -> list[Assignment]:
        if len(players) != sum(court_sizes):
            logger.warning(
                f"{len(players)} players for court sizes {list(court_sizes)}, "
                "assigning in order"
            )
            return [assign_sequentially(players, court_sizes)]

        candidates = [
            self._rotation_candidate(players, court_sizes, attempt)
            for attempt in range(self.rotation_candidates)
        ]
        for _ in range(self.shuffled_candidates):
            candidates.append(self._shuffled_candidate(players, court_sizes))
        return candidates

    # ── Court rotation family ────────────────────────────────────────────

    def _rotation_candidate(
        self, players: Sequence[Player], court_sizes: Sequence[int], attempt: int,
    ) -> Assignment:
        num_courts = len(court_sizes)
        imbalance = {
            p.name: court_imbalance(self.history.court_usage_vector(p.name, num_courts))
            for p in players
        }
        available = sorted(players, key=lambda p: imbalance[p.name], reverse=True)

        assignment: Assignment = []
        for court_index, size in enumerate(court_sizes):
            court = court_index + 1
            ranked = sorted(
                available,
                key=lambda p: (self.history.court_usage(p.name, court), -imbalance[p.name]),
            )
            chosen = ranked[:size]
            chosen_names = {p.name for p in chosen}
            assignment.append(chosen)
            available = [p for p in available if p.name not in chosen_names]

        for _ in range(min(MAX_SWAPS_PER_CANDIDATE, attempt // 3)):
            self._try_court_swap(assignment)

        return assignment

    def _try_court_swap(self, assignment: Assignment) -> bool:
        """Swap two random players on different courts if that eases court repetition."""
        num_courts = len(assignment)
        c1 = self.rng.randrange(num_courts)
        c2 = self.rng.randrange(num_courts)
        if c1 == c2 or not assignment[c1] or not assignment[c2]:
            return False

        i = self.rng.randrange(len(assignment[c1]))
        j = self.rng.randrange(len(assignment[c2]))
        p1 = assignment[c1][i]
        p2 = assignment[c2][j]

        current = self._squared_usage(p1, c1 + 1) + self._squared_usage(p2, c2 + 1)
        swapped = self._squared_usage(p1, c2 + 1) + self._squared_usage(p2, c1 + 1)
        if swapped >= current:
            return False

        assignment[c1][i] = p2
        assignment[c2][j] = p1
        return True

    # ── Shuffled family ──────────────────────────────────────────────────

    def _shuffled_candidate(
        self, players: Sequence[Player], court_sizes: Sequence[int],
    ) -> Assignment:
        order = list(players)
        self.rng.shuffle(order)

        court_at = [court for court, size in enumerate(court_sizes, start=1) for _ in range(size)]

        for _ in range(SHUFFLE_PASSES):
            for i in range(len(order) - 1, 0, -1):
                best_j = i
                best_delta = 0
                for j in range(max(0, i - SHUFFLE_SEARCH_RANGE), i):
                    current = (
                        self._squared_usage(order[i], court_at[i])
                        + self._squared_usage(order[j], court_at[j])
                    )
                    swapped = (
                        self._squared_usage(order[i], court_at[j])
                        + self._squared_usage(order[j], court_at[i])
                    )
                    delta = swapped - current
                    if delta < best_delta:
                        best_delta = delta
                        best_j = j
                if best_j != i:
                    order[i], order[best_j] = order[best_j], order[i]

        return assign_sequentially(order, court_sizes)

    def _squared_usage(self, player: Player, court: int) -> int:
        return self.history.court_usage(player.name, court) ** 2


def find_best_matches(
    players: Sequence[Player],
    court_sizes: Sequence[int],
    history: FairnessHistory,
    rng: random.Random | None = None,
) -> list[Match]:
    """Convenience wrapper: one search with default candidate counts."""
    return CourtAssignmentSearch(history, rng=rng).search(players, court_sizes)
