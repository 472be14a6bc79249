"""Round generator — pick who plays, place them on courts, update stats.

Pure transformer: ``(roster, rounds, config) -> RoundOutcome``. Nothing
passed in is mutated; callers swap in the returned players and rounds.
Returns ``None`` when a round cannot be generated (fewer than three
players, or not enough players to open a court).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby

from courtrota.engine.capacity import plan_distribution, playable_count
from courtrota.engine.court_search import CourtAssignmentSearch
from courtrota.engine.history import build_fairness_history, coerce_rounds
from courtrota.models.player import Player
from courtrota.models.round import Match, Round
from courtrota.models.session import SessionConfig

logger = logging.getLogger(__name__)

MIN_ROSTER_SIZE = 3


@dataclass
class RoundOutcome:
    """A newly generated round plus the session state after it."""
    round: Round
    players: list[Player]
    rounds: list[Round]

    @property
    def round_number(self) -> int:
        return self.round.round


def _priority(player: Player) -> tuple[int, int]:
    return (player.games_played, player.last_played_round)


def priority_order(roster: Sequence[Player], rng: random.Random) -> list[Player]:
    """Roster ordered by fewest games, then longest rest.

    Players with identical keys are shuffled among themselves so equal
    claimants do not keep landing in the same groups.
    """
    ordered: list[Player] = []
    for _, group in groupby(sorted(roster, key=_priority), key=_priority):
        tied = list(group)
        rng.shuffle(tied)
        ordered.extend(tied)
    return ordered


def apply_round(roster: Sequence[Player], new_round: Round) -> list[Player]:
    """Copies of ``roster`` with games, last round and partnerships updated.

    Only players who appear in a match are touched; resting players are
    returned unchanged.
    """
    updated = [p.model_copy(deep=True) for p in roster]
    by_name = {p.name: p for p in updated}

    for name in new_round.playing_names:
        player = by_name.get(name)
        if player is None:
            continue
        player.games_played += 1
        player.last_played_round = new_round.round

    for match in new_round.matches:
        for a, b in match.partner_pairs():
            if a in by_name and b in by_name:
                by_name[a].record_partnership(b)
                by_name[b].record_partnership(a)

    return updated


def generate_next_round(
    roster: Sequence[Player],
    rounds: Sequence[Round],
    config: SessionConfig,
    rng: random.Random | None = None,
) -> RoundOutcome | None:
    """Generate the next round for a session.

    Args:
        roster: Current players with their statistics.
        rounds: Every finalized round so far, oldest first.
        config: Racket and court counts.
        rng: Random source for tie-breaking and the assignment search.

    Returns:
        The new round with updated players and history, or None if no
        round can be generated.
    """
    rng = rng or random.Random()
    history_rounds = coerce_rounds(rounds)

    if len(roster) < MIN_ROSTER_SIZE:
        logger.warning(
            f"Cannot generate a round: {len(roster)} players, need at least {MIN_ROSTER_SIZE}"
        )
        return None

    ordered = priority_order(roster, rng)
    courts = config.number_of_courts
    playable = playable_count(len(roster), config.number_of_rackets, courts)
    court_sizes = plan_distribution(playable, courts)
    if not court_sizes:
        logger.warning(f"Cannot generate a round: no usable court for {playable} players")
        return None

    playing_count = sum(court_sizes)
    playing = ordered[:playing_count]
    resting = ordered[playing_count:]

    history = build_fairness_history(roster, history_rounds)
    search = CourtAssignmentSearch(history, rng=rng)
    matches: list[Match] = search.search(playing, court_sizes)

    round_number = len(history_rounds) + 1
    new_round = Round(
        round=round_number,
        matches=matches,
        resting=[p.name for p in resting],
    )

    logger.info(
        f"Round {round_number}: {len(roster)} players, {playing_count} playing on "
        f"{len(court_sizes)} courts ({', '.join(str(s) for s in court_sizes)}), "
        f"{len(resting)} resting"
    )

    return RoundOutcome(
        round=new_round,
        players=apply_round(roster, new_round),
        rounds=[*history_rounds, new_round],
    )
