"""Session runner — owns one session's roster, configuration and rounds.

Wraps the round generator with the roster editing, configuration and
reset operations a front end needs. Not thread-safe: callers serialise
access to a runner.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from pydantic import ValidationError

from courtrota.engine.capacity import recommended_courts
from courtrota.engine.fairness_report import FairnessReport, build_fairness_report
from courtrota.engine.round_generator import MIN_ROSTER_SIZE, generate_next_round
from courtrota.export.csv_export import rounds_to_csv, write_rounds_csv
from courtrota.models.player import Player
from courtrota.models.round import Round
from courtrota.models.session import SessionConfig, SessionSnapshot

logger = logging.getLogger(__name__)


class SessionError(ValueError):
    """Raised when a session edit is invalid."""


class SessionRunner:
    """Stateful facade over the round generator for one session."""

    def __init__(
        self,
        players: list[Player] | None = None,
        config: SessionConfig | None = None,
        rounds: list[Round] | None = None,
        current_round: int | None = None,
        rng: random.Random | None = None,
    ):
        self.players: list[Player] = [p.model_copy(deep=True) for p in players or []]
        self.config = config or SessionConfig()
        self.rounds: list[Round] = list(rounds or [])
        self.current_round = len(self.rounds) if current_round is None else current_round
        self.rng = rng or random.Random()

    @classmethod
    def from_snapshot(
        cls, snapshot: SessionSnapshot, rng: random.Random | None = None,
    ) -> "SessionRunner":
        """Resume a stored session, repairing inconsistent state first."""
        fixed = snapshot.repaired()
        return cls(
            players=fixed.players,
            config=fixed.config,
            rounds=fixed.rounds,
            current_round=fixed.current_round,
            rng=rng,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            players=[p.model_copy(deep=True) for p in self.players],
            number_of_rackets=self.config.number_of_rackets,
            number_of_courts=self.config.number_of_courts,
            rounds=list(self.rounds),
            current_round=self.current_round,
        )

    # ── Roster ───────────────────────────────────────────────────────────

    @property
    def player_names(self) -> list[str]:
        return [p.name for p in self.players]

    def get_player(self, name: str) -> Player:
        for player in self.players:
            if player.name == name:
                return player
        raise KeyError(f"Unknown player: {name}")

    def add_player(self, name: str) -> bool:
        """Add a player with zeroed stats. False if blank or already on the roster."""
        name = name.strip()
        if not name or name in self.player_names:
            return False
        self.players.append(Player(name=name))
        logger.info(f"Added player {name!r} ({len(self.players)} on roster)")
        return True

    def remove_player(self, name: str) -> bool:
        """Drop a player from the roster. Past rounds are left as they were."""
        remaining = [p for p in self.players if p.name != name]
        if len(remaining) == len(self.players):
            return False
        self.players = remaining
        logger.info(f"Removed player {name!r} ({len(self.players)} on roster)")
        return True

    # ── Configuration ────────────────────────────────────────────────────

    def set_number_of_rackets(self, rackets: int) -> None:
        self._update_config(number_of_rackets=rackets)

    def set_number_of_courts(self, courts: int) -> None:
        self._update_config(number_of_courts=courts)

    def _update_config(self, **changes: int) -> None:
        values = self.config.model_dump()
        values.update(changes)
        try:
            self.config = SessionConfig(**values)
        except ValidationError as exc:
            raise SessionError(f"Invalid session configuration {changes}: {exc}") from exc

    def recommended_courts(self) -> int:
        return recommended_courts(len(self.players), self.config.number_of_rackets)

    # ── Rounds ───────────────────────────────────────────────────────────

    @property
    def can_generate_round(self) -> bool:
        return len(self.players) >= MIN_ROSTER_SIZE

    def generate_next_round(self) -> Round | None:
        """Generate, record and return the next round, or None if not possible."""
        outcome = generate_next_round(self.players, self.rounds, self.config, rng=self.rng)
        if outcome is None:
            return None

        self.players = outcome.players
        self.rounds = outcome.rounds
        self.current_round = outcome.round_number
        return outcome.round

    def current_round_data(self) -> Round | None:
        if self.current_round == 0 or self.current_round > len(self.rounds):
            return None
        return self.rounds[self.current_round - 1]

    def reset_session(self) -> None:
        """Clear rounds and play counters; partnership memory is kept."""
        for player in self.players:
            player.reset_stats()
        self.rounds = []
        self.current_round = 0
        logger.info("Session reset")

    # ── Reporting ────────────────────────────────────────────────────────

    def export_csv(self, path: str | Path | None = None) -> str | Path:
        """CSV text of all rounds, or the written file's path when ``path`` is given."""
        if path is None:
            return rounds_to_csv(self.rounds)
        return write_rounds_csv(self.rounds, path)

    def fairness_report(self) -> FairnessReport:
        return build_fairness_report(self.players, self.rounds)
