"""Session configuration and the persisted session snapshot.

The snapshot mirrors the JSON layout sessions have always been stored in:
``{players, numberOfRackets, numberOfCourts, rounds, currentRound}``.
Loading is lenient (missing fields default) and ``repaired()`` fixes the
inconsistencies a half-written snapshot can carry.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from courtrota.models.player import Player
from courtrota.models.round import Round

logger = logging.getLogger(__name__)

DEFAULT_RACKETS = 8
DEFAULT_COURTS = 2


class SessionConfig(BaseModel):
    """Equipment available to the session."""

    model_config = ConfigDict(populate_by_name=True)

    number_of_rackets: int = Field(default=DEFAULT_RACKETS, ge=2, alias="numberOfRackets")
    number_of_courts: int = Field(default=DEFAULT_COURTS, ge=1, alias="numberOfCourts")

    @property
    def max_players_per_round(self) -> int:
        return self.number_of_courts * 4

    @property
    def min_players_per_round(self) -> int:
        return self.number_of_courts * 2


class SessionSnapshot(BaseModel):
    """Everything needed to resume a session."""

    model_config = ConfigDict(populate_by_name=True)

    players: list[Player] = Field(default_factory=list)
    number_of_rackets: int = Field(default=DEFAULT_RACKETS, ge=2, alias="numberOfRackets")
    number_of_courts: int = Field(default=DEFAULT_COURTS, ge=1, alias="numberOfCourts")
    rounds: list[Round] = Field(default_factory=list)
    current_round: int = Field(default=0, ge=0, alias="currentRound")

    @field_validator("players", "rounds", mode="before")
    @classmethod
    def null_lists_become_empty(cls, v):
        return [] if v is None else v

    @field_validator("number_of_rackets", mode="before")
    @classmethod
    def rackets_default_when_unset(cls, v):
        return v or DEFAULT_RACKETS

    @field_validator("number_of_courts", mode="before")
    @classmethod
    def courts_default_when_unset(cls, v):
        return v or DEFAULT_COURTS

    @field_validator("current_round", mode="before")
    @classmethod
    def current_round_default_when_unset(cls, v):
        return v or 0

    @property
    def config(self) -> SessionConfig:
        return SessionConfig(
            number_of_rackets=self.number_of_rackets,
            number_of_courts=self.number_of_courts,
        )

    def repaired(self) -> "SessionSnapshot":
        """Return a copy with round-pointer and counter inconsistencies fixed.

        - ``current_round`` past the end of the history is clamped to it.
        - Game counts recorded with no rounds at all are reset to zero.
        """
        fixed = self.model_copy(deep=True)

        if fixed.current_round > len(fixed.rounds):
            logger.warning(
                f"Data inconsistency: current round {fixed.current_round} beyond "
                f"{len(fixed.rounds)} recorded rounds, clamping"
            )
            fixed.current_round = len(fixed.rounds)

        if not fixed.rounds and any(p.games_played > 0 for p in fixed.players):
            logger.warning("Data inconsistency: games recorded without rounds, resetting player stats")
            for player in fixed.players:
                player.reset_stats()
            fixed.current_round = 0

        return fixed

    def to_json_dict(self) -> dict:
        """camelCase dict in the stored snapshot layout."""
        return self.model_dump(mode="json", by_alias=True)
