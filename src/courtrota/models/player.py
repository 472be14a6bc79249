"""Player model — a roster entry and its running session statistics.

Field names follow Python conventions; the camelCase names used by session
snapshots (``gamesPlayed``, ``lastPlayedRound``) are accepted as aliases so
older snapshots load without conversion.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Player(BaseModel):
    """A player on the session roster.

    ``partnerships`` maps partner name → number of rounds played on the same
    team. The round generator keeps it symmetric across the roster.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, description="Unique roster key")
    games_played: int = Field(default=0, ge=0, alias="gamesPlayed")
    last_played_round: int = Field(
        default=0, ge=0, alias="lastPlayedRound",
        description="Round number of the most recent appearance, 0 if never played",
    )
    partnerships: dict[str, int] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("player name must not be blank")
        return v

    @field_validator("partnerships", mode="before")
    @classmethod
    def missing_partnerships_become_empty(cls, v):
        # Snapshots written before partner tracking carry no map at all
        return {} if v is None else v

    @field_validator("partnerships")
    @classmethod
    def partnership_counts_non_negative(cls, v: dict[str, int]) -> dict[str, int]:
        for partner, count in v.items():
            if count < 0:
                raise ValueError(f"negative partnership count for {partner!r}: {count}")
        return v

    @property
    def has_played(self) -> bool:
        return self.games_played > 0

    def partnership_count(self, other_name: str) -> int:
        """Rounds this player has partnered ``other_name``."""
        return self.partnerships.get(other_name, 0)

    def record_partnership(self, other_name: str) -> None:
        self.partnerships[other_name] = self.partnerships.get(other_name, 0) + 1

    def reset_stats(self) -> None:
        """Zero the play counters while keeping partnership memory."""
        self.games_played = 0
        self.last_played_round = 0


def partnership_score(a: Player, b: Player) -> int:
    """Partnership score for a pair, counted from both sides.

    Normally twice the symmetric count; summing both directions keeps the
    score meaningful if a roster edit left the maps briefly asymmetric.
    """
    return a.partnership_count(b.name) + b.partnership_count(a.name)
