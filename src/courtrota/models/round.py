"""Match and Round models — the output of one round of court assignment."""

from __future__ import annotations

from itertools import combinations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# (team_a, team_b) sizes the round generator produces, by court size
TEAM_SHAPES: dict[int, tuple[int, int]] = {
    2: (1, 1),
    3: (2, 1),
    4: (2, 2),
    5: (3, 2),
}


class Match(BaseModel):
    """One court's game: two teams of one to three players."""

    model_config = ConfigDict(populate_by_name=True)

    court: int = Field(ge=1, description="1-based court number")
    team_a: list[str] = Field(alias="teamA", min_length=1, max_length=3)
    team_b: list[str] = Field(alias="teamB", min_length=1, max_length=3)

    @model_validator(mode="after")
    def check_shape(self) -> "Match":
        shape = tuple(sorted((len(self.team_a), len(self.team_b)), reverse=True))
        if shape not in TEAM_SHAPES.values():
            raise ValueError(
                f"court {self.court}: unsupported team sizes "
                f"{len(self.team_a)}v{len(self.team_b)}"
            )
        names = self.team_a + self.team_b
        if len(set(names)) != len(names):
            raise ValueError(f"court {self.court}: a player appears twice in the match")
        return self

    @property
    def players(self) -> list[str]:
        return self.team_a + self.team_b

    @property
    def size(self) -> int:
        return len(self.team_a) + len(self.team_b)

    def partner_pairs(self) -> list[tuple[str, str]]:
        """Every same-team pair in this match."""
        return list(combinations(self.team_a, 2)) + list(combinations(self.team_b, 2))

    def opponent_pairs(self) -> list[tuple[str, str]]:
        """Every (team A, team B) pair in this match."""
        return [(a, b) for a in self.team_a for b in self.team_b]

    def __str__(self) -> str:
        return f"Court {self.court}: {' & '.join(self.team_a)} vs {' & '.join(self.team_b)}"


class Round(BaseModel):
    """A finalized round: matches ordered by court plus the resting players."""

    round: int = Field(ge=1, description="1-based, gapless round number")
    matches: list[Match] = Field(default_factory=list)
    resting: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_assignments(self) -> "Round":
        courts = [m.court for m in self.matches]
        if len(set(courts)) != len(courts):
            raise ValueError(f"round {self.round}: duplicate court numbers {courts}")

        seen: set[str] = set()
        for match in self.matches:
            for name in match.players:
                if name in seen:
                    raise ValueError(f"round {self.round}: {name!r} assigned to two matches")
                seen.add(name)

        clash = seen.intersection(self.resting)
        if clash:
            raise ValueError(f"round {self.round}: {sorted(clash)} both playing and resting")
        return self

    @property
    def playing_names(self) -> list[str]:
        return [name for match in self.matches for name in match.players]

    @property
    def participants(self) -> list[str]:
        """Everyone accounted for in this round, playing first."""
        return self.playing_names + list(self.resting)

    @property
    def players_on_court(self) -> int:
        return sum(match.size for match in self.matches)
