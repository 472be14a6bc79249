"""Model exports for courtrota."""

from courtrota.models.player import Player, partnership_score
from courtrota.models.round import TEAM_SHAPES, Match, Round
from courtrota.models.session import SessionConfig, SessionSnapshot

__all__ = [
    "Match",
    "Player",
    "Round",
    "SessionConfig",
    "SessionSnapshot",
    "TEAM_SHAPES",
    "partnership_score",
]
