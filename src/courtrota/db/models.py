"""SQLAlchemy ORM models for the courtrota session store.

One row per session, plus its roster, rounds and matches. Name lists and
partnership maps are stored as JSON text.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class SessionDB(Base):
    """SQLite table for session configuration and round pointer."""

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    number_of_rackets = Column(Integer, nullable=False, default=8)
    number_of_courts = Column(Integer, nullable=False, default=2)
    current_round = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SessionDB {self.id} (round {self.current_round})>"


class SessionPlayerDB(Base):
    """Roster entry with running statistics."""

    __tablename__ = "session_players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(64), nullable=False, index=True)
    roster_position = Column(Integer, nullable=False, default=0)
    name = Column(String(100), nullable=False)
    games_played = Column(Integer, default=0)
    last_played_round = Column(Integer, default=0)
    partnerships = Column(Text, default="{}")

    def __repr__(self) -> str:
        return f"<SessionPlayerDB {self.name} ({self.games_played} games)>"


class SessionRoundDB(Base):
    """A finalized round and its resting players."""

    __tablename__ = "session_rounds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(64), nullable=False, index=True)
    round_number = Column(Integer, nullable=False)
    resting = Column(Text, default="[]")

    def __repr__(self) -> str:
        return f"<SessionRoundDB {self.session_id} round {self.round_number}>"


class SessionMatchDB(Base):
    """One court's match within a round."""

    __tablename__ = "session_matches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(64), nullable=False, index=True)
    round_number = Column(Integer, nullable=False)
    court = Column(Integer, nullable=False)
    team_a = Column(Text, nullable=False)
    team_b = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<SessionMatchDB round {self.round_number} court {self.court}>"
