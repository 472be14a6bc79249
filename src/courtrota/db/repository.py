"""Repository layer — store and load session snapshots.

Handles conversion between the pydantic session models and SQLAlchemy ORM
rows, plus JSON snapshot files in the camelCase layout sessions have
always been saved in.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from courtrota.db.models import SessionDB, SessionMatchDB, SessionPlayerDB, SessionRoundDB
from courtrota.models.player import Player
from courtrota.models.round import Match, Round
from courtrota.models.session import SessionSnapshot

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


class SessionRepository:
    """Save / load / delete session snapshots."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, snapshot: SessionSnapshot, session_id: str = DEFAULT_SESSION_ID) -> None:
        """Insert or replace a stored session."""
        self._delete_rows(session_id)
        self.session.merge(SessionDB(
            id=session_id,
            number_of_rackets=snapshot.number_of_rackets,
            number_of_courts=snapshot.number_of_courts,
            current_round=snapshot.current_round,
        ))
        for position, player in enumerate(snapshot.players):
            self.session.add(_player_to_db(session_id, position, player))
        for game_round in snapshot.rounds:
            self.session.add(_round_to_db(session_id, game_round))
            for match in game_round.matches:
                self.session.add(_match_to_db(session_id, game_round.round, match))
        self.session.commit()
        logger.info(
            f"Saved session {session_id!r}: {len(snapshot.players)} players, "
            f"{len(snapshot.rounds)} rounds"
        )

    def load(self, session_id: str = DEFAULT_SESSION_ID) -> SessionSnapshot | None:
        """Load a stored session (repaired), or None if it does not exist."""
        db_session = self.session.get(SessionDB, session_id)
        if db_session is None:
            return None

        player_rows = (
            self.session.query(SessionPlayerDB)
            .filter(SessionPlayerDB.session_id == session_id)
            .order_by(SessionPlayerDB.roster_position)
            .all()
        )
        round_rows = (
            self.session.query(SessionRoundDB)
            .filter(SessionRoundDB.session_id == session_id)
            .order_by(SessionRoundDB.round_number)
            .all()
        )
        match_rows = (
            self.session.query(SessionMatchDB)
            .filter(SessionMatchDB.session_id == session_id)
            .order_by(SessionMatchDB.round_number, SessionMatchDB.court)
            .all()
        )

        matches_by_round: dict[int, list[Match]] = {}
        for row in match_rows:
            matches_by_round.setdefault(row.round_number, []).append(_db_to_match(row))

        snapshot = SessionSnapshot(
            players=[_db_to_player(row) for row in player_rows],
            number_of_rackets=db_session.number_of_rackets,
            number_of_courts=db_session.number_of_courts,
            rounds=[
                Round(
                    round=row.round_number,
                    matches=matches_by_round.get(row.round_number, []),
                    resting=json.loads(row.resting or "[]"),
                )
                for row in round_rows
            ],
            current_round=db_session.current_round,
        )
        return snapshot.repaired()

    def delete(self, session_id: str = DEFAULT_SESSION_ID) -> bool:
        """Delete a stored session. False if it did not exist."""
        db_session = self.session.get(SessionDB, session_id)
        if db_session is None:
            return False
        self._delete_rows(session_id)
        self.session.delete(db_session)
        self.session.commit()
        return True

    def list_ids(self) -> list[str]:
        return [row.id for row in self.session.query(SessionDB).order_by(SessionDB.id).all()]

    def _delete_rows(self, session_id: str) -> None:
        for model in (SessionPlayerDB, SessionRoundDB, SessionMatchDB):
            self.session.query(model).filter(model.session_id == session_id).delete()


def export_snapshot(snapshot: SessionSnapshot, output_path: str | Path) -> dict:
    """Write a session snapshot as JSON.

    Used for persistence, rollback, and debugging.
    """
    data = snapshot.to_json_dict()

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(f"Exported snapshot to {output}: {len(snapshot.players)} players, {len(snapshot.rounds)} rounds")
    return data


def load_snapshot(input_path: str | Path) -> SessionSnapshot:
    """Read a JSON session snapshot, repairing inconsistent state.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the content is not a session snapshot.
    """
    with open(input_path, encoding="utf-8") as f:
        data = json.load(f)
    return SessionSnapshot.model_validate(data).repaired()


# ── Conversion Helpers ──────────────────────────────────────────────────


def _player_to_db(session_id: str, position: int, player: Player) -> SessionPlayerDB:
    return SessionPlayerDB(
        session_id=session_id,
        roster_position=position,
        name=player.name,
        games_played=player.games_played,
        last_played_round=player.last_played_round,
        partnerships=json.dumps(player.partnerships, sort_keys=True),
    )


def _db_to_player(db: SessionPlayerDB) -> Player:
    return Player(
        name=db.name,
        games_played=db.games_played or 0,
        last_played_round=db.last_played_round or 0,
        partnerships=json.loads(db.partnerships or "{}"),
    )


def _round_to_db(session_id: str, game_round: Round) -> SessionRoundDB:
    return SessionRoundDB(
        session_id=session_id,
        round_number=game_round.round,
        resting=json.dumps(game_round.resting),
    )


def _match_to_db(session_id: str, round_number: int, match: Match) -> SessionMatchDB:
    return SessionMatchDB(
        session_id=session_id,
        round_number=round_number,
        court=match.court,
        team_a=json.dumps(match.team_a),
        team_b=json.dumps(match.team_b),
    )


def _db_to_match(db: SessionMatchDB) -> Match:
    return Match(
        court=db.court,
        team_a=json.loads(db.team_a),
        team_b=json.loads(db.team_b),
    )
