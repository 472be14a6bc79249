"""Tests for the session store — SQLite repository and JSON snapshots."""

from __future__ import annotations

import json
import random

import pytest
from pydantic import ValidationError

from courtrota.db.repository import SessionRepository, export_snapshot, load_snapshot
from courtrota.db.session import database_url, get_engine, get_session, init_db
from courtrota.engine.session_runner import SessionRunner
from courtrota.models.player import Player
from courtrota.models.session import SessionConfig, SessionSnapshot


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing."""
    engine = get_engine(":memory:")
    init_db(engine)
    session = get_session(engine)
    yield session
    session.close()


@pytest.fixture
def played_snapshot() -> SessionSnapshot:
    runner = SessionRunner(
        config=SessionConfig(number_of_rackets=10, number_of_courts=2),
        rng=random.Random(21),
    )
    for name in ["Ana", "Ben", "Cai", "Dee", "Eli", "Fay", "Gus", "Hal", "Ivy"]:
        runner.add_player(name)
    for _ in range(3):
        runner.generate_next_round()
    return runner.snapshot()


class TestSessionRepository:
    def test_save_and_load(self, db_session, played_snapshot):
        repo = SessionRepository(db_session)
        repo.save(played_snapshot)
        loaded = repo.load()
        assert loaded == played_snapshot

    def test_roster_order_preserved(self, db_session, played_snapshot):
        repo = SessionRepository(db_session)
        repo.save(played_snapshot, session_id="club")
        loaded = repo.load("club")
        assert [p.name for p in loaded.players] == [p.name for p in played_snapshot.players]

    def test_load_missing(self, db_session):
        assert SessionRepository(db_session).load("nope") is None

    def test_save_replaces(self, db_session, played_snapshot):
        repo = SessionRepository(db_session)
        repo.save(played_snapshot)
        repo.save(SessionSnapshot(players=[Player(name="Solo")]))
        loaded = repo.load()
        assert [p.name for p in loaded.players] == ["Solo"]
        assert loaded.rounds == []

    def test_sessions_are_independent(self, db_session, played_snapshot):
        repo = SessionRepository(db_session)
        repo.save(played_snapshot, session_id="a")
        repo.save(SessionSnapshot(), session_id="b")
        assert repo.list_ids() == ["a", "b"]
        assert len(repo.load("a").rounds) == 3
        assert repo.load("b").players == []

    def test_delete(self, db_session, played_snapshot):
        repo = SessionRepository(db_session)
        repo.save(played_snapshot)
        assert repo.delete()
        assert not repo.delete()
        assert repo.load() is None
        assert repo.list_ids() == []

    def test_load_repairs(self, db_session):
        repo = SessionRepository(db_session)
        repo.save(SessionSnapshot(players=[Player(name="A", games_played=3)], current_round=2))
        loaded = repo.load()
        assert loaded.players[0].games_played == 0
        assert loaded.current_round == 0


class TestSnapshotFiles:
    def test_export_and_load(self, tmp_path, played_snapshot):
        path = tmp_path / "snap" / "session.json"
        data = export_snapshot(played_snapshot, path)
        assert data["currentRound"] == 3
        assert "numberOfRackets" in json.loads(path.read_text(encoding="utf-8"))
        assert load_snapshot(path) == played_snapshot

    def test_load_legacy_snapshot(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps({
            "players": [
                {"name": "Ana", "gamesPlayed": 1, "lastPlayedRound": 1},
                {"name": "Ben", "gamesPlayed": 1, "lastPlayedRound": 1},
                {"name": "Cai", "gamesPlayed": 0, "lastPlayedRound": 0},
            ],
            "numberOfRackets": 0,
            "rounds": [{"round": 1, "matches": [{"court": 1, "teamA": ["Ana"], "teamB": ["Ben"]}], "resting": ["Cai"]}],
            "currentRound": 7,
        }), encoding="utf-8")
        snap = load_snapshot(path)
        assert snap.players[0].partnerships == {}
        assert snap.number_of_rackets == 8
        assert snap.number_of_courts == 2
        assert snap.current_round == 1

    def test_load_invalid_snapshot(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"players": [{"name": ""}]}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_snapshot(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "missing.json")


class TestDatabaseUrl:
    def test_in_memory(self):
        assert database_url(":memory:") == "sqlite://"

    def test_file_path_creates_folder(self, tmp_path):
        url = database_url(tmp_path / "store" / "sessions.db")
        assert url == f"sqlite:///{tmp_path / 'store' / 'sessions.db'}"
        assert (tmp_path / "store").is_dir()

    def test_file_database_round_trip(self, tmp_path, played_snapshot):
        engine = init_db(get_engine(tmp_path / "sessions.db"))
        session = get_session(engine)
        try:
            SessionRepository(session).save(played_snapshot, session_id="night")
        finally:
            session.close()

        reopened = get_session(get_engine(tmp_path / "sessions.db"))
        try:
            assert SessionRepository(reopened).load("night") == played_snapshot
        finally:
            reopened.close()
