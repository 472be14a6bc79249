"""Tests for the session runner — roster edits, configuration, rounds and reset."""

from __future__ import annotations

import random

import pytest

from courtrota.engine.session_runner import SessionError, SessionRunner
from courtrota.models.player import Player
from courtrota.models.round import Match, Round
from courtrota.models.session import SessionConfig, SessionSnapshot


def _runner(*names: str, seed: int = 0, **config) -> SessionRunner:
    runner = SessionRunner(config=SessionConfig(**config), rng=random.Random(seed))
    for name in names:
        runner.add_player(name)
    return runner


class TestRoster:
    def test_add_player(self):
        runner = _runner()
        assert runner.add_player("  Ana ")
        assert runner.player_names == ["Ana"]
        assert runner.get_player("Ana").games_played == 0

    def test_add_rejects_blank_and_duplicates(self):
        runner = _runner("Ana")
        assert not runner.add_player("")
        assert not runner.add_player("   ")
        assert not runner.add_player("Ana")
        assert not runner.add_player(" Ana")
        assert runner.player_names == ["Ana"]

    def test_remove_player(self):
        runner = _runner("Ana", "Ben", "Cai")
        assert runner.remove_player("Ben")
        assert not runner.remove_player("Ben")
        assert runner.player_names == ["Ana", "Cai"]

    def test_remove_keeps_history(self):
        runner = _runner("Ana", "Ben", "Cai", "Dee", number_of_courts=1)
        runner.generate_next_round()
        runner.remove_player("Ana")
        assert "Ana" in runner.rounds[0].playing_names

    def test_get_unknown_player(self):
        with pytest.raises(KeyError):
            _runner("Ana").get_player("Zed")


class TestConfiguration:
    def test_set_counts(self):
        runner = _runner()
        runner.set_number_of_rackets(12)
        runner.set_number_of_courts(3)
        assert runner.config == SessionConfig(number_of_rackets=12, number_of_courts=3)

    @pytest.mark.parametrize("rackets", [0, 1, -4])
    def test_invalid_rackets(self, rackets):
        runner = _runner()
        with pytest.raises(SessionError):
            runner.set_number_of_rackets(rackets)
        assert runner.config.number_of_rackets == 8

    def test_invalid_courts(self):
        with pytest.raises(SessionError):
            _runner().set_number_of_courts(0)

    def test_session_error_is_value_error(self):
        assert issubclass(SessionError, ValueError)

    def test_recommended_courts(self):
        assert _runner("A", "B").recommended_courts() == 0
        assert _runner(*"ABCDEFG").recommended_courts() == 2
        assert _runner(*"ABCDEFGHIJK", number_of_rackets=12).recommended_courts() == 3


class TestRounds:
    def test_cannot_generate_with_two_players(self):
        runner = _runner("Ana", "Ben")
        assert not runner.can_generate_round
        assert runner.generate_next_round() is None
        assert runner.rounds == []
        assert runner.current_round == 0

    def test_generate_updates_state(self):
        runner = _runner(*"ABCDEFGHI")
        first = runner.generate_next_round()
        second = runner.generate_next_round()
        assert first.round == 1
        assert second.round == 2
        assert runner.current_round == 2
        assert runner.rounds == [first, second]
        assert runner.current_round_data() == second
        assert sum(p.games_played for p in runner.players) == 16

    def test_current_round_data_empty(self):
        assert _runner("A", "B", "C").current_round_data() is None

    def test_reset_session(self):
        runner = _runner(*"ABCDEFGH")
        runner.generate_next_round()
        partners_before = {p.name: dict(p.partnerships) for p in runner.players}
        runner.reset_session()
        assert runner.rounds == []
        assert runner.current_round == 0
        assert all(p.games_played == 0 and p.last_played_round == 0 for p in runner.players)
        assert {p.name: p.partnerships for p in runner.players} == partners_before

    def test_seeded_runners_agree(self):
        a = _runner(*"ABCDEFGHIJ", seed=5)
        b = _runner(*"ABCDEFGHIJ", seed=5)
        for _ in range(4):
            assert a.generate_next_round() == b.generate_next_round()


class TestSnapshots:
    def test_snapshot_round_trip(self):
        runner = _runner(*"ABCDEF", number_of_rackets=6)
        runner.generate_next_round()
        resumed = SessionRunner.from_snapshot(runner.snapshot(), rng=random.Random(1))
        assert resumed.players == runner.players
        assert resumed.rounds == runner.rounds
        assert resumed.config == runner.config
        assert resumed.current_round == 1

    def test_from_snapshot_repairs(self):
        snapshot = SessionSnapshot(
            players=[Player(name="A", games_played=2), Player(name="B", games_played=1)],
            current_round=4,
        )
        runner = SessionRunner.from_snapshot(snapshot)
        assert runner.current_round == 0
        assert [p.games_played for p in runner.players] == [0, 0]

    def test_snapshot_is_detached(self):
        runner = _runner("A", "B", "C")
        snap = runner.snapshot()
        snap.players[0].games_played = 9
        assert runner.players[0].games_played == 0

    def test_caller_players_untouched_by_reset(self):
        roster = [Player(name="A", games_played=2, last_played_round=2), Player(name="B", games_played=1)]
        runner = SessionRunner(players=roster)
        runner.reset_session()
        assert [p.games_played for p in roster] == [2, 1]
        assert roster[0].last_played_round == 2
        assert runner.players[0].games_played == 0

    def test_current_round_defaults_to_history_length(self):
        rounds = [Round(round=1, matches=[Match(court=1, team_a=["A"], team_b=["B"])])]
        assert SessionRunner(rounds=rounds).current_round == 1


class TestReporting:
    def test_export_csv_text(self):
        runner = _runner(*"ABCD", number_of_courts=1)
        runner.generate_next_round()
        text = runner.export_csv()
        assert text.startswith("Round,Court,")
        assert len(text.splitlines()) == 2

    def test_export_csv_file(self, tmp_path):
        runner = _runner(*"ABCD", number_of_courts=1)
        runner.generate_next_round()
        path = runner.export_csv(tmp_path / "games.csv")
        assert path.exists()

    def test_fairness_report(self):
        runner = _runner(*"ABCDE", number_of_rackets=4, number_of_courts=1)
        for _ in range(5):
            runner.generate_next_round()
        report = runner.fairness_report()
        assert report.rounds_played == 5
        assert set(report.games_played.values()) == {4}
        assert set(report.rests.values()) == {1}

    def test_export_csv_into_new_directory(self, tmp_path):
        runner = _runner(*"ABCD", number_of_courts=1)
        runner.generate_next_round()
        path = runner.export_csv(str(tmp_path / "exports") + "/")
        assert (tmp_path / "exports").is_dir()
        assert path.parent == tmp_path / "exports"
