"""Tests for assignment scoring."""

from __future__ import annotations

from courtrota.engine.history import FairnessHistory, build_fairness_history
from courtrota.engine.scoring import (
    COURT_STICKINESS_WEIGHT,
    OPPONENT_WEIGHT,
    PARTNERSHIP_WEIGHT,
    score_assignment,
)
from courtrota.models.player import Player
from courtrota.models.round import Match, Round


class TestScoreAssignment:
    def test_fresh_session_scores_zero(self):
        players = [Player(name=n) for n in "ABCD"]
        matches = [Match(court=1, team_a=["A", "B"], team_b=["C", "D"])]
        assert score_assignment(matches, players, FairnessHistory()) == 0.0

    def test_partnership_weight(self):
        players = [
            Player(name="A", partnerships={"B": 1}),
            Player(name="B", partnerships={"A": 1}),
            Player(name="C"),
            Player(name="D"),
        ]
        matches = [Match(court=1, team_a=["A", "B"], team_b=["C", "D"])]
        # score counts both directions
        assert score_assignment(matches, players, FairnessHistory()) == 2 * PARTNERSHIP_WEIGHT

    def test_opponent_weight(self):
        history = FairnessHistory(opponent_history={"A": {"C": 2}, "C": {"A": 2}})
        players = [Player(name=n) for n in "ABCD"]
        matches = [Match(court=1, team_a=["A", "B"], team_b=["C", "D"])]
        assert score_assignment(matches, players, history) == 2 * OPPONENT_WEIGHT

    def test_court_stickiness_weight(self):
        history = FairnessHistory(court_history={"A": {1: 3}, "B": {2: 1}})
        players = [Player(name=n) for n in "AB"]
        matches = [Match(court=1, team_a=["A"], team_b=["B"])]
        assert score_assignment(matches, players, history) == 3 * COURT_STICKINESS_WEIGHT

    def test_unknown_players_add_no_partnership_penalty(self):
        matches = [Match(court=1, team_a=["X", "Y"], team_b=["Z"])]
        assert score_assignment(matches, [], FairnessHistory()) == 0.0

    def test_pure_and_deterministic(self):
        players = [
            Player(name="A", partnerships={"B": 2}),
            Player(name="B", partnerships={"A": 2}),
            Player(name="C"),
            Player(name="D"),
        ]
        rounds = [Round(round=1, matches=[Match(court=1, team_a=["A", "C"], team_b=["B", "D"])])]
        history = build_fairness_history(players, rounds)
        matches = [Match(court=1, team_a=["A", "B"], team_b=["C", "D"])]
        before = [p.model_copy(deep=True) for p in players]

        first = score_assignment(matches, players, history)
        second = score_assignment(matches, players, history)

        assert first == second
        assert first >= 0
        assert players == before
        # 4 partnership + A-C, A-D, B-C, B-D opponents (2 repeated) + 4 on court 1
        assert first == 4 * PARTNERSHIP_WEIGHT + 2 * OPPONENT_WEIGHT + 4 * COURT_STICKINESS_WEIGHT
