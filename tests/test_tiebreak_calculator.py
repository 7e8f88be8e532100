import pytest

from meeplepairing.controllers.tournament import MatchHistory, PlayedMatch, TiebreakCalculator
from meeplepairing.controllers.tournament import tiebreak_calculator as tb
from meeplepairing.models import TiebreakCriterionId
from meeplepairing.models.tournament import Match, MatchResult


def _played(round_number, number, rows):
    """rows: (player_id, position, points) with 1/0 tournament points."""
    match_id = f"m{round_number}_{number}"
    match = Match(
        id=match_id,
        round_id=f"r{round_number}",
        match_number=number,
        player_ids=[pid for pid, _, _ in rows],
    )
    results = [
        MatchResult(
            id=f"{match_id}_{pid}",
            match_id=match_id,
            player_id=pid,
            position=position,
            points=points,
            tournament_points=1.0 if position == 1 else 0.0,
        )
        for pid, position, points in rows
    ]
    return PlayedMatch(round_number, match, results)


ROUND_1 = [
    _played(1, 1, [("A", 1, 10), ("B", 2, 4)]),
    _played(1, 2, [("C", 1, 8), ("D", 2, 6)]),
]
ROUND_2 = [
    _played(2, 1, [("A", 1, 9), ("C", 2, 7)]),
    _played(2, 2, [("B", 1, 5), ("D", 2, 3)]),
]
ROUND_3 = [
    _played(3, 1, [("A", 1, 6), ("D", 2, 1)]),
    _played(3, 2, [("C", 1, 7), ("B", 2, 2)]),
]


@pytest.fixture
def history():
    return MatchHistory("t1", ROUND_1 + ROUND_2 + ROUND_3)


def test_totals_and_wins(history):
    assert history.total_points("A") == 3
    assert history.total_points("B") == 1
    assert history.total_points("C") == 2
    assert history.total_points("D") == 0
    assert tb.wins(history, "A") == 3
    assert tb.wins(history, "D") == 0


def test_opponent_points_drop_worst(history):
    # A met B (1), C (2), D (0)
    assert tb.opponent_points_drop_worst(history, "A") == 3
    # B met A (3), D (0), C (2)
    assert tb.opponent_points_drop_worst(history, "B") == 5


def test_opponent_points_drop_best_worst(history):
    assert tb.opponent_points_drop_best_worst(history, "A") == 1
    assert tb.opponent_points_drop_best_worst(history, "B") == 2


def test_two_opponent_values_leave_nothing_after_best_and_worst():
    history = MatchHistory("t1", ROUND_1 + ROUND_2)
    # A met B and C, both on 1 point
    assert tb.opponent_points_drop_worst(history, "A") == 1
    assert tb.opponent_points_drop_best_worst(history, "A") == 0


def test_single_opponent_value_is_kept():
    history = MatchHistory("t1", ROUND_1)
    assert tb.opponent_points_drop_worst(history, "B") == 1
    assert tb.opponent_points_drop_best_worst(history, "B") == 1


def test_point_difference(history):
    assert tb.point_difference(history, "A") == 13
    assert tb.point_difference(history, "B") == -9


def test_point_difference_counts_every_opponent():
    history = MatchHistory(
        "t1", [_played(1, 1, [("A", 1, 10), ("B", 2, 6), ("C", 3, 1)])]
    )
    assert tb.point_difference(history, "A") == 3
    assert tb.point_difference(history, "C") == -15


def test_bye_counts_as_win_without_point_difference():
    history = MatchHistory("t1", [_played(1, 1, [("A", 1, 0)])])
    assert tb.wins(history, "A") == 1
    assert tb.point_difference(history, "A") == 0
    assert tb.opponent_points_drop_worst(history, "A") == 0


def test_player_without_matches_scores_zero(history):
    for criterion in TiebreakCriterionId:
        assert tb.CRITERIA[criterion](history, "E") == 0


def test_every_criterion_has_a_function():
    assert set(tb.CRITERIA) == set(TiebreakCriterionId)


def test_head_to_head(history):
    assert TiebreakCalculator.head_to_head(history, "A", "B") == 1
    assert TiebreakCalculator.head_to_head(history, "B", "A") == -1
    assert TiebreakCalculator.head_to_head(history, "A", "E") == 0


def test_head_to_head_tie():
    history = MatchHistory("t1", [_played(1, 1, [("A", 1, 5), ("B", 1, 5)])])
    assert TiebreakCalculator.head_to_head(history, "A", "B") == 0


def test_head_to_head_scalar_is_placeholder(history):
    assert tb.head_to_head_placeholder(history, "A") == 0


def test_calculate_player_tiebreaks_keys_by_criterion(history, store):
    values = TiebreakCalculator(store).calculate_player_tiebreaks(
        history, "A", [TiebreakCriterionId.WINS, "point_difference"]
    )
    assert values == {"wins": 3.0, "point_difference": 13.0}


def test_evaluate_unknown_player_and_tournament(store):
    calculator = TiebreakCalculator(store)
    assert calculator.evaluate("missing", "nobody", TiebreakCriterionId.WINS) == 0
    assert (
        calculator.evaluate("missing", "nobody", TiebreakCriterionId.POINT_DIFFERENCE)
        == 0
    )


def test_evaluate_reads_the_store(manager, build_tournament, play_round):
    tournament, players = build_tournament(4)
    strength = {pid: 10 + index for index, pid in enumerate(players)}
    round_ = manager.generate_round(tournament.id)
    play_round(round_.id, strength)

    calculator = TiebreakCalculator(manager.store)
    wins = {
        pid: calculator.evaluate(tournament.id, pid, TiebreakCriterionId.WINS)
        for pid in players
    }
    assert sorted(wins.values()) == [0, 0, 1, 1]

    diffs = [
        calculator.evaluate(tournament.id, pid, TiebreakCriterionId.POINT_DIFFERENCE)
        for pid in players
    ]
    assert sum(diffs) == 0


def test_evaluate_head_to_head_with_other_player(manager, build_tournament, play_round):
    tournament, players = build_tournament(2)
    strength = {players[0]: 5, players[1]: 9}
    round_ = manager.generate_round(tournament.id)
    play_round(round_.id, strength)

    calculator = TiebreakCalculator(manager.store)
    criterion = TiebreakCriterionId.HEAD_TO_HEAD
    winner, loser = players[1], players[0]
    assert calculator.evaluate(tournament.id, winner, criterion, other_player_id=loser) == 1
    assert calculator.evaluate(tournament.id, loser, criterion, other_player_id=winner) == -1
    assert calculator.evaluate(tournament.id, players[0], criterion) == 0
