import pytest

from meeplepairing.controllers.tournament import StandingsCalculator
from meeplepairing.models import MatchStatus, RoundStatus
from meeplepairing.models.tournament import TiebreakCriterion, TournamentConfig


def _record_round(store, tournament_id, round_number, matches):
    """matches: one list of (player_id, position, points, tournament_points) per match."""
    round_ = store.create_round(tournament_id, round_number, RoundStatus.COMPLETED)
    for number, rows in enumerate(matches, start=1):
        match = store.create_match(
            round_.id, number, [row[0] for row in rows], MatchStatus.COMPLETED
        )
        store.replace_match_results(match.id, rows)


def _register(store, tournament_id, names):
    ids = {}
    for name in names:
        player = store.create_player(name)
        store.register_player(tournament_id, player.id)
        ids[name] = player.id
    return ids


@pytest.fixture
def four_player_table(store):
    """Two rounds of one four-player match; everyone ends on 6 points.

    A and D won a match each, B has by far the best point difference.
    """
    tournament = store.create_tournament("Table", 4)
    p = _register(store, tournament.id, ["A", "B", "C", "D"])
    _record_round(
        store,
        tournament.id,
        1,
        [[(p["A"], 1, 40, 6), (p["B"], 2, 39, 4), (p["C"], 3, 2, 2), (p["D"], 4, 1, 0)]],
    )
    _record_round(
        store,
        tournament.id,
        2,
        [[(p["D"], 1, 32, 6), (p["C"], 2, 31, 4), (p["B"], 3, 30, 2), (p["A"], 4, 1, 0)]],
    )
    return tournament, p


def _names(rows):
    return [row.player_name for row in rows]


def test_wins_only_orders_equal_points_by_wins(store, four_player_table):
    tournament, _ = four_player_table
    rows = StandingsCalculator(store).standings(tournament.id, ["wins"])

    assert [row.total_points for row in rows] == [6, 6, 6, 6]
    # A and D tie on wins and keep registration order, as do B and C
    assert _names(rows) == ["A", "D", "B", "C"]
    assert [row.rank for row in rows] == [1, 2, 3, 4]
    assert [row.wins for row in rows] == [1, 1, 0, 0]


def test_criteria_order_changes_ranking(store, four_player_table):
    tournament, _ = four_player_table
    calculator = StandingsCalculator(store)

    wins_first = calculator.standings(tournament.id, ["wins", "point_difference"])
    difference_first = calculator.standings(tournament.id, ["point_difference", "wins"])

    assert _names(wins_first) == ["A", "D", "B", "C"]
    assert _names(difference_first) == ["B", "A", "D", "C"]


def test_tiebreak_values_are_reported(store, four_player_table):
    tournament, p = four_player_table
    rows = StandingsCalculator(store).standings(tournament.id, ["wins", "point_difference"])
    by_name = {row.player_name: row for row in rows}

    assert by_name["B"].tiebreak_values == {"wins": 0, "point_difference": -38}
    assert by_name["A"].tiebreak_values["point_difference"] == -94


def test_disabled_criteria_are_skipped(store, four_player_table):
    tournament, _ = four_player_table
    criteria = [
        TiebreakCriterion("point_difference", enabled=False, order=1),
        TiebreakCriterion("wins", order=2),
    ]
    rows = StandingsCalculator(store).standings(tournament.id, criteria)

    assert _names(rows) == ["A", "D", "B", "C"]
    assert "point_difference" not in rows[0].tiebreak_values


def test_points_dominate_tiebreaks(store):
    tournament = store.create_tournament("Duel", 2)
    p = _register(store, tournament.id, ["Low", "High"])
    _record_round(store, tournament.id, 1, [[(p["High"], 1, 3, 1), (p["Low"], 2, 90, 0)]])

    rows = StandingsCalculator(store).standings(tournament.id, ["point_difference"])
    assert _names(rows) == ["High", "Low"]


def test_head_to_head_is_compared_pairwise(store):
    tournament = store.create_tournament("Pairs", 2)
    p = _register(store, tournament.id, ["B", "A", "C", "D"])
    _record_round(
        store,
        tournament.id,
        1,
        [
            [(p["A"], 1, 10, 1), (p["B"], 2, 5, 0)],
            [(p["C"], 1, 10, 1), (p["D"], 2, 5, 0)],
        ],
    )
    _record_round(
        store,
        tournament.id,
        2,
        [
            [(p["B"], 1, 10, 1), (p["D"], 2, 5, 0)],
            [(p["C"], 1, 10, 1), (p["A"], 2, 5, 0)],
        ],
    )
    calculator = StandingsCalculator(store)

    assert _names(calculator.standings(tournament.id, [])) == ["C", "B", "A", "D"]
    rows = calculator.standings(tournament.id, ["head_to_head"])
    assert _names(rows) == ["C", "A", "B", "D"]
    assert rows[1].tiebreak_values == {"head_to_head": 0}


@pytest.mark.parametrize("registration", [["A", "B", "C"], ["C", "B", "A"], ["B", "C", "A"]])
def test_head_to_head_cycle_falls_through_to_next_criterion(store, registration):
    tournament = store.create_tournament("Cycle", 2)
    p = _register(store, tournament.id, registration)
    _record_round(store, tournament.id, 1, [[(p["A"], 1, 10, 1), (p["B"], 2, 5, 0)]])
    _record_round(store, tournament.id, 2, [[(p["B"], 1, 10, 1), (p["C"], 2, 9, 0)]])
    _record_round(store, tournament.id, 3, [[(p["C"], 1, 10, 1), (p["A"], 2, 2, 0)]])

    rows = StandingsCalculator(store).standings(
        tournament.id, ["head_to_head", "point_difference"]
    )
    assert _names(rows) == ["C", "A", "B"]


def test_default_criteria_come_from_config(store, four_player_table):
    tournament, _ = four_player_table
    config = TournamentConfig.default_for(tournament.id, 4)
    config.tiebreak_criteria = [
        TiebreakCriterion("point_difference", order=1),
        TiebreakCriterion("wins", order=2),
    ]
    store.save_config(config)

    rows = StandingsCalculator(store).standings(tournament.id)
    assert _names(rows) == ["B", "A", "D", "C"]


def test_players_without_matches_are_listed(store):
    tournament = store.create_tournament("Fresh", 2)
    _register(store, tournament.id, ["A", "B"])

    rows = StandingsCalculator(store).standings(tournament.id)
    assert _names(rows) == ["A", "B"]
    assert all(row.total_points == 0 and row.wins == 0 for row in rows)


def test_empty_roster(store):
    tournament = store.create_tournament("Empty", 2)
    assert StandingsCalculator(store).standings(tournament.id) == []
    assert StandingsCalculator(store).standings("missing") == []
