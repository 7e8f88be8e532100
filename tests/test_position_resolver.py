from meeplepairing.controllers.tournament import ResultEntry, resolve_positions


def _positions(results):
    return {r.player_id: r.position for r in results}


def test_empty_input():
    assert resolve_positions([]) == []


def test_distinct_points_rank_by_points():
    results = resolve_positions(
        [ResultEntry("a", 10), ResultEntry("b", 30), ResultEntry("c", 20)]
    )
    assert [r.player_id for r in results] == ["b", "c", "a"]
    assert _positions(results) == {"b": 1, "c": 2, "a": 3}


def test_ties_share_position_and_skip_next():
    results = resolve_positions(
        [
            ResultEntry("a", 50),
            ResultEntry("b", 50),
            ResultEntry("c", 40),
            ResultEntry("d", 10),
        ]
    )
    assert _positions(results) == {"a": 1, "b": 1, "c": 3, "d": 4}


def test_tie_below_first_place():
    results = resolve_positions(
        [ResultEntry("a", 9), ResultEntry("b", 5), ResultEntry("c", 5)]
    )
    assert _positions(results) == {"a": 1, "b": 2, "c": 2}


def test_two_player_tie_starter_loses():
    results = resolve_positions([ResultEntry("a", 7), ResultEntry("b", 7)], "a")
    assert _positions(results) == {"a": 2, "b": 1}
    assert [r.player_id for r in results] == ["b", "a"]


def test_two_player_tie_without_starter_is_shared():
    results = resolve_positions([ResultEntry("a", 7), ResultEntry("b", 7)])
    assert _positions(results) == {"a": 1, "b": 1}


def test_starter_not_in_match_is_ignored():
    results = resolve_positions([ResultEntry("a", 7), ResultEntry("b", 7)], "z")
    assert _positions(results) == {"a": 1, "b": 1}


def test_starter_only_matters_on_ties():
    results = resolve_positions([ResultEntry("a", 8), ResultEntry("b", 7)], "a")
    assert _positions(results) == {"a": 1, "b": 2}


def test_starter_sorted_last_in_larger_tie_but_shares_position():
    results = resolve_positions(
        [ResultEntry("a", 5), ResultEntry("b", 5), ResultEntry("c", 5)], "a"
    )
    assert results[-1].player_id == "a"
    assert {r.position for r in results} == {1}


def test_points_are_preserved():
    results = resolve_positions([ResultEntry("a", 12.5), ResultEntry("b", 3)])
    assert {r.player_id: r.points for r in results} == {"a": 12.5, "b": 3}
