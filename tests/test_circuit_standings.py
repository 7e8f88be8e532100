from datetime import date

import pytest

from meeplepairing.controllers import CircuitStandingsService, ResultEntry
from meeplepairing.exceptions import EntityNotFoundException
from meeplepairing.models import TournamentStatus, TournamentType


@pytest.fixture
def season(store, manager):
    """Two completed legs, one leg still running and an unrelated qualifier.

    Alice beats Bob in January, Bob beats Carol in February. Dave only
    appears in the March leg, which never finishes, and Carol beats Alice in
    a qualifier outside the circuit.
    """
    circuit = store.create_circuit("Spring League", start_date=date(2025, 1, 1))
    players = {name: store.create_player(name) for name in ("Alice", "Bob", "Carol", "Dave")}

    def duel(name, played_on, scores, circuit_id=circuit.id):
        tournament = manager.create_tournament(
            name, played_on=played_on, circuit_id=circuit_id
        )
        for player_name in scores:
            manager.register_player(tournament.id, players[player_name].id)
        round_ = manager.generate_round(tournament.id)
        match = manager.round_matches(round_.id)[0]
        by_id = {players[n].id: points for n, points in scores.items()}
        manager.submit_match_results(
            match.id, [ResultEntry(pid, by_id[pid]) for pid in match.player_ids]
        )
        return tournament

    duel("January", date(2025, 1, 10), {"Alice": 10, "Bob": 4})
    duel("February", date(2025, 2, 10), {"Bob": 9, "Carol": 3})
    duel("Open", date(2025, 2, 20), {"Carol": 7, "Alice": 2}, circuit_id=None)

    march = manager.create_tournament(
        "March", number_of_rounds=2, played_on=date(2025, 3, 10), circuit_id=circuit.id
    )
    for name in ("Alice", "Dave"):
        manager.register_player(march.id, players[name].id)
    round_ = manager.generate_round(march.id)
    match = manager.round_matches(round_.id)[0]
    manager.submit_match_results(
        match.id, [ResultEntry(players["Dave"].id, 5), ResultEntry(players["Alice"].id, 1)]
    )
    assert manager.get_tournament(march.id).status == TournamentStatus.IN_PROGRESS

    return circuit


def test_circuit_standings_add_up_completed_legs(store, season):
    rows = CircuitStandingsService(store).circuit_standings(season.id)

    assert [r.player_name for r in rows] == ["Alice", "Bob", "Carol"]
    assert [r.rank for r in rows] == [1, 2, 3]
    assert [(r.total_points, r.wins, r.tournaments_played) for r in rows] == [
        (1, 1, 1),
        (1, 1, 2),
        (0, 0, 1),
    ]


def test_running_legs_and_qualifiers_do_not_count(store, season):
    rows = CircuitStandingsService(store).circuit_standings(season.id)
    assert "Dave" not in {r.player_name for r in rows}
    carol = next(r for r in rows if r.player_name == "Carol")
    assert carol.wins == 0


def test_later_legs_add_to_the_totals(store, manager, season):
    alice = next(p for p in store.list_players() if p.name == "Alice")
    carol = next(p for p in store.list_players() if p.name == "Carol")
    april = manager.create_tournament("April", played_on=date(2025, 4, 1), circuit_id=season.id)
    for player in (alice, carol):
        manager.register_player(april.id, player.id)
    round_ = manager.generate_round(april.id)
    match = manager.round_matches(round_.id)[0]
    manager.submit_match_results(
        match.id, [ResultEntry(carol.id, 8), ResultEntry(alice.id, 2)]
    )

    rows = CircuitStandingsService(store).circuit_standings(season.id)
    assert [(r.player_name, r.total_points) for r in rows] == [
        ("Alice", 1),
        ("Bob", 1),
        ("Carol", 1),
    ]
    assert rows[0].tournaments_played == 2


def test_wins_break_ties_on_points(store, manager):
    circuit = store.create_circuit("Flat League")
    alice, bob = store.create_player("Alice"), store.create_player("Bob")
    leg = manager.create_tournament(
        "Flat", circuit_id=circuit.id, config={"scoring_system": {1: 2, 2: 2}}
    )
    for player in (alice, bob):
        manager.register_player(leg.id, player.id)
    round_ = manager.generate_round(leg.id)
    match = manager.round_matches(round_.id)[0]
    manager.submit_match_results(match.id, [ResultEntry(bob.id, 9), ResultEntry(alice.id, 1)])

    rows = CircuitStandingsService(store).circuit_standings(circuit.id)
    assert [(r.player_name, r.total_points, r.wins) for r in rows] == [
        ("Bob", 2, 1),
        ("Alice", 2, 0),
    ]


def test_empty_circuit(store):
    circuit = store.create_circuit("Winter League")
    assert CircuitStandingsService(store).circuit_standings(circuit.id) == []


def test_unknown_circuit(store):
    with pytest.raises(EntityNotFoundException):
        CircuitStandingsService(store).circuit_standings("missing")


def test_circuit_tournaments(store, manager):
    circuit = store.create_circuit("Summer League")
    leg = manager.create_tournament("Leg 1", circuit_id=circuit.id)
    qualifier = manager.create_tournament("Qualifier")

    assert leg.tournament_type == TournamentType.CIRCUIT
    assert qualifier.tournament_type == TournamentType.QUALIFIER
    assert [t.id for t in store.list_circuit_tournaments(circuit.id)] == [leg.id]


def test_tournament_in_unknown_circuit(store, manager):
    with pytest.raises(EntityNotFoundException):
        manager.create_tournament("Leg 1", circuit_id="missing")
    assert store.list_tournaments() == []
