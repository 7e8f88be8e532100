import pytest

from meeplepairing.exceptions import (
    EntityNotFoundException,
    NotEnoughPlayersException,
    RoundIncompleteException,
    RoundLimitReachedException,
    TournamentStateException,
)
from meeplepairing.models import MatchStatus, RoundStatus, TournamentStatus


def _strength(players):
    """Later-registered players always score more."""
    return {pid: 10 * (index + 1) for index, pid in enumerate(players)}


def test_first_round_with_odd_roster_gives_a_bye(manager, build_tournament):
    tournament, players = build_tournament(5)
    round_ = manager.generate_round(tournament.id)

    assert round_.round_number == 1
    assert round_.status == RoundStatus.PENDING
    matches = manager.round_matches(round_.id)
    assert [m.match_number for m in matches] == [1, 2, 3]
    assert sorted(pid for m in matches for pid in m.player_ids) == sorted(players)

    byes = [m for m in matches if m.is_bye]
    assert len(byes) == 1
    bye = byes[0]
    assert bye.status == MatchStatus.COMPLETED
    assert bye.completed_at is not None

    results = manager.store.list_match_results(bye.id)
    assert len(results) == 1
    assert results[0].position == 1
    assert results[0].points == 0
    assert results[0].tournament_points == 1

    records = manager.store.list_byes(tournament.id)
    assert [(r.player_id, r.round_number) for r in records] == [(bye.player_ids[0], 1)]
    assert manager.get_tournament(tournament.id).status == TournamentStatus.IN_PROGRESS


def test_bye_earns_first_place_points_of_the_scoring_system(manager, build_tournament):
    tournament, _ = build_tournament(7, players_per_match=3)
    round_ = manager.generate_round(tournament.id)

    bye = next(m for m in manager.round_matches(round_.id) if m.is_bye)
    assert manager.store.list_match_results(bye.id)[0].tournament_points == 3


def test_bye_uses_custom_scoring(manager, build_tournament):
    tournament, _ = build_tournament(3, config={"scoring_system": {"1": 5, "2": 2}})
    round_ = manager.generate_round(tournament.id)

    bye = next(m for m in manager.round_matches(round_.id) if m.is_bye)
    assert manager.store.list_match_results(bye.id)[0].tournament_points == 5


def test_not_enough_players_leaves_tournament_untouched(manager, build_tournament):
    tournament, _ = build_tournament(1)

    with pytest.raises(NotEnoughPlayersException):
        manager.generate_round(tournament.id)

    assert manager.store.list_rounds(tournament.id) == []
    assert manager.get_tournament(tournament.id).status == TournamentStatus.DRAFT


def test_first_round_cannot_be_generated_twice(manager, build_tournament):
    tournament, _ = build_tournament(4)
    manager.generate_round(tournament.id)

    with pytest.raises(TournamentStateException):
        manager.round_manager.generate_first_round(tournament.id)


def test_next_round_requires_completed_round(manager, build_tournament):
    tournament, _ = build_tournament(4)

    with pytest.raises(RoundIncompleteException):
        manager.round_manager.generate_next_round(tournament.id)

    manager.generate_round(tournament.id)
    with pytest.raises(RoundIncompleteException):
        manager.generate_round(tournament.id)
    assert len(manager.store.list_rounds(tournament.id)) == 1


def test_round_limit_and_completion(manager, build_tournament, play_round):
    tournament, players = build_tournament(4)
    strength = _strength(players)
    assert manager.number_of_rounds(tournament.id) == 2

    for _ in range(2):
        round_ = manager.generate_round(tournament.id)
        play_round(round_.id, strength)

    assert manager.get_tournament(tournament.id).status == TournamentStatus.COMPLETED
    with pytest.raises(RoundLimitReachedException):
        manager.generate_round(tournament.id)


def test_fixed_round_count_overrides_roster_size(manager, build_tournament):
    tournament, _ = build_tournament(4, number_of_rounds=5)
    assert manager.number_of_rounds(tournament.id) == 5


def test_second_round_pairs_winners_together(manager, build_tournament, play_round):
    tournament, players = build_tournament(4)
    strength = _strength(players)

    first = manager.generate_round(tournament.id)
    play_round(first.id, strength)
    winners = {max(m.player_ids, key=strength.get) for m in manager.round_matches(first.id)}

    second = manager.generate_round(tournament.id)
    assert second.round_number == 2
    matches = manager.round_matches(second.id)
    assert set(matches[0].player_ids) == winners
    assert manager.current_round(tournament.id).id == second.id


def test_round_robin_byes_rotate(manager, build_tournament, play_round):
    tournament, players = build_tournament(
        5, number_of_rounds=3, config={"bye_selection": "round_robin"}
    )
    strength = _strength(players)

    for _ in range(2):
        round_ = manager.generate_round(tournament.id)
        play_round(round_.id, strength)

    records = manager.store.list_byes(tournament.id)
    assert [r.round_number for r in records] == [1, 2]
    assert records[0].player_id != records[1].player_id


def test_round_of_only_byes_completes_at_once(manager, build_tournament, play_round):
    tournament, players = build_tournament(2, number_of_rounds=2)
    strength = _strength(players)

    first = manager.generate_round(tournament.id)
    play_round(first.id, strength)
    assert manager.get_tournament(tournament.id).status == TournamentStatus.IN_PROGRESS

    # One player on 1 point and one on 0: two single-player bands
    second = manager.generate_round(tournament.id)
    matches = manager.round_matches(second.id)
    assert all(m.is_bye for m in matches)
    assert len(matches) == 2
    assert manager.store.get_round(second.id).status == RoundStatus.COMPLETED
    assert manager.get_tournament(tournament.id).status == TournamentStatus.COMPLETED

    totals = {row.player_id: row.total_points for row in manager.standings(tournament.id)}
    assert totals == {players[1]: 2, players[0]: 1}


def test_unknown_tournament(manager):
    with pytest.raises(EntityNotFoundException):
        manager.generate_round("missing")
