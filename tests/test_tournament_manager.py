from datetime import date

import pytest

from meeplepairing.exceptions import (
    EntityNotFoundException,
    InvalidConfigurationException,
    TournamentStateException,
)
from meeplepairing.models import ByeSelection, TiebreakCriterionId, TournamentStatus


def test_create_tournament_stores_default_config(manager):
    tournament = manager.create_tournament("Cup", players_per_match=3)

    assert tournament.status == TournamentStatus.DRAFT
    assert tournament.played_on == date.today()
    config = manager.get_config(tournament.id)
    assert config.scoring_system == {1: 3, 2: 1, 3: 0}
    assert config.avoid_rematches is True
    assert config.bye_selection == ByeSelection.WORST
    assert [c.id for c in config.enabled_criteria()] == [
        TiebreakCriterionId.WINS,
        TiebreakCriterionId.OPPONENT_POINTS_DROP_WORST,
        TiebreakCriterionId.OPPONENT_POINTS_DROP_BEST_WORST,
        TiebreakCriterionId.HEAD_TO_HEAD,
        TiebreakCriterionId.POINT_DIFFERENCE,
    ]


def test_create_tournament_with_overrides(manager):
    tournament = manager.create_tournament(
        "Cup",
        players_per_match=4,
        number_of_rounds=3,
        played_on=date(2025, 9, 1),
        config={"avoid_rematches": False, "bye_selection": "random"},
    )

    assert tournament.number_of_rounds == 3
    assert tournament.played_on == date(2025, 9, 1)
    config = manager.get_config(tournament.id)
    assert config.avoid_rematches is False
    assert config.bye_selection == ByeSelection.RANDOM
    assert config.scoring_system == {1: 6, 2: 4, 3: 2, 4: 0}


def test_invalid_tournament_settings(manager):
    with pytest.raises(InvalidConfigurationException):
        manager.create_tournament("Crowd", players_per_match=5)
    with pytest.raises(InvalidConfigurationException):
        manager.create_tournament("Cup", config={"bye_selection": "coin_toss"})
    assert manager.store.list_tournaments() == []


def test_update_config(manager):
    tournament = manager.create_tournament("Cup")
    config = manager.get_config(tournament.id)
    config.tiebreak_criteria[0].enabled = False
    manager.update_config(config)

    enabled = manager.get_config(tournament.id).enabled_criteria()
    assert TiebreakCriterionId.WINS not in [c.id for c in enabled]


def test_missing_config_falls_back_to_defaults(manager, store):
    tournament = store.create_tournament("Bare", 4)
    config = manager.get_config(tournament.id)
    assert config.scoring_system == {1: 6, 2: 4, 3: 2, 4: 0}


def test_registration(manager, store):
    tournament = manager.create_tournament("Cup")
    player = store.create_player("Alice")

    assert manager.register_player(tournament.id, player.id) is True
    assert manager.register_player(tournament.id, player.id) is False
    assert manager.unregister_player(tournament.id, player.id) is True

    with pytest.raises(EntityNotFoundException):
        manager.register_player(tournament.id, "nobody")
    with pytest.raises(EntityNotFoundException):
        manager.register_player("missing", player.id)


def test_registration_only_in_draft(manager, build_tournament):
    tournament, players = build_tournament(4)
    manager.generate_round(tournament.id)
    late = manager.store.create_player("Late")

    with pytest.raises(TournamentStateException):
        manager.register_player(tournament.id, late.id)
    with pytest.raises(TournamentStateException):
        manager.unregister_player(tournament.id, players[0])


def test_number_of_rounds_follows_roster(manager, build_tournament):
    tournament, _ = build_tournament(9)
    assert manager.number_of_rounds(tournament.id) == 4


def test_current_round(manager, build_tournament):
    tournament, _ = build_tournament(4)
    assert manager.current_round(tournament.id) is None
    round_ = manager.generate_round(tournament.id)
    assert manager.current_round(tournament.id).id == round_.id


def test_full_swiss_event(manager, build_tournament, play_round):
    tournament, players = build_tournament(8)
    strength = {pid: 5 * (index + 1) for index, pid in enumerate(players)}

    for number in range(1, 4):
        round_ = manager.generate_round(tournament.id)
        assert round_.round_number == number
        play_round(round_.id, strength)

    assert manager.get_tournament(tournament.id).status == TournamentStatus.COMPLETED
    standings = manager.standings(tournament.id)
    assert [row.rank for row in standings] == list(range(1, 9))
    # The strongest player wins every match
    assert standings[0].player_id == players[-1]
    assert standings[0].total_points == 3
    assert standings[0].wins == 3
    points = [row.total_points for row in standings]
    assert points == sorted(points, reverse=True)


def test_unknown_tournament(manager):
    with pytest.raises(EntityNotFoundException):
        manager.get_tournament("missing")
    with pytest.raises(EntityNotFoundException):
        manager.standings("missing")
