import random

import pytest

from meeplepairing.controllers import ResultEntry, TournamentManager
from meeplepairing.storage import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def manager(store, rng):
    return TournamentManager(store, rng)


@pytest.fixture
def build_tournament(store, manager):
    """Create a tournament with ``num_players`` registered players.

    Returns the tournament and the player ids in registration order.
    """

    def _build(num_players, players_per_match=2, number_of_rounds=None, config=None):
        tournament = manager.create_tournament(
            "Test Cup",
            players_per_match=players_per_match,
            number_of_rounds=number_of_rounds,
            config=config,
        )
        player_ids = []
        for index in range(num_players):
            player = store.create_player(f"Player {index + 1}")
            manager.register_player(tournament.id, player.id)
            player_ids.append(player.id)
        return tournament, player_ids

    return _build


@pytest.fixture
def play_round(manager):
    """Submit results for every pending match of a round.

    ``strength`` maps player id to raw points, so the same player always
    scores the same.
    """

    def _play(round_id, strength):
        for match in manager.round_matches(round_id):
            if match.is_completed:
                continue
            entries = [ResultEntry(pid, strength[pid]) for pid in match.player_ids]
            manager.submit_match_results(match.id, entries)

    return _play
