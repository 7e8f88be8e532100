"""Configuration lookup with documented fallbacks."""

# Meeple Pairing
# Copyright (C) 2025  Meeple Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from meeplepairing.exceptions import EntityNotFoundException
from meeplepairing.models.tournament import Tournament, TournamentConfig
from meeplepairing.scoring import get_default_scoring_system
from meeplepairing.storage import Store
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


def require_tournament(store: Store, tournament_id: str) -> Tournament:
    tournament = store.get_tournament(tournament_id)
    if tournament is None:
        raise EntityNotFoundException(f"Tournament {tournament_id} not found")
    return tournament


def load_config(store: Store, tournament: Tournament) -> TournamentConfig:
    """Stored configuration of ``tournament``, or its defaults.

    A missing configuration, or one with an empty scoring system, falls back
    to the defaults for the tournament's match size instead of failing.
    """
    config = store.get_config(tournament.id)
    if config is None:
        logger.debug("No configuration stored for %s, using defaults", tournament.id)
        return TournamentConfig.default_for(tournament.id, tournament.players_per_match)
    if not config.scoring_system:
        config.scoring_system = get_default_scoring_system(tournament.players_per_match)
    return config
