"""Tournament facade tying the store and the engine components together."""

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

import random
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from meeplepairing.controllers.tournament.position_resolver import ResultEntry
from meeplepairing.controllers.tournament.result_recorder import ResultRecorder
from meeplepairing.controllers.tournament.round_manager import RoundManager
from meeplepairing.controllers.tournament.settings import load_config, require_tournament
from meeplepairing.controllers.tournament.standings import StandingsCalculator
from meeplepairing.controllers.tournament.tiebreak_calculator import TiebreakCalculator
from meeplepairing.exceptions import EntityNotFoundException, TournamentStateException
from meeplepairing.models import TournamentStatus
from meeplepairing.models.tournament import (
    Match,
    MatchResult,
    PlayerStanding,
    Round,
    Tournament,
    TournamentConfig,
)
from meeplepairing.storage import Store
from meeplepairing.type_hints import PlayerId
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentManager:
    """Entry point for running tournaments against a store.

    The manager holds no tournament state of its own: every call reads
    what it needs from the store.

    Args:
        store: Source of truth for players, tournaments and results
        rng: Random source for pairing. Pass a seeded ``random.Random``
            for reproducible rounds.
    """

    def __init__(self, store: Store, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.tiebreak_calculator = TiebreakCalculator(store)
        self.standings_calculator = StandingsCalculator(store, self.tiebreak_calculator)
        self.round_manager = RoundManager(store, rng, self.standings_calculator)
        self.result_recorder = ResultRecorder(store)

    # ========== Setup ==========

    def create_tournament(
        self,
        name: str,
        players_per_match: int = 2,
        number_of_rounds: Optional[int] = None,
        played_on: Optional[date] = None,
        config: Optional[Dict[str, Any]] = None,
        circuit_id: Optional[str] = None,
    ) -> Tournament:
        """Create a draft tournament and store its configuration.

        Args:
            name: Tournament name
            players_per_match: Match size, 2 to 4
            number_of_rounds: Fixed round count, derived from the roster if None
            played_on: Day of play, today if None
            config: Configuration overrides in :meth:`TournamentConfig.to_dict`
                form; missing keys take the defaults for the match size
            circuit_id: Circuit the tournament counts towards, a standalone
                qualifier if None

        Returns:
            The new tournament
        """
        if circuit_id is not None and self.store.get_circuit(circuit_id) is None:
            raise EntityNotFoundException(f"Circuit {circuit_id} not found")
        with self.store.transaction():
            tournament = self.store.create_tournament(
                name, players_per_match, number_of_rounds, played_on, circuit_id
            )
            data = dict(config or {})
            data["tournament_id"] = tournament.id
            self.store.save_config(TournamentConfig.from_dict(data, players_per_match))
        logger.info(f"Created tournament {name} ({players_per_match} players per match)")
        return tournament

    def get_tournament(self, tournament_id: str) -> Tournament:
        return require_tournament(self.store, tournament_id)

    def get_config(self, tournament_id: str) -> TournamentConfig:
        return load_config(self.store, self.get_tournament(tournament_id))

    def update_config(self, config: TournamentConfig) -> None:
        """Replace the configuration of a tournament."""
        self.get_tournament(config.tournament_id)
        self.store.save_config(config)
        logger.info(f"Updated configuration of tournament {config.tournament_id}")

    def register_player(self, tournament_id: str, player_id: PlayerId) -> bool:
        """Add a player to a draft tournament.

        Returns:
            False if the player was already registered
        """
        with self.store.transaction():
            self._require_draft(tournament_id)
            if self.store.get_player(player_id) is None:
                raise EntityNotFoundException(f"Player {player_id} not found")
            return self.store.register_player(tournament_id, player_id)

    def unregister_player(self, tournament_id: str, player_id: PlayerId) -> bool:
        with self.store.transaction():
            self._require_draft(tournament_id)
            return self.store.unregister_player(tournament_id, player_id)

    def _require_draft(self, tournament_id: str) -> Tournament:
        tournament = self.get_tournament(tournament_id)
        if tournament.status != TournamentStatus.DRAFT:
            raise TournamentStateException(
                f"Registration is closed for tournament {tournament.name}"
            )
        return tournament

    # ========== Play ==========

    def number_of_rounds(self, tournament_id: str) -> int:
        return self.round_manager.round_limit(self.get_tournament(tournament_id))

    def generate_round(self, tournament_id: str) -> Round:
        """Pair the first round, or the next one once the last is completed."""
        return self.round_manager.generate_round(tournament_id)

    def current_round(self, tournament_id: str) -> Optional[Round]:
        return self.round_manager.current_round(tournament_id)

    def round_matches(self, round_id: str) -> List[Match]:
        return self.store.list_matches(round_id)

    def submit_match_results(
        self,
        match_id: str,
        entries: Sequence[ResultEntry],
        first_player_id: Optional[PlayerId] = None,
    ) -> List[MatchResult]:
        return self.result_recorder.submit_match_results(match_id, entries, first_player_id)

    def standings(self, tournament_id: str) -> List[PlayerStanding]:
        """Current standings using the tournament's configured tiebreak chain."""
        config = self.get_config(tournament_id)
        return self.standings_calculator.standings(tournament_id, config.enabled_criteria())
