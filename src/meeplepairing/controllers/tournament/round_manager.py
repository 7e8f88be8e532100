"""Round generation and persistence."""

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
from typing import Optional

from meeplepairing.constants import BYE_RAW_POINTS
from meeplepairing.controllers.pairing import SwissPairingEngine
from meeplepairing.controllers.tournament.match_history import MatchHistory
from meeplepairing.controllers.tournament.settings import load_config, require_tournament
from meeplepairing.controllers.tournament.standings import StandingsCalculator
from meeplepairing.exceptions import (
    RoundIncompleteException,
    RoundLimitReachedException,
    TournamentStateException,
)
from meeplepairing.models import MatchStatus, RoundStatus, TournamentStatus
from meeplepairing.models.pairing import RoundPlan
from meeplepairing.models.tournament import Round, Tournament, TournamentConfig
from meeplepairing.scoring import calculate_number_of_rounds, get_tournament_points
from meeplepairing.storage import Store
from meeplepairing.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class RoundManager:
    """Generates rounds and writes them to the store.

    This class is responsible for:
    - Checking that a new round may be generated
    - Feeding standings and history to the pairing engine
    - Persisting the resulting round, its matches and its byes in one batch
    """

    def __init__(
        self,
        store: Store,
        rng: Optional[random.Random] = None,
        standings_calculator: Optional[StandingsCalculator] = None,
    ) -> None:
        """Initialize the round manager.

        Args:
            store: Source of truth for every read and write
            rng: Random source handed to the pairing engine
            standings_calculator: Ranking used to seed the next round
        """
        self.store = store
        self.engine = SwissPairingEngine(rng)
        self.standings_calculator = standings_calculator or StandingsCalculator(store)

    def round_limit(self, tournament: Tournament) -> int:
        """Fixed round count, or the count derived from the registered players."""
        if tournament.number_of_rounds:
            return tournament.number_of_rounds
        return calculate_number_of_rounds(
            len(self.store.list_tournament_players(tournament.id))
        )

    def generate_first_round(self, tournament_id: str) -> Round:
        """Pair round 1 at random and start the tournament.

        Raises:
            EntityNotFoundException: If the tournament does not exist
            TournamentStateException: If rounds already exist
            NotEnoughPlayersException: If fewer than 2 players are registered
        """
        with self.store.transaction():
            tournament = require_tournament(self.store, tournament_id)
            if self.store.list_rounds(tournament_id):
                raise TournamentStateException(
                    f"Tournament {tournament.name} already has rounds"
                )
            config = load_config(self.store, tournament)
            player_ids = [p.id for p in self.store.list_tournament_players(tournament_id)]

            plan = self.engine.pair_first_round(player_ids, tournament.players_per_match)
            logger.info(
                f"Creating round 1 of {tournament.name} with {len(player_ids)} players"
            )
            round_ = self._persist(tournament, config, plan)

            tournament.status = TournamentStatus.IN_PROGRESS
            self.store.update_tournament(tournament)
            return round_

    def generate_next_round(self, tournament_id: str) -> Round:
        """Pair the next round from the current standings.

        Raises:
            EntityNotFoundException: If the tournament does not exist
            RoundIncompleteException: If there is no round yet or the last one
                is not completed
            RoundLimitReachedException: If every allowed round exists
        """
        with self.store.transaction():
            tournament = require_tournament(self.store, tournament_id)
            rounds = self.store.list_rounds(tournament_id)
            if not rounds or not rounds[-1].is_completed:
                raise RoundIncompleteException(
                    "The previous round must be completed before pairing the next one"
                )
            limit = self.round_limit(tournament)
            if len(rounds) >= limit:
                raise RoundLimitReachedException(
                    f"Maximum number of rounds reached ({limit})"
                )

            config = load_config(self.store, tournament)
            standings = self.standings_calculator.standings(
                tournament_id, config.enabled_criteria()
            )
            history = MatchHistory.load(self.store, tournament_id, rounds)
            round_number = len(rounds) + 1

            plan = self.engine.pair_next_round(
                standings,
                tournament.players_per_match,
                round_number,
                previous_opponents=history.previous_opponents(),
                avoid_rematches=config.avoid_rematches,
                bye_selection=config.bye_selection,
                players_with_bye=history.players_with_bye(),
            )
            logger.info(
                f"Creating round {round_number} of {tournament.name} "
                f"with {len(standings)} players"
            )
            return self._persist(tournament, config, plan)

    def generate_round(self, tournament_id: str) -> Round:
        """Generate the first round if none exists, otherwise the next one."""
        if self.store.list_rounds(tournament_id):
            return self.generate_next_round(tournament_id)
        return self.generate_first_round(tournament_id)

    def current_round(self, tournament_id: str) -> Optional[Round]:
        rounds = self.store.list_rounds(tournament_id)
        return rounds[-1] if rounds else None

    def _persist(
        self, tournament: Tournament, config: TournamentConfig, plan: RoundPlan
    ) -> Round:
        """Write a round plan. Must run inside a transaction."""
        round_ = self.store.create_round(
            tournament.id, plan.round_number, RoundStatus.PENDING
        )
        bye_points = get_tournament_points(1, config.scoring_system)

        for match_number, planned in enumerate(plan.matches, start=1):
            if not planned.is_bye:
                self.store.create_match(round_.id, match_number, planned.player_ids)
                continue

            player_id = planned.player_ids[0]
            match = self.store.create_match(
                round_.id, match_number, planned.player_ids, MatchStatus.COMPLETED
            )
            match.completed_at = utc_now()
            self.store.update_match(match)
            self.store.replace_match_results(
                match.id, [(player_id, 1, BYE_RAW_POINTS, bye_points)]
            )
            self.store.add_bye(tournament.id, player_id, plan.round_number)

        logger.debug(
            f"Round {plan.round_number}: {len(plan.regular_matches)} matches, "
            f"{len(plan.byes)} byes"
        )

        # A round of byes only has nothing left to play
        if not plan.regular_matches:
            round_.status = RoundStatus.COMPLETED
            round_.started_at = round_.completed_at = utc_now()
            self.store.update_round(round_)
            if plan.round_number >= self.round_limit(tournament):
                tournament.status = TournamentStatus.COMPLETED
                self.store.update_tournament(tournament)
        return round_
