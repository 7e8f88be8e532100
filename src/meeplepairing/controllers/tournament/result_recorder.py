"""Match result entry."""

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

from typing import List, Optional, Sequence

from meeplepairing.controllers.tournament.position_resolver import (
    ResultEntry,
    resolve_positions,
)
from meeplepairing.controllers.tournament.settings import load_config
from meeplepairing.exceptions import (
    EntityNotFoundException,
    InvalidResultException,
    TournamentStateException,
)
from meeplepairing.models import MatchStatus, RoundStatus, TournamentStatus
from meeplepairing.models.tournament import Match, MatchResult, Round, Tournament
from meeplepairing.scoring import calculate_number_of_rounds, get_tournament_points
from meeplepairing.storage import Store
from meeplepairing.type_hints import PlayerId
from meeplepairing.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating a submission against the match roster
    - Resolving positions and tournament points
    - Replacing the match's results wholesale
    - Moving the round and the tournament forward when their last match ends
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def submit_match_results(
        self,
        match_id: str,
        entries: Sequence[ResultEntry],
        first_player_id: Optional[PlayerId] = None,
    ) -> List[MatchResult]:
        """Record the raw points of every player of a match.

        Submitting again for a completed match overwrites its results.

        Args:
            match_id: Match to record
            entries: One entry per player of the match
            first_player_id: Player who started the match

        Returns:
            The stored results, best position first

        Raises:
            EntityNotFoundException: If the match, its round or its
                tournament does not exist
            InvalidResultException: If the entries do not match the roster
            TournamentStateException: If the tournament is not in progress
        """
        with self.store.transaction():
            match = self.store.get_match(match_id)
            if match is None:
                raise EntityNotFoundException(f"Match {match_id} not found")
            round_ = self.store.get_round(match.round_id)
            if round_ is None:
                raise EntityNotFoundException(f"Round {match.round_id} not found")
            tournament = self.store.get_tournament(round_.tournament_id)
            if tournament is None:
                raise EntityNotFoundException(
                    f"Tournament {round_.tournament_id} not found"
                )
            if tournament.status != TournamentStatus.IN_PROGRESS:
                raise TournamentStateException(
                    f"Results can only be entered while the tournament is in progress "
                    f"(tournament {tournament.name} is {tournament.status.value})"
                )
            self._validate_entries(match, entries, first_player_id)

            scoring = load_config(self.store, tournament).scoring_system
            positioned = resolve_positions(entries, first_player_id)
            results = self.store.replace_match_results(
                match.id,
                [
                    (
                        p.player_id,
                        p.position,
                        p.points,
                        get_tournament_points(p.position, scoring),
                    )
                    for p in positioned
                ],
            )

            match.status = MatchStatus.COMPLETED
            match.first_player_id = first_player_id
            match.completed_at = utc_now()
            self.store.update_match(match)
            logger.info(
                f"Recorded results for match {match.match_number} of round "
                f"{round_.round_number} in {tournament.name}"
            )

            self._update_round_status(tournament, round_)
            return sorted(results, key=lambda r: r.position)

    def _validate_entries(
        self,
        match: Match,
        entries: Sequence[ResultEntry],
        first_player_id: Optional[PlayerId],
    ) -> None:
        if match.is_bye:
            raise InvalidResultException("Bye matches take no results")

        submitted = [e.player_id for e in entries]
        if len(set(submitted)) != len(submitted):
            raise InvalidResultException("A player appears more than once in the results")
        if set(submitted) != set(match.player_ids):
            raise InvalidResultException(
                f"Results must name exactly the players of the match: "
                f"{', '.join(match.player_ids)}"
            )
        if first_player_id is not None and first_player_id not in match.player_ids:
            raise InvalidResultException(
                f"Starting player {first_player_id} is not part of the match"
            )

    def _update_round_status(self, tournament: Tournament, round_: Round) -> None:
        matches = self.store.list_matches(round_.id)
        if round_.started_at is None:
            round_.started_at = utc_now()

        if all(m.is_completed for m in matches):
            round_.status = RoundStatus.COMPLETED
            round_.completed_at = utc_now()
            logger.info(f"Round {round_.round_number} of {tournament.name} completed")
        else:
            round_.status = RoundStatus.IN_PROGRESS
            round_.completed_at = None
        self.store.update_round(round_)

        if round_.is_completed and self._is_last_round(tournament, round_):
            tournament.status = TournamentStatus.COMPLETED
            self.store.update_tournament(tournament)
            logger.info(f"Tournament {tournament.name} completed")

    def _is_last_round(self, tournament: Tournament, round_: Round) -> bool:
        limit = tournament.number_of_rounds or calculate_number_of_rounds(
            len(self.store.list_tournament_players(tournament.id))
        )
        return round_.round_number >= limit
