"""Cross-tournament player statistics.

Head-to-head records, opponent summaries and career statistics computed
from every tournament in the store.
"""

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

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from meeplepairing.constants import RECENT_TOURNAMENTS_LIMIT
from meeplepairing.controllers.tournament.match_history import MatchHistory, PlayedMatch
from meeplepairing.controllers.tournament.standings import StandingsCalculator
from meeplepairing.models import Player, TournamentStatus
from meeplepairing.models.tournament import Tournament
from meeplepairing.storage import Store
from meeplepairing.type_hints import PlayerId
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class HeadToHeadMatch:
    """One match two players shared."""

    tournament: str
    round_number: int
    player1_position: int
    player2_position: int
    player1_points: float
    player2_points: float


@dataclass
class HeadToHeadRecord:
    """Every encounter between two players across all tournaments.

    Attributes
    ----------
    player1, player2 : Player
        The compared players, in the order they were requested.
    matches : list of HeadToHeadMatch
        Shared matches, oldest tournament first.
    player1_wins, player2_wins, ties : int
        Encounters decided by finishing position.
    player1_total_points, player2_total_points : float
        Raw points scored in the shared matches.
    """

    player1: Player
    player2: Player
    matches: List[HeadToHeadMatch] = field(default_factory=list)
    player1_wins: int = 0
    player2_wins: int = 0
    ties: int = 0
    player1_total_points: float = 0.0
    player2_total_points: float = 0.0


@dataclass
class OpponentRecord:
    player: Player
    matches: int = 0
    wins: int = 0
    losses: int = 0


@dataclass
class TournamentPlacement:
    tournament: Tournament
    rank: int
    points: float


@dataclass
class PlayerStatistics:
    """Career summary over completed tournaments.

    Attributes
    ----------
    player : Player
        The player described.
    tournaments_played : int
        Completed tournaments the player was registered in.
    tournament_wins : int
        Tournaments finished at rank 1.
    total_matches : int
        Matches played in those tournaments, byes included.
    average_rank, best_rank, worst_rank : float, int, int
        Final rank summary, 0 when no tournament was completed.
    recent : list of TournamentPlacement
        Most recent placements, newest first.
    """

    player: Player
    tournaments_played: int = 0
    tournament_wins: int = 0
    total_matches: int = 0
    average_rank: float = 0.0
    best_rank: int = 0
    worst_rank: int = 0
    recent: List[TournamentPlacement] = field(default_factory=list)


class PlayerStatsService:
    """Computes statistics that span several tournaments."""

    def __init__(
        self, store: Store, standings_calculator: Optional[StandingsCalculator] = None
    ) -> None:
        self.store = store
        self.standings_calculator = standings_calculator or StandingsCalculator(store)

    def _all_matches(self) -> Iterator[Tuple[Tournament, PlayedMatch]]:
        for tournament in self.store.list_tournaments():
            for played in MatchHistory.load(self.store, tournament.id).played:
                yield tournament, played

    def head_to_head(
        self, player1_id: PlayerId, player2_id: PlayerId
    ) -> Optional[HeadToHeadRecord]:
        """Compare two players over every match they shared.

        Returns:
            The record, or None if either player does not exist
        """
        player1 = self.store.get_player(player1_id)
        player2 = self.store.get_player(player2_id)
        if player1 is None or player2 is None:
            return None

        record = HeadToHeadRecord(player1=player1, player2=player2)
        for tournament, played in self._all_matches():
            first = played.result_for(player1_id)
            second = played.result_for(player2_id)
            if first is None or second is None:
                continue

            record.matches.append(
                HeadToHeadMatch(
                    tournament=tournament.name,
                    round_number=played.round_number,
                    player1_position=first.position,
                    player2_position=second.position,
                    player1_points=first.points,
                    player2_points=second.points,
                )
            )
            if first.position < second.position:
                record.player1_wins += 1
            elif second.position < first.position:
                record.player2_wins += 1
            else:
                record.ties += 1
            record.player1_total_points += first.points
            record.player2_total_points += second.points
        return record

    def player_opponents(self, player_id: PlayerId) -> List[OpponentRecord]:
        """Everyone the player has faced, most frequent opponent first."""
        records: Dict[PlayerId, OpponentRecord] = {}
        for _, played in self._all_matches():
            own = played.result_for(player_id)
            if own is None:
                continue
            for opponent in played.opponents_of(player_id):
                if opponent.player_id not in records:
                    player = self.store.get_player(opponent.player_id)
                    if player is None:
                        continue
                    records[opponent.player_id] = OpponentRecord(player=player)
                record = records[opponent.player_id]
                record.matches += 1
                if own.position < opponent.position:
                    record.wins += 1
                elif opponent.position < own.position:
                    record.losses += 1
        return sorted(records.values(), key=lambda r: r.matches, reverse=True)

    def player_statistics(self, player_id: PlayerId) -> Optional[PlayerStatistics]:
        """Summarize the player's completed tournaments.

        Returns:
            The statistics, or None if the player does not exist
        """
        player = self.store.get_player(player_id)
        if player is None:
            return None

        stats = PlayerStatistics(player=player)
        placements: List[TournamentPlacement] = []
        for tournament in self.store.list_tournaments():
            if tournament.status != TournamentStatus.COMPLETED:
                continue
            registered = {p.id for p in self.store.list_tournament_players(tournament.id)}
            if player_id not in registered:
                continue

            standings = self.standings_calculator.standings(tournament.id)
            row = next((s for s in standings if s.player_id == player_id), None)
            if row is None:
                continue
            placements.append(TournamentPlacement(tournament, row.rank, row.total_points))
            stats.total_matches += len(
                MatchHistory.load(self.store, tournament.id).matches_of(player_id)
            )

        if placements:
            ranks = [p.rank for p in placements]
            stats.tournaments_played = len(placements)
            stats.tournament_wins = ranks.count(1)
            stats.average_rank = sum(ranks) / len(ranks)
            stats.best_rank = min(ranks)
            stats.worst_rank = max(ranks)
            stats.recent = list(reversed(placements[-RECENT_TOURNAMENTS_LIMIT:]))
        logger.debug(f"Computed statistics for {player.name} over {len(placements)} tournaments")
        return stats
