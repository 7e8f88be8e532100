"""Tiebreak calculation for tournaments.

Each criterion is a pure function of a :class:`MatchHistory` snapshot and a
player id. The calculator reads a fresh snapshot from the store on every
call, so opponent totals always include every round played so far.
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

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from meeplepairing.controllers.tournament.match_history import MatchHistory
from meeplepairing.models import TiebreakCriterionId
from meeplepairing.models.tournament import Round
from meeplepairing.storage import Store
from meeplepairing.type_hints import PlayerId, TiebreakValues
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


def opponent_point_values(history: MatchHistory, player_id: PlayerId) -> List[float]:
    """Current total of every opponent faced, one entry per opponent per match."""
    return [
        history.total_points(opponent.player_id)
        for played in history.matches_of(player_id)
        for opponent in played.opponents_of(player_id)
    ]


def wins(history: MatchHistory, player_id: PlayerId) -> float:
    return float(history.wins(player_id))


def opponent_points_drop_worst(history: MatchHistory, player_id: PlayerId) -> float:
    """Opponent points with the single lowest value dropped."""
    values = sorted(opponent_point_values(history, player_id))
    if len(values) >= 2:
        values = values[1:]
    return float(sum(values))


def opponent_points_drop_best_worst(history: MatchHistory, player_id: PlayerId) -> float:
    """Opponent points with the lowest and the highest value dropped.

    Both ends come off the same sorted list, so two values leave nothing.
    """
    values = sorted(opponent_point_values(history, player_id))
    if len(values) >= 2:
        values = values[1:-1]
    return float(sum(values))


def head_to_head_placeholder(history: MatchHistory, player_id: PlayerId) -> float:
    # Pairwise only; see TiebreakCalculator.head_to_head
    return 0.0


def point_difference(history: MatchHistory, player_id: PlayerId) -> float:
    """Own raw points minus all opponents' raw points, summed over matches."""
    total = 0.0
    for played in history.matches_of(player_id):
        own = played.result_for(player_id).points
        total += own - sum(o.points for o in played.opponents_of(player_id))
    return total


CRITERIA: Dict[TiebreakCriterionId, Callable[[MatchHistory, PlayerId], float]] = {
    TiebreakCriterionId.WINS: wins,
    TiebreakCriterionId.OPPONENT_POINTS_DROP_WORST: opponent_points_drop_worst,
    TiebreakCriterionId.OPPONENT_POINTS_DROP_BEST_WORST: opponent_points_drop_best_worst,
    TiebreakCriterionId.HEAD_TO_HEAD: head_to_head_placeholder,
    TiebreakCriterionId.POINT_DIFFERENCE: point_difference,
}


class TiebreakCalculator:
    """Calculates tiebreak values for tournament standings.

    Supported criteria:
    - Wins: matches finished in first place, byes included
    - Opponent points, drop worst: sum of opponents' current totals
      without the lowest one
    - Opponent points, drop best and worst: as above without the lowest
      and the highest
    - Head-to-head: pairwise result between two players
    - Point difference: raw points scored minus raw points conceded
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def history(
        self, tournament_id: str, rounds: Optional[Sequence[Round]] = None
    ) -> MatchHistory:
        return MatchHistory.load(self.store, tournament_id, rounds)

    def evaluate(
        self,
        tournament_id: str,
        player_id: PlayerId,
        criterion_id: TiebreakCriterionId,
        rounds: Optional[Sequence[Round]] = None,
        other_player_id: Optional[PlayerId] = None,
    ) -> float:
        """Compute one criterion for one player.

        Args:
            tournament_id: Tournament to read
            player_id: Player to evaluate
            criterion_id: Criterion to compute
            rounds: Rounds to scan, defaults to every round
            other_player_id: Opponent for the head-to-head criterion

        Returns:
            The criterion value, 0 for a player without matches
        """
        history = self.history(tournament_id, rounds)
        criterion_id = TiebreakCriterionId(criterion_id)
        if criterion_id is TiebreakCriterionId.HEAD_TO_HEAD and other_player_id:
            return float(self.head_to_head(history, player_id, other_player_id))
        return CRITERIA[criterion_id](history, player_id)

    def calculate_player_tiebreaks(
        self,
        history: MatchHistory,
        player_id: PlayerId,
        criteria: Iterable[TiebreakCriterionId],
    ) -> TiebreakValues:
        """Compute every requested criterion for one player from a snapshot."""
        values: TiebreakValues = {}
        for criterion_id in criteria:
            criterion_id = TiebreakCriterionId(criterion_id)
            values[criterion_id.value] = CRITERIA[criterion_id](history, player_id)
        return values

    @staticmethod
    def head_to_head(history: MatchHistory, player_id: PlayerId, other_id: PlayerId) -> int:
        """1 if ``player_id`` came out ahead of ``other_id``, -1 if behind, else 0."""
        return history.head_to_head(player_id, other_id)
