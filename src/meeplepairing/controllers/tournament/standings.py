"""Standings calculation.

Players are ranked by total tournament points, then by each enabled
tiebreak criterion in its configured order, all descending. Head-to-head
is compared pairwise when the sort reaches it and only two players are
still level; every other criterion is a per-player value computed up front.
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

import functools
from collections import Counter
from typing import List, Optional, Sequence, Tuple, Union

from meeplepairing.controllers.tournament.match_history import MatchHistory
from meeplepairing.controllers.tournament.settings import load_config
from meeplepairing.controllers.tournament.tiebreak_calculator import TiebreakCalculator
from meeplepairing.models import TiebreakCriterionId
from meeplepairing.models.tournament import PlayerStanding, TiebreakCriterion
from meeplepairing.storage import Store
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)

CriterionLike = Union[TiebreakCriterion, TiebreakCriterionId, str]


def _criterion_ids(criteria: Sequence[CriterionLike]) -> List[TiebreakCriterionId]:
    ids = []
    for criterion in criteria:
        if isinstance(criterion, TiebreakCriterion):
            if criterion.enabled:
                ids.append(criterion.id)
        else:
            ids.append(TiebreakCriterionId(criterion))
    return ids


class StandingsCalculator:
    """Builds the ordered standings table of a tournament."""

    def __init__(
        self, store: Store, tiebreak_calculator: Optional[TiebreakCalculator] = None
    ) -> None:
        self.store = store
        self.tiebreak_calculator = tiebreak_calculator or TiebreakCalculator(store)

    def standings(
        self,
        tournament_id: str,
        criteria: Optional[Sequence[CriterionLike]] = None,
    ) -> List[PlayerStanding]:
        """Compute the current standings.

        Args:
            tournament_id: Tournament to rank
            criteria: Tiebreak chain in the order it applies. Defaults to
                the enabled criteria of the stored configuration.

        Returns:
            Standings sorted best first, with ``rank`` filled in. Empty for
            an unknown tournament or one without registered players.
        """
        with self.store.reading():
            players = self.store.list_tournament_players(tournament_id)
            if not players:
                return []

            if criteria is None:
                tournament = self.store.get_tournament(tournament_id)
                criteria = load_config(self.store, tournament).enabled_criteria()
            criterion_ids = _criterion_ids(criteria)

            history = self.tiebreak_calculator.history(tournament_id)
        rows = [
            PlayerStanding(
                player_id=player.id,
                player_name=player.name,
                total_points=history.total_points(player.id),
                wins=history.wins(player.id),
                tiebreak_values=self.tiebreak_calculator.calculate_player_tiebreaks(
                    history, player.id, criterion_ids
                ),
            )
            for player in players
        ]

        # sorted() is stable, so full ties keep registration order
        ordered = sorted(
            rows,
            key=functools.cmp_to_key(self._comparator(history, criterion_ids, rows)),
        )
        for rank, row in enumerate(ordered, start=1):
            row.rank = rank
        logger.debug("Computed standings for %s players in %s", len(ordered), tournament_id)
        return ordered

    @staticmethod
    def _comparator(
        history: MatchHistory,
        criterion_ids: List[TiebreakCriterionId],
        rows: Sequence[PlayerStanding],
    ):
        """Build the ``cmp_to_key`` comparison for ``rows``.

        Head-to-head only separates two players who are the only ones level
        on points and on every criterion before it. In a larger tied group a
        cycle of results (A beat B, B beat C, C beat A) has no consistent
        order, so the group falls through to the next criterion instead.
        """
        if TiebreakCriterionId.HEAD_TO_HEAD in criterion_ids:
            earlier = criterion_ids[: criterion_ids.index(TiebreakCriterionId.HEAD_TO_HEAD)]
        else:
            earlier = []

        def tie_key(row: PlayerStanding) -> Tuple[float, ...]:
            return (row.total_points,) + tuple(
                row.tiebreak_values.get(c.value, 0.0) for c in earlier
            )

        tied_group_sizes = Counter(tie_key(row) for row in rows)

        def compare(a: PlayerStanding, b: PlayerStanding) -> int:
            if a.total_points != b.total_points:
                return -1 if a.total_points > b.total_points else 1
            for criterion_id in criterion_ids:
                if criterion_id is TiebreakCriterionId.HEAD_TO_HEAD:
                    if tied_group_sizes[tie_key(a)] != 2:
                        continue
                    result = TiebreakCalculator.head_to_head(history, a.player_id, b.player_id)
                    if result:
                        return -result
                    continue
                value_a = a.tiebreak_values.get(criterion_id.value, 0.0)
                value_b = b.tiebreak_values.get(criterion_id.value, 0.0)
                if value_a != value_b:
                    return -1 if value_a > value_b else 1
            return 0

        return compare
