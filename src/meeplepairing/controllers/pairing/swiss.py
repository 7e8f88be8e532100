"""Swiss pairing engine.

Decides the groupings of a round without touching the store: the caller
hands in the standings and history and receives a :class:`RoundPlan`.

The next round is paired band by band. Players are grouped by the integer
part of their total points, best band first, and each band is sliced into
consecutive groups in standings order. A band that does not divide evenly
gives up one player to a bye; two-player groups that would be a rematch are
repaired by swapping in a later player of the same band when possible.
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

import math
import random
from typing import AbstractSet, Dict, List, Optional, Sequence, Set

from meeplepairing.constants import DEFAULT_AVOID_REMATCHES, DEFAULT_BYE_SELECTION
from meeplepairing.controllers.pairing.bye_selection import select_bye_player
from meeplepairing.exceptions import NotEnoughPlayersException
from meeplepairing.models import ByeSelection
from meeplepairing.models.pairing import RoundPlan
from meeplepairing.models.tournament import PlayerStanding
from meeplepairing.type_hints import OpponentMap, PlayerId
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


class SwissPairingEngine:
    """Computes first and subsequent round pairings.

    Args:
        rng: Random source for the first-round shuffle and random byes.
            Pass a seeded ``random.Random`` for reproducible pairings.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def pair_first_round(
        self, player_ids: Sequence[PlayerId], players_per_match: int
    ) -> RoundPlan:
        """Shuffle the roster and slice it into matches.

        A single player left over at the end receives a bye. Any other
        short trailing group is played as a smaller match.
        """
        if len(player_ids) < 2:
            raise NotEnoughPlayersException(
                f"At least 2 players are needed to pair a round, got {len(player_ids)}"
            )

        shuffled = list(player_ids)
        self.rng.shuffle(shuffled)

        plan = RoundPlan(round_number=1)
        for start in range(0, len(shuffled), players_per_match):
            group = shuffled[start : start + players_per_match]
            if len(group) == 1:
                logger.info("Player %s receives a bye in round 1", group[0])
                plan.add_bye(group[0])
            else:
                plan.add_match(group)
        return plan

    def pair_next_round(
        self,
        standings: Sequence[PlayerStanding],
        players_per_match: int,
        round_number: int,
        previous_opponents: Optional[OpponentMap] = None,
        avoid_rematches: bool = DEFAULT_AVOID_REMATCHES,
        bye_selection: ByeSelection = ByeSelection(DEFAULT_BYE_SELECTION),
        players_with_bye: AbstractSet[PlayerId] = frozenset(),
    ) -> RoundPlan:
        """Pair a round after the first from the current standings.

        Args:
            standings: Current standings, best first
            players_per_match: Match size
            round_number: Number of the round being paired
            previous_opponents: Everyone each player has already met
            avoid_rematches: Whether to repair two-player rematches
            bye_selection: Policy for choosing the bye player
            players_with_bye: Players who already had a bye in this tournament

        Returns:
            The round plan, band by band, byes after the band's matches
        """
        opponents = previous_opponents or {}
        had_bye: Set[PlayerId] = set(players_with_bye)
        plan = RoundPlan(round_number=round_number)

        for band in self.score_bands(standings):
            pool = [s.player_id for s in band]
            byes = self._take_byes(pool, players_per_match, bye_selection, had_bye)

            for start in range(0, len(pool), players_per_match):
                if avoid_rematches and len(pool[start : start + players_per_match]) == 2:
                    self._avoid_rematch(pool, start, opponents)
                plan.add_match(pool[start : start + players_per_match])

            for player_id in byes:
                logger.info("Player %s receives a bye in round %s", player_id, round_number)
                plan.add_bye(player_id)

        return plan

    @staticmethod
    def score_bands(standings: Sequence[PlayerStanding]) -> List[List[PlayerStanding]]:
        """Group standings by ``floor(total_points)``, highest band first.

        Players keep their standings order inside a band.
        """
        bands: Dict[int, List[PlayerStanding]] = {}
        for standing in standings:
            bands.setdefault(math.floor(standing.total_points), []).append(standing)
        return [bands[points] for points in sorted(bands, reverse=True)]

    def _take_byes(
        self,
        pool: List[PlayerId],
        players_per_match: int,
        bye_selection: ByeSelection,
        had_bye: Set[PlayerId],
    ) -> List[PlayerId]:
        """Remove bye players from ``pool`` so the rest slices cleanly.

        With a single player over, anyone in the band may sit out. With a
        larger remainder the bye comes from the trailing group. When that
        leaves a lone player, a second bye is chosen from the rest of the
        band under the same policy so every match keeps a full group.
        """
        remainder = len(pool) % players_per_match
        if not remainder:
            return []

        candidates = pool if remainder == 1 else pool[-remainder:]
        chosen = select_bye_player(candidates, bye_selection, had_bye, self.rng)
        pool.remove(chosen)
        had_bye.add(chosen)
        byes = [chosen]

        if remainder == 2:
            second = select_bye_player(pool, bye_selection, had_bye, self.rng)
            logger.warning("One player left over after the bye, giving a second bye to %s", second)
            pool.remove(second)
            had_bye.add(second)
            byes.append(second)
        return byes

    @staticmethod
    def _avoid_rematch(pool: List[PlayerId], start: int, opponents: OpponentMap) -> None:
        """Swap the second player of a rematch with a later player of the band."""
        first, second = pool[start], pool[start + 1]
        met = opponents.get(first, set())
        if second not in met:
            return

        for j in range(start + 2, len(pool)):
            if pool[j] not in met:
                logger.debug("Swapping %s for %s to avoid a rematch with %s", second, pool[j], first)
                pool[start + 1], pool[j] = pool[j], pool[start + 1]
                return

        logger.warning("No alternative opponent for %s, accepting rematch with %s", first, second)
