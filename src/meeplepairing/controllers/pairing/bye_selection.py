"""Bye player selection policies."""

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
from typing import AbstractSet, Sequence

from meeplepairing.exceptions import PairingException
from meeplepairing.models import ByeSelection
from meeplepairing.type_hints import PlayerId
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


def select_bye_player(
    candidates: Sequence[PlayerId],
    method: ByeSelection,
    players_with_bye: AbstractSet[PlayerId],
    rng: random.Random,
) -> PlayerId:
    """Pick the player who sits out.

    Args:
        candidates: Eligible players in standings order, best first
        method: Selection policy
        players_with_bye: Players who already had a bye in this tournament
        rng: Random source for the ``random`` policy

    Returns:
        The chosen player id
    """
    if not candidates:
        raise PairingException("No candidates for a bye")

    method = ByeSelection(method)
    if method is ByeSelection.RANDOM:
        return rng.choice(list(candidates))

    if method is ByeSelection.ROUND_ROBIN:
        for player_id in reversed(candidates):
            if player_id not in players_with_bye:
                return player_id
        logger.warning(
            "Every bye candidate already had a bye, giving another one to %s",
            candidates[-1],
        )

    return candidates[-1]
