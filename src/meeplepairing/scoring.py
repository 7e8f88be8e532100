"""Scoring tables and round-count helpers."""

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

from typing import Dict

from meeplepairing.constants import (
    DEFAULT_SCORING_SYSTEMS,
    MAX_ROUNDS,
    ROUND_THRESHOLDS,
    SCORING_2_PLAYERS,
    UNMAPPED_POSITION_POINTS,
)
from meeplepairing.type_hints import ScoringSystem


def get_default_scoring_system(players_per_match: int) -> ScoringSystem:
    """Return the default position -> points table for a match size.

    Unsupported sizes fall back to the two-player table.
    """
    return dict(DEFAULT_SCORING_SYSTEMS.get(players_per_match, SCORING_2_PLAYERS))


def get_tournament_points(position: int, scoring_system: Dict[int, float]) -> float:
    """Look up the tournament points awarded for a finishing position."""
    return scoring_system.get(position, UNMAPPED_POSITION_POINTS)


def calculate_number_of_rounds(num_players: int) -> int:
    """Smallest power-of-two round count covering ``num_players``.

    Examples:
        >>> calculate_number_of_rounds(8)
        3
        >>> calculate_number_of_rounds(65)
        7
    """
    for max_players, rounds in ROUND_THRESHOLDS:
        if num_players <= max_players:
            return rounds
    return MAX_ROUNDS
