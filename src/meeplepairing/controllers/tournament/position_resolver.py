"""Finishing positions for a single match.

Positions follow standard competition ranking: tied scores share a
position and the next distinct score takes the 1-based index of its first
occurrence (1, 1, 3, ...). The player who started the match loses ties:
they are ordered after the other tied players, and in a two-player tie
they are forced to second place.
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

from dataclasses import dataclass
from typing import List, Optional, Sequence

from meeplepairing.type_hints import PlayerId


@dataclass(frozen=True)
class ResultEntry:
    """Raw score entered for one player."""

    player_id: PlayerId
    points: float


@dataclass(frozen=True)
class PositionedResult:
    """A raw score with its resolved finishing position."""

    player_id: PlayerId
    position: int
    points: float


def resolve_positions(
    entries: Sequence[ResultEntry], first_player_id: Optional[PlayerId] = None
) -> List[PositionedResult]:
    """Turn raw points into finishing positions.

    Args:
        entries: One entry per player in the match
        first_player_id: Player who started the match, if recorded

    Returns:
        Positioned results, best first

    Note:
        In ties of three or more players the starter is only moved to the
        end of the tied group; they still share the group's position.
    """
    if not entries:
        return []

    ordered = sorted(
        entries,
        key=lambda e: (-e.points, first_player_id is not None and e.player_id == first_player_id),
    )

    starter_in_match = any(e.player_id == first_player_id for e in ordered)
    if (
        len(ordered) == 2
        and starter_in_match
        and ordered[0].points == ordered[1].points
    ):
        return [
            PositionedResult(
                player_id=e.player_id,
                position=2 if e.player_id == first_player_id else 1,
                points=e.points,
            )
            for e in ordered
        ]

    positioned = []
    position = 1
    for index, entry in enumerate(ordered):
        if index > 0 and ordered[index - 1].points != entry.points:
            position = index + 1
        positioned.append(
            PositionedResult(player_id=entry.player_id, position=position, points=entry.points)
        )
    return positioned
