"""PlayerStanding data class."""

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
from typing import Any, Dict, Optional

from meeplepairing.type_hints import TiebreakValues


@dataclass
class PlayerStanding:
    """A player's row in the standings table.

    This is the only structure report and export code needs from the
    engine.

    Attributes
    ----------
    player_id : str
        Player identifier.
    player_name : str
        Display name at the time the standings were computed.
    total_points : float
        Sum of tournament points over every match played.
    wins : int
        Number of first-place finishes, byes included.
    tiebreak_values : dict of str to float
        Value of each enabled tiebreak criterion, keyed by criterion id.
    rank : int or None
        1-based position in the sorted standings.
    """

    player_id: str
    player_name: str
    total_points: float = 0.0
    wins: int = 0
    tiebreak_values: TiebreakValues = field(default_factory=dict)
    rank: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "total_points": self.total_points,
            "wins": self.wins,
            "tiebreak_values": dict(self.tiebreak_values),
        }
