"""Match result data class."""

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
from typing import Any, Dict


@dataclass
class MatchResult:
    """Represents one player's result in a single match.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    match_id : str
        Match the result belongs to.
    player_id : str
        Player the result belongs to.
    position : int
        1-based finishing position; tied players share a position.
    points : float
        Raw in-game score.
    tournament_points : float
        Points awarded by the scoring system for ``position``.
    """

    id: str
    match_id: str
    player_id: str
    position: int
    points: float
    tournament_points: float

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "id": self.id,
            "match_id": self.match_id,
            "player_id": self.player_id,
            "position": self.position,
            "points": self.points,
            "tournament_points": self.tournament_points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(
            id=data["id"],
            match_id=data["match_id"],
            player_id=data["player_id"],
            position=data["position"],
            points=data["points"],
            tournament_points=data["tournament_points"],
        )
