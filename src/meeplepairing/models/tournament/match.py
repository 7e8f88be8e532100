"""Match data class."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional

from meeplepairing.models.enums import MatchStatus
from meeplepairing.utils import format_timestamp, parse_timestamp


@dataclass
class Match:
    """A single table within a round.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    round_id : str
        Owning round.
    match_number : int
        Number of the match, unique per round.
    status : MatchStatus
        Pending until results are submitted. Byes are created completed.
    player_ids : list of str
        Assigned players. A bye match holds exactly one player.
    first_player_id : str or None
        Player who started the match, used to break two-player ties.
    completed_at : datetime or None
        When results were last submitted.
    """

    id: str
    round_id: str
    match_number: int
    status: MatchStatus = MatchStatus.PENDING
    player_ids: List[str] = field(default_factory=list)
    first_player_id: Optional[str] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.status = MatchStatus(self.status)

    @property
    def is_bye(self) -> bool:
        return len(self.player_ids) == 1

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_id": self.round_id,
            "match_number": self.match_number,
            "status": self.status.value,
            "player_ids": list(self.player_ids),
            "first_player_id": self.first_player_id,
            "completed_at": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            round_id=data["round_id"],
            match_number=data["match_number"],
            status=MatchStatus(data.get("status", MatchStatus.PENDING.value)),
            player_ids=list(data.get("player_ids", [])),
            first_player_id=data.get("first_player_id"),
            completed_at=parse_timestamp(data.get("completed_at")),
        )
