"""Data model for tournament round."""

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
from datetime import datetime
from typing import Any, Dict, Optional

from meeplepairing.models.enums import RoundStatus
from meeplepairing.utils import format_timestamp, parse_timestamp


@dataclass
class Round:
    """One round of a tournament.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    tournament_id : str
        Owning tournament.
    round_number : int
        Round number (1-indexed), unique per tournament.
    status : RoundStatus
        Completed only once every match of the round is completed.
    started_at : datetime or None
        When the first result of the round was entered.
    completed_at : datetime or None
        When the last pending match of the round was completed.
    """

    id: str
    tournament_id: str
    round_number: int
    status: RoundStatus = RoundStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.status = RoundStatus(self.status)

    @property
    def is_completed(self) -> bool:
        return self.status == RoundStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "round_number": self.round_number,
            "status": self.status.value,
            "started_at": format_timestamp(self.started_at),
            "completed_at": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round data from dictionary."""
        return cls(
            id=data["id"],
            tournament_id=data["tournament_id"],
            round_number=data["round_number"],
            status=RoundStatus(data.get("status", RoundStatus.PENDING.value)),
            started_at=parse_timestamp(data.get("started_at")),
            completed_at=parse_timestamp(data.get("completed_at")),
        )
