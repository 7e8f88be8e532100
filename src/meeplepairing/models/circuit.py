"""Circuits: series of tournaments ranked together."""

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
from datetime import date, datetime
from typing import Any, Dict, Optional

from meeplepairing.exceptions import InvalidConfigurationException
from meeplepairing.utils import format_timestamp, parse_timestamp, utc_now


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


@dataclass
class Circuit:
    """A series of tournaments whose results add up to one ranking.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    name : str
        Circuit name, unique in the store.
    description : str or None
        Free text shown next to the name.
    start_date, end_date : date or None
        Season boundaries, informational only.
    """

    id: str
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise InvalidConfigurationException(
                f"Circuit {self.name} ends ({self.end_date}) before it starts ({self.start_date})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize circuit to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Circuit":
        """Deserialize circuit from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            start_date=_parse_date(data.get("start_date")),
            end_date=_parse_date(data.get("end_date")),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            updated_at=parse_timestamp(data.get("updated_at")) or utc_now(),
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class CircuitStanding:
    """Cumulative line of one player in a circuit ranking."""

    player_id: str
    player_name: str
    total_points: float = 0.0
    tournaments_played: int = 0
    wins: int = 0
    rank: int = 0
