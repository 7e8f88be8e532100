"""A player registered in the Meeple Pairing store."""

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
from typing import Any, Dict, Optional

from meeplepairing.utils import format_timestamp, parse_timestamp, utc_now


@dataclass
class Player:
    """Represents a player.

    Identity and display name never change once created; only the contact
    metadata may be edited.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    name : str
        Display name.
    username : str or None
        Online game platform username.
    phone : str or None
        Contact phone number.
    email : str or None
        Contact email address.
    age : int or None
        Player age in years.
    created_at : datetime
        Creation timestamp.
    """

    id: str
    name: str
    username: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "phone": self.phone,
            "email": self.email,
            "age": self.age,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            username=data.get("username"),
            phone=data.get("phone"),
            email=data.get("email"),
            age=data.get("age"),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
        )

    def __str__(self) -> str:
        return self.name
