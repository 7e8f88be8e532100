"""Tournament record."""

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

from meeplepairing.constants import (
    DEFAULT_PLAYERS_PER_MATCH,
    MAX_PLAYERS_PER_MATCH,
    MIN_PLAYERS_PER_MATCH,
)
from meeplepairing.exceptions import InvalidConfigurationException
from meeplepairing.models.enums import TournamentStatus, TournamentType
from meeplepairing.utils import format_timestamp, parse_timestamp, utc_now


@dataclass
class Tournament:
    """A Swiss-style tournament.

    Attributes
    ----------
    id : str
        Opaque identifier handed out by the store.
    name : str
        Tournament name.
    players_per_match : int
        Match size, between 2 and 4.
    number_of_rounds : int or None
        Fixed round count. When unset the count is derived from the number
        of registered players.
    status : TournamentStatus
        draft -> in_progress -> completed.
    played_on : date
        Day the tournament is played.
    tournament_type : TournamentType
        Standalone qualifier, or a leg of a circuit.
    circuit_id : str or None
        Circuit the tournament counts towards. Required for circuit legs
        and forbidden for qualifiers.
    """

    id: str
    name: str
    players_per_match: int = DEFAULT_PLAYERS_PER_MATCH
    number_of_rounds: Optional[int] = None
    status: TournamentStatus = TournamentStatus.DRAFT
    played_on: date = field(default_factory=date.today)
    tournament_type: TournamentType = TournamentType.QUALIFIER
    circuit_id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not MIN_PLAYERS_PER_MATCH <= self.players_per_match <= MAX_PLAYERS_PER_MATCH:
            raise InvalidConfigurationException(
                f"players_per_match must be between {MIN_PLAYERS_PER_MATCH} and "
                f"{MAX_PLAYERS_PER_MATCH}, got {self.players_per_match}"
            )
        if self.number_of_rounds is not None and self.number_of_rounds < 1:
            raise InvalidConfigurationException(
                f"number_of_rounds must be positive, got {self.number_of_rounds}"
            )
        self.status = TournamentStatus(self.status)
        self.tournament_type = TournamentType(self.tournament_type)
        if self.tournament_type is TournamentType.CIRCUIT and not self.circuit_id:
            raise InvalidConfigurationException("A circuit tournament needs a circuit_id")
        if self.tournament_type is TournamentType.QUALIFIER and self.circuit_id:
            raise InvalidConfigurationException("A qualifier cannot belong to a circuit")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "players_per_match": self.players_per_match,
            "number_of_rounds": self.number_of_rounds,
            "status": self.status.value,
            "played_on": self.played_on.isoformat(),
            "type": self.tournament_type.value,
            "circuit_id": self.circuit_id,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        played_on = data.get("played_on")
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled Tournament"),
            players_per_match=data.get("players_per_match", DEFAULT_PLAYERS_PER_MATCH),
            number_of_rounds=data.get("number_of_rounds"),
            status=TournamentStatus(data.get("status", TournamentStatus.DRAFT.value)),
            played_on=date.fromisoformat(played_on) if played_on else date.today(),
            tournament_type=TournamentType(data.get("type", TournamentType.QUALIFIER.value)),
            circuit_id=data.get("circuit_id"),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            updated_at=parse_timestamp(data.get("updated_at")) or utc_now(),
        )
