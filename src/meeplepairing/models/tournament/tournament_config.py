"""TournamentConfig and TiebreakCriterion data classes."""

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
from typing import Any, Dict, List, Optional

from meeplepairing.constants import (
    DEFAULT_AVOID_REMATCHES,
    DEFAULT_BYE_SELECTION,
    DEFAULT_PLAYERS_PER_MATCH,
    DEFAULT_TIEBREAK_ORDER,
    TIEBREAK_NAMES,
)
from meeplepairing.exceptions import InvalidConfigurationException
from meeplepairing.models.enums import ByeSelection, TiebreakCriterionId
from meeplepairing.scoring import get_default_scoring_system
from meeplepairing.type_hints import ScoringSystem


@dataclass
class TiebreakCriterion:
    """One entry of the ordered tiebreak chain.

    Attributes
    ----------
    id : TiebreakCriterionId
        Which criterion to evaluate.
    name : str
        Display name.
    enabled : bool
        Disabled criteria are skipped both when computing and when sorting.
    order : int
        Position in the chain, lowest first.
    """

    id: TiebreakCriterionId
    name: str = ""
    enabled: bool = True
    order: int = 0

    def __post_init__(self) -> None:
        try:
            self.id = TiebreakCriterionId(self.id)
        except ValueError:
            raise InvalidConfigurationException(
                f"Unknown tiebreak criterion: {self.id!r}"
            ) from None
        if not self.name:
            self.name = TIEBREAK_NAMES[self.id.value]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "enabled": self.enabled,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TiebreakCriterion":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            enabled=data.get("enabled", True),
            order=data.get("order", 0),
        )


def default_tiebreak_criteria() -> List[TiebreakCriterion]:
    """Default chain: every criterion enabled, in the standard order."""
    return [
        TiebreakCriterion(id=criterion_id, order=index)
        for index, criterion_id in enumerate(DEFAULT_TIEBREAK_ORDER, start=1)
    ]


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    tournament_id : str
        Owning tournament.
    avoid_rematches : bool
        Whether the pairing engine tries to avoid repeat two-player pairings.
    scoring_system : dict of int to float
        Finishing position -> tournament points.
    tiebreak_criteria : list of TiebreakCriterion
        Ordered tiebreak chain.
    bye_selection : ByeSelection
        Policy used to pick the bye player.
    """

    tournament_id: str
    avoid_rematches: bool = DEFAULT_AVOID_REMATCHES
    scoring_system: ScoringSystem = field(
        default_factory=lambda: get_default_scoring_system(DEFAULT_PLAYERS_PER_MATCH)
    )
    tiebreak_criteria: List[TiebreakCriterion] = field(
        default_factory=default_tiebreak_criteria
    )
    bye_selection: ByeSelection = ByeSelection(DEFAULT_BYE_SELECTION)

    def __post_init__(self) -> None:
        try:
            self.bye_selection = ByeSelection(self.bye_selection)
        except ValueError:
            raise InvalidConfigurationException(
                f"Unknown bye selection mode: {self.bye_selection!r}"
            ) from None
        # JSON object keys are strings
        self.scoring_system = {
            int(position): points for position, points in self.scoring_system.items()
        }

    @classmethod
    def default_for(
        cls, tournament_id: str, players_per_match: int
    ) -> "TournamentConfig":
        """Build the default configuration for a match size."""
        return cls(
            tournament_id=tournament_id,
            scoring_system=get_default_scoring_system(players_per_match),
        )

    def enabled_criteria(self) -> List[TiebreakCriterion]:
        """Enabled criteria, sorted by their configured order."""
        enabled = [c for c in self.tiebreak_criteria if c.enabled]
        return sorted(enabled, key=lambda c: c.order)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "tournament_id": self.tournament_id,
            "avoid_rematches": self.avoid_rematches,
            "scoring_system": {
                str(position): points
                for position, points in self.scoring_system.items()
            },
            "tiebreak_criteria": [c.to_dict() for c in self.tiebreak_criteria],
            "bye_selection": self.bye_selection.value,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], players_per_match: Optional[int] = None
    ) -> "TournamentConfig":
        """Deserialize configuration, filling in defaults for missing keys."""
        scoring = data.get("scoring_system") or get_default_scoring_system(
            players_per_match or DEFAULT_PLAYERS_PER_MATCH
        )
        criteria_data = data.get("tiebreak_criteria")
        criteria = (
            [TiebreakCriterion.from_dict(c) for c in criteria_data]
            if criteria_data is not None
            else default_tiebreak_criteria()
        )
        return cls(
            tournament_id=data["tournament_id"],
            avoid_rematches=data.get("avoid_rematches", DEFAULT_AVOID_REMATCHES),
            scoring_system=scoring,
            tiebreak_criteria=criteria,
            bye_selection=data.get("bye_selection") or DEFAULT_BYE_SELECTION,
        )
