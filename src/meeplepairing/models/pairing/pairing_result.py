"""RoundPlan data class."""

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
from typing import List

from meeplepairing.type_hints import MatchRoster, PlayerId


@dataclass
class PlannedMatch:
    """A match decided by the pairing engine but not yet persisted."""

    player_ids: MatchRoster
    is_bye: bool = False


@dataclass
class RoundPlan:
    """Result of a pairing computation for a single round.

    Matches keep the order in which the engine produced them; that order
    becomes the match numbering.
    """

    round_number: int
    matches: List[PlannedMatch] = field(default_factory=list)

    @property
    def byes(self) -> List[PlayerId]:
        return [m.player_ids[0] for m in self.matches if m.is_bye]

    @property
    def regular_matches(self) -> List[PlannedMatch]:
        return [m for m in self.matches if not m.is_bye]

    def add_match(self, player_ids: MatchRoster) -> None:
        self.matches.append(PlannedMatch(player_ids=list(player_ids)))

    def add_bye(self, player_id: PlayerId) -> None:
        self.matches.append(PlannedMatch(player_ids=[player_id], is_bye=True))


#  LocalWords:  RoundPlan
