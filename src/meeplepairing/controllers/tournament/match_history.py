"""Snapshot of a tournament's played matches.

Every engine call builds a fresh :class:`MatchHistory` from the store, so
values computed from it always reflect the full history available at call
time. Per-player totals are cached inside the snapshot only.
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

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from meeplepairing.models.tournament import ByeRecord, Match, MatchResult, Round
from meeplepairing.storage import Store
from meeplepairing.type_hints import OpponentMap, PlayerId


@dataclass
class PlayedMatch:
    """A match together with the results recorded for it."""

    round_number: int
    match: Match
    results: List[MatchResult] = field(default_factory=list)

    def result_for(self, player_id: PlayerId) -> Optional[MatchResult]:
        for result in self.results:
            if result.player_id == player_id:
                return result
        return None

    def opponents_of(self, player_id: PlayerId) -> List[MatchResult]:
        return [r for r in self.results if r.player_id != player_id]


class MatchHistory:
    """Read-only view over the results of one tournament."""

    def __init__(
        self,
        tournament_id: str,
        played: Sequence[PlayedMatch],
        byes: Sequence[ByeRecord] = (),
    ) -> None:
        self.tournament_id = tournament_id
        self.played: List[PlayedMatch] = list(played)
        self.byes: List[ByeRecord] = list(byes)
        self._totals: Dict[PlayerId, float] = {}

    @classmethod
    def load(
        cls,
        store: Store,
        tournament_id: str,
        rounds: Optional[Sequence[Round]] = None,
    ) -> "MatchHistory":
        """Read every match with results from the store.

        Args:
            store: Source of truth
            tournament_id: Tournament to read
            rounds: Rounds to scan, defaults to every round of the tournament

        Returns:
            A fresh snapshot
        """
        with store.reading():
            if rounds is None:
                rounds = store.list_rounds(tournament_id)
            played = []
            for round_ in rounds:
                for match in store.list_matches(round_.id):
                    results = store.list_match_results(match.id)
                    if results:
                        played.append(PlayedMatch(round_.round_number, match, results))
            byes = store.list_byes(tournament_id)
        return cls(tournament_id, played, byes)

    def matches_of(self, player_id: PlayerId) -> List[PlayedMatch]:
        """Matches in which ``player_id`` has a recorded result."""
        return [m for m in self.played if m.result_for(player_id) is not None]

    def total_points(self, player_id: PlayerId) -> float:
        """Sum of tournament points over every match the player has played."""
        if player_id not in self._totals:
            self._totals[player_id] = sum(
                m.result_for(player_id).tournament_points for m in self.matches_of(player_id)
            )
        return self._totals[player_id]

    def wins(self, player_id: PlayerId) -> int:
        """Number of first-place finishes, byes included."""
        return sum(1 for m in self.matches_of(player_id) if m.result_for(player_id).position == 1)

    def previous_opponents(self) -> OpponentMap:
        """Everyone each player has shared a match with."""
        opponents: OpponentMap = {}
        for played in self.played:
            ids = [r.player_id for r in played.results]
            for player_id in ids:
                opponents.setdefault(player_id, set()).update(
                    other for other in ids if other != player_id
                )
        return opponents

    def players_with_bye(self) -> Set[PlayerId]:
        return {b.player_id for b in self.byes}

    def head_to_head(self, player_id: PlayerId, other_id: PlayerId) -> int:
        """Direct encounter result between two players.

        Returns:
            1 if ``player_id`` finished ahead of ``other_id`` more often than
            behind, -1 for the reverse, 0 if even or they never met
        """
        balance = 0
        for played in self.matches_of(player_id):
            mine = played.result_for(player_id)
            theirs = played.result_for(other_id)
            if theirs is None:
                continue
            if mine.position < theirs.position:
                balance += 1
            elif theirs.position < mine.position:
                balance -= 1
        return (balance > 0) - (balance < 0)
