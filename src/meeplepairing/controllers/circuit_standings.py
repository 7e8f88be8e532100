"""Cumulative ranking of the tournaments that make up a circuit."""

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

from typing import Dict, List, Set

from meeplepairing.controllers.tournament.match_history import MatchHistory
from meeplepairing.exceptions import EntityNotFoundException
from meeplepairing.models import CircuitStanding, TournamentStatus
from meeplepairing.storage import Store
from meeplepairing.type_hints import PlayerId
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)


class CircuitStandingsService:
    """Adds up the completed legs of a circuit.

    Each player collects the tournament points of every match they played
    in a completed leg, byes included. A win is a match finished in first
    place. Legs still in draft or in progress do not count.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def circuit_standings(self, circuit_id: str) -> List[CircuitStanding]:
        """Rank the players of a circuit.

        Args:
            circuit_id: Circuit to rank

        Returns:
            Standings ordered by total points, then wins, best first. Players
            without a result in a completed leg are left out.

        Raises:
            EntityNotFoundException: If the circuit does not exist
        """
        with self.store.reading():
            circuit = self.store.get_circuit(circuit_id)
            if circuit is None:
                raise EntityNotFoundException(f"Circuit {circuit_id} not found")

            rows: Dict[PlayerId, CircuitStanding] = {}
            legs: Dict[PlayerId, Set[str]] = {}
            completed = [
                t
                for t in self.store.list_circuit_tournaments(circuit_id)
                if t.status == TournamentStatus.COMPLETED
            ]
            for tournament in completed:
                registered = {
                    p.id: p for p in self.store.list_tournament_players(tournament.id)
                }
                for played in MatchHistory.load(self.store, tournament.id).played:
                    for result in played.results:
                        player = registered.get(result.player_id)
                        if player is None:
                            continue
                        row = rows.setdefault(
                            player.id,
                            CircuitStanding(player_id=player.id, player_name=player.name),
                        )
                        row.total_points += result.tournament_points
                        if result.position == 1:
                            row.wins += 1
                        legs.setdefault(player.id, set()).add(tournament.id)

        for player_id, row in rows.items():
            row.tournaments_played = len(legs[player_id])
        ordered = sorted(
            rows.values(), key=lambda r: (-r.total_points, -r.wins, r.player_name)
        )
        for rank, row in enumerate(ordered, start=1):
            row.rank = rank
        logger.debug(
            "Circuit %s: %s players over %s completed tournaments",
            circuit.name,
            len(ordered),
            len(completed),
        )
        return ordered
