"""Store interface and the in-memory implementation.

The engine never keeps state between calls: every operation reads what it
needs from a :class:`Store`, so the store is the single source of truth.
Writes that must be observed together (a whole generated round, the
results of one match) go through :meth:`Store.transaction`, which
serializes writers and rolls back every change if the block raises.
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

import copy
import functools
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from meeplepairing.exceptions import StoreException
from meeplepairing.models import Circuit, MatchStatus, Player, RoundStatus, TournamentType
from meeplepairing.models.tournament import (
    ByeRecord,
    Match,
    MatchResult,
    Round,
    Tournament,
    TournamentConfig,
)
from meeplepairing.utils import generate_id, setup_logger, utc_now

logger = setup_logger(__name__)

# (player_id, position, points, tournament_points)
ResultRow = Tuple[str, int, float, float]


def _locked(method):
    """Run a read under the store lock so it never sees a half-applied write."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class Store(ABC):
    """Persistence collaborator used by every engine component.

    ``get_*`` methods return ``None`` for unknown ids and ``list_*`` methods
    return empty lists; deciding whether an absence is an error is left to
    the caller.
    """

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Group writes so they are applied together or not at all."""

    @abstractmethod
    @contextmanager
    def reading(self) -> Iterator["Store"]:
        """Hold off writers while several reads must agree with each other."""

    # ========== Players ==========

    @abstractmethod
    def create_player(self, name: str, **metadata: Any) -> Player: ...

    @abstractmethod
    def get_player(self, player_id: str) -> Optional[Player]: ...

    @abstractmethod
    def list_players(self) -> List[Player]: ...

    @abstractmethod
    def update_player(self, player: Player) -> None: ...

    # ========== Circuits ==========

    @abstractmethod
    def create_circuit(
        self,
        name: str,
        description: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Circuit: ...

    @abstractmethod
    def get_circuit(self, circuit_id: str) -> Optional[Circuit]: ...

    @abstractmethod
    def list_circuits(self) -> List[Circuit]: ...

    @abstractmethod
    def update_circuit(self, circuit: Circuit) -> None: ...

    @abstractmethod
    def delete_circuit(self, circuit_id: str) -> None: ...

    @abstractmethod
    def list_circuit_tournaments(self, circuit_id: str) -> List[Tournament]: ...

    # ========== Tournaments ==========

    @abstractmethod
    def create_tournament(
        self,
        name: str,
        players_per_match: int,
        number_of_rounds: Optional[int] = None,
        played_on: Optional[date] = None,
        circuit_id: Optional[str] = None,
    ) -> Tournament: ...

    @abstractmethod
    def get_tournament(self, tournament_id: str) -> Optional[Tournament]: ...

    @abstractmethod
    def list_tournaments(self) -> List[Tournament]: ...

    @abstractmethod
    def update_tournament(self, tournament: Tournament) -> None: ...

    @abstractmethod
    def get_config(self, tournament_id: str) -> Optional[TournamentConfig]: ...

    @abstractmethod
    def save_config(self, config: TournamentConfig) -> None: ...

    @abstractmethod
    def register_player(self, tournament_id: str, player_id: str) -> bool: ...

    @abstractmethod
    def unregister_player(self, tournament_id: str, player_id: str) -> bool: ...

    @abstractmethod
    def list_tournament_players(self, tournament_id: str) -> List[Player]: ...

    # ========== Rounds ==========

    @abstractmethod
    def create_round(
        self,
        tournament_id: str,
        round_number: int,
        status: RoundStatus = RoundStatus.PENDING,
    ) -> Round: ...

    @abstractmethod
    def get_round(self, round_id: str) -> Optional[Round]: ...

    @abstractmethod
    def list_rounds(self, tournament_id: str) -> List[Round]: ...

    @abstractmethod
    def update_round(self, round_: Round) -> None: ...

    @abstractmethod
    def delete_round(self, round_id: str) -> None: ...

    # ========== Matches ==========

    @abstractmethod
    def create_match(
        self,
        round_id: str,
        match_number: int,
        player_ids: Sequence[str],
        status: MatchStatus = MatchStatus.PENDING,
    ) -> Match: ...

    @abstractmethod
    def get_match(self, match_id: str) -> Optional[Match]: ...

    @abstractmethod
    def list_matches(self, round_id: str) -> List[Match]: ...

    @abstractmethod
    def update_match(self, match: Match) -> None: ...

    @abstractmethod
    def set_match_players(self, match_id: str, player_ids: Sequence[str]) -> None: ...

    @abstractmethod
    def delete_match(self, match_id: str) -> None: ...

    # ========== Results ==========

    @abstractmethod
    def list_match_results(self, match_id: str) -> List[MatchResult]: ...

    @abstractmethod
    def replace_match_results(
        self, match_id: str, rows: Sequence[ResultRow]
    ) -> List[MatchResult]: ...

    @abstractmethod
    def delete_match_results(self, match_id: str) -> None: ...

    # ========== Byes ==========

    @abstractmethod
    def add_bye(self, tournament_id: str, player_id: str, round_number: int) -> ByeRecord: ...

    @abstractmethod
    def list_byes(self, tournament_id: str) -> List[ByeRecord]: ...

    @abstractmethod
    def delete_bye(self, tournament_id: str, player_id: str, round_number: int) -> None: ...


def _empty_tables() -> Dict[str, Any]:
    return {
        "players": {},
        "circuits": {},
        "tournaments": {},
        "configs": {},
        "registrations": {},
        "rounds": {},
        "matches": {},
        "results": {},
        "byes": [],
    }


class InMemoryStore(Store):
    """Dictionary-backed store.

    Returned records are copies: changes only take effect through the
    matching ``update_*`` call.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Any] = _empty_tables()
        self._lock = threading.RLock()
        self._depth = 0

    # ========== Transactions ==========

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = copy.deepcopy(self._tables) if outermost else None
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost:
                    self._tables = snapshot
                    logger.debug("Transaction rolled back")
                raise
            finally:
                self._depth -= 1
            if outermost:
                self._on_commit()

    @contextmanager
    def reading(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            yield self

    def _on_commit(self) -> None:
        """Hook run after the outermost transaction succeeds."""

    # ========== Players ==========

    def create_player(self, name: str, **metadata: Any) -> Player:
        with self.transaction():
            player = Player(id=generate_id("player"), name=name, **metadata)
            self._tables["players"][player.id] = player
            return copy.deepcopy(player)

    @_locked
    def get_player(self, player_id: str) -> Optional[Player]:
        return copy.deepcopy(self._tables["players"].get(player_id))

    @_locked
    def list_players(self) -> List[Player]:
        return [copy.deepcopy(p) for p in self._tables["players"].values()]

    def update_player(self, player: Player) -> None:
        with self.transaction():
            self._require("players", player.id)
            self._tables["players"][player.id] = copy.deepcopy(player)

    # ========== Circuits ==========

    def create_circuit(
        self,
        name: str,
        description: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Circuit:
        with self.transaction():
            if any(c.name == name for c in self._tables["circuits"].values()):
                raise StoreException(f"A circuit named {name!r} already exists")
            circuit = Circuit(
                id=generate_id("circuit"),
                name=name,
                description=description,
                start_date=start_date,
                end_date=end_date,
            )
            self._tables["circuits"][circuit.id] = circuit
            return copy.deepcopy(circuit)

    @_locked
    def get_circuit(self, circuit_id: str) -> Optional[Circuit]:
        return copy.deepcopy(self._tables["circuits"].get(circuit_id))

    @_locked
    def list_circuits(self) -> List[Circuit]:
        circuits = self._tables["circuits"].values()
        return [copy.deepcopy(c) for c in sorted(circuits, key=lambda c: c.created_at)]

    def update_circuit(self, circuit: Circuit) -> None:
        with self.transaction():
            self._require("circuits", circuit.id)
            circuit.updated_at = utc_now()
            self._tables["circuits"][circuit.id] = copy.deepcopy(circuit)

    def delete_circuit(self, circuit_id: str) -> None:
        with self.transaction():
            if self._tournaments_in(circuit_id):
                raise StoreException(f"Circuit {circuit_id} still has tournaments")
            self._tables["circuits"].pop(circuit_id, None)

    @_locked
    def list_circuit_tournaments(self, circuit_id: str) -> List[Tournament]:
        return [copy.deepcopy(t) for t in self._tournaments_in(circuit_id)]

    def _tournaments_in(self, circuit_id: str) -> List[Tournament]:
        tournaments = [
            t for t in self._tables["tournaments"].values() if t.circuit_id == circuit_id
        ]
        return sorted(tournaments, key=lambda t: t.played_on)

    # ========== Tournaments ==========

    def create_tournament(
        self,
        name: str,
        players_per_match: int,
        number_of_rounds: Optional[int] = None,
        played_on: Optional[date] = None,
        circuit_id: Optional[str] = None,
    ) -> Tournament:
        with self.transaction():
            if circuit_id is not None:
                self._require("circuits", circuit_id)
            tournament = Tournament(
                id=generate_id("tournament"),
                name=name,
                players_per_match=players_per_match,
                number_of_rounds=number_of_rounds,
                played_on=played_on or date.today(),
                tournament_type=(
                    TournamentType.CIRCUIT if circuit_id else TournamentType.QUALIFIER
                ),
                circuit_id=circuit_id,
            )
            self._tables["tournaments"][tournament.id] = tournament
            self._tables["registrations"][tournament.id] = []
            return copy.deepcopy(tournament)

    @_locked
    def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        return copy.deepcopy(self._tables["tournaments"].get(tournament_id))

    @_locked
    def list_tournaments(self) -> List[Tournament]:
        tournaments = self._tables["tournaments"].values()
        return [copy.deepcopy(t) for t in sorted(tournaments, key=lambda t: t.played_on)]

    def update_tournament(self, tournament: Tournament) -> None:
        with self.transaction():
            self._require("tournaments", tournament.id)
            tournament.updated_at = utc_now()
            self._tables["tournaments"][tournament.id] = copy.deepcopy(tournament)

    @_locked
    def get_config(self, tournament_id: str) -> Optional[TournamentConfig]:
        return copy.deepcopy(self._tables["configs"].get(tournament_id))

    def save_config(self, config: TournamentConfig) -> None:
        with self.transaction():
            self._require("tournaments", config.tournament_id)
            self._tables["configs"][config.tournament_id] = copy.deepcopy(config)

    def register_player(self, tournament_id: str, player_id: str) -> bool:
        with self.transaction():
            self._require("tournaments", tournament_id)
            self._require("players", player_id)
            registered = self._tables["registrations"].setdefault(tournament_id, [])
            if player_id in registered:
                return False
            registered.append(player_id)
            return True

    def unregister_player(self, tournament_id: str, player_id: str) -> bool:
        with self.transaction():
            registered = self._tables["registrations"].get(tournament_id, [])
            if player_id not in registered:
                return False
            registered.remove(player_id)
            return True

    @_locked
    def list_tournament_players(self, tournament_id: str) -> List[Player]:
        players = self._tables["players"]
        return [
            copy.deepcopy(players[player_id])
            for player_id in self._tables["registrations"].get(tournament_id, [])
            if player_id in players
        ]

    # ========== Rounds ==========

    def create_round(
        self,
        tournament_id: str,
        round_number: int,
        status: RoundStatus = RoundStatus.PENDING,
    ) -> Round:
        with self.transaction():
            self._require("tournaments", tournament_id)
            if any(r.round_number == round_number for r in self._rounds_of(tournament_id)):
                raise StoreException(
                    f"Round {round_number} already exists in tournament {tournament_id}"
                )
            round_ = Round(
                id=generate_id("round"),
                tournament_id=tournament_id,
                round_number=round_number,
                status=status,
            )
            self._tables["rounds"][round_.id] = round_
            return copy.deepcopy(round_)

    @_locked
    def get_round(self, round_id: str) -> Optional[Round]:
        return copy.deepcopy(self._tables["rounds"].get(round_id))

    @_locked
    def list_rounds(self, tournament_id: str) -> List[Round]:
        return [copy.deepcopy(r) for r in self._rounds_of(tournament_id)]

    def update_round(self, round_: Round) -> None:
        with self.transaction():
            self._require("rounds", round_.id)
            self._tables["rounds"][round_.id] = copy.deepcopy(round_)

    def delete_round(self, round_id: str) -> None:
        with self.transaction():
            for match in self._matches_of(round_id):
                self.delete_match(match.id)
            self._tables["rounds"].pop(round_id, None)

    def _rounds_of(self, tournament_id: str) -> List[Round]:
        rounds = [
            r for r in self._tables["rounds"].values() if r.tournament_id == tournament_id
        ]
        return sorted(rounds, key=lambda r: r.round_number)

    # ========== Matches ==========

    def create_match(
        self,
        round_id: str,
        match_number: int,
        player_ids: Sequence[str],
        status: MatchStatus = MatchStatus.PENDING,
    ) -> Match:
        with self.transaction():
            self._require("rounds", round_id)
            if any(m.match_number == match_number for m in self._matches_of(round_id)):
                raise StoreException(
                    f"Match {match_number} already exists in round {round_id}"
                )
            match = Match(
                id=generate_id("match"),
                round_id=round_id,
                match_number=match_number,
                status=status,
                player_ids=list(player_ids),
            )
            self._tables["matches"][match.id] = match
            return copy.deepcopy(match)

    @_locked
    def get_match(self, match_id: str) -> Optional[Match]:
        return copy.deepcopy(self._tables["matches"].get(match_id))

    @_locked
    def list_matches(self, round_id: str) -> List[Match]:
        return [copy.deepcopy(m) for m in self._matches_of(round_id)]

    def update_match(self, match: Match) -> None:
        with self.transaction():
            self._require("matches", match.id)
            self._tables["matches"][match.id] = copy.deepcopy(match)

    def set_match_players(self, match_id: str, player_ids: Sequence[str]) -> None:
        with self.transaction():
            self._require("matches", match_id)
            self._tables["matches"][match_id].player_ids = list(player_ids)

    def delete_match(self, match_id: str) -> None:
        with self.transaction():
            self.delete_match_results(match_id)
            self._tables["matches"].pop(match_id, None)

    def _matches_of(self, round_id: str) -> List[Match]:
        matches = [m for m in self._tables["matches"].values() if m.round_id == round_id]
        return sorted(matches, key=lambda m: m.match_number)

    # ========== Results ==========

    @_locked
    def list_match_results(self, match_id: str) -> List[MatchResult]:
        results = [
            r for r in self._tables["results"].values() if r.match_id == match_id
        ]
        return [copy.deepcopy(r) for r in sorted(results, key=lambda r: r.position)]

    def replace_match_results(
        self, match_id: str, rows: Sequence[ResultRow]
    ) -> List[MatchResult]:
        with self.transaction():
            self._require("matches", match_id)
            self.delete_match_results(match_id)
            created = []
            for player_id, position, points, tournament_points in rows:
                result = MatchResult(
                    id=generate_id("result"),
                    match_id=match_id,
                    player_id=player_id,
                    position=position,
                    points=points,
                    tournament_points=tournament_points,
                )
                self._tables["results"][result.id] = result
                created.append(copy.deepcopy(result))
            return created

    def delete_match_results(self, match_id: str) -> None:
        with self.transaction():
            stale = [
                result_id
                for result_id, result in self._tables["results"].items()
                if result.match_id == match_id
            ]
            for result_id in stale:
                del self._tables["results"][result_id]

    # ========== Byes ==========

    def add_bye(self, tournament_id: str, player_id: str, round_number: int) -> ByeRecord:
        with self.transaction():
            record = ByeRecord(
                tournament_id=tournament_id,
                player_id=player_id,
                round_number=round_number,
            )
            if record not in self._tables["byes"]:
                self._tables["byes"].append(record)
            return record

    @_locked
    def list_byes(self, tournament_id: str) -> List[ByeRecord]:
        return [b for b in self._tables["byes"] if b.tournament_id == tournament_id]

    def delete_bye(self, tournament_id: str, player_id: str, round_number: int) -> None:
        with self.transaction():
            record = ByeRecord(tournament_id, player_id, round_number)
            if record in self._tables["byes"]:
                self._tables["byes"].remove(record)

    # ========== Helpers ==========

    def _require(self, table: str, key: str) -> None:
        if key not in self._tables[table]:
            raise StoreException(f"No record with id {key!r} in {table}")
