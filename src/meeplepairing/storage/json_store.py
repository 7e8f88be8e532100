"""JSON file persistence for the in-memory store."""

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

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from meeplepairing.exceptions import StoreException
from meeplepairing.models import Circuit, Player
from meeplepairing.models.tournament import (
    ByeRecord,
    Match,
    MatchResult,
    Round,
    Tournament,
    TournamentConfig,
)
from meeplepairing.storage.store import InMemoryStore
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)

FORMAT_VERSION = 1


class JsonFileStore(InMemoryStore):
    """An :class:`InMemoryStore` saved to a single JSON document.

    The file is rewritten after every successful outermost transaction. The
    new content is written to a temporary file first and moved over the old
    one, so readers never see a half-written document.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._tables = self._tables_from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreException(f"Cannot load store from {self.path}: {e}") from e
        logger.info(
            "Loaded %s players and %s tournaments from %s",
            len(self._tables["players"]),
            len(self._tables["tournaments"]),
            self.path,
        )

    def _on_commit(self) -> None:
        self.save()

    def save(self) -> None:
        """Write the whole store to :attr:`path`."""
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._tables_to_dict(), f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreException(f"Cannot save store to {self.path}: {e}") from e
        logger.debug("Saved store to %s", self.path)

    def _tables_to_dict(self) -> Dict[str, Any]:
        tables = self._tables
        return {
            "version": FORMAT_VERSION,
            "players": [p.to_dict() for p in tables["players"].values()],
            "circuits": [c.to_dict() for c in tables["circuits"].values()],
            "tournaments": [t.to_dict() for t in tables["tournaments"].values()],
            "configs": [c.to_dict() for c in tables["configs"].values()],
            "registrations": tables["registrations"],
            "rounds": [r.to_dict() for r in tables["rounds"].values()],
            "matches": [m.to_dict() for m in tables["matches"].values()],
            "results": [r.to_dict() for r in tables["results"].values()],
            "byes": [b.to_dict() for b in tables["byes"]],
        }

    @staticmethod
    def _tables_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
        tournaments = {
            t.id: t for t in (Tournament.from_dict(d) for d in data.get("tournaments", []))
        }

        def load_config(raw: Dict[str, Any]) -> TournamentConfig:
            owner = tournaments.get(raw["tournament_id"])
            return TournamentConfig.from_dict(
                raw, owner.players_per_match if owner else None
            )

        return {
            "players": {
                p.id: p for p in (Player.from_dict(d) for d in data.get("players", []))
            },
            "circuits": {
                c.id: c for c in (Circuit.from_dict(d) for d in data.get("circuits", []))
            },
            "tournaments": tournaments,
            "configs": {
                c.tournament_id: c for c in (load_config(d) for d in data.get("configs", []))
            },
            "registrations": {
                tournament_id: list(player_ids)
                for tournament_id, player_ids in data.get("registrations", {}).items()
            },
            "rounds": {
                r.id: r for r in (Round.from_dict(d) for d in data.get("rounds", []))
            },
            "matches": {
                m.id: m for m in (Match.from_dict(d) for d in data.get("matches", []))
            },
            "results": {
                r.id: r for r in (MatchResult.from_dict(d) for d in data.get("results", []))
            },
            "byes": [ByeRecord.from_dict(d) for d in data.get("byes", [])],
        }
