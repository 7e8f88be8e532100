"""Data models for players, tournaments, rounds, matches and results."""

from meeplepairing.models.enums import (
    ByeSelection,
    MatchStatus,
    RoundStatus,
    TiebreakCriterionId,
    TournamentStatus,
    TournamentType,
)
from meeplepairing.models.circuit import Circuit, CircuitStanding
from meeplepairing.models.player import Player

__all__ = [
    "ByeSelection",
    "Circuit",
    "CircuitStanding",
    "MatchStatus",
    "Player",
    "RoundStatus",
    "TiebreakCriterionId",
    "TournamentStatus",
    "TournamentType",
]
