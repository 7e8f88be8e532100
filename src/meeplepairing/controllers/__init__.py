"""Controllers: pairing, round generation, results, standings and statistics."""

from meeplepairing.controllers.circuit_standings import CircuitStandingsService
from meeplepairing.controllers.pairing import SwissPairingEngine, select_bye_player
from meeplepairing.controllers.player_stats import PlayerStatsService
from meeplepairing.controllers.tournament import (
    ResultEntry,
    StandingsCalculator,
    TiebreakCalculator,
    TournamentManager,
)

__all__ = [
    "CircuitStandingsService",
    "PlayerStatsService",
    "ResultEntry",
    "StandingsCalculator",
    "SwissPairingEngine",
    "TiebreakCalculator",
    "TournamentManager",
    "select_bye_player",
]
