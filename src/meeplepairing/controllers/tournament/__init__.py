"""Tournament management controllers."""

from meeplepairing.controllers.tournament.match_history import MatchHistory, PlayedMatch
from meeplepairing.controllers.tournament.position_resolver import (
    PositionedResult,
    ResultEntry,
    resolve_positions,
)
from meeplepairing.controllers.tournament.result_recorder import ResultRecorder
from meeplepairing.controllers.tournament.round_manager import RoundManager
from meeplepairing.controllers.tournament.standings import StandingsCalculator
from meeplepairing.controllers.tournament.tiebreak_calculator import TiebreakCalculator
from meeplepairing.controllers.tournament.tournament_manager import TournamentManager

__all__ = [
    "MatchHistory",
    "PlayedMatch",
    "PositionedResult",
    "ResultEntry",
    "ResultRecorder",
    "RoundManager",
    "StandingsCalculator",
    "TiebreakCalculator",
    "TournamentManager",
    "resolve_positions",
]
