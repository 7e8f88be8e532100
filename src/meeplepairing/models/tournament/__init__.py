from meeplepairing.models.tournament.bye_record import ByeRecord
from meeplepairing.models.tournament.match import Match
from meeplepairing.models.tournament.match_result import MatchResult
from meeplepairing.models.tournament.round_data import Round
from meeplepairing.models.tournament.standing import PlayerStanding
from meeplepairing.models.tournament.tournament import Tournament
from meeplepairing.models.tournament.tournament_config import (
    TiebreakCriterion,
    TournamentConfig,
    default_tiebreak_criteria,
)

__all__ = [
    "ByeRecord",
    "Match",
    "MatchResult",
    "PlayerStanding",
    "Round",
    "TiebreakCriterion",
    "Tournament",
    "TournamentConfig",
    "default_tiebreak_criteria",
]
