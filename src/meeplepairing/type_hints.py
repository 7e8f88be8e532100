"""Type hints used in Meeple Pairing."""

from typing import Dict, List, Set

# Opaque identifiers handed out by the store
PlayerId = str
TournamentId = str
RoundId = str
MatchId = str

# Finishing position -> tournament points
ScoringSystem = Dict[int, float]
# Criterion id -> tiebreak value
TiebreakValues = Dict[str, float]
# Players in one match, in seating/standings order
MatchRoster = List[PlayerId]
# Player -> everyone they have shared a match with
OpponentMap = Dict[PlayerId, Set[PlayerId]]

#  LocalWords:  TiebreakValues OpponentMap
