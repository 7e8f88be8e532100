"""Enumerations shared by the models and controllers."""

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

from enum import Enum

from meeplepairing.constants import (
    BYE_RANDOM,
    BYE_ROUND_ROBIN,
    BYE_WORST,
    TB_HEAD_TO_HEAD,
    TB_OPPONENT_POINTS_DROP_BEST_WORST,
    TB_OPPONENT_POINTS_DROP_WORST,
    TB_POINT_DIFFERENCE,
    TB_WINS,
)


class TournamentStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TournamentType(str, Enum):
    """A one-off qualifier, or a leg counted towards a circuit."""

    QUALIFIER = "qualifier"
    CIRCUIT = "circuit"


class RoundStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MatchStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class ByeSelection(str, Enum):
    """How the bye player is picked from the candidates of a score band."""

    WORST = BYE_WORST
    RANDOM = BYE_RANDOM
    ROUND_ROBIN = BYE_ROUND_ROBIN


class TiebreakCriterionId(str, Enum):
    """Closed set of tiebreak criteria understood by the evaluator."""

    WINS = TB_WINS
    OPPONENT_POINTS_DROP_WORST = TB_OPPONENT_POINTS_DROP_WORST
    OPPONENT_POINTS_DROP_BEST_WORST = TB_OPPONENT_POINTS_DROP_BEST_WORST
    HEAD_TO_HEAD = TB_HEAD_TO_HEAD
    POINT_DIFFERENCE = TB_POINT_DIFFERENCE
