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

# --- Constants ---
DEFAULT_DATA_FILE = "tournament.json"

# Match sizes supported by the pairing engine
MIN_PLAYERS_PER_MATCH = 2
MAX_PLAYERS_PER_MATCH = 4
DEFAULT_PLAYERS_PER_MATCH = 2

# Default scoring systems (position -> tournament points)
SCORING_2_PLAYERS = {1: 1, 2: 0}
SCORING_3_PLAYERS = {1: 3, 2: 1, 3: 0}
SCORING_4_PLAYERS = {1: 6, 2: 4, 3: 2, 4: 0}

DEFAULT_SCORING_SYSTEMS = {
    2: SCORING_2_PLAYERS,
    3: SCORING_3_PLAYERS,
    4: SCORING_4_PLAYERS,
}

# Tournament points for a position missing from the scoring system
UNMAPPED_POSITION_POINTS = 0

# Raw in-game points stored for a bye
BYE_RAW_POINTS = 0

# Round count thresholds: (max players, rounds)
ROUND_THRESHOLDS = [
    (2, 1),
    (4, 2),
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
]
MAX_ROUNDS = 7

# Tiebreaker Keys
TB_WINS = "wins"
TB_OPPONENT_POINTS_DROP_WORST = "opponent_points_drop_worst"
TB_OPPONENT_POINTS_DROP_BEST_WORST = "opponent_points_drop_best_worst"
TB_HEAD_TO_HEAD = "head_to_head"
TB_POINT_DIFFERENCE = "point_difference"

# Default display names for tiebreaks
TIEBREAK_NAMES = {
    TB_WINS: "Number of wins",
    TB_OPPONENT_POINTS_DROP_WORST: "Opponent points (drop worst)",
    TB_OPPONENT_POINTS_DROP_BEST_WORST: "Opponent points (drop best and worst)",
    TB_HEAD_TO_HEAD: "Head-to-head",
    TB_POINT_DIFFERENCE: "Point difference",
}

# Default order used for sorting if not configured otherwise
DEFAULT_TIEBREAK_ORDER = [
    TB_WINS,
    TB_OPPONENT_POINTS_DROP_WORST,
    TB_OPPONENT_POINTS_DROP_BEST_WORST,
    TB_HEAD_TO_HEAD,
    TB_POINT_DIFFERENCE,
]

# Bye selection modes
BYE_WORST = "worst"
BYE_RANDOM = "random"
BYE_ROUND_ROBIN = "round_robin"
DEFAULT_BYE_SELECTION = BYE_WORST

DEFAULT_AVOID_REMATCHES = True

# Number of recent tournaments listed in player statistics
RECENT_TOURNAMENTS_LIMIT = 10
