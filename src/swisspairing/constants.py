# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Bye scores (configurable per tournament)
FULL_POINT_BYE_SCORE = 1.0
HALF_POINT_BYE_SCORE = 0.5
ZERO_POINT_BYE_SCORE = 0.0
BYE_SCORE = FULL_POINT_BYE_SCORE
ALLOWED_BYE_SCORES = (FULL_POINT_BYE_SCORE, HALF_POINT_BYE_SCORE, ZERO_POINT_BYE_SCORE)

# Result codes (as stored on a pairing)
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_BYE = "BYE"
GAME_RESULTS = (RESULT_WHITE_WIN, RESULT_BLACK_WIN, RESULT_DRAW)

# (white points, black points) awarded per game result
RESULT_POINTS = {
    RESULT_WHITE_WIN: (WIN_SCORE, LOSS_SCORE),
    RESULT_BLACK_WIN: (LOSS_SCORE, WIN_SCORE),
    RESULT_DRAW: (DRAW_SCORE, DRAW_SCORE),
}

# Tournament status
STATUS_SETUP = "SETUP"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"
TOURNAMENT_STATUSES = (STATUS_SETUP, STATUS_IN_PROGRESS, STATUS_COMPLETED)

# Roster validation
MIN_RATING = 100
MAX_RATING = 3000
DEFAULT_RATING = 1200

# Fewest rounds recommended for any tournament
MIN_RECOMMENDED_ROUNDS = 3

# Short colour labels used in standings
COLOUR_LABELS = {"white": "W", "black": "B"}

# Environment variables read by the logger
ENV_LOG_LEVEL = "SWISSPAIRING_LOG_LEVEL"
ENV_LOG_FILE = "SWISSPAIRING_LOG_FILE"
