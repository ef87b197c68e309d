"""Data model for tournament configuration."""

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

import math
from dataclasses import dataclass
from typing import Any, Dict

from swisspairing.constants import (
    ALLOWED_BYE_SCORES,
    BYE_SCORE,
    MIN_RECOMMENDED_ROUNDS,
)
from swisspairing.exceptions import InvalidConfigurationException


def recommended_rounds(player_count: int) -> int:
    """Recommended number of rounds for a field of ``player_count`` players.

    The standard formula is ceil(log2(P)), never going below three rounds.
    """
    if player_count < 5:
        return MIN_RECOMMENDED_ROUNDS
    return max(MIN_RECOMMENDED_ROUNDS, math.ceil(math.log2(player_count)))


@dataclass
class TournamentConfig:
    """Configuration settings for a tournament.

    Attributes:
        name: Tournament name
        total_rounds: Number of rounds in the tournament
        bye_score: Points awarded for a pairing-allocated bye
    """

    name: str = "Untitled Tournament"
    total_rounds: int = MIN_RECOMMENDED_ROUNDS
    bye_score: float = BYE_SCORE

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationException if any setting is out of range."""
        if not isinstance(self.total_rounds, int) or self.total_rounds < 1:
            raise InvalidConfigurationException(
                f"total_rounds must be a positive integer, got {self.total_rounds!r}"
            )
        if self.bye_score not in ALLOWED_BYE_SCORES:
            raise InvalidConfigurationException(
                f"bye_score must be one of {ALLOWED_BYE_SCORES}, got {self.bye_score!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "totalRounds": self.total_rounds,
            "byeScore": self.bye_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        try:
            return cls(
                name=data.get("name", "Untitled Tournament"),
                total_rounds=int(data["totalRounds"]),
                bye_score=float(data.get("byeScore", BYE_SCORE)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid configuration: {e}") from e
