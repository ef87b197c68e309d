"""A chess player in a Swiss tournament."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from swisspairing.exceptions import InvalidSnapshotException
from swisspairing.type_hints import BLACK, WHITE, Colour


@dataclass
class Player:
    """Represents a player in the tournament.

    Attributes:
        id: Stable integer identifier
        rating: Player's chess rating
        name: Display name (optional)
        score: Accumulated score after the last closed round
        opponents: Ids of the opponents faced, in round order
        color_history: Colours played, one entry per non-bye round
        had_bye: Whether the player has received a bye
    """

    id: int
    rating: int
    name: str = ""
    score: float = 0.0
    opponents: List[int] = field(default_factory=list)
    color_history: List[Colour] = field(default_factory=list)
    had_bye: bool = False

    @property
    def display_name(self) -> str:
        """Name to show in logs and tables."""
        return self.name or f"#{self.id}"

    @property
    def white_count(self) -> int:
        return self.color_history.count(WHITE)

    @property
    def black_count(self) -> int:
        return self.color_history.count(BLACK)

    @property
    def color_difference(self) -> int:
        """White games minus black games."""
        return self.white_count - self.black_count

    def get_last_two_colors(self) -> Tuple[Optional[Colour], Optional[Colour]]:
        """Get the colors of the last two games played.

        Returns:
            Tuple of (last_color, second_last_color), with None if not enough games
        """
        if len(self.color_history) >= 2:
            return self.color_history[-1], self.color_history[-2]
        elif len(self.color_history) == 1:
            return self.color_history[-1], None
        return None, None

    def has_played(self, other_id: int) -> bool:
        return other_id in self.opponents

    def copy(self) -> "Player":
        """Return an independent copy; history lists are not shared."""
        return Player(
            id=self.id,
            rating=self.rating,
            name=self.name,
            score=self.score,
            opponents=list(self.opponents),
            color_history=list(self.color_history),
            had_bye=self.had_bye,
        )

    def reset(self) -> "Player":
        """Return a copy with all tournament history cleared."""
        return Player(id=self.id, rating=self.rating, name=self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "score": self.score,
            "opponents": list(self.opponents),
            "colorHistory": list(self.color_history),
            "hadBye": self.had_bye,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary.

        Accepts ``elo`` as an alias of ``rating``.
        """
        try:
            rating = data["rating"] if "rating" in data else data["elo"]
            colours = list(data.get("colorHistory", []))
            for colour in colours:
                if colour not in (WHITE, BLACK):
                    raise ValueError(f"unknown colour {colour!r}")
            player = cls(
                id=int(data["id"]),
                rating=int(rating),
                name=str(data.get("name", "")),
                score=float(data.get("score", 0.0)),
                opponents=[int(o) for o in data.get("opponents", [])],
                color_history=colours,
                had_bye=bool(data.get("hadBye", False)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSnapshotException(f"Invalid player record {data!r}: {e}") from e
        if len(player.opponents) != len(player.color_history):
            raise InvalidSnapshotException(
                f"Player {player.id}: opponents and colorHistory lengths differ"
            )
        return player
