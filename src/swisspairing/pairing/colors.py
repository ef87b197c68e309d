"""Colour preference classification and colour allocation.

FIDE Article 1.6.2 preference strengths, resolved per Article 5.2.
"""

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

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from swisspairing.models.player import Player
from swisspairing.type_hints import BLACK, WHITE, Colour
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class PreferenceStrength(IntEnum):
    """Strength of a colour preference; the integer value is the total order."""

    NONE = 0
    MILD = 1
    STRONG = 2
    ABSOLUTE = 3


@dataclass(frozen=True)
class ColorPreference:
    """A colour preference: a strength tag carrying a colour.

    ``NONE`` is the only strength without a colour.
    """

    strength: PreferenceStrength
    colour: Optional[Colour] = None

    def __post_init__(self) -> None:
        if (self.strength == PreferenceStrength.NONE) != (self.colour is None):
            raise ValueError(
                f"{self.strength.name} preference cannot carry colour {self.colour!r}"
            )

    @classmethod
    def none(cls) -> "ColorPreference":
        return cls(PreferenceStrength.NONE)

    @classmethod
    def mild(cls, colour: Colour) -> "ColorPreference":
        return cls(PreferenceStrength.MILD, colour)

    @classmethod
    def strong(cls, colour: Colour) -> "ColorPreference":
        return cls(PreferenceStrength.STRONG, colour)

    @classmethod
    def absolute(cls, colour: Colour) -> "ColorPreference":
        return cls(PreferenceStrength.ABSOLUTE, colour)

    @property
    def is_absolute(self) -> bool:
        return self.strength == PreferenceStrength.ABSOLUTE


def _opposite(colour: Colour) -> Colour:
    return BLACK if colour == WHITE else WHITE


def classify_preference(player: Player) -> ColorPreference:
    """Classify the colour preference implied by a player's colour history.

    - Absolute: colour difference beyond +/-1, or the same colour in the two
      latest games (the opposite colour is wanted)
    - Strong: colour difference of exactly +/-1
    - Mild: balanced history, alternate from the last game
    - None: no games played yet
    """
    if not player.color_history:
        return ColorPreference.none()

    diff = player.color_difference
    last, second_last = player.get_last_two_colors()

    if diff > 1 or last == second_last == WHITE:
        return ColorPreference.absolute(BLACK)
    # Two blacks in a row demand white, mirroring the two-whites rule
    if diff < -1 or last == second_last == BLACK:
        return ColorPreference.absolute(WHITE)

    if diff == 1:
        return ColorPreference.strong(BLACK)
    if diff == -1:
        return ColorPreference.strong(WHITE)

    return ColorPreference.mild(_opposite(last))


def rank_key(player: Player) -> Tuple[int, int]:
    """Sort key placing the higher ranked player first.

    Higher rating ranks higher; equal ratings fall back to the lower id.
    """
    return (-player.rating, player.id)


def is_topscorer(player: Player, max_score: float) -> bool:
    """A topscorer holds more than half of the current maximum score."""
    return player.score > max_score / 2


class ColorAllocator:
    """Decides which of two matched players receives white.

    The decision is symmetric: ``assign_colors(a, b)`` and
    ``assign_colors(b, a)`` always return the same (white, black) tuple.
    """

    def preference(self, player: Player) -> ColorPreference:
        return classify_preference(player)

    def is_color_clash(self, p1: Player, p2: Player) -> bool:
        """Both players hold an absolute preference for the same colour."""
        pref1 = self.preference(p1)
        pref2 = self.preference(p2)
        return pref1.is_absolute and pref2.is_absolute and pref1.colour == pref2.colour

    def assign_colors(self, p1: Player, p2: Player) -> Tuple[Player, Player]:
        """Assign colours to a matched pair.

        Args:
            p1: First player of the pair
            p2: Second player of the pair

        Returns:
            Tuple of (white_player, black_player)
        """
        pref1 = self.preference(p1)
        pref2 = self.preference(p2)
        white, black = self._resolve(p1, pref1, p2, pref2)
        logger.debug(
            f"Colours: {white.display_name} ({self.preference(white).strength.name}) "
            f"white vs {black.display_name} ({self.preference(black).strength.name}) black"
        )
        return white, black

    def _resolve(
        self,
        p1: Player,
        pref1: ColorPreference,
        p2: Player,
        pref2: ColorPreference,
    ) -> Tuple[Player, Player]:
        # 5.2.1: grant both preferences if compatible
        if pref1.colour and pref2.colour and pref1.colour != pref2.colour:
            return _grant(p1, p2, pref1.colour)

        # 5.2.2: grant the stronger preference
        if pref1.strength > pref2.strength:
            return _grant(p1, p2, pref1.colour)
        if pref2.strength > pref1.strength:
            return _grant(p2, p1, pref2.colour)

        # Both absolute for the same colour: the wider colour difference wins
        if pref1.is_absolute and pref2.is_absolute:
            diff1 = abs(p1.color_difference)
            diff2 = abs(p2.color_difference)
            if diff1 > diff2:
                return _grant(p1, p2, pref1.colour)
            if diff2 > diff1:
                return _grant(p2, p1, pref2.colour)

        # 5.2.4: grant the preference of the higher ranked player
        higher, lower = sorted((p1, p2), key=rank_key)
        higher_pref = pref1 if higher is p1 else pref2
        if higher_pref.colour:
            return _grant(higher, lower, higher_pref.colour)

        # No preference to resolve: higher ranked player takes white
        return higher, lower


def _grant(player: Player, other: Player, colour: Colour) -> Tuple[Player, Player]:
    """Give ``colour`` to ``player`` and return (white, black)."""
    return (player, other) if colour == WHITE else (other, player)


_default_allocator = ColorAllocator()


def assign_colors(p1: Player, p2: Player) -> Tuple[Player, Player]:
    """Module-level shortcut for :meth:`ColorAllocator.assign_colors`."""
    return _default_allocator.assign_colors(p1, p2)
