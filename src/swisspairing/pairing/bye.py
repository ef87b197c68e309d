"""Bye selection for odd-sized pairing pools."""

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

from typing import List, Optional, Sequence, Tuple

from swisspairing.models.player import Player
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def bye_order_key(player: Player) -> Tuple[float, int, int]:
    """Lowest score first, then lowest rating, then highest id."""
    return (player.score, player.rating, -player.id)


class ByeSelector:
    """Picks the bye recipient from an odd-sized pool."""

    def candidates(self, players: Sequence[Player]) -> List[Player]:
        """Players in bye order, lowest score group and rating first."""
        return sorted(players, key=bye_order_key)

    def select(self, players: Sequence[Player]) -> Optional[Player]:
        """Select the bye player.

        The first candidate who has not had a bye is chosen. When every
        candidate already had one, the first candidate overall receives a
        repeated bye and a warning is logged.

        Args:
            players: The pool to choose from

        Returns:
            The bye player, or None for an empty pool
        """
        ordered = self.candidates(players)
        if not ordered:
            return None

        for player in ordered:
            if not player.had_bye:
                logger.debug(
                    f"Bye assigned to {player.display_name} "
                    f"(score {player.score}, rating {player.rating})"
                )
                return player

        fallback = ordered[0]
        logger.warning(
            "All eligible players have already received a bye. "
            f"Assigning a repeated bye to {fallback.display_name}."
        )
        return fallback
