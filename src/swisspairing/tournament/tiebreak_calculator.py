"""Tiebreak calculation for tournaments.

Only the plain Buchholz (sum of opponents' scores) is computed. Cut and
median variants are not applied.
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

from typing import Dict, Mapping, Optional, Sequence, Tuple

from swisspairing.models.player import Player
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class TiebreakCalculator:
    """Calculates Buchholz tiebreak scores for tournament standings.

    Values are always computed on demand from the full player pool, since
    opponents' scores change every round.
    """

    def buchholz(
        self,
        player: Player,
        full_pool: Sequence[Player],
        scores: Optional[Mapping[int, float]] = None,
    ) -> float:
        """Sum of the current scores of every opponent the player has faced.

        Args:
            player: The player to calculate for
            full_pool: Every player of the tournament, never a subset
            scores: Optional score override by id (e.g. live projected scores)

        Returns:
            The Buchholz score, 0 for a player without games
        """
        if not player.opponents:
            return 0.0

        lookup = self._score_lookup(full_pool, scores)
        total = 0.0
        for opp_id in player.opponents:
            opp_score = lookup.get(opp_id)
            if opp_score is None:
                logger.warning(
                    f"Opponent {opp_id} of {player.display_name} is not in the pool"
                )
                continue
            total += opp_score
        return total

    def calculate_all_tiebreaks(
        self,
        players: Sequence[Player],
        scores: Optional[Mapping[int, float]] = None,
    ) -> Dict[int, float]:
        """Calculate the tiebreak of every player.

        Args:
            players: The full player pool
            scores: Optional score override by id

        Returns:
            Mapping of player id to tiebreak value
        """
        lookup = self._score_lookup(players, scores)
        return {p.id: self.buchholz(p, players, lookup) for p in players}

    def sort_key(
        self, player: Player, score: float, tiebreak: float
    ) -> Tuple[float, float, int, int]:
        """Standings order: score, then tiebreak, then rating, all descending."""
        return (-score, -tiebreak, -player.rating, player.id)

    @staticmethod
    def _score_lookup(
        pool: Sequence[Player], scores: Optional[Mapping[int, float]]
    ) -> Dict[int, float]:
        lookup = {p.id: p.score for p in pool}
        if scores:
            lookup.update(scores)
        return lookup


_default_calculator = TiebreakCalculator()


def compute_tie_break(player: Player, full_pool: Sequence[Player]) -> float:
    """Buchholz of ``player`` looked up in ``full_pool``."""
    return _default_calculator.buchholz(player, full_pool)
