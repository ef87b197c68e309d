"""Swiss system pairing engine.

Round 1 pairs the top half of the rating list against the bottom half.
Later rounds pair score groups from the top down, cascading players that
cannot be matched into the next lower group, and finish with a deterministic
repair pass that may repeat opponents so that every player is seated.
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

from typing import Dict, List, Optional, Sequence, Tuple

from swisspairing.constants import RESULT_BYE
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.pairing.bye import ByeSelector
from swisspairing.pairing.colors import ColorAllocator, is_topscorer, rank_key
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

# (white, black) with black None for a bye
Board = Tuple[Player, Optional[Player]]


def _group_players_by_score(players: Sequence[Player]) -> Dict[float, List[Player]]:
    """Group players by their current score"""
    score_groups: Dict[float, List[Player]] = {}
    for player in players:
        score_groups.setdefault(player.score, []).append(player)
    return score_groups


def _number_tables(round_number: int, boards: List[Board]) -> List[Pairing]:
    """Turn boards into pairings with dense table numbers in generation order."""
    pairings = []
    for table, (white, black) in enumerate(boards, start=1):
        pairings.append(
            Pairing(
                round=round_number,
                table=table,
                white=white,
                black=black,
                result=RESULT_BYE if black is None else None,
            )
        )
    return pairings


class SwissPairingEngine:
    """Generates the pairings of one round from a roster snapshot.

    The engine keeps no state between calls and never mutates the players it
    is given; the returned pairings reference those same Player objects.
    """

    def __init__(
        self,
        color_allocator: Optional[ColorAllocator] = None,
        bye_selector: Optional[ByeSelector] = None,
    ) -> None:
        self.color_allocator = color_allocator or ColorAllocator()
        self.bye_selector = bye_selector or ByeSelector()

    # ========== Round 1 ==========

    def generate_initial_pairings(self, players: Sequence[Player]) -> List[Pairing]:
        """Pair round 1: rank i of the top half against rank i of the bottom half.

        The higher half always takes white. With an odd field the lowest
        rated player gets the bye on the last table.

        Args:
            players: The full roster

        Returns:
            Round 1 pairings in table order
        """
        ranked = sorted(players, key=rank_key)
        bye_player = ranked.pop() if len(ranked) % 2 == 1 else None

        half = len(ranked) // 2
        top, bottom = ranked[:half], ranked[half:]
        boards: List[Board] = [(top[i], bottom[i]) for i in range(half)]
        if bye_player is not None:
            logger.info(f"Round 1 bye: {bye_player.display_name} (lowest rated)")
            boards.append((bye_player, None))

        logger.info(f"Round 1: {half} games for {len(players)} players")
        return _number_tables(1, boards)

    # ========== Later rounds ==========

    def generate_next_round_pairings(
        self, players: Sequence[Player], round_number: int
    ) -> List[Pairing]:
        """Pair a round after the first.

        Args:
            players: The roster with aggregates as of the last closed round
            round_number: Number of the round being paired

        Returns:
            Pairings in table order, the bye (if any) on the last table
        """
        if not players:
            return []

        pool = list(players)
        bye_player = None
        if len(pool) % 2 == 1:
            bye_player = self.bye_selector.select(pool)
            pool = [p for p in pool if p is not bye_player]

        max_score = max(p.score for p in players)
        boards, residual = self._pair_score_groups(pool, max_score, round_number)
        boards.extend(self._repair(residual, round_number))

        if bye_player is not None:
            boards.append((bye_player, None))

        games = sum(1 for _, black in boards if black is not None)
        logger.info(
            f"Round {round_number}: {games} games for {len(players)} players"
            + (f", bye: {bye_player.display_name}" if bye_player else "")
        )
        return _number_tables(round_number, boards)

    def _pair_score_groups(
        self, pool: List[Player], max_score: float, round_number: int
    ) -> Tuple[List[Board], List[Player]]:
        """Constrained pass over the score groups, highest score first.

        Returns:
            Tuple of (boards, players left unmatched after the lowest group)
        """
        score_groups = _group_players_by_score(pool)
        boards: List[Board] = []
        cascaded: List[Player] = []

        for score in sorted(score_groups, reverse=True):
            group = sorted(cascaded + score_groups[score], key=rank_key)
            cascaded = []

            while len(group) >= 2:
                player1 = group.pop(0)
                opponent_idx = self._find_opponent(player1, group, max_score)
                if opponent_idx is None:
                    logger.debug(
                        f"Round {round_number}: {player1.display_name} has no legal "
                        f"opponent in score group {score}, cascading down"
                    )
                    cascaded.append(player1)
                    continue
                player2 = group.pop(opponent_idx)
                boards.append(self.color_allocator.assign_colors(player1, player2))

            cascaded.extend(group)

        return boards, cascaded

    def _find_opponent(
        self, player1: Player, candidates: List[Player], max_score: float
    ) -> Optional[int]:
        """Index of the first legal opponent for ``player1`` in ``candidates``."""
        for i, player2 in enumerate(candidates):
            if player1.has_played(player2.id):
                continue
            if (
                self.color_allocator.is_color_clash(player1, player2)
                and not is_topscorer(player1, max_score)
                and not is_topscorer(player2, max_score)
            ):
                continue
            return i
        return None

    def _repair(self, residual: List[Player], round_number: int) -> List[Board]:
        """Unconstrained pass over the players the score groups left unmatched.

        Players are taken in rating order. Each is paired with the first
        remaining player it has not met, or with the next remaining player
        when it has met them all. A single leftover gets a bye.
        """
        if not residual:
            return []

        remaining = sorted(residual, key=rank_key)
        logger.warning(
            f"Round {round_number}: fallback repair pairing {len(remaining)} "
            "remaining players (opponents may repeat)"
        )

        boards: List[Board] = []
        while len(remaining) >= 2:
            player1 = remaining.pop(0)
            idx = next(
                (i for i, p in enumerate(remaining) if not player1.has_played(p.id)),
                0,
            )
            player2 = remaining.pop(idx)
            if player1.has_played(player2.id):
                logger.warning(
                    f"Round {round_number}: forced repeat pairing "
                    f"{player1.display_name} vs {player2.display_name}"
                )
            boards.append(self.color_allocator.assign_colors(player1, player2))

        if remaining:
            last_player = remaining[0]
            logger.warning(
                f"Round {round_number}: last unpaired player "
                f"{last_player.display_name} receives a residual bye after fallback repair"
            )
            boards.append((last_player, None))

        return boards


_default_engine = SwissPairingEngine()


def generate_initial_pairings(players: Sequence[Player]) -> List[Pairing]:
    """Round 1 pairings using the default engine."""
    return _default_engine.generate_initial_pairings(players)


def generate_next_round_pairings(
    players: Sequence[Player], round_number: int
) -> List[Pairing]:
    """Pairings for ``round_number`` (2 or later) using the default engine."""
    return _default_engine.generate_next_round_pairings(players, round_number)
