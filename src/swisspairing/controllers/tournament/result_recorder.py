"""Result recording and round aggregation for tournaments.

This module handles entering results on a round's pairings and deriving the
players' aggregates (score, opponents, colours, bye) from finished rounds.
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

from typing import Dict, List, Sequence

from swisspairing.constants import BYE_SCORE, GAME_RESULTS, RESULT_BYE, RESULT_POINTS
from swisspairing.exceptions import (
    InvalidResultException,
    PlayerNotFoundException,
    TableNotFoundException,
)
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.type_hints import BLACK, WHITE, MaybeResult
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def find_table_index(pairings: Sequence[Pairing], table: int) -> int:
    """Index of ``table`` in ``pairings``, -1 when absent."""
    for idx, pairing in enumerate(pairings):
        if pairing.table == table:
            return idx
    return -1


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Replacing the result of a single table (idempotent)
    - Deriving updated player aggregates from a finished round
    - Rebuilding every aggregate from the full round history
    """

    def __init__(self, bye_score: float = BYE_SCORE) -> None:
        self.bye_score = bye_score

    def record_result(
        self, pairings: Sequence[Pairing], table: int, result: MaybeResult
    ) -> List[Pairing]:
        """Return a copy of ``pairings`` with ``table``'s result replaced.

        Recording the same result twice gives the same list. ``None`` clears
        a game result.

        Raises:
            TableNotFoundException: If the table is not part of the round
            InvalidResultException: If the result does not fit the table
        """
        idx = find_table_index(pairings, table)
        if idx == -1:
            logger.error(f"Cannot record result: table {table} not found")
            raise TableNotFoundException(f"Table {table} is not in this round")

        pairing = pairings[idx]
        self._validate_result(pairing, result)

        updated = list(pairings)
        updated[idx] = pairing.with_result(result)
        logger.debug(f"Round {pairing.round} table {table}: result {result}")
        return updated

    def _validate_result(self, pairing: Pairing, result: MaybeResult) -> None:
        if pairing.is_bye:
            if result != RESULT_BYE:
                logger.error(
                    f"Table {pairing.table} is a bye, result {result!r} rejected"
                )
                raise InvalidResultException(
                    f"Table {pairing.table} is a bye and only accepts {RESULT_BYE}"
                )
            return
        if result is not None and result not in GAME_RESULTS:
            logger.error(f"Invalid result {result!r} for table {pairing.table}")
            raise InvalidResultException(
                f"Result must be one of {GAME_RESULTS} or None, got {result!r}"
            )

    def apply_round(
        self, players: Sequence[Player], pairings: Sequence[Pairing]
    ) -> List[Player]:
        """Derive the players' aggregates after a finished round.

        The input players are not modified; new Player objects are returned in
        the input order.

        Raises:
            PlayerNotFoundException: If a pairing seats a player missing from
                ``players``
        """
        updated: Dict[int, Player] = {p.id: p.copy() for p in players}
        for pairing in pairings:
            for player_id in pairing.player_ids:
                if player_id not in updated:
                    logger.error(
                        f"Round {pairing.round} table {pairing.table}: "
                        f"player {player_id} is not on the roster"
                    )
                    raise PlayerNotFoundException(
                        f"Player {player_id} is not on the roster"
                    )

        for pairing in pairings:
            if pairing.black is None:
                bye_player = updated[pairing.white.id]
                bye_player.score += self.bye_score
                bye_player.had_bye = True
                continue

            white = updated[pairing.white.id]
            black = updated[pairing.black.id]
            white.opponents.append(black.id)
            black.opponents.append(white.id)
            white.color_history.append(WHITE)
            black.color_history.append(BLACK)

            if pairing.result in RESULT_POINTS:
                white_points, black_points = RESULT_POINTS[pairing.result]
                white.score += white_points
                black.score += black_points
            else:
                logger.warning(
                    f"Round {pairing.round} table {pairing.table} has no result, "
                    "no points awarded"
                )

        return [updated[p.id] for p in players]

    def recalculate(
        self,
        initial_players: Sequence[Player],
        pairings_history: Sequence[Sequence[Pairing]],
    ) -> List[Player]:
        """Rebuild all aggregates from scratch by replaying every round."""
        players = [p.reset() for p in initial_players]
        for round_pairings in pairings_history:
            players = self.apply_round(players, round_pairings)
        logger.info(f"Recalculated aggregates over {len(pairings_history)} rounds")
        return players
