"""Command-line interface for running a Swiss tournament from a state file.

The state file holds the JSON snapshot produced by ``Tournament.to_dict()``.
This module is the only place where files are read or written.
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

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from swisspairing.constants import GAME_RESULTS, RESULT_BYE
from swisspairing.controllers.player import create_players
from swisspairing.controllers.tournament import RoundManager, StandingsEntry
from swisspairing.exceptions import SwissPairingException
from swisspairing.models.pairing import Pairing
from swisspairing.models.tournament import Tournament, TournamentConfig
from swisspairing.utils import set_package_level, setup_logger

logger = setup_logger(__name__)


def load_tournament(path: Path) -> Tournament:
    """Read a tournament snapshot from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        return Tournament.from_dict(json.load(f))


def save_tournament(tournament: Tournament, path: Path) -> None:
    """Write a tournament snapshot to ``path``."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(tournament.to_dict(), f, indent=2)
    logger.debug(f"Saved tournament state to {path}")


def format_pairings(pairings: Sequence[Pairing]) -> str:
    """Render a round's pairings as a text table."""
    lines = [f"{'Table':>5}  {'White':<28}{'Black':<28}Result"]
    for pairing in pairings:
        white = f"{pairing.white.display_name} ({pairing.white.rating})"
        if pairing.black is None:
            black = "-"
        else:
            black = f"{pairing.black.display_name} ({pairing.black.rating})"
        lines.append(
            f"{pairing.table:>5}  {white:<28}{black:<28}{pairing.result or ''}"
        )
    return "\n".join(lines)


def format_standings(entries: Sequence[StandingsEntry]) -> str:
    """Render standings as a text table."""
    lines = [f"{'Rank':>4}  {'Player':<28}{'Rating':>6}{'Score':>7}{'TB':>7}  Colours"]
    for entry in entries:
        lines.append(
            f"{entry.rank:>4}  {entry.player.display_name:<28}"
            f"{entry.player.rating:>6}{entry.score:>7.1f}{entry.tiebreak:>7.1f}"
            f"  {''.join(entry.colours)}"
        )
    return "\n".join(lines)


def cmd_start(args: argparse.Namespace) -> int:
    with open(args.players, "r", encoding="utf-8") as f:
        players = create_players(json.load(f))
    manager = RoundManager(Tournament(config=TournamentConfig(name=args.name)))
    pairings = manager.start(players, total_rounds=args.rounds)
    save_tournament(manager.tournament, Path(args.out))
    print(format_pairings(pairings))
    return 0


def cmd_result(args: argparse.Namespace) -> int:
    manager = RoundManager(load_tournament(Path(args.state)))
    result = None if args.result == "none" else args.result
    pairing = manager.record_result(args.table, result)
    save_tournament(manager.tournament, Path(args.state))
    print(f"Table {pairing.table}: {pairing.result or 'cleared'}")
    return 0


def cmd_advance(args: argparse.Namespace) -> int:
    manager = RoundManager(load_tournament(Path(args.state)))
    closed = manager.advance_round(args.round)
    save_tournament(manager.tournament, Path(args.state))
    t = manager.tournament
    if not closed:
        print("Round already closed.")
    elif t.is_completed:
        print("Tournament completed.")
        print(format_standings(manager.live_standings()))
    else:
        print(f"Round {t.current_round}")
        print(format_pairings(t.current_pairings))
    return 0


def cmd_pairings(args: argparse.Namespace) -> int:
    t = load_tournament(Path(args.state))
    round_number = args.round or t.current_round
    pairings = t.get_round(round_number)
    if pairings is None:
        logger.error(f"Round {round_number} does not exist")
        return 1
    print(f"Round {round_number}")
    print(format_pairings(pairings))
    return 0


def cmd_standings(args: argparse.Namespace) -> int:
    manager = RoundManager(load_tournament(Path(args.state)))
    print(format_standings(manager.live_standings()))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="swiss-pairing",
        description="Pair and score a Swiss-system chess tournament",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    start = sub.add_parser("start", help="Start a tournament and pair round 1")
    start.add_argument(
        "--players", required=True, help="JSON list of {name, rating} entries"
    )
    start.add_argument(
        "--rounds", type=int, help="Number of rounds (default: recommended)"
    )
    start.add_argument("--name", default="Untitled Tournament", help="Tournament name")
    start.add_argument("--out", required=True, help="State file to create")
    start.set_defaults(func=cmd_start)

    result = sub.add_parser("result", help="Record a result in the open round")
    result.add_argument("state", help="State file")
    result.add_argument("--table", type=int, required=True, help="Table number")
    result.add_argument(
        "--result",
        required=True,
        choices=list(GAME_RESULTS) + [RESULT_BYE, "none"],
        help="Result code, 'none' clears it",
    )
    result.set_defaults(func=cmd_result)

    advance = sub.add_parser("advance", help="Close the round and pair the next")
    advance.add_argument("state", help="State file")
    advance.add_argument("--round", type=int, help="Round to close (default: current)")
    advance.set_defaults(func=cmd_advance)

    pairings = sub.add_parser("pairings", help="Show a round's pairings")
    pairings.add_argument("state", help="State file")
    pairings.add_argument("--round", type=int, help="Round (default: current)")
    pairings.set_defaults(func=cmd_pairings)

    standings = sub.add_parser("standings", help="Show live standings")
    standings.add_argument("state", help="State file")
    standings.set_defaults(func=cmd_standings)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_package_level("DEBUG")

    try:
        return args.func(args)
    except SwissPairingException as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read or write state: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
