"""Command line interface for Meeple Pairing.

Every command reads and writes a single JSON data file, so a tournament can
be run one command at a time::

    meeple-pairing add-player Alice
    meeple-pairing create "Friday Night" --players-per-match 2
    meeple-pairing register "Friday Night" Alice Bob Carol
    meeple-pairing pair "Friday Night"
    meeple-pairing result match_0123abcd4567 Alice=42 Bob=37 --first Bob
    meeple-pairing standings "Friday Night"
"""

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

import argparse
import logging
import random
import sys
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from meeplepairing import APP_NAME, APP_VERSION
from meeplepairing.constants import (
    DEFAULT_DATA_FILE,
    DEFAULT_PLAYERS_PER_MATCH,
    MAX_PLAYERS_PER_MATCH,
    MIN_PLAYERS_PER_MATCH,
    TIEBREAK_NAMES,
)
from meeplepairing.controllers import (
    CircuitStandingsService,
    PlayerStatsService,
    ResultEntry,
    TournamentManager,
)
from meeplepairing.exceptions import EntityNotFoundException, MeeplePairingException
from meeplepairing.models import ByeSelection, Circuit, Player
from meeplepairing.models.tournament import PlayerStanding, Tournament
from meeplepairing.storage import JsonFileStore, Store
from meeplepairing.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


def parse_result_entry(value: str) -> ResultEntry:
    """Parse ``PLAYER=POINTS``.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed
    """
    player, sep, points = value.rpartition("=")
    if not sep or not player:
        raise argparse.ArgumentTypeError(f"Expected PLAYER=POINTS, got '{value}'")
    try:
        return ResultEntry(player_id=player, points=float(points))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid points in '{value}'") from None


def parse_players_per_match(value: str) -> int:
    size = int(value)
    if not MIN_PLAYERS_PER_MATCH <= size <= MAX_PLAYERS_PER_MATCH:
        raise argparse.ArgumentTypeError(
            f"Players per match must be between {MIN_PLAYERS_PER_MATCH} "
            f"and {MAX_PLAYERS_PER_MATCH}"
        )
    return size


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        prog="meeple-pairing",
        description="Swiss-style pairing and standings for board game tournaments",
    )
    parser.add_argument(
        "--data",
        default=DEFAULT_DATA_FILE,
        help=f"Tournament data file (default: {DEFAULT_DATA_FILE})",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible pairings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument(
        "--version", action="version", version=f"{APP_NAME} {APP_VERSION}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Players
    add_player = subparsers.add_parser("add-player", help="Create a player")
    add_player.add_argument("name", help="Display name")
    add_player.add_argument("--username")
    add_player.add_argument("--email")
    add_player.add_argument("--phone")
    add_player.add_argument("--age", type=int)
    add_player.set_defaults(func=cmd_add_player)

    players = subparsers.add_parser("players", help="List players")
    players.set_defaults(func=cmd_players)

    # Tournaments
    create = subparsers.add_parser("create", help="Create a tournament")
    create.add_argument("name", help="Tournament name")
    create.add_argument(
        "--players-per-match",
        type=parse_players_per_match,
        default=DEFAULT_PLAYERS_PER_MATCH,
        help="Match size, 2 to 4 (default: 2)",
    )
    create.add_argument(
        "--rounds", type=int, help="Fixed number of rounds (default: from player count)"
    )
    create.add_argument(
        "--date", type=date.fromisoformat, help="Date played, YYYY-MM-DD (default: today)"
    )
    create.add_argument(
        "--bye-selection",
        choices=[b.value for b in ByeSelection],
        help="How the bye player is chosen (default: worst)",
    )
    create.add_argument(
        "--allow-rematches", action="store_true", help="Do not try to avoid rematches"
    )
    create.add_argument(
        "--circuit", help="Circuit id or name the tournament counts towards"
    )
    create.add_argument(
        "--tiebreaks",
        help="Comma separated tiebreak order, from: " + ", ".join(TIEBREAK_NAMES),
    )
    create.set_defaults(func=cmd_create)

    tournaments = subparsers.add_parser("tournaments", help="List tournaments")
    tournaments.set_defaults(func=cmd_tournaments)

    register = subparsers.add_parser("register", help="Register players in a tournament")
    register.add_argument("tournament", help="Tournament id or name")
    register.add_argument("players", nargs="+", help="Player ids or names")
    register.set_defaults(func=cmd_register)

    # Play
    pair = subparsers.add_parser("pair", help="Generate the next round")
    pair.add_argument("tournament", help="Tournament id or name")
    pair.set_defaults(func=cmd_pair)

    result = subparsers.add_parser("result", help="Enter the result of a match")
    result.add_argument("match", help="Match id")
    result.add_argument(
        "entries", nargs="+", type=parse_result_entry, help="PLAYER=POINTS for every player"
    )
    result.add_argument("--first", help="Player who started the match")
    result.set_defaults(func=cmd_result)

    standings = subparsers.add_parser("standings", help="Show the standings")
    standings.add_argument("tournament", help="Tournament id or name")
    standings.set_defaults(func=cmd_standings)

    # Circuits
    add_circuit = subparsers.add_parser("add-circuit", help="Create a circuit")
    add_circuit.add_argument("name", help="Circuit name")
    add_circuit.add_argument("--description")
    add_circuit.add_argument("--start", type=date.fromisoformat, help="First day, YYYY-MM-DD")
    add_circuit.add_argument("--end", type=date.fromisoformat, help="Last day, YYYY-MM-DD")
    add_circuit.set_defaults(func=cmd_add_circuit)

    circuits = subparsers.add_parser("circuits", help="List circuits")
    circuits.set_defaults(func=cmd_circuits)

    circuit_standings = subparsers.add_parser(
        "circuit-standings", help="Cumulative standings of a circuit"
    )
    circuit_standings.add_argument("circuit", help="Circuit id or name")
    circuit_standings.set_defaults(func=cmd_circuit_standings)

    # Statistics
    h2h = subparsers.add_parser("h2h", help="Head-to-head record of two players")
    h2h.add_argument("player1")
    h2h.add_argument("player2")
    h2h.set_defaults(func=cmd_h2h)

    stats = subparsers.add_parser("stats", help="Career statistics of a player")
    stats.add_argument("player")
    stats.set_defaults(func=cmd_stats)

    return parser


# ========== Lookups ==========


def find_player(store: Store, ref: str) -> Player:
    """Find a player by id or, failing that, by case-insensitive name."""
    player = store.get_player(ref)
    if player is not None:
        return player
    matches = [p for p in store.list_players() if p.name.lower() == ref.lower()]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise EntityNotFoundException(f"Several players are named '{ref}', use the id")
    raise EntityNotFoundException(f"Player '{ref}' not found")


def find_tournament(store: Store, ref: str) -> Tournament:
    tournament = store.get_tournament(ref)
    if tournament is not None:
        return tournament
    matches = [t for t in store.list_tournaments() if t.name.lower() == ref.lower()]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise EntityNotFoundException(f"Several tournaments are named '{ref}', use the id")
    raise EntityNotFoundException(f"Tournament '{ref}' not found")


def find_circuit(store: Store, ref: str) -> Circuit:
    circuit = store.get_circuit(ref)
    if circuit is not None:
        return circuit
    for candidate in store.list_circuits():
        if candidate.name.lower() == ref.lower():
            return candidate
    raise EntityNotFoundException(f"Circuit '{ref}' not found")


# ========== Commands ==========


class CommandContext:
    """Store and services shared by the commands of one session."""

    def __init__(self, store: Store, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.manager = TournamentManager(store, rng)
        self.stats = PlayerStatsService(store, self.manager.standings_calculator)
        self.circuits = CircuitStandingsService(store)


def cmd_add_player(args: argparse.Namespace, ctx: CommandContext) -> int:
    metadata = {
        key: getattr(args, key)
        for key in ("username", "email", "phone", "age")
        if getattr(args, key) is not None
    }
    player = ctx.store.create_player(args.name, **metadata)
    print(f"Created player {player.name} ({player.id})")
    return 0


def cmd_players(args: argparse.Namespace, ctx: CommandContext) -> int:
    for player in sorted(ctx.store.list_players(), key=lambda p: p.name.lower()):
        print(f"{player.id}  {player.name}")
    return 0


def cmd_create(args: argparse.Namespace, ctx: CommandContext) -> int:
    config: Dict[str, Any] = {"avoid_rematches": not args.allow_rematches}
    if args.bye_selection:
        config["bye_selection"] = args.bye_selection
    if args.tiebreaks:
        config["tiebreak_criteria"] = [
            {"id": criterion.strip(), "order": order}
            for order, criterion in enumerate(args.tiebreaks.split(","), start=1)
        ]
    tournament = ctx.manager.create_tournament(
        args.name,
        players_per_match=args.players_per_match,
        number_of_rounds=args.rounds,
        played_on=args.date,
        config=config,
        circuit_id=find_circuit(ctx.store, args.circuit).id if args.circuit else None,
    )
    print(f"Created tournament {tournament.name} ({tournament.id})")
    return 0


def cmd_tournaments(args: argparse.Namespace, ctx: CommandContext) -> int:
    for tournament in ctx.store.list_tournaments():
        print(
            f"{tournament.id}  {tournament.played_on.isoformat()}  "
            f"{tournament.status.value:12} {tournament.name}"
        )
    return 0


def cmd_register(args: argparse.Namespace, ctx: CommandContext) -> int:
    tournament = find_tournament(ctx.store, args.tournament)
    for ref in args.players:
        player = find_player(ctx.store, ref)
        if ctx.manager.register_player(tournament.id, player.id):
            print(f"Registered {player.name}")
        else:
            print(f"{player.name} is already registered")
    return 0


def cmd_pair(args: argparse.Namespace, ctx: CommandContext) -> int:
    tournament = find_tournament(ctx.store, args.tournament)
    round_ = ctx.manager.generate_round(tournament.id)
    limit = ctx.manager.number_of_rounds(tournament.id)
    print(f"Round {round_.round_number} of {limit}")
    for match in ctx.manager.round_matches(round_.id):
        names = [find_player(ctx.store, pid).name for pid in match.player_ids]
        if match.is_bye:
            print(f"  Match {match.match_number}: {names[0]} (bye)")
        else:
            print(f"  Match {match.match_number}: {' vs '.join(names)}  [{match.id}]")
    return 0


def cmd_result(args: argparse.Namespace, ctx: CommandContext) -> int:
    entries = [
        ResultEntry(player_id=find_player(ctx.store, e.player_id).id, points=e.points)
        for e in args.entries
    ]
    first = find_player(ctx.store, args.first).id if args.first else None
    results = ctx.manager.submit_match_results(args.match, entries, first)
    for result in results:
        name = find_player(ctx.store, result.player_id).name
        print(
            f"  {result.position}. {name}: {result.points:g} points, "
            f"{result.tournament_points:g} tournament points"
        )
    return 0


def format_standings_table(
    rows: Sequence[PlayerStanding], criteria: List[str]
) -> List[str]:
    header = f"{'#':>3}  {'Player':20} {'Pts':>6} {'W':>3}"
    header += "".join(f" {c[:10]:>10}" for c in criteria)
    lines = [header]
    for row in rows:
        line = (
            f"{row.rank:>3}  {row.player_name[:20]:20} "
            f"{row.total_points:>6g} {row.wins:>3}"
        )
        line += "".join(f" {row.tiebreak_values.get(c, 0.0):>10g}" for c in criteria)
        lines.append(line)
    return lines


def cmd_standings(args: argparse.Namespace, ctx: CommandContext) -> int:
    tournament = find_tournament(ctx.store, args.tournament)
    config = ctx.manager.get_config(tournament.id)
    criteria = [c.id.value for c in config.enabled_criteria()]
    rows = ctx.manager.standings(tournament.id)
    print(f"{tournament.name} ({tournament.status.value})")
    for line in format_standings_table(rows, criteria):
        print(line)
    return 0


def cmd_add_circuit(args: argparse.Namespace, ctx: CommandContext) -> int:
    circuit = ctx.store.create_circuit(
        args.name, description=args.description, start_date=args.start, end_date=args.end
    )
    print(f"Created circuit {circuit.name} ({circuit.id})")
    return 0


def cmd_circuits(args: argparse.Namespace, ctx: CommandContext) -> int:
    for circuit in ctx.store.list_circuits():
        legs = len(ctx.store.list_circuit_tournaments(circuit.id))
        print(f"{circuit.id}  {circuit.name} ({legs} tournaments)")
    return 0


def cmd_circuit_standings(args: argparse.Namespace, ctx: CommandContext) -> int:
    circuit = find_circuit(ctx.store, args.circuit)
    rows = ctx.circuits.circuit_standings(circuit.id)
    print(circuit.name)
    print(f"{'#':>3}  {'Player':20} {'Pts':>6} {'T':>3} {'W':>3}")
    for row in rows:
        print(
            f"{row.rank:>3}  {row.player_name[:20]:20} {row.total_points:>6g} "
            f"{row.tournaments_played:>3} {row.wins:>3}"
        )
    return 0


def cmd_h2h(args: argparse.Namespace, ctx: CommandContext) -> int:
    player1 = find_player(ctx.store, args.player1)
    player2 = find_player(ctx.store, args.player2)
    record = ctx.stats.head_to_head(player1.id, player2.id)
    print(
        f"{player1.name} {record.player1_wins} - {record.player2_wins} {player2.name}"
        f" ({record.ties} ties, {len(record.matches)} matches)"
    )
    for match in record.matches:
        print(
            f"  {match.tournament}, round {match.round_number}: "
            f"{match.player1_position} ({match.player1_points:g}) vs "
            f"{match.player2_position} ({match.player2_points:g})"
        )
    return 0


def cmd_stats(args: argparse.Namespace, ctx: CommandContext) -> int:
    player = find_player(ctx.store, args.player)
    stats = ctx.stats.player_statistics(player.id)
    print(f"{player.name}")
    print(f"  Tournaments: {stats.tournaments_played}")
    print(f"  Tournament wins: {stats.tournament_wins}")
    print(f"  Matches: {stats.total_matches}")
    if stats.tournaments_played:
        print(
            f"  Rank: average {stats.average_rank:.2f}, "
            f"best {stats.best_rank}, worst {stats.worst_rank}"
        )
    for placement in stats.recent:
        print(
            f"  {placement.tournament.played_on.isoformat()} "
            f"{placement.tournament.name}: #{placement.rank} ({placement.points:g} pts)"
        )
    return 0


def execute(args: argparse.Namespace, ctx: CommandContext) -> int:
    """Run a parsed command, turning engine errors into exit code 1."""
    try:
        return args.func(args, ctx)
    except MeeplePairingException as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Command %s failed", args.command, exc_info=True)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        ctx = CommandContext(JsonFileStore(args.data), random.Random(args.seed))
        return execute(args, ctx)
    except MeeplePairingException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
