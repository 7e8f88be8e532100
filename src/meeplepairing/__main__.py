"""Interactive shell for Meeple Pairing.

Run ``python -m meeplepairing`` without arguments to open a prompt with
autocomplete over the same commands as the ``meeple-pairing`` CLI. With
arguments it behaves exactly like the CLI.
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
import random
import shlex
import sys
from typing import Dict, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from meeplepairing import APP_NAME, APP_VERSION, cli
from meeplepairing.constants import DEFAULT_DATA_FILE
from meeplepairing.storage import JsonFileStore
from meeplepairing.utils import setup_logger

logger = setup_logger(__name__)

EXIT_WORDS = ("exit", "quit", "q")

# Commands handled by the shell itself rather than the CLI parser
SHELL_COMMANDS = {
    "help": "List commands, or show the usage of one: help <command>",
    "exit": "Leave the shell (also quit or q)",
}


class Ansi:
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def paint(text: str, *codes: str) -> str:
    return "".join(codes) + text + Ansi.RESET


def subcommands(parser: argparse.ArgumentParser) -> Dict[str, argparse.ArgumentParser]:
    """Subcommand parsers of the CLI, keyed by command name."""
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return dict(action.choices)
    return {}


def command_summaries(parser: argparse.ArgumentParser) -> Dict[str, str]:
    """One-line description of every command the shell accepts."""
    summaries = {}
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            for choice in action._choices_actions:
                summaries[choice.dest] = choice.help or ""
    summaries.update(SHELL_COMMANDS)
    return summaries


def print_banner(data_file: str) -> None:
    print()
    print(paint(f"{APP_NAME} {APP_VERSION}", Ansi.BLUE, Ansi.BOLD))
    print(f"Data file: {paint(data_file, Ansi.BOLD)}")
    print(
        f"Type {paint('help', Ansi.BOLD)} for the command list, "
        f"{paint('exit', Ansi.BOLD)} to leave"
    )
    print()


def print_commands_list(parser: argparse.ArgumentParser) -> None:
    print(paint("Commands:", Ansi.BOLD))
    for name, summary in command_summaries(parser).items():
        print(f"  {paint(f'{name:12}', Ansi.GREEN)} {summary}")
    print()


def print_command_help(parser: argparse.ArgumentParser, command: str) -> None:
    """Show the argparse usage of ``command``, or the command list if unknown."""
    commands = subcommands(parser)
    if command in commands:
        print(commands[command].format_help())
    elif command in SHELL_COMMANDS:
        print(f"{command}: {SHELL_COMMANDS[command]}")
    else:
        print(paint(f"Unknown command: {command}", Ansi.RED))
        print_commands_list(parser)


def create_completer(parser: argparse.ArgumentParser) -> NestedCompleter:
    """Complete command names, then the options of the chosen command."""
    completions: Dict[str, Optional[WordCompleter]] = {}
    for name, subparser in subcommands(parser).items():
        options = sorted(
            option
            for option in subparser._option_string_actions
            if option not in ("-h", "--help")
        )
        completions[name] = WordCompleter(options) if options else None
    completions["help"] = WordCompleter(list(command_summaries(parser)))
    for word in EXIT_WORDS:
        completions[word] = None
    return NestedCompleter.from_nested_dict(completions)


def run_interactive_mode(data_file: str = DEFAULT_DATA_FILE, seed: Optional[int] = None) -> int:
    """Read commands until ``exit`` and run each one against ``data_file``."""
    parser = cli.create_parser()
    ctx = cli.CommandContext(JsonFileStore(data_file), random.Random(seed))
    known = subcommands(parser)
    print_banner(data_file)

    session = PromptSession(
        completer=create_completer(parser),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            line = session.prompt("meeple> ").strip()
        except KeyboardInterrupt:
            print(paint("Use 'exit' to leave", Ansi.YELLOW))
            continue
        except EOFError:
            break

        if not line:
            continue
        if line in EXIT_WORDS:
            break

        try:
            words = shlex.split(line)
        except ValueError as e:
            print(paint(f"Error: {e}", Ansi.RED))
            continue

        if words[0] in ("help", "?"):
            if len(words) > 1:
                print_command_help(parser, words[1])
            else:
                print_commands_list(parser)
            continue
        if words[0] not in known:
            print(paint(f"Unknown command: {words[0]}", Ansi.RED))
            continue

        try:
            args = parser.parse_args(words)
        except SystemExit:
            # argparse already printed the usage error
            continue
        logger.debug(f"Running shell command {words[0]}")
        cli.execute(args, ctx)

    print(paint("Goodbye!", Ansi.GREEN))
    return 0


def main() -> int:
    """Main entry point for ``python -m meeplepairing``."""
    if len(sys.argv) > 1:
        return cli.main()
    return run_interactive_mode()


if __name__ == "__main__":
    sys.exit(main())
