import pytest

from meeplepairing.__main__ import (
    SHELL_COMMANDS,
    command_summaries,
    create_completer,
    print_command_help,
    print_commands_list,
    subcommands,
)
from meeplepairing.cli import create_parser


@pytest.fixture
def parser():
    return create_parser()


def test_subcommands_come_from_the_cli(parser):
    assert set(subcommands(parser)) == {
        "add-player",
        "players",
        "create",
        "tournaments",
        "register",
        "pair",
        "result",
        "standings",
        "h2h",
        "stats",
        "add-circuit",
        "circuits",
        "circuit-standings",
    }


def test_summaries_include_shell_commands(parser):
    summaries = command_summaries(parser)
    assert summaries["pair"] == "Generate the next round"
    assert set(SHELL_COMMANDS) <= set(summaries)


def test_completer_offers_command_options(parser):
    completer = create_completer(parser)
    assert {"create", "help", "exit", "quit"} <= set(completer.options)
    assert completer.options["players"] is None
    assert "--players-per-match" in completer.options["create"].words
    assert "--help" not in completer.options["create"].words


def test_help_for_known_and_unknown_commands(parser, capsys):
    print_command_help(parser, "create")
    assert "--players-per-match" in capsys.readouterr().out

    print_command_help(parser, "exit")
    assert "Leave the shell" in capsys.readouterr().out

    print_command_help(parser, "dance")
    out = capsys.readouterr().out
    assert "Unknown command: dance" in out
    assert "standings" in out


def test_commands_list(parser, capsys):
    print_commands_list(parser)
    out = capsys.readouterr().out
    for command in command_summaries(parser):
        assert command in out
