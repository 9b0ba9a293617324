from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CommandName(str, Enum):
    hoopshot = "hoopshot"
    hooptourney = "hooptourney"


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: CommandName
    description: str
    is_tournament: bool


COMMAND_SPECS: dict[CommandName, CommandSpec] = {
    CommandName.hoopshot: CommandSpec(
        CommandName.hoopshot,
        "Play the moving hoop challenge - time your shot perfectly!",
        is_tournament=False,
    ),
    CommandName.hooptourney: CommandSpec(
        CommandName.hooptourney,
        "Start a multiplayer tournament - everyone gets one shot!",
        is_tournament=True,
    ),
}


def resolve_command(command: CommandName | str) -> CommandSpec:
    """Look up a slash command. Raises ValueError for unknown commands."""

    name = CommandName(command.lstrip("/")) if not isinstance(command, CommandName) else command
    return COMMAND_SPECS[name]
