"""
Command layer exceptions.

These are raised only while looking up or constructing commands.
Executing, undoing or redoing a command reports failure through
CommandResult instead.
"""


class CommandError(Exception):
    """Base class for command layer errors."""


class UnknownCommandError(CommandError, KeyError):
    """No factory is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No command registered as '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class CommandArgumentError(CommandError, ValueError):
    """A factory received arguments of the wrong shape."""

    def __init__(self, command_name: str, detail: str):
        self.command_name = command_name
        self.detail = detail
        super().__init__(f"Invalid arguments for command '{command_name}': {detail}")
