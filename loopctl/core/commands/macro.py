"""
Macro Command - run several commands as one unit.

Example:
    macro = MacroCommand(context, [
        UpdateRequirementsCommand(context, requirements),
        UpdateSettingsCommand(context, settings),
    ], name="applyProfile")
    await manager.execute(macro)

    # Single undo reverts both changes, last one first
    await manager.undo()
"""
from typing import Any, List, Optional, Sequence, Tuple

from .arguments import MacroArgs, parse_arguments
from .base import BaseCommand, is_undoable
from .types import CommandNames, CommandResult, ControllerContext


class MacroCommand(BaseCommand):
    """
    Executes member commands in order and stops at the first failure.

    Members that already ran keep their effects when a later one fails;
    undo() reverses only the members that ran, in reverse order. The
    macro is undoable only when it is non-empty and every member is.
    """

    def __init__(
        self,
        context: ControllerContext,
        commands: Sequence[BaseCommand],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ):
        super().__init__(context)
        self._commands: Tuple[BaseCommand, ...] = tuple(commands)
        self._executed: List[BaseCommand] = []

        member_names = [cmd.name for cmd in self._commands]
        self.name = name or f"{CommandNames.MACRO}:{'+'.join(member_names)}"
        self.description = description or (
            f"Execute {len(self._commands)} commands: {', '.join(member_names)}"
        )
        self._can_undo = bool(self._commands) and all(cmd.can_undo for cmd in self._commands)

    @property
    def can_undo(self) -> bool:
        return self._can_undo

    @property
    def commands(self) -> Tuple[BaseCommand, ...]:
        return self._commands

    @property
    def executed_commands(self) -> Tuple[BaseCommand, ...]:
        return tuple(self._executed)

    def get_command_count(self) -> int:
        return len(self._commands)

    async def _do_execute(self) -> CommandResult:
        self._executed = []
        results: List[CommandResult] = []

        for command in self._commands:
            result = await command.execute()
            results.append(result)

            if not result.success:
                return self.failure(
                    f'Macro failed at command "{command.name}": {result.message}',
                    result.error,
                )
            self._executed.append(command)

        return self.success(
            f"Macro completed successfully: {len(self._executed)} commands executed",
            {"results": results},
        )

    async def _do_undo(self) -> CommandResult:
        if not self.can_undo:
            return self.failure("This macro cannot be undone - not all commands are undoable")

        undo_results: List[CommandResult] = []

        while self._executed:
            command = self._executed[-1]
            if not is_undoable(command):
                return self.failure(f'Macro undo failed at command "{command.name}": command is not undoable')

            result = await command.undo()
            undo_results.append(result)

            if not result.success:
                return self.failure(
                    f'Macro undo failed at command "{command.name}": {result.message}',
                    result.error,
                )
            self._executed.pop()

        return self.success(
            f"Macro undo completed successfully: {len(undo_results)} commands undone",
            {"undo_results": undo_results},
        )


def create_macro_command(
    context: ControllerContext,
    commands: Any = None,
    name: Any = None,
    description: Any = None,
) -> MacroCommand:
    args = parse_arguments(
        CommandNames.MACRO,
        MacroArgs,
        commands=[] if commands is None else commands,
        name=name,
        description=description,
    )
    return MacroCommand(context, args.commands, args.name, args.description)
