"""
Command Pattern - Base Classes.

Provides:
- BaseCommand: template for every command, with failure containment
- UndoableCommand: command that captures state before mutating it

Example:
    class RenameProjectCommand(UndoableCommand):
        name = "renameProject"
        description = "Rename the active project"

        def __init__(self, context, new_name):
            super().__init__(context)
            self.new_name = new_name

        async def _do_execute(self):
            self.capture_state(self.context.get_settings())
            ...
            return self.success("Project renamed")

        async def _do_undo(self):
            ...
"""
import copy
from abc import ABC, abstractmethod
from typing import Any, Optional

from loguru import logger

from .types import CommandResult, ControllerContext

NO_PREVIOUS_STATE_MESSAGE = "Cannot undo - no previous state captured"

_NO_STATE = object()


def describe_error(error: BaseException) -> str:
    """Human readable text for an exception, falling back to its class name."""
    return str(error) or error.__class__.__name__


class BaseCommand(ABC):
    """
    Base class for all commands.

    ``execute()`` and ``undo()`` never raise: any exception from the
    subclass hook is logged and returned as a failed CommandResult that
    carries the original exception.
    """
    name: str = ""
    description: str = ""

    def __init__(self, context: ControllerContext):
        self.context = context

    @property
    def can_undo(self) -> bool:
        return False

    async def execute(self) -> CommandResult:
        try:
            return await self._do_execute()
        except Exception as e:
            message = f'Command "{self.name}" failed: {describe_error(e)}'
            logger.opt(exception=e).error(message)
            return self.failure(message, e)

    async def undo(self) -> CommandResult:
        try:
            return await self._do_undo()
        except Exception as e:
            message = f'Undo of command "{self.name}" failed: {describe_error(e)}'
            logger.opt(exception=e).error(message)
            return self.failure(message, e)

    @abstractmethod
    async def _do_execute(self) -> CommandResult:
        """Perform the command's work."""

    async def _do_undo(self) -> CommandResult:
        return self.failure(f'Command "{self.name}" does not support undo')

    def success(self, message: Optional[str] = None, data: Any = None) -> CommandResult:
        return CommandResult.ok(message, data)

    def failure(self, message: str, error: Optional[BaseException] = None) -> CommandResult:
        return CommandResult.fail(message, error)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class UndoableCommand(BaseCommand):
    """
    Command whose effects can be reversed.

    Subclasses call ``capture_state()`` before mutating shared state and
    read ``previous_state`` back in ``_do_undo()``. Undo before any
    capture fails with NO_PREVIOUS_STATE_MESSAGE.
    """

    def __init__(self, context: ControllerContext):
        super().__init__(context)
        self._previous_state: Any = _NO_STATE

    @property
    def can_undo(self) -> bool:
        return True

    @property
    def has_captured_state(self) -> bool:
        return self._previous_state is not _NO_STATE

    @property
    def previous_state(self) -> Any:
        return None if self._previous_state is _NO_STATE else self._previous_state

    def capture_state(self, state: Any) -> None:
        # Copied so later in-place edits by the controller cannot leak into undo
        try:
            self._previous_state = copy.deepcopy(state)
            return
        except (TypeError, copy.Error) as e:
            logger.debug(f"{self.name}: state not deep-copyable ({describe_error(e)}), using a shallow copy")

        try:
            self._previous_state = copy.copy(state)
        except (TypeError, copy.Error):
            self._previous_state = state

    async def undo(self) -> CommandResult:
        if not self.has_captured_state:
            return self.failure(NO_PREVIOUS_STATE_MESSAGE)
        return await super().undo()

    @abstractmethod
    async def _do_undo(self) -> CommandResult:
        """Reverse the command using ``previous_state``."""


def is_undoable(command: BaseCommand) -> bool:
    """True when the command reports undo support and exposes undo()."""
    return bool(getattr(command, "can_undo", False)) and callable(getattr(command, "undo", None))
