"""
Command Manager - execution history with undo/redo.

Runs commands, records every execution in a bounded history and walks
that history for undo/redo. Signals let a UI keep undo/redo actions in
sync without polling.
"""
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from loguru import logger

from ..events import Signal
from .base import BaseCommand, is_undoable
from .types import CommandResult, HistoryEntry

DEFAULT_HISTORY_SIZE = 50


class CommandManagerSignals:
    """Signals emitted by CommandManager."""

    def __init__(self):
        self.can_undo_changed = Signal("CanUndoChanged")
        self.can_redo_changed = Signal("CanRedoChanged")
        self.history_changed = Signal("HistoryChanged")


class CommandManager:
    """
    Executes commands and manages undo/redo over their history.

    Features:
    - Bounded history, oldest entries evicted first
    - Undo walks back to the newest successful, undoable entry
    - Redo replays the command's execute(); any new execute() clears redo
    - undo()/redo() return None when there is nothing to do

    Callers must not overlap execute/undo/redo calls; CommandBus
    serialises them for UI traffic.

    Usage:
        manager = CommandManager(max_history_size=20)
        await manager.execute(UpdateSettingsCommand(context, {"maxIterations": 100}))

        await manager.undo()   # previous settings restored
        await manager.redo()   # {"maxIterations": 100} again
    """

    def __init__(self, max_history_size: int = DEFAULT_HISTORY_SIZE):
        if max_history_size < 1:
            raise ValueError(f"max_history_size must be at least 1, got {max_history_size}")

        self._signals = CommandManagerSignals()
        self._history: List[HistoryEntry] = []
        self._redo_stack: List[HistoryEntry] = []
        self._max_history_size = max_history_size

        # Track previous state for signal emission
        self._last_can_undo = False
        self._last_can_redo = False

    @property
    def signals(self) -> CommandManagerSignals:
        return self._signals

    @property
    def max_history_size(self) -> int:
        return self._max_history_size

    async def execute(self, command: BaseCommand) -> CommandResult:
        """
        Execute a command and record it in history.

        Args:
            command: Command to run

        Returns:
            The command's result (failures are recorded too)
        """
        logger.debug(f"Executing command: {command.name}")

        result = await command.execute()

        self._history.append(HistoryEntry(command=command, result=result))

        # New action breaks the redo chain
        self._redo_stack.clear()

        self._trim_history()

        if result.success:
            logger.debug(f'Command "{command.name}" completed successfully')
        else:
            logger.warning(f'Command "{command.name}" failed: {result.message}')

        self._emit_state_changes()
        return result

    async def undo(self) -> Optional[CommandResult]:
        """
        Undo the newest successful, undoable entry that is not undone yet.

        Returns:
            The undo result, or None if nothing can be undone
        """
        entry = self._find_undo_candidate()
        if entry is None:
            logger.debug("Nothing to undo")
            return None

        logger.debug(f"Undoing command: {entry.command.name}")
        result = await entry.command.undo()

        if result.success:
            entry.undone = True
            self._redo_stack.append(entry)
            logger.info(f'Command "{entry.command.name}" undone')
            self._emit_state_changes()
        else:
            logger.warning(f'Failed to undo command "{entry.command.name}": {result.message}')

        return result

    async def redo(self) -> Optional[CommandResult]:
        """
        Re-execute the most recently undone command.

        Returns:
            The execution result, or None if nothing can be redone
        """
        if not self._redo_stack:
            logger.debug("Nothing to redo")
            return None

        entry = self._redo_stack.pop()
        logger.debug(f"Redoing command: {entry.command.name}")

        result = await entry.command.execute()

        if result.success:
            entry.undone = False
            entry.result = result
            entry.executed_at = datetime.now(timezone.utc)
            logger.info(f'Command "{entry.command.name}" redone')
        else:
            logger.warning(f'Failed to redo command "{entry.command.name}": {result.message}')
            # Put it back so redo can be retried
            self._redo_stack.append(entry)

        self._emit_state_changes()
        return result

    def can_undo(self) -> bool:
        return self._find_undo_candidate() is not None

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_description(self) -> Optional[str]:
        """Description of the command undo() would reverse."""
        entry = self._find_undo_candidate()
        return entry.command.description if entry else None

    @property
    def redo_description(self) -> Optional[str]:
        """Description of the command redo() would replay."""
        if self._redo_stack:
            return self._redo_stack[-1].command.description
        return None

    def get_history(self) -> Tuple[HistoryEntry, ...]:
        """History entries, oldest first."""
        return tuple(self._history)

    def clear_history(self) -> None:
        self._history.clear()
        self._redo_stack.clear()
        logger.debug("Command history cleared")
        self._emit_state_changes()

    def get_history_size(self) -> int:
        return len(self._history)

    def get_undo_stack_size(self) -> int:
        """Number of undone entries waiting for redo."""
        return len(self._redo_stack)

    def get_last_command(self) -> Optional[HistoryEntry]:
        return self._history[-1] if self._history else None

    def _find_undo_candidate(self) -> Optional[HistoryEntry]:
        for entry in reversed(self._history):
            if not entry.undone and entry.result.success and is_undoable(entry.command):
                return entry
        return None

    def _trim_history(self) -> None:
        excess = len(self._history) - self._max_history_size
        if excess > 0:
            del self._history[:excess]

    def _emit_state_changes(self) -> None:
        """Emit signals if can_undo/can_redo state changed."""
        current_can_undo = self.can_undo()
        current_can_redo = self.can_redo()

        if current_can_undo != self._last_can_undo:
            self._last_can_undo = current_can_undo
            self._signals.can_undo_changed.emit(current_can_undo)

        if current_can_redo != self._last_can_redo:
            self._last_can_redo = current_can_redo
            self._signals.can_redo_changed.emit(current_can_redo)

        self._signals.history_changed.emit()
