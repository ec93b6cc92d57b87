"""
Command System.

Provides Command pattern infrastructure:
- BaseCommand / UndoableCommand: command templates with failure containment
- MacroCommand: ordered group of commands executed as one
- CommandRegistry: build commands by name
- CommandManager: bounded history with undo/redo
- CommandBus: UI message entry point (service)
- Built-in controller commands (loop control, tasks, PRD/settings)
"""
from .types import CommandResult, HistoryEntry, CommandNames, ControllerContext, CommandFactory
from .errors import CommandError, CommandArgumentError, UnknownCommandError
from .base import BaseCommand, UndoableCommand, is_undoable, NO_PREVIOUS_STATE_MESSAGE
from .control import (
    StartLoopCommand,
    StopLoopCommand,
    PauseLoopCommand,
    ResumeLoopCommand,
    RunSingleStepCommand,
)
from .tasks import (
    SkipTaskCommand,
    RetryTaskCommand,
    CompleteAllTasksCommand,
    ResetAllTasksCommand,
    ReorderTasksCommand,
)
from .prd import GeneratePrdCommand, UpdateRequirementsCommand, UpdateSettingsCommand
from .macro import MacroCommand, create_macro_command
from .registry import (
    CommandRegistry,
    create_default_registry,
    get_default_registry,
    reset_default_registry,
)
from .manager import CommandManager, DEFAULT_HISTORY_SIZE
from .context import OrchestratorContext, create_command_context
from .bus import CommandBus, CommandMessage

__all__ = [
    # Types
    "CommandResult",
    "HistoryEntry",
    "CommandNames",
    "ControllerContext",
    "CommandFactory",
    # Errors
    "CommandError",
    "CommandArgumentError",
    "UnknownCommandError",
    # Base classes
    "BaseCommand",
    "UndoableCommand",
    "is_undoable",
    "NO_PREVIOUS_STATE_MESSAGE",
    # Commands
    "StartLoopCommand",
    "StopLoopCommand",
    "PauseLoopCommand",
    "ResumeLoopCommand",
    "RunSingleStepCommand",
    "SkipTaskCommand",
    "RetryTaskCommand",
    "CompleteAllTasksCommand",
    "ResetAllTasksCommand",
    "ReorderTasksCommand",
    "GeneratePrdCommand",
    "UpdateRequirementsCommand",
    "UpdateSettingsCommand",
    "MacroCommand",
    "create_macro_command",
    # Registry / manager / bus
    "CommandRegistry",
    "create_default_registry",
    "get_default_registry",
    "reset_default_registry",
    "CommandManager",
    "DEFAULT_HISTORY_SIZE",
    "OrchestratorContext",
    "create_command_context",
    "CommandBus",
    "CommandMessage",
]
