"""
Command Pattern - Shared Types.

Provides:
- CommandResult: immutable outcome of executing or undoing a command
- HistoryEntry: one recorded execution inside CommandManager
- CommandNames: stable identifiers for the built-in command kinds
- ControllerContext: capability set commands call into
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseCommand


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command execution or undo."""
    success: bool
    message: Optional[str] = None
    data: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, message: Optional[str] = None, data: Any = None) -> "CommandResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error: Optional[BaseException] = None) -> "CommandResult":
        return cls(success=False, message=message, error=error)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HistoryEntry:
    """
    A single execution recorded by CommandManager.

    Only CommandManager mutates an entry: undo() flips ``undone`` and
    redo() refreshes ``result`` and ``executed_at``.
    """
    command: "BaseCommand"
    result: CommandResult
    executed_at: datetime = field(default_factory=_utcnow)
    undone: bool = False


class CommandNames:
    """Command names for the built-in catalog."""
    # Control commands
    START_LOOP = "startLoop"
    STOP_LOOP = "stopLoop"
    PAUSE_LOOP = "pauseLoop"
    RESUME_LOOP = "resumeLoop"
    RUN_SINGLE_STEP = "runSingleStep"

    # Task commands
    SKIP_TASK = "skipTask"
    RETRY_TASK = "retryTask"
    COMPLETE_ALL_TASKS = "completeAllTasks"
    RESET_ALL_TASKS = "resetAllTasks"
    REORDER_TASKS = "reorderTasks"

    # PRD commands
    GENERATE_PRD = "generatePrd"
    UPDATE_REQUIREMENTS = "updateRequirements"
    UPDATE_SETTINGS = "updateSettings"

    # Macro commands
    MACRO = "macro"


class ControllerContext(ABC):
    """
    Capability set the command layer calls into.

    Implemented by whoever owns the automation controller; the command
    layer never looks inside the requirements or settings records.
    """

    @abstractmethod
    async def start_loop(self) -> None:
        """Start the task execution loop."""

    @abstractmethod
    async def stop_loop(self) -> None:
        """Stop the task execution loop."""

    @abstractmethod
    def pause_loop(self) -> None:
        """Pause the task execution loop."""

    @abstractmethod
    def resume_loop(self) -> None:
        """Resume the task execution loop."""

    @abstractmethod
    async def run_single_step(self) -> None:
        """Execute exactly one task iteration."""

    @abstractmethod
    async def skip_current_task(self) -> None:
        pass

    @abstractmethod
    async def retry_failed_task(self) -> None:
        pass

    @abstractmethod
    async def complete_all_tasks(self) -> None:
        pass

    @abstractmethod
    async def reset_all_tasks(self) -> None:
        pass

    @abstractmethod
    async def reorder_tasks(self, task_ids: List[str]) -> None:
        """Apply a new task ordering."""

    @abstractmethod
    async def generate_prd_from_description(self, description: str) -> None:
        """Generate a PRD from free text."""

    @abstractmethod
    def get_requirements(self) -> Mapping[str, Any]:
        pass

    @abstractmethod
    def set_requirements(self, requirements: Mapping[str, Any]) -> None:
        pass

    @abstractmethod
    def get_settings(self) -> Mapping[str, Any]:
        pass

    @abstractmethod
    def set_settings(self, settings: Mapping[str, Any]) -> None:
        pass

    @abstractmethod
    def add_log(self, message: str, highlight: bool = False) -> None:
        """Fire-and-forget observability hook."""


CommandFactory = Callable[..., "BaseCommand"]
