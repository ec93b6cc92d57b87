"""
Command Registry - look up and build commands by name.

Example:
    registry = create_default_registry()
    command = registry.create("reorderTasks", context, ["t3", "t1", "t2"])
    await manager.execute(command)
"""
import inspect
from typing import Any, Dict, List, Optional

from loguru import logger

from .base import BaseCommand, describe_error
from .control import (
    create_pause_loop_command,
    create_resume_loop_command,
    create_run_single_step_command,
    create_start_loop_command,
    create_stop_loop_command,
)
from .errors import CommandArgumentError, CommandError, UnknownCommandError
from .macro import create_macro_command
from .prd import (
    create_generate_prd_command,
    create_update_requirements_command,
    create_update_settings_command,
)
from .tasks import (
    create_complete_all_tasks_command,
    create_reorder_tasks_command,
    create_reset_all_tasks_command,
    create_retry_task_command,
    create_skip_task_command,
)
from .types import CommandFactory, CommandNames, ControllerContext


class CommandRegistry:
    """
    Maps command names to factories ``(context, *args) -> BaseCommand``.

    Registering a name twice replaces the earlier factory.
    """

    def __init__(self):
        self._factories: Dict[str, CommandFactory] = {}

    def register(self, name: str, factory: CommandFactory) -> None:
        if name in self._factories:
            logger.debug(f"Replacing command factory for '{name}'")
        self._factories[name] = factory

    def get(self, name: str) -> Optional[CommandFactory]:
        return self._factories.get(name)

    def has(self, name: str) -> bool:
        return name in self._factories

    def get_names(self) -> List[str]:
        """Registered names in registration order (a copy)."""
        return list(self._factories)

    @property
    def size(self) -> int:
        return len(self._factories)

    def clear(self) -> None:
        self._factories.clear()

    def create(self, name: str, context: ControllerContext, *args: Any) -> BaseCommand:
        """
        Build a command through its registered factory.

        Raises:
            UnknownCommandError: If nothing is registered under ``name``
            CommandArgumentError: If the arguments do not fit the factory
                or the factory rejects them
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownCommandError(name)

        try:
            inspect.signature(factory).bind(context, *args)
        except TypeError as e:
            raise CommandArgumentError(name, str(e)) from e
        except ValueError:
            # Builtins and some callables carry no signature; let the call decide
            pass

        try:
            return factory(context, *args)
        except CommandError:
            raise
        except Exception as e:
            raise CommandArgumentError(name, describe_error(e)) from e

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return self.size


def create_default_registry() -> CommandRegistry:
    """Build a registry holding every built-in command."""
    registry = CommandRegistry()

    # Control commands
    registry.register(CommandNames.START_LOOP, create_start_loop_command)
    registry.register(CommandNames.STOP_LOOP, create_stop_loop_command)
    registry.register(CommandNames.PAUSE_LOOP, create_pause_loop_command)
    registry.register(CommandNames.RESUME_LOOP, create_resume_loop_command)
    registry.register(CommandNames.RUN_SINGLE_STEP, create_run_single_step_command)

    # Task commands
    registry.register(CommandNames.SKIP_TASK, create_skip_task_command)
    registry.register(CommandNames.RETRY_TASK, create_retry_task_command)
    registry.register(CommandNames.COMPLETE_ALL_TASKS, create_complete_all_tasks_command)
    registry.register(CommandNames.RESET_ALL_TASKS, create_reset_all_tasks_command)
    registry.register(CommandNames.REORDER_TASKS, create_reorder_tasks_command)

    # PRD commands
    registry.register(CommandNames.GENERATE_PRD, create_generate_prd_command)
    registry.register(CommandNames.UPDATE_REQUIREMENTS, create_update_requirements_command)
    registry.register(CommandNames.UPDATE_SETTINGS, create_update_settings_command)

    registry.register(CommandNames.MACRO, create_macro_command)

    return registry


_default_registry: Optional[CommandRegistry] = None


def get_default_registry() -> CommandRegistry:
    """Process-wide default registry, built on first access."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide default registry (used by tests)."""
    global _default_registry
    _default_registry = None
