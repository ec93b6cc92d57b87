import asyncio
from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from ..base_system import BaseSystem
from ..service_decorator import Service
from .base import BaseCommand
from .errors import CommandError
from .manager import CommandManager
from .registry import CommandRegistry, create_default_registry
from .types import CommandNames, CommandResult, ControllerContext

UNDO_MESSAGE = "undo"
REDO_MESSAGE = "redo"

# Payload fields passed, in order, as factory arguments
MESSAGE_ARGUMENTS: Dict[str, Tuple[str, ...]] = {
    CommandNames.REORDER_TASKS: ("taskIds",),
    CommandNames.GENERATE_PRD: ("taskDescription",),
    CommandNames.UPDATE_REQUIREMENTS: ("requirements",),
    CommandNames.UPDATE_SETTINGS: ("settings",),
}

# Names the panel uses for the same commands
MESSAGE_ALIASES: Dict[str, str] = {
    "requirementsChanged": CommandNames.UPDATE_REQUIREMENTS,
    "settingsChanged": CommandNames.UPDATE_SETTINGS,
}


class CommandMessage(BaseModel):
    """A UI message: ``{"command": <name>, ...fields}``."""
    model_config = ConfigDict(extra="allow")

    command: str

    @property
    def payload(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


@Service
class CommandBus(BaseSystem):
    """
    Entry point for UI-triggered commands.

    Owns the command registry and the CommandManager and serialises
    execute/undo/redo so overlapping UI messages cannot interleave.

    Example:
        bus = locator.register_system(CommandBus)
        bus.bind_context(OrchestratorContext(orchestrator))

        await bus.dispatch({"command": "reorderTasks", "taskIds": ["t2", "t1"]})
        await bus.dispatch({"command": "undo"})
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._registry: CommandRegistry = create_default_registry()
        self._manager = CommandManager(config.data.commands.max_history_size)
        self._context: Optional[ControllerContext] = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        if self._context is None:
            logger.warning("CommandBus started without a controller context")
        await super().initialize()

    async def shutdown(self) -> None:
        self._manager.clear_history()
        await super().shutdown()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def manager(self) -> CommandManager:
        return self._manager

    @property
    def context(self) -> Optional[ControllerContext]:
        return self._context

    def bind_context(self, context: ControllerContext) -> None:
        self._context = context
        logger.debug(f"CommandBus bound to {context.__class__.__name__}")

    async def execute(self, command: BaseCommand) -> CommandResult:
        async with self._lock:
            result = await self._manager.execute(command)
        self._report(result)
        return result

    async def undo(self) -> Optional[CommandResult]:
        async with self._lock:
            result = await self._manager.undo()
        if result is not None:
            self._report(result)
        return result

    async def redo(self) -> Optional[CommandResult]:
        async with self._lock:
            result = await self._manager.redo()
        if result is not None:
            self._report(result)
        return result

    def build_command(self, message: Mapping[str, Any]) -> BaseCommand:
        """
        Build a command from a UI message.

        Raises:
            CommandError: Unknown command name, bad arguments or no context bound
        """
        parsed = self._parse_message(message)
        if self._context is None:
            raise CommandError("No controller context bound to CommandBus")

        name = MESSAGE_ALIASES.get(parsed.command, parsed.command)
        fields = parsed.payload

        if name == CommandNames.MACRO:
            members = [self.build_command(item) for item in self._macro_members(fields)]
            return self._registry.create(
                name, self._context, members, fields.get("name"), fields.get("description")
            )

        args = [fields.get(key) for key in MESSAGE_ARGUMENTS.get(name, ())]
        return self._registry.create(name, self._context, *args)

    async def dispatch(self, message: Mapping[str, Any]) -> Optional[CommandResult]:
        """
        Handle a UI message.

        ``undo``/``redo`` return None when there is nothing to do. Every
        other message returns a CommandResult; lookup and argument errors
        come back as failed results.
        """
        command_name = message.get("command") if isinstance(message, Mapping) else None
        if command_name == UNDO_MESSAGE:
            return await self.undo()
        if command_name == REDO_MESSAGE:
            return await self.redo()

        try:
            command = self.build_command(message)
        except CommandError as e:
            logger.warning(f"Rejected command message {command_name!r}: {e}")
            result = CommandResult.fail(str(e), e)
            self._report(result)
            return result

        return await self.execute(command)

    def _parse_message(self, message: Any) -> CommandMessage:
        try:
            return CommandMessage.model_validate(message)
        except ValidationError as e:
            raise CommandError(f"Malformed command message: {e.errors()[0]['msg']}") from e

    def _macro_members(self, fields: Mapping[str, Any]) -> List[Any]:
        members = fields.get("commands") or []
        if not isinstance(members, list):
            raise CommandError("Macro message 'commands' must be a list of command messages")
        return members

    def _report(self, result: CommandResult) -> None:
        """Forward failures to the controller log when enabled."""
        if result.success or self._context is None:
            return
        if not self.config.data.commands.report_failures_to_controller:
            return
        try:
            self._context.add_log(result.message or "Command failed", True)
        except Exception as e:
            logger.warning(f"Controller log hook failed: {e}")
