"""
PRD Commands - requirements document generation and configuration.

- GeneratePrdCommand: generate a PRD from a free text description
- UpdateRequirementsCommand: replace task requirements (undoable)
- UpdateSettingsCommand: replace loop settings (undoable)
"""
from typing import Any, Mapping

from .arguments import GeneratePrdArgs, RecordArgs, parse_arguments
from .base import BaseCommand, UndoableCommand
from .types import CommandNames, CommandResult, ControllerContext


class GeneratePrdCommand(BaseCommand):
    name = CommandNames.GENERATE_PRD
    description = "Generate a PRD file from a task description"

    def __init__(self, context: ControllerContext, task_description: str):
        super().__init__(context)
        self.task_description = task_description

    async def _do_execute(self) -> CommandResult:
        if not self.task_description or not self.task_description.strip():
            return self.failure("Task description cannot be empty")

        await self.context.generate_prd_from_description(self.task_description)
        return self.success("PRD generation initiated", {"description": self.task_description})


class UpdateRequirementsCommand(UndoableCommand):
    """Replace task requirements, keeping the previous ones for undo."""
    name = CommandNames.UPDATE_REQUIREMENTS
    description = "Update task execution requirements"

    def __init__(self, context: ControllerContext, requirements: Mapping[str, Any]):
        super().__init__(context)
        self.new_requirements = requirements

    async def _do_execute(self) -> CommandResult:
        previous = self.context.get_requirements()
        self.capture_state(previous)

        self.context.set_requirements(self.new_requirements)
        return self.success("Requirements updated successfully", {
            "previous": self.previous_state,
            "current": self.new_requirements,
        })

    async def _do_undo(self) -> CommandResult:
        previous = self.previous_state
        self.context.set_requirements(previous)
        return self.success("Requirements restored to previous values", {"requirements": previous})


class UpdateSettingsCommand(UndoableCommand):
    """Replace loop settings, keeping the previous ones for undo."""
    name = CommandNames.UPDATE_SETTINGS
    description = "Update loop configuration settings"

    def __init__(self, context: ControllerContext, settings: Mapping[str, Any]):
        super().__init__(context)
        self.new_settings = settings

    async def _do_execute(self) -> CommandResult:
        previous = self.context.get_settings()
        self.capture_state(previous)

        self.context.set_settings(self.new_settings)
        return self.success("Settings updated successfully", {
            "previous": self.previous_state,
            "current": self.new_settings,
        })

    async def _do_undo(self) -> CommandResult:
        previous = self.previous_state
        self.context.set_settings(previous)
        return self.success("Settings restored to previous values", {"settings": previous})


def create_generate_prd_command(context: ControllerContext, description: Any = None) -> GeneratePrdCommand:
    args = parse_arguments(CommandNames.GENERATE_PRD, GeneratePrdArgs, description=description)
    return GeneratePrdCommand(context, args.description or "")


def create_update_requirements_command(context: ControllerContext, requirements: Any = None) -> UpdateRequirementsCommand:
    args = parse_arguments(CommandNames.UPDATE_REQUIREMENTS, RecordArgs, value=requirements)
    return UpdateRequirementsCommand(context, args.value)


def create_update_settings_command(context: ControllerContext, settings: Any = None) -> UpdateSettingsCommand:
    args = parse_arguments(CommandNames.UPDATE_SETTINGS, RecordArgs, value=settings)
    return UpdateSettingsCommand(context, args.value)
