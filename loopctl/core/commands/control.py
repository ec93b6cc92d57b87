"""
Control Commands - drive the task execution loop.

- StartLoopCommand
- StopLoopCommand
- PauseLoopCommand
- ResumeLoopCommand
- RunSingleStepCommand
"""
from .base import BaseCommand
from .types import CommandNames, CommandResult, ControllerContext


class StartLoopCommand(BaseCommand):
    name = CommandNames.START_LOOP
    description = "Start the task execution loop"

    async def _do_execute(self) -> CommandResult:
        await self.context.start_loop()
        return self.success("Loop started successfully")


class StopLoopCommand(BaseCommand):
    name = CommandNames.STOP_LOOP
    description = "Stop the task execution loop"

    async def _do_execute(self) -> CommandResult:
        await self.context.stop_loop()
        return self.success("Loop stopped successfully")


class PauseLoopCommand(BaseCommand):
    name = CommandNames.PAUSE_LOOP
    description = "Pause the task execution loop"

    async def _do_execute(self) -> CommandResult:
        self.context.pause_loop()
        return self.success("Loop paused successfully")


class ResumeLoopCommand(BaseCommand):
    name = CommandNames.RESUME_LOOP
    description = "Resume the paused task execution loop"

    async def _do_execute(self) -> CommandResult:
        self.context.resume_loop()
        return self.success("Loop resumed successfully")


class RunSingleStepCommand(BaseCommand):
    name = CommandNames.RUN_SINGLE_STEP
    description = "Execute a single task step"

    async def _do_execute(self) -> CommandResult:
        await self.context.run_single_step()
        return self.success("Single step executed successfully")


def create_start_loop_command(context: ControllerContext) -> StartLoopCommand:
    return StartLoopCommand(context)


def create_stop_loop_command(context: ControllerContext) -> StopLoopCommand:
    return StopLoopCommand(context)


def create_pause_loop_command(context: ControllerContext) -> PauseLoopCommand:
    return PauseLoopCommand(context)


def create_resume_loop_command(context: ControllerContext) -> ResumeLoopCommand:
    return ResumeLoopCommand(context)


def create_run_single_step_command(context: ControllerContext) -> RunSingleStepCommand:
    return RunSingleStepCommand(context)
