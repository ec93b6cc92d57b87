"""
Task Commands - task state and ordering.

- SkipTaskCommand
- RetryTaskCommand
- CompleteAllTasksCommand
- ResetAllTasksCommand
- ReorderTasksCommand
"""
from typing import Any, List, Sequence

from .arguments import ReorderTasksArgs, parse_arguments
from .base import BaseCommand
from .types import CommandNames, CommandResult, ControllerContext


class SkipTaskCommand(BaseCommand):
    name = CommandNames.SKIP_TASK
    description = "Skip the current pending task"

    async def _do_execute(self) -> CommandResult:
        await self.context.skip_current_task()
        return self.success("Task skipped successfully")


class RetryTaskCommand(BaseCommand):
    name = CommandNames.RETRY_TASK
    description = "Retry a failed or blocked task"

    async def _do_execute(self) -> CommandResult:
        await self.context.retry_failed_task()
        return self.success("Task retry initiated")


class CompleteAllTasksCommand(BaseCommand):
    name = CommandNames.COMPLETE_ALL_TASKS
    description = "Mark all pending tasks as complete"

    async def _do_execute(self) -> CommandResult:
        await self.context.complete_all_tasks()
        return self.success("All tasks marked as complete")


class ResetAllTasksCommand(BaseCommand):
    name = CommandNames.RESET_ALL_TASKS
    description = "Reset all tasks to pending status"

    async def _do_execute(self) -> CommandResult:
        await self.context.reset_all_tasks()
        return self.success("All tasks reset to pending")


class ReorderTasksCommand(BaseCommand):
    """
    Apply a new task order.

    Not undoable: the controller offers no way to read the current
    order, so there is nothing to restore.
    """
    name = CommandNames.REORDER_TASKS
    description = "Reorder tasks by changing their priority"

    def __init__(self, context: ControllerContext, task_ids: Sequence[str]):
        super().__init__(context)
        self._new_order: List[str] = list(task_ids)

    @property
    def new_order(self) -> List[str]:
        return list(self._new_order)

    async def _do_execute(self) -> CommandResult:
        await self.context.reorder_tasks(list(self._new_order))
        return self.success("Tasks reordered successfully", {"new_order": list(self._new_order)})


def create_skip_task_command(context: ControllerContext) -> SkipTaskCommand:
    return SkipTaskCommand(context)


def create_retry_task_command(context: ControllerContext) -> RetryTaskCommand:
    return RetryTaskCommand(context)


def create_complete_all_tasks_command(context: ControllerContext) -> CompleteAllTasksCommand:
    return CompleteAllTasksCommand(context)


def create_reset_all_tasks_command(context: ControllerContext) -> ResetAllTasksCommand:
    return ResetAllTasksCommand(context)


def create_reorder_tasks_command(context: ControllerContext, task_ids: Any = None) -> ReorderTasksCommand:
    args = parse_arguments(
        CommandNames.REORDER_TASKS,
        ReorderTasksArgs,
        task_ids=[] if task_ids is None else task_ids,
    )
    return ReorderTasksCommand(context, args.task_ids)
