"""
Adapter from an orchestrator object to ControllerContext.
"""
from typing import Any, Callable, List, Mapping, Optional

from .types import ControllerContext

LogCallback = Callable[[str, bool], None]


class OrchestratorContext(ControllerContext):
    """
    ControllerContext that forwards every call to an orchestrator.

    The orchestrator must expose the same method names as
    ControllerContext (except ``add_log``). Log messages go to
    ``add_log`` if one is given and are dropped otherwise.

    Example:
        context = OrchestratorContext(orchestrator, panel.add_log)
        await manager.execute(StartLoopCommand(context))
    """

    def __init__(self, orchestrator: Any, add_log: Optional[LogCallback] = None):
        self._orchestrator = orchestrator
        self._add_log = add_log

    async def start_loop(self) -> None:
        await self._orchestrator.start_loop()

    async def stop_loop(self) -> None:
        await self._orchestrator.stop_loop()

    def pause_loop(self) -> None:
        self._orchestrator.pause_loop()

    def resume_loop(self) -> None:
        self._orchestrator.resume_loop()

    async def run_single_step(self) -> None:
        await self._orchestrator.run_single_step()

    async def skip_current_task(self) -> None:
        await self._orchestrator.skip_current_task()

    async def retry_failed_task(self) -> None:
        await self._orchestrator.retry_failed_task()

    async def complete_all_tasks(self) -> None:
        await self._orchestrator.complete_all_tasks()

    async def reset_all_tasks(self) -> None:
        await self._orchestrator.reset_all_tasks()

    async def reorder_tasks(self, task_ids: List[str]) -> None:
        await self._orchestrator.reorder_tasks(task_ids)

    async def generate_prd_from_description(self, description: str) -> None:
        await self._orchestrator.generate_prd_from_description(description)

    def get_requirements(self) -> Mapping[str, Any]:
        return self._orchestrator.get_requirements()

    def set_requirements(self, requirements: Mapping[str, Any]) -> None:
        self._orchestrator.set_requirements(requirements)

    def get_settings(self) -> Mapping[str, Any]:
        return self._orchestrator.get_settings()

    def set_settings(self, settings: Mapping[str, Any]) -> None:
        self._orchestrator.set_settings(settings)

    def add_log(self, message: str, highlight: bool = False) -> None:
        if self._add_log is not None:
            self._add_log(message, highlight)


def create_command_context(orchestrator: Any, add_log: Optional[LogCallback] = None) -> OrchestratorContext:
    return OrchestratorContext(orchestrator, add_log)
