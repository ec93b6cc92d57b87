import pytest
from typing import Any, Dict, List, Optional

from loopctl.core.commands.registry import reset_default_registry
from loopctl.core.commands.types import ControllerContext
from loopctl.core.config import ConfigManager


class FakeController(ControllerContext):
    """
    In-memory controller that records every call.

    Put a method name in ``failures`` to make that call raise the mapped
    exception instead.
    """

    def __init__(self):
        self.calls: List[str] = []
        self.failures: Dict[str, BaseException] = {}
        self.requirements: Dict[str, Any] = {"runTests": False, "runLinting": False}
        self.settings: Dict[str, Any] = {"maxIterations": 50}
        self.task_order: List[str] = []
        self.prd_descriptions: List[str] = []
        self.logs: List[tuple] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failures:
            raise self.failures[name]

    def called(self, name: str) -> bool:
        return name in self.calls

    async def start_loop(self) -> None:
        self._record("start_loop")

    async def stop_loop(self) -> None:
        self._record("stop_loop")

    def pause_loop(self) -> None:
        self._record("pause_loop")

    def resume_loop(self) -> None:
        self._record("resume_loop")

    async def run_single_step(self) -> None:
        self._record("run_single_step")

    async def skip_current_task(self) -> None:
        self._record("skip_current_task")

    async def retry_failed_task(self) -> None:
        self._record("retry_failed_task")

    async def complete_all_tasks(self) -> None:
        self._record("complete_all_tasks")

    async def reset_all_tasks(self) -> None:
        self._record("reset_all_tasks")

    async def reorder_tasks(self, task_ids: List[str]) -> None:
        self._record("reorder_tasks")
        self.task_order = list(task_ids)

    async def generate_prd_from_description(self, description: str) -> None:
        self._record("generate_prd_from_description")
        self.prd_descriptions.append(description)

    def get_requirements(self) -> Dict[str, Any]:
        self._record("get_requirements")
        return self.requirements

    def set_requirements(self, requirements: Dict[str, Any]) -> None:
        self._record("set_requirements")
        self.requirements = dict(requirements)

    def get_settings(self) -> Dict[str, Any]:
        self._record("get_settings")
        return self.settings

    def set_settings(self, settings: Dict[str, Any]) -> None:
        self._record("set_settings")
        self.settings = dict(settings)

    def add_log(self, message: str, highlight: bool = False) -> None:
        self._record("add_log")
        self.logs.append((message, highlight))


@pytest.fixture
def controller() -> FakeController:
    return FakeController()


@pytest.fixture
def config() -> ConfigManager:
    """In-memory config, never written to disk."""
    return ConfigManager(None)


@pytest.fixture(autouse=True)
def _fresh_default_registry():
    reset_default_registry()
    yield
    reset_default_registry()
