import pytest

from loopctl.core.commands.control import StartLoopCommand, StopLoopCommand
from loopctl.core.commands.errors import CommandArgumentError, UnknownCommandError
from loopctl.core.commands.macro import MacroCommand
from loopctl.core.commands.registry import (
    CommandRegistry,
    create_default_registry,
    get_default_registry,
    reset_default_registry,
)
from loopctl.core.commands.tasks import ReorderTasksCommand
from loopctl.core.commands.types import CommandNames


class TestCommandRegistry:
    def test_register_and_lookup(self, controller):
        registry = CommandRegistry()
        registry.register("start", StartLoopCommand)

        assert registry.has("start")
        assert "start" in registry
        assert registry.get("start") is StartLoopCommand
        assert registry.get("missing") is None
        assert registry.size == 1
        assert len(registry) == 1

    def test_last_registration_wins(self):
        registry = CommandRegistry()
        registry.register("loop", StartLoopCommand)
        registry.register("loop", StopLoopCommand)

        assert registry.get("loop") is StopLoopCommand
        assert registry.size == 1

    def test_names_are_a_snapshot_in_registration_order(self):
        registry = CommandRegistry()
        registry.register("b", StartLoopCommand)
        registry.register("a", StopLoopCommand)

        names = registry.get_names()
        names.append("c")

        assert registry.get_names() == ["b", "a"]

    def test_clear(self):
        registry = CommandRegistry()
        registry.register("a", StartLoopCommand)

        registry.clear()

        assert registry.size == 0
        assert registry.get_names() == []

    def test_create_unknown_name(self, controller):
        with pytest.raises(UnknownCommandError) as excinfo:
            CommandRegistry().create("nope", controller)

        assert excinfo.value.name == "nope"
        assert "nope" in str(excinfo.value)

    def test_create_with_too_many_arguments(self, controller):
        registry = create_default_registry()

        with pytest.raises(CommandArgumentError):
            registry.create(CommandNames.START_LOOP, controller, "unexpected")

    def test_factory_exception_becomes_argument_error(self, controller):
        registry = CommandRegistry()

        def strict_factory(context, value):
            if value <= 0:
                raise ValueError("value must be positive")
            return StartLoopCommand(context)

        registry.register("strict", strict_factory)

        with pytest.raises(CommandArgumentError) as excinfo:
            registry.create("strict", controller, -1)

        assert excinfo.value.command_name == "strict"
        assert "value must be positive" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, ValueError)


class TestDefaultRegistry:
    def test_contains_full_catalog(self):
        registry = create_default_registry()

        assert registry.get_names() == [
            "startLoop", "stopLoop", "pauseLoop", "resumeLoop", "runSingleStep",
            "skipTask", "retryTask", "completeAllTasks", "resetAllTasks", "reorderTasks",
            "generatePrd", "updateRequirements", "updateSettings",
            "macro",
        ]

    def test_builds_commands_by_name(self, controller):
        registry = create_default_registry()

        reorder = registry.create(CommandNames.REORDER_TASKS, controller, ["t2", "t1"])
        macro = registry.create(CommandNames.MACRO, controller, [reorder], "reorderOnly")

        assert isinstance(reorder, ReorderTasksCommand)
        assert reorder.new_order == ["t2", "t1"]
        assert isinstance(macro, MacroCommand)
        assert macro.name == "reorderOnly"

    def test_lazy_singleton_and_reset(self):
        first = get_default_registry()
        assert get_default_registry() is first

        first.clear()
        reset_default_registry()

        second = get_default_registry()
        assert second is not first
        assert second.has(CommandNames.START_LOOP)
