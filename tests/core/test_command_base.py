"""
BaseCommand / UndoableCommand - failure containment and state capture.
"""
import pytest

from loopctl.core.commands.base import (
    BaseCommand,
    NO_PREVIOUS_STATE_MESSAGE,
    UndoableCommand,
    is_undoable,
)
from loopctl.core.commands.types import CommandResult


class RaisingCommand(BaseCommand):
    name = "raising"
    description = "Raises the configured exception"

    def __init__(self, context, error):
        super().__init__(context)
        self.error = error

    async def _do_execute(self):
        raise self.error


class CounterCommand(UndoableCommand):
    """Undoable command over a dict held by the test."""
    name = "counter"
    description = "Set the counter"

    def __init__(self, context, store, value, fail_undo=False):
        super().__init__(context)
        self.store = store
        self.value = value
        self.fail_undo = fail_undo

    async def _do_execute(self):
        self.capture_state(self.store["count"])
        self.store["count"] = self.value
        return self.success("set")

    async def _do_undo(self):
        if self.fail_undo:
            raise RuntimeError("cannot restore")
        self.store["count"] = self.previous_state
        return self.success("restored")


class TestBaseCommand:
    @pytest.mark.asyncio
    async def test_exception_becomes_failed_result(self, controller):
        error = RuntimeError("controller offline")
        result = await RaisingCommand(controller, error).execute()

        assert result.success is False
        assert result.message == 'Command "raising" failed: controller offline'
        assert result.error is error

    @pytest.mark.asyncio
    async def test_exception_without_message_uses_class_name(self, controller):
        result = await RaisingCommand(controller, ValueError()).execute()

        assert result.success is False
        assert result.message == 'Command "raising" failed: ValueError'
        assert isinstance(result.error, ValueError)

    @pytest.mark.asyncio
    async def test_plain_command_does_not_support_undo(self, controller):
        command = RaisingCommand(controller, RuntimeError("x"))

        assert command.can_undo is False
        assert is_undoable(command) is False

        result = await command.undo()
        assert result.success is False
        assert "does not support undo" in result.message

    def test_result_helpers(self, controller):
        command = RaisingCommand(controller, RuntimeError("x"))

        assert command.success("done", {"a": 1}) == CommandResult(True, "done", {"a": 1}, None)
        assert command.failure("bad").success is False


class TestUndoableCommand:
    @pytest.mark.asyncio
    async def test_undo_restores_captured_state(self, controller):
        store = {"count": 1}
        command = CounterCommand(controller, store, 5)

        await command.execute()
        assert store["count"] == 5

        result = await command.undo()
        assert result.success is True
        assert store["count"] == 1

    @pytest.mark.asyncio
    async def test_undo_before_execute_fails_cleanly(self, controller):
        store = {"count": 1}
        command = CounterCommand(controller, store, 5)

        result = await command.undo()

        assert result.success is False
        assert result.message == NO_PREVIOUS_STATE_MESSAGE
        assert store["count"] == 1

    @pytest.mark.asyncio
    async def test_captured_none_is_still_a_capture(self, controller):
        store = {"count": None}
        command = CounterCommand(controller, store, 3)

        await command.execute()
        assert command.has_captured_state is True

        result = await command.undo()
        assert result.success is True
        assert store["count"] is None

    @pytest.mark.asyncio
    async def test_undo_exception_is_contained(self, controller):
        store = {"count": 1}
        command = CounterCommand(controller, store, 5, fail_undo=True)
        await command.execute()

        result = await command.undo()

        assert result.success is False
        assert result.message == 'Undo of command "counter" failed: cannot restore'
        assert isinstance(result.error, RuntimeError)

    def test_captured_state_is_a_copy(self, controller):
        command = CounterCommand(controller, {}, 0)
        state = {"nested": [1, 2]}

        command.capture_state(state)
        state["nested"].append(3)

        assert command.previous_state == {"nested": [1, 2]}
        assert is_undoable(command) is True
