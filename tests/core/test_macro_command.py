"""
MacroCommand - ordered execution, short-circuit and scoped undo.
"""
import pytest

from loopctl.core.commands.base import UndoableCommand
from loopctl.core.commands.control import PauseLoopCommand, ResumeLoopCommand, StartLoopCommand
from loopctl.core.commands.errors import CommandArgumentError
from loopctl.core.commands.macro import MacroCommand, create_macro_command
from loopctl.core.commands.prd import UpdateRequirementsCommand, UpdateSettingsCommand


class JournalCommand(UndoableCommand):
    """Appends execute/undo events to a shared journal."""

    def __init__(self, context, label, journal, fail_execute=False, fail_undo=False):
        super().__init__(context)
        self.name = label
        self.description = f"Journal {label}"
        self.journal = journal
        self.fail_execute = fail_execute
        self.fail_undo = fail_undo

    async def _do_execute(self):
        self.capture_state(self.name)
        if self.fail_execute:
            raise RuntimeError(f"{self.name} exploded")
        self.journal.append(f"do:{self.name}")
        return self.success()

    async def _do_undo(self):
        if self.fail_undo:
            return self.failure(f"{self.name} refused")
        self.journal.append(f"undo:{self.name}")
        return self.success()


class TestMacroConstruction:
    def test_default_name_and_description(self, controller):
        macro = MacroCommand(controller, [StartLoopCommand(controller), PauseLoopCommand(controller)])

        assert macro.name == "macro:startLoop+pauseLoop"
        assert macro.description == "Execute 2 commands: startLoop, pauseLoop"
        assert macro.get_command_count() == 2

    def test_overrides(self, controller):
        macro = MacroCommand(controller, [StartLoopCommand(controller)], "kickoff", "Start everything")

        assert macro.name == "kickoff"
        assert macro.description == "Start everything"

    def test_can_undo_requires_every_member(self, controller):
        undoable = MacroCommand(controller, [
            UpdateSettingsCommand(controller, {"maxIterations": 1}),
            UpdateRequirementsCommand(controller, {"runTests": True}),
        ])
        mixed = MacroCommand(controller, [
            UpdateSettingsCommand(controller, {"maxIterations": 1}),
            StartLoopCommand(controller),
        ])

        assert undoable.can_undo is True
        assert mixed.can_undo is False

    def test_empty_macro_is_not_undoable(self, controller):
        assert MacroCommand(controller, []).can_undo is False

    def test_commands_view_is_read_only(self, controller):
        members = [StartLoopCommand(controller)]
        macro = MacroCommand(controller, members)
        members.append(PauseLoopCommand(controller))

        assert isinstance(macro.commands, tuple)
        assert len(macro.commands) == 1


class TestMacroExecution:
    @pytest.mark.asyncio
    async def test_runs_members_in_order(self, controller):
        macro = MacroCommand(controller, [
            StartLoopCommand(controller),
            PauseLoopCommand(controller),
            ResumeLoopCommand(controller),
        ])

        result = await macro.execute()

        assert result.success is True
        assert controller.calls == ["start_loop", "pause_loop", "resume_loop"]
        assert len(result.data["results"]) == 3
        assert all(r.success for r in result.data["results"])

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self, controller):
        controller.failures["pause_loop"] = RuntimeError("pause hook broken")
        macro = MacroCommand(controller, [
            StartLoopCommand(controller),
            PauseLoopCommand(controller),
            ResumeLoopCommand(controller),
        ])

        result = await macro.execute()

        assert result.success is False
        assert 'Macro failed at command "pauseLoop"' in result.message
        assert "pause hook broken" in result.message
        assert isinstance(result.error, RuntimeError)
        assert not controller.called("resume_loop")
        # Completed members are not rolled back
        assert [c.name for c in macro.executed_commands] == ["startLoop"]

    @pytest.mark.asyncio
    async def test_empty_macro_succeeds(self, controller):
        result = await MacroCommand(controller, []).execute()

        assert result.success is True
        assert result.data == {"results": []}


class TestMacroUndo:
    @pytest.mark.asyncio
    async def test_undo_runs_in_reverse(self, controller):
        journal = []
        macro = MacroCommand(controller, [
            JournalCommand(controller, "a", journal),
            JournalCommand(controller, "b", journal),
            JournalCommand(controller, "c", journal),
        ])

        await macro.execute()
        result = await macro.undo()

        assert result.success is True
        assert journal == ["do:a", "do:b", "do:c", "undo:c", "undo:b", "undo:a"]
        assert len(result.data["undo_results"]) == 3
        assert macro.executed_commands == ()

    @pytest.mark.asyncio
    async def test_undo_only_reverses_members_that_ran(self, controller):
        journal = []
        macro = MacroCommand(controller, [
            JournalCommand(controller, "a", journal),
            JournalCommand(controller, "b", journal),
            JournalCommand(controller, "c", journal, fail_execute=True),
        ])

        assert (await macro.execute()).success is False

        result = await macro.undo()

        assert result.success is True
        assert journal == ["do:a", "do:b", "undo:b", "undo:a"]

    @pytest.mark.asyncio
    async def test_undo_stops_at_first_failure(self, controller):
        journal = []
        macro = MacroCommand(controller, [
            JournalCommand(controller, "a", journal),
            JournalCommand(controller, "b", journal, fail_undo=True),
            JournalCommand(controller, "c", journal),
        ])
        await macro.execute()

        result = await macro.undo()

        assert result.success is False
        assert result.message == 'Macro undo failed at command "b": b refused'
        assert journal == ["do:a", "do:b", "do:c", "undo:c"]
        # "a" was never reached, "b" stays pending for another attempt
        assert [c.name for c in macro.executed_commands] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_non_undoable_macro_refuses(self, controller):
        macro = MacroCommand(controller, [StartLoopCommand(controller)])
        await macro.execute()

        result = await macro.undo()

        assert result.success is False
        assert result.message == "This macro cannot be undone - not all commands are undoable"

    @pytest.mark.asyncio
    async def test_cannot_double_undo(self, controller):
        journal = []
        macro = MacroCommand(controller, [JournalCommand(controller, "a", journal)])
        await macro.execute()

        await macro.undo()
        second = await macro.undo()

        assert second.success is True
        assert second.data == {"undo_results": []}
        assert journal == ["do:a", "undo:a"]

    @pytest.mark.asyncio
    async def test_re_execute_resets_trace(self, controller):
        journal = []
        macro = MacroCommand(controller, [JournalCommand(controller, "a", journal)])

        await macro.execute()
        await macro.execute()

        assert len(macro.executed_commands) == 1


class TestMacroFactory:
    def test_builds_from_list(self, controller):
        macro = create_macro_command(controller, [StartLoopCommand(controller)], "go")

        assert isinstance(macro, MacroCommand)
        assert macro.name == "go"

    def test_missing_commands_gives_empty_macro(self, controller):
        assert create_macro_command(controller).get_command_count() == 0

    def test_rejects_non_commands(self, controller):
        with pytest.raises(CommandArgumentError):
            create_macro_command(controller, ["startLoop"])
