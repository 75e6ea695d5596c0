"""Tests for compose / compose_async — nesting and rollback at every depth."""

from __future__ import annotations

import asyncio

import pytest

from compensate import (
    AsyncCommand,
    AsyncComposedCommand,
    Command,
    CommandConfigError,
    CommandContext,
    CommandState,
    ComposedCommand,
    Runner,
    compose,
    compose_async,
    run,
    run_async,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Step(Command):
    label = "step"

    def execute(self) -> None:
        self.context.log.append(self.label)

    def undo(self) -> None:
        self.context.undone.append(self.label)


class A(Step):
    label = "A"


class B(Step):
    label = "B"


class C(Step):
    label = "C"


class D(Step):
    label = "D"


class FailC(Step):
    label = "C"

    def execute(self) -> None:
        super().execute()
        self.context.success = False


class FailNoUndo(Command):
    def execute(self) -> None:
        self.context.success = False


class AsyncB(AsyncCommand):
    async def execute(self) -> None:
        await asyncio.sleep(0)
        self.context.log.append("B")

    async def undo(self) -> None:
        await asyncio.sleep(0)
        self.context.undone.append("B")


def _ctx() -> CommandContext:
    return CommandContext(log=[], undone=[])


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestCompose:
    def test_returns_command_class(self):
        AB = compose(A, B)
        assert issubclass(AB, ComposedCommand)
        assert AB.factories == (A, B)
        assert AB.__name__ == "Composed[A, B]"

    def test_instances_share_context(self):
        ctx = _ctx()
        command = compose(A, B)(ctx)

        assert all(inner.context is ctx for inner in command.runner.commands)

    def test_each_instance_builds_fresh_inner_commands(self):
        AB = compose(A, B)
        first, second = AB(_ctx()), AB(_ctx())
        assert first.runner.commands[0] is not second.runner.commands[0]

    def test_runs_as_single_step(self):
        result = run(_ctx(), compose(A, B), C)

        assert result.log == ["A", "B", "C"]
        assert result.success is True

    def test_outer_failure_undoes_composite_in_reverse(self):
        result = run(_ctx(), compose(A, B), FailC, D)

        assert result.log == ["A", "B", "C"]
        assert result.undone == ["C", "B", "A"]

    def test_outer_failure_without_undo(self):
        result = run(_ctx(), compose(A, B), FailNoUndo)
        assert result.undone == ["B", "A"]

    def test_inner_failure_stops_outer_pipeline(self):
        result = run(_ctx(), A, compose(B, FailC, D), D)

        assert result.log == ["A", "B", "C"]
        assert result.undone == ["C", "B", "A"]
        assert result.success is False

    def test_deep_nesting(self):
        inner = compose(B, compose(C, FailNoUndo))
        result = run(_ctx(), A, compose(inner, D))

        assert result.log == ["A", "B", "C"]
        assert result.undone == ["C", "B", "A"]

    def test_composite_state_tracks_inner_runner(self):
        ctx = _ctx()
        command = compose(A, FailC)(ctx)
        assert command.state is CommandState.IDLE

        outer = Runner(command)
        outer.execute()
        assert command.state is CommandState.FAILED

        outer.undo()
        assert command.state is CommandState.UNDONE

    def test_empty_compose_is_noop_step(self):
        result = run(_ctx(), compose(), A)
        assert result.log == ["A"]

    def test_rejects_non_callable(self):
        with pytest.raises(CommandConfigError):
            compose(A, 42)


# ---------------------------------------------------------------------------
# compose_async
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestComposeAsync:
    @pytest.mark.asyncio
    async def test_mixed_sync_and_async(self):
        AB = compose_async(A, AsyncB)
        assert issubclass(AB, AsyncComposedCommand)

        result = await run_async(_ctx(), AB, C)
        assert result.log == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_nested_rollback(self):
        result = await run_async(_ctx(), compose_async(A, AsyncB), FailC)

        assert result.log == ["A", "B", "C"]
        assert result.undone == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_sync_composite_inside_async_run(self):
        result = await run_async(_ctx(), compose(A, B), FailC)
        assert result.undone == ["C", "B", "A"]

    def test_async_composite_rejected_by_sync_run(self):
        with pytest.raises(CommandConfigError):
            run(_ctx(), compose_async(A, AsyncB))
