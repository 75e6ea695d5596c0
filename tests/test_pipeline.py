"""Tests for Pipeline — reusable definitions, chaining and nesting."""

from __future__ import annotations

import pytest

from compensate import (
    Command,
    CommandConfigError,
    CommandContext,
    ComposedCommand,
    Pipeline,
    RunConfig,
    run,
)


class Reserve(Command):
    def execute(self) -> None:
        self.context.reserved.append(self.context.sku)

    def undo(self) -> None:
        self.context.reserved.remove(self.context.sku)


class Charge(Command):
    charged = False

    def execute(self) -> None:
        if self.context.balance < 10:
            self.context.success = False
            return
        self.context.balance -= 10
        self.charged = True

    def undo(self) -> None:
        if self.charged:
            self.context.balance += 10


class Notify(Command):
    def execute(self) -> None:
        self.context.notified = True


def _order(balance: int = 100) -> CommandContext:
    return CommandContext(sku="sku-1", reserved=[], balance=balance, notified=False)


@pytest.mark.unit
class TestPipeline:
    def test_then_chains(self):
        pipe = Pipeline().then(Reserve).then(Charge, Notify)

        assert pipe.factories == (Reserve, Charge, Notify)
        assert len(pipe) == 3
        assert repr(pipe) == "Pipeline(Reserve → Charge → Notify)"

    def test_call_runs(self):
        pipe = Pipeline([Reserve, Charge, Notify])
        result = pipe(_order())

        assert result.success is True
        assert result.reserved == ["sku-1"]
        assert result.balance == 90
        assert result.notified is True

    def test_reusable(self):
        pipe = Pipeline([Reserve, Charge, Notify])
        ok = pipe.run(_order(balance=50))
        broke = pipe.run(_order(balance=5))

        assert ok.balance == 40
        assert broke.success is False
        assert broke.reserved == []
        assert broke.notified is False

    def test_as_command_nests(self):
        checkout = Pipeline([Reserve, Charge]).as_command()
        assert issubclass(checkout, ComposedCommand)

        result = run(_order(balance=5), checkout, Notify)
        assert result.success is False
        assert result.reserved == []

    def test_config_is_applied(self):
        original = _order()
        Pipeline([Reserve], config=RunConfig(isolation="deep")).run(original)
        assert original.reserved == []

        Pipeline([Reserve]).run(original)
        assert original.reserved == ["sku-1"]

    def test_rejects_non_callable(self):
        with pytest.raises(CommandConfigError):
            Pipeline().then(Reserve, None)

    @pytest.mark.asyncio
    async def test_run_async(self):
        result = await Pipeline([Reserve, Charge]).run_async(_order(balance=5))
        assert result.success is False
        assert result.reserved == []
