"""compose — wrap a fixed sub-sequence of commands behind one command."""

from __future__ import annotations

from typing import Any, ClassVar

from .command import AsyncCommand, Command
from .protocol import CommandFactory, CommandState, ensure_factories, factory_name
from .runner import AsyncRunner, Runner


class ComposedCommand(Command):
    """A command that runs its own private :class:`Runner`.

    Built by :func:`compose`; each instance constructs fresh instances of
    ``factories`` against its context.  From an enclosing runner it is
    indistinguishable from any other command: it fails when its last
    attempted inner command fails, and ``undo`` unwinds only the inner
    commands that actually ran.
    """

    factories: ClassVar[tuple[CommandFactory, ...]] = ()

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self.runner = Runner(*(factory(context) for factory in self.factories))

    @property
    def state(self) -> CommandState:
        return self.runner.state

    def execute(self) -> None:
        self.runner.execute()

    def undo(self) -> None:
        self.runner.undo()


class AsyncComposedCommand(AsyncCommand):
    """Async counterpart of :class:`ComposedCommand`, over an :class:`AsyncRunner`."""

    factories: ClassVar[tuple[CommandFactory, ...]] = ()

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self.runner = AsyncRunner(*(factory(context) for factory in self.factories))

    @property
    def state(self) -> CommandState:
        return self.runner.state

    async def execute(self) -> None:
        await self.runner.execute()

    async def undo(self) -> None:
        await self.runner.undo()


def _build(base: type, label: str, factories: tuple[Any, ...]) -> type:
    factories = ensure_factories(factories)
    name = f"{label}[{', '.join(factory_name(f) for f in factories)}]"
    return type(base)(
        name, (base,), {"factories": factories, "__module__": __name__}
    )


def compose(*factories: CommandFactory) -> type[ComposedCommand]:
    """Return a command class running *factories* as a single step.

    The result is itself a factory, so it nests anywhere a factory is
    accepted::

        checkout = compose(ReserveStock, ChargeCard)
        run(ctx, ValidateCart, checkout, SendReceipt)
    """
    return _build(ComposedCommand, "Composed", factories)


def compose_async(*factories: CommandFactory) -> type[AsyncComposedCommand]:
    """Async variant of :func:`compose`; sync and async factories may be mixed."""
    return _build(AsyncComposedCommand, "AsyncComposed", factories)
