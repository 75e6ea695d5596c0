"""cond — choose which command to run from the live context."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, ClassVar, Optional

from .command import AsyncCommand, Command
from .context import is_successful
from .errors import CommandConfigError, UndoBeforeExecuteError
from .protocol import AnyCommand, CommandState, Selector, factory_name
from .runner import reject_awaitable

logger = logging.getLogger(__name__)

_NOT_EXECUTED = object()


def _outcome(context: Any) -> CommandState:
    return CommandState.SUCCEEDED if is_successful(context) else CommandState.FAILED


def _select(command: Any) -> Optional[AnyCommand]:
    """Evaluate the selector now and bind the chosen factory to the context."""
    factory = command.selector(command.context)
    if factory is None:
        logger.debug("%s: selector chose nothing", type(command).__name__)
        return None
    if not callable(factory):
        raise CommandConfigError(
            f"selector of {type(command).__name__} returned {factory!r}, "
            "expected a command factory or None"
        )
    logger.debug("%s: selector chose %s", type(command).__name__, factory_name(factory))
    return factory(command.context)


class ConditionalCommand(Command):
    """A command whose real behaviour is picked at execution time.

    Built by :func:`cond`.  Construction only stores the context; the
    selector runs inside :meth:`execute`, so it sees every mutation made by
    earlier commands in the same pipeline.  A selector returning ``None``
    runs nothing.

    Calling :meth:`undo` before :meth:`execute` raises
    :class:`~compensate.errors.UndoBeforeExecuteError`.

    ``state`` follows the same lifecycle as a runner: ``IDLE`` until
    :meth:`execute`, then ``SUCCEEDED`` or ``FAILED`` from the context, then
    ``UNDOING``/``UNDONE``.
    """

    selector: ClassVar[Callable[[Any], Any]]

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self._chosen: Any = _NOT_EXECUTED
        self.state = CommandState.IDLE

    @property
    def chosen(self) -> Optional[AnyCommand]:
        """The command picked by the last :meth:`execute`, if any."""
        return None if self._chosen is _NOT_EXECUTED else self._chosen

    def execute(self) -> None:
        self.state = CommandState.EXECUTING
        self._chosen = _select(self)
        if self._chosen is not None:
            reject_awaitable(self._chosen.execute(), self._chosen, "execute")
        self.state = _outcome(self.context)

    def undo(self) -> None:
        if self._chosen is _NOT_EXECUTED:
            raise UndoBeforeExecuteError(self)
        self.state = CommandState.UNDOING
        if self._chosen is not None:
            reject_awaitable(self._chosen.undo(), self._chosen, "undo")
        self.state = CommandState.UNDONE


class AsyncConditionalCommand(AsyncCommand):
    """Async counterpart of :class:`ConditionalCommand`.

    The selector itself is synchronous; the chosen command may be sync or
    async.
    """

    selector: ClassVar[Callable[[Any], Any]]

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self._chosen: Any = _NOT_EXECUTED
        self.state = CommandState.IDLE

    @property
    def chosen(self) -> Optional[AnyCommand]:
        return None if self._chosen is _NOT_EXECUTED else self._chosen

    async def execute(self) -> None:
        self.state = CommandState.EXECUTING
        self._chosen = _select(self)
        if self._chosen is not None:
            result = self._chosen.execute()
            if inspect.isawaitable(result):
                await result
        self.state = _outcome(self.context)

    async def undo(self) -> None:
        if self._chosen is _NOT_EXECUTED:
            raise UndoBeforeExecuteError(self)
        self.state = CommandState.UNDOING
        if self._chosen is not None:
            result = self._chosen.undo()
            if inspect.isawaitable(result):
                await result
        self.state = CommandState.UNDONE


def _build(base: type, label: str, selector: Selector) -> type:
    if not callable(selector):
        raise CommandConfigError(f"selector must be callable, got {selector!r}")
    name = f"{label}[{factory_name(selector)}]"
    # staticmethod keeps the selector from binding to the instance
    return type(base)(
        name, (base,), {"selector": staticmethod(selector), "__module__": __name__}
    )


def cond(selector: Selector) -> type[ConditionalCommand]:
    """Return a command class that defers its choice to execution time.

    Example::

        ship = cond(lambda ctx: ExpressShipping if ctx.express else Standard)
        run(ctx, ChargeCard, ship)
    """
    return _build(ConditionalCommand, "Cond", selector)


def cond_async(selector: Selector) -> type[AsyncConditionalCommand]:
    """Async variant of :func:`cond`."""
    return _build(AsyncConditionalCommand, "AsyncCond", selector)
