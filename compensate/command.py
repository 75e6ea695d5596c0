"""Command base classes — one unit of work bound to a shared context."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from .context import is_successful

logger = logging.getLogger(__name__)


class Command(ABC):
    """Synchronous command.

    Subclasses implement :meth:`execute` and optionally :meth:`undo`.  The
    base ``undo`` is a no-op, so commands with nothing to compensate can
    ignore it.

    ``Command`` does not check ``context.success`` before running: the
    :class:`~compensate.runner.Runner` stops the sequence at the first
    failure.  Use :class:`GuardedCommand` when a command may be invoked
    outside a runner.

    Example::

        class ReserveStock(Command):
            def execute(self) -> None:
                if not warehouse.reserve(self.context.sku):
                    self.context.success = False

            def undo(self) -> None:
                warehouse.release(self.context.sku)
    """

    def __init__(self, context: Any) -> None:
        self.context = context

    @abstractmethod
    def execute(self) -> None:
        """Perform the effect.  Set ``context.success = False`` to fail."""

    def undo(self) -> None:
        """Reverse the effect of :meth:`execute`.  No-op by default."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class GuardedCommand(Command):
    """Command that skips its work once the context has already failed.

    Implement :meth:`run` instead of :meth:`execute`, and :meth:`compensate`
    instead of :meth:`undo`.  ``executed`` records whether ``run`` was
    actually invoked; ``undo`` only calls ``compensate`` when it was, so a
    command whose work was skipped is never compensated.
    """

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self.executed = False

    def execute(self) -> None:
        if not is_successful(self.context):
            logger.debug("%s: context already failed, skipping", type(self).__name__)
            return
        self.executed = True
        self.run()

    @abstractmethod
    def run(self) -> None:
        """The command's real work."""

    def undo(self) -> None:
        if not self.executed:
            logger.debug("%s: never ran, nothing to compensate", type(self).__name__)
            return
        self.compensate()

    def compensate(self) -> None:
        """Reverse the effect of :meth:`run`.  No-op by default."""


class AsyncCommand(ABC):
    """Asynchronous counterpart of :class:`Command`."""

    def __init__(self, context: Any) -> None:
        self.context = context

    @abstractmethod
    async def execute(self) -> None:
        """Perform the effect.  Set ``context.success = False`` to fail."""

    async def undo(self) -> None:
        """Reverse the effect of :meth:`execute`.  No-op by default."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AsyncGuardedCommand(AsyncCommand):
    """Asynchronous counterpart of :class:`GuardedCommand`."""

    def __init__(self, context: Any) -> None:
        super().__init__(context)
        self.executed = False

    async def execute(self) -> None:
        if not is_successful(self.context):
            logger.debug("%s: context already failed, skipping", type(self).__name__)
            return
        self.executed = True
        await self.run()

    @abstractmethod
    async def run(self) -> None:
        """The command's real work."""

    async def undo(self) -> None:
        if not self.executed:
            logger.debug("%s: never ran, nothing to compensate", type(self).__name__)
            return
        await self.compensate()

    async def compensate(self) -> None:
        """Reverse the effect of :meth:`run`.  No-op by default."""
