"""Sequential executors — run commands in order, unwind the ones that ran."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from .context import is_successful
from .errors import CommandConfigError
from .protocol import AnyCommand, CommandState

logger = logging.getLogger(__name__)


def _name(command: Any) -> str:
    return type(command).__name__


def reject_awaitable(result: Any, command: Any, method: str) -> None:
    """Fail loudly when a sync runner is handed an async command."""
    if not inspect.isawaitable(result):
        return
    close = getattr(result, "close", None)
    if close is not None:
        close()
    raise CommandConfigError(
        f"{_name(command)}.{method}() returned an awaitable; "
        "use AsyncRunner / run_async for async commands"
    )


class _BaseRunner:
    """State shared by :class:`Runner` and :class:`AsyncRunner`."""

    def __init__(self, *commands: AnyCommand) -> None:
        self._commands: tuple[AnyCommand, ...] = commands
        self._executed: list[AnyCommand] = []
        self.state = CommandState.IDLE

    @property
    def commands(self) -> tuple[AnyCommand, ...]:
        """Every command, in declaration order."""
        return self._commands

    @property
    def executed(self) -> tuple[AnyCommand, ...]:
        """Commands begun during the most recent :meth:`execute`.

        Always a prefix of :attr:`commands`.  The failing command, if any,
        is the last entry.
        """
        return tuple(self._executed)

    def _begin(self) -> None:
        self._executed = []
        self.state = CommandState.EXECUTING

    def _finish(self, failed: bool) -> None:
        self.state = CommandState.FAILED if failed else CommandState.SUCCEEDED
        if failed:
            failing = self._executed[-1]
            logger.info(
                "%s: stopped at %s (%d/%d commands begun)",
                type(self).__name__,
                _name(failing),
                len(self._executed),
                len(self._commands),
            )

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        names = ", ".join(_name(c) for c in self._commands)
        return f"{type(self).__name__}({names}) state={self.state.value}"


class Runner(_BaseRunner):
    """Run synchronous commands one after another.

    A command is recorded in :attr:`executed` *before* it is invoked, so the
    command that fails is compensated along with everything before it.  The
    runner stops as soon as the command's context reports
    ``success == False``; remaining commands are never invoked.  Exceptions raised by
    commands propagate unchanged.

    A runner may be executed again; :attr:`executed` then only reflects the
    latest execution.
    """

    def execute(self) -> None:
        self._begin()
        for command in self._commands:
            self._executed.append(command)
            logger.debug("execute %s", _name(command))
            reject_awaitable(command.execute(), command, "execute")
            if not is_successful(command.context):
                self._finish(failed=True)
                return
        self._finish(failed=False)

    def undo(self) -> None:
        """Undo every executed command, most recent first.

        A no-op when nothing was executed.
        """
        if not self._executed:
            return
        self.state = CommandState.UNDOING
        for command in reversed(self._executed):
            logger.debug("undo %s", _name(command))
            reject_awaitable(command.undo(), command, "undo")
        self.state = CommandState.UNDONE


class AsyncRunner(_BaseRunner):
    """Run commands one after another, awaiting each before the next starts.

    Accepts both sync and async commands: a call whose result is awaitable is
    awaited to completion before the runner moves on.  Nothing ever runs
    concurrently.
    """

    async def execute(self) -> None:
        self._begin()
        for command in self._commands:
            self._executed.append(command)
            logger.debug("execute %s", _name(command))
            result = command.execute()
            if inspect.isawaitable(result):
                await result
            if not is_successful(command.context):
                self._finish(failed=True)
                return
        self._finish(failed=False)

    async def undo(self) -> None:
        """Undo every executed command, most recent first."""
        if not self._executed:
            return
        self.state = CommandState.UNDOING
        for command in reversed(self._executed):
            logger.debug("undo %s", _name(command))
            result = command.undo()
            if inspect.isawaitable(result):
                await result
        self.state = CommandState.UNDONE
