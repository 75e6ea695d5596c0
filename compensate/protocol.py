"""Structural protocols and type aliases for commands and factories."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable

from .errors import CommandConfigError


@runtime_checkable
class CommandProtocol(Protocol):
    """Structural interface for a synchronous command.

    Any object with a ``context`` attribute and ``execute``/``undo`` methods
    satisfies it; subclassing :class:`~compensate.command.Command` is a
    convenience, not a requirement.
    """

    context: Any

    def execute(self) -> None: ...

    def undo(self) -> None: ...


@runtime_checkable
class AsyncCommandProtocol(Protocol):
    """Structural interface for a command whose work suspends."""

    context: Any

    async def execute(self) -> None: ...

    async def undo(self) -> None: ...


AnyCommand = Union[CommandProtocol, AsyncCommandProtocol]

# Given a context, produce a command bound to it.  Usually a class.
CommandFactory = Callable[[Any], AnyCommand]

# Picks a factory from the live context; ``None`` means "run nothing".
Selector = Callable[[Any], Optional[CommandFactory]]


def factory_name(factory: Any) -> str:
    return getattr(factory, "__name__", type(factory).__name__)


def ensure_factories(factories: tuple[Any, ...]) -> tuple[CommandFactory, ...]:
    """Validate that every entry can be called with a context."""
    for index, factory in enumerate(factories):
        if not callable(factory):
            raise CommandConfigError(
                f"factory #{index} ({factory!r}) is not callable; pass a command "
                "class or a callable taking a context"
            )
    return factories


class CommandState(str, Enum):
    """Lifecycle shared by runners, composites and conditional commands.

    ``IDLE → EXECUTING → SUCCEEDED | FAILED``, then from ``FAILED`` only
    ``UNDOING → UNDONE``.  User-defined commands are not required to track
    it; the runner that drives them reports it for the whole sequence.
    """

    IDLE = "idle"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNDOING = "undoing"
    UNDONE = "undone"
