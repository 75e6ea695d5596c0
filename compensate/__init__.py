"""Compensating command pipeline — run steps in order, undo them on failure.

Public surface::

    from compensate import (
        run,
        run_async,
        compose,
        compose_async,
        cond,
        cond_async,
        Pipeline,
        Command,
        GuardedCommand,
        AsyncCommand,
        AsyncGuardedCommand,
        CommandContext,
        Runner,
        AsyncRunner,
        RunConfig,
        CompensateError,
        CommandConfigError,
        ContextError,
        UndoBeforeExecuteError,
    )
"""

from .command import AsyncCommand, AsyncGuardedCommand, Command, GuardedCommand
from .compose import AsyncComposedCommand, ComposedCommand, compose, compose_async
from .cond import AsyncConditionalCommand, ConditionalCommand, cond, cond_async
from .config import RunConfig
from .context import CommandContext, clone_context
from .engine import run, run_async
from .errors import (
    CommandConfigError,
    CompensateError,
    ContextError,
    UndoBeforeExecuteError,
)
from .pipeline import Pipeline
from .protocol import (
    AsyncCommandProtocol,
    CommandFactory,
    CommandProtocol,
    CommandState,
    Selector,
)
from .runner import AsyncRunner, Runner

__all__ = [
    # Entry points
    "run",
    "run_async",
    "Pipeline",
    # Combinators
    "compose",
    "compose_async",
    "cond",
    "cond_async",
    "ComposedCommand",
    "AsyncComposedCommand",
    "ConditionalCommand",
    "AsyncConditionalCommand",
    # Commands
    "Command",
    "GuardedCommand",
    "AsyncCommand",
    "AsyncGuardedCommand",
    "CommandProtocol",
    "AsyncCommandProtocol",
    "CommandFactory",
    "Selector",
    "CommandState",
    # Execution
    "Runner",
    "AsyncRunner",
    # Context and config
    "CommandContext",
    "clone_context",
    "RunConfig",
    # Errors
    "CompensateError",
    "CommandConfigError",
    "ContextError",
    "UndoBeforeExecuteError",
]
