"""run / run_async — the top-level entry points."""

from __future__ import annotations

import logging
from typing import Optional, TypeVar

from .config import DEFAULT_CONFIG, RunConfig
from .context import clone_context, is_successful
from .protocol import CommandFactory, ensure_factories
from .runner import AsyncRunner, Runner

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


def run(
    context: ContextT,
    *factories: CommandFactory,
    config: Optional[RunConfig] = None,
) -> ContextT:
    """Run *factories* against a copy of *context* and return the copy.

    Every factory is instantiated up front against the same copy.  Commands
    then run in order until one sets ``success = False``; in that case every
    command begun so far is undone, most recent first.  The caller's object
    is never mutated at the top level (see :class:`~compensate.config.RunConfig`
    for nested values).

    Args:
        context: Initial state.  Must carry a boolean ``success`` attribute,
            or a ``"success"`` key when it is a mapping such as a ``dict``.
        *factories: Command classes or callables ``context -> command``.
        config: Run options; defaults to shallow isolation.

    Returns:
        The copied context with all applied effects and, after a failure,
        all applied compensations.
    """
    config = config or DEFAULT_CONFIG
    factories = ensure_factories(factories)
    copy = clone_context(context, config.isolation)

    runner = Runner(*(factory(copy) for factory in factories))
    runner.execute()
    if not is_successful(copy):
        logger.info("run: compensating %d command(s)", len(runner.executed))
        runner.undo()
        logger.info("run: compensation complete")
    return copy


async def run_async(
    context: ContextT,
    *factories: CommandFactory,
    config: Optional[RunConfig] = None,
) -> ContextT:
    """Async variant of :func:`run`.

    Each ``execute``/``undo`` is awaited before the next one starts;
    sync commands may be mixed in.
    """
    config = config or DEFAULT_CONFIG
    factories = ensure_factories(factories)
    copy = clone_context(context, config.isolation)

    runner = AsyncRunner(*(factory(copy) for factory in factories))
    await runner.execute()
    if not is_successful(copy):
        logger.info("run_async: compensating %d command(s)", len(runner.executed))
        await runner.undo()
        logger.info("run_async: compensation complete")
    return copy
