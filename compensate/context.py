"""Mutable command context — the single record every command in a run shares."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from .config import Isolation
from .errors import ContextError

ContextT = TypeVar("ContextT")


class CommandContext(BaseModel):
    """Shared, mutable state threaded through a pipeline.

    The engine only requires ``success``.  Everything else is domain data:
    declare typed fields on a subclass, or attach ad-hoc fields directly
    since extra fields are allowed::

        class OrderContext(CommandContext):
            order_id: str
            reserved: list[str] = []

        ctx = CommandContext(value=0)
        ctx.value += 2

    Commands set ``success = False`` to signal business failure.  Nothing in
    the engine ever sets it back to ``True``.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    success: bool = True


def is_successful(context: Any) -> bool:
    """Read the success indicator, failing loudly when it is missing.

    Attribute-based contexts expose ``context.success``; mapping contexts
    (a plain ``dict`` or ``TypedDict``) expose ``context["success"]``.
    """
    if isinstance(context, Mapping):
        try:
            return bool(context["success"])
        except KeyError:
            raise ContextError(
                f"{type(context).__name__} has no 'success' key; "
                "contexts must carry a boolean success indicator"
            ) from None
    try:
        return bool(context.success)
    except AttributeError:
        raise ContextError(
            f"{type(context).__name__} has no 'success' attribute; "
            "contexts must carry a boolean success indicator"
        ) from None


def clone_context(context: ContextT, isolation: Isolation = "shallow") -> ContextT:
    """Copy *context* so the pipeline never mutates the caller's object.

    With ``isolation="shallow"`` only top-level fields are duplicated; nested
    mutable values (lists, dicts, models) are shared with the original, so a
    command that appends to ``ctx.items`` is visible through the caller's
    object.  ``isolation="deep"`` copies the whole graph.
    """
    is_successful(context)
    deep = isolation == "deep"
    if isinstance(context, BaseModel):
        return context.model_copy(deep=deep)
    return copy.deepcopy(context) if deep else copy.copy(context)
