"""Pipeline — a reusable, chainable definition of a command sequence."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Self

from .compose import ComposedCommand, compose
from .config import RunConfig
from .engine import run, run_async
from .protocol import CommandFactory, ensure_factories, factory_name


class Pipeline:
    """An ordered list of command factories that can be run many times.

    Each call clones the given context and runs a fresh set of command
    instances, so one ``Pipeline`` can serve any number of requests::

        checkout = (
            Pipeline()
            .then(ValidateCart)
            .then(ReserveStock, ChargeCard)
            .then(SendReceipt)
        )
        result = checkout(OrderContext(order_id="A-1"))

    A pipeline nests inside another via :meth:`as_command`.
    """

    def __init__(
        self,
        factories: Optional[Iterable[CommandFactory]] = None,
        *,
        config: Optional[RunConfig] = None,
    ) -> None:
        self._factories: list[CommandFactory] = list(
            ensure_factories(tuple(factories or ()))
        )
        self.config = config

    @property
    def factories(self) -> tuple[CommandFactory, ...]:
        return tuple(self._factories)

    def then(self, *factories: CommandFactory) -> Self:
        """Append *factories*, returning ``self`` for chaining."""
        self._factories.extend(ensure_factories(factories))
        return self

    def run(self, context: Any) -> Any:
        return run(context, *self._factories, config=self.config)

    async def run_async(self, context: Any) -> Any:
        return await run_async(context, *self._factories, config=self.config)

    __call__ = run

    def as_command(self) -> type[ComposedCommand]:
        """Freeze the current factories into a single composite command."""
        return compose(*self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        names = " → ".join(factory_name(f) for f in self._factories)
        return f"Pipeline({names})"
