"""Exception hierarchy for the compensating command engine.

Business failure is never an exception: a command signals it by setting
``context.success = False``.  The classes below cover wiring mistakes and
contract violations only.
"""


class CompensateError(Exception):
    """Base class for all engine errors."""


class CommandConfigError(CompensateError, TypeError):
    """Raised when a pipeline is wired incorrectly.

    Examples: a factory that is not callable, a selector that returns
    something other than a factory, or an async command handed to the
    synchronous :class:`~compensate.runner.Runner`.
    """


class ContextError(CompensateError, TypeError):
    """Raised when a context does not carry a ``success`` attribute."""


class UndoBeforeExecuteError(CompensateError, RuntimeError):
    """Raised when a conditional command is undone before it was executed."""

    def __init__(self, command: object) -> None:
        self.command = command
        super().__init__(
            f"{type(command).__name__}.undo() called before execute(): "
            "no command was chosen, nothing to compensate"
        )
