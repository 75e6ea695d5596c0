"""Run configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, get_args

from dotenv import load_dotenv

from .errors import CommandConfigError

Isolation = Literal["shallow", "deep"]


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a single ``run`` invocation.

    Attributes:
        isolation: How the caller's context is cloned before the pipeline
            touches it.  ``"shallow"`` duplicates top-level fields only, so
            nested lists/dicts/models stay shared with the caller's object.
            ``"deep"`` copies the whole object graph.
    """

    isolation: Isolation = "shallow"

    def __post_init__(self) -> None:
        if self.isolation not in get_args(Isolation):
            raise CommandConfigError(
                f"isolation must be one of {get_args(Isolation)}, "
                f"got {self.isolation!r}"
            )

    @classmethod
    def from_env(
        cls,
        prefix: str = "COMPENSATE_",
        *,
        env_file: str | Path | None = None,
    ) -> RunConfig:
        """Build a config from environment variables.

        Reads ``{prefix}ISOLATION``.  When *env_file* is given it is loaded
        first with ``python-dotenv`` (existing variables win).
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
        isolation = os.environ.get(f"{prefix}ISOLATION", "shallow").strip().lower()
        return cls(isolation=isolation)  # type: ignore[arg-type]


DEFAULT_CONFIG = RunConfig()
