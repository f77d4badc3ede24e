"""Environment-first settings for the engine and its CLI.

CLI flags take precedence; otherwise values come from environment variables,
falling back to built-in defaults.
"""

from __future__ import annotations

import logging
import os
from enum import Enum


class StartPolicy(Enum):
    """How the first player is chosen when a game starts."""

    FIXED = "fixed"  # O always starts
    COUNTS = "counts"  # side with fewer marks starts, O on ties


DEFAULT_START_POLICY = StartPolicy.COUNTS


def parse_start_policy(value: str) -> StartPolicy:
    try:
        return StartPolicy(value.strip().lower())
    except ValueError:
        accepted = ", ".join(p.value for p in StartPolicy)
        raise ValueError(f"Unknown start policy {value!r}; expected one of: {accepted}") from None


def start_policy(override: str | None = None) -> StartPolicy:
    """Resolve the start policy: explicit override -> TTT_START_POLICY -> default."""
    if override:
        return parse_start_policy(override)
    env = os.getenv("TTT_START_POLICY")
    if env:
        return parse_start_policy(env)
    return DEFAULT_START_POLICY


def log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv("TTT_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in TTT_LOG_LEVEL: {name!r}")
    return level
