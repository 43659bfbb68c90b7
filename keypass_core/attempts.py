# keypass_core/attempts.py
from __future__ import annotations
import os

# The caller has already failed this many times -> stop asking
DEFAULT_MAX_ATTEMPTS = 4


def max_attempts_from_env(default: int = DEFAULT_MAX_ATTEMPTS) -> int:
    raw = os.getenv("KEYPASS_MAX_ATTEMPTS")
    if raw is None or raw.strip() == "":
        return default
    value = int(raw)
    if value < 1:
        raise ValueError(f"KEYPASS_MAX_ATTEMPTS must be >= 1, got {value}")
    return value


class AttemptController:
    """Interprets the caller-maintained attempt counter. Never mutates it."""

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self.max_attempts = max_attempts

    def should_give_up(self, attempt: int) -> bool:
        if attempt < 0:
            raise ValueError(f"attempt must be non-negative, got {attempt}")
        return attempt >= self.max_attempts
