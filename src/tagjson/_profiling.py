"""
Per-rule statistics for the grammar and the encoder.

Setting ``TAGJSON_PROFILE`` in the environment wraps every grammar rule so
that each call records its time, whether it matched, and how many
characters the match consumed. Encoder entry points record the characters
they produce. Without the variable the decorators return the function
untouched.
"""

import functools
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

PROFILE_RULES = __debug__ and "TAGJSON_PROFILE" in os.environ


@dataclass
class RuleStats:
    """Call, match and character counts for one grammar rule or encoder."""

    name: str
    calls: int = 0
    matches: int = 0
    total_time_ns: int = 0
    chars: int = 0

    def record(self, duration_ns: int, chars: int | None) -> None:
        """Records one call; ``chars`` is None when the rule did not match."""
        self.calls += 1
        self.total_time_ns += duration_ns
        if chars is not None:
            self.matches += 1
            self.chars += chars

    @property
    def match_rate(self) -> float:
        return self.matches / self.calls if self.calls else 0.0


_rule_stats: dict[str, RuleStats] = {}


def _stats_for(name: str) -> RuleStats:
    stats = _rule_stats.get(name)
    if stats is None:
        stats = _rule_stats[name] = RuleStats(name)
    return stats


def profiled_rule[F: Callable[..., Any]](
    func: F, enabled: bool = PROFILE_RULES
) -> F:
    """
    Decorates a grammar rule ``rule(self, pos, ...) -> (value, end) | None``.

    A match counts ``end - pos`` consumed characters.
    """
    if not enabled:
        return func

    @functools.wraps(func)
    def wrapper(self: Any, pos: int, *args: Any) -> Any:
        start = time.perf_counter_ns()
        matched = func(self, pos, *args)
        consumed = None if matched is None else matched[1] - pos
        _stats_for(func.__name__).record(
            time.perf_counter_ns() - start, consumed
        )
        return matched

    return wrapper  # type: ignore[return-value]


def profiled_output[F: Callable[..., str]](
    func: F, enabled: bool = PROFILE_RULES
) -> F:
    """Decorates an encoder function, counting the characters it returns."""
    if not enabled:
        return func

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        start = time.perf_counter_ns()
        text = func(*args, **kwargs)
        _stats_for(func.__name__).record(
            time.perf_counter_ns() - start, len(text)
        )
        return text

    return wrapper  # type: ignore[return-value]


def get_rule_stats() -> dict[str, RuleStats]:
    """Returns a snapshot of the statistics collected so far."""
    return _rule_stats.copy()


def clear_rule_stats() -> None:
    _rule_stats.clear()
