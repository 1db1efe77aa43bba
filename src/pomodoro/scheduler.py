"""Pomodoro schedule helpers."""
from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass
from typing import Callable, Iterator, List, Optional, TextIO

from . import countdown as engine

logger = logging.getLogger(__name__)

FOCUS = "focus"
SHORT_BREAK = "short_break"
LONG_BREAK = "long_break"

LABELS = {
    FOCUS: "Focus",
    SHORT_BREAK: "Break",
    LONG_BREAK: "Long break",
}

DONE_MESSAGES = {
    FOCUS: "✅ Focus done",
    SHORT_BREAK: "☕ Break over",
    LONG_BREAK: "🌴 Long break over",
}

DEFAULTS = {
    "focus_minutes": 25,
    "break_minutes": 5,
    "cycles": 4,
    "long_break_minutes": 15,
    "long_break_every": 4,
}


class ConfigError(ValueError):
    """Raised when a session configuration cannot be run."""


@dataclass(frozen=True)
class Interval:
    """Represents one focus or break interval."""

    kind: str
    label: str
    duration_seconds: int
    session: int

    @property
    def is_focus(self) -> bool:
        return self.kind == FOCUS


@dataclass(frozen=True)
class SessionConfig:
    """Durations (in minutes) and counts for one Pomodoro run."""

    focus_minutes: int = DEFAULTS["focus_minutes"]
    break_minutes: int = DEFAULTS["break_minutes"]
    cycles: int = DEFAULTS["cycles"]
    long_break_minutes: int = DEFAULTS["long_break_minutes"]
    long_break_every: int = DEFAULTS["long_break_every"]
    seconds_per_minute: int = 60

    def validate(self) -> None:
        for name, value in asdict(self).items():
            if value < 0:
                raise ConfigError(f"{name.replace('_', '-')} must not be negative (got {value})")
        if self.long_break_every == 0:
            raise ConfigError("long-break-every must be at least 1")
        if self.seconds_per_minute < 1:
            raise ConfigError("seconds-per-minute must be at least 1")

    def summary(self) -> str:
        return (
            f"Run with focus={self.focus_minutes}m, break-min={self.break_minutes}m, "
            f"cycles={self.cycles}, long-break={self.long_break_minutes}m, "
            f"long-break-every={self.long_break_every}"
        )


@dataclass
class PomodoroPlan:
    """Holds a full Pomodoro schedule."""

    intervals: List[Interval]

    @property
    def total_seconds(self) -> int:
        return sum(interval.duration_seconds for interval in self.intervals)

    @property
    def focus_count(self) -> int:
        return sum(1 for interval in self.intervals if interval.is_focus)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)


def _interval(kind: str, minutes: int, session: int, config: SessionConfig) -> Interval:
    return Interval(
        kind=kind,
        label=LABELS[kind],
        duration_seconds=minutes * config.seconds_per_minute,
        session=session,
    )


def build_plan(config: Optional[SessionConfig] = None) -> PomodoroPlan:
    """Create a Pomodoro plan for ``config``.

    Every focus session except the last is followed by a break. The break
    after session ``n`` is a long break when ``n`` is a multiple of
    ``long_break_every``, otherwise a short one.

    Raises:
        ConfigError: if the configuration has a negative value or
            ``long_break_every`` is zero.
    """
    config = config or SessionConfig()
    config.validate()

    intervals: List[Interval] = []
    for index in range(1, config.cycles + 1):
        intervals.append(_interval(FOCUS, config.focus_minutes, index, config))
        if index == config.cycles:
            break
        if index % config.long_break_every == 0:
            intervals.append(_interval(LONG_BREAK, config.long_break_minutes, index, config))
        else:
            intervals.append(_interval(SHORT_BREAK, config.break_minutes, index, config))

    plan = PomodoroPlan(intervals)
    logger.debug("built plan with %d interval(s), %ds total", len(plan), plan.total_seconds)
    return plan


def describe_plan(plan: PomodoroPlan) -> List[str]:
    return [
        f"- {item.label} (session {item.session}): {engine.format_time(item.duration_seconds)}"
        for item in plan
    ]


def run_session(
    config: Optional[SessionConfig] = None,
    *,
    stream: Optional[TextIO] = None,
    countdown: Callable[..., None] = engine.countdown,
) -> None:
    """Run every interval of the plan for ``config`` in order.

    The plan is built (and the configuration validated) before anything is
    written, so an invalid configuration produces no output.
    """
    config = config or SessionConfig()
    plan = build_plan(config)
    out = stream if stream is not None else sys.stdout

    print(config.summary(), file=out)
    for interval in plan:
        if interval.is_focus:
            print(f"\n=== Session {interval.session}/{config.cycles} ===", file=out)
        logger.debug("starting %s (%ds)", interval.kind, interval.duration_seconds)
        countdown(interval.duration_seconds, interval.label, stream=out)
        print(DONE_MESSAGES[interval.kind], file=out)

    print("\n🎉 All sessions done. Nice work.", file=out)
