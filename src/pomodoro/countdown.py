"""Per-second terminal countdown."""
from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes}:{remainder:02d}"


def _write(stream: TextIO, text: str) -> None:
    stream.write(text)
    try:
        stream.flush()
    except OSError as exc:
        logger.debug("could not flush output: %s", exc)


def countdown(
    duration_seconds: int,
    label: str,
    *,
    stream: Optional[TextIO] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Render ``label: M:SS`` once per second until it reaches ``0:00``.

    Each wake-up is scheduled at ``start + tick`` seconds rather than one
    second after the previous render, so rendering time and sleep jitter do
    not accumulate. When the loop falls behind (a slow terminal, a suspended
    laptop) it skips the sleep and catches up.

    Args:
        duration_seconds: Length of the countdown. Must not be negative.
        label: Text shown before the remaining time.
        stream: Where to render; defaults to ``sys.stdout``.
        clock: Monotonic time source, in seconds.
        sleep: Blocking sleep used between ticks.
    """
    if duration_seconds < 0:
        raise ValueError(f"duration must not be negative (got {duration_seconds})")
    out = stream if stream is not None else sys.stdout

    start = clock()
    tick = 0
    while True:
        remaining = max(0, duration_seconds - tick)
        _write(out, f"\r{label}: {format_time(remaining)}")
        if remaining == 0:
            _write(out, "\n")
            return

        tick += 1
        delay = (start + tick) - clock()
        if delay > 0:
            sleep(delay)
        else:
            logger.debug("%s: tick %d is %.3fs late, catching up", label, tick, abs(delay))
