"""Pacing for narrated test runs.

Every narrated log line is followed by a wait long enough for the
synthesized voice-over to finish, so the recorded video, the console log
and the narration audio stay aligned with the actions on screen.

The duration model (speech rate, punctuation pauses, safety buffer, floor
and rounding) lives in :func:`compute_delay` and never touches a page. The
waiting itself goes through :func:`pacing_delay`, which only uses the page's
``wait_for_timeout`` so other tests running in parallel are not blocked.
"""

import math
import re
from typing import Any, Optional

from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.models.narration import NarrationProfile

_WHITESPACE = re.compile(r"\s+")


def count_words(message: str) -> int:
    return len([token for token in _WHITESPACE.split(message) if token])


def _round_half_up(value: float, granularity: int) -> int:
    return int(math.floor(value / granularity + 0.5)) * granularity


def compute_delay(message: str, profile: Optional[NarrationProfile] = None) -> int:
    """Return how long, in milliseconds, ``message`` takes to narrate.

    The result is at least ``profile.minimum_ms`` and a multiple of
    ``profile.rounding_granularity_ms``. Empty or whitespace-only messages
    get the floor.
    """
    profile = profile or NarrationProfile.from_settings()
    words = count_words(message)
    periods = message.count(".")
    commas = message.count(",")

    duration_ms = (words / profile.words_per_second) * 1000
    duration_ms += periods * profile.period_pause_ms
    duration_ms += commas * profile.comma_pause_ms
    duration_ms *= profile.buffer_multiplier
    duration_ms = max(duration_ms, profile.minimum_ms)
    return _round_half_up(duration_ms, profile.rounding_granularity_ms)


def pacing_delay(page: Any, duration_ms: int) -> None:
    logger.debug(f"Pacing delay: {duration_ms}ms")
    page.wait_for_timeout(duration_ms)


async def async_pacing_delay(page: Any, duration_ms: int) -> None:
    logger.debug(f"Pacing delay: {duration_ms}ms")
    await page.wait_for_timeout(duration_ms)


def narrated_log(page: Any, message: str, profile: Optional[NarrationProfile] = None) -> int:
    print(message, flush=True)
    duration_ms = compute_delay(message, profile)
    pacing_delay(page, duration_ms)
    return duration_ms


def quick_log(page: Any, message: str) -> int:
    """Log a short status line followed by a flat delay."""
    print(message, flush=True)
    duration_ms = get_settings().narration_timing.quick_delay_ms
    pacing_delay(page, duration_ms)
    return duration_ms


def long_log(page: Any, message: str) -> int:
    """Log a detailed message followed by a flat, longer delay."""
    print(message, flush=True)
    duration_ms = get_settings().narration_timing.long_delay_ms
    pacing_delay(page, duration_ms)
    return duration_ms


async def async_narrated_log(
    page: Any, message: str, profile: Optional[NarrationProfile] = None
) -> int:
    print(message, flush=True)
    duration_ms = compute_delay(message, profile)
    await async_pacing_delay(page, duration_ms)
    return duration_ms


async def async_quick_log(page: Any, message: str) -> int:
    print(message, flush=True)
    duration_ms = get_settings().narration_timing.quick_delay_ms
    await async_pacing_delay(page, duration_ms)
    return duration_ms


async def async_long_log(page: Any, message: str) -> int:
    print(message, flush=True)
    duration_ms = get_settings().narration_timing.long_delay_ms
    await async_pacing_delay(page, duration_ms)
    return duration_ms
