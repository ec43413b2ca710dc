"""Timestamp formatting shared by the transcript model and the renderers.

WHY: Deepgram reports every time as float seconds. Paragraph and intent
listings show whole-second clock strings, while speaker-aware SRT needs
millisecond precision. Keeping both conversions in one place guarantees
that the model and the renderers agree on rounding.

HOW: Both helpers floor to their resolution. A tiny epsilon absorbs
binary float error so 3661.123 renders as ",123" rather than ",122".

RULES:
- format_clock(seconds)         -> "HH:MM:SS" (None -> None)
- format_srt_timestamp(seconds) -> "HH:MM:SS,mmm" (None -> "00:00:00,000")
- Hours are not wrapped at 24
"""

from __future__ import annotations

import math
from typing import Optional

# Absorbs float representation error (e.g. 0.123 * 1000 = 122.99999...).
_EPSILON_MS = 1e-6

ZERO_SRT_TIMESTAMP = "00:00:00,000"


def _split_millis(seconds: float) -> tuple:
    total_ms = int(math.floor(float(seconds) * 1000 + _EPSILON_MS))
    total_ms = max(total_ms, 0)
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return hours, minutes, secs, millis


def format_clock(seconds: Optional[float]) -> Optional[str]:
    """Format float seconds as a whole-second ``HH:MM:SS`` string."""
    if seconds is None:
        return None
    hours, minutes, secs, _ = _split_millis(seconds)
    return "{:02d}:{:02d}:{:02d}".format(hours, minutes, secs)


def format_srt_timestamp(seconds: Optional[float]) -> str:
    """Format float seconds as an SRT ``HH:MM:SS,mmm`` timestamp.

    The value is floored to the millisecond and zero-padded. A missing
    time renders as the zero timestamp instead of raising.
    """
    if seconds is None:
        return ZERO_SRT_TIMESTAMP
    hours, minutes, secs, millis = _split_millis(seconds)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def clock_to_srt_timestamp(clock: Optional[str]) -> str:
    """Convert a pre-formatted ``HH:MM:SS`` paragraph time to ``HH:MM:SS,000``.

    Paragraph timestamps carry no sub-second resolution, so the
    millisecond field is always ``000``. Anything that is not a
    three-part clock string renders as the zero timestamp.
    """
    if not clock:
        return ZERO_SRT_TIMESTAMP
    parts = clock.split(":")
    if len(parts) != 3:
        return ZERO_SRT_TIMESTAMP
    return "{}:{}:{},000".format(parts[0], parts[1], parts[2])
