"""Output formatter registry — pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the
formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
``get_formatter()`` resolves aliases and instantiates, passing the
speaker policy to the SRT formatter only.

RULES:
- Keys are the format names accepted on the command line
- "md" is an alias for "markdown"
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from deepgram_converter.formatters.json_report import JSONFormatter, render_json
from deepgram_converter.formatters.markdown import MarkdownFormatter, render_markdown
from deepgram_converter.formatters.srt import SRTFormatter, render_srt
from deepgram_converter.formatters.summary import SummaryFormatter, render_summary

if TYPE_CHECKING:
    from deepgram_converter.core.ir import SpeakerPolicy
    from deepgram_converter.formatters.base import BaseFormatter

FORMATTERS: Dict[str, type] = {
    "srt": SRTFormatter,
    "markdown": MarkdownFormatter,
    "json": JSONFormatter,
    "summary": SummaryFormatter,
}

FORMAT_ALIASES: Dict[str, str] = {
    "md": "markdown",
}

SUPPORTED_FORMATS = sorted(list(FORMATTERS) + list(FORMAT_ALIASES))


def resolve_format(name: str) -> str:
    """Normalize a user-supplied format name to a FORMATTERS key.

    Raises:
        ValueError: If the format is not supported.
    """
    key = name.strip().lower()
    key = FORMAT_ALIASES.get(key, key)
    if key not in FORMATTERS:
        raise ValueError(
            "Unsupported format: {}. Supported formats: {}".format(
                name, ", ".join(SUPPORTED_FORMATS)
            )
        )
    return key


def get_formatter(name: str, policy: Optional[SpeakerPolicy] = None) -> BaseFormatter:
    key = resolve_format(name)
    if key == "srt":
        return SRTFormatter(policy)
    return FORMATTERS[key]()


__all__ = [
    "FORMATTERS",
    "FORMAT_ALIASES",
    "SUPPORTED_FORMATS",
    "get_formatter",
    "render_json",
    "render_markdown",
    "render_srt",
    "render_summary",
    "resolve_format",
]
