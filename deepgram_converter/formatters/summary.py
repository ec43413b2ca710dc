"""Plain-text summary formatter.

WHY: A quick look at what a transcript contains — how much text, which
topics and intents were detected, how long it runs — without opening
the full report.

HOW: A fixed template filled from ``summary_stats()``, the topic and
intent names, and the last paragraph's end time.

RULES:
- Section order: content overview, topics, intents, duration
- Topic / intent listings are omitted when empty (their counts stay)
- Duration is the last paragraph's end, or "Unknown" without paragraphs
- Output suffix: "_summary.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List

from deepgram_converter.core.transcript import TranscriptModel
from deepgram_converter.formatters.base import BaseFormatter, FormatterOutput


def calculate_duration(model: TranscriptModel) -> str:
    if not model.paragraphs:
        return "Unknown"
    return model.paragraphs[-1].end or "Unknown"


def render_summary(model: TranscriptModel) -> str:
    """Render the fixed-template plain-text summary."""
    stats = model.summary_stats()

    lines = [
        "Deepgram Analysis Summary",
        "=========================",
        "",
        "Content Overview:",
        "  - Total Words: {}".format(stats["total_words"]),
        "  - Total Sentences: {}".format(stats["total_sentences"]),
        "  - Total Paragraphs: {}".format(stats["total_paragraphs"]),
        "  - Transcript Length: {} characters".format(stats["transcript_length"]),
        "",
        "Topics Identified: {}".format(stats["total_topics"]),
    ]
    lines.extend("  - {}".format(t.topic) for t in model.topics)
    lines.append("")
    lines.append("Intents Detected: {}".format(stats["total_intents"]))
    lines.extend("  - {}".format(i.intent) for i in model.intents)
    lines.append("")
    lines.append("Duration: {}".format(calculate_duration(model)))

    return "\n".join(lines) + "\n"


class SummaryFormatter(BaseFormatter):
    """Formatter that produces the plain-text summary."""

    @property
    def name(self) -> str:
        return "Summary"

    def format(self, model: TranscriptModel) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="_summary.txt",
                content=render_summary(model),
                media_type="text/plain",
            )
        ]
