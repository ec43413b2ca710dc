"""Markdown analysis report formatter.

WHY: A readable document of everything Deepgram found — transcript,
timed paragraphs, intents, topics, per-word confidence and sentences —
for review, documentation and pasting into notes.

HOW: Each section is built independently and skipped when it has no
data. Sections are joined with a blank line.

RULES:
- Title "# Deepgram Analysis Results", sections as "##", paragraphs "###"
- Bulleted lists use "- "
- Empty sections are omitted entirely, never emitted with no items
- Output suffix: ".md", media type "text/markdown"
"""

from __future__ import annotations

from typing import List

from deepgram_converter.core.timecode import format_clock
from deepgram_converter.core.transcript import TranscriptModel
from deepgram_converter.formatters.base import BaseFormatter, FormatterOutput

TITLE = "# Deepgram Analysis Results"


def _clock(seconds) -> str:
    return format_clock(seconds) or "00:00:00"


def _bullets(header: str, items: List[str]) -> str:
    return "\n".join([header, ""] + ["- {}".format(item) for item in items])


def render_markdown(model: TranscriptModel) -> str:
    """Render the transcript model as a Markdown report."""
    sections: List[str] = [TITLE]

    if model.transcript is not None:
        sections.append("## Full Transcript\n\n{}".format(model.transcript))

    if model.paragraphs:
        lines = ["## Paragraphs"]
        for p in model.paragraphs:
            lines.append("### {} -> {}\n\n{}".format(p.start, p.end, p.text))
        sections.append("\n\n".join(lines))

    if model.intents:
        sections.append(_bullets("## Intents", [
            "{} -> {}: {}".format(_clock(i.start), _clock(i.end), i.intent)
            for i in model.intents
        ]))

    if model.topics:
        sections.append(_bullets("## Topics", [t.topic for t in model.topics]))

    words = model.words_with_confidence
    if words:
        sections.append(_bullets("## Words with Confidence", [
            "{}: {}".format(w["word"], "n/a" if w["confidence"] is None else w["confidence"])
            for w in words
        ]))

    if model.segmented_sentences:
        sections.append(_bullets(
            "## Segmented Sentences",
            [s.text for s in model.segmented_sentences],
        ))

    return "\n\n".join(sections) + "\n"


class MarkdownFormatter(BaseFormatter):
    """Formatter that produces the Markdown analysis report."""

    @property
    def name(self) -> str:
        return "Markdown"

    def format(self, model: TranscriptModel) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=".md",
                content=render_markdown(model),
                media_type="text/markdown",
            )
        ]
