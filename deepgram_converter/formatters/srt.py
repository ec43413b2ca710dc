"""SRT subtitle formatter with optional speaker labels.

WHY: Editors and video players want subtitles. When the transcript was
diarized, each subtitle block can name its speaker; when it was not —
or when anything about speaker processing goes wrong — the paragraphs
still make a perfectly good subtitle file.

HOW: Two renderings share the block layout.
  Paragraph SRT — one block per paragraph, whole-second timestamps
                  with a ",000" millisecond field
  Speaker SRT   — speaker segments reshaped by the policy (merge,
                  duration filter, speaker cap), millisecond timestamps
                  from raw float seconds, text prefixed with a label
Speaker rendering is attempted only when a policy is enabled and speaker
segments exist; any exception inside it is logged and the paragraph
rendering is returned instead.

RULES:
- Blocks: "N\\nSTART --> END\\nTEXT", separated by one blank line,
  numbered from 1, no trailing newline, no "\\r"
- Millisecond separator is a comma
- Displayed speaker number is speaker_id + 1
- A label_format without "%d" falls back to "[Speaker %d]: "
- Speaker failures never propagate to the caller
- Output suffix: ".srt", media type "application/x-subrip"
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from deepgram_converter.core import segmenter
from deepgram_converter.core.ir import (
    DEFAULT_LABEL_FORMAT,
    LABEL_PLACEHOLDER,
    Paragraph,
    SpeakerPolicy,
    SpeakerSegment,
)
from deepgram_converter.core.timecode import clock_to_srt_timestamp, format_srt_timestamp
from deepgram_converter.core.transcript import TranscriptModel
from deepgram_converter.formatters.base import BaseFormatter, FormatterOutput

logger = logging.getLogger(__name__)


def format_speaker_label(speaker_id: int, label_format: Optional[str] = DEFAULT_LABEL_FORMAT) -> str:
    """Render the speaker label shown in front of a subtitle's text.

    Deepgram numbers speakers from 0; people count from 1, so the
    displayed number is ``speaker_id + 1``. An unusable format string
    is replaced by the default rather than raising.
    """
    number = speaker_id + 1
    if not isinstance(label_format, str) or LABEL_PLACEHOLDER not in label_format:
        return DEFAULT_LABEL_FORMAT % number
    try:
        return label_format % number
    except (TypeError, ValueError):
        return DEFAULT_LABEL_FORMAT % number


def _block(index: int, start: str, end: str, text: str) -> str:
    return "{}\n{} --> {}\n{}".format(index, start, end, text)


def render_paragraph_srt(paragraphs: Sequence[Paragraph]) -> str:
    blocks = [
        _block(
            index,
            clock_to_srt_timestamp(p.start),
            clock_to_srt_timestamp(p.end),
            p.text,
        )
        for index, p in enumerate(paragraphs, start=1)
    ]
    return "\n\n".join(blocks)


def render_speaker_srt(
    segments: Sequence[SpeakerSegment],
    label_format: str = DEFAULT_LABEL_FORMAT,
) -> str:
    blocks = [
        _block(
            index,
            format_srt_timestamp(s.start),
            format_srt_timestamp(s.end),
            format_speaker_label(s.speaker_id, label_format) + s.text,
        )
        for index, s in enumerate(segments, start=1)
    ]
    return "\n\n".join(blocks)


def render_srt(
    paragraphs: Sequence[Paragraph],
    speaker_segments: Optional[Sequence[SpeakerSegment]] = None,
    policy: Optional[SpeakerPolicy] = None,
) -> str:
    """Render SRT, speaker-labelled when possible, paragraph-based otherwise.

    Args:
        paragraphs: Paragraphs used for the fallback rendering.
        speaker_segments: Output of ``segmenter.speaker_segments``, or None.
        policy: Speaker policy; speaker rendering requires ``enable=True``.

    Returns:
        The SRT document. Never raises because of speaker data.
    """
    if policy is None or not policy.enable or not speaker_segments:
        return render_paragraph_srt(paragraphs)

    try:
        shaped = segmenter.apply_policy(speaker_segments, policy)
        if not shaped:
            logger.warning("No speaker segments survived the policy; using paragraph-based SRT")
            return render_paragraph_srt(paragraphs)
        return render_speaker_srt(shaped, policy.label_format)
    except Exception:
        logger.exception("Speaker-aware SRT rendering failed; using paragraph-based SRT")
        return render_paragraph_srt(paragraphs)


class SRTFormatter(BaseFormatter):
    """Formatter that produces a single SRT subtitle file.

    RULES:
    - Without a policy, or with a disabled one, output is paragraph-based
    - Speaker segmentation runs at the policy's confidence threshold
    - Missing speaker data is logged as a warning, not raised
    """

    def __init__(self, policy: Optional[SpeakerPolicy] = None) -> None:
        self.policy = policy

    @property
    def name(self) -> str:
        return "SRT Subtitles"

    def _speaker_segments(self, model: TranscriptModel) -> Optional[List[SpeakerSegment]]:
        if self.policy is None or not self.policy.enable:
            return None
        try:
            if not model.has_speaker_data:
                logger.warning("No speaker data found in transcript; using paragraph-based SRT")
                return None
            return segmenter.speaker_segments(
                model.words_with_speaker_info,
                self.policy.confidence_threshold,
            )
        except Exception:
            logger.exception("Speaker segmentation failed; using paragraph-based SRT")
            return None

    def format(self, model: TranscriptModel) -> List[FormatterOutput]:
        content = render_srt(model.paragraphs, self._speaker_segments(model), self.policy)
        return [
            FormatterOutput(
                suffix=".srt",
                content=content,
                media_type="application/x-subrip",
            )
        ]
