"""Intermediate representation dataclasses for Deepgram transcripts.

WHY: Deepgram returns deeply nested JSON (results → channels →
alternatives → words/paragraphs) in several incompatible shapes.
Downstream renderers (SRT, Markdown, JSON, summary) and the field
analyzer each need words, paragraphs, speakers, and timing — but in
different groupings. The IR gives them one well-typed form to consume,
decoupling parsing from formatting.

HOW: Small dataclasses, one per concept:
  Word             — one recognized word with raw timing and speaker data
  Paragraph        — a paragraph with pre-formatted HH:MM:SS bounds
  Topic / Intent / Sentence — metadata listings
  SpeakerSegment   — a run of same-speaker words (built by the segmenter)
  CanonicalSegment — one normalized record produced by the normalizer
  SpeakerPolicy    — speaker-aware SRT configuration value object

RULES:
- Word is immutable once parsed; speaker / speaker_confidence may be None
- Word times are float seconds; Paragraph times are "HH:MM:SS" strings
- SpeakerSegment.speaker_id is Deepgram's zero-based id; display adds 1
- CanonicalSegment.to_dict() omits unset optional fields (absent != empty)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from deepgram_converter.core.errors import ConfigError

DEFAULT_LABEL_FORMAT = "[Speaker %d]: "
LABEL_PLACEHOLDER = "%d"
MAX_SPEAKERS_LIMIT = 50


@dataclass(frozen=True)
class Word:
    """A single recognized word from ``channels[0].alternatives[0].words``.

    RULES:
    - text: the ``word`` field (``punctuated_word`` when ``word`` is missing)
    - start_raw / end_raw: float seconds, as reported by Deepgram
    - transcription_confidence: recognition confidence, may be None
    - speaker / speaker_confidence: present only with diarization enabled
    """

    text: str
    start_raw: float
    end_raw: float
    transcription_confidence: Optional[float] = None
    speaker: Optional[int] = None
    speaker_confidence: Optional[float] = None

    @property
    def has_speaker_info(self) -> bool:
        return self.speaker is not None and self.speaker_confidence is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Word:
        """Parse a Word from a raw Deepgram word object."""
        text = data.get("word")
        if text is None:
            text = data.get("punctuated_word", "")
        return cls(
            text=text,
            start_raw=float(data.get("start") or 0.0),
            end_raw=float(data.get("end") or 0.0),
            transcription_confidence=data.get("confidence"),
            speaker=data.get("speaker"),
            speaker_confidence=data.get("speaker_confidence"),
        )


@dataclass(frozen=True)
class Paragraph:
    text: str
    start: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class Topic:
    topic: str
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"topic": self.topic}
        if self.confidence is not None:
            data["confidence"] = self.confidence
        return data


@dataclass(frozen=True)
class Intent:
    intent: str
    start: Optional[float] = None
    end: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"intent": self.intent, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class Sentence:
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text}


@dataclass
class SpeakerSegment:
    """A contiguous run of words attributed to one speaker.

    WHY: Speaker-aware SRT needs one subtitle block per speaker turn
    with raw float timing and an aggregate confidence.

    HOW: Built by ``segmenter.speaker_segments`` and reshaped by
    ``segmenter.apply_policy``. Never persisted.

    RULES:
    - speaker_id: Deepgram's zero-based speaker number
    - start / end: float seconds of the first / last constituent word
    - confidence: mean speaker_confidence of the constituent words
    - word_count: number of constituent words
    """

    speaker_id: int
    text: str
    start: float
    end: float
    confidence: float
    word_count: int

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class CanonicalSegment:
    """One normalized segment produced from a raw Deepgram response.

    WHY: Raw responses arrive as utterances, diarized words, or a bare
    transcript. Consumers such as the field analyzer want one flat record
    shape regardless of which one the API returned.

    RULES:
    - segment_id: "utterance_N", "word_group_N" or "transcript_0"
    - topics / topic / summary are document-level metadata broadcast to
      every segment of one document; they stay None when absent
    - topic is topics[0], kept for single-value consumers
    """

    segment_id: str
    transcript: str
    speaker: Optional[int] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    confidence: Optional[float] = None
    word_count: Optional[int] = None
    topics: Optional[List[str]] = None
    topic: Optional[str] = None
    summary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the record shape consumed by FieldAnalyzer.

        Unset optional fields are left out entirely so that "no topics"
        stays distinguishable from an empty topic list.
        """
        data: Dict[str, Any] = {
            "segment_id": self.segment_id,
            "transcript": self.transcript,
        }
        optional = (
            ("speaker", self.speaker),
            ("start_time", self.start_time),
            ("end_time", self.end_time),
            ("confidence", self.confidence),
            ("word_count", self.word_count),
            ("topics", self.topics),
            ("topic", self.topic),
            ("summary", self.summary),
        )
        for key, value in optional:
            if value is not None:
                data[key] = list(value) if isinstance(value, list) else value
        return data


@dataclass(frozen=True)
class SpeakerPolicy:
    """Speaker-aware SRT rendering configuration.

    WHY: Diarization output is noisy — low-confidence words, split turns,
    sub-second fragments and spurious extra speakers. The policy decides
    how much of that reaches the subtitle file.

    HOW: Usually built by ``config.load_speaker_policy`` from the
    ``speaker_diarization`` section of a YAML file. A policy that fails
    validation is replaced by a disabled one by the caller.

    RULES:
    - confidence_threshold in [0, 1]
    - label_format contains exactly one "%d" placeholder
    - min_segment_duration >= 0 seconds
    - max_speakers in [1, 50]
    """

    enable: bool = False
    confidence_threshold: float = 0.8
    label_format: str = DEFAULT_LABEL_FORMAT
    merge_consecutive_segments: bool = True
    min_segment_duration: float = 1.0
    max_speakers: int = 10

    @classmethod
    def disabled(cls) -> SpeakerPolicy:
        return cls(enable=False)

    def validate(self) -> SpeakerPolicy:
        """Check ranges and the label placeholder; return self when valid.

        Raises:
            ConfigError: On the first out-of-range or malformed value.
        """
        threshold = self.confidence_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) \
                or not 0.0 <= threshold <= 1.0:
            raise ConfigError(
                "confidence_threshold must be a number between 0.0 and 1.0, "
                "got: {!r}".format(threshold)
            )
        if not isinstance(self.label_format, str) \
                or self.label_format.count(LABEL_PLACEHOLDER) != 1:
            raise ConfigError(
                "label_format must be a string containing one '%d' placeholder, "
                "got: {!r}".format(self.label_format)
            )
        duration = self.min_segment_duration
        if isinstance(duration, bool) or not isinstance(duration, (int, float)) \
                or duration < 0.0:
            raise ConfigError(
                "min_segment_duration must be a non-negative number, "
                "got: {!r}".format(duration)
            )
        speakers = self.max_speakers
        if isinstance(speakers, bool) or not isinstance(speakers, int) \
                or not 1 <= speakers <= MAX_SPEAKERS_LIMIT:
            raise ConfigError(
                "max_speakers must be an integer between 1 and {}, "
                "got: {!r}".format(MAX_SPEAKERS_LIMIT, speakers)
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enable": self.enable,
            "confidence_threshold": self.confidence_threshold,
            "label_format": self.label_format,
            "merge_consecutive_segments": self.merge_consecutive_segments,
            "min_segment_duration": self.min_segment_duration,
            "max_speakers": self.max_speakers,
        }
