"""Single-channel Deepgram transcript model with memoized accessors.

WHY: The common Deepgram document (one channel, one alternative, with
paragraphs, topics and intents enabled) is what every renderer works
from. Each renderer needs a different projection — paragraphs for SRT,
everything for Markdown/JSON, counts for the summary — so the model
exposes them as lazily computed, cached accessors over the raw dict.

HOW: ``TranscriptModel`` wraps the decoded document. Accessors are
``functools.cached_property`` values: each is computed on first access
and stored on the instance. Concurrent first access may compute the
same value twice, which is harmless since the document never changes.

RULES:
- Words, paragraphs and sentences come from channels[0].alternatives[0]
- Paragraph bounds are the first sentence's start / last sentence's end,
  formatted HH:MM:SS; paragraphs without sentences are skipped
- Topics / intents keep the first entry of each topic / intent segment,
  de-duplicated in first-seen order
- words_with_speaker_info keeps words carrying BOTH speaker and
  speaker_confidence; it is [] (never an error) when none qualify
- has_speaker_data is a plain boolean capability flag
"""

from __future__ import annotations

import json
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from deepgram_converter.core.errors import MalformedInput
from deepgram_converter.core.ir import Intent, Paragraph, Sentence, Topic, Word
from deepgram_converter.core.timecode import format_clock

_ZERO_CLOCK = "00:00:00"


def _dig(data: Any, *keys: Union[str, int]) -> Any:
    """Walk nested dicts/lists, returning None on the first missing step."""
    current = data
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


class TranscriptModel:
    """Canonical in-memory view of one single-channel Deepgram document."""

    def __init__(self, document: Dict[str, Any]) -> None:
        if not isinstance(document, dict):
            raise MalformedInput(
                "Transcript document must be a JSON object, got {}".format(
                    type(document).__name__
                )
            )
        self._document = document

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> TranscriptModel:
        return cls(document)

    @classmethod
    def from_json(cls, text: str) -> TranscriptModel:
        """Build a model from JSON text.

        Raises:
            MalformedInput: If the text is not JSON or not a JSON object.
        """
        try:
            document = json.loads(text)
        except (json.JSONDecodeError, TypeError) as exc:
            raise MalformedInput("Invalid JSON file: {}".format(exc)) from exc
        return cls(document)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> TranscriptModel:
        """Build a model from a JSON file on disk.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedInput: If the content is not a JSON object.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError("File not found: {}".format(file_path))
        return cls.from_json(file_path.read_text(encoding="utf-8"))

    @property
    def document(self) -> Dict[str, Any]:
        return self._document

    def _alternative(self, *keys: str) -> Any:
        return _dig(self._document, "results", "channels", 0, "alternatives", 0, *keys)

    def _raw_paragraphs(self) -> List[Dict[str, Any]]:
        paragraphs = self._alternative("paragraphs", "paragraphs")
        return paragraphs if isinstance(paragraphs, list) else []

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    @cached_property
    def transcript(self) -> Optional[str]:
        return self._alternative("transcript")

    @cached_property
    def words(self) -> List[Word]:
        raw = self._alternative("words")
        if not isinstance(raw, list):
            return []
        return [Word.from_dict(w) for w in raw if isinstance(w, dict)]

    @cached_property
    def words_with_confidence(self) -> List[Dict[str, Any]]:
        return [
            {"word": w.text, "confidence": w.transcription_confidence}
            for w in self.words
        ]

    @cached_property
    def words_with_speaker_info(self) -> List[Word]:
        return [w for w in self.words if w.has_speaker_info]

    @property
    def has_speaker_data(self) -> bool:
        return bool(self.words_with_speaker_info)

    # ------------------------------------------------------------------
    # Paragraphs and sentences
    # ------------------------------------------------------------------

    @cached_property
    def paragraphs(self) -> List[Paragraph]:
        paragraphs: List[Paragraph] = []
        for raw in self._raw_paragraphs():
            sentences = raw.get("sentences") or []
            if not sentences:
                continue
            paragraphs.append(Paragraph(
                text=" ".join(s.get("text", "") for s in sentences),
                start=format_clock(sentences[0].get("start")) or _ZERO_CLOCK,
                end=format_clock(sentences[-1].get("end")) or _ZERO_CLOCK,
            ))
        return paragraphs

    @cached_property
    def segmented_sentences(self) -> List[Sentence]:
        return [
            Sentence(text=s.get("text", ""))
            for raw in self._raw_paragraphs()
            for s in (raw.get("sentences") or [])
        ]

    @cached_property
    def paragraphs_as_sentences(self) -> List[Dict[str, List[str]]]:
        return [
            {"paragraph": [s.get("text", "") for s in (raw.get("sentences") or [])]}
            for raw in self._raw_paragraphs()
        ]

    # ------------------------------------------------------------------
    # Topics and intents
    # ------------------------------------------------------------------

    def _metadata_segments(self, kind: str) -> List[Dict[str, Any]]:
        segments = _dig(self._document, "results", kind, "segments")
        if not isinstance(segments, list):
            return []
        return [s for s in segments if isinstance(s, dict)]

    @cached_property
    def topics(self) -> List[Topic]:
        seen = set()
        topics: List[Topic] = []
        flat = _dig(self._document, "results", "topics")
        if isinstance(flat, list):
            candidates = [t for t in flat if isinstance(t, dict)]
        else:
            candidates = [
                seg["topics"][0] for seg in self._metadata_segments("topics")
                if seg.get("topics")
            ]
        for raw in candidates:
            name = raw.get("topic")
            if not name or name in seen:
                continue
            seen.add(name)
            topics.append(Topic(topic=name, confidence=raw.get("confidence")))
        return topics

    @cached_property
    def intents(self) -> List[Intent]:
        intents: List[Intent] = []
        for seg in self._metadata_segments("intents"):
            found = seg.get("intents")
            if not found or not found[0].get("intent"):
                continue
            intent = Intent(
                intent=found[0]["intent"],
                start=seg.get("start"),
                end=seg.get("end"),
            )
            if intent not in intents:
                intents.append(intent)
        return intents

    @cached_property
    def segments_with_topics(self) -> List[Dict[str, Any]]:
        return [
            {
                "text": seg.get("text"),
                "topics": [{"topic": t.get("topic")} for t in (seg.get("topics") or [])],
            }
            for seg in self._metadata_segments("topics")
        ]

    @cached_property
    def segments_with_intents(self) -> List[Dict[str, Any]]:
        return [
            {
                "text": seg.get("text"),
                "intents": [{"intent": i.get("intent")} for i in (seg.get("intents") or [])],
            }
            for seg in self._metadata_segments("intents")
        ]

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def summary_stats(self) -> Dict[str, int]:
        return {
            "total_words": len(self.words_with_confidence),
            "total_sentences": len(self.segmented_sentences),
            "total_paragraphs": len(self.paragraphs),
            "transcript_length": len(self.transcript or ""),
            "total_topics": len(self.topics),
            "total_intents": len(self.intents),
        }
