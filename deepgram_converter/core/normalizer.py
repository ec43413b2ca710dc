"""Raw Deepgram response normalization into canonical segments.

WHY: Depending on the request options, Deepgram answers with utterances
(diarized, pre-segmented speech), word-level data only, or nothing but
a transcript string. Downstream consumers (the field analyzer, exports)
should not care which one arrived — they want a flat, ordered list of
segment records with the document-level metadata attached.

HOW: ``detect_shape`` probes the response in a fixed order and returns
a tagged ``DetectedShape``; ``parse_response`` dispatches on the tag to
build CanonicalSegment objects, then broadcasts topics and the short
summary into every segment.

RULES:
- Shape precedence: utterances > word groups > plain transcript
- Word groups split on every change of ``speaker`` (missing speaker is
  its own group value, None)
- Segment ids: "utterance_N", "word_group_N", "transcript_0"
- Empty ``results.channels`` with no utterances yields [] (not an error)
- Non-empty channels matching no shape raises InvalidDocument
- Metadata absent from the response stays None on every segment
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from deepgram_converter.core.errors import InvalidDocument
from deepgram_converter.core.ir import CanonicalSegment

logger = logging.getLogger(__name__)


class ResponseShape(enum.Enum):
    """The three upstream response layouts, in detection order."""

    UTTERANCES = "utterances"
    WORD_GROUPS = "word_groups"
    PLAIN_TRANSCRIPT = "plain_transcript"


@dataclass
class DetectedShape:
    """A response shape tag plus the payload the builder needs."""

    shape: ResponseShape
    payload: Any


@dataclass
class DocumentMetadata:
    """Document-level metadata broadcast into every segment."""

    topics: Optional[List[str]] = None
    summary: Optional[str] = None


def looks_like_raw_response(doc: Any) -> bool:
    """Tell a raw Deepgram response apart from legacy flat segment records.

    Returns True only for a mapping whose ``results.channels`` is a list
    (possibly empty). Lists — including already-flattened segment
    records — and every other value return False.
    """
    if not isinstance(doc, dict):
        return False
    results = doc.get("results")
    if not isinstance(results, dict):
        return False
    return isinstance(results.get("channels"), list)


def _first_alternative(results: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    channels = results.get("channels") or []
    if not channels or not isinstance(channels[0], dict):
        return None
    alternatives = channels[0].get("alternatives") or []
    if not alternatives or not isinstance(alternatives[0], dict):
        return None
    return alternatives[0]


def detect_shape(results: Dict[str, Any]) -> Optional[DetectedShape]:
    """Classify the ``results`` object, first matching shape wins.

    Returns None when no shape applies.
    """
    utterances = results.get("utterances")
    if isinstance(utterances, list) and utterances:
        return DetectedShape(ResponseShape.UTTERANCES, utterances)

    alternative = _first_alternative(results)
    if alternative is None:
        return None

    words = alternative.get("words")
    if isinstance(words, list) and words:
        return DetectedShape(ResponseShape.WORD_GROUPS, words)

    transcript = alternative.get("transcript")
    if isinstance(transcript, str):
        return DetectedShape(ResponseShape.PLAIN_TRANSCRIPT, alternative)

    return None


def extract_topics(results: Dict[str, Any]) -> List[str]:
    """Collect distinct topic names in first-seen order.

    Handles both the flat ``[{"topic", "confidence"}]`` list and the
    ``{"segments": [{"topics": [...]}]}`` structure.
    """
    raw = results.get("topics")
    names: List[str] = []

    if isinstance(raw, list):
        candidates = raw
    elif isinstance(raw, dict) and isinstance(raw.get("segments"), list):
        candidates = []
        for segment in raw["segments"]:
            if isinstance(segment, dict) and isinstance(segment.get("topics"), list):
                candidates.extend(segment["topics"])
    else:
        return names

    for item in candidates:
        if not isinstance(item, dict):
            continue
        name = item.get("topic")
        if name and name not in names:
            names.append(name)
    return names


def extract_metadata(results: Dict[str, Any]) -> DocumentMetadata:
    metadata = DocumentMetadata()

    topics = extract_topics(results)
    if topics:
        metadata.topics = topics

    summary = results.get("summary")
    if isinstance(summary, dict):
        text = summary["short"] if "short" in summary else summary.get("result")
        if text is not None:
            metadata.summary = text

    return metadata


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _build_from_utterances(utterances: List[Dict[str, Any]]) -> List[CanonicalSegment]:
    segments: List[CanonicalSegment] = []
    for index, utterance in enumerate(utterances):
        words = utterance.get("words")
        segments.append(CanonicalSegment(
            segment_id="utterance_{}".format(index),
            transcript=(utterance.get("transcript") or "").strip(),
            speaker=utterance.get("speaker"),
            start_time=utterance.get("start"),
            end_time=utterance.get("end"),
            confidence=utterance.get("confidence"),
            word_count=len(words) if isinstance(words, list) else None,
        ))
    return segments


def _word_text(word: Dict[str, Any]) -> str:
    text = word.get("word")
    if text is None:
        text = word.get("punctuated_word") or ""
    return text


def _build_from_words(words: List[Dict[str, Any]]) -> List[CanonicalSegment]:
    """Group consecutive same-speaker words into one segment per run."""
    runs: List[List[Dict[str, Any]]] = []
    current_speaker: Any = object()

    for word in words:
        speaker = word.get("speaker")
        if not runs or speaker != current_speaker:
            runs.append([word])
            current_speaker = speaker
        else:
            runs[-1].append(word)

    segments: List[CanonicalSegment] = []
    for index, run in enumerate(runs):
        confidences = [w["confidence"] for w in run if w.get("confidence") is not None]
        segments.append(CanonicalSegment(
            segment_id="word_group_{}".format(index),
            transcript=" ".join(_word_text(w) for w in run).strip(),
            speaker=run[0].get("speaker"),
            start_time=run[0].get("start"),
            end_time=run[-1].get("end"),
            confidence=_mean(confidences),
            word_count=len(run),
        ))
    return segments


def _build_from_transcript(alternative: Dict[str, Any]) -> List[CanonicalSegment]:
    return [CanonicalSegment(
        segment_id="transcript_0",
        transcript=alternative["transcript"].strip(),
        confidence=alternative.get("confidence"),
    )]


_BUILDERS = {
    ResponseShape.UTTERANCES: _build_from_utterances,
    ResponseShape.WORD_GROUPS: _build_from_words,
    ResponseShape.PLAIN_TRANSCRIPT: _build_from_transcript,
}


def _broadcast_metadata(segments: List[CanonicalSegment], metadata: DocumentMetadata) -> None:
    for segment in segments:
        if metadata.topics is not None:
            segment.topics = list(metadata.topics)
            segment.topic = metadata.topics[0]
        if metadata.summary is not None:
            segment.summary = metadata.summary


def parse_response(doc: Any) -> List[CanonicalSegment]:
    """Normalize a raw Deepgram response into canonical segments.

    Args:
        doc: The decoded JSON response.

    Returns:
        Ordered CanonicalSegment list; empty when ``results.channels``
        is empty and no utterances exist.

    Raises:
        InvalidDocument: If ``doc`` is not a mapping, lacks ``results``
            or ``results.channels``, or matches none of the known shapes.
    """
    if not isinstance(doc, dict) or not isinstance(doc.get("results"), dict):
        raise InvalidDocument("Invalid Deepgram response: missing 'results' key")

    results = doc["results"]
    channels = results.get("channels")
    if not isinstance(channels, list):
        raise InvalidDocument("Invalid Deepgram response: missing 'results.channels' array")

    detected = detect_shape(results)
    if detected is None:
        if not channels:
            logger.debug("Response has no channels; nothing to normalize")
            return []
        raise InvalidDocument(
            "Invalid Deepgram response: no utterances, words or transcript found"
        )

    segments = _BUILDERS[detected.shape](detected.payload)
    _broadcast_metadata(segments, extract_metadata(results))

    logger.debug(
        "Normalized %s response into %d segment(s)",
        detected.shape.value, len(segments),
    )
    return segments


def parse_from_file(path: Union[str, Path]) -> List[CanonicalSegment]:
    """Read a raw Deepgram response from disk and normalize it.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidDocument: If the file is not JSON or not a valid response.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidDocument("Invalid JSON file: {}".format(exc)) from exc
    return parse_response(doc)
