"""Structured JSON export of the transcript model.

WHY: Downstream scripts want the parsed transcript without re-walking
Deepgram's nested response. This formatter serializes the model's
accessors as one flat object.

HOW: Each accessor is converted to plain dicts/lists, the result is
validated against OUTPUT_SCHEMA with jsonschema, then dumped.

RULES:
- Top-level keys: transcript, paragraphs, intents, topics,
  words_with_confidence, segmented_sentences, segments_with_topics,
  segments_with_intents, summary_stats
- Values are a direct serialization of the accessors, no reshaping
- Schema validation is mandatory — raises on invalid output
- Output suffix: "_converted.json", media type "application/json"
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import jsonschema

from deepgram_converter.core.transcript import TranscriptModel
from deepgram_converter.formatters.base import BaseFormatter, FormatterOutput

_STAT_KEYS = (
    "total_words",
    "total_sentences",
    "total_paragraphs",
    "transcript_length",
    "total_topics",
    "total_intents",
)

OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": [
        "transcript",
        "paragraphs",
        "intents",
        "topics",
        "words_with_confidence",
        "segmented_sentences",
        "segments_with_topics",
        "segments_with_intents",
        "summary_stats",
    ],
    "properties": {
        "transcript": {"type": ["string", "null"]},
        "paragraphs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["text", "start", "end"],
                "properties": {
                    "text": {"type": "string"},
                    "start": {"type": "string"},
                    "end": {"type": "string"},
                },
            },
        },
        "intents": {
            "type": "array",
            "items": {"type": "object", "required": ["intent"]},
        },
        "topics": {
            "type": "array",
            "items": {"type": "object", "required": ["topic"]},
        },
        "words_with_confidence": {
            "type": "array",
            "items": {"type": "object", "required": ["word", "confidence"]},
        },
        "segmented_sentences": {
            "type": "array",
            "items": {"type": "object", "required": ["text"]},
        },
        "segments_with_topics": {"type": "array"},
        "segments_with_intents": {"type": "array"},
        "summary_stats": {
            "type": "object",
            "required": list(_STAT_KEYS),
            "properties": {key: {"type": "integer", "minimum": 0} for key in _STAT_KEYS},
        },
    },
}


def build_json_document(model: TranscriptModel) -> Dict[str, Any]:
    return {
        "transcript": model.transcript,
        "paragraphs": [p.to_dict() for p in model.paragraphs],
        "intents": [i.to_dict() for i in model.intents],
        "topics": [t.to_dict() for t in model.topics],
        "words_with_confidence": model.words_with_confidence,
        "segmented_sentences": [s.to_dict() for s in model.segmented_sentences],
        "segments_with_topics": model.segments_with_topics,
        "segments_with_intents": model.segments_with_intents,
        "summary_stats": model.summary_stats(),
    }


def render_json(model: TranscriptModel) -> str:
    """Serialize the transcript model as one JSON object.

    Raises:
        jsonschema.ValidationError: If the document does not match
            OUTPUT_SCHEMA.
    """
    output = build_json_document(model)
    jsonschema.validate(instance=output, schema=OUTPUT_SCHEMA)
    return json.dumps(output, indent=2, ensure_ascii=False)


class JSONFormatter(BaseFormatter):
    """Formatter that produces the structured JSON export."""

    @property
    def name(self) -> str:
        return "JSON"

    def format(self, model: TranscriptModel) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="_converted.json",
                content=render_json(model),
                media_type="application/json",
            )
        ]
