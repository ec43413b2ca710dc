"""Field extraction and filtering over flat segment records.

WHY: After normalization (or after an enrichment step that adds topics,
keywords, software detections and AI commentary) a transcript is a list
of flat records. People exploring it think in labels like "Segment
Transcript", not JSON keys; this module maps between the two and offers
the common selections.

HOW: FIELD_MAPPING is a fixed label → key table. FieldAnalyzer holds the
records and answers questions by scanning them; nothing is cached and
the records are never modified.

RULES:
- Absent or None values are silently skipped, never raised on
- List values are joined with ", " when extracted
- Records with nothing extracted are dropped from extract_fields()
- "Has data" means non-None and not blank (empty strings / collections
  do not count)
- Topic and software collections are de-duplicated in first-seen order
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

from deepgram_converter.core.errors import MalformedInput
from deepgram_converter.core.ir import CanonicalSegment
from deepgram_converter.core.normalizer import looks_like_raw_response, parse_response

FIELD_MAPPING: Mapping[str, str] = {
    "Segment Identifier": "segment_id",
    "Start Time of Segment": "start_time",
    "End Time of Segment": "end_time",
    "Segment Transcript": "transcript",
    "Segment Topic": "topic",
    "Relevant Keywords": "keywords",
    "AI Analysis of Segment": "gemini_analysis",
    "Software Detected in Segment": "software_detected",
    "List of Software Detections": "software_detections",
}

Record = Dict[str, Any]


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return bool(str(value).strip())


def _unique(values: Iterable[Any]) -> List[Any]:
    seen: List[Any] = []
    for value in values:
        if value is not None and value not in seen:
            seen.append(value)
    return seen


class FieldAnalyzer:
    """Label-driven view over a list of flat segment records."""

    def __init__(
        self,
        records: Iterable[Union[Record, CanonicalSegment]],
        field_mapping: Mapping[str, str] = FIELD_MAPPING,
    ) -> None:
        self._records: List[Record] = [
            r.to_dict() if isinstance(r, CanonicalSegment) else r
            for r in records
        ]
        self._mapping = field_mapping

    @classmethod
    def from_records(cls, records: Iterable[Union[Record, CanonicalSegment]]) -> FieldAnalyzer:
        return cls(records)

    @classmethod
    def from_document(cls, doc: Any) -> FieldAnalyzer:
        """Build from decoded JSON: a raw response, a record list or one record.

        Raises:
            MalformedInput: If ``doc`` is none of those.
            InvalidDocument: If a raw response cannot be normalized.
        """
        if looks_like_raw_response(doc):
            return cls(parse_response(doc))
        if isinstance(doc, list):
            return cls(r for r in doc if isinstance(r, dict))
        if isinstance(doc, dict):
            return cls([doc])
        raise MalformedInput(
            "Expected a JSON object or array of segments, got {}".format(type(doc).__name__)
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> FieldAnalyzer:
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError("File not found: {}".format(file_path))
        try:
            doc = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MalformedInput("Invalid JSON file: {}".format(exc)) from exc
        return cls.from_document(doc)

    @property
    def segments(self) -> List[Record]:
        return list(self._records)

    @property
    def field_mapping(self) -> Mapping[str, str]:
        return self._mapping

    @property
    def available_fields(self) -> List[str]:
        """Labels whose key appears in at least one record."""
        present = {key for record in self._records for key in record}
        return [label for label, key in self._mapping.items() if key in present]

    def extract_fields(self, selected_field_labels: Iterable[str]) -> List[Record]:
        """Project every record onto the requested labels.

        Unknown labels and None values are skipped; list values are joined
        with ", ". Records that end up empty are left out of the result.
        """
        labels = list(selected_field_labels)
        results: List[Record] = []
        for record in self._records:
            extracted: Record = {}
            for label in labels:
                key = self._mapping.get(label)
                if key is None:
                    continue
                value = record.get(key)
                if value is None:
                    continue
                if isinstance(value, (list, tuple)):
                    value = ", ".join(str(v) for v in value)
                extracted[label] = value
            if extracted:
                results.append(extracted)
        return results

    def field_has_data(self, label: str) -> bool:
        key = self._mapping.get(label)
        if key is None:
            return False
        return any(_has_value(record.get(key)) for record in self._records)

    def get_field_options(self) -> List[str]:
        return [label for label in self._mapping if self.field_has_data(label)]

    def summary_stats(self) -> Dict[str, int]:
        return {
            "total_segments": len(self._records),
            "available_fields": len(self.available_fields),
            "fields_with_data": len(self.get_field_options()),
        }

    def has_ai_analysis(self) -> bool:
        return any(_has_value(r.get("gemini_analysis")) for r in self._records)

    def has_software_detection(self) -> bool:
        return any(
            _has_value(r.get("software_detected")) or _has_value(r.get("software_detections"))
            for r in self._records
        )

    def get_all_topics(self) -> List[Any]:
        return _unique(r.get("topic") for r in self._records)

    def get_all_software(self) -> List[Any]:
        collected: List[Any] = []
        for record in self._records:
            detections = record.get("software_detections")
            if isinstance(detections, list):
                collected.extend(detections)
            detected = record.get("software_detected")
            if detected is not None:
                collected.append(detected)
        return _unique(collected)

    def filter_by_topic(self, topic: str) -> List[Record]:
        return [r for r in self._records if r.get("topic") == topic]

    def filter_by_software(self, name: str) -> List[Record]:
        def mentions(record: Record) -> bool:
            if record.get("software_detected") == name:
                return True
            detections = record.get("software_detections")
            return isinstance(detections, list) and name in detections

        return [r for r in self._records if mentions(r)]
