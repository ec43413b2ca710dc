"""Export a FieldAnalyzer's records as JSON, Markdown or CSV.

RULES:
- JSON: {"summary", "segments", "topics", "software"}
- Markdown: summary bullets, then one "### Segment N" block per record
  with title-cased keys; None and blank values are skipped
- CSV: header from the first record's keys, "\\n" line endings,
  list values joined with ", "
- Default file names: <stem>_analysis.json / .md / .csv
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Callable, Dict

from deepgram_converter.analysis.field_analyzer import FieldAnalyzer

EXPORT_SUFFIXES: Dict[str, str] = {
    "json": "_analysis.json",
    "markdown": "_analysis.md",
    "csv": "_analysis.csv",
}


def export_json(analyzer: FieldAnalyzer) -> str:
    return json.dumps(
        {
            "summary": analyzer.summary_stats(),
            "segments": analyzer.segments,
            "topics": analyzer.get_all_topics(),
            "software": analyzer.get_all_software(),
        },
        indent=2,
        ensure_ascii=False,
    )


def _title(key: str) -> str:
    return " ".join(part.capitalize() for part in key.replace("_", " ").split())


def _cell(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


def export_markdown(analyzer: FieldAnalyzer) -> str:
    stats = analyzer.summary_stats()
    lines = [
        "# Deepgram Segment Analysis",
        "",
        "## Summary",
        "",
        "- Total Segments: {}".format(stats["total_segments"]),
        "- Available Fields: {}".format(stats["available_fields"]),
        "- AI Analysis: {}".format("Yes" if analyzer.has_ai_analysis() else "No"),
        "- Software Detection: {}".format("Yes" if analyzer.has_software_detection() else "No"),
        "",
        "## Segments",
    ]
    for index, segment in enumerate(analyzer.segments, start=1):
        lines.append("")
        lines.append("### Segment {}".format(index))
        lines.append("")
        for key, value in segment.items():
            if value is None or not str(_cell(value)).strip():
                continue
            lines.append("- **{}**: {}".format(_title(key), _cell(value)))
    return "\n".join(lines) + "\n"


def export_csv(analyzer: FieldAnalyzer) -> str:
    segments = analyzer.segments
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    headers = list(segments[0].keys()) if segments else []
    writer.writerow(headers)
    for segment in segments:
        writer.writerow([_cell(segment.get(header)) for header in headers])
    return buffer.getvalue()


EXPORTERS: Dict[str, Callable[[FieldAnalyzer], str]] = {
    "json": export_json,
    "markdown": export_markdown,
    "csv": export_csv,
}
