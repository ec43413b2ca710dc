"""Deepgram Transcript Converter — normalization, speaker segmentation, rendering.

WHY: Deepgram's transcription responses are deeply nested JSON that no
subtitle tool or spreadsheet can use directly, and they come in several
shapes depending on the request options. This package turns a saved
response into SRT subtitles (speaker-labelled when diarization is
available), a Markdown report, a structured JSON export or a plain-text
summary, and flattens responses into segment records for analysis.

HOW: Three layers — core (IR dataclasses, normalizer, transcript model,
speaker segmenter), formatters (pluggable renderers over the transcript
model) and analysis (label-driven field extraction and exports).

RULES:
- All formatters consume the same TranscriptModel
- Adding a new output format = one new formatter module, no core changes
- Only the CLI reads configuration files or writes output files
"""

__version__ = "0.1.0"
