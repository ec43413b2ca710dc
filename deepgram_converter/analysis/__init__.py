"""Segment-record analysis: field extraction, filtering and exports."""

from deepgram_converter.analysis.field_analyzer import FIELD_MAPPING, FieldAnalyzer

__all__ = ["FIELD_MAPPING", "FieldAnalyzer"]
