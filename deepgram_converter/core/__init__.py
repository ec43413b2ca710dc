"""Core parsing, normalization and segmentation modules.

WHY: The core package holds the pure, I/O-free heart of the converter —
the IR dataclasses, the raw-response normalizer, the transcript model
and the speaker segmenter. Formatters and the analyzer consume these.

HOW: ir.py defines the data structures, normalizer.py flattens raw
multi-shape responses, transcript.py wraps single-channel documents,
segmenter.py builds and reshapes speaker segments, timecode.py formats
times.

RULES:
- IR dataclasses are the contract — change with care
- No module here performs file output or prints to the terminal
- Every function is a synchronous, in-memory transform
"""
