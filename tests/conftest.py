"""Shared test fixtures for the deepgram_converter test suite.

WHY: Several test modules need the same Deepgram documents: a
single-channel transcript with paragraphs, topics, intents and diarized
words, and a raw multi-shape response for the normalizer. Centralizing
them here keeps every test looking at the same data.

HOW: Module-level constants hold the documents; fixtures hand out deep
copies so a test that mutates its input cannot leak into another.

RULES:
- DIARIZED_WORDS: 7 words, speaker 1 (2 words) then speaker 2 (5 words)
- Speaker 1 mean speaker_confidence is 0.935, speaker 2 is 0.902
- Paragraph bounds: 0.0-1.0 and 1.5-3.9 seconds
"""

import copy
from typing import Any, Dict, List

import pytest

from deepgram_converter.core.transcript import TranscriptModel


# ---------------------------------------------------------------------------
# Single-channel transcript document
# ---------------------------------------------------------------------------

DIARIZED_WORDS: List[Dict[str, Any]] = [
    {"word": "hello", "punctuated_word": "Hello", "start": 0.0, "end": 0.5, "confidence": 0.99, "speaker": 1, "speaker_confidence": 0.95},
    {"word": "world", "punctuated_word": "world.", "start": 0.5, "end": 1.0, "confidence": 0.97, "speaker": 1, "speaker_confidence": 0.92},
    {"word": "how", "punctuated_word": "How", "start": 1.5, "end": 2.0, "confidence": 0.98, "speaker": 2, "speaker_confidence": 0.88},
    {"word": "are", "punctuated_word": "are", "start": 2.0, "end": 2.5, "confidence": 0.96, "speaker": 2, "speaker_confidence": 0.90},
    {"word": "you", "punctuated_word": "you", "start": 2.5, "end": 3.0, "confidence": 0.95, "speaker": 2, "speaker_confidence": 0.93},
    {"word": "doing", "punctuated_word": "doing", "start": 3.0, "end": 3.4, "confidence": 0.94, "speaker": 2, "speaker_confidence": 0.91},
    {"word": "today", "punctuated_word": "today?", "start": 3.4, "end": 3.9, "confidence": 0.93, "speaker": 2, "speaker_confidence": 0.89},
]

TRANSCRIPT_DOCUMENT: Dict[str, Any] = {
    "metadata": {"request_id": "test-request", "duration": 3.9, "channels": 1},
    "results": {
        "channels": [{
            "alternatives": [{
                "transcript": "hello world how are you doing today",
                "confidence": 0.96,
                "words": DIARIZED_WORDS,
                "paragraphs": {
                    "transcript": "Hello world.\n\nHow are you doing today?",
                    "paragraphs": [
                        {
                            "sentences": [{"text": "Hello world.", "start": 0.0, "end": 1.0}],
                            "speaker": 1,
                            "start": 0.0,
                            "end": 1.0,
                        },
                        {
                            "sentences": [
                                {"text": "How are you", "start": 1.5, "end": 3.0},
                                {"text": "doing today?", "start": 3.0, "end": 3.9},
                            ],
                            "speaker": 2,
                            "start": 1.5,
                            "end": 3.9,
                        },
                    ],
                },
            }],
        }],
        "topics": {
            "segments": [
                {
                    "text": "Hello world.",
                    "start_word": 0,
                    "end_word": 1,
                    "topics": [{"topic": "Greetings", "confidence": 0.81}],
                },
                {
                    "text": "How are you doing today?",
                    "start_word": 2,
                    "end_word": 6,
                    "topics": [
                        {"topic": "Wellbeing", "confidence": 0.74},
                        {"topic": "Small talk", "confidence": 0.52},
                    ],
                },
            ],
        },
        "intents": {
            "segments": [
                {
                    "text": "How are you doing today?",
                    "start": 1.5,
                    "end": 3.9,
                    "intents": [{"intent": "Ask about wellbeing", "confidence_score": 0.66}],
                },
            ],
        },
    },
}

# Same words, no diarization
PLAIN_WORDS: List[Dict[str, Any]] = [
    {"word": w["word"], "start": w["start"], "end": w["end"], "confidence": w["confidence"]}
    for w in DIARIZED_WORDS
]


# ---------------------------------------------------------------------------
# Raw multi-shape responses
# ---------------------------------------------------------------------------

UTTERANCE_RESPONSE: Dict[str, Any] = {
    "results": {
        "channels": [{
            "alternatives": [{"transcript": "Hello there. We are testing the API.", "confidence": 0.9}],
        }],
        "utterances": [
            {
                "start": 0.0,
                "end": 1.2,
                "confidence": 0.93,
                "speaker": 0,
                "transcript": " Hello there. ",
                "words": [{"word": "hello"}, {"word": "there"}],
            },
            {
                "start": 1.4,
                "end": 3.1,
                "confidence": 0.88,
                "speaker": 1,
                "transcript": "We are testing the API.",
                "words": [{"word": "we"}, {"word": "are"}, {"word": "testing"}, {"word": "the"}, {"word": "api"}],
            },
        ],
        "topics": [
            {"topic": "Technology", "confidence": 0.9},
            {"topic": "Testing", "confidence": 0.8},
            {"topic": "Technology", "confidence": 0.7},
        ],
        "summary": {"short": "A short API test conversation."},
    },
}

WORDS_ONLY_RESPONSE: Dict[str, Any] = {
    "results": {
        "channels": [{
            "alternatives": [{
                "transcript": "hello world how are you",
                "words": [
                    {"word": "hello", "start": 0.0, "end": 0.5, "confidence": 0.9, "speaker": 0},
                    {"word": "world", "start": 0.5, "end": 1.0, "confidence": 0.8, "speaker": 0},
                    {"word": "how", "start": 1.5, "end": 2.0, "confidence": 0.7, "speaker": 1},
                    {"word": "are", "start": 2.0, "end": 2.5, "confidence": 0.6, "speaker": 1},
                    {"word": "you", "start": 2.5, "end": 3.0, "confidence": 0.5, "speaker": 1},
                ],
            }],
        }],
    },
}

TRANSCRIPT_ONLY_RESPONSE: Dict[str, Any] = {
    "results": {
        "channels": [{
            "alternatives": [{"transcript": "  Just a transcript.  ", "confidence": 0.89}],
        }],
    },
}

LEGACY_SEGMENTS: List[Dict[str, Any]] = [
    {
        "segment_id": "seg_1",
        "start_time": 0.0,
        "end_time": 12.5,
        "transcript": "We opened the project in Blender.",
        "topic": "3D Modeling",
        "keywords": ["blender", "mesh"],
        "gemini_analysis": "The speaker introduces the modeling workflow.",
        "software_detected": "Blender",
        "software_detections": ["Blender", "GIMP"],
    },
    {
        "segment_id": "seg_2",
        "start_time": 12.5,
        "end_time": 30.0,
        "transcript": "Then we exported textures.",
        "topic": "Texturing",
        "keywords": [],
        "gemini_analysis": "   ",
        "software_detected": None,
        "software_detections": ["Substance Painter", "GIMP"],
    },
    {
        "segment_id": "seg_3",
        "start_time": 30.0,
        "end_time": 41.0,
        "transcript": "Back to modeling.",
        "topic": "3D Modeling",
    },
]


@pytest.fixture
def transcript_document():
    """Single-channel document with paragraphs, topics, intents and diarization."""
    return copy.deepcopy(TRANSCRIPT_DOCUMENT)


@pytest.fixture
def transcript_model(transcript_document):
    return TranscriptModel(transcript_document)


@pytest.fixture
def plain_model(transcript_document):
    """The same document with speaker fields stripped from every word."""
    transcript_document["results"]["channels"][0]["alternatives"][0]["words"] = copy.deepcopy(PLAIN_WORDS)
    return TranscriptModel(transcript_document)


@pytest.fixture
def utterance_response():
    return copy.deepcopy(UTTERANCE_RESPONSE)


@pytest.fixture
def words_only_response():
    return copy.deepcopy(WORDS_ONLY_RESPONSE)


@pytest.fixture
def transcript_only_response():
    return copy.deepcopy(TRANSCRIPT_ONLY_RESPONSE)


@pytest.fixture
def legacy_segments():
    return copy.deepcopy(LEGACY_SEGMENTS)
