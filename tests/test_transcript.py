"""Unit tests for the TranscriptModel accessors."""

import json

import pytest

from deepgram_converter.core.errors import MalformedInput
from deepgram_converter.core.ir import Intent, Paragraph, Topic, Word
from deepgram_converter.core.transcript import TranscriptModel


class TestConstruction:
    def test_from_json_rejects_invalid_json(self):
        with pytest.raises(MalformedInput, match="Invalid JSON file"):
            TranscriptModel.from_json("invalid json")

    def test_rejects_non_object_document(self):
        with pytest.raises(MalformedInput):
            TranscriptModel.from_json("[1, 2, 3]")

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TranscriptModel.from_file(tmp_path / "missing.json")

    def test_from_file_reads_document(self, tmp_path, transcript_document):
        path = tmp_path / "transcript.json"
        path.write_text(json.dumps(transcript_document), encoding="utf-8")

        model = TranscriptModel.from_file(path)

        assert model.transcript == "hello world how are you doing today"

    def test_empty_document_has_empty_accessors(self):
        model = TranscriptModel({})

        assert model.transcript is None
        assert model.words == []
        assert model.paragraphs == []
        assert model.topics == []
        assert model.intents == []
        assert model.has_speaker_data is False


class TestWords:
    def test_words_parsed(self, transcript_model):
        words = transcript_model.words

        assert len(words) == 7
        assert words[0] == Word(
            text="hello",
            start_raw=0.0,
            end_raw=0.5,
            transcription_confidence=0.99,
            speaker=1,
            speaker_confidence=0.95,
        )

    def test_words_with_confidence(self, transcript_model):
        assert transcript_model.words_with_confidence[1] == {"word": "world", "confidence": 0.97}

    def test_words_with_speaker_info(self, transcript_model):
        assert len(transcript_model.words_with_speaker_info) == 7
        assert transcript_model.has_speaker_data is True

    def test_no_speaker_info(self, plain_model):
        assert plain_model.words_with_speaker_info == []
        assert plain_model.has_speaker_data is False

    def test_speaker_without_confidence_is_excluded(self, transcript_document):
        words = transcript_document["results"]["channels"][0]["alternatives"][0]["words"]
        del words[0]["speaker_confidence"]

        model = TranscriptModel(transcript_document)

        assert len(model.words_with_speaker_info) == 6

    def test_accessors_are_memoized(self, transcript_model):
        assert transcript_model.words is transcript_model.words
        assert transcript_model.paragraphs is transcript_model.paragraphs


class TestParagraphs:
    def test_paragraph_bounds_and_text(self, transcript_model):
        assert transcript_model.paragraphs == [
            Paragraph(text="Hello world.", start="00:00:00", end="00:00:01"),
            Paragraph(text="How are you doing today?", start="00:00:01", end="00:00:03"),
        ]

    def test_paragraph_without_sentences_is_skipped(self, transcript_document):
        alternative = transcript_document["results"]["channels"][0]["alternatives"][0]
        alternative["paragraphs"]["paragraphs"].insert(0, {"sentences": []})

        model = TranscriptModel(transcript_document)

        assert len(model.paragraphs) == 2

    def test_segmented_sentences(self, transcript_model):
        assert [s.text for s in transcript_model.segmented_sentences] == [
            "Hello world.",
            "How are you",
            "doing today?",
        ]

    def test_paragraphs_as_sentences(self, transcript_model):
        assert transcript_model.paragraphs_as_sentences == [
            {"paragraph": ["Hello world."]},
            {"paragraph": ["How are you", "doing today?"]},
        ]


class TestTopicsAndIntents:
    def test_first_topic_per_segment(self, transcript_model):
        assert transcript_model.topics == [
            Topic(topic="Greetings", confidence=0.81),
            Topic(topic="Wellbeing", confidence=0.74),
        ]

    def test_flat_topic_list_deduplicated(self):
        model = TranscriptModel({"results": {"topics": [
            {"topic": "Technology", "confidence": 0.9},
            {"topic": "Testing", "confidence": 0.8},
            {"topic": "Technology", "confidence": 0.5},
        ]}})

        assert [t.topic for t in model.topics] == ["Technology", "Testing"]
        assert model.topics[0].confidence == 0.9

    def test_intents(self, transcript_model):
        assert transcript_model.intents == [
            Intent(intent="Ask about wellbeing", start=1.5, end=3.9),
        ]

    def test_unnamed_intent_skipped(self, transcript_document):
        segments = transcript_document["results"]["intents"]["segments"]
        segments.insert(0, {"text": "Hmm.", "start": 0.0, "end": 0.5, "intents": [{"confidence_score": 0.2}]})

        model = TranscriptModel(transcript_document)

        assert [i.intent for i in model.intents] == ["Ask about wellbeing"]

    def test_segments_with_topics(self, transcript_model):
        assert transcript_model.segments_with_topics[1] == {
            "text": "How are you doing today?",
            "topics": [{"topic": "Wellbeing"}, {"topic": "Small talk"}],
        }

    def test_segments_with_intents(self, transcript_model):
        assert transcript_model.segments_with_intents == [
            {"text": "How are you doing today?", "intents": [{"intent": "Ask about wellbeing"}]},
        ]


class TestSummaryStats:
    def test_counts(self, transcript_model):
        assert transcript_model.summary_stats() == {
            "total_words": 7,
            "total_sentences": 3,
            "total_paragraphs": 2,
            "transcript_length": len("hello world how are you doing today"),
            "total_topics": 2,
            "total_intents": 1,
        }
