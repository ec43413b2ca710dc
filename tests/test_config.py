"""Unit tests for speaker policy validation and YAML loading.

WHY: The speaker_diarization section is edited by hand. Every way it can
be wrong must end in a disabled policy, never in a crash or in a
subtitle file with broken labels.

HOW: YAML files are written to pytest's tmp_path and loaded through
load_speaker_policy(); validate_speaker_config() is exercised directly
for the individual range checks.
"""

import logging
import textwrap

import pytest

from deepgram_converter.config import (
    SPEAKER_DEFAULTS,
    load_speaker_policy,
    validate_speaker_config,
)
from deepgram_converter.core.errors import ConfigError
from deepgram_converter.core.ir import SpeakerPolicy


def _write_yaml(tmp_path, content):
    path = tmp_path / "deepgram.yml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestSpeakerPolicy:
    def test_defaults(self):
        policy = SpeakerPolicy()

        assert policy.enable is False
        assert policy.confidence_threshold == 0.8
        assert policy.label_format == "[Speaker %d]: "
        assert policy.merge_consecutive_segments is True
        assert policy.min_segment_duration == 1.0
        assert policy.max_speakers == 10

    def test_validate_returns_self(self):
        policy = SpeakerPolicy(enable=True)

        assert policy.validate() is policy

    @pytest.mark.parametrize("overrides", [
        {"confidence_threshold": -0.1},
        {"confidence_threshold": 1.01},
        {"label_format": "Speaker"},
        {"label_format": "%d and %d"},
        {"min_segment_duration": -1.0},
        {"max_speakers": 0},
        {"max_speakers": 51},
        {"max_speakers": True},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ConfigError):
            SpeakerPolicy(enable=True, **overrides).validate()

    def test_to_dict_round_trips_defaults(self):
        assert SpeakerPolicy(enable=True).to_dict() == SPEAKER_DEFAULTS


class TestValidateSpeakerConfig:
    def test_empty_section_uses_defaults(self):
        policy = validate_speaker_config({})

        assert policy == SpeakerPolicy(enable=True)

    def test_null_values_use_defaults(self):
        policy = validate_speaker_config({"enable": True, "confidence_threshold": None})

        assert policy.confidence_threshold == 0.8

    def test_integer_threshold_accepted(self):
        assert validate_speaker_config({"confidence_threshold": 1}).confidence_threshold == 1.0

    @pytest.mark.parametrize("section", [
        {"confidence_threshold": 2},
        {"confidence_threshold": "high"},
        {"label_format": "Speaker: "},
        {"label_format": "%d/%d"},
        {"max_speakers": 2.5},
        {"max_speakers": 100},
        {"min_segment_duration": -0.5},
        {"enable": "yes"},
    ])
    def test_invalid_values(self, section):
        with pytest.raises(ConfigError, match="Invalid speaker configuration|must be"):
            validate_speaker_config(section)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_speaker_config({"max_speakers": 0})


class TestLoadSpeakerPolicy:
    def test_valid_file(self, tmp_path):
        path = _write_yaml(tmp_path, """
            speaker_diarization:
              enable: true
              confidence_threshold: 0.9
              label_format: "Speaker %d: "
              merge_consecutive_segments: false
              min_segment_duration: 0.5
              max_speakers: 3
        """)

        policy = load_speaker_policy(path)

        assert policy == SpeakerPolicy(
            enable=True,
            confidence_threshold=0.9,
            label_format="Speaker %d: ",
            merge_consecutive_segments=False,
            min_segment_duration=0.5,
            max_speakers=3,
        )

    def test_missing_file(self, tmp_path):
        assert load_speaker_policy(tmp_path / "absent.yml") == SpeakerPolicy.disabled()

    def test_section_missing(self, tmp_path):
        path = _write_yaml(tmp_path, """
            other_tool:
              enable: true
        """)

        assert load_speaker_policy(path).enable is False

    def test_section_disabled(self, tmp_path):
        path = _write_yaml(tmp_path, """
            speaker_diarization:
              enable: false
              confidence_threshold: 0.9
        """)

        assert load_speaker_policy(path) == SpeakerPolicy.disabled()

    def test_invalid_yaml(self, tmp_path, caplog):
        path = _write_yaml(tmp_path, "speaker_diarization: [unclosed\n")

        with caplog.at_level(logging.WARNING, logger="deepgram_converter.config"):
            policy = load_speaker_policy(path)

        assert policy.enable is False
        assert "speaker labels disabled" in caplog.text

    def test_top_level_not_mapping(self, tmp_path):
        path = _write_yaml(tmp_path, "- just\n- a list\n")

        assert load_speaker_policy(path).enable is False

    def test_invalid_values_disable(self, tmp_path, caplog):
        path = _write_yaml(tmp_path, """
            speaker_diarization:
              enable: true
              max_speakers: 99
        """)

        with caplog.at_level(logging.WARNING, logger="deepgram_converter.config"):
            policy = load_speaker_policy(path)

        assert policy == SpeakerPolicy.disabled()
        assert "max_speakers" in caplog.text

    def test_environment_default_path(self, tmp_path, monkeypatch):
        path = _write_yaml(tmp_path, """
            speaker_diarization:
              enable: true
        """)
        monkeypatch.setattr("deepgram_converter.config.SPEAKER_CONFIG_PATH", str(path))

        assert load_speaker_policy().enable is True
