"""Configuration defaults, .env loading and speaker policy loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The speaker diarization settings live in a YAML
file next to the project (``deepgram.yml``); everything else comes from
environment variables, optionally via a ``.env`` file.

HOW: python-dotenv loads the .env file on import. Defaults are plain
module-level constants. ``load_speaker_policy()`` reads the
``speaker_diarization`` section with PyYAML, fills defaults, validates
it against SPEAKER_CONFIG_SCHEMA with jsonschema and returns a
SpeakerPolicy.

RULES:
- DEEPGRAM_CONFIG: path to the YAML file (default "deepgram.yml")
- DEEPGRAM_DEFAULT_FORMAT: default convert format (default "markdown")
- DEEPGRAM_DEBUG: "true" turns on debug logging in the CLI
- load_speaker_policy() never raises: a missing file, bad YAML, absent
  or disabled section, or failed validation all yield a disabled policy
- validate_speaker_config() raises ConfigError on invalid values
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import jsonschema
import yaml
from dotenv import load_dotenv

from deepgram_converter.core.errors import ConfigError
from deepgram_converter.core.ir import DEFAULT_LABEL_FORMAT, MAX_SPEAKERS_LIMIT, SpeakerPolicy

logger = logging.getLogger(__name__)

# Load .env from the project root (where the script is run from)
load_dotenv()

SPEAKER_CONFIG_PATH = os.getenv("DEEPGRAM_CONFIG", "deepgram.yml")
DEFAULT_FORMAT = os.getenv("DEEPGRAM_DEFAULT_FORMAT", "markdown")
DEBUG = os.getenv("DEEPGRAM_DEBUG", "false").lower() == "true"

SPEAKER_CONFIG_SECTION = "speaker_diarization"

# ---------------------------------------------------------------------------
# Speaker diarization defaults and schema
# ---------------------------------------------------------------------------

SPEAKER_DEFAULTS: Dict[str, Any] = {
    "enable": True,
    "confidence_threshold": 0.8,
    "label_format": DEFAULT_LABEL_FORMAT,
    "merge_consecutive_segments": True,
    "min_segment_duration": 1.0,
    "max_speakers": 10,
}

SPEAKER_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "enable": {"type": "boolean"},
        "confidence_threshold": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "label_format": {"type": "string", "pattern": "%d"},
        "merge_consecutive_segments": {"type": "boolean"},
        "min_segment_duration": {"type": "number", "minimum": 0.0},
        "max_speakers": {"type": "integer", "minimum": 1, "maximum": MAX_SPEAKERS_LIMIT},
    },
}


def validate_speaker_config(config: Mapping[str, Any]) -> SpeakerPolicy:
    """Fill defaults into a ``speaker_diarization`` mapping and validate it.

    WHY: The YAML file is edited by hand; a typo must not silently
    produce subtitles with broken labels or every speaker dropped.

    HOW: Missing or null keys take SPEAKER_DEFAULTS, the merged mapping
    is checked against SPEAKER_CONFIG_SCHEMA, then SpeakerPolicy.validate()
    applies the remaining checks (exactly one "%d", integral speaker cap).

    Raises:
        ConfigError: If any value is out of range or malformed.
    """
    if not isinstance(config, Mapping):
        raise ConfigError("Invalid speaker configuration: expected a mapping")

    merged = dict(SPEAKER_DEFAULTS)
    merged.update({k: v for k, v in config.items() if v is not None})

    try:
        jsonschema.validate(instance=merged, schema=SPEAKER_CONFIG_SCHEMA)
    except jsonschema.ValidationError as exc:
        field = ".".join(str(p) for p in exc.absolute_path) or "configuration"
        raise ConfigError(
            "Invalid speaker configuration: {}: {}".format(field, exc.message)
        ) from exc

    policy = SpeakerPolicy(
        enable=merged["enable"],
        confidence_threshold=float(merged["confidence_threshold"]),
        label_format=merged["label_format"],
        merge_consecutive_segments=merged["merge_consecutive_segments"],
        min_segment_duration=float(merged["min_segment_duration"]),
        max_speakers=merged["max_speakers"],
    )
    return policy.validate()


def load_speaker_policy(path: Optional[Union[str, Path]] = None) -> SpeakerPolicy:
    """Load the speaker policy from YAML, disabling it on any problem.

    Args:
        path: YAML file to read; defaults to SPEAKER_CONFIG_PATH.

    Returns:
        A validated, enabled SpeakerPolicy, or ``SpeakerPolicy.disabled()``.
    """
    config_path = Path(path if path is not None else SPEAKER_CONFIG_PATH)

    if not config_path.is_file():
        logger.debug("Deepgram configuration file not found: %s", config_path)
        return SpeakerPolicy.disabled()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to read %s: %s; speaker labels disabled", config_path, exc)
        return SpeakerPolicy.disabled()

    if not isinstance(data, dict):
        logger.warning("%s does not contain a mapping; speaker labels disabled", config_path)
        return SpeakerPolicy.disabled()

    section = data.get(SPEAKER_CONFIG_SECTION)
    if not isinstance(section, dict) or not section.get("enable"):
        return SpeakerPolicy.disabled()

    try:
        policy = validate_speaker_config(section)
    except ConfigError as exc:
        logger.warning("%s; speaker labels disabled", exc)
        return SpeakerPolicy.disabled()

    logger.debug(
        "Speaker diarization enabled with confidence threshold %.2f",
        policy.confidence_threshold,
    )
    return policy
