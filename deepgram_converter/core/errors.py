"""Exception types raised by the conversion pipeline.

WHY: Callers (CLI, tests, embedding applications) need to tell a
structurally broken upstream document apart from an unreadable file
or a bad speaker configuration, without string-matching messages.

HOW: Each error subclasses ValueError so existing ``except ValueError``
handlers (the CLI's error path) keep working.

RULES:
- InvalidDocument: the raw response lacks the required ``results`` /
  ``results.channels`` structure, or matches no known shape
- MalformedInput: the text handed to TranscriptModel is not a JSON object
- ConfigError: the speaker diarization configuration failed validation
- Degradations (speaker fallback, missing metadata) never raise
"""


class InvalidDocument(ValueError):
    """Raised when a raw Deepgram response cannot be normalized."""


class MalformedInput(ValueError):
    """Raised when a transcript document cannot be parsed as structured data."""


class ConfigError(ValueError):
    """Raised when a speaker diarization configuration is invalid."""
