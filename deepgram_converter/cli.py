"""Command-line interface for the Deepgram transcript converter.

WHY: Users need a simple way to turn a saved Deepgram JSON response into
subtitles, reports and summaries, and to poke at enriched segment files,
from the terminal. The CLI wires file I/O and configuration around the
pure core — the core itself never touches the filesystem.

HOW: argparse with two subcommands.
  convert — TranscriptModel → formatter (srt, markdown/md, json, summary);
            SRT picks up the speaker policy from the YAML configuration
  analyze — FieldAnalyzer over normalized or legacy segment records;
            optional field extraction, topic/software filters and export
Status messages go to stderr; rendered content goes to a file next to
the input (or --output), or to stdout with --console.

RULES:
- Exit code 0 on success, 1 on any ValueError / OSError
- Output naming: {stem}{suffix}, e.g. interview.srt, interview_summary.txt
- Logging is configured here only; --verbose or DEEPGRAM_DEBUG=true
  selects DEBUG, otherwise WARNING
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from deepgram_converter.analysis.exports import EXPORT_SUFFIXES, EXPORTERS
from deepgram_converter.analysis.field_analyzer import FIELD_MAPPING, FieldAnalyzer
from deepgram_converter.config import DEBUG, DEFAULT_FORMAT, load_speaker_policy
from deepgram_converter.core.ir import LABEL_PLACEHOLDER, SpeakerPolicy
from deepgram_converter.core.segmenter import count_unique_speakers
from deepgram_converter.core.transcript import TranscriptModel
from deepgram_converter.formatters import SUPPORTED_FORMATS, get_formatter, resolve_format
from deepgram_converter.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so --console output can
    be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose or DEBUG else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _output_path(input_path: Path, suffix: str, explicit: Optional[str]) -> Path:
    if explicit:
        return Path(explicit)
    return input_path.parent / "{}{}".format(input_path.stem, suffix)


def _write(content: str, path: Path) -> None:
    path.write_text(content, encoding="utf-8")
    _status("Saved: {}".format(path))


def _report_speakers(model: TranscriptModel, policy: SpeakerPolicy) -> None:
    if not policy.enable:
        return
    if not model.has_speaker_data:
        _status("No speaker data found in transcript - used paragraph-based SRT")
        return
    count = count_unique_speakers(model.words_with_speaker_info, policy.confidence_threshold)
    _status("Speaker diarization applied ({} speakers detected, {}% confidence threshold)".format(
        count, int(round(policy.confidence_threshold * 100)),
    ))
    _status("Speaker labels format: {}".format(policy.label_format.replace(LABEL_PLACEHOLDER, "N")))


def run_convert(args: argparse.Namespace) -> int:
    input_path = Path(args.input_file)
    key = resolve_format(args.format)
    _status("Converting Deepgram output to {}...".format(key.upper()))

    model = TranscriptModel.from_file(input_path)
    policy = load_speaker_policy(args.config) if key == "srt" else None
    formatter = get_formatter(key, policy)

    outputs: List[FormatterOutput] = formatter.format(model)
    for output in outputs:
        if args.console:
            print(output.content)
        else:
            _write(output.content, _output_path(input_path, output.suffix, args.output))

    if policy is not None:
        _report_speakers(model, policy)
    return 0


def _print_overview(analyzer: FieldAnalyzer) -> None:
    stats = analyzer.summary_stats()
    _status("Total segments: {}".format(stats["total_segments"]))
    _status("Available fields: {}".format(", ".join(analyzer.available_fields) or "none"))
    _status("Fields with data: {}".format(stats["fields_with_data"]))
    topics = analyzer.get_all_topics()
    if topics:
        _status("Topics: {}".format(", ".join(str(t) for t in topics)))
    software = analyzer.get_all_software()
    if software:
        _status("Software: {}".format(", ".join(str(s) for s in software)))


def run_analyze(args: argparse.Namespace) -> int:
    input_path = Path(args.input_file)
    analyzer = FieldAnalyzer.from_file(input_path)
    _print_overview(analyzer)

    if args.fields:
        unknown = [f for f in args.fields if f not in FIELD_MAPPING]
        if unknown:
            raise ValueError("Unknown field(s): {}".format(", ".join(unknown)))
        print(json.dumps(analyzer.extract_fields(args.fields), indent=2, ensure_ascii=False))

    if args.topic:
        print(json.dumps(analyzer.filter_by_topic(args.topic), indent=2, ensure_ascii=False))

    if args.software:
        print(json.dumps(analyzer.filter_by_software(args.software), indent=2, ensure_ascii=False))

    if args.export:
        content = EXPORTERS[args.export](analyzer)
        _write(content, _output_path(input_path, EXPORT_SUFFIXES[args.export], args.output))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="deepgram_converter",
        description="Convert Deepgram transcription JSON into subtitles, reports "
                    "and summaries, and analyze enriched segment files.",
    )
    # Shared by both subcommands so the flag is accepted after the input path
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser(
        "convert", parents=[common], help="Render a transcript into another format."
    )
    convert.add_argument("input_file", help="Path to the Deepgram JSON file.")
    convert.add_argument(
        "--format",
        default=DEFAULT_FORMAT,
        help="Output format. Available: {}. Default: %(default)s.".format(
            ", ".join(SUPPORTED_FORMATS)
        ),
    )
    convert.add_argument(
        "--output",
        default=None,
        help="Output file path (default: next to the input file).",
    )
    convert.add_argument(
        "--console",
        action="store_true",
        help="Print the result to stdout instead of writing a file.",
    )
    convert.add_argument(
        "--config",
        default=None,
        help="YAML file with the speaker_diarization section (SRT only).",
    )
    convert.set_defaults(handler=run_convert)

    analyze = subparsers.add_parser(
        "analyze", parents=[common], help="Explore normalized segment records."
    )
    analyze.add_argument("input_file", help="Raw Deepgram response or segment records JSON.")
    analyze.add_argument(
        "--fields",
        nargs="+",
        default=None,
        metavar="LABEL",
        help="Field labels to extract. Available: {}.".format(", ".join(FIELD_MAPPING)),
    )
    analyze.add_argument("--topic", default=None, help="Show segments with this topic.")
    analyze.add_argument("--software", default=None, help="Show segments mentioning this software.")
    analyze.add_argument(
        "--export",
        choices=sorted(EXPORTERS),
        default=None,
        help="Export the analysis in this format.",
    )
    analyze.add_argument(
        "--output",
        default=None,
        help="Export file path (default: <stem>_analysis.<ext> next to the input).",
    )
    analyze.set_defaults(handler=run_analyze)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return args.handler(args)
    except (ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
