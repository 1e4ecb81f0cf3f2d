"""Command-line interface for the Subtitle Converter.

WHY: Users need a simple way to convert caption and lyric files from the
terminal or in batch scripts. The CLI wires together format detection,
parsing, serialization, and file saving behind a single command.

HOW: Uses argparse to accept an input file, an optional source format,
one or more target formats, and an output directory. The input is read as
UTF-8, parsed once, and serialized to every requested target. Status
messages go to stderr; output files are saved next to the source (or to
--output-dir), or the single result is written to stdout with --stdout.

RULES:
- Positional argument: input caption/lyric file path
- --from overrides detection; otherwise the format is detected
- --to: comma-separated format tags (default: DEFAULT_EXPORT_FORMAT)
- --detect prints the detected format and exits
- Output naming: {stem}{suffix}, numeric suffix for conflicts (song-2.srt)
- Status output goes to stderr (not stdout)
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from subtitle_converter.config import DEFAULT_EXPORT_FORMAT, LOG_LEVEL
from subtitle_converter.core.detect import detect_format
from subtitle_converter.core.ir import SubtitleFormat
from subtitle_converter.formats import FORMATS, ExportOutput, export_cues, parse_content, resolve_format


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Converting into the directory of the source may hit an existing
    file — even the source itself when converting to the same format.
    Numeric suffixes (song-2.srt) prevent data loss.

    HOW: Check if {stem}{suffix} exists. If so, increment a counter
    and insert it before the file extension until a free name is found.

    RULES:
    - First attempt: {stem}{suffix} (e.g. song.srt, song-karaoke.vtt)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. song-2.srt, song-karaoke-2.vtt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    # e.g. "-karaoke.vtt" → ("-karaoke", ".vtt")
    dot_idx = suffix.rfind(".")
    if dot_idx >= 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: ExportOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save one export to disk as UTF-8 and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_targets(value: str) -> List[SubtitleFormat]:
    targets = []
    for key in value.split(","):
        if not key.strip():
            continue
        try:
            targets.append(resolve_format(key))
        except ValueError as exc:
            _fail(str(exc))
    if not targets:
        _fail("No target format given.")
    return targets


def run(args: argparse.Namespace) -> None:
    """Execute one conversion as described by parsed arguments."""
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    try:
        content = input_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        _fail("File is not UTF-8 text: {}".format(input_path))

    if args.source_format:
        try:
            source = resolve_format(args.source_format)
        except ValueError as exc:
            _fail(str(exc))
    else:
        source = detect_format(input_path.name, content)

    if args.detect:
        print(source.value)
        return

    targets = _parse_targets(args.to)
    if args.stdout and len(targets) > 1:
        _fail("--stdout accepts a single target format.")

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    _status("Parsing {} as {}...".format(input_path.name, FORMATS[source].name))
    result = parse_content(content, source)
    _status("  {} cues".format(len(result.cues)))

    for target in targets:
        output = export_cues(result.cues, target, result.metadata)
        if args.stdout:
            sys.stdout.write(output.content)
            if not output.content.endswith("\n"):
                sys.stdout.write("\n")
            continue
        saved = _save_output(output, input_path.stem, output_dir)
        _status("  Saved: {}".format(saved.name))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="subtitle_converter",
        description="Convert captions and lyrics between SRT, WebVTT, LRC, "
                    "TTML, JSON, and plain text.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the caption or lyric file to convert.",
    )

    parser.add_argument(
        "--to",
        default=DEFAULT_EXPORT_FORMAT,
        help="Comma-separated target formats. Available: {}. "
             "Default: %(default)s.".format(", ".join(f.value for f in SubtitleFormat)),
    )

    parser.add_argument(
        "--from",
        dest="source_format",
        default=None,
        help="Source format (default: detected from filename and content).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the converted document to stdout instead of a file.",
    )

    parser.add_argument(
        "--detect",
        action="store_true",
        help="Print the detected source format and exit.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
