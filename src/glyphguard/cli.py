"""
Command-line interface for glyphguard.

Provides subcommands for scanning text for Unicode obfuscation, cleaning it,
and inspecting individual flagged characters. This module is the entry point
referenced in pyproject.toml as ``glyphguard.cli:main``.
"""

from __future__ import annotations

import argparse
import sys

import structlog

from .config import configure_logging
from .models import DetectionResult, Finding, ThreatLevel

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# ANSI color helpers
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if stdout appears to support ANSI color codes."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


_COLOR_ENABLED: bool | None = None


def _color(text: str, code: str) -> str:
    """Wrap *text* in ANSI escape codes if the terminal supports it."""
    global _COLOR_ENABLED
    if _COLOR_ENABLED is None:
        _COLOR_ENABLED = _supports_color()
    if not _COLOR_ENABLED:
        return text
    return f"\033[{code}m{text}\033[0m"


def _red(text: str) -> str:
    return _color(text, "31")


def _yellow(text: str) -> str:
    return _color(text, "33")


def _blue(text: str) -> str:
    return _color(text, "34")


def _green(text: str) -> str:
    return _color(text, "32")


def _bold(text: str) -> str:
    return _color(text, "1")


def _dim(text: str) -> str:
    return _color(text, "2")


# ---------------------------------------------------------------------------
# Output formatting helpers
# ---------------------------------------------------------------------------

def _threat_color(level: ThreatLevel) -> str:
    """Return a color-coded string for a threat level."""
    label = level.value.upper()
    if level == ThreatLevel.CRITICAL:
        return _red(label)
    elif level == ThreatLevel.WARNING:
        return _yellow(label)
    else:
        return _blue(label)


def _print_header(text: str) -> None:
    """Print a section header with visual separation."""
    print()
    print(_bold(f"  {text}"))
    print(_dim(f"  {'-' * len(text)}"))


def _print_findings(findings: list[Finding]) -> None:
    """Print findings with color-coded threat levels."""
    if not findings:
        print(f"  {_green('No suspicious characters found.')}")
        return

    counts: dict[ThreatLevel, int] = {}
    for f in findings:
        counts[f.threat_level] = counts.get(f.threat_level, 0) + 1

    summary_parts = []
    for level in (ThreatLevel.CRITICAL, ThreatLevel.WARNING, ThreatLevel.INFO):
        count = counts.get(level, 0)
        if count > 0:
            summary_parts.append(f"{_threat_color(level)}: {count}")
    print(f"  Found {len(findings)} issue type(s): {', '.join(summary_parts)}")
    print()

    for i, finding in enumerate(findings, 1):
        level_str = _threat_color(finding.threat_level)
        print(f"  [{level_str}] {finding.description} (x{finding.count})")
        print(f"    Action:   {finding.recommendation}")
        if i < len(findings):
            print()


def _print_scores(result: DetectionResult) -> None:
    """Print the noise score verdict and line density."""
    from .report import assess_noise

    level, verdict = assess_noise(result.noise_score)
    print(f"  {'Total issues:':<20s} {result.total_issues}")
    print(f"  {'Noise score:':<20s} {result.noise_score:.1f}% [{_threat_color(level)}] {verdict}")
    print(f"  {'Max line density:':<20s} {result.max_line_density:.1f}%")


def _write_stdout(text: str) -> None:
    """Write *text* to stdout, passing lone surrogates through as raw bytes."""
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(text)
        return
    sys.stdout.flush()
    buffer.write(text.encode("utf-8", errors="surrogateescape"))
    buffer.flush()


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------

def _handle_scan(args: argparse.Namespace) -> int:
    """Handle the 'scan' subcommand."""
    from .detection import detect
    from .docx_handler import load_text
    from .report import build_findings

    text = load_text(args.input)
    logger.debug("Input loaded", source=args.input, chars=len(text))
    result = detect(text)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        _print_header("Unicode Scan")
        print(f"  Scanning: {args.input}")
        print()
        _print_scores(result)
        _print_header("Findings")
        _print_findings(build_findings(result))
        print()

    if args.fail_on_issues and result.total_issues > 0:
        return 2
    return 0


def _handle_clean(args: argparse.Namespace) -> int:
    """Handle the 'clean' subcommand."""
    from .cleaner import clean_with_report
    from .docx_handler import load_text, write_text

    text = load_text(args.input)
    logger.debug("Input loaded", source=args.input, chars=len(text))
    report = clean_with_report(text)

    if not args.output:
        _write_stdout(report.text + "\n" if report.text else "")
        return 0

    output_path = write_text(report.text, args.output)

    _print_header("Cleaning Summary")
    print(f"  {'Input characters:':<20s} {len(text)}")
    print(f"  {'Output characters:':<20s} {len(report.text)}")
    if report.stages_applied:
        print("  Applied:")
        for stage in report.stages_applied:
            print(f"    - {stage.replace('_', ' ')}")
    else:
        print(f"  {_green('Text was already clean.')}")

    _print_header("Output Files")
    print(f"  Cleaned text: {output_path}")
    print()

    return 0


def _handle_inspect(args: argparse.Namespace) -> int:
    """Handle the 'inspect' subcommand."""
    from .detection import detect
    from .docx_handler import load_text
    from .report import describe_char

    text = load_text(args.input)
    result = detect(text)
    spans = result.highlighted_positions

    _print_header("Flagged Characters")
    if not spans:
        print(f"  {_green('No flagged characters.')}")
        print()
        return 0

    shown = spans[:args.limit] if args.limit > 0 else spans
    print(f"  {'Offset':>8s}  {'Category':<12s} Character")
    for span in shown:
        print(f"  {span.start:>8d}  {span.category.value:<12s} {describe_char(span.char)}")
    if len(spans) > len(shown):
        print(f"  {_dim(f'... and {len(spans) - len(shown)} more flagged character(s)')}")
    print()
    print(f"  {_dim('Offsets index the NFC-normalized text.')}")
    print()
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="glyphguard",
        description="glyphguard: detect and remove Unicode obfuscation in text.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable debug logging on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- scan ---
    scan_parser = subparsers.add_parser(
        "scan",
        help="Report invisible characters, homoglyphs, bidi controls and other obfuscation",
    )
    scan_parser.add_argument(
        "input",
        help="Path to a text or .docx file, or '-' for stdin",
    )
    scan_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the full detection result as JSON",
    )
    scan_parser.add_argument(
        "--fail-on-issues",
        action="store_true",
        default=False,
        help="Exit with status 2 when any issue is detected",
    )

    # --- clean ---
    clean_parser = subparsers.add_parser(
        "clean",
        help="Write a sanitized copy of the text",
    )
    clean_parser.add_argument(
        "input",
        help="Path to a text or .docx file, or '-' for stdin",
    )
    clean_parser.add_argument(
        "--output",
        default=None,
        help="Output path for the cleaned text (default: stdout)",
    )

    # --- inspect ---
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="List every flagged character with its offset and name",
    )
    inspect_parser.add_argument(
        "input",
        help="Path to a text or .docx file, or '-' for stdin",
    )
    inspect_parser.add_argument(
        "--limit",
        type=int,
        default=50,
        help="Maximum number of characters to list, 0 for all (default: 50)",
    )

    return parser


def _get_version() -> str:
    """Return the package version string."""
    from . import __version__
    return __version__


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the glyphguard CLI.

    Parses arguments, dispatches to the appropriate subcommand handler,
    and exits with the appropriate code. Referenced in pyproject.toml as
    ``glyphguard.cli:main``.

    Args:
        argv: Optional argument list for testing. Defaults to sys.argv[1:].
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(verbose=args.verbose)

    handlers = {
        "scan": _handle_scan,
        "clean": _handle_clean,
        "inspect": _handle_inspect,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    from .docx_handler import DocumentLoadError

    try:
        exit_code = handler(args)
        sys.exit(exit_code)
    except FileNotFoundError as exc:
        logger.error("Input not found", source=args.input)
        print(f"\nError: {exc}")
        sys.exit(1)
    except DocumentLoadError as exc:
        logger.error("Failed to load input", source=args.input, error=str(exc))
        print(f"\nError: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
