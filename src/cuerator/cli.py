"""
Cue-rator CLI - Entry point

Turns DAW EDL exports into a music cue sheet:
    cuerator process EDL [EDL ...] [-o cue_sheet.csv]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cuerator.core.config import Config, get_data_dir, load_config
from cuerator.core.console import get_console
from cuerator.core.output import log, set_quiet_mode, setup_loguru
from cuerator.domain.edl import canonical_identity, clean_display_name
from cuerator.domain.report import render_report, write_csv
from cuerator.session import CueSheetSession, read_input_files

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_STARTUP_FAILED = 2


def _setup_logging(config: Config) -> None:
    log_file = (
        Path(config.logging.log_file)
        if config.logging.log_file
        else get_data_dir() / "cuerator.log"
    )
    setup_loguru(
        log_file,
        level=config.logging.level,
        console_output=config.logging.console_output,
    )


def run_process(
    files: List[str],
    config: Config,
    output: Optional[str] = None,
    reference: Optional[str] = None,
    enrich: bool = True,
    show_table: bool = True,
) -> int:
    """Process EDL files into a cue sheet CSV.

    Args:
        files: EDL file paths, in processing order
        config: Loaded configuration
        output: CSV output path (defaults to [export] output_path)
        reference: Reference database path (defaults to [reference] database_path)
        enrich: Run metadata lookups
        show_table: Print the summary and cue sheet tables

    Returns:
        Exit code (0 success, 1 run failure, 2 startup failure)
    """
    session = CueSheetSession(config=config, enrich=enrich)

    if not session.start(Path(reference) if reference else None):
        log(f"❌ {session.error_message}", level="error")
        return EXIT_STARTUP_FAILED

    try:
        inputs = read_input_files([Path(f) for f in files], config.edl.encoding)
    except OSError as e:
        log(f"❌ Could not read EDL file: {e}", level="error")
        return EXIT_RUN_FAILED

    log(f"Processing {len(inputs)} EDL file(s)...")
    result = session.process(inputs)
    if result is None:
        log(f"❌ {session.error_message}", level="error")
        return EXIT_RUN_FAILED

    if show_table:
        render_report(
            result.summaries,
            result.entries,
            music_usage=config.export.music_usage,
            frame_rate=config.edl.frame_rate,
        )

    output_path = Path(output or config.export.output_path)
    try:
        rows = write_csv(
            result.entries,
            output_path,
            music_usage=config.export.music_usage,
            frame_rate=config.edl.frame_rate,
        )
    except OSError as e:
        log(f"❌ Could not write {output_path}: {e}", level="error")
        return EXIT_RUN_FAILED

    log(f"✅ Wrote {rows} cue(s) to {output_path}", level="success")
    return EXIT_OK


def run_identity(names: List[str]) -> int:
    """Print the canonical identity and display name of raw clip names."""
    console = get_console()
    for name in names:
        console.print(
            f"{name!r} -> identity {canonical_identity(name)!r}, "
            f"display {clean_display_name(name)!r}",
            markup=False,
        )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cuerator",
        description="The Cue-rator - music cue sheets from EDL exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        help="Path to config.toml (default: project, working directory, then ~/.config/cuerator)",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Parse EDL files, merge durations and export a cue sheet"
    )
    process_parser.add_argument("files", nargs="+", help="EDL text exports")
    process_parser.add_argument("-o", "--output", help="CSV output path")
    process_parser.add_argument(
        "--reference", help="Commissioned music database (plain text)"
    )
    process_parser.add_argument(
        "--no-enrich",
        action="store_true",
        help="Skip metadata lookups (durations only)",
    )
    process_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only write the CSV, no terminal output",
    )

    identity_parser = subparsers.add_parser(
        "identity", help="Show how clip names are normalized"
    )
    identity_parser.add_argument("names", nargs="+", help="Raw clip names")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the cuerator command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subcommand == "identity":
        sys.exit(run_identity(args.names))

    if args.subcommand == "process":
        config = load_config(Path(args.config) if args.config else None)
        _setup_logging(config)
        set_quiet_mode(args.quiet)
        sys.exit(
            run_process(
                args.files,
                config,
                output=args.output,
                reference=args.reference,
                enrich=not args.no_enrich,
                show_table=not args.quiet,
            )
        )

    parser.print_help()
    sys.exit(EXIT_RUN_FAILED)


if __name__ == "__main__":
    main()
