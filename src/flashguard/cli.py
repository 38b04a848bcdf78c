# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Command-line interface for live flash detection."""

import argparse
import sys
from pathlib import Path

from flashguard.configuration import Configuration
from flashguard.errors import ConfigurationError
from flashguard.frame_data import Verdict
from flashguard.logging_setup import configure_logging
from flashguard.result import AnalysisResult
from flashguard.stream_analyser import FLASH_MESSAGE, StreamAnalyser

EXIT_PASS = 0
EXIT_FLASHING = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashguard",
        description="FlashGuard - live photosensitive flash detection",
        epilog="Detection results are informational only and are not a "
               "certification of compliance with any broadcast guideline.",
    )

    parser.add_argument(
        "source",
        nargs="?",
        default="0",
        help="Camera index or path to a video file (default: camera 0)",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to directory containing appsettings.json",
        default=".",
    )

    parser.add_argument(
        "--csv",
        help="Write one CSV row per verdict to this file",
        default=None,
    )

    parser.add_argument(
        "--downscale",
        type=float,
        help="Downscale factor applied before analysis (e.g., 0.25 for 25%%)",
        default=None,
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        help="Stop after this many frames",
        default=None,
    )

    parser.add_argument(
        "--threaded",
        action="store_true",
        help="Read frames on a separate capture thread",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def _parse_source(source: str):
    """Camera indices are digits; anything else is a file path."""
    if source.isdigit():
        return int(source)
    return source


def _print_verdict(verdict: Verdict) -> None:
    if verdict.flashing:
        print(FLASH_MESSAGE, flush=True)


def main(argv=None) -> int:
    """Main entry point for the flashguard CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    source = _parse_source(args.source)
    if isinstance(source, str) and not Path(source).exists():
        print(f"Error: Video file not found: {source}")
        return EXIT_RUNTIME_ERROR

    try:
        config = Configuration.from_json(args.config)
        if args.downscale is not None:
            config.downscale_factor = args.downscale
        config.validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    analyser = StreamAnalyser(config)

    try:
        result = analyser.analyse_source(
            source,
            threaded=args.threaded,
            csv_path=args.csv,
            max_frames=args.max_frames,
            verdict_callback=_print_verdict,
        )
    except KeyboardInterrupt:
        print("\nInterrupted")
        return EXIT_PASS
    except (RuntimeError, ValueError) as e:
        print(f"Error during analysis: {e}")
        return EXIT_RUNTIME_ERROR

    print("\n" + "=" * 50)
    print("ANALYSIS SUMMARY")
    print("=" * 50)
    if result.interrupted:
        print("Interrupted")
    print(f"Overall Result: {result.overall_result.name}")
    print(f"Total Frames: {result.total_frames}")
    print(f"Verdicts: {result.verdicts}")
    print(f"Flashing Verdicts: {result.flashing_verdicts}")
    if result.dropped_frames:
        print(f"Dropped Frames: {result.dropped_frames}")
    if result.first_flash_timestamp is not None:
        print(f"First Flash At: {result.first_flash_timestamp:.3f}s")
    print(f"Analysis Time: {result.analysis_time} ms")
    if args.csv:
        print(f"\nCSV: {args.csv}")

    if result.overall_result == AnalysisResult.FlashingDetected:
        return EXIT_FLASHING
    return EXIT_PASS


if __name__ == "__main__":
    sys.exit(main())
