#!/usr/bin/env python3
"""Example with a verdict callback, CSV output and a threaded capture."""

import sys

from flashguard import Configuration, StreamAnalyser, Verdict


def on_verdict(verdict: Verdict) -> None:
    """Print luminance coverage as a bar."""
    bar_length = 40
    filled = int(bar_length * min(verdict.luminance_coverage, 1.0))
    bar = "=" * filled + "-" * (bar_length - filled)
    marker = " FLASHING" if verdict.flashing else ""
    sys.stdout.write(f"\rCoverage: [{bar}] {verdict.luminance_coverage * 100:5.1f}%{marker}   ")
    sys.stdout.flush()


def main():
    config = Configuration()

    # Adjust thresholds (defaults shown)
    config.luminance_delta_threshold = 0.1
    config.red_saturation_threshold = 0.8
    config.flash_frequency_threshold = 3.0
    config.area_fraction = 0.25
    config.validate()

    analyser = StreamAnalyser(config)
    result = analyser.analyse_source(
        "your_video.mp4",
        threaded=True,
        csv_path="results/verdicts.csv",
        verdict_callback=on_verdict,
    )

    print(f"\nResult: {result.overall_result.name}")


if __name__ == "__main__":
    main()
