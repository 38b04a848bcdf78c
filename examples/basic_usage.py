#!/usr/bin/env python3
"""Basic usage example for FlashGuard."""

from flashguard import Configuration, StreamAnalyser
from flashguard.result import AnalysisResult


def main():
    # Create configuration (uses defaults)
    config = Configuration()

    # Or customize configuration
    # config.downscale_factor = 0.5
    # config.area_fraction = 0.25

    analyser = StreamAnalyser(config)

    # Analyse camera 0 for ten seconds at ~30 fps
    result = analyser.analyse_source(0, max_frames=300)

    if result.overall_result == AnalysisResult.FlashingDetected:
        print("Flashing detected")
    else:
        print("No flashing detected")

    print(f"\nTotal frames: {result.total_frames}")
    print(f"Verdicts: {result.verdicts}")
    print(f"  Luminance flashing: {result.luminance_flashing_verdicts}")
    print(f"  Red flashing: {result.red_flashing_verdicts}")
    print(f"Analysis time: {result.analysis_time} ms")


if __name__ == "__main__":
    main()
