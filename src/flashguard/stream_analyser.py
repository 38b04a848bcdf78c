# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Stream analyser: feeds captured frames through flash detection."""

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple, Union

import numpy as np

from flashguard.configuration import Configuration
from flashguard.errors import FrameShapeError
from flashguard.flash_detection import FlashDetection
from flashguard.frame_data import Verdict
from flashguard.frame_preprocessor import FramePreprocessor
from flashguard.result import StreamResult
from flashguard.video_source import VideoSource

logger = logging.getLogger(__name__)

FLASH_MESSAGE = "Flashing Detected!"


class StreamAnalyser:
    """
    Runs flash detection over a stream of captured frames.

    Frames are processed strictly in arrival order. Frames that do not
    match the established dimensions are dropped and counted.
    """

    def __init__(self, config: Optional[Configuration] = None, input_order: str = "BGR"):
        """
        Args:
            config: Configuration parameters (uses defaults if None)
            input_order: Channel order of captured frames
        """
        self.config = config or Configuration()
        self.config.validate()
        self.preprocessor = FramePreprocessor(self.config.downscale_factor, input_order)
        self.detection: Optional[FlashDetection] = None

    def analyse(
        self,
        frames: Iterable[Tuple[np.ndarray, float]],
        csv_path: Optional[Union[str, Path]] = None,
        max_frames: Optional[int] = None,
        verdict_callback: Optional[Callable[[Verdict], None]] = None,
    ) -> StreamResult:
        """
        Analyse ``(frame, timestamp)`` pairs until the iterable ends.

        Ctrl-C stops the run early; the partial result is returned with
        ``interrupted`` set.

        Args:
            frames: Captured frames with capture timestamps in seconds
            csv_path: Optional file receiving one CSV row per verdict
            max_frames: Stop after this many frames
            verdict_callback: Called with every emitted verdict

        Returns:
            StreamResult summarising the run
        """
        self.detection = FlashDetection(self.config)
        result = StreamResult()

        csv_file = None
        if csv_path is not None:
            csv_path = Path(csv_path)
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            csv_file = open(csv_path, "w")
            csv_file.write(Verdict.csv_columns() + "\n")

        logger.info("Stream analysis started")
        start_time = time.time()

        try:
            for frame, timestamp in frames:
                if max_frames is not None and result.total_frames >= max_frames:
                    break
                result.total_frames += 1

                try:
                    verdict = self.detection.process_frame(
                        self.preprocessor.process(frame),
                        timestamp,
                        frame_index=result.total_frames - 1,
                    )
                except FrameShapeError as e:
                    result.dropped_frames += 1
                    logger.warning("Dropping frame %d: %s", result.total_frames - 1, e)
                    continue

                if verdict is None:
                    continue

                self._record(verdict, result)

                if csv_file is not None:
                    csv_file.write(verdict.to_csv() + "\n")
                if verdict_callback is not None:
                    verdict_callback(verdict)
        except KeyboardInterrupt:
            result.interrupted = True
            logger.info("Stream analysis interrupted after %d frames", result.total_frames)
        finally:
            if csv_file is not None:
                csv_file.close()

        result.analysis_time = int((time.time() - start_time) * 1000)
        logger.info(
            "Stream analysis ended: %d frames, %d verdicts, %d flashing (%d ms)",
            result.total_frames, result.verdicts, result.flashing_verdicts,
            result.analysis_time,
        )
        return result

    def analyse_source(
        self,
        source: Union[int, str],
        threaded: bool = False,
        **kwargs,
    ) -> StreamResult:
        """Open a camera index or video file and analyse it; see :meth:`analyse`."""
        with VideoSource(
            source,
            threaded=threaded,
            requested_fps=self.config.expected_fps,
        ) as video:
            return self.analyse(video, **kwargs)

    def _record(self, verdict: Verdict, result: StreamResult) -> None:
        result.verdicts += 1
        if not verdict.flashing:
            return

        result.flashing_verdicts += 1
        if verdict.luminance_flashing:
            result.luminance_flashing_verdicts += 1
        if verdict.red_flashing:
            result.red_flashing_verdicts += 1
        if result.first_flash_timestamp is None:
            result.first_flash_timestamp = verdict.timestamp

        logger.warning(
            "%s frame=%d luminance_pixels=%d red_pixels=%d threshold=%d",
            FLASH_MESSAGE, verdict.frame, verdict.luminance_pixels,
            verdict.red_pixels, verdict.area_threshold,
        )
