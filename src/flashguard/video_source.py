# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Frame capture from cameras and video files."""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class VideoInfo:
    """Capture metadata."""
    fps: float = 0.0
    frame_count: int = 0
    frame_size: Tuple[int, int] = (0, 0)  # (width, height)
    live: bool = False


class VideoSource:
    """
    Iterates over ``(frame, timestamp)`` pairs from a cv2.VideoCapture.

    Camera frames are stamped with ``time.monotonic()`` when read, relative
    to the first frame; file frames with their index divided by the
    reported fps. With ``threaded=True`` a single reader thread fills a
    bounded queue and iteration drains it in capture order.
    """

    _END = object()

    def __init__(
        self,
        source: Union[int, str],
        threaded: bool = False,
        queue_size: int = 4,
        requested_fps: Optional[float] = None,
    ):
        """
        Args:
            source: Camera index or path to a video file
            threaded: Read frames on a background thread
            queue_size: Capacity of the frame queue in threaded mode
            requested_fps: Frame rate to request from a camera
        """
        self.source = source
        self.threaded = threaded
        self.queue_size = queue_size
        self.requested_fps = requested_fps
        self.info = VideoInfo()

        self._video: Optional[cv2.VideoCapture] = None
        self._queue: Optional[queue.Queue] = None
        self._reader: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self._error: Optional[BaseException] = None

    def open(self) -> "VideoSource":
        video = cv2.VideoCapture(self.source)
        live = isinstance(self.source, int)
        if live and self.requested_fps:
            video.set(cv2.CAP_PROP_FPS, self.requested_fps)

        if not video.isOpened():
            raise RuntimeError(f"Could not open video source: {self.source}")

        self._video = video
        self.info = VideoInfo(
            fps=float(video.get(cv2.CAP_PROP_FPS)),
            frame_count=int(video.get(cv2.CAP_PROP_FRAME_COUNT)),
            frame_size=(
                int(video.get(cv2.CAP_PROP_FRAME_WIDTH)),
                int(video.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            ),
            live=live,
        )
        logger.info(
            "Opened %s: %dx%d at %.2f fps",
            self.source, self.info.frame_size[0], self.info.frame_size[1], self.info.fps,
        )
        if not live and self.info.fps <= 0:
            raise RuntimeError(f"Video {self.source} reports no frame rate")
        return self

    def close(self) -> None:
        self._stop.set()
        if self._reader is not None:
            # Unblock a reader waiting on a full queue
            while self._reader.is_alive():
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass
                self._reader.join(timeout=0.1)
            self._reader = None
        if self._video is not None:
            self._video.release()
            self._video = None

    def __enter__(self) -> "VideoSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _read_frames(self) -> Iterator[Tuple[np.ndarray, float]]:
        index = 0
        start: Optional[float] = None
        while not self._stop.is_set():
            ret, frame = self._video.read()
            if not ret or frame is None:
                logger.info("Capture ended after %d frames", index)
                return
            if self.info.live:
                now = time.monotonic()
                if start is None:
                    start = now
                timestamp = now - start
            else:
                timestamp = index / self.info.fps
            index += 1
            yield frame, timestamp

    def _reader_loop(self) -> None:
        try:
            for item in self._read_frames():
                # Blocking put keeps every frame, in order
                while not self._stop.is_set():
                    try:
                        self._queue.put(item, timeout=0.1)
                        break
                    except queue.Full:
                        continue
        except Exception as e:
            logger.exception("Frame reader failed")
            self._error = e
        finally:
            self._queue.put(self._END)

    def __iter__(self) -> Iterator[Tuple[np.ndarray, float]]:
        if self._video is None:
            self.open()

        if not self.threaded:
            yield from self._read_frames()
            return

        self._queue = queue.Queue(maxsize=self.queue_size)
        self._reader = threading.Thread(target=self._reader_loop, name="frame-reader", daemon=True)
        self._reader.start()

        while True:
            item = self._queue.get()
            if item is self._END:
                break
            yield item

        if self._error is not None:
            raise RuntimeError("Frame reader failed") from self._error
