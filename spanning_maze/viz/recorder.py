import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

class VideoRecorder:
    """
    Writes renderer frames to an mp4 file.

    The first captured frame fixes the video size; later frames from a
    resized window are scaled to it. hold() repeats the last frame so the
    finished maze stays on screen at the end of the clip.
    """
    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file or (self.default_filename("maze") if active else None)
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0
        self.last_frame = None

    @staticmethod
    def default_filename(prefix: str) -> str:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fname = f"{prefix}_{ts}.mp4"
        if os.path.isdir("recordings"):
            return os.path.join("recordings", fname)
        return fname

    @staticmethod
    def surface_to_bgr(surface: pygame.Surface) -> np.ndarray:
        # surfarray is (width, height, RGB); OpenCV wants (height, width, BGR)
        rgb = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
        return cv2.cvtColor(np.ascontiguousarray(rgb), cv2.COLOR_RGB2BGR)

    def open(self, frame_size):
        self.frame_size = frame_size
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
        if not self.writer.isOpened():
            raise IOError(f"Cannot open video file {self.output_file}")
        logger.info("Recording %dx%d at %d fps to %s", frame_size[0], frame_size[1], self.fps, self.output_file)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        if self.writer is None:
            self.open(surface.get_size())
        elif surface.get_size() != self.frame_size:
            surface = pygame.transform.scale(surface, self.frame_size)

        self.last_frame = self.surface_to_bgr(surface)
        self.writer.write(self.last_frame)
        self.frame_count += 1

    def hold(self, seconds: float):
        """Repeats the last captured frame for 'seconds' of video."""
        if self.writer is None or self.last_frame is None:
            return
        for _ in range(int(seconds * self.fps)):
            self.writer.write(self.last_frame)
            self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info("Video saved: %s (%d frames, %.1fs)", self.output_file, self.frame_count, self.frame_count / self.fps)
            self.writer = None
