import logging
import os
from datetime import datetime
from typing import Optional, Sequence

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

RECORDINGS_DIR = "recordings"


def recording_name(dimensions: Sequence[int], label: str, when: Optional[datetime] = None) -> str:
    """e.g. 'dfs_4x3x2_20260101_120000.mp4', inside recordings/ when that exists."""
    when = when or datetime.now()
    shape = "x".join(str(d) for d in dimensions) or "point"
    fname = f"{label}_{shape}_{when.strftime('%Y%m%d_%H%M%S')}.mp4"
    if os.path.isdir(RECORDINGS_DIR):
        return os.path.join(RECORDINGS_DIR, fname)
    return fname


class VideoRecorder:
    """
    Films a traversal frame by frame.

    Once the engine reports done, the final maze is held on screen for
    `hold_frames` more frames and `finished` turns true so the renderer
    can close the window.
    """
    def __init__(self, output_file: str, fps: int = 30, hold_frames: int = 60):
        self.output_file = output_file
        self.fps = fps
        self.hold_frames = hold_frames
        self.writer = None
        self.frame_count = 0
        self.held = 0
        self.last_step = None

    @classmethod
    def for_engine(cls, engine, label: str, output_file: Optional[str] = None, **kwargs) -> "VideoRecorder":
        return cls(output_file or recording_name(engine.graph.dimensions, label), **kwargs)

    @property
    def finished(self) -> bool:
        return self.held >= self.hold_frames

    def capture(self, surface: pygame.Surface, engine=None):
        if self.finished:
            return
        if engine is not None and engine.is_done:
            self.held += 1
        elif engine is not None and engine.step_count == self.last_step:
            # Paused: no new state to film
            return
        if engine is not None:
            self.last_step = engine.step_count
        self.write_frame(pygame.surfarray.array3d(surface))

    def write_frame(self, rgb: np.ndarray):
        """`rgb` is surfarray layout: (width, height, 3)."""
        if self.writer is None:
            width, height = rgb.shape[:2]
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, (width, height))
            logger.info(f"Recording started: {self.output_file}")

        # OpenCV wants (height, width, 3) BGR
        frame = np.ascontiguousarray(np.transpose(rgb, (1, 0, 2)))
        self.writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
