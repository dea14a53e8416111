"""OpenCV VideoCapture-backed frame sources."""

import logging
import time
from abc import abstractmethod
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from pxl2000.sources.base import FrameSource
from pxl2000.sources.frame import Frame, buffer_from_bgr
from pxl2000.utils.config import SourceConfig

logger = logging.getLogger(__name__)


class _CaptureSource(FrameSource):
    """Shared lifecycle for sources reading through ``cv2.VideoCapture``."""

    def __init__(self, alpha: int = 0xFF):
        self._alpha = alpha
        self._cap: Optional[cv2.VideoCapture] = None
        self._delivered = 0

    @abstractmethod
    def _create_capture(self) -> cv2.VideoCapture:
        """Build the capture object; it may still fail to open."""

    def _configure(self, cap: cv2.VideoCapture) -> None:
        pass

    @abstractmethod
    def _timestamp(self) -> float:
        """Seconds into the stream for the frame about to be wrapped."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        if self._cap is not None:
            return
        cap = self._create_capture()
        if not cap.isOpened():
            cap.release()
            raise RuntimeError(f"Could not open {self.source_name}")
        self._cap = cap
        self._delivered = 0
        self._configure(cap)
        w, h = self.resolution
        logger.info("%s opened: %dx%d @ %.1f fps", self.source_name, w, h, self.fps)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info("%s closed after %d frames", self.source_name, self._delivered)

    def _wrap(self, image: np.ndarray) -> Frame:
        frame = Frame(
            buffer=buffer_from_bgr(image, alpha=self._alpha),
            timestamp=self._timestamp(),
            frame_number=self._delivered,
            source_name=self.source_name,
        )
        self._delivered += 1
        return frame

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def frames_delivered(self) -> int:
        """Number of frames returned so far."""
        return self._delivered

    @property
    def resolution(self) -> tuple[int, int]:
        if self._cap is None:
            return (0, 0)
        return (
            int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()


class WebcamSource(_CaptureSource):
    """Live frames from a webcam / USB camera.

    Args:
        device: Device index (default ``0``) or a V4L2 device path
            such as ``"/dev/video0"``.
        fps: Target capture FPS.  The camera's actual FPS may differ.
        width: Requested frame width (``None`` = camera default).
        height: Requested frame height (``None`` = camera default).
    """

    def __init__(
        self,
        device: int | str = 0,
        fps: float = 30.0,
        width: Optional[int] = None,
        height: Optional[int] = None,
        alpha: int = 0xFF,
    ):
        super().__init__(alpha=alpha)
        self._device = device
        self._target_fps = fps
        self._req_width = width
        self._req_height = height
        self._start_time = 0.0

    @property
    def source_name(self) -> str:
        return f"webcam:{self._device}"

    def _create_capture(self) -> cv2.VideoCapture:
        return cv2.VideoCapture(self._device)

    def _configure(self, cap: cv2.VideoCapture) -> None:
        if self._req_width is not None:
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._req_width)
        if self._req_height is not None:
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._req_height)
        cap.set(cv2.CAP_PROP_FPS, self._target_fps)
        self._start_time = time.monotonic()

    def _timestamp(self) -> float:
        return time.monotonic() - self._start_time

    def read(self) -> Optional[Frame]:
        if self._cap is None:
            return None
        ret, image = self._cap.read()
        if not ret:
            logger.warning("%s: frame grab failed", self.source_name)
            return None
        return self._wrap(image)

    @property
    def fps(self) -> float:
        if self._cap is not None:
            return self._cap.get(cv2.CAP_PROP_FPS) or self._target_fps
        return self._target_fps


class VideoFileSource(_CaptureSource):
    """Frames from a video file on disk.

    Args:
        path: Path to the video file (mp4, avi, mkv, etc.).
        frame_skip: Yield every *N*-th frame (1 = every frame).
        max_frames: Stop after delivering this many frames (``None`` = all).
        loop: Restart from the beginning on EOF instead of returning ``None``.
    """

    def __init__(
        self,
        path: str | Path,
        frame_skip: int = 1,
        max_frames: Optional[int] = None,
        loop: bool = False,
        alpha: int = 0xFF,
    ):
        super().__init__(alpha=alpha)
        self._path = Path(path)
        self._frame_skip = max(1, frame_skip)
        self._max_frames = max_frames
        self._loop = loop
        self._native_fps = 30.0
        self._pos = 0

    @property
    def source_name(self) -> str:
        return f"file:{self._path.name}"

    def _create_capture(self) -> cv2.VideoCapture:
        if not self._path.exists():
            raise FileNotFoundError(f"Video file not found: {self._path}")
        return cv2.VideoCapture(str(self._path))

    def _configure(self, cap: cv2.VideoCapture) -> None:
        self._native_fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
        self._pos = 0

    def _timestamp(self) -> float:
        return self._pos / self._native_fps

    def _rewind(self) -> bool:
        if not self._loop or self._pos == 0:
            return False
        self._cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
        self._pos = 0
        return True

    def read(self) -> Optional[Frame]:
        if self._cap is None:
            return None
        if self._max_frames is not None and self._delivered >= self._max_frames:
            return None

        while True:
            ret, image = self._cap.read()
            if not ret:
                if self._rewind():
                    continue
                return None
            frame = self._wrap(image)
            # Skipped frames are grabbed but never decoded
            for _ in range(self._frame_skip - 1):
                if not self._cap.grab():
                    break
            self._pos += self._frame_skip
            return frame

    @property
    def fps(self) -> float:
        return self._native_fps


def create_source(config: SourceConfig) -> FrameSource:
    """Build the frame source described by ``config``."""
    if config.kind == "file":
        if not config.path:
            raise ValueError("source.path is required for file sources")
        return VideoFileSource(
            config.path,
            frame_skip=config.frame_skip,
            max_frames=config.max_frames,
            loop=config.loop,
        )
    return WebcamSource(
        device=config.device,
        fps=config.fps,
        width=config.width,
        height=config.height,
    )
