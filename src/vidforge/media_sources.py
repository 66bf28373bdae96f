"""
Media sources and sinks at the edge of the core

Image providers hand the effect engine RGBA frames of the agreed size; the
encoder protocol describes what the external video encoder accepts.
"""

import logging
from pathlib import Path
from typing import Protocol, Sequence, Tuple

import cv2
import numpy as np

from .audio_synthesis.audio_models import AudioBuffer
from .frame_effects.effects_engine import validate_pixel_buffer
from .utils.config import VideoConfig

logger = logging.getLogger(__name__)


class ImageProvider(Protocol):
    """Supplies one RGBA frame of the requested size"""

    def get_image(self, width: int, height: int) -> np.ndarray:
        ...


class VideoEncoder(Protocol):
    """External encoder; settings are passed through untouched"""

    def encode(self, frames: Sequence[np.ndarray], audio: AudioBuffer, settings: VideoConfig) -> Path:
        ...


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV image (gray, BGR or BGRA) to RGBA uint8"""
    if image.dtype == np.uint16:
        image = (image // 257).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    raise ValueError(f"Unsupported channel count: {image.shape[2]}")


class StaticImageProvider:
    """Frames from an image file on disk, resized to the frame size"""

    def __init__(self, image_path):
        self.image_path = Path(image_path)

    def get_image(self, width: int, height: int) -> np.ndarray:
        if not self.image_path.exists():
            raise FileNotFoundError(f"Image not found: {self.image_path}")

        image = cv2.imread(str(self.image_path), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ValueError(f"Could not decode image: {self.image_path}")

        rgba = to_rgba(image)
        if rgba.shape[1] != width or rgba.shape[0] != height:
            rgba = cv2.resize(rgba, (width, height), interpolation=cv2.INTER_LANCZOS4)

        logger.debug(f"Loaded {self.image_path.name} as {width}x{height} frame")
        return np.ascontiguousarray(rgba)


class PlaceholderImageProvider:
    """Vertical gradient frames for when no generated image is available"""

    def __init__(self,
                 top_color: Tuple[int, int, int] = (40, 30, 90),
                 bottom_color: Tuple[int, int, int] = (220, 120, 60)):
        self.top_color = np.asarray(top_color, dtype=np.float64)
        self.bottom_color = np.asarray(bottom_color, dtype=np.float64)

    def get_image(self, width: int, height: int) -> np.ndarray:
        weights = np.linspace(0.0, 1.0, height)[:, np.newaxis]
        rows = self.top_color * (1 - weights) + self.bottom_color * weights

        frame = np.empty((height, width, 4), dtype=np.uint8)
        frame[..., :3] = rows[:, np.newaxis, :].astype(np.uint8)
        frame[..., 3] = 255
        return frame


def save_frame(frame: np.ndarray, path) -> Path:
    """Write an RGBA frame to an image file (PNG keeps alpha)"""
    validate_pixel_buffer(frame)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if not cv2.imwrite(str(output_path), cv2.cvtColor(frame, cv2.COLOR_RGBA2BGRA)):
        raise IOError(f"Could not write frame: {output_path}")
    return output_path
