"""
Procedural Background Music

Additive sine synthesis: every frequency of a MusicPattern is summed under
a slow shared envelope ``sin(t * tempo * pi) * 0.3``, averaged over the
number of frequencies, then attenuated by a fixed 0.2 master gain.
"""

import logging
import math
from typing import Optional

import numpy as np

from ..errors import InvalidInput
from ..utils.logger import LoggerMixin
from .audio_models import AudioBuffer, DEFAULT_MUSIC_STYLE, MUSIC_PATTERNS, MusicPattern

logger = logging.getLogger(__name__)

ENVELOPE_DEPTH = 0.3
MASTER_GAIN = 0.2


def get_music_pattern(style_name: Optional[str]) -> MusicPattern:
    """Pattern for a style, falling back to ambient"""
    pattern = MUSIC_PATTERNS.get(style_name) if style_name is not None else None
    if pattern is None:
        logger.debug(f"Unknown music style {style_name!r}, using {DEFAULT_MUSIC_STYLE}")
        return MUSIC_PATTERNS[DEFAULT_MUSIC_STYLE]
    return pattern


def render_pattern(pattern: MusicPattern, sample_rate: int, length: int) -> np.ndarray:
    """One channel of ``length`` samples for ``pattern``"""
    time = np.arange(length, dtype=np.float64) / sample_rate
    envelope = np.sin(time * pattern.tempo * np.pi) * ENVELOPE_DEPTH
    weight = 1 / len(pattern.frequencies)

    sample = np.zeros(length, dtype=np.float64)
    for freq in pattern.frequencies:
        sample += np.sin(2 * np.pi * freq * time) * envelope * weight

    return sample * MASTER_GAIN


class MusicSynthesizer(LoggerMixin):
    """Generates background music buffers from named patterns"""

    def __init__(self, config=None, sample_rate: Optional[int] = None, channels: Optional[int] = None):
        self.config = config
        audio_config = getattr(config, 'audio', None)

        self.sample_rate = sample_rate or getattr(audio_config, 'sample_rate', 44100)
        self.channels = channels or getattr(audio_config, 'channels', 2)
        self.default_style = getattr(audio_config, 'music_style', DEFAULT_MUSIC_STYLE)

        if self.sample_rate <= 0:
            raise InvalidInput(f"Sample rate must be positive, got {self.sample_rate}")
        if self.channels <= 0:
            raise InvalidInput(f"Channel count must be positive, got {self.channels}")

    def synthesize_music(self, style_name: Optional[str], duration_seconds: float) -> AudioBuffer:
        """
        Generate a music buffer.

        Args:
            style_name: Key of MUSIC_PATTERNS; unknown names play "ambient"
            duration_seconds: Length of the buffer

        Returns:
            AudioBuffer with ``channels`` x ``round(sample_rate * duration)`` samples
        """
        length = self._buffer_length(duration_seconds)
        pattern = get_music_pattern(style_name)
        style = style_name if style_name in MUSIC_PATTERNS else DEFAULT_MUSIC_STYLE

        buffer = AudioBuffer.silent(self.channels, length, self.sample_rate)

        # Each channel is rendered on its own, not copied from the first
        for channel in range(self.channels):
            buffer.data[channel] = render_pattern(pattern, self.sample_rate, length)

        self.logger.info(
            f"Synthesized {duration_seconds:.1f}s of {style} music "
            f"({self.channels}ch @ {self.sample_rate} Hz)"
        )
        return buffer

    def synthesize_default(self, duration_seconds: float) -> AudioBuffer:
        """Music in the configured style"""
        return self.synthesize_music(self.default_style, duration_seconds)

    def _buffer_length(self, duration_seconds: float) -> int:
        try:
            duration = float(duration_seconds)
        except (TypeError, ValueError):
            raise InvalidInput(f"Duration must be a number, got {duration_seconds!r}") from None

        if not math.isfinite(duration) or duration <= 0:
            raise InvalidInput(f"Duration must be positive and finite, got {duration_seconds}")

        length = int(round(self.sample_rate * duration))
        if length < 1:
            raise InvalidInput(f"Duration {duration_seconds}s is shorter than one sample")
        return length
