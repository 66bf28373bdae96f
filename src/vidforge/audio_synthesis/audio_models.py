"""Data models for audio synthesis"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass
class AudioBuffer:
    """Multi-channel float waveform, ``data`` shaped (channels, samples)"""
    sample_rate: int
    data: np.ndarray

    @classmethod
    def silent(cls, channels: int, length: int, sample_rate: int) -> "AudioBuffer":
        return cls(sample_rate=sample_rate, data=np.zeros((channels, length), dtype=np.float32))

    @property
    def number_of_channels(self) -> int:
        return self.data.shape[0]

    @property
    def length(self) -> int:
        """Samples per channel"""
        return self.data.shape[1]

    @property
    def duration(self) -> float:
        return self.length / self.sample_rate

    def get_channel_data(self, channel: int) -> np.ndarray:
        return self.data[channel]


class MusicPattern(BaseModel):
    """Frequencies (Hz) summed under a shared envelope whose speed is ``tempo``"""
    model_config = ConfigDict(frozen=True)

    frequencies: Tuple[float, ...] = Field(min_length=1)
    tempo: float = Field(gt=0)

    @field_validator('frequencies')
    @classmethod
    def _positive_frequencies(cls, value):
        if any(f <= 0 for f in value):
            raise ValueError("frequencies must be positive")
        return value


MUSIC_PATTERNS: Dict[str, MusicPattern] = {
    "ambient": MusicPattern(frequencies=(220, 330, 440), tempo=0.5),
    "upbeat": MusicPattern(frequencies=(262, 330, 392, 523), tempo=2),
    "cinematic": MusicPattern(frequencies=(130, 196, 262, 330), tempo=0.75),
}

DEFAULT_MUSIC_STYLE = "ambient"


class VoiceHint(str, Enum):
    """Requested narrator voice"""
    DEFAULT = "default"
    FEMALE = "female"
    MALE = "male"


class Voice(BaseModel):
    """A voice offered by a speech provider"""
    id: str
    name: str
    languages: List[str] = Field(default_factory=list)
    gender: Optional[str] = None


class NarrationRequest(BaseModel):
    """Text to speak and the preferred voice"""
    text: str = Field(min_length=1)
    voice_hint: VoiceHint = VoiceHint.DEFAULT

    @field_validator('text')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("narration text must not be blank")
        return value

    @field_validator('voice_hint', mode='before')
    @classmethod
    def _unknown_hint_is_default(cls, value):
        # Case-sensitive; anything but female/male leaves voice choice to the provider
        try:
            return VoiceHint(str(getattr(value, 'value', value)))
        except ValueError:
            return VoiceHint.DEFAULT
