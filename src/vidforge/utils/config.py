"""Configuration management for the media core"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class VideoConfig(BaseModel):
    """Encoder settings, passed through to the encoder unchanged"""
    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = Field(default=30, gt=0)
    bitrate: int = 5000000
    format: str = "webm"
    codec: str = "vp9"


class EffectsConfig(BaseModel):
    # Each entry is a dict or short string understood by parse_effect_chain
    chain: List[Any] = []
    seed: Optional[int] = None
    max_workers: int = Field(default=4, ge=1, le=32)


class AudioConfig(BaseModel):
    sample_rate: int = Field(default=44100, gt=0)
    channels: int = Field(default=2, ge=1)
    music_style: str = "ambient"
    music_volume: float = Field(default=0.15, ge=0.0)
    narration_volume: float = Field(default=1.0, ge=0.0)
    narration_timeout_seconds: Optional[float] = None


class SpeechConfig(BaseModel):
    engine: str = "espeak"
    voice_hint: str = "default"


class PathsConfig(BaseModel):
    """Storage paths configuration"""
    output: str = "./output"
    temp: str = "./temp"
    logs: str = "./logs"


class Config(BaseModel):
    video: VideoConfig = Field(default_factory=VideoConfig)
    effects: EffectsConfig = Field(default_factory=EffectsConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: Dict[str, Any] = {}

    @property
    def frame_size(self) -> tuple:
        """(width, height) of rendered frames"""
        return self.video.width, self.video.height

    @classmethod
    def load(cls, config_path: str) -> "Config":
        """Load configuration from YAML file"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def save(self, config_path: str):
        """Save configuration to YAML file"""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False)
