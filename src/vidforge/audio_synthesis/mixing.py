"""
Soundtrack mixing

Combines the music bed with narration before handing the result to the
encoder. No hard clamp is applied; the gains keep the sum in range for
the bundled music patterns.
"""

import logging
from pathlib import Path
from typing import Optional

import librosa
import numpy as np
import soundfile as sf

from .audio_models import AudioBuffer

logger = logging.getLogger(__name__)


def match_channels(data: np.ndarray, channels: int) -> np.ndarray:
    """Up- or down-mix (channels, samples) data to ``channels``"""
    current = data.shape[0]
    if current == channels:
        return data
    if current == 1:
        return np.repeat(data, channels, axis=0)

    mono = data.mean(axis=0, keepdims=True)
    return np.repeat(mono, channels, axis=0)


def resample_buffer(buffer: AudioBuffer, target_sr: int) -> AudioBuffer:
    """Resample every channel to ``target_sr``"""
    if buffer.sample_rate == target_sr:
        return buffer

    data = librosa.resample(buffer.data, orig_sr=buffer.sample_rate, target_sr=target_sr, axis=-1)
    return AudioBuffer(sample_rate=target_sr, data=data.astype(np.float32))


def mix_tracks(music: AudioBuffer,
               narration: Optional[AudioBuffer] = None,
               music_volume: float = 0.15,
               narration_volume: float = 1.0) -> AudioBuffer:
    """
    Sum music and narration into a new buffer at the music's sample rate.

    The result is as long as the longer of the two tracks and has the
    music's channel count.
    """
    channels = music.number_of_channels
    tracks = [(music.data, music_volume)]

    if narration is not None:
        narration = resample_buffer(narration, music.sample_rate)
        tracks.append((match_channels(narration.data, channels), narration_volume))

    length = max(data.shape[1] for data, _ in tracks)
    mixed = np.zeros((channels, length), dtype=np.float64)
    for data, gain in tracks:
        mixed[:, :data.shape[1]] += data * gain

    logger.debug(f"Mixed {len(tracks)} track(s) into {length / music.sample_rate:.2f}s")
    return AudioBuffer(sample_rate=music.sample_rate, data=mixed.astype(np.float32))


def write_audio(buffer: AudioBuffer, path) -> Path:
    """Write a buffer to a WAV file"""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # soundfile expects (frames, channels)
    sf.write(str(output_path), buffer.data.T, buffer.sample_rate)
    logger.info(f"Audio saved: {output_path}")
    return output_path
