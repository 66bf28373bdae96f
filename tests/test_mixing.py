"""
Tests for soundtrack mixing and export.
"""

import numpy as np
import pytest
import soundfile as sf

from vidforge.audio_synthesis import AudioBuffer, MusicSynthesizer, mix_tracks, write_audio
from vidforge.audio_synthesis.mixing import match_channels, resample_buffer


def _constant(value, channels, length, sample_rate):
    return AudioBuffer(sample_rate=sample_rate, data=np.full((channels, length), value, dtype=np.float32))


def test_music_only_is_scaled_copy():
    music = MusicSynthesizer(sample_rate=8000).synthesize_music("ambient", 0.5)
    mixed = mix_tracks(music, music_volume=0.5)

    assert mixed is not music
    assert mixed.sample_rate == 8000
    assert np.allclose(mixed.data, music.data * 0.5)


def test_narration_padded_and_upmixed():
    music = _constant(0.1, 2, 100, 1000)
    narration = _constant(0.5, 1, 40, 1000)

    mixed = mix_tracks(music, narration, music_volume=1.0, narration_volume=0.5)

    assert mixed.data.shape == (2, 100)
    assert mixed.data[0, 0] == pytest.approx(0.35)
    assert mixed.data[1, 39] == pytest.approx(0.35)
    assert mixed.data[0, 40] == pytest.approx(0.1)


def test_longer_narration_extends_mix():
    music = _constant(0.1, 2, 50, 1000)
    narration = _constant(0.2, 2, 80, 1000)
    mixed = mix_tracks(music, narration, music_volume=1.0, narration_volume=1.0)

    assert mixed.length == 80
    assert mixed.data[0, 79] == pytest.approx(0.2)


def test_narration_resampled_to_music_rate():
    music = _constant(0.0, 2, 44100, 44100)
    narration = _constant(0.0, 1, 22050, 22050)

    mixed = mix_tracks(music, narration)
    assert mixed.sample_rate == 44100
    assert mixed.length == 44100


def test_resample_same_rate_is_noop():
    buffer = _constant(0.3, 1, 10, 8000)
    assert resample_buffer(buffer, 8000) is buffer


def test_match_channels_downmix():
    data = np.array([[1.0, 1.0], [0.0, 0.5], [0.5, 0.0]])
    result = match_channels(data, 2)
    assert result.shape == (2, 2)
    assert np.allclose(result[0], [0.5, 0.5])


def test_write_audio(tmp_path):
    music = MusicSynthesizer(sample_rate=8000).synthesize_music("upbeat", 0.25)
    path = write_audio(music, tmp_path / "out" / "music.wav")

    data, sample_rate = sf.read(str(path), always_2d=True)
    assert sample_rate == 8000
    assert data.shape == (2000, 2)
