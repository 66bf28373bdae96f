"""
Audio Synthesis

Background music and narration for assembled videos:
- Additive sine music from named patterns
- Narration through a platform speech provider
- Mixing and WAV export
"""

from .audio_models import AudioBuffer, MUSIC_PATTERNS, MusicPattern, NarrationRequest, Voice, VoiceHint
from .mixing import mix_tracks, write_audio
from .music_synthesizer import MusicSynthesizer
from .narration import NarrationSynthesizer, select_voice
from .speech_providers import EspeakSpeechProvider, SpeechProvider

__all__ = [
    'AudioBuffer',
    'MusicPattern',
    'MUSIC_PATTERNS',
    'NarrationRequest',
    'Voice',
    'VoiceHint',
    'MusicSynthesizer',
    'NarrationSynthesizer',
    'SpeechProvider',
    'EspeakSpeechProvider',
    'select_voice',
    'mix_tracks',
    'write_audio',
]
