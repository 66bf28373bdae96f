"""Narration through an external speech provider"""

import asyncio
import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from ..errors import InvalidInput, NarrationTimeout, SynthesisError, UnsupportedPlatform, VidForgeError
from ..utils.logger import LoggerMixin
from .audio_models import AudioBuffer, NarrationRequest, Voice, VoiceHint
from .speech_providers import EspeakSpeechProvider, SpeechProvider

logger = logging.getLogger(__name__)

NARRATION_RATE = 0.9
NARRATION_PITCH = 1.0

# Case-sensitive substring searched in voice names
_VOICE_NAME_MARKERS = {
    VoiceHint.FEMALE: "Female",
    VoiceHint.MALE: "Male",
}


def select_voice(voice_hint: VoiceHint, voices: Sequence[Voice]) -> Optional[Voice]:
    """
    Pick a voice for a hint.

    female/male take the first voice whose name contains "Female"/"Male",
    else the first voice on offer. default returns None so the provider
    speaks with its own default.
    """
    marker = _VOICE_NAME_MARKERS.get(voice_hint)
    if marker is None:
        return None

    for voice in voices:
        if marker in voice.name:
            return voice
    return voices[0] if voices else None


def create_speech_provider(config=None) -> Optional[SpeechProvider]:
    """Provider named by ``speech.engine`` in the config"""
    speech_config = getattr(config, 'speech', None)
    engine = str(getattr(speech_config, 'engine', 'espeak')).lower()
    temp_dir = getattr(getattr(config, 'paths', None), 'temp', None)

    if engine in {"espeak", "espeak-ng", "espeak_ng"}:
        return EspeakSpeechProvider(temp_dir=temp_dir)
    if engine in {"none", "off", "disabled"}:
        return None

    logger.warning(f"Unknown speech engine {engine!r}, narration disabled")
    return None


class NarrationSynthesizer(LoggerMixin):
    """Turns NarrationRequests into AudioBuffers via a SpeechProvider"""

    def __init__(self, provider: Optional[SpeechProvider], config=None):
        self.provider = provider
        self.config = config
        audio_config = getattr(config, 'audio', None)
        self.default_timeout = getattr(audio_config, 'narration_timeout_seconds', None)

    @classmethod
    def from_config(cls, config) -> "NarrationSynthesizer":
        return cls(create_speech_provider(config), config)

    async def synthesize_narration(self, request: Any, timeout: Optional[float] = None) -> AudioBuffer:
        """
        Speak ``request.text`` and return the recorded audio.

        Args:
            request: NarrationRequest (or a dict with the same fields)
            timeout: Seconds to wait for the provider; defaults to
                ``audio.narration_timeout_seconds``, None waits forever

        Raises:
            InvalidInput: malformed request
            UnsupportedPlatform: no usable speech provider
            NarrationTimeout: provider did not finish in time
            SynthesisError: provider failed while speaking
        """
        request = self._validate_request(request)

        if self.provider is None or not self.provider.is_available():
            raise UnsupportedPlatform("Speech synthesis is not supported in this environment")

        # One deadline covers voice listing and speaking
        timeout = timeout if timeout is not None else self.default_timeout
        try:
            if timeout is not None:
                return await asyncio.wait_for(self._speak(request), timeout)
            return await self._speak(request)
        except asyncio.TimeoutError as e:
            raise NarrationTimeout(f"Narration did not finish within {timeout}s") from e
        except VidForgeError:
            raise
        except Exception as e:
            self.logger.error(f"Narration failed: {e}")
            raise SynthesisError(f"Speech provider failed: {e}") from e

    async def _speak(self, request: NarrationRequest) -> AudioBuffer:
        try:
            voices = await self.provider.list_voices()
        except Exception as e:
            raise SynthesisError(f"Could not list voices: {e}") from e

        voice = select_voice(request.voice_hint, voices)
        self.logger.info(
            f"Narrating {len(request.text)} characters with voice "
            f"{voice.name if voice else 'provider default'}"
        )
        return await self.provider.speak(request.text, voice, NARRATION_RATE, NARRATION_PITCH)

    async def narrate(self, text: str, voice_hint: Any = VoiceHint.DEFAULT,
                      timeout: Optional[float] = None) -> AudioBuffer:
        """Shortcut building the NarrationRequest from plain arguments"""
        return await self.synthesize_narration({"text": text, "voice_hint": voice_hint}, timeout)

    def _validate_request(self, request: Any) -> NarrationRequest:
        if isinstance(request, NarrationRequest):
            return request
        try:
            return NarrationRequest.model_validate(request)
        except ValidationError as e:
            raise InvalidInput(f"Invalid narration request: {e}") from e
