"""
Tests for narration voice selection and provider error handling.
"""

import asyncio

import numpy as np
import pytest

from vidforge.audio_synthesis import AudioBuffer, NarrationRequest, NarrationSynthesizer, Voice, VoiceHint, select_voice
from vidforge.audio_synthesis.narration import create_speech_provider
from vidforge.audio_synthesis.speech_providers import EspeakSpeechProvider, parse_espeak_voices
from vidforge.errors import InvalidInput, NarrationTimeout, SynthesisError, UnsupportedPlatform
from vidforge.utils.config import AudioConfig, Config, SpeechConfig

VOICES = [
    Voice(id="en-1", name="Daniel"),
    Voice(id="en-2", name="Samantha Female"),
    Voice(id="en-3", name="Alex Male"),
]


class FakeSpeechProvider:
    """In-memory provider recording every speak() call."""

    def __init__(self, voices=VOICES, available=True, error=None, delay=0.0,
                 list_delay=0.0, list_error=None):
        self.voices = list(voices)
        self.available = available
        self.error = error
        self.delay = delay
        self.list_delay = list_delay
        self.list_error = list_error
        self.calls = []

    def is_available(self):
        return self.available

    async def list_voices(self):
        if self.list_delay:
            await asyncio.sleep(self.list_delay)
        if self.list_error is not None:
            raise self.list_error
        return self.voices

    async def speak(self, text, voice, rate, pitch):
        self.calls.append({"text": text, "voice": voice, "rate": rate, "pitch": pitch})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return AudioBuffer(sample_rate=16000, data=np.zeros((1, 1600), dtype=np.float32))


class TestVoiceSelection:
    def test_female_hint(self):
        assert select_voice(VoiceHint.FEMALE, VOICES).id == "en-2"

    def test_male_hint_is_case_sensitive(self):
        # "Samantha Female" contains "male" but not "Male"
        assert select_voice(VoiceHint.MALE, VOICES).id == "en-3"

    def test_no_match_falls_back_to_first_voice(self):
        voices = [Voice(id="a", name="Daniel"), Voice(id="b", name="Karen")]
        assert select_voice(VoiceHint.FEMALE, voices).id == "a"

    def test_no_voices(self):
        assert select_voice(VoiceHint.MALE, []) is None

    def test_default_leaves_choice_to_provider(self):
        assert select_voice(VoiceHint.DEFAULT, VOICES) is None


class TestNarrationSynthesizer:
    def test_speaks_with_fixed_rate_and_pitch(self):
        provider = FakeSpeechProvider()
        synth = NarrationSynthesizer(provider)

        buffer = asyncio.run(synth.synthesize_narration(
            NarrationRequest(text="Once upon a time", voice_hint="female")
        ))

        assert buffer.length == 1600
        assert provider.calls == [{
            "text": "Once upon a time",
            "voice": VOICES[1],
            "rate": 0.9,
            "pitch": 1.0,
        }]

    def test_narrate_shortcut(self):
        provider = FakeSpeechProvider()
        asyncio.run(NarrationSynthesizer(provider).narrate("Hello", "male"))
        assert provider.calls[0]["voice"] == VOICES[2]

    def test_missing_provider(self):
        synth = NarrationSynthesizer(None)
        with pytest.raises(UnsupportedPlatform):
            asyncio.run(synth.narrate("Hello"))

    def test_unavailable_provider(self):
        provider = FakeSpeechProvider(available=False)
        with pytest.raises(UnsupportedPlatform):
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello"))
        assert provider.calls == []

    def test_missing_binary_is_unsupported(self):
        provider = EspeakSpeechProvider(binary="vidforge-no-such-tts-binary")
        assert not provider.is_available()
        with pytest.raises(UnsupportedPlatform):
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello"))

    def test_provider_failure_becomes_synthesis_error(self):
        provider = FakeSpeechProvider(error=RuntimeError("audio device busy"))
        with pytest.raises(SynthesisError) as exc_info:
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello"))
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_timeout(self):
        provider = FakeSpeechProvider(delay=5.0)
        with pytest.raises(NarrationTimeout):
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello", timeout=0.01))

    def test_timeout_from_config(self):
        config = Config(audio=AudioConfig(narration_timeout_seconds=0.01))
        provider = FakeSpeechProvider(delay=5.0)
        with pytest.raises(SynthesisError):
            asyncio.run(NarrationSynthesizer(provider, config).narrate("Hello"))

    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_blank_text(self, text):
        with pytest.raises(InvalidInput):
            asyncio.run(NarrationSynthesizer(FakeSpeechProvider()).narrate(text))

    def test_unknown_hint_means_default(self):
        request = NarrationRequest(text="Hi", voice_hint="robot")
        assert request.voice_hint == VoiceHint.DEFAULT

    @pytest.mark.parametrize("hint", ["Female", "MALE"])
    def test_hints_are_case_sensitive(self, hint):
        provider = FakeSpeechProvider()
        asyncio.run(NarrationSynthesizer(provider).narrate("Hi", hint))

        assert NarrationRequest(text="Hi", voice_hint=hint).voice_hint == VoiceHint.DEFAULT
        assert provider.calls[0]["voice"] is None

    def test_voice_listing_failure(self):
        provider = FakeSpeechProvider(list_error=OSError("voices unavailable"))
        with pytest.raises(SynthesisError, match="Could not list voices"):
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello", "female"))
        assert provider.calls == []

    def test_voice_listing_shares_the_deadline(self):
        provider = FakeSpeechProvider(list_delay=5.0)
        with pytest.raises(NarrationTimeout):
            asyncio.run(NarrationSynthesizer(provider).narrate("Hello", timeout=0.05))
        assert provider.calls == []


def test_create_speech_provider_from_config():
    assert isinstance(create_speech_provider(Config()), EspeakSpeechProvider)
    assert create_speech_provider(Config(speech=SpeechConfig(engine="none"))) is None


def test_parse_espeak_voices():
    listing = (
        "Pty Language       Age/Gender VoiceName          File                 Other Languages\n"
        " 5  af              --/M      Afrikaans          gmw/af\n"
        " 2  en-us           --/F      English_(America)  gmw/en-US            (en 3)\n"
    )
    voices = parse_espeak_voices(listing)

    assert [v.id for v in voices] == ["af", "en-us"]
    assert voices[0].name == "Afrikaans"
    assert voices[0].gender == "male"
    assert voices[1].gender == "female"
