"""Speech providers used for narration"""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import soundfile as sf

from .audio_models import AudioBuffer, Voice

logger = logging.getLogger(__name__)


@runtime_checkable
class SpeechProvider(Protocol):
    """Platform text-to-speech engine"""

    def is_available(self) -> bool:
        ...

    async def list_voices(self) -> Sequence[Voice]:
        ...

    async def speak(self, text: str, voice: Optional[Voice], rate: float, pitch: float) -> AudioBuffer:
        ...


class EspeakSpeechProvider:
    """
    Speech through the espeak / espeak-ng command line tool.

    ``rate`` scales espeak's default speed (175 words per minute) and
    ``pitch`` scales its default pitch (50 on a 0-99 scale).
    """

    BASE_WORDS_PER_MINUTE = 175
    BASE_PITCH = 50
    VOICE_LIST_TIMEOUT = 10

    def __init__(self, binary: Optional[str] = None, temp_dir: Optional[str] = None):
        self.binary = binary or shutil.which("espeak-ng") or shutil.which("espeak")
        self.temp_dir = temp_dir
        self._voices: Optional[List[Voice]] = None

    def is_available(self) -> bool:
        return bool(self.binary) and shutil.which(self.binary) is not None

    async def list_voices(self) -> List[Voice]:
        if self._voices is None:
            returncode, stdout, stderr = await asyncio.wait_for(
                self._run([self.binary, "--voices"]), self.VOICE_LIST_TIMEOUT
            )
            if returncode != 0:
                raise RuntimeError(f"espeak --voices failed: {stderr.decode(errors='replace')}")
            self._voices = parse_espeak_voices(stdout.decode(errors="replace"))
            logger.debug(f"espeak reports {len(self._voices)} voices")
        return self._voices

    async def speak(self, text: str, voice: Optional[Voice], rate: float, pitch: float) -> AudioBuffer:
        with tempfile.TemporaryDirectory(dir=self.temp_dir) as tmp:
            output_file = Path(tmp) / "narration.wav"

            cmd = [
                self.binary,
                "-s", str(int(round(self.BASE_WORDS_PER_MINUTE * rate))),
                "-p", str(max(0, min(99, int(round(self.BASE_PITCH * pitch))))),
                "-w", str(output_file),
                "--stdin",
            ]
            if voice is not None:
                cmd[1:1] = ["-v", voice.id]

            returncode, _, stderr = await self._run(cmd, text.encode("utf-8"))

            if returncode != 0:
                raise RuntimeError(f"espeak failed: {stderr.decode(errors='replace')}")
            if not output_file.exists():
                raise RuntimeError("espeak did not write an audio file")

            data, sample_rate = sf.read(str(output_file), dtype="float32", always_2d=True)

        # soundfile returns (frames, channels)
        return AudioBuffer(sample_rate=sample_rate, data=data.T.copy())

    async def _run(self, cmd: List[str], stdin: bytes = b"") -> Tuple[int, bytes, bytes]:
        """Run espeak to completion; a cancelled call kills and reaps the child"""
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )

        try:
            stdout, stderr = await process.communicate(stdin)
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise

        return process.returncode, stdout, stderr


def parse_espeak_voices(listing: str) -> List[Voice]:
    """
    Parse ``espeak --voices`` output.

    Columns: Pty Language Age/Gender VoiceName File Other-Languages
    """
    genders = {"M": "male", "F": "female"}
    voices = []

    for line in listing.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 4:
            continue
        language, age_gender, name = parts[1], parts[2], parts[3]
        voices.append(Voice(
            id=language,
            name=name,
            languages=[language],
            gender=genders.get(age_gender.split("/")[-1].upper()),
        ))

    return voices
