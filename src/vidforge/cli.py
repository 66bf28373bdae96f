#!/usr/bin/env python3
"""
VidForge - command line entry point

Renders a graded preview frame and the mixed soundtrack for a short video.
"""

import asyncio
import sys
import time
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .audio_synthesis import MusicSynthesizer, NarrationSynthesizer, mix_tracks, write_audio
from .errors import UnsupportedPlatform, VidForgeError
from .frame_effects import FrameEffectEngine, parse_effect_chain
from .media_sources import PlaceholderImageProvider, StaticImageProvider, save_frame
from .utils.config import Config
from .utils.formatting import format_duration, format_file_size
from .utils.logger import setup_logging

console = Console()


class VidForgeSystem:
    """Wires config, effect engine and audio synthesizers together"""

    def __init__(self, config_path: Optional[str] = None):
        if config_path and Path(config_path).exists():
            self.config = Config.load(config_path)
        else:
            if config_path:
                console.print(f"[yellow]⚠[/yellow] Config {config_path} not found, using defaults")
            self.config = Config()

        self.logger = setup_logging(self.config)
        self.effects = FrameEffectEngine(self.config)
        self.music = MusicSynthesizer(self.config)
        self.narration = NarrationSynthesizer.from_config(self.config)

    def render_preview_frame(self, image_path: Optional[str], effects: Optional[List[str]], output_dir: Path) -> Path:
        """Apply the effect chain to one frame and save it as PNG"""
        width, height = self.config.frame_size
        provider = StaticImageProvider(image_path) if image_path else PlaceholderImageProvider()

        frame = provider.get_image(width, height)
        chain = parse_effect_chain(effects) if effects else self.effects.default_chain

        start = time.time()
        self.effects.apply_chain(frame, chain)
        console.print(
            f"[green]✓[/green] Applied {len(chain)} effect(s) to {width}x{height} frame "
            f"in {time.time() - start:.2f}s"
        )

        return save_frame(frame, output_dir / "preview_frame.png")

    async def render_soundtrack(self, style: Optional[str], duration: float,
                                narration_text: Optional[str], voice_hint: Optional[str],
                                output_dir: Path) -> Path:
        """Synthesize music, add narration when possible, and save the mix"""
        audio_config = self.config.audio
        music = self.music.synthesize_music(style or audio_config.music_style, duration)

        narration = None
        if narration_text:
            try:
                narration = await self.narration.narrate(
                    narration_text, voice_hint or self.config.speech.voice_hint
                )
                console.print(f"[green]✓[/green] Narration: {format_duration(narration.duration)}")
            except UnsupportedPlatform as e:
                console.print(f"[yellow]⚠[/yellow] {e} - continuing with music only")

        mixed = mix_tracks(music, narration, audio_config.music_volume, audio_config.narration_volume)
        return write_audio(mixed, output_dir / "soundtrack.wav")


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="VidForge media core")
    parser.add_argument("--config", type=str, default="configs/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--image", type=str, help="Source image (placeholder gradient if omitted)")
    parser.add_argument("--effect", dest="effects", action="append",
                        help="Effect such as vignette:0.5 or color_grade:cool (repeatable, applied in order)")
    parser.add_argument("--style", type=str, help="Music style: ambient, upbeat or cinematic")
    parser.add_argument("--duration", type=float, default=10.0, help="Soundtrack length in seconds")
    parser.add_argument("--narration", type=str, help="Text to narrate over the music")
    parser.add_argument("--voice", choices=["default", "female", "male"], help="Narrator voice")
    parser.add_argument("--output", type=str, help="Output directory")

    args = parser.parse_args(argv)

    try:
        system = VidForgeSystem(args.config)
        output_dir = Path(args.output or system.config.paths.output)

        frame_path = system.render_preview_frame(args.image, args.effects, output_dir)
        console.print(f"[green]✓[/green] Frame: {frame_path} ({format_file_size(frame_path.stat().st_size)})")

        audio_path = asyncio.run(system.render_soundtrack(
            args.style, args.duration, args.narration, args.voice, output_dir
        ))
        console.print(
            f"[green]✓[/green] Soundtrack: {audio_path} "
            f"({format_file_size(audio_path.stat().st_size)}, {format_duration(args.duration)})"
        )

    except KeyboardInterrupt:
        console.print("\n[yellow]⏹️[/yellow] Stopped by user")
    except (VidForgeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]💥[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
