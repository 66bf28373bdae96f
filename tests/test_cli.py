"""
Tests for the command line entry point.
"""

import soundfile as sf

from vidforge.cli import main
from vidforge.media_sources import StaticImageProvider

CONFIG_TEMPLATE = """
video:
  width: 64
  height: 36
audio:
  sample_rate: 8000
speech:
  engine: none
paths:
  logs: {logs}
logging:
  level: WARNING
  file: {logs}/vidforge.log
"""


def test_renders_frame_and_soundtrack(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(CONFIG_TEMPLATE.format(logs=tmp_path / "logs"), encoding="utf-8")
    output_dir = tmp_path / "out"

    main([
        "--config", str(config_path),
        "--effect", "color_grade:cool",
        "--effect", "vignette:0.5",
        "--style", "cinematic",
        "--duration", "0.5",
        "--narration", "Speech is disabled in this config",
        "--output", str(output_dir),
    ])

    frame = StaticImageProvider(output_dir / "preview_frame.png").get_image(64, 36)
    assert frame.shape == (36, 64, 4)

    data, sample_rate = sf.read(str(output_dir / "soundtrack.wav"), always_2d=True)
    assert sample_rate == 8000
    assert data.shape == (4000, 2)
