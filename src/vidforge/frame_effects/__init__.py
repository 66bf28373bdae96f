"""
Frame Effects

Pixel-space post-processing applied to each frame before encoding:
- Motion blur, film grain, vignette, color grading
- Effect chains applied left to right
- Parallel processing across independent frames
"""

from .effect_models import (
    ColorGrade,
    ColorGradePreset,
    EffectSpec,
    EffectType,
    FilmGrain,
    MotionBlur,
    Vignette,
    parse_effect,
    parse_effect_chain,
)
from .effects_engine import FrameEffectEngine, validate_pixel_buffer

__all__ = [
    'FrameEffectEngine',
    'EffectSpec',
    'EffectType',
    'ColorGradePreset',
    'MotionBlur',
    'FilmGrain',
    'Vignette',
    'ColorGrade',
    'parse_effect',
    'parse_effect_chain',
    'validate_pixel_buffer',
]
