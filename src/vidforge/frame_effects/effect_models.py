"""
Frame Effect Data Models

Pydantic models describing pixel transforms applied to a frame.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import InvalidInput


class EffectType(str, Enum):
    """Types of frame effects"""
    MOTION_BLUR = "motion_blur"
    FILM_GRAIN = "film_grain"
    VIGNETTE = "vignette"
    COLOR_GRADE = "color_grade"


class ColorGradePreset(str, Enum):
    """Named color grading looks"""
    WARM = "warm"
    COOL = "cool"
    VINTAGE = "vintage"
    CYBERPUNK = "cyberpunk"


# Per-channel (R, G, B) multipliers
COLOR_GRADE_PRESETS: Dict[ColorGradePreset, Tuple[float, float, float]] = {
    ColorGradePreset.WARM: (1.1, 1.0, 0.9),
    ColorGradePreset.COOL: (0.9, 1.0, 1.1),
    ColorGradePreset.VINTAGE: (1.2, 1.0, 0.8),
    ColorGradePreset.CYBERPUNK: (1.0, 0.9, 1.3),
}

COLOR_GRADE_PRESET_NAMES = frozenset(p.value for p in ColorGradePreset)


class MotionBlur(BaseModel):
    """Per-pixel attenuation standing in for a directional blur"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["motion_blur"] = "motion_blur"
    amount: float = Field(default=0.3, ge=0.0, le=1.0)


class FilmGrain(BaseModel):
    """Monochrome noise, one sample per pixel shared by R, G and B"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["film_grain"] = "film_grain"
    intensity: float = Field(default=0.1, ge=0.0, le=1.0)


class Vignette(BaseModel):
    """Black radial gradient composited over the frame"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["vignette"] = "vignette"
    intensity: float = Field(default=0.5, ge=0.0, le=1.0)


class ColorGrade(BaseModel):
    """Per-channel gain from a named preset; unknown names grade as warm"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["color_grade"] = "color_grade"
    preset: str = ColorGradePreset.WARM.value

    @property
    def multipliers(self) -> Tuple[float, float, float]:
        return resolve_color_grade(self.preset)


EffectSpec = Annotated[
    Union[MotionBlur, FilmGrain, Vignette, ColorGrade],
    Field(discriminator="kind"),
]

EFFECT_CLASSES = (MotionBlur, FilmGrain, Vignette, ColorGrade)

_effect_adapter = TypeAdapter(EffectSpec)


def _preset_key(preset: Any) -> str:
    return str(getattr(preset, "value", preset))


def is_known_color_grade(preset: Any) -> bool:
    return _preset_key(preset) in COLOR_GRADE_PRESET_NAMES


def resolve_color_grade(preset: Any) -> Tuple[float, float, float]:
    """Multipliers for a preset name, falling back to warm"""
    if not is_known_color_grade(preset):
        return COLOR_GRADE_PRESETS[ColorGradePreset.WARM]
    return COLOR_GRADE_PRESETS[ColorGradePreset(_preset_key(preset))]


def parse_effect(data: Any) -> EffectSpec:
    """
    Build an effect from a model, a dict or a short string.

    Strings look like ``"vignette:0.4"``, ``"color_grade:cool"`` or just
    ``"film_grain"`` (defaults apply). Dashes and case are ignored in the
    effect name.

    Raises:
        InvalidInput: when the input does not describe a valid effect
    """
    if isinstance(data, EFFECT_CLASSES):
        return data

    if isinstance(data, str):
        data = _parse_effect_string(data)

    if not isinstance(data, dict):
        raise InvalidInput(f"Cannot build an effect from {type(data).__name__}")

    try:
        return _effect_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidInput(f"Invalid effect {data!r}: {e}") from e


def parse_effect_chain(items: Iterable[Any]) -> List[EffectSpec]:
    """Parse an ordered list of effects"""
    if items is None:
        return []
    return [parse_effect(item) for item in items]


def _parse_effect_string(text: str) -> Dict[str, Any]:
    name, _, param = text.strip().partition(":")
    kind = name.strip().lower().replace("-", "_")
    param = param.strip()

    try:
        effect_type = EffectType(kind)
    except ValueError:
        raise InvalidInput(f"Unknown effect: {name!r}") from None

    if not param:
        return {"kind": effect_type.value}

    if effect_type == EffectType.COLOR_GRADE:
        return {"kind": effect_type.value, "preset": param}

    try:
        value = float(param)
    except ValueError:
        raise InvalidInput(f"Effect {kind} expects a number, got {param!r}") from None

    field = "amount" if effect_type == EffectType.MOTION_BLUR else "intensity"
    return {"kind": effect_type.value, field: value}
