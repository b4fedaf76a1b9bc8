from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from rapiddraft.constants import (
    DEFAULT_DEFLECTION,
    DEFAULT_HATCH_ANGLE,
    DEFAULT_HATCH_SPACING,
    DEFAULT_SCALE,
)


class HatchPattern(Enum):
    """
    Section fill patterns.

    Stroke patterns are generated as explicit hatch segments; the SVG class and
    DXF pattern name travel with the result so a CAD package can substitute its
    own fill. ``SOLID`` and ``NONE`` generate no strokes.
    """

    SOLID = "solid"
    LINES_45 = "lines45"
    LINES_135 = "lines135"
    CROSS_HATCH = "crosshatch"
    DOTS = "dots"
    CONCRETE = "concrete"
    STEEL = "steel"
    WOOD = "wood"
    EARTH = "earth"
    BRICK = "brick"
    INSULATION = "insulation"
    NONE = "none"

    def svg_pattern_id(self) -> str:
        return "none" if self is HatchPattern.NONE else f"hatch-{self.value}"

    def dxf_pattern_name(self) -> str:
        return _DXF_PATTERN_NAMES[self]

    def stroke_offsets(self) -> Tuple[float, ...]:
        """Stroke directions in degrees, relative to the configured hatch angle."""
        if self in (HatchPattern.SOLID, HatchPattern.NONE):
            return ()
        if self is HatchPattern.LINES_135:
            return (90.0,)
        if self is HatchPattern.CROSS_HATCH:
            return (0.0, 90.0)
        return (0.0,)


_DXF_PATTERN_NAMES = {
    HatchPattern.SOLID: "SOLID",
    HatchPattern.LINES_45: "ANSI31",
    HatchPattern.LINES_135: "ANSI32",
    HatchPattern.CROSS_HATCH: "ANSI37",
    HatchPattern.DOTS: "DOTS",
    HatchPattern.CONCRETE: "AR-CONC",
    HatchPattern.STEEL: "STEEL",
    HatchPattern.WOOD: "AR-HBONE",
    HatchPattern.EARTH: "EARTH",
    HatchPattern.BRICK: "AR-BRSTD",
    HatchPattern.INSULATION: "INSUL",
    HatchPattern.NONE: "",
}


@dataclass(frozen=True)
class HatchConfig:
    """
    Section hatch: stroke angle in degrees from +X, stroke spacing and pattern.

    Spacing must be positive; a config with ``spacing <= 0`` is rejected here,
    so the hatcher's "no strokes for non-positive spacing" rule only applies to
    direct :func:`rapiddraft.hatching.generate_hatch` calls. Use
    ``HatchPattern.NONE`` (or pass ``hatch=None`` to the section extractor) for
    an unhatched section.
    """

    angle_deg: float = DEFAULT_HATCH_ANGLE
    spacing: float = DEFAULT_HATCH_SPACING
    pattern: HatchPattern = HatchPattern.LINES_45

    def __post_init__(self):
        if self.spacing <= 0:
            raise ValueError(f"Hatch spacing must be positive, got {self.spacing}")
        if not isinstance(self.pattern, HatchPattern):
            object.__setattr__(self, "pattern", HatchPattern(self.pattern))

    def stroke_angles(self) -> Tuple[float, ...]:
        """One angle per stroke pass, in degrees."""
        return tuple(self.angle_deg + offset for offset in self.pattern.stroke_offsets())

    def to_json(self) -> Dict[str, Any]:
        return {
            "angle_deg": self.angle_deg,
            "spacing": self.spacing,
            "pattern": self.pattern.value,
        }

    @staticmethod
    def from_json(json_data):
        return HatchConfig(
            angle_deg=json_data.get("angle_deg", DEFAULT_HATCH_ANGLE),
            spacing=json_data.get("spacing", DEFAULT_HATCH_SPACING),
            pattern=json_data.get("pattern", HatchPattern.LINES_45.value),
        )


@dataclass(frozen=True)
class DrawingConfig:
    """
    Defaults used by :class:`rapiddraft.app.App` for every projection and
    section call.

    Args:
        deflection: Chord tolerance for tessellating free-form curves
        scale: Uniform factor applied to projected geometry; negative values
            turn the drawing half way round
        hatch_angle_deg: Default hatch angle in degrees
        hatch_spacing: Default hatch spacing
        hatch_pattern: Default hatch pattern
    """

    deflection: float = DEFAULT_DEFLECTION
    scale: float = DEFAULT_SCALE
    hatch_angle_deg: float = DEFAULT_HATCH_ANGLE
    hatch_spacing: float = DEFAULT_HATCH_SPACING
    hatch_pattern: HatchPattern = HatchPattern.LINES_45

    def __post_init__(self):
        if self.deflection <= 0:
            raise ValueError(f"Deflection must be positive, got {self.deflection}")
        if self.scale == 0:
            raise ValueError("Scale must be non-zero")
        if self.hatch_spacing <= 0:
            raise ValueError(
                f"Hatch spacing must be positive, got {self.hatch_spacing}"
            )
        if not isinstance(self.hatch_pattern, HatchPattern):
            object.__setattr__(self, "hatch_pattern", HatchPattern(self.hatch_pattern))

    @property
    def hatch(self) -> HatchConfig:
        return HatchConfig(self.hatch_angle_deg, self.hatch_spacing, self.hatch_pattern)

    def to_json(self) -> Dict[str, Any]:
        return {
            "deflection": self.deflection,
            "scale": self.scale,
            "hatch_angle_deg": self.hatch_angle_deg,
            "hatch_spacing": self.hatch_spacing,
            "hatch_pattern": self.hatch_pattern.value,
        }

    @staticmethod
    def from_json(json_data):
        return DrawingConfig(
            deflection=json_data.get("deflection", DEFAULT_DEFLECTION),
            scale=json_data.get("scale", DEFAULT_SCALE),
            hatch_angle_deg=json_data.get("hatch_angle_deg", DEFAULT_HATCH_ANGLE),
            hatch_spacing=json_data.get("hatch_spacing", DEFAULT_HATCH_SPACING),
            hatch_pattern=json_data.get("hatch_pattern", HatchPattern.LINES_45.value),
        )
