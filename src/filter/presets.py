"""
Filter Presets and Slider Mapping

Translates a named preset or a continuous slider position into concrete
One Euro Filter cutoff parameters. Everything here is pure: no state, no
filter instance required, so a settings surface can preview values freely.
"""

from enum import Enum
from typing import NamedTuple


class CutoffParameters(NamedTuple):
    """The tunable part of the filter configuration (frequency excluded)."""
    min_cutoff: float
    beta: float
    derivative_cutoff: float


class Preset(Enum):
    """Named tuning presets, from most smoothing to least."""
    FINE_CONTROL = "fine_control"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"

    @classmethod
    def from_name(cls, name: str) -> 'Preset':
        """
        Resolve a config or CLI string to a Preset.

        Accepts snake_case ("fine_control") and camelCase ("fineControl"),
        case-insensitive.

        Raises:
            ValueError: if the name matches no preset
        """
        valid = ", ".join(p.value for p in cls)
        if not isinstance(name, str):
            raise ValueError(f"Unknown preset: {name!r} (expected one of: {valid})")

        key = name.strip().replace("_", "").replace("-", "").lower()
        for preset in cls:
            if preset.value.replace("_", "") == key:
                return preset
        raise ValueError(f"Unknown preset: {name!r} (expected one of: {valid})")


PRESET_TABLE = {
    Preset.FINE_CONTROL: CutoffParameters(min_cutoff=1.0, beta=0.1, derivative_cutoff=1.0),
    Preset.BALANCED:     CutoffParameters(min_cutoff=2.0, beta=0.3, derivative_cutoff=2.0),
    Preset.AGGRESSIVE:   CutoffParameters(min_cutoff=3.0, beta=0.5, derivative_cutoff=3.0),
}

# Slider endpoints: 0.0 == FINE_CONTROL, 1.0 == AGGRESSIVE
SLIDER_MIN = 0.0
SLIDER_MAX = 1.0


def preset_parameters(preset: Preset) -> CutoffParameters:
    """Look up the fixed cutoff parameters for a preset."""
    return PRESET_TABLE[preset]


def parameters_for_slider(position: float) -> CutoffParameters:
    """
    Map a slider position to cutoff parameters.

    Positions outside [0, 1] are clamped, not rejected.
    """
    p = max(SLIDER_MIN, min(SLIDER_MAX, position))
    return CutoffParameters(
        min_cutoff=1.0 + p * 2.0,
        beta=0.1 + p * 0.4,
        derivative_cutoff=1.0 + p * 2.0,
    )
