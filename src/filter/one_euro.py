"""
One Euro Filter - 2D pointer smoothing

Smooths a noisy (x, y) pointer stream while keeping lag low. Each call to
update() takes one raw sample and returns one filtered sample.

Notes on this variant:
    - The position cutoff is static (min_cutoff). beta is stored with the
      parameters and follows every preset/slider change, but update() does
      not read it.
    - dt is measured against last_time, which starts at 0.0. A first sample
      with a timestamp near 0 is therefore heavily attenuated.

Reference: Casiez et al. "1€ Filter: A Simple Speed-based Low-pass
Filter for Noisy Input in Interactive Systems" (CHI 2012)
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Tuple

from src.filter.presets import (
    CutoffParameters,
    Preset,
    parameters_for_slider,
    preset_parameters,
)

logger = logging.getLogger(__name__)

# Keeps compute_alpha finite when dt == 0
ALPHA_EPSILON = 1e-10

DEFAULT_FREQUENCY_HZ = 60.0


@dataclass(frozen=True)
class FilterParameters:
    """
    Filter configuration.

    Units:
        frequency: Hz (expected sample rate, used to normalize dt)
        min_cutoff, derivative_cutoff: Hz
        beta: dimensionless speed coefficient

    All values must be > 0. They are not validated.
    """

    frequency: float
    min_cutoff: float
    beta: float
    derivative_cutoff: float

    def with_cutoffs(self, cutoffs: CutoffParameters) -> 'FilterParameters':
        """Return a copy with new cutoffs and the same frequency."""
        return replace(
            self,
            min_cutoff=cutoffs.min_cutoff,
            beta=cutoffs.beta,
            derivative_cutoff=cutoffs.derivative_cutoff,
        )


@dataclass
class FilterState:
    """Running state: last filtered position, velocity estimate and timestamp."""

    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    last_time: float = 0.0


def compute_alpha(dt: float, cutoff: float) -> float:
    """
    Smoothing factor for a (normalized) time step and cutoff frequency.

    dt -> 0 gives alpha -> 0 (output holds prior state),
    dt -> inf gives alpha -> 1 (output follows raw input).
    """
    te = 1.0 / (cutoff * 2.0 * math.pi)
    return 1.0 / (1.0 + te / (dt + ALPHA_EPSILON))


class OneEuroFilter:
    """
    Stateful 2D One Euro Filter.

    Not thread-safe: update() mutates internal state without locking. If
    one instance is shared between threads the caller must serialize all
    calls. Samples must arrive in the order time is meant to flow; out of
    order timestamps are clamped to dt = 0, not reordered.
    """

    def __init__(self, parameters: FilterParameters):
        self._parameters = parameters
        self._state = FilterState()

    @property
    def parameters(self) -> FilterParameters:
        return self._parameters

    @property
    def state(self) -> FilterState:
        """Snapshot of the running state (a copy)."""
        return replace(self._state)

    def update(self, x: float, y: float, timestamp: float) -> Tuple[float, float]:
        """
        Filter one raw sample.

        Args:
            x, y: Raw pointer coordinates
            timestamp: Sample time in seconds (monotonic clock recommended)

        Returns:
            (filtered_x, filtered_y)
        """
        params = self._parameters
        state = self._state

        dt = max(0.0, timestamp - state.last_time)
        state.last_time = timestamp

        normalized_dt = dt * params.frequency

        alpha = compute_alpha(normalized_dt, params.min_cutoff)
        alpha_d = compute_alpha(normalized_dt, params.derivative_cutoff)

        filtered_x = alpha * x + (1.0 - alpha) * (state.x + alpha_d * state.dx)
        filtered_y = alpha * y + (1.0 - alpha) * (state.y + alpha_d * state.dy)

        # velocity estimate, from the change in filtered position
        state.dx = alpha_d * (filtered_x - state.x) + (1.0 - alpha_d) * state.dx
        state.dy = alpha_d * (filtered_y - state.y) + (1.0 - alpha_d) * state.dy

        state.x = filtered_x
        state.y = filtered_y

        return filtered_x, filtered_y

    def apply_preset(self, preset: Preset):
        """Retune cutoffs from a preset. Running state is kept."""
        self._parameters = self._parameters.with_cutoffs(preset_parameters(preset))
        logger.debug(f"Applied preset {preset.value}: {self._parameters}")

    def apply_slider_position(self, position: float):
        """Retune cutoffs from a slider position in [0, 1]. Running state is kept."""
        self._parameters = self._parameters.with_cutoffs(parameters_for_slider(position))
        logger.debug(f"Applied slider position {position:.3f}: {self._parameters}")

    def reset(self):
        """Zero the running state. Parameters are untouched."""
        self._state = FilterState()
        logger.debug("Filter state reset")

    def __repr__(self):
        return f"OneEuroFilter({self._parameters})"


def create_from_preset(preset: Preset, frequency: float = DEFAULT_FREQUENCY_HZ) -> OneEuroFilter:
    """Build a filter tuned by a named preset."""
    cutoffs = preset_parameters(preset)
    return OneEuroFilter(FilterParameters(frequency, *cutoffs))


def create_from_slider(position: float, frequency: float = DEFAULT_FREQUENCY_HZ) -> OneEuroFilter:
    """Build a filter tuned by a slider position in [0, 1]."""
    cutoffs = parameters_for_slider(position)
    return OneEuroFilter(FilterParameters(frequency, *cutoffs))
