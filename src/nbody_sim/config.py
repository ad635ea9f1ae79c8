# MIT License (see LICENSE)
"""
Simulation configuration and tunable parameter schemas.

SimulationConfig is fixed for the lifetime of an Engine. ParameterMeta
describes a named numeric knob (default, range, UI step) so a presentation
layer can render controls without knowing what the knob does; the same
schema is used to validate user overrides before anything is constructed.
"""
from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Sequence

from .constants import DEFAULT_G, DEFAULT_SOFTENING, DEFAULT_TIME_STEP
from .errors import ConfigurationError
from .stats import EnergyDriftPredicate, StabilityPredicate

if TYPE_CHECKING:
    from .controllers.base import AccelerationLaw


@dataclass(frozen=True)
class ParameterMeta:
    """
    Metadata for one tunable numeric parameter.

    Attributes:
        key: Name used in parameter mappings.
        label: Human readable label.
        default: Value used when no override is given.
        min: Inclusive lower bound.
        max: Inclusive upper bound.
        step: Suggested UI increment.
    """
    key: str
    label: str
    default: float
    min: float
    max: float
    step: float

    def validate(self, value: float) -> float:
        """Return value as float, raising ConfigurationError if out of range."""
        try:
            v = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Parameter {self.key!r} must be a number, got {value!r}") from exc
        if not math.isfinite(v):
            raise ConfigurationError(f"Parameter {self.key!r} must be finite, got {v}")
        if v < self.min or v > self.max:
            raise ConfigurationError(
                f"Parameter {self.key!r}={v} outside [{self.min}, {self.max}]"
            )
        return v


def resolve_parameters(
    schema: Sequence[ParameterMeta],
    overrides: Mapping[str, float] | None = None,
) -> dict[str, float]:
    """
    Merge overrides onto the schema defaults.

    Raises:
        ConfigurationError: Unknown key, non-numeric or out-of-range value.
    """
    known = {p.key: p for p in schema}
    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - set(known))
    if unknown:
        raise ConfigurationError(f"Unknown parameter(s): {', '.join(unknown)}")
    return {
        key: meta.validate(overrides.get(key, meta.default))
        for key, meta in known.items()
    }


@dataclass(frozen=True)
class GlobalParams:
    """
    Scenario-independent physics knobs a user may adjust.

    Attributes:
        G: Gravitational constant.
        softening: Plummer softening length.
        time_step: Base timestep of one playback frame at speed 1.
    """
    G: float = DEFAULT_G
    softening: float = DEFAULT_SOFTENING
    time_step: float = DEFAULT_TIME_STEP

    def __post_init__(self) -> None:
        for meta in global_parameter_schema():
            meta.validate(getattr(self, meta.key))

    @classmethod
    def from_mapping(cls, values: Mapping[str, float] | None = None) -> "GlobalParams":
        """Build from a string→number mapping validated against the schema."""
        resolved = resolve_parameters(global_parameter_schema(), values)
        return cls(**resolved)


def default_global_params() -> GlobalParams:
    return GlobalParams()


def global_parameter_schema() -> list[ParameterMeta]:
    """Ranges for the GlobalParams fields."""
    return [
        ParameterMeta("G", "Gravitational Constant (G)", DEFAULT_G, 0.05, 5.0, 0.05),
        ParameterMeta("softening", "Softening", DEFAULT_SOFTENING, 0.0, 0.5, 0.01),
        ParameterMeta("time_step", "Base Time Step (s)", DEFAULT_TIME_STEP, 0.001, 0.05, 0.001),
    ]


@dataclass(frozen=True)
class SimulationConfig:
    """
    Engine configuration, fixed at construction.

    Attributes:
        G: Gravitational constant (> 0).
        softening: Plummer softening length (≥ 0). Zero disables softening;
                   close encounters then produce very large accelerations.
        time_step: Default dt for Engine.step() when none is passed (> 0).
        energy_sample_interval: The stats callback fires every this many
                                steps (integer ≥ 1).
        controller: Optional acceleration law summed onto gravity.
        stability: Predicate deciding EnergyStats.habitable.

    Raises:
        ConfigurationError: On any invalid value.
    """
    G: float = DEFAULT_G
    softening: float = DEFAULT_SOFTENING
    time_step: float = DEFAULT_TIME_STEP
    energy_sample_interval: int = 1
    controller: AccelerationLaw | None = None
    stability: StabilityPredicate = field(default_factory=EnergyDriftPredicate)

    def __post_init__(self) -> None:
        for key in ("G", "softening", "time_step"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{key} must be a number, got {value!r}")
            object.__setattr__(self, key, float(value))
        if not (math.isfinite(self.G) and self.G > 0):
            raise ConfigurationError(f"G must be > 0, got {self.G}")
        if not (math.isfinite(self.softening) and self.softening >= 0):
            raise ConfigurationError(f"softening must be >= 0, got {self.softening}")
        if not (math.isfinite(self.time_step) and self.time_step > 0):
            raise ConfigurationError(f"time_step must be > 0, got {self.time_step}")
        interval = self.energy_sample_interval
        if isinstance(interval, bool) or not isinstance(interval, numbers.Integral) or interval < 1:
            raise ConfigurationError(
                f"energy_sample_interval must be an integer >= 1, got {interval!r}"
            )
        object.__setattr__(self, "energy_sample_interval", int(interval))
        if self.controller is not None and not callable(getattr(self.controller, "evaluate", None)):
            raise ConfigurationError("controller must provide evaluate(bodies, t)")
        if not callable(self.stability):
            raise ConfigurationError("stability must be callable")

    @classmethod
    def from_global_params(cls, params: GlobalParams, **kwargs) -> "SimulationConfig":
        """Build a config from user-facing GlobalParams plus extra fields."""
        return cls(G=params.G, softening=params.softening, time_step=params.time_step, **kwargs)
