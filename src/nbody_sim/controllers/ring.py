# MIT License (see LICENSE)
"""
Ring station-keeping controller.

Holds a subset of bodies (the "ring", e.g. the petals of a rosette) near a
co-rotating circular configuration that gravity alone would not sustain.

Targets are derived once from the initial snapshot:
    r*  = mass-weighted mean distance of the ring members from the origin
    ω*  = mass-weighted mean of v_t / ρ in the xy-plane

Per evaluation, in the frame of the ring's mass-weighted centroid:
    n̂   = direction of the ring's total angular momentum
    r̂   = radial unit vector, t̂ = n̂ × r̂
    a_r = -k_r (ρ - r*) - k_dr v_r
    a_t = -k_t (v_t - ω* ρ) - k_dt v_t
    a   = a_r r̂ + a_t t̂ - k_c u          (u: centroid-relative velocity)
and |a| is clamped to a_max, preserving direction.

Degenerate geometry (zero angular momentum, a member at the centroid) is
handled by epsilon floors, which yield a zero tangential direction rather than
NaNs.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np

from ..config import ParameterMeta, resolve_parameters
from ..constants import DEFAULT_RING_RADIUS
from ..core.invariants import center_of_mass
from ..errors import ConfigurationError
from ..types import Body
from ..util import cross3, norm
from .base import AccelerationLaw

logger = logging.getLogger(__name__)

# Body name prefix selecting ring members when no explicit indices are given.
DEFAULT_RING_PREFIX = "Petal"

RING_PARAMETERS: tuple[ParameterMeta, ...] = (
    ParameterMeta("k_r", "Radial stiffness (k_r)", 0.08, 0.0, 0.5, 0.01),
    ParameterMeta("k_dr", "Radial damping (k_dr)", 0.18, 0.0, 1.0, 0.01),
    ParameterMeta("k_t", "Tangential stiffness (k_t)", 0.12, 0.0, 0.5, 0.01),
    ParameterMeta("k_dt", "Tangential damping (k_dt)", 0.08, 0.0, 0.5, 0.01),
    ParameterMeta("k_c", "Drag (k_c)", 0.02, 0.0, 0.2, 0.005),
    ParameterMeta("a_max", "Accel cap (a_max)", 0.04, 0.005, 0.2, 0.005),
)

_GAIN_DEFAULTS = {p.key: p.default for p in RING_PARAMETERS}


@dataclass(frozen=True)
class RingGains:
    """
    Controller gains. Defaults and ranges come from RING_PARAMETERS; any
    value outside its range raises ConfigurationError.

    Attributes:
        k_r: Radial stiffness.
        k_dr: Radial damping.
        k_t: Tangential stiffness (pull toward ω*·ρ).
        k_dt: Tangential damping.
        k_c: Uniform drag on centroid-relative velocity.
        a_max: Magnitude cap of the total correction.
    """
    k_r: float = _GAIN_DEFAULTS["k_r"]
    k_dr: float = _GAIN_DEFAULTS["k_dr"]
    k_t: float = _GAIN_DEFAULTS["k_t"]
    k_dt: float = _GAIN_DEFAULTS["k_dt"]
    k_c: float = _GAIN_DEFAULTS["k_c"]
    a_max: float = _GAIN_DEFAULTS["a_max"]

    def __post_init__(self) -> None:
        for meta in RING_PARAMETERS:
            object.__setattr__(self, meta.key, meta.validate(getattr(self, meta.key)))

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, float] | None = None) -> "RingGains":
        """Validate a string→number mapping against RING_PARAMETERS."""
        return cls(**resolve_parameters(RING_PARAMETERS, parameters))


def _ring_targets(bodies: Sequence[Body], members: Sequence[int]) -> tuple[float, float]:
    """Return (r*, ω*) for the given members of an initial snapshot."""
    m_sum = 0.0
    mr_sum = 0.0
    mw_sum = 0.0
    for i in members:
        b = bodies[i]
        x, y, _ = b.position
        rho = math.hypot(x, y) or 1e-6
        theta = math.atan2(y, x)
        vt = -b.velocity[0] * math.sin(theta) + b.velocity[1] * math.cos(theta)
        mr_sum += b.mass * norm(b.position)
        mw_sum += b.mass * (vt / rho)
        m_sum += b.mass
    if m_sum <= 0:
        return DEFAULT_RING_RADIUS, 0.0
    return mr_sum / m_sum, mw_sum / m_sum


class RingStationKeeper(AccelerationLaw):
    """
    PD station-keeping law for a ring of bodies.

    Attributes:
        members: Indices of the ring bodies (sorted, unique).
        r_star: Target ring radius.
        omega_star: Target angular speed.
        gains: Controller gains.
    """

    def __init__(
        self,
        members: Iterable[int],
        r_star: float,
        omega_star: float,
        gains: RingGains | None = None,
    ) -> None:
        self.members = tuple(sorted(set(int(i) for i in members)))
        self.r_star = float(r_star)
        self.omega_star = float(omega_star)
        self.gains = gains if gains is not None else RingGains()

    def __repr__(self) -> str:
        return (
            f"RingStationKeeper(members={self.members}, r_star={self.r_star:.4g}, "
            f"omega_star={self.omega_star:.4g}, gains={self.gains})"
        )

    def evaluate(self, bodies: Sequence[Body], t: float) -> np.ndarray:
        acc = np.zeros((len(bodies), 3), dtype=np.float64)
        ring = [i for i in self.members if i < len(bodies)]
        if not ring:
            return acc

        # Mass-weighted centroid and centroid velocity of the ring
        c, cv = center_of_mass([bodies[i] for i in ring])

        # Orbital plane normal from total angular momentum about the centroid
        L = np.zeros(3, dtype=np.float64)
        for i in ring:
            b = bodies[i]
            L += b.mass * cross3(b.position - c, b.velocity - cv)
        L_norm = norm(L) or 1.0
        n_hat = L / L_norm

        g = self.gains
        for i in ring:
            b = bodies[i]
            r = b.position - c
            u = b.velocity - cv

            rho = norm(r) or 1e-9
            r_hat = r / rho
            t_raw = cross3(n_hat, r_hat)
            t_hat = t_raw / (norm(t_raw) or 1e-9)

            v_r = float(np.dot(u, r_hat))
            v_t = float(np.dot(u, t_hat))

            a_r = -g.k_r * (rho - self.r_star) - g.k_dr * v_r
            a_t = -g.k_t * (v_t - self.omega_star * rho) - g.k_dt * v_t

            a = a_r * r_hat + a_t * t_hat - g.k_c * u

            a_norm = norm(a)
            if a_norm > g.a_max and a_norm > 0:
                a *= g.a_max / a_norm
            acc[i] = a

        return acc


def select_ring_members(
    bodies: Sequence[Body],
    members: Iterable[int] | None = None,
    prefix: str = DEFAULT_RING_PREFIX,
) -> list[int]:
    """
    Resolve ring membership.

    Explicit indices win; otherwise every body whose name starts with prefix.

    Raises:
        ConfigurationError: An explicit index is out of range.
    """
    if members is not None:
        idx = sorted(set(int(i) for i in members))
        for i in idx:
            if i < 0 or i >= len(bodies):
                raise ConfigurationError(f"Ring member index {i} out of range for {len(bodies)} bodies")
        return idx
    return [i for i, b in enumerate(bodies) if b.name.startswith(prefix)]


def make_ring_controller(
    initial_bodies: Sequence[Body],
    parameters: Mapping[str, float] | None = None,
    *,
    members: Iterable[int] | None = None,
    prefix: str = DEFAULT_RING_PREFIX,
) -> RingStationKeeper:
    """
    Build a RingStationKeeper from an initial-condition snapshot.

    Args:
        initial_bodies: Snapshot the targets are derived from. Not retained.
        parameters: Gain overrides keyed as in RING_PARAMETERS.
        members: Explicit ring indices. Defaults to selection by prefix.
        prefix: Name prefix used when members is None.

    Raises:
        ConfigurationError: Bad gains or out-of-range member indices.
    """
    gains = RingGains.from_parameters(parameters)
    idx = select_ring_members(initial_bodies, members, prefix)
    if not idx:
        logger.warning("Ring controller has no members (prefix=%r); it will never correct", prefix)
    r_star, omega_star = _ring_targets(initial_bodies, idx)
    logger.info(
        "Ring controller: %d members, r*=%.4g, omega*=%.4g", len(idx), r_star, omega_star
    )
    return RingStationKeeper(idx, r_star, omega_star, gains)
