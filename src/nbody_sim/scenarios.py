# MIT License (see LICENSE)
"""
Scenario catalog.

A Scenario is pure data plus factories: it builds a fresh list of initial
bodies (never shared between calls) and, optionally, an acceleration law
derived from those bodies. Nothing here holds simulation state; switching
scenario means building a new Engine with create_engine().

Available scenarios:
    - Binary: two equal stars on a circular orbit plus a circumbinary planet.
    - Figure8: the Chenciner-Montgomery three-body choreography.
    - Rosette: a star ringed by six co-rotating petals, kept in formation by
      the ring station-keeping controller.
    - Random: a star with a seeded random planetary system.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

import numpy as np

from .config import GlobalParams, ParameterMeta, SimulationConfig, resolve_parameters
from .constants import DEFAULT_G
from .controllers.base import AccelerationLaw
from .controllers.ring import DEFAULT_RING_PREFIX, RING_PARAMETERS, make_ring_controller
from .engine import Engine
from .profiler import Profiler
from .stats import StabilityPredicate
from .types import Body

logger = logging.getLogger(__name__)

BodyBuilder = Callable[[int | None, Mapping[str, float], float], list[Body]]
ControllerFactory = Callable[[Sequence[Body], Mapping[str, float]], AccelerationLaw]

PLANET_COLORS = ("#1e90ff", "#32cd32", "#ff6347", "#ffb300", "#8e44ad", "#00b894", "#e17055", "#0984e3")
STAR_COLOR = "#ffd27f"


@dataclass(frozen=True)
class Scenario:
    """
    One entry of the catalog.

    Attributes:
        id: Stable identifier used by get_scenario().
        label: Human readable name.
        build_bodies: Factory (seed, params, G) -> list of new bodies.
        parameters: Tunable parameters accepted by this scenario.
        controller_factory: Optional (initial_bodies, params) -> AccelerationLaw.
    """
    id: str
    label: str
    build_bodies: BodyBuilder
    parameters: tuple[ParameterMeta, ...] = ()
    controller_factory: ControllerFactory | None = None

    def create_initial_bodies(
        self,
        seed: int | None = None,
        params: Mapping[str, float] | None = None,
        G: float = DEFAULT_G,
    ) -> list[Body]:
        """Build a fresh body list. Raises ConfigurationError on bad params."""
        return self.build_bodies(seed, resolve_parameters(self.parameters, params), G)

    def create_controller(
        self,
        initial_bodies: Sequence[Body],
        params: Mapping[str, float] | None = None,
    ) -> AccelerationLaw | None:
        if self.controller_factory is None:
            return None
        return self.controller_factory(initial_bodies, resolve_parameters(self.parameters, params))


def _circular_speed(G: float, central_mass: float, r: float) -> float:
    return math.sqrt(G * central_mass / r)


def _binary(seed: int | None, params: Mapping[str, float], G: float) -> list[Body]:
    m_star = 50.0
    a = 4.0  # each star's distance from the barycentre
    v_star = math.sqrt(G * m_star * a / (2 * a) ** 2)
    r_planet = 24.0
    v_planet = _circular_speed(G, 2 * m_star, r_planet)
    return [
        Body("Alpha", m_star, (a, 0.0, 0.0), (0.0, v_star, 0.0), radius=1.2, color=STAR_COLOR, is_star=True),
        Body("Beta", m_star, (-a, 0.0, 0.0), (0.0, -v_star, 0.0), radius=1.2, color="#ff9f7f", is_star=True),
        Body("Wanderer", 0.5, (0.0, r_planet, 0.0), (-v_planet, 0.0, 0.0), radius=0.4, color=PLANET_COLORS[0]),
    ]


# Chenciner & Montgomery (2000), G = m = 1, period ≈ 6.3259.
_FIGURE8_X1 = np.array([0.97000436, -0.24308753, 0.0])
_FIGURE8_V3 = np.array([-0.93240737, -0.86473146, 0.0])


def _figure8(seed: int | None, params: Mapping[str, float], G: float) -> list[Body]:
    m = 10.0
    scale = 5.0
    # Rescaling lengths by L and masses by M keeps the orbit if v scales by sqrt(G M / L).
    v_scale = math.sqrt(G * m / scale)
    x1 = scale * _FIGURE8_X1
    v3 = v_scale * _FIGURE8_V3
    return [
        Body("Body A", m, x1, -0.5 * v3, radius=0.6, color=PLANET_COLORS[0]),
        Body("Body B", m, -x1, -0.5 * v3, radius=0.6, color=PLANET_COLORS[1]),
        Body("Body C", m, (0.0, 0.0, 0.0), v3, radius=0.6, color=PLANET_COLORS[2]),
    ]


def _ring_self_gravity_factor(n: int) -> float:
    """
    Inward pull of n-1 equal ring neighbours, in units of G m / r².

    Σ_{k=1}^{n-1} 1 / (4 sin(πk/n))
    """
    return sum(1.0 / (4.0 * math.sin(math.pi * k / n)) for k in range(1, n))


def _rosette(seed: int | None, params: Mapping[str, float], G: float) -> list[Body]:
    m_star = 100.0
    m_petal = 0.5
    n = 6
    r = 12.0
    m_eff = m_star + m_petal * _ring_self_gravity_factor(n)
    v = _circular_speed(G, m_eff, r)
    bodies = [Body("Sun", m_star, radius=1.5, color=STAR_COLOR, is_star=True)]
    for k in range(n):
        phi = 2.0 * math.pi * k / n
        c, s = math.cos(phi), math.sin(phi)
        bodies.append(Body(
            f"{DEFAULT_RING_PREFIX} {k + 1}",
            m_petal,
            (r * c, r * s, 0.0),
            (-v * s, v * c, 0.0),
            radius=0.5,
            color=PLANET_COLORS[k % len(PLANET_COLORS)],
        ))
    return bodies


def _random(seed: int | None, params: Mapping[str, float], G: float) -> list[Body]:
    rng = np.random.default_rng(seed)
    count = int(round(params["count"]))
    m_star = 80.0
    bodies = [Body("Star", m_star, radius=1.5, color=STAR_COLOR, is_star=True)]
    radii = np.sort(rng.uniform(6.0, 30.0, size=count))
    for k, r in enumerate(radii):
        phi = float(rng.uniform(0.0, 2.0 * math.pi))
        incl = float(rng.normal(0.0, 0.05))
        mass = float(rng.uniform(0.1, 2.0))
        v = _circular_speed(G, m_star, float(r))
        c, s = math.cos(phi), math.sin(phi)
        bodies.append(Body(
            f"Planet {k + 1}",
            mass,
            (r * c, r * s, r * math.sin(incl)),
            (-v * s, v * c, 0.0),
            radius=0.3 + 0.2 * mass,
            color=PLANET_COLORS[k % len(PLANET_COLORS)],
        ))
    return bodies


def _rosette_controller(initial_bodies: Sequence[Body], params: Mapping[str, float]) -> AccelerationLaw:
    return make_ring_controller(initial_bodies, params)


_SCENARIOS: tuple[Scenario, ...] = (
    Scenario("Binary", "Binary Star", _binary),
    Scenario("Figure8", "Figure-8 Three Body", _figure8),
    Scenario("Rosette", "Rosette Hexa-Ring", _rosette, RING_PARAMETERS, _rosette_controller),
    Scenario(
        "Random",
        "Random System",
        _random,
        (ParameterMeta("count", "Planet count", 5, 1, 12, 1),),
    ),
)


def get_all_scenarios() -> list[Scenario]:
    return list(_SCENARIOS)


def get_scenario(scenario_id: str) -> Scenario:
    """Look up a scenario by id. Raises KeyError if unknown."""
    for s in _SCENARIOS:
        if s.id == scenario_id:
            return s
    raise KeyError(f"Scenario not found: {scenario_id}")


def scenario_options() -> list[tuple[str, str]]:
    """(id, label) pairs, in catalog order."""
    return [(s.id, s.label) for s in _SCENARIOS]


def create_engine(
    scenario_id: str,
    params: Mapping[str, float] | None = None,
    global_params: GlobalParams | None = None,
    seed: int | None = None,
    *,
    energy_sample_interval: int = 1,
    stability: StabilityPredicate | None = None,
    profiler: Profiler | None = None,
) -> Engine:
    """
    Build a ready-to-step Engine for a catalog scenario.

    Args:
        scenario_id: Id from the catalog.
        params: Scenario parameter overrides (see Scenario.parameters).
        global_params: G, softening and base timestep. Defaults to GlobalParams().
        seed: Seed for scenarios with random initial conditions.
        energy_sample_interval: Stats push cadence in steps.
        stability: Stability predicate; the config default when None.
        profiler: Optional Profiler handed to the engine.

    Raises:
        KeyError: Unknown scenario id.
        ConfigurationError: Invalid parameters.
    """
    scenario = get_scenario(scenario_id)
    gp = global_params if global_params is not None else GlobalParams()
    bodies = scenario.create_initial_bodies(seed, params, G=gp.G)
    controller = scenario.create_controller(bodies, params)

    extra = {"energy_sample_interval": energy_sample_interval, "controller": controller}
    if stability is not None:
        extra["stability"] = stability
    config = SimulationConfig.from_global_params(gp, **extra)

    logger.info("Scenario %s: %d bodies, seed=%s", scenario.id, len(bodies), seed)
    return Engine(bodies, config, profiler=profiler)
