# connectivity.py
"""
Wiring plan and initial synapse draws.

build_wiring(geometry) lists one Connection per synapse, in the order the network creates
them: every plastic coordinate, then every sensory coordinate (geometry enumeration order);
for each source its plastic destinations first, then its actuator destinations.

SynapseGenerator draws the initial state of those synapses from a seeded numpy Generator:
    weight ~ Uniform[min, max)
    type   = excitatory with probability r / (r + 1), r = excitatory:inhibitory ratio
Two generators built with the same seed produce the same draws.
"""
from typing import List, NamedTuple, Tuple

import numpy as np

from charge import SynapseType
from errors import ConfigurationError
from neurons import NeuronRole


class Connection(NamedTuple):
    source: Tuple[int, int, int]
    target: Tuple[int, int, int]
    target_role: NeuronRole


def build_wiring(geometry) -> List[Connection]:
    plan = []
    for loc in geometry.plastic_locations() + geometry.sensory_locations():
        plastic, actuator = geometry.neighbors(loc)
        plan.extend(Connection(loc, dst, NeuronRole.PLASTIC) for dst in plastic)
        plan.extend(Connection(loc, dst, NeuronRole.ACTUATOR) for dst in actuator)
    return plan


class SynapseGenerator:
    def __init__(self, weight_range, type_ratio, seed=None):
        low, high = (float(v) for v in weight_range)
        if not low < high:
            raise ConfigurationError(f"synapse weight range needs min < max, got ({low}, {high})")
        if not type_ratio > 0:
            raise ConfigurationError(f"synaptic type ratio must be > 0, got {type_ratio}")
        self.low, self.high = low, high
        self.p_excitatory = type_ratio / (type_ratio + 1.0)
        self.rng = np.random.default_rng(seed)

    def draw(self, n):
        """Weights and types for n synapses, drawn in one batch."""
        weights = self.rng.uniform(self.low, self.high, size=n)
        excitatory = self.rng.random(n) < self.p_excitatory
        types = [SynapseType.EXCITATORY if e else SynapseType.INHIBITORY for e in excitatory]
        return weights.tolist(), types
