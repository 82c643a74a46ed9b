# neurons.py
"""
Sensory, plastic and actuator neurons.

Per-cycle protocol, run_cycle(cycle, arena):
1. read the total weight of evidence for this parity;
2. sensory neurons always fire with the measure last supplied by their sensor;
   plastic and actuator neurons fire iff total weight > fire_threshold (strict), with
   measure = weighted average of the histogram (0 when silent); an actuator exposes
   the measure of its last firing, so a silent cycle leaves read_measure unchanged;
3. record the fire receipt for this parity;
4. transmitting roles (sensory, plastic) deposit an impulse into every target, plastic
   synapses first then static ones, and apply the co-firing rule (see hebbian.py) to
   plastic synapses;
5. reset this parity's histogram.

run_static_cycle does the same with the two-cycles-ago receipt taken as empty, so no weight
ever changes. Synapses address their target by index into `arena`, the owning Encephalon's
neuron list; neurons never hold references to each other.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List

import numpy as np

from charge import EMPTY_RECEIPT, FireTracker, Impulse, InternalCharge, SynapseType
from hebbian import apply_weight_change


class NeuronRole(Enum):
    SENSORY = "sensory"
    PLASTIC = "plastic"
    ACTUATOR = "actuator"


@dataclass
class Synapse:
    target: int
    weight: float
    synapse_type: SynapseType


class SynapseTable:
    """Outgoing synapses of one neuron: plasticity-eligible list and fixed reflex list."""

    def __init__(self, weight_modifier):
        self.plastic: List[Synapse] = []
        self.static: List[Synapse] = []
        self.weight_modifier = weight_modifier

    def __len__(self):
        return len(self.plastic) + len(self.static)

    def add_plastic_synapse(self, target, weight, synapse_type):
        self.plastic.append(Synapse(int(target), float(weight), synapse_type))

    def add_static_synapse(self, target, weight, synapse_type):
        self.static.append(Synapse(int(target), float(weight), synapse_type))

    def transmit(self, cycle, fired, measure, prior, arena):
        """Fire every synapse if `fired`; adjust plastic weights if `prior` (c-2) fired."""
        if not (fired or prior.fired):
            return
        for synapse in self.plastic:
            target = arena[synapse.target]
            if fired:
                target.intake_synaptic_impulse(
                    cycle, Impulse(synapse.weight, measure), synapse.synapse_type)
            if prior.fired:
                receipt = target.get_fire_receipt(cycle)
                if receipt.fired:
                    delta = self.weight_modifier(receipt.measure, prior.measure)
                    synapse.weight = apply_weight_change(synapse.weight, delta)
        if fired:
            for synapse in self.static:
                arena[synapse.target].intake_synaptic_impulse(
                    cycle, Impulse(synapse.weight, measure), synapse.synapse_type)


class Neuron:
    role: NeuronRole

    def __init__(self):
        self.fire_tracker = FireTracker()
        self.measure = 0.0

    def get_fire_receipt(self, cycle):
        """Receipt from the cycle before `cycle`: the response to impulses sent two cycles ago."""
        return self.fire_tracker.check_receipt(cycle.next_cycle())

    def clear(self):
        self.fire_tracker.clear_receipts()


class SensoryNeuron(Neuron):
    role = NeuronRole.SENSORY

    def __init__(self, weight_modifier):
        super().__init__()
        self.synapses = SynapseTable(weight_modifier)

    def set_measure(self, measure):
        self.measure = float(np.clip(measure, 0.0, 1.0))

    def run_cycle(self, cycle, arena):
        self._step(cycle, arena, self.fire_tracker.check_receipt(cycle))

    def run_static_cycle(self, cycle, arena):
        self._step(cycle, arena, EMPTY_RECEIPT)

    def _step(self, cycle, arena, prior):
        self.fire_tracker.create_receipt(cycle, True, self.measure)
        self.synapses.transmit(cycle, True, self.measure, prior, arena)


class _ReceivingNeuron(Neuron):
    def __init__(self, charge_bins, fire_threshold):
        super().__init__()
        self.internal_charge = InternalCharge(charge_bins)
        self.fire_threshold = float(fire_threshold)

    def intake_synaptic_impulse(self, cycle, impulse, synapse_type):
        self.internal_charge.deposit(cycle, impulse, synapse_type)

    def evaluate(self, cycle):
        """(fired, measure) for the histogram of this parity."""
        if self.internal_charge.total_weight(cycle) > self.fire_threshold:
            return True, self.internal_charge.weighted_average(cycle)
        return False, 0.0

    def clear(self):
        super().clear()
        self.internal_charge.clear()
        self.measure = 0.0


class PlasticNeuron(_ReceivingNeuron):
    role = NeuronRole.PLASTIC

    def __init__(self, charge_bins, weight_modifier, fire_threshold):
        super().__init__(charge_bins, fire_threshold)
        self.synapses = SynapseTable(weight_modifier)

    def run_cycle(self, cycle, arena):
        self._step(cycle, arena, self.fire_tracker.check_receipt(cycle))

    def run_static_cycle(self, cycle, arena):
        self._step(cycle, arena, EMPTY_RECEIPT)

    def _step(self, cycle, arena, prior):
        fired, measure = self.evaluate(cycle)
        self.measure = measure
        self.fire_tracker.create_receipt(cycle, fired, measure)
        self.synapses.transmit(cycle, fired, measure, prior, arena)
        self.internal_charge.reset(cycle)


class ActuatorNeuron(_ReceivingNeuron):
    role = NeuronRole.ACTUATOR

    def run_cycle(self, cycle, arena=None):
        fired, measure = self.evaluate(cycle)
        # a silent actuator keeps reporting the last measure it fired with
        if fired:
            self.measure = measure
        self.fire_tracker.create_receipt(cycle, fired, measure)
        self.internal_charge.reset(cycle)

    # actuators have no outgoing synapses, so there is nothing to hold fixed
    run_static_cycle = run_cycle

    def read_measure(self):
        return self.measure
