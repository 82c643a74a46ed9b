# charge.py
"""
Double-buffered charge accumulation and fire receipts.

A receiving neuron keeps two histograms over the measure range [0, 1], one per ChargeCycle
parity. Each bin accumulates ±weight and ±weight·measure. Impulses sent during a cycle land
in the *other* parity, which the receiver reads on the following cycle: every synapse has a
fixed one-cycle transmission delay.

Readout discards bins driven net-negative by inhibition:
    total_weight(p)     = Σ_b max(0, W_b)
    weighted_average(p) = Σ_{b: W_b ≥ 0, Q_b ≥ 0} Q_b / total_weight(p)
"""
from enum import Enum, IntEnum
from typing import NamedTuple

import numpy as np

from errors import ConfigurationError


class ChargeCycle(IntEnum):
    EVEN = 0
    ODD = 1

    def next_cycle(self):
        return ChargeCycle.ODD if self is ChargeCycle.EVEN else ChargeCycle.EVEN


class SynapseType(Enum):
    EXCITATORY = 1.0
    INHIBITORY = -1.0

    @property
    def sign(self):
        return self.value


class Impulse(NamedTuple):
    weight: float
    measure: float

    @property
    def weighted_measure(self):
        return self.weight * self.measure


class InternalCharge:
    def __init__(self, bins):
        if bins < 1:
            raise ConfigurationError(f"charge bins must be >= 1, got {bins}")
        self.bins = int(bins)
        # rows indexed by ChargeCycle
        self.weighted = np.zeros((2, self.bins), dtype=np.float64)
        self.weights = np.zeros((2, self.bins), dtype=np.float64)

    def bin_index(self, measure):
        return min(max(int(np.floor(measure * self.bins)), 0), self.bins - 1)

    def deposit(self, cycle, impulse, synapse_type):
        """Add an impulse to the histogram read on the cycle after `cycle`."""
        target = cycle.next_cycle()
        b = self.bin_index(impulse.measure)
        self.weighted[target, b] += synapse_type.sign * impulse.weighted_measure
        self.weights[target, b] += synapse_type.sign * impulse.weight

    def total_weight(self, cycle):
        w = self.weights[cycle]
        return float(w[w > 0].sum())

    def weighted_average(self, cycle):
        w, q = self.weights[cycle], self.weighted[cycle]
        total = float(w[w > 0].sum())
        if total == 0.0:
            return 0.0
        kept = q[(w >= 0) & (q >= 0)].sum()
        # a bin mixing excitation and inhibition can overshoot its own range
        return min(float(kept) / total, 1.0)

    def reset(self, cycle):
        self.weighted[cycle] = 0.0
        self.weights[cycle] = 0.0

    def clear(self):
        self.weighted.fill(0.0)
        self.weights.fill(0.0)


class FireReceipt(NamedTuple):
    fired: bool = False
    measure: float = 0.0


EMPTY_RECEIPT = FireReceipt()


class FireTracker:
    """One receipt per parity: whether the neuron fired on its last cycle of that parity."""

    def __init__(self):
        self.receipts = [EMPTY_RECEIPT, EMPTY_RECEIPT]

    def check_receipt(self, cycle):
        return self.receipts[cycle]

    def create_receipt(self, cycle, fired, measure):
        self.receipts[cycle] = FireReceipt(bool(fired), float(measure))

    def clear_receipts(self):
        self.receipts = [EMPTY_RECEIPT, EMPTY_RECEIPT]
