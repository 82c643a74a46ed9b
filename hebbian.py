# hebbian.py
"""
Co-firing weight plasticity on plastic synapses.

Timing: a synapse from source s to target t is examined when s runs on cycle c. If s fired
on c-2 (its receipt for the current parity, read before it is overwritten) and t fired on
c-1 (t's receipt for the other parity, i.e. its response to what s sent on c-2), then

    w <- max(0, w + modifier(measure_t(c-1), measure_s(c-2)))

Default modifier (exponential similarity kernel), x = |a - b|:

    Δw = (exp(-15x) - exp(-1.5)) / (1 - exp(-1.5))

Δw = +1 at x = 0, crosses zero at x = 0.1 and bottoms out near -0.287 at x = 1, so it
lies in (-1, 1] for measures in [0, 1]. Static (reflex) synapses are never modified.

The modifier is any pure callable (target_measure, source_measure) -> float.
"""
import math

_FLOOR = math.exp(-1.5)
_SHARPNESS = 15.0


def basic_weight_modifier(target_measure, source_measure):
    x = abs(target_measure - source_measure)
    return (math.exp(-_SHARPNESS * x) - _FLOOR) / (1.0 - _FLOOR)


def apply_weight_change(weight, delta):
    """Add delta to a weight, clamping at zero so a synapse can be silenced but never flip sign."""
    new_weight = weight + delta
    return new_weight if new_weight > 0.0 else 0.0
