# config.py
"""
Config and global defaults for the lattice encephalon.

Cross-checks:
- Lattice sizes: plastic population must be a perfect cube, nearby_count+1 a perfect cube.
- Neuron parameters: charge bins, fire threshold (strict >), synapse weight range [min, max).
- Synapse types: excitatory with probability r/(r+1) for synaptic_type_ratio r.
- Teaching demo: pattern/rest segments, reflex weight for label injection.

The explicit constructors never read CFG; only the from_config helpers and the demo driver do.
"""
from dataclasses import dataclass

@dataclass
class Config:
    seed: int = 7

    # Lattice sizes (6x6x6 plastic cube, 3x3x3 window)
    num_plastic: int = 216
    num_actuator: int = 10
    num_sensory: int = 64
    nearby_count: int = 26

    # Neuron parameters
    charge_bins: int = 10
    synaptic_type_ratio: float = 2.0   # excitatory : inhibitory
    fire_threshold: float = 10.0
    synapse_weight_range = (2.0, 5.0)  # uniform [min, max)

    # Reflex weight for teaching sensors
    reflex_weight: float = 20.0

    # Teaching schedule (cycles)
    pattern_cycles: int = 20
    rest_cycles: int = 5
    on_fraction: float = 0.25
    noise_level: float = 0.05
    epochs: int = 3

    # Benchmark loop
    benchmark_cycles: int = 3000
    report_every: int = 100

    log_level: str = "INFO"


CFG = Config()
