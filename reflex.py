# reflex.py
"""Reflexes: fixed sensor -> actuator synapses configured before learning."""
from dataclasses import dataclass

from charge import SynapseType


@dataclass(frozen=True)
class Reflex:
    sensor_name: str
    actuator_name: str
    synapse_type: SynapseType
    weight: float


def teaching_reflexes(sensor_name, actuator_names, target, weight):
    """Excite `target` and inhibit every other actuator from one teaching sensor."""
    return [
        Reflex(sensor_name, name,
               SynapseType.EXCITATORY if name == target else SynapseType.INHIBITORY,
               weight)
        for name in actuator_names
    ]
