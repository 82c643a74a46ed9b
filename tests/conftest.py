"""Shared test fixtures and configuration."""

import numpy as np
import pytest

from charge import SynapseType
from geometry import EcpBox
from hebbian import basic_weight_modifier
from interfaces import ConstantSensor, RecordingActuator
from reflex import Reflex


@pytest.fixture(autouse=True)
def set_random_seed():
    """Keep any incidental use of the global numpy RNG reproducible."""
    np.random.seed(42)


@pytest.fixture
def tiny_box():
    """2x2x2 plastic cube, one actuator, one sensor, full 2x2x2 window."""
    return EcpBox(8, 1, 1, 7)


@pytest.fixture
def box_125():
    """5x5x5 cube with a 3x3x3 window, ten actuators, 123 sensors."""
    return EcpBox(125, 10, 123, 26)


@pytest.fixture
def network_kwargs():
    """Neuron parameters shared by most network tests."""
    return dict(
        charge_bins=10,
        weight_modifier=basic_weight_modifier,
        synaptic_type_ratio=2.0,
        fire_threshold=10.0,
        synapse_weight_range=(2.0, 5.0),
    )


@pytest.fixture
def reflex_setup():
    """Four constant sensors, three actuators and four reflexes on a 6x6x6 cube."""
    sensors = [ConstantSensor(name, 0.5) for name in ("1", "2", "3", "4")]
    actuators = [RecordingActuator(name) for name in ("act1", "act2", "act3")]
    reflexes = [
        Reflex("1", "act1", SynapseType.EXCITATORY, 20.0),
        Reflex("2", "act1", SynapseType.INHIBITORY, 20.0),
        Reflex("1", "act2", SynapseType.EXCITATORY, 20.0),
        Reflex("3", "act3", SynapseType.INHIBITORY, 20.0),
    ]
    return EcpBox(216, 3, 4, 26), sensors, actuators, reflexes

