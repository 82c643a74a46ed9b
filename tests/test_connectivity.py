"""
Tests for the wiring plan and initial synapse draws.
"""

import numpy as np
import pytest

from charge import SynapseType
from connectivity import SynapseGenerator, build_wiring
from errors import ConfigurationError
from geometry import EcpBox
from neurons import NeuronRole


class TestBuildWiring:

    def test_one_connection_per_neighbor(self, box_125):
        plan = build_wiring(box_125)
        assert len(plan) == box_125.nearby_count * (125 + 123)

    def test_order(self, tiny_box):
        plan = build_wiring(tiny_box)
        # every plastic source first, actuator destinations after plastic ones
        first = plan[:7]
        assert {c.source for c in first} == {(0, 0, 0)}
        assert [c.target_role for c in first] == [NeuronRole.PLASTIC] * 6 + [NeuronRole.ACTUATOR]
        assert first[-1].target == (0, 2, 0)
        sensory = plan[-7:]
        assert {c.source for c in sensory} == {(0, -1, 0)}
        assert all(c.target_role is NeuronRole.PLASTIC for c in sensory)

    def test_sensors_never_target_actuators(self, box_125):
        for conn in build_wiring(box_125):
            if box_125.is_sensory(conn.source):
                assert box_125.is_plastic(conn.target)

    def test_targets_exist(self):
        box = EcpBox(64, 20, 9, 7)
        for conn in build_wiring(box):
            assert box.is_plastic(conn.target) or box.is_actuator(conn.target)


class TestSynapseGenerator:

    def test_weights_in_range(self):
        gen = SynapseGenerator((2.0, 5.0), 2.0, seed=3)
        weights, types = gen.draw(1000)
        assert len(weights) == len(types) == 1000
        assert min(weights) >= 2.0
        assert max(weights) < 5.0

    def test_type_ratio(self):
        gen = SynapseGenerator((2.0, 5.0), 2.0, seed=3)
        assert gen.p_excitatory == pytest.approx(2.0 / 3.0)
        _, types = gen.draw(20000)
        frac = np.mean([t is SynapseType.EXCITATORY for t in types])
        assert frac == pytest.approx(2.0 / 3.0, abs=0.02)

    def test_single_draw(self):
        weights, types = SynapseGenerator((1.0, 2.0), 1.0, seed=0).draw(1)
        assert len(weights) == 1
        assert 1.0 <= weights[0] < 2.0
        assert types[0] in (SynapseType.EXCITATORY, SynapseType.INHIBITORY)

    def test_same_seed_same_draws(self):
        a = SynapseGenerator((2.0, 5.0), 2.0, seed=11).draw(50)
        b = SynapseGenerator((2.0, 5.0), 2.0, seed=11).draw(50)
        c = SynapseGenerator((2.0, 5.0), 2.0, seed=12).draw(50)
        assert a == b
        assert a[0] != c[0]

    @pytest.mark.parametrize("weight_range,ratio", [
        ((5.0, 2.0), 2.0),
        ((2.0, 2.0), 2.0),
        ((2.0, 5.0), 0.0),
        ((2.0, 5.0), -1.0),
    ])
    def test_invalid_parameters(self, weight_range, ratio):
        with pytest.raises(ConfigurationError):
            SynapseGenerator(weight_range, ratio)
