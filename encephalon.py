# encephalon.py
"""
Network orchestrator: builds the wired lattice once, then steps it in lock-step cycles.

Build (fails fast with ConfigurationError, no partial network):
1. sensor/actuator counts must equal the geometry's sensory/actuator counts;
2. one neuron per coordinate: plastic, then sensory, then actuator, all in a single arena
   (`neurons`); coordinate maps hold arena indices;
3. sensors and actuators are paired with coordinates in enumeration order;
4. one plastic synapse per Connection of build_wiring(geometry), weight/type drawn from the
   SynapseGenerator;
5. one static synapse per Reflex, sensory neuron -> actuator neuron.

Cycle (run_cycle / run_static_cycle):
- flip the parity; pull every sensor into its neuron;
- run all sensory neurons, then all plastic neurons, then all actuator neurons;
- push every actuator neuron's measure to its actuator.

Because impulses land in the other parity, phase order within a cycle does not change
results; it is kept fixed so runs are reproducible.
"""
import logging
from typing import Dict, List, Tuple

from scipy.sparse import csr_matrix
from tqdm.auto import tqdm

from charge import ChargeCycle
from connectivity import SynapseGenerator, build_wiring
from errors import ConfigurationError, LookupInconsistencyError
from hebbian import basic_weight_modifier
from interfaces import ActuatorInterface, SensoryInterface
from neurons import ActuatorNeuron, NeuronRole, PlasticNeuron, SensoryNeuron

logger = logging.getLogger(__name__)

Coord = Tuple[int, int, int]

# late-bound reflex sensors sit on their own plane below the sensory plane
REFLEX_SENSOR_Y = -2


def _check_unique(items, what):
    seen = set()
    for item in items:
        if item.name in seen:
            raise ConfigurationError(f"duplicate {what} name {item.name!r}")
        seen.add(item.name)


class Encephalon:
    def __init__(self, ecp_geometry, sensors, actuators, reflexes,
                 charge_bins, weight_modifier, synaptic_type_ratio, fire_threshold,
                 synapse_weight_range, seed=None, synapse_generator=None):
        sensors, actuators = list(sensors), list(actuators)
        if ecp_geometry.num_sensory != len(sensors):
            raise ConfigurationError(
                f"{len(sensors)} sensors passed but the geometry has "
                f"{ecp_geometry.num_sensory} sensory positions")
        if ecp_geometry.num_actuator != len(actuators):
            raise ConfigurationError(
                f"{len(actuators)} actuators passed but the geometry has "
                f"{ecp_geometry.num_actuator} actuator positions")
        if charge_bins < 1:
            raise ConfigurationError(f"charge_bins must be >= 1, got {charge_bins}")
        _check_unique(sensors, "sensor")
        _check_unique(actuators, "actuator")
        if synapse_generator is None:
            synapse_generator = SynapseGenerator(synapse_weight_range, synaptic_type_ratio, seed)

        self.ecp_geometry = ecp_geometry
        self.charge_bins = charge_bins
        self.weight_modifier = weight_modifier
        self.fire_threshold = fire_threshold
        self.synapse_generator = synapse_generator

        self.neurons: List = []
        self.plastic_neurons: Dict[Coord, int] = {}
        self.sensory_neurons: Dict[Coord, int] = {}
        self.actuator_neurons: Dict[Coord, int] = {}
        self.sensory_interfaces: Dict[str, SensoryInterface] = {}
        self.actuator_interfaces: Dict[str, ActuatorInterface] = {}
        self.reflexes = []
        self._cycle = ChargeCycle.ODD
        self._reflex_sensor_count = 0

        for loc in ecp_geometry.plastic_locations():
            self.plastic_neurons[loc] = self._add_neuron(
                PlasticNeuron(charge_bins, weight_modifier, fire_threshold))

        for loc, sensor in zip(ecp_geometry.sensory_locations(), sensors):
            index = self._add_neuron(SensoryNeuron(weight_modifier))
            self.sensory_neurons[loc] = index
            self.sensory_interfaces[sensor.name] = SensoryInterface(sensor, index)

        for loc, actuator in zip(ecp_geometry.actuator_locations(), actuators):
            index = self._add_neuron(ActuatorNeuron(charge_bins, fire_threshold))
            self.actuator_neurons[loc] = index
            self.actuator_interfaces[actuator.name] = ActuatorInterface(actuator, index)

        # phase order; sensory order can grow through add_reflex_sensor
        self._sensory_phase = list(self.sensory_neurons.values())
        self._plastic_phase = list(self.plastic_neurons.values())
        self._actuator_phase = list(self.actuator_neurons.values())

        plan = build_wiring(ecp_geometry)
        weights, types = synapse_generator.draw(len(plan))
        targets = {NeuronRole.PLASTIC: self.plastic_neurons,
                   NeuronRole.ACTUATOR: self.actuator_neurons}
        for conn, weight, synapse_type in zip(plan, weights, types):
            source = self.neurons[self._index_of(conn.source)]
            target = self._index_of(conn.target, (targets[conn.target_role],))
            source.synapses.add_plastic_synapse(target, weight, synapse_type)

        reflexes = list(reflexes)
        self._check_reflexes(reflexes)
        for reflex in reflexes:
            self._add_reflex(reflex)

        logger.info("Encephalon built: %d plastic, %d sensory, %d actuator neurons; "
                    "%d plastic synapses, %d reflexes",
                    len(self.plastic_neurons), len(self.sensory_neurons),
                    len(self.actuator_neurons), len(plan), len(self.reflexes))

    @classmethod
    def from_config(cls, ecp_geometry, sensors, actuators, reflexes, cfg, weight_modifier=None):
        return cls(ecp_geometry, sensors, actuators, reflexes,
                   charge_bins=cfg.charge_bins,
                   weight_modifier=weight_modifier or basic_weight_modifier,
                   synaptic_type_ratio=cfg.synaptic_type_ratio,
                   fire_threshold=cfg.fire_threshold,
                   synapse_weight_range=cfg.synapse_weight_range,
                   seed=cfg.seed)

    # ---------------------------
    # Cycling
    # ---------------------------

    @property
    def cycle(self):
        return self._cycle

    def run_cycle(self):
        self._advance(static=False)

    def run_static_cycle(self):
        """One cycle with every weight held fixed (inference after learning)."""
        self._advance(static=True)

    def _advance(self, static):
        self._cycle = self._cycle.next_cycle()
        cycle, arena = self._cycle, self.neurons

        for interface in self.sensory_interfaces.values():
            interface.pull(arena)

        for phase in (self._sensory_phase, self._plastic_phase, self._actuator_phase):
            for index in phase:
                neuron = arena[index]
                if static:
                    neuron.run_static_cycle(cycle, arena)
                else:
                    neuron.run_cycle(cycle, arena)

        for interface in self.actuator_interfaces.values():
            interface.push(arena)

    def run(self, n_cycles, static=False, progress=False):
        """Run n_cycles and return the last pushed actuator values."""
        step = self.run_static_cycle if static else self.run_cycle
        for _ in tqdm(range(n_cycles), desc="Cycling", unit="cycle", leave=False,
                      disable=not progress):
            step()
        return self.actuator_values()

    def clear(self):
        """Drop all charge and fire receipts; wiring and weights are kept."""
        for neuron in self.neurons:
            neuron.clear()

    # ---------------------------
    # Late binding
    # ---------------------------

    def add_reflex_sensor(self, sensor, insertion_index, reflexes, weight_modifier):
        """
        Bind an extra sensor after construction with only static synapses (its reflexes).

        The new sensory neuron runs at position `insertion_index` of the sensory phase and
        sits at (n, REFLEX_SENSOR_Y, 0), n counting late-bound sensors. Returns that coordinate.
        """
        if sensor.name in self.sensory_interfaces:
            raise ConfigurationError(f"duplicate sensor name {sensor.name!r}")
        reflexes = list(reflexes)
        for reflex in reflexes:
            if reflex.sensor_name != sensor.name:
                raise ConfigurationError(
                    f"reflex from {reflex.sensor_name!r} passed with sensor {sensor.name!r}")
        for reflex in reflexes:
            if reflex.actuator_name not in self.actuator_interfaces:
                raise ConfigurationError(f"reflex names unknown actuator {reflex.actuator_name!r}")

        loc = (self._reflex_sensor_count, REFLEX_SENSOR_Y, 0)
        self._reflex_sensor_count += 1
        index = self._add_neuron(SensoryNeuron(weight_modifier))
        self.sensory_neurons[loc] = index
        self.sensory_interfaces[sensor.name] = SensoryInterface(sensor, index)
        self._sensory_phase.insert(insertion_index, index)

        for reflex in reflexes:
            self._add_reflex(reflex)
        logger.debug("reflex sensor %r bound at %s with %d reflexes",
                     sensor.name, loc, len(reflexes))
        return loc

    # ---------------------------
    # Inspection
    # ---------------------------

    def actuator_values(self):
        return {name: iface.last_value for name, iface in self.actuator_interfaces.items()}

    def neuron_at(self, loc):
        return self.neurons[self._index_of(tuple(loc))]

    def sensory_neuron(self, name):
        if name not in self.sensory_interfaces:
            raise LookupInconsistencyError(f"no sensor named {name!r}")
        return self.neurons[self.sensory_interfaces[name].index]

    def actuator_neuron(self, name):
        if name not in self.actuator_interfaces:
            raise LookupInconsistencyError(f"no actuator named {name!r}")
        return self.neurons[self.actuator_interfaces[name].index]

    def _synapses(self, kind):
        if kind not in ("plastic", "static", "all"):
            raise ValueError(f"kind must be 'plastic', 'static' or 'all', got {kind!r}")
        for source, neuron in enumerate(self.neurons):
            table = getattr(neuron, "synapses", None)
            if table is None:
                continue
            if kind in ("plastic", "all"):
                for synapse in table.plastic:
                    yield source, synapse
            if kind in ("static", "all"):
                for synapse in table.static:
                    yield source, synapse

    def synapse_count(self, kind="all"):
        return sum(1 for _ in self._synapses(kind))

    def weight_matrix(self, kind="all"):
        """Synaptic weights as a (post × pre) sparse matrix over arena indices."""
        rows, cols, data = [], [], []
        for source, synapse in self._synapses(kind):
            rows.append(synapse.target)
            cols.append(source)
            data.append(synapse.weight)
        n = len(self.neurons)
        return csr_matrix((data, (rows, cols)), shape=(n, n))

    # ---------------------------
    # Helpers
    # ---------------------------

    def _add_neuron(self, neuron):
        self.neurons.append(neuron)
        return len(self.neurons) - 1

    def _index_of(self, loc, families=None):
        if families is None:
            families = (self.plastic_neurons, self.actuator_neurons, self.sensory_neurons)
        for family in families:
            if loc in family:
                return family[loc]
        raise LookupInconsistencyError(f"no neuron at {loc}")

    def _check_reflexes(self, reflexes):
        for reflex in reflexes:
            if reflex.sensor_name not in self.sensory_interfaces:
                raise ConfigurationError(f"reflex names unknown sensor {reflex.sensor_name!r}")
            if reflex.actuator_name not in self.actuator_interfaces:
                raise ConfigurationError(f"reflex names unknown actuator {reflex.actuator_name!r}")

    def _add_reflex(self, reflex):
        sensory = self.neurons[self.sensory_interfaces[reflex.sensor_name].index]
        actuator_index = self.actuator_interfaces[reflex.actuator_name].index
        sensory.synapses.add_static_synapse(actuator_index, reflex.weight, reflex.synapse_type)
        self.reflexes.append(reflex)
