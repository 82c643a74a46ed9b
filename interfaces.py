# interfaces.py
"""
Sensors, actuators, and their bindings to neurons.

A Sensor supplies a value in [0, 1] each cycle; an Actuator receives the measure of its
actuator neuron. Both are identified by a stable name.
"""
from abc import ABC, abstractmethod
from typing import List


class Sensor(ABC):
    def __init__(self, name):
        self._name = str(name)

    @property
    def name(self):
        return self._name

    @abstractmethod
    def measure(self) -> float:
        """Current value, expected in [0, 1]."""

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r})"


class Actuator(ABC):
    def __init__(self, name):
        self._name = str(name)

    @property
    def name(self):
        return self._name

    @abstractmethod
    def set_control_value(self, value: float) -> None:
        ...

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r})"


class ConstantSensor(Sensor):
    def __init__(self, name, value):
        super().__init__(name)
        self.value = float(value)

    def measure(self):
        return self.value


class BasicSensor(Sensor):
    """Sensor whose value is set from outside between cycles."""

    def __init__(self, name, value=0.0):
        super().__init__(name)
        self.value = float(value)

    def set_measure(self, value):
        self.value = float(value)

    def measure(self):
        return self.value


class BasicActuator(Actuator):
    def __init__(self, name):
        super().__init__(name)
        self.value = 0.0

    def set_control_value(self, value):
        self.value = float(value)


class RecordingActuator(BasicActuator):
    def __init__(self, name):
        super().__init__(name)
        self.history: List[float] = []

    def set_control_value(self, value):
        super().set_control_value(value)
        self.history.append(self.value)


class SensoryInterface:
    """Binds a sensor to the sensory neuron at `index` in the neuron arena."""

    def __init__(self, sensor, index):
        self.sensor = sensor
        self.index = index

    def pull(self, arena):
        arena[self.index].set_measure(self.sensor.measure())


class ActuatorInterface:
    """Binds an actuator to the actuator neuron at `index` in the neuron arena."""

    def __init__(self, actuator, index):
        self.actuator = actuator
        self.index = index
        self.last_value = 0.0

    def push(self, arena):
        self.last_value = arena[self.index].read_measure()
        self.actuator.set_control_value(self.last_value)
