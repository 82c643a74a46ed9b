# geometry.py
"""
Lattice placement and nearby-synapse enumeration.

Three coordinate families share one 3D index space (x, y, z):
- plastic:  the cube {0..L-1}^3, enumerated x fastest, z slowest;
- actuator: the plane y = L just outside the cube, raster over (x, z), x fastest;
- sensory:  the plane y = -1, raster over a ceil(sqrt(n)) x ceil(sqrt(n)) square.

Every plastic or sensory coordinate synapses onto exactly `nearby_count` destinations
drawn from a W×W×W window, W³ = nearby_count + 1. The window is scanned x fastest and its
last cell (the far corner) is never used, so the scan yields nearby_count cells.

Actuator adjacency is precomputed: each actuator registers the W³ plastic cells of the
window on the top layers under its (x, z) position. A plastic coordinate adjacent to k
actuators targets those k actuators first and skips the first k cells of its own window.
"""
import logging
import math
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from errors import ConfigurationError, LookupInconsistencyError

logger = logging.getLogger(__name__)

Coord = Tuple[int, int, int]

SENSORY_Y = -1


class Neighbors(NamedTuple):
    plastic: List[Coord]
    actuator: List[Coord]


def integer_root(n, k):
    """Return r with r**k == n, or None when n is not a perfect k-th power."""
    if n < 0:
        return None
    r = int(round(n ** (1.0 / k)))
    for cand in (r - 1, r, r + 1):
        if cand >= 0 and cand ** k == n:
            return cand
    return None


def grid_positions(side):
    # rows are (x, y, z); x varies fastest, z slowest
    zz, yy, xx = np.meshgrid(np.arange(side), np.arange(side), np.arange(side), indexing='ij')
    return np.stack([xx, yy, zz], axis=-1).reshape(-1, 3)


def raster(side, count, y):
    """First `count` cells of an (x, z) raster at height y, x in 0..side-1 fastest."""
    return [(i % side, y, i // side) for i in range(count)]


def _as_coords(rows):
    return [tuple(int(v) for v in row) for row in rows]


class EcpBox:
    def __init__(self, num_plastic, num_actuator, num_sensory, nearby_count):
        for label, value in (("num_plastic", num_plastic), ("num_actuator", num_actuator),
                             ("num_sensory", num_sensory), ("nearby_count", nearby_count)):
            if value < 0:
                raise ConfigurationError(f"{label} must be non-negative, got {value}")

        side = integer_root(num_plastic, 3)
        if side is None:
            raise ConfigurationError(f"num_plastic={num_plastic} is not a perfect cube")
        window = integer_root(nearby_count + 1, 3)
        if window is None:
            raise ConfigurationError(
                f"nearby_count+1={nearby_count + 1} is not a perfect cube")
        if window > side:
            raise ConfigurationError(
                f"window side {window} does not fit in a lattice of side {side}")

        self.num_plastic = num_plastic
        self.num_actuator = num_actuator
        self.num_sensory = num_sensory
        self.nearby_count = nearby_count
        self.side = side
        self.window = window
        self.sensory_side = math.isqrt(num_sensory)
        if self.sensory_side ** 2 < num_sensory:
            self.sensory_side += 1

        self._cube = grid_positions(window)
        self._scan = self._cube[:-1]  # far corner dropped

        self._plastic = _as_coords(grid_positions(side))
        self._actuator = raster(side, num_actuator, side)
        self._sensory = raster(self.sensory_side, num_sensory, SENSORY_Y)
        self._order = {
            "plastic": {loc: i for i, loc in enumerate(self._plastic)},
            "actuator": {loc: i for i, loc in enumerate(self._actuator)},
            "sensory": {loc: i for i, loc in enumerate(self._sensory)},
        }

        # actuator -> plastic cells of its window; plastic -> actuators, in actuator order
        self._actuator_windows: Dict[Coord, List[Coord]] = {}
        self._adjacent_actuators: Dict[Coord, List[Coord]] = {}
        for loc in self._actuator:
            ax, _, az = loc
            origin = (self._clamp(ax - window // 2), side - window, self._clamp(az - window // 2))
            cells = _as_coords(self._cube + np.asarray(origin))
            self._actuator_windows[loc] = cells
            for cell in cells:
                self._adjacent_actuators.setdefault(cell, []).append(loc)

        logger.info("EcpBox: side=%d window=%d plastic=%d actuator=%d sensory=%d (grid %d)",
                    side, window, num_plastic, num_actuator, num_sensory, self.sensory_side)

    @classmethod
    def from_config(cls, cfg):
        return cls(cfg.num_plastic, cfg.num_actuator, cfg.num_sensory, cfg.nearby_count)

    def __repr__(self):
        return (f"EcpBox(num_plastic={self.num_plastic}, num_actuator={self.num_actuator}, "
                f"num_sensory={self.num_sensory}, nearby_count={self.nearby_count})")

    # --- enumeration

    def plastic_locations(self) -> List[Coord]:
        return list(self._plastic)

    def actuator_locations(self) -> List[Coord]:
        return list(self._actuator)

    def sensory_locations(self) -> List[Coord]:
        return list(self._sensory)

    def first_plastic_loc(self) -> Optional[Coord]:
        return self._first(self._plastic)

    def next_plastic_loc(self, loc) -> Optional[Coord]:
        return self._next("plastic", self._plastic, loc)

    def first_actuator_loc(self) -> Optional[Coord]:
        return self._first(self._actuator)

    def next_actuator_loc(self, loc) -> Optional[Coord]:
        return self._next("actuator", self._actuator, loc)

    def first_sensory_loc(self) -> Optional[Coord]:
        return self._first(self._sensory)

    def next_sensory_loc(self, loc) -> Optional[Coord]:
        return self._next("sensory", self._sensory, loc)

    def is_plastic(self, loc):
        return tuple(loc) in self._order["plastic"]

    def is_actuator(self, loc):
        return tuple(loc) in self._order["actuator"]

    def is_sensory(self, loc):
        return tuple(loc) in self._order["sensory"]

    # --- adjacency

    def actuators_adjacent_to(self, loc) -> List[Coord]:
        """Actuators whose window contains the plastic coordinate `loc`."""
        return list(self._adjacent_actuators.get(tuple(loc), ()))

    def plastic_adjacent_to(self, loc) -> List[Coord]:
        """Plastic cells registered under the actuator at `loc`."""
        loc = tuple(loc)
        if loc not in self._actuator_windows:
            raise LookupInconsistencyError(f"{loc} is not an actuator coordinate")
        return list(self._actuator_windows[loc])

    def neighbors(self, loc) -> Neighbors:
        """
        Destinations for the plastic or sensory coordinate `loc`.

        Plastic: actuators registered for `loc` first (at most nearby_count of them), then
        the window centred on `loc` (clamped into the cube), skipping as many scan cells as
        actuators were returned. Sensory: (x, z) rescaled from the sensor grid onto the
        cube, window on the bottom layers, no actuators.
        """
        loc = tuple(loc)
        w = self.window
        if loc in self._order["plastic"]:
            origin = tuple(self._clamp(v - w // 2) for v in loc)
            actuators = self._adjacent_actuators.get(loc, [])[:self.nearby_count]
            cells = _as_coords(self._scan[len(actuators):] + np.asarray(origin))
            return Neighbors(cells, list(actuators))
        if loc in self._order["sensory"]:
            x, _, z = loc
            origin = (self._clamp(self._project(x) - w // 2), 0,
                      self._clamp(self._project(z) - w // 2))
            return Neighbors(_as_coords(self._scan + np.asarray(origin)), [])
        raise LookupInconsistencyError(f"{loc} is neither a plastic nor a sensory coordinate")

    # --- helpers

    def _clamp(self, v):
        return min(max(v, 0), self.side - self.window)

    def _project(self, v):
        # sensor grid index -> lattice index, linear, rounded half up
        if self.sensory_side <= 1:
            return 0
        return int(math.floor(v * (self.side - 1) / (self.sensory_side - 1) + 0.5))

    @staticmethod
    def _first(locs):
        return locs[0] if locs else None

    def _next(self, family, locs, loc):
        loc = tuple(loc)
        order = self._order[family]
        if loc not in order:
            raise LookupInconsistencyError(f"{loc} is not a {family} coordinate")
        i = order[loc] + 1
        return locs[i] if i < len(locs) else None
