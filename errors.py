# errors.py
"""
Exception classes for the lattice encephalon.

EncephalonError (base)
├── ConfigurationError        - invalid sizes or parameters, raised once at construction
└── LookupInconsistencyError  - a coordinate or name missing from a populated network
"""

from __future__ import annotations


class EncephalonError(Exception):
    """Base exception for all encephalon errors."""


class ConfigurationError(EncephalonError):
    """Invalid construction parameters.

    Raised when lattice sizes are not perfect cubes, when sensor or actuator
    counts disagree with the geometry, or when neuron parameters are out of
    range. Construction is aborted; there is no partially built network.
    """


class LookupInconsistencyError(EncephalonError, KeyError):
    """A coordinate or name that should exist is missing.

    Cannot happen for a network built by ``Encephalon``; treated as an
    invariant violation and never retried.
    """

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
