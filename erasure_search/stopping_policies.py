"""Stopping rules for simulating one candidate code."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from erasure_search.parity_check_matrix import ParityCheckMatrix
from erasure_search.simulation import SimulationResult


@runtime_checkable
class Decoder(Protocol):
    """Protocol for a decoder bound to one code and one channel."""

    def simulate_n_iterations(self, n_iterations: int, rng: np.random.Generator) -> SimulationResult:
        """Simulate exactly ``n_iterations`` decodings."""
        ...

    def simulate_until_n_events(self, n_events: int, rng: np.random.Generator) -> SimulationResult:
        """Simulate until ``n_events`` successes and ``n_events`` failures."""
        ...

    def take_code(self) -> ParityCheckMatrix:
        """Hand the code back to the caller."""
        ...


class StoppingPolicy(Protocol):
    """Protocol for the rule deciding how long a candidate is simulated."""

    def simulate(self, decoder: Decoder, rng: np.random.Generator) -> SimulationResult:
        """Run ``decoder`` until the rule is satisfied."""
        ...


@dataclass(frozen=True)
class FixedIterations:
    """Simulate every candidate over the same number of trials."""

    n_iterations: int

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.n_iterations < 0:
            msg = f"n_iterations must be non-negative, got {self.n_iterations}"
            raise ValueError(msg)

    def simulate(self, decoder: Decoder, rng: np.random.Generator) -> SimulationResult:
        return decoder.simulate_n_iterations(self.n_iterations, rng)


@dataclass(frozen=True)
class BalancedEvents:
    """Simulate every candidate until it has both n successes and n failures."""

    n_events: int

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.n_events < 0:
            msg = f"n_events must be non-negative, got {self.n_events}"
            raise ValueError(msg)

    def simulate(self, decoder: Decoder, rng: np.random.Generator) -> SimulationResult:
        return decoder.simulate_until_n_events(self.n_events, rng)
