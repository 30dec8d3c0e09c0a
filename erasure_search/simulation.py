"""Monte-Carlo simulation results."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SimulationResult:
    """Number of successful and failed decodings of a simulation."""

    n_successes: int
    n_failures: int

    def __post_init__(self) -> None:
        """Validate the event counts."""
        if self.n_successes < 0 or self.n_failures < 0:
            msg = f"Event counts must be non-negative, got {self.n_successes} successes and {self.n_failures} failures"
            raise ValueError(msg)

    @classmethod
    def worse_result(cls) -> "SimulationResult":
        """Return the worst possible result (failure rate of 1)."""
        return cls(n_successes=0, n_failures=0)

    @property
    def n_iterations(self) -> int:
        return self.n_successes + self.n_failures

    @property
    def failure_rate(self) -> float:
        """Fraction of failed decodings, 1.0 when nothing was simulated."""
        if self.n_iterations == 0:
            return 1.0
        return self.n_failures / self.n_iterations

    @property
    def standard_error(self) -> float:
        """Binomial standard error of the failure rate estimate."""
        if self.n_iterations == 0:
            return 0.0
        rate = self.failure_rate
        return float(np.sqrt(rate * (1.0 - rate) / self.n_iterations))

    def is_better_than(self, other: "SimulationResult") -> bool:
        """Return True if the failure rate is strictly lower than ``other``'s."""
        return self.failure_rate < other.failure_rate
