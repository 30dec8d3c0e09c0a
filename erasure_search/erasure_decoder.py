"""Peeling decoder for the binary erasure channel.

The code is linear, so the transmitted codeword is taken to be all zeros and
only the erasure pattern matters. Each trial erases every bit independently
with the configured probability and runs the peeling decoder: a check with
exactly one erased neighbour determines that bit, which is then resolved.
Decoding succeeds when no erasure is left.
"""

import logging

import numba
import numpy as np
from numpy.typing import NDArray

from erasure_search.parity_check_matrix import ParityCheckMatrix
from erasure_search.simulation import SimulationResult

logger = logging.getLogger(__name__)


@numba.njit(cache=True, nogil=True)
def _peel(row_ranges: np.ndarray, column_indices: np.ndarray, erased: np.ndarray) -> bool:
    """JIT-compiled peeling decoder, resolves ``erased`` in place."""
    num_checks = len(row_ranges) - 1
    progress = True
    while progress:
        progress = False
        for ci in range(num_checks):
            n_erased = 0
            last_erased = -1
            for j in range(row_ranges[ci], row_ranges[ci + 1]):
                col = column_indices[j]
                if erased[col]:
                    n_erased += 1
                    last_erased = col
                    if n_erased > 1:
                        break
            if n_erased == 1:
                erased[last_erased] = False
                progress = True

    for bit in range(len(erased)):
        if erased[bit]:
            return False
    return True


class ErasureDecoder:
    """Erasure decoder bound to one parity-check matrix.

    The decoder owns its matrix until ``take_code`` hands it back.
    """

    def __init__(self, code: ParityCheckMatrix, erasure_prob: float) -> None:
        """Bind the decoder to ``code`` and the channel erasure probability."""
        if not 0.0 <= erasure_prob <= 1.0:
            msg = f"erasure_prob must be between 0 and 1, got {erasure_prob}"
            raise ValueError(msg)
        self._code: ParityCheckMatrix | None = code
        self.erasure_prob = erasure_prob

    @property
    def code(self) -> ParityCheckMatrix:
        if self._code is None:
            msg = "The code was taken from this decoder"
            raise RuntimeError(msg)
        return self._code

    def take_code(self) -> ParityCheckMatrix:
        """Return the matrix, the decoder can no longer be used afterwards."""
        code = self.code
        self._code = None
        return code

    def decode(self, erased: NDArray[np.bool_]) -> bool:
        """Try to recover every erased bit, returns True on success."""
        code = self.code
        if len(erased) != code.n_columns:
            msg = f"Expected {code.n_columns} bits, got {len(erased)}"
            raise ValueError(msg)
        pattern = np.array(erased, dtype=np.bool_)
        return bool(_peel(code.row_ranges, code.column_indices, pattern))

    def _random_erasures(self, rng: np.random.Generator) -> NDArray[np.bool_]:
        return rng.random(self.code.n_columns) < self.erasure_prob

    def simulate_n_iterations(self, n_iterations: int, rng: np.random.Generator) -> SimulationResult:
        """Decode ``n_iterations`` random erasure patterns."""
        n_successes = 0
        for _ in range(n_iterations):
            if self.decode(self._random_erasures(rng)):
                n_successes += 1
        result = SimulationResult(n_successes=n_successes, n_failures=n_iterations - n_successes)
        logger.debug("Simulated %d iterations, failure rate %.4f", n_iterations, result.failure_rate)
        return result

    def simulate_until_n_events(self, n_events: int, rng: np.random.Generator) -> SimulationResult:
        """Decode random erasure patterns until ``n_events`` successes and failures.

        There is no iteration ceiling: a code that almost never (or almost
        always) fails at this erasure probability can run for a long time.
        """
        n_successes = 0
        n_failures = 0
        while n_successes < n_events or n_failures < n_events:
            if self.decode(self._random_erasures(rng)):
                n_successes += 1
            else:
                n_failures += 1
        result = SimulationResult(n_successes=n_successes, n_failures=n_failures)
        logger.debug(
            "Simulated %d iterations until %d events, failure rate %.4f",
            result.n_iterations,
            n_events,
            result.failure_rate,
        )
        return result
