"""Random code generators."""

import logging
from typing import Protocol, runtime_checkable

import numpy as np
import pyldpc

from erasure_search.parity_check_matrix import ParityCheckMatrix

logger = logging.getLogger(__name__)

# pyldpc seeds a legacy RandomState, which only accepts 32-bit seeds
_MAX_LEGACY_SEED = 2**32

MIN_BIT_DEGREE = 2


@runtime_checkable
class CodeGenerator(Protocol):
    """Protocol for anything that draws a parity-check matrix at random."""

    def generate(self, rng: np.random.Generator) -> ParityCheckMatrix:
        """Return one matrix, deterministic given the state of ``rng``."""
        ...


class RegularLDPCCodeGenerator:
    """Gallager construction of regular LDPC codes.

    Every bit is in ``bit_degree`` checks and every check contains
    ``check_degree`` bits.
    """

    def __init__(self, n_bits: int, bit_degree: int, check_degree: int) -> None:
        """Validate the degrees against the block length."""
        if bit_degree < MIN_BIT_DEGREE:
            msg = f"bit_degree must be at least {MIN_BIT_DEGREE}, got {bit_degree}"
            raise ValueError(msg)
        if check_degree <= bit_degree:
            msg = f"check_degree ({check_degree}) must be greater than bit_degree ({bit_degree})"
            raise ValueError(msg)
        if n_bits <= 0 or n_bits % check_degree:
            msg = f"check_degree ({check_degree}) must divide n_bits ({n_bits})"
            raise ValueError(msg)
        self.n_bits = n_bits
        self.bit_degree = bit_degree
        self.check_degree = check_degree

    @property
    def n_checks(self) -> int:
        return self.n_bits * self.bit_degree // self.check_degree

    def generate(self, rng: np.random.Generator) -> ParityCheckMatrix:
        """Draw one regular parity-check matrix from ``rng``."""
        seed = int(rng.integers(_MAX_LEGACY_SEED))
        h_mat = pyldpc.parity_check_matrix(self.n_bits, self.bit_degree, self.check_degree, seed=seed)
        logger.debug("Generated (%d, %d)-regular code of length %d", self.bit_degree, self.check_degree, self.n_bits)
        return ParityCheckMatrix.from_matrix(h_mat)

    def __repr__(self) -> str:
        return f"RegularLDPCCodeGenerator(n_bits={self.n_bits}, bit_degree={self.bit_degree}, check_degree={self.check_degree})"
