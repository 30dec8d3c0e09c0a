"""Search for the best code of a generator under the erasure channel.

Example::

    generator = RegularLDPCCodeGenerator(n_bits=16, bit_degree=3, check_degree=4)
    code_finder = (
        BestCodeFinderUsingErasure.from_code_generator(generator)
        .with_erasure_prob(0.25)
        .among_n_codes(10)
    )
    code, result = code_finder.find_best_code_simulating_n_iterations(1000)

Reproducibility: one seed per candidate is drawn from the caller's random
source, in candidate order, before any worker starts. Each worker builds its
own generator from its seed, and the results are reduced in candidate order,
so the winner does not depend on the number of workers or on scheduling.
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from functools import reduce
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from erasure_search.erasure_decoder import ErasureDecoder
from erasure_search.generators import CodeGenerator
from erasure_search.parity_check_matrix import ParityCheckMatrix
from erasure_search.simulation import SimulationResult
from erasure_search.stopping_policies import BalancedEvents, Decoder, FixedIterations, StoppingPolicy

logger = logging.getLogger(__name__)

DEFAULT_ERASURE_PROB = 0.5

DecoderFactory = Callable[[ParityCheckMatrix, float], Decoder]


class CodeAndResult(NamedTuple):
    """A candidate code with its simulated performance."""

    code: ParityCheckMatrix | None
    result: SimulationResult


def _identity() -> CodeAndResult:
    return CodeAndResult(None, SimulationResult.worse_result())


def _best_between(first: CodeAndResult, second: CodeAndResult) -> CodeAndResult:
    """Keep ``second`` only if it is strictly better, the identity always loses."""
    if first.code is None:
        return second
    if second.code is None:
        return first
    if second.result.is_better_than(first.result):
        return second
    return first


@dataclass(frozen=True)
class BestCodeFinderUsingErasure:
    """Find the best code produced by a generator among a number of tries.

    Configured through the chained ``among_n_codes``, ``with_erasure_prob``,
    ``with_max_workers`` and ``with_decoder`` methods, each returning a new
    finder. An erasure probability outside [0, 1] raises ``ValueError`` when
    it is set.
    """

    code_generator: CodeGenerator
    erasure_prob: float = DEFAULT_ERASURE_PROB
    n_codes_to_try: int = 0
    max_workers: int | None = None  # None lets the executor pick
    decoder_factory: DecoderFactory = ErasureDecoder

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 0.0 <= self.erasure_prob <= 1.0:
            msg = f"erasure_prob must be between 0 and 1, got {self.erasure_prob}"
            raise ValueError(msg)
        if self.n_codes_to_try < 0:
            msg = f"n_codes_to_try must be non-negative, got {self.n_codes_to_try}"
            raise ValueError(msg)
        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be at least 1, got {self.max_workers}"
            raise ValueError(msg)

    # ***** Construction *****

    @classmethod
    def from_code_generator(cls, code_generator: CodeGenerator) -> "BestCodeFinderUsingErasure":
        """Create a finder with erasure probability 0.5 and no code to try."""
        return cls(code_generator=code_generator)

    def among_n_codes(self, n_codes: int) -> "BestCodeFinderUsingErasure":
        """Set the number of codes to try, 0 if not specified."""
        return replace(self, n_codes_to_try=n_codes)

    def with_erasure_prob(self, prob: float) -> "BestCodeFinderUsingErasure":
        """Set the erasure probability used to simulate the codes."""
        return replace(self, erasure_prob=prob)

    def with_max_workers(self, max_workers: int | None) -> "BestCodeFinderUsingErasure":
        """Set the number of worker threads, does not change the result."""
        return replace(self, max_workers=max_workers)

    def with_decoder(self, decoder_factory: DecoderFactory) -> "BestCodeFinderUsingErasure":
        """Set the callable building a decoder from a code and a probability."""
        return replace(self, decoder_factory=decoder_factory)

    # ***** Search *****

    def find_best_code_simulating_n_iterations_with_rng(
        self,
        n_iterations: int,
        rng: np.random.Generator,
    ) -> CodeAndResult:
        """Return the best code and its performance using ``rng``.

        Each code is evaluated over ``n_iterations`` random erasure patterns.
        The code is None only when no code was tried.
        """
        return self.find_best_code_with_rng(FixedIterations(n_iterations), rng)

    def find_best_code_simulating_n_iterations(self, n_iterations: int) -> CodeAndResult:
        """Same as the ``_with_rng`` variant with a freshly seeded generator."""
        return self.find_best_code_simulating_n_iterations_with_rng(n_iterations, np.random.default_rng())

    def find_best_code_simulating_n_events_with_rng(
        self,
        n_events: int,
        rng: np.random.Generator,
    ) -> CodeAndResult:
        """Return the best code and its performance using ``rng``.

        Each code is simulated until ``n_events`` successes and ``n_events``
        failures were observed.
        """
        return self.find_best_code_with_rng(BalancedEvents(n_events), rng)

    def find_best_code_simulating_n_events(self, n_events: int) -> CodeAndResult:
        """Same as the ``_with_rng`` variant with a freshly seeded generator."""
        return self.find_best_code_simulating_n_events_with_rng(n_events, np.random.default_rng())

    def find_best_code_with_rng(self, policy: StoppingPolicy, rng: np.random.Generator) -> CodeAndResult:
        """Simulate every candidate under ``policy`` and keep the best one."""
        if self.n_codes_to_try == 0:
            return _identity()

        seeds = self._draw_seeds(rng)
        logger.info(
            "Searching best code among %d with %s at erasure probability %.3f",
            self.n_codes_to_try,
            policy,
            self.erasure_prob,
        )

        def simulate(seed: np.uint64) -> CodeAndResult:
            return self._simulate_one_code(int(seed), policy)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # map yields in candidate order whatever the completion order
            best = reduce(_best_between, pool.map(simulate, seeds), _identity())

        logger.info("Best failure rate %.4f", best.result.failure_rate)
        return best

    def _draw_seeds(self, rng: np.random.Generator) -> NDArray[np.uint64]:
        return rng.integers(
            0,
            np.iinfo(np.uint64).max,
            size=self.n_codes_to_try,
            dtype=np.uint64,
            endpoint=True,
        )

    def _simulate_one_code(self, seed: int, policy: StoppingPolicy) -> CodeAndResult:
        rng = np.random.default_rng(seed)
        code = self.code_generator.generate(rng)
        decoder = self.decoder_factory(code, self.erasure_prob)
        result = policy.simulate(decoder, rng)
        logger.debug("Candidate with seed %d has failure rate %.4f", seed, result.failure_rate)
        return CodeAndResult(decoder.take_code(), result)
