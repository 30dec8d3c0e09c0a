"""The main module of the erasure-search package."""

import logging

import numpy as np

from erasure_search import BestCodeFinderUsingErasure, RegularLDPCCodeGenerator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

SEED = 123


def main() -> None:
    """Search the best of a few small regular LDPC codes."""
    logger = logging.getLogger(__name__)
    logger.info("Starting erasure-search main function.")

    generator = RegularLDPCCodeGenerator(n_bits=16, bit_degree=3, check_degree=4)
    code_finder = BestCodeFinderUsingErasure.from_code_generator(generator).with_erasure_prob(0.25).among_n_codes(10)
    code, result = code_finder.find_best_code_simulating_n_iterations_with_rng(1000, np.random.default_rng(SEED))
    logger.info("Best code: %s, failure rate %.4f +/- %.4f", code, result.failure_rate, result.standard_error)


if __name__ == "__main__":
    main()
