"""Tests for random code generators."""

import numpy as np
import pytest

from erasure_search.generators import CodeGenerator, RegularLDPCCodeGenerator

N_BITS = 24
BIT_DEGREE = 3
CHECK_DEGREE = 4


@pytest.fixture
def generator() -> RegularLDPCCodeGenerator:
    """Create a (3, 4)-regular generator."""
    return RegularLDPCCodeGenerator(n_bits=N_BITS, bit_degree=BIT_DEGREE, check_degree=CHECK_DEGREE)


class TestRegularLDPCCodeGenerator:
    """Tests for the regular LDPC construction."""

    def test_is_code_generator(self, generator: RegularLDPCCodeGenerator) -> None:
        """The generator satisfies the generator protocol."""
        if not isinstance(generator, CodeGenerator):
            pytest.fail("RegularLDPCCodeGenerator should be a CodeGenerator")

    def test_dimensions(self, generator: RegularLDPCCodeGenerator) -> None:
        """Matrix has n * dv / dc rows and n columns."""
        code = generator.generate(np.random.default_rng(0))
        np.testing.assert_equal(code.n_rows, generator.n_checks)
        np.testing.assert_equal(code.n_columns, N_BITS)

    def test_regular_degrees(self, generator: RegularLDPCCodeGenerator) -> None:
        """Every row and every column has the requested degree."""
        dense = generator.generate(np.random.default_rng(1)).to_csr().toarray()
        np.testing.assert_array_equal(dense.sum(axis=1), np.full(generator.n_checks, CHECK_DEGREE))
        np.testing.assert_array_equal(dense.sum(axis=0), np.full(N_BITS, BIT_DEGREE))

    def test_reproducible(self, generator: RegularLDPCCodeGenerator) -> None:
        """Same random state gives the same code."""
        first = generator.generate(np.random.default_rng(42))
        second = generator.generate(np.random.default_rng(42))
        if first != second:
            pytest.fail("Generator is not deterministic")

    @pytest.mark.parametrize(
        ("n_bits", "bit_degree", "check_degree"),
        [
            (24, 1, 4),
            (24, 4, 4),
            (25, 3, 4),
            (0, 3, 4),
        ],
    )
    def test_invalid_parameters(self, n_bits: int, bit_degree: int, check_degree: int) -> None:
        """Degrees must be compatible with the block length."""
        with pytest.raises(ValueError):
            RegularLDPCCodeGenerator(n_bits=n_bits, bit_degree=bit_degree, check_degree=check_degree)
