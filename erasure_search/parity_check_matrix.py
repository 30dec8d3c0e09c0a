"""Sparse parity-check matrix over GF(2).

The matrix is stored in compressed sparse row form: ``row_ranges[i]`` and
``row_ranges[i + 1]`` bound the slice of ``column_indices`` holding the
positions of the non-zero entries of row ``i``. Rows with no entries are
kept as zero-length ranges so that row numbering is preserved.
"""

from collections.abc import Iterable, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import sparse

from erasure_search.gf2 import as_gf2_vector

INDEX_DTYPE = np.int64


class RowSlice:
    """Read-only view of the column positions of one matrix row."""

    __slots__ = ("_positions",)

    def __init__(self, positions: NDArray[np.int64]) -> None:
        """Wrap a view into the parent matrix column indices."""
        self._positions = positions

    @property
    def positions(self) -> NDArray[np.int64]:
        """Column positions of the non-zero entries of the row."""
        return self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[int]:
        return (int(pos) for pos in self._positions)

    def __repr__(self) -> str:
        return f"RowSlice({self._positions.tolist()})"

    def dot(self, vector: ArrayLike) -> int:
        """Return the GF(2) dot product of the row with a bit vector.

        Positions at or beyond the vector length are skipped.
        """
        bits = as_gf2_vector(vector)
        in_range = self._positions[self._positions < len(bits)]
        return int(np.bitwise_xor.reduce(bits[in_range], initial=0))


class ParityCheckMatrix:
    """Parity-check matrix built from the positions of its non-zero entries.

    Example, the parity-check matrix of a 3 bits repetition code::

        ParityCheckMatrix([(0, 0), (0, 1), (1, 1), (1, 2)])

    Positions must be sorted by non-decreasing row. Within a row the column
    order is kept as given.
    """

    def __init__(self, positions: Iterable[tuple[int, int]], n_columns: int | None = None) -> None:
        """Build the row ranges and column indices from (row, column) pairs."""
        row_ranges = [0]
        column_indices: list[int] = []
        active_row = 0

        for raw_row, raw_col in positions:
            row, col = int(raw_row), int(raw_col)
            if row < 0 or col < 0:
                msg = f"Negative position ({row}, {col})"
                raise ValueError(msg)
            if row < active_row:
                msg = f"Positions must be sorted by row, got row {row} after row {active_row}"
                raise ValueError(msg)
            while active_row < row:
                row_ranges.append(len(column_indices))
                active_row += 1
            column_indices.append(col)

        if column_indices:
            row_ranges.append(len(column_indices))

        min_columns = max(column_indices) + 1 if column_indices else 0
        if n_columns is None:
            n_columns = min_columns
        elif n_columns < min_columns:
            msg = f"n_columns={n_columns} is too small for column index {min_columns - 1}"
            raise ValueError(msg)

        self._row_ranges = np.array(row_ranges, dtype=INDEX_DTYPE)
        self._column_indices = np.array(column_indices, dtype=INDEX_DTYPE)
        self._row_ranges.flags.writeable = False
        self._column_indices.flags.writeable = False
        self._n_columns = int(n_columns)

    @classmethod
    def from_matrix(cls, matrix: ArrayLike | sparse.spmatrix) -> "ParityCheckMatrix":
        """Build from a dense array or a scipy sparse matrix.

        Entries are reduced modulo 2. Trailing empty rows are dropped.
        """
        coo = sparse.coo_matrix(matrix)
        coo.sum_duplicates()
        order = np.lexsort((coo.col, coo.row))
        nonzero = (coo.data[order] % 2) != 0
        rows = coo.row[order][nonzero]
        cols = coo.col[order][nonzero]
        return cls(zip(rows, cols), n_columns=coo.shape[1])

    @property
    def row_ranges(self) -> NDArray[np.int64]:
        """Bounds of each row in ``column_indices`` (length ``n_rows + 1``)."""
        return self._row_ranges

    @property
    def column_indices(self) -> NDArray[np.int64]:
        """Column positions of all non-zero entries, contiguous per row."""
        return self._column_indices

    @property
    def n_rows(self) -> int:
        return len(self._row_ranges) - 1

    @property
    def n_columns(self) -> int:
        return self._n_columns

    @property
    def n_edges(self) -> int:
        return len(self._column_indices)

    def row_slice(self, row: int) -> RowSlice | None:
        """Return the slice of ``row``, or None if there is no such row."""
        if row < 0 or row + 1 >= len(self._row_ranges):
            return None
        start, end = self._row_ranges[row], self._row_ranges[row + 1]
        return RowSlice(self._column_indices[start:end])

    def rows(self) -> Iterator[RowSlice]:
        """Iterate over the slices of all rows."""
        for start, end in zip(self._row_ranges[:-1], self._row_ranges[1:]):
            yield RowSlice(self._column_indices[start:end])

    def to_csr(self) -> sparse.csr_matrix:
        """Return the matrix as a scipy CSR matrix with the same layout."""
        data = np.ones(self.n_edges, dtype=np.uint8)
        return sparse.csr_matrix(
            (data, self._column_indices.copy(), self._row_ranges.copy()),
            shape=(self.n_rows, self.n_columns),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParityCheckMatrix):
            return NotImplemented
        return (
            self._n_columns == other._n_columns
            and np.array_equal(self._row_ranges, other._row_ranges)
            and np.array_equal(self._column_indices, other._column_indices)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParityCheckMatrix(n_rows={self.n_rows}, n_columns={self.n_columns}, n_edges={self.n_edges})"
