"""Binary field helpers for GF(2) vectors."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

GF2_DTYPE = np.uint8


def as_gf2_vector(values: ArrayLike) -> NDArray[np.uint8]:
    """Convert a sequence of bits to a 1-D GF(2) array."""
    vector = np.asarray(values)
    if vector.ndim != 1:
        msg = f"Expected a 1-D bit vector, got an array with {vector.ndim} dimensions"
        raise ValueError(msg)
    if not np.all((vector == 0) | (vector == 1)):
        msg = "Vector must be binary"
        raise ValueError(msg)
    return vector.astype(GF2_DTYPE)


def gf2_add(a: int, b: int) -> int:
    """Add two field elements (XOR)."""
    return (a ^ b) & 1
