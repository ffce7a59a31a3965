"""
types.py - Core Types and Argument Handling for vectrans

This module defines the building blocks shared by every operator constructor:
- SparseFormat: Which scipy.sparse layout an operator is returned in
- ScalarType: Anything numpy accepts as a numeric dtype
- SparseTriplets: Accumulates (row, col, value) triples, then assembles them
  into a sparse array with duplicates summed

Design Principles:
-----------------
1. Operators are values: every build returns a freshly allocated array
2. Validation at the boundary (fail-fast on negative sizes or odd dtypes)
3. Numpy-style docstrings throughout

Example Usage:
-------------
    >>> import numpy as np
    >>> from vectrans.types import SparseTriplets
    >>>
    >>> # 2x2 anti-diagonal permutation
    >>> builder = SparseTriplets(shape=(2, 2)).add(rows=[0, 1], cols=[1, 0])
    >>> P = builder.build(dtype=np.int64)
    >>> P.toarray()
    array([[0, 1],
           [1, 0]])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple, Union

import numpy as np
import scipy.sparse
from loguru import logger

from .exceptions import InvalidArgumentError


# =============================================================================
# TYPE ALIASES & DEFAULTS
# =============================================================================

# Anything np.dtype() understands: np.int64, "float32", np.dtype(complex), ...
ScalarType = Union[type, str, np.dtype]

# Operators hold exact 0/1 entries, so a fixed-width signed integer suffices.
DEFAULT_DTYPE = np.int64


class SparseFormat(str, Enum):
    """Storage layout of a returned operator."""
    CSC = "csc"
    CSR = "csr"
    COO = "coo"


# =============================================================================
# ARGUMENT VALIDATION
# =============================================================================

def validate_dimension(value: Any, name: str = "n") -> int:
    """
    Check that a matrix dimension is a non-negative integer.

    Parameters
    ----------
    value : int
        The dimension to check. Numpy integer scalars are accepted.
    name : str, default="n"
        Argument name used in the error message.

    Returns
    -------
    int
        The dimension as a plain Python int.

    Raises
    ------
    InvalidArgumentError
        If `value` is not an integer (bools included) or is negative.
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        logger.error(f"Dimension '{name}' must be an integer, got {type(value).__name__}")
        raise InvalidArgumentError(
            f"dimension '{name}' must be an integer", {name: value}
        )
    if value < 0:
        logger.error(f"Dimension '{name}' must be non-negative, got {value}")
        raise InvalidArgumentError(
            f"dimension '{name}' must be non-negative", {name: int(value)}
        )
    return int(value)


def resolve_dtype(dtype: ScalarType) -> np.dtype:
    """
    Normalize a scalar type argument to a numeric ``np.dtype``.

    Raises
    ------
    InvalidArgumentError
        If numpy does not recognise `dtype`, or it is not a numeric type
        (bool, object, string and datetime dtypes are rejected), or
        scipy.sparse cannot store it (e.g. float16).
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        logger.error(f"Unrecognised dtype: {dtype!r}")
        raise InvalidArgumentError("unrecognised dtype", {"dtype": dtype}) from e

    if not np.issubdtype(dt, np.number):
        logger.error(f"Non-numeric dtype requested: {dt}")
        raise InvalidArgumentError("dtype must be numeric", {"dtype": str(dt)})

    try:
        scipy.sparse.coo_array((0, 0), dtype=dt)
    except ValueError as e:
        logger.error(f"dtype {dt} is not supported by scipy.sparse")
        raise InvalidArgumentError(
            "dtype not supported by scipy.sparse", {"dtype": str(dt)}
        ) from e
    return dt


def resolve_format(format: Union[str, SparseFormat]) -> SparseFormat:
    """Map a string or SparseFormat to a SparseFormat member."""
    try:
        return SparseFormat(format)
    except ValueError as e:
        valid = [f.value for f in SparseFormat]
        logger.error(f"Unsupported sparse format '{format}'. Valid: {valid}")
        raise InvalidArgumentError(
            "unsupported sparse format", {"format": format, "valid": valid}
        ) from e


# =============================================================================
# INDEXING
# =============================================================================

def lower_triangle_indices(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    (row, col) indices of the lower triangle of an n x n matrix in vech order.

    Column j contributes rows j, j+1, ..., n-1, columns taken left to right.
    """
    # triu_indices walks (c, r) with c <= r row by row, i.e. column-major on
    # the lower triangle once the pair is swapped.
    cols, rows = np.triu_indices(n)
    return rows, cols


# =============================================================================
# SPARSE BUILDER
# =============================================================================

@dataclass
class SparseTriplets:
    """
    Accumulator for (row, col, value) triples of a sparse operator.

    Index chunks are appended with `add` and assembled once with `build`.
    Repeated (row, col) pairs are summed during assembly.

    Parameters
    ----------
    shape : Tuple[int, int]
        Dimensions of the operator to assemble.

    Examples
    --------
    >>> builder = (
    ...     SparseTriplets(shape=(3, 3))
    ...     .add(rows=np.arange(3), cols=np.arange(3))
    ...     .add(rows=[0], cols=[0])  # summed with the first (0, 0)
    ... )
    >>> builder.build().toarray()[0, 0]
    2
    """
    shape: Tuple[int, int]
    _rows: List[np.ndarray] = field(default_factory=list, init=False, repr=False)
    _cols: List[np.ndarray] = field(default_factory=list, init=False, repr=False)
    _values: List[Any] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if len(self.shape) != 2:
            logger.error(f"Sparse shape must have two entries, got {self.shape}")
            raise InvalidArgumentError("shape must have two entries", {"shape": self.shape})
        self.shape = (
            validate_dimension(self.shape[0], "rows"),
            validate_dimension(self.shape[1], "cols"),
        )

    @property
    def nnz(self) -> int:
        """Number of stored triples (before duplicates are summed)."""
        return sum(len(r) for r in self._rows)

    def add(self, rows, cols, value: Any = 1) -> "SparseTriplets":
        """
        Append a chunk of triples that all share the same value.

        Parameters
        ----------
        rows, cols : array_like of int
            0-based row and column indices; must have equal length.
        value : scalar, default=1
            Value stored at every (row, col) pair in this chunk.

        Returns
        -------
        SparseTriplets
            `self`, so calls can be chained.
        """
        rows = np.asarray(rows, dtype=np.intp).ravel()
        cols = np.asarray(cols, dtype=np.intp).ravel()

        if rows.shape != cols.shape:
            raise InvalidArgumentError(
                "row and column index arrays differ in length",
                {"rows": rows.size, "cols": cols.size},
            )
        self._check_bounds(rows, self.shape[0], "row")
        self._check_bounds(cols, self.shape[1], "column")

        self._rows.append(rows)
        self._cols.append(cols)
        self._values.append(value)
        return self

    @staticmethod
    def _check_bounds(idx: np.ndarray, limit: int, axis: str) -> None:
        if idx.size and (idx.min() < 0 or idx.max() >= limit):
            logger.error(f"{axis} index out of range [0, {limit})")
            raise InvalidArgumentError(
                f"{axis} index out of range",
                {"min": int(idx.min()), "max": int(idx.max()), "limit": limit},
            )

    def build(
        self,
        dtype: ScalarType = DEFAULT_DTYPE,
        format: Union[str, SparseFormat] = SparseFormat.CSC,
    ) -> scipy.sparse.sparray:
        """
        Assemble the accumulated triples into a scipy sparse array.

        Parameters
        ----------
        dtype : dtype-like, default=np.int64
            Element type of the result.
        format : SparseFormat or str, default="csc"
            Storage layout of the result.

        Returns
        -------
        scipy.sparse.sparray
            Sparse array of shape `self.shape`, duplicates summed.
        """
        dt = resolve_dtype(dtype)
        fmt = resolve_format(format)

        if self._rows:
            rows = np.concatenate(self._rows)
            cols = np.concatenate(self._cols)
            data = np.concatenate([
                np.full(len(r), v, dtype=dt) for r, v in zip(self._rows, self._values)
            ])
        else:
            rows = np.empty(0, dtype=np.intp)
            cols = np.empty(0, dtype=np.intp)
            data = np.empty(0, dtype=dt)

        coo = scipy.sparse.coo_array((data, (rows, cols)), shape=self.shape, dtype=dt)
        coo.sum_duplicates()
        return coo.asformat(fmt.value)
