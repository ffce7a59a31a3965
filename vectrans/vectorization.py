"""
vectorization.py - Full and Half Vectorization of Matrices
==========================================================

Conversions between a matrix and its vectorized forms:
- vec / unvec: column-major stacking of all m*n entries
- vech / unvech: lower triangle (diagonal included) of a symmetric matrix,
  stacked column by column

The vech ordering is fixed: column j contributes A[j, j], A[j+1, j], ...,
A[n-1, j]. The sparse operators in `operators.py` index against exactly
this ordering.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
from loguru import logger

from .exceptions import InvalidInputError
from .types import lower_triangle_indices, validate_dimension


def _require_2d(A: np.ndarray, func: str) -> None:
    if A.ndim != 2:
        logger.error(f"{func} failed: expected a 2D array, got shape {A.shape}")
        raise InvalidInputError(f"{func} expects a 2D array", {"shape": A.shape})


def is_symmetric(A) -> bool:
    """
    Exact symmetry test: square, 2D and equal to its transpose.

    No tolerance is applied, so floating point matrices must match
    element-for-element and any NaN entry makes the matrix non-symmetric.
    """
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    return bool(np.array_equal(A, A.T))


def vec(A) -> np.ndarray:
    """
    Stack the columns of a matrix into a single vector.

    Parameters
    ----------
    A : array_like (m, n)

    Returns
    -------
    ndarray (m*n,)
        ``[A[0, 0], A[1, 0], ..., A[m-1, 0], A[0, 1], ...]``

    Examples
    --------
    >>> vec(np.array([[1, 3], [2, 4]]))
    array([1, 2, 3, 4])
    """
    A = np.asarray(A)
    _require_2d(A, "vec")
    return A.ravel(order="F").copy()


def unvec(v, m: int, n: Optional[int] = None) -> np.ndarray:
    """
    Inverse of `vec`: reshape a vector into an (m, n) matrix column by column.

    Parameters
    ----------
    v : array_like (m*n,)
    m : int
        Number of rows.
    n : int, optional
        Number of columns. Inferred from ``len(v) // m`` when omitted.

    Raises
    ------
    InvalidInputError
        If `v` is not 1D or its length is not m*n.
    InvalidArgumentError
        If a dimension is negative.
    """
    v = np.asarray(v)
    if v.ndim != 1:
        logger.error(f"unvec failed: expected a 1D array, got shape {v.shape}")
        raise InvalidInputError("unvec expects a 1D array", {"shape": v.shape})

    m = validate_dimension(m, "m")
    if n is None:
        n = v.size // m if m else 0
    n = validate_dimension(n, "n")

    if v.size != m * n:
        logger.error(f"unvec failed: length {v.size} does not match {m}x{n}")
        raise InvalidInputError(
            "vector length does not match requested shape",
            {"length": v.size, "m": m, "n": n},
        )
    return v.reshape((m, n), order="F").copy()


def vech(A) -> np.ndarray:
    """
    Half-vectorization of a symmetric matrix.

    Parameters
    ----------
    A : array_like (n, n)
        Symmetric matrix of any numeric dtype.

    Returns
    -------
    ndarray (n*(n+1)//2,)
        Lower triangle including the diagonal, column by column. The dtype
        of `A` is preserved.

    Raises
    ------
    InvalidInputError
        If `A` is not 2D, or is not symmetric (non-square matrices are
        never symmetric).

    Examples
    --------
    >>> A = np.array([[1, 2, 3], [2, 4, 5], [3, 5, 6]])
    >>> vech(A)
    array([1, 2, 3, 4, 5, 6])
    """
    A = np.asarray(A)
    _require_2d(A, "vech")

    if not is_symmetric(A):
        logger.error(f"vech failed: matrix of shape {A.shape} is not symmetric")
        raise InvalidInputError("matrix is not symmetric", {"shape": A.shape})

    rows, cols = lower_triangle_indices(A.shape[0])
    return A[rows, cols]


def unvech(v) -> np.ndarray:
    """
    Rebuild a symmetric matrix from its half-vectorization.

    Parameters
    ----------
    v : array_like (n*(n+1)//2,)
        Output of `vech`.

    Returns
    -------
    ndarray (n, n)
        Symmetric matrix with the dtype of `v`.

    Raises
    ------
    InvalidInputError
        If `v` is not 1D or its length is not a triangular number.

    Examples
    --------
    >>> unvech([1, 2, 3, 4, 5, 6])
    array([[1, 2, 3],
           [2, 4, 5],
           [3, 5, 6]])
    """
    v = np.asarray(v)
    if v.ndim != 1:
        logger.error(f"unvech failed: expected a 1D array, got shape {v.shape}")
        raise InvalidInputError("unvech expects a 1D array", {"shape": v.shape})

    # Solve n(n+1)/2 = len(v) for n
    n = (math.isqrt(8 * v.size + 1) - 1) // 2
    if n * (n + 1) // 2 != v.size:
        logger.error(f"unvech failed: length {v.size} is not a triangular number")
        raise InvalidInputError(
            "vector length is not a triangular number", {"length": v.size}
        )

    rows, cols = lower_triangle_indices(n)
    A = np.zeros((n, n), dtype=v.dtype)
    A[rows, cols] = v
    A[cols, rows] = v
    return A
