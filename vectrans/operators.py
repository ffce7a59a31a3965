"""
operators.py - Sparse Linear Operators on Vectorized Matrices
=============================================================

Builds the standard 0/1 selection and permutation matrices used when
symmetric-matrix parameters are manipulated through vec/vech:

    duplication_matrix(n)     D @ vech(A) == vec(A)          (A symmetric)
    elimination_matrix(n)     L @ vec(A)  == vech(A)
    commutation_matrix(m, n)  K @ vec(A)  == vec(A.T)        (A is m x n)
    symmetrizer_matrix(n)     S @ vec(A)  == vec((A + A.T) / 2)

All indices below are 0-based. For an n x n matrix, entry A[i, j] sits at
position ``j*n + i`` of vec(A). The lower-triangular entry (i, j), i >= j,
sits at position ``j*n + i - j*(j+1)//2`` of vech(A).

Each call assembles a fresh scipy sparse array; nothing is cached.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
import scipy.sparse
from loguru import logger

from .types import (
    DEFAULT_DTYPE,
    ScalarType,
    SparseFormat,
    SparseTriplets,
    lower_triangle_indices,
    resolve_dtype,
    resolve_format,
    validate_dimension,
)


def _lower_pairs(n: int):
    """Lower-triangular (row, col) pairs in vech order, plus their vech positions."""
    rows, cols = lower_triangle_indices(n)
    return rows, cols, np.arange(rows.size)


def identity_matrix(
    n: int,
    dtype: ScalarType = DEFAULT_DTYPE,
    format: Union[str, SparseFormat] = SparseFormat.CSC,
) -> scipy.sparse.sparray:
    """Sparse n x n identity."""
    n = validate_dimension(n, "n")
    idx = np.arange(n)
    return SparseTriplets(shape=(n, n)).add(idx, idx).build(dtype=dtype, format=format)


def duplication_matrix(
    n: int,
    dtype: ScalarType = DEFAULT_DTYPE,
    format: Union[str, SparseFormat] = SparseFormat.CSC,
) -> scipy.sparse.sparray:
    """
    Duplication matrix D such that ``D @ vech(A) == vec(A)`` for symmetric A.

    Parameters
    ----------
    n : int
        Size of the symmetric matrix (n >= 0).
    dtype : dtype-like, default=np.int64
        Element type of the result.
    format : SparseFormat or str, default="csc"
        Storage layout of the result.

    Returns
    -------
    scipy.sparse.sparray (n**2, n*(n+1)//2)
        Column k holds a single 1 when the k-th vech entry is on the
        diagonal, and two 1s (at the entry and its mirror) otherwise.
        Every row holds exactly one 1.

    See Also
    --------
    vech, elimination_matrix

    Examples
    --------
    >>> A = np.array([[1, 2, 3], [2, 4, 5], [3, 5, 6]])
    >>> D = duplication_matrix(3)
    >>> np.array_equal(D @ np.arange(1, 7), vec(A))
    True
    """
    n = validate_dimension(n, "n")
    rows, cols, k = _lower_pairs(n)
    off = rows != cols

    builder = SparseTriplets(shape=(n * n, k.size))
    builder.add(cols * n + rows, k)               # A[i, j]
    builder.add(rows[off] * n + cols[off], k[off])  # mirrored A[j, i]
    D = builder.build(dtype=dtype, format=format)

    logger.debug(f"Duplication matrix | n={n}, shape={D.shape}, nnz={D.nnz}")
    return D


def elimination_matrix(
    n: int,
    dtype: ScalarType = DEFAULT_DTYPE,
    format: Union[str, SparseFormat] = SparseFormat.CSC,
) -> scipy.sparse.sparray:
    """
    Elimination matrix L such that ``L @ vec(A) == vech(A)``.

    L only selects entries, so it can be applied to any n x n matrix; the
    round trip ``L @ D == I`` is what ties it to `duplication_matrix`.

    Parameters
    ----------
    n : int
        Size of the square matrix (n >= 0).
    dtype : dtype-like, default=np.int64
    format : SparseFormat or str, default="csc"

    Returns
    -------
    scipy.sparse.sparray (n*(n+1)//2, n**2)
        One 1 per row. Columns for strictly upper-triangular positions of
        vec(A) are empty.

    See Also
    --------
    vech, duplication_matrix
    """
    n = validate_dimension(n, "n")
    rows, cols, k = _lower_pairs(n)

    # k equals cols*n + rows - cols*(cols+1)//2 for every lower pair
    builder = SparseTriplets(shape=(k.size, n * n))
    builder.add(k, cols * n + rows)
    L = builder.build(dtype=dtype, format=format)

    logger.debug(f"Elimination matrix | n={n}, shape={L.shape}, nnz={L.nnz}")
    return L


def commutation_matrix(
    m: int,
    n: Optional[int] = None,
    dtype: ScalarType = DEFAULT_DTYPE,
    format: Union[str, SparseFormat] = SparseFormat.CSC,
) -> scipy.sparse.sparray:
    """
    Commutation matrix K such that ``K @ vec(A) == vec(A.T)`` for m x n A.

    Parameters
    ----------
    m : int
        Number of rows of A.
    n : int, optional
        Number of columns of A. Defaults to `m`.
    dtype : dtype-like, default=np.int64
    format : SparseFormat or str, default="csc"

    Returns
    -------
    scipy.sparse.sparray (m*n, m*n)
        Permutation matrix. ``commutation_matrix(m, n).T`` equals both its
        inverse and ``commutation_matrix(n, m)``.

    See Also
    --------
    symmetrizer_matrix

    Examples
    --------
    >>> B = np.arange(1, 7).reshape((3, 2), order="F")
    >>> K = commutation_matrix(3, 2)
    >>> np.array_equal(K @ vec(B), vec(B.T))
    True
    """
    m = validate_dimension(m, "m")
    n = m if n is None else validate_dimension(n, "n")

    # Row r = p*n + q of vec(A.T) holds A[p, q], found at q*m + p in vec(A):
    # for each p, scan vec(A) with stride m.
    rows = np.arange(m * n)
    cols = (np.arange(m)[:, None] + m * np.arange(n)[None, :]).ravel()

    K = SparseTriplets(shape=(m * n, m * n)).add(rows, cols).build(dtype=dtype, format=format)

    logger.debug(f"Commutation matrix | m={m}, n={n}, shape={K.shape}")
    return K


def symmetrizer_matrix(
    n: int,
    dtype: ScalarType = np.float64,
    format: Union[str, SparseFormat] = SparseFormat.CSC,
) -> scipy.sparse.sparray:
    """
    Symmetrizer S = (K + I) / 2 such that ``S @ vec(A) == vec((A + A.T) / 2)``.

    Parameters
    ----------
    n : int
        Size of the square matrix (n >= 0).
    dtype : dtype-like, default=np.float64
        Requested element type. Integer types cannot hold the 1/2 entries
        and are promoted to float64; inexact types (float32, complex) are kept.
    format : SparseFormat or str, default="csc"

    Returns
    -------
    scipy.sparse.sparray (n**2, n**2)
        Symmetric and idempotent (S @ S == S).

    See Also
    --------
    commutation_matrix
    """
    dt = resolve_dtype(dtype)
    if not np.issubdtype(dt, np.inexact):
        logger.debug(f"Symmetrizer cannot hold 1/2 in {dt}; using float64")
        dt = np.dtype(np.float64)

    K = commutation_matrix(n, dtype=dt, format=format)
    eye = identity_matrix(n * n, dtype=dt, format=format)
    S = ((K + eye) * dt.type(0.5)).asformat(resolve_format(format).value)

    logger.debug(f"Symmetrizer matrix | n={n}, shape={S.shape}, nnz={S.nnz}")
    return S
