"""
test_types.py - Tests for Core Types and Argument Handling

Tests cover:
- Dimension validation
- dtype and format resolution
- SparseTriplets assembly (duplicates, bounds, empty builds)
- Exception hierarchy
"""

import pytest
import numpy as np
import scipy.sparse as sp

from vectrans import (
    SparseFormat,
    SparseTriplets,
    DEFAULT_DTYPE,
    VectransError,
    InvalidArgumentError,
    InvalidInputError,
)
from vectrans.types import (
    validate_dimension,
    resolve_dtype,
    resolve_format,
    lower_triangle_indices,
)


class TestValidateDimension:
    """Tests for validate_dimension."""

    @pytest.mark.parametrize("value", [0, 1, 7, np.int32(3), np.int64(4)])
    def test_accepts_non_negative_integers(self, value):
        result = validate_dimension(value)
        assert result == int(value)
        assert type(result) is int

    def test_rejects_negative(self):
        with pytest.raises(InvalidArgumentError, match="non-negative"):
            validate_dimension(-1, "n")

    @pytest.mark.parametrize("value", [2.0, "3", None, True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(InvalidArgumentError, match="must be an integer"):
            validate_dimension(value, "m")

    def test_error_names_argument(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_dimension(-5, "m")
        assert exc_info.value.context == {"m": -5}
        assert "m=-5" in str(exc_info.value)


class TestResolveDtype:
    """Tests for dtype normalisation."""

    def test_default_is_int64(self):
        assert resolve_dtype(DEFAULT_DTYPE) == np.dtype(np.int64)

    @pytest.mark.parametrize("dtype", [np.int8, np.float32, "float64", complex])
    def test_numeric_types_accepted(self, dtype):
        assert resolve_dtype(dtype) == np.dtype(dtype)

    @pytest.mark.parametrize("dtype", [bool, object, str, "datetime64[s]"])
    def test_non_numeric_rejected(self, dtype):
        with pytest.raises(InvalidArgumentError, match="numeric"):
            resolve_dtype(dtype)

    def test_unknown_rejected(self):
        with pytest.raises(InvalidArgumentError, match="unrecognised"):
            resolve_dtype("not-a-dtype")

    @pytest.mark.parametrize("dtype", [np.float16])
    def test_unsupported_by_sparse_rejected(self, dtype):
        with pytest.raises(InvalidArgumentError, match="not supported by scipy.sparse"):
            resolve_dtype(dtype)


class TestResolveFormat:
    """Tests for sparse format lookup."""

    def test_string_and_enum(self):
        assert resolve_format("csr") is SparseFormat.CSR
        assert resolve_format(SparseFormat.COO) is SparseFormat.COO

    def test_unsupported(self):
        with pytest.raises(InvalidArgumentError, match="unsupported sparse format"):
            resolve_format("dok")


class TestSparseTriplets:
    """Tests for the sparse builder."""

    def test_basic_build(self):
        P = SparseTriplets(shape=(2, 2)).add(rows=[0, 1], cols=[1, 0]).build()
        assert isinstance(P, sp.sparray)
        assert P.format == "csc"
        assert P.dtype == np.int64
        assert np.array_equal(P.toarray(), [[0, 1], [1, 0]])

    def test_duplicates_are_summed(self):
        builder = (
            SparseTriplets(shape=(3, 3))
            .add(rows=np.arange(3), cols=np.arange(3))
            .add(rows=[0], cols=[0])
        )
        assert builder.nnz == 4
        M = builder.build()
        assert M.nnz == 3
        assert M.toarray()[0, 0] == 2

    def test_chunk_values(self):
        M = (
            SparseTriplets(shape=(2, 2))
            .add([0], [0], value=0.5)
            .add([1], [1], value=3)
            .build(dtype=np.float64)
        )
        assert np.array_equal(M.toarray(), [[0.5, 0.0], [0.0, 3.0]])

    @pytest.mark.parametrize("fmt", list(SparseFormat))
    def test_formats(self, fmt):
        M = SparseTriplets(shape=(2, 3)).add([0, 1], [2, 0]).build(format=fmt)
        assert M.format == fmt.value
        assert M.shape == (2, 3)

    def test_empty_build(self):
        M = SparseTriplets(shape=(0, 0)).build()
        assert M.shape == (0, 0)
        assert M.nnz == 0

    def test_no_triples_gives_zero_matrix(self):
        M = SparseTriplets(shape=(2, 4)).build(dtype=np.float32)
        assert M.dtype == np.float32
        assert not M.toarray().any()

    def test_out_of_range_rejected(self):
        builder = SparseTriplets(shape=(2, 2))
        with pytest.raises(InvalidArgumentError, match="row index out of range"):
            builder.add(rows=[2], cols=[0])
        with pytest.raises(InvalidArgumentError, match="column index out of range"):
            builder.add(rows=[0], cols=[-1])

    def test_length_mismatch_rejected(self):
        with pytest.raises(InvalidArgumentError, match="differ in length"):
            SparseTriplets(shape=(2, 2)).add(rows=[0, 1], cols=[0])

    def test_negative_shape_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SparseTriplets(shape=(-1, 2))

    def test_wrong_arity_shape_rejected(self):
        with pytest.raises(InvalidArgumentError, match="two entries"):
            SparseTriplets(shape=(2, 2, 2))


class TestLowerTriangleIndices:
    """Tests for the shared vech ordering."""

    def test_column_major_order(self):
        rows, cols = lower_triangle_indices(3)
        assert np.array_equal(rows, [0, 1, 2, 1, 2, 2])
        assert np.array_equal(cols, [0, 0, 0, 1, 1, 2])

    def test_empty(self):
        rows, cols = lower_triangle_indices(0)
        assert rows.size == 0 and cols.size == 0


class TestExceptions:
    """The error hierarchy stays compatible with ValueError handlers."""

    @pytest.mark.parametrize("cls", [InvalidInputError, InvalidArgumentError])
    def test_hierarchy(self, cls):
        assert issubclass(cls, VectransError)
        assert issubclass(cls, ValueError)

    def test_message_without_context(self):
        err = InvalidInputError("matrix is not symmetric")
        assert str(err) == "matrix is not symmetric"
        assert err.context == {}
