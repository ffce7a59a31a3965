"""
vectrans - Sparse Linear Operators for Vectorized Matrices
"""

__version__ = "1.0.0"

# =============================================================================
# ERRORS
# =============================================================================
from .exceptions import (
    VectransError,
    InvalidInputError,
    InvalidArgumentError,
)

# =============================================================================
# CORE TYPES
# =============================================================================
from .types import (
    DEFAULT_DTYPE,
    ScalarType,
    SparseFormat,
    SparseTriplets,
)

# =============================================================================
# VECTORIZATION
# =============================================================================
from .vectorization import (
    vec,
    unvec,
    vech,
    unvech,
    is_symmetric,
)

# =============================================================================
# OPERATORS
# =============================================================================
from .operators import (
    identity_matrix,
    duplication_matrix,
    elimination_matrix,
    commutation_matrix,
    symmetrizer_matrix,
)

# PUBLIC API
# =============================================================================
__all__ = [
    "__version__",
    "VectransError",
    "InvalidInputError",
    "InvalidArgumentError",
    "DEFAULT_DTYPE",
    "ScalarType",
    "SparseFormat",
    "SparseTriplets",
    "vec",
    "unvec",
    "vech",
    "unvech",
    "is_symmetric",
    "identity_matrix",
    "duplication_matrix",
    "elimination_matrix",
    "commutation_matrix",
    "symmetrizer_matrix",
]
