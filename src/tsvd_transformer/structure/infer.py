from typing import Optional

import numpy as np
import numpy.typing as npt

from scipy.sparse import issparse
from scipy.sparse.linalg import svds


def _validate_rank(k: int, upper_bound: int, routine_name: str) -> None:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise TypeError(f"{routine_name}: k must be an integer, got {type(k).__name__}.")
    if k < 1:
        raise ValueError(f"{routine_name}: k must be >= 1, got {k}.")
    if k > upper_bound:
        raise ValueError(f"{routine_name}: k must be <= {upper_bound}, got {k}.")


def _validate_maxiter(maxiter: int, routine_name: str) -> None:
    if isinstance(maxiter, bool) or not isinstance(maxiter, (int, np.integer)):
        raise TypeError(f"{routine_name}: max_iterations must be an integer, got {type(maxiter).__name__}.")
    if maxiter < 1:
        raise ValueError(f"{routine_name}: max_iterations must be >= 1, got {maxiter}.")


def _as_floating(matrix):
    # PROPACK only accepts floating point operators
    if np.issubdtype(matrix.dtype, np.floating) or np.issubdtype(matrix.dtype, np.complexfloating):
        return matrix
    return matrix.astype(np.float64)


def truncated_svd(
    matrix,
    k: int = 2,
    max_iterations: int = 1000,
    initial_vector: Optional[npt.ArrayLike] = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compute the top-$k$ singular triplets of a dense or sparse matrix.

    Let $X$ denote `matrix`, where rows index observations and columns index
    features. This routine computes a truncated decomposition
    $X \\approx U \\Sigma V^\\top$ with SciPy's `svds` using the PROPACK
    solver (Lanczos bidiagonalization with partial reorthogonalization), then
    reorders outputs so singular values are descending.

    !!! info

        `k` must satisfy `1 <= k <= min(X.shape)` for this solver path.

    **Arguments:**

    - `matrix`: 2-D `numpy.ndarray` or `scipy.sparse` matrix. Integer input
      is promoted to `float64`.
    - `k`: Number of singular triplets to compute.
    - `max_iterations`: Maximum dimension of the Krylov subspace built by
      the bidiagonalization.
    - `initial_vector`: Starting vector of length `X.shape[0]`. When omitted
      PROPACK draws its own.

    **Returns:**

    - Tuple `(U, s, V)` with `U.shape == (n_rows, k)`, `s.shape == (k,)`
      (descending) and `V.shape == (n_columns, k)`.

    **Raises:**

    - `TypeError`: If `k` or `max_iterations` is not an integer.
    - `ValueError`: If `k` is out of bounds, `max_iterations` is not
      positive or `initial_vector` has the wrong length.
    - `numpy.linalg.LinAlgError`: If PROPACK does not converge.
    """
    if not issparse(matrix):
        matrix = np.asarray(matrix)
    if len(matrix.shape) != 2:
        raise ValueError(f"truncated_svd: matrix must be 2-dimensional, got shape {matrix.shape}.")
    _validate_rank(k, min(matrix.shape), "truncated_svd")
    _validate_maxiter(max_iterations, "truncated_svd")
    matrix = _as_floating(matrix)

    if initial_vector is not None:
        initial_vector = np.asarray(initial_vector)
        if initial_vector.shape != (matrix.shape[0],):
            raise ValueError(
                f"truncated_svd: initial_vector must have shape ({matrix.shape[0]},), got {initial_vector.shape}."
            )

    left_vecs, svals, right_vecs = svds(
        matrix,
        k=int(k),
        maxiter=int(max_iterations),
        v0=initial_vector,
        solver="propack",
    )
    order = np.argsort(svals)[::-1]

    return left_vecs[:, order], svals[order], right_vecs[order, :].T
