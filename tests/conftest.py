from __future__ import annotations

import numpy as np
import polars as pl
import pytest

from scipy.sparse import csr_matrix, random as sparse_random

N_ROWS = 10
N_COLS = 20


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(123)


@pytest.fixture
def sparse_matrix(rng: np.random.Generator) -> csr_matrix:
    return csr_matrix(sparse_random(N_ROWS, N_COLS, density=0.5, random_state=rng, format="csr"))


@pytest.fixture
def dense_matrix(rng: np.random.Generator) -> np.ndarray:
    return rng.random((N_ROWS, N_COLS))


@pytest.fixture
def table(dense_matrix: np.ndarray) -> pl.DataFrame:
    return pl.DataFrame({f"feature_{j}": dense_matrix[:, j] for j in range(dense_matrix.shape[1])})
