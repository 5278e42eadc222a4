from dataclasses import dataclass
from typing import ClassVar, Union

import numpy as np
import polars as pl

from scipy.sparse import issparse


@dataclass(frozen=True)
class MatrixInput:
    """A dense `numpy.ndarray` or a `scipy.sparse` matrix, used as given."""

    matrix: object

    is_table: ClassVar[bool] = False

    def __post_init__(self):
        if len(self.matrix.shape) != 2:
            raise ValueError(f"Matrix input must be 2-dimensional, got shape {self.matrix.shape}")

    def as_matrix(self):
        return self.matrix


@dataclass(frozen=True)
class TableInput:
    """A polars table whose columns are all continuous (floating point).

    **Attributes**

    - `table`: Polars data frame. Column order defines the feature order of
        the extracted matrix.
    """

    table: pl.DataFrame

    is_table: ClassVar[bool] = True

    def __post_init__(self):
        bad_cols = [name for name, dtype in self.table.schema.items() if not dtype.is_float()]
        if bad_cols:
            raise TypeError(f"Table columns must be continuous (floating point), got non-continuous columns {bad_cols}")

    def as_matrix(self) -> np.ndarray:
        return self.table.to_numpy()


Input = Union[MatrixInput, TableInput]


def as_input(X) -> Input:
    """Classifies raw user data as either a matrix or a table."""
    if isinstance(X, MatrixInput) or isinstance(X, TableInput):
        return X
    if isinstance(X, np.ndarray) or issparse(X):
        return MatrixInput(X)
    if isinstance(X, pl.LazyFrame):
        X = X.collect()
    if isinstance(X, pl.DataFrame):
        return TableInput(X)
    raise TypeError(f"Expected a numpy array, scipy sparse matrix or polars table, got {type(X).__name__}")


def normalize(X) -> tuple[object, bool]:
    """Returns `(matrix, was_tabular)` for dense, sparse or tabular input."""
    data = as_input(X)
    return data.as_matrix(), data.is_table


def as_table(matrix: np.ndarray, prefix: str = "x") -> pl.DataFrame:
    """Wraps a dense matrix as a table with columns `x1, x2, ...`."""
    matrix = np.asarray(matrix)
    return pl.DataFrame({f"{prefix}{i + 1}": matrix[:, i] for i in range(matrix.shape[1])})
