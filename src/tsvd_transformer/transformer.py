import logging
import time

from dataclasses import dataclass, replace
from typing import ClassVar, NamedTuple, Optional, Union

import numpy as np
import numpy.typing as npt

from numpy.random import Generator

from .core.inputs import as_input, as_table, normalize
from .core.rng import as_random_source, initial_vector
from .memory_logger import MemoryLogger
from .metadata import MATRIX_CONTINUOUS, ModelMetadata, PackageMetadata, TABLE_CONTINUOUS
from .structure.infer import truncated_svd


def _check_positive_int(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"TSVDTransformer: {name} must be an integer, got {type(value).__name__}.")
    if value < 1:
        raise ValueError(f"TSVDTransformer: {name} must be >= 1, got {value}.")


def _read_only(array: npt.ArrayLike) -> np.ndarray:
    array = np.array(array, copy=True)
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class TSVDResult:
    """Fitted state of a `TSVDTransformer`.

    **Attributes**

    - `singular_values`: The `nvals` largest singular values, descending.
    - `components`: Right singular vectors, shape `(n_features, nvals)`.
    - `is_table`: Whether the training data was a table; `transform` returns
        a table exactly when this is set.
    """

    singular_values: np.ndarray
    components: np.ndarray
    is_table: bool

    def __post_init__(self):
        object.__setattr__(self, "singular_values", _read_only(self.singular_values))
        object.__setattr__(self, "components", _read_only(self.components))
        object.__setattr__(self, "is_table", bool(self.is_table))
        if self.components.ndim != 2:
            raise ValueError(f"components must be 2-dimensional, got shape {self.components.shape}")
        if self.singular_values.shape != (self.components.shape[1],):
            raise ValueError(
                f"Expected {self.components.shape[1]} singular values for components of shape "
                f"{self.components.shape}, got {self.singular_values.shape[0]}"
            )

    @property
    def n_features(self) -> int:
        return self.components.shape[0]

    @property
    def nvals(self) -> int:
        return self.components.shape[1]


class FittedParams(NamedTuple):
    singular_values: np.ndarray
    components: np.ndarray
    is_table: bool


@dataclass(frozen=True)
class TSVDTransformer:
    """Dimensionality reduction using truncated SVD.

    This transformer performs linear dimensionality reduction by means of
    truncated singular value decomposition (SVD). Contrary to PCA, it does not
    center the data before computing the decomposition, which means it works
    with sparse matrices efficiently.

    **Attributes**

    - `nvals`: Number of singular values and vectors to keep.
    - `maxiter`: Iteration budget of the Lanczos bidiagonalization.
    - `rng`: Integer seed, `numpy.random.Generator`, or `None` for the
        process-wide generator. Only an integer seed makes `fit` reproducible;
        a generator advances on every fit.
    """

    nvals: int = 2
    maxiter: int = 1000
    rng: Optional[Union[int, Generator]] = 123

    package_metadata: ClassVar[PackageMetadata] = PackageMetadata(
        name="scipy",
        url="https://github.com/scipy/scipy",
        is_pure_python=False,
        license="BSD-3-Clause",
        is_wrapper=False,
    )
    model_metadata: ClassVar[ModelMetadata] = ModelMetadata(
        input_scitype=(TABLE_CONTINUOUS, MATRIX_CONTINUOUS),
        output_scitype=(TABLE_CONTINUOUS, MATRIX_CONTINUOUS),
        docstring="Truncated SVD dimensionality reduction",
        load_path="tsvd_transformer.TSVDTransformer",
        human_name="truncated SVD transformer",
    )

    def __post_init__(self):
        _check_positive_int(self.nvals, "nvals")
        _check_positive_int(self.maxiter, "maxiter")
        # raises on unsupported rng values
        as_random_source(self.rng)

    def clone(self, **changes) -> "TSVDTransformer":
        return replace(self, **changes)

    def fit(
        self,
        X,
        verbosity: int = 0,
        logger: Optional[Union[logging.Logger, MemoryLogger]] = None,
    ) -> tuple[TSVDResult, None, dict]:
        """
        Computes the truncated SVD of the training data.
        :param X: dense or sparse matrix, or polars table of continuous columns
        :param verbosity: log progress when positive
        :param logger: logger for progress messages; implies progress logging
        :return: tuple (fitresult, cache, report); cache is always None and report empty
        """
        log = _progress_logger(verbosity, logger)

        if log:
            log.info("Normalizing input")
        data = as_input(X)
        matrix = data.as_matrix()

        if log:
            log.info(f"Drawing initial vector of length {matrix.shape[0]}")
        initvec = initial_vector(self.rng, matrix.shape[0], matrix.dtype)

        if log:
            log.info(f"Computing truncated SVD with nvals={self.nvals} on matrix of shape {matrix.shape}")
        t0 = time.time()
        _, singular_values, components = truncated_svd(
            matrix,
            self.nvals,
            max_iterations=self.maxiter,
            initial_vector=initvec,
        )
        t1 = time.time()
        if log:
            log.info(f"Truncated SVD completed in {np.round(t1 - t0, 3)} seconds")

        fitresult = TSVDResult(singular_values, components, data.is_table)
        return fitresult, None, {}

    def fitted_params(self, fitresult: TSVDResult) -> FittedParams:
        return FittedParams(
            singular_values=fitresult.singular_values,
            components=fitresult.components,
            is_table=fitresult.is_table,
        )

    def transform(self, fitresult: TSVDResult, X):
        """Projects `X` onto the learned components.

        The output is a table with columns `x1..xk` if the training data was a
        table and a dense matrix otherwise, whatever the type of `X`.
        """
        matrix, _ = normalize(X)
        if matrix.shape[1] != fitresult.n_features:
            raise ValueError(
                f"Input has {matrix.shape[1]} features, but the transformer was fitted with "
                f"{fitresult.n_features} features."
            )
        return _match_output(np.asarray(matrix @ fitresult.components), fitresult.is_table)

    def inverse_transform(self, fitresult: TSVDResult, Y):
        """Maps reduced data back to the original feature space."""
        matrix, _ = normalize(Y)
        if matrix.shape[1] != fitresult.nvals:
            raise ValueError(
                f"Input has {matrix.shape[1]} columns, but the transformer keeps {fitresult.nvals} components."
            )
        return _match_output(np.asarray(matrix @ fitresult.components.T), fitresult.is_table)

    def fit_and_transform(self, X, verbosity: int = 0, logger=None) -> tuple[TSVDResult, object]:
        """Fits on `X` and projects it; returns the pair `(fitresult, transformed)`."""
        fitresult, _, _ = self.fit(X, verbosity=verbosity, logger=logger)
        return fitresult, self.transform(fitresult, X)


def _progress_logger(verbosity: int, logger) -> Optional[MemoryLogger]:
    if isinstance(logger, MemoryLogger):
        return logger
    if logger is not None:
        return MemoryLogger(logger=logger)
    if verbosity > 0:
        return MemoryLogger(__name__)
    return None


def _match_output(matrix: np.ndarray, is_table: bool):
    if is_table:
        return as_table(matrix)
    return matrix


# framework-style entry points


def fit(model: TSVDTransformer, verbosity: int, X):
    return model.fit(X, verbosity=verbosity)


def transform(model: TSVDTransformer, fitresult: TSVDResult, X):
    return model.transform(fitresult, X)


def fitted_params(model: TSVDTransformer, fitresult: TSVDResult) -> FittedParams:
    return model.fitted_params(fitresult)
