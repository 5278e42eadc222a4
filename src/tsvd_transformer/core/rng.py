from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import numpy.typing as npt

from numpy.random import Generator

# process-wide, non-reproducible generator used when no seed is configured
GLOBAL_RNG = np.random.default_rng()


@dataclass(frozen=True)
class Seed:
    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"Seed must be non-negative, got {self.value}")

    def generator(self) -> Generator:
        # PCG64, fixed so that a seed yields the same stream everywhere
        return np.random.default_rng(seed=self.value)


@dataclass(frozen=True)
class SharedGenerator:
    handle: Generator

    def generator(self) -> Generator:
        return self.handle


RandomSource = Union[Seed, SharedGenerator]


def as_random_source(value: Optional[Union[int, Generator, Seed, SharedGenerator]]) -> RandomSource:
    if isinstance(value, (Seed, SharedGenerator)):
        return value
    if value is None:
        return SharedGenerator(GLOBAL_RNG)
    if isinstance(value, Generator):
        return SharedGenerator(value)
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return Seed(int(value))
    raise TypeError(f"rng must be an integer seed, a numpy Generator or None, got {type(value).__name__}")


def resolve_generator(value) -> Generator:
    return as_random_source(value).generator()


def initial_vector(value, n: int, dtype: npt.DTypeLike = np.float64) -> np.ndarray:
    """Draws the starting vector for the Lanczos iteration.

    `n` i.i.d. standard normal draws, cast to the floating point type matching
    `dtype` (integer element types promote to `float64`). A seed always gives
    the same vector; a shared generator advances its state.
    """
    generator = resolve_generator(value)
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    return generator.standard_normal(n).astype(dtype)
