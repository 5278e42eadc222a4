from .inputs import (
    as_input as as_input,
    as_table as as_table,
    MatrixInput as MatrixInput,
    normalize as normalize,
    TableInput as TableInput,
)
from .rng import (
    as_random_source as as_random_source,
    initial_vector as initial_vector,
    Seed as Seed,
    SharedGenerator as SharedGenerator,
)
