from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

# annoying 'as' notation to avoid warnings/errors about unused imports...
from .core import (
    as_input as as_input,
    normalize as normalize,
)
from .memory_logger import MemoryLogger as MemoryLogger
from .metadata import metadata as metadata
from .structure import truncated_svd as truncated_svd
from .transformer import (
    FittedParams as FittedParams,
    TSVDResult as TSVDResult,
    TSVDTransformer as TSVDTransformer,
)

try:
    # Change here if project is renamed and does not equal the package name
    dist_name = "tsvd-transformer"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError
