from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Mapping

TABLE_CONTINUOUS = "Table(Continuous)"
MATRIX_CONTINUOUS = "AbstractMatrix(Continuous)"


@dataclass(frozen=True)
class PackageMetadata:
    """Identity of the package that provides the numerical routine."""

    name: str
    url: str
    is_pure_python: bool
    license: str
    is_wrapper: bool


@dataclass(frozen=True)
class ModelMetadata:
    """Declared data shapes and documentation of a model type.

    **Attributes**

    - `input_scitype`: Scientific types accepted by `fit` and `transform`.
    - `output_scitype`: Scientific types produced by `transform`.
    - `docstring`: One line description shown by model registries.
    - `load_path`: Import path of the model type.
    """

    input_scitype: tuple[str, ...]
    output_scitype: tuple[str, ...]
    docstring: str
    load_path: str
    human_name: str = ""


def metadata(model_type) -> Mapping[str, object]:
    """Read-only merged view of a model type's package and model metadata."""
    merged = {"model_name": model_type.__name__}
    merged.update({f"package_{key}": value for key, value in asdict(model_type.package_metadata).items()})
    merged.update(asdict(model_type.model_metadata))
    return MappingProxyType(merged)
