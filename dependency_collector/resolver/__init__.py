from .resolver import (
    DependencyResolver,
    ResolutionResult,
    UnresolvedDependencyError,
    find_module_file,
)
from .worklist import Worklist

__all__ = [
    "DependencyResolver",
    "ResolutionResult",
    "UnresolvedDependencyError",
    "find_module_file",
    "Worklist",
]
