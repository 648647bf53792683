from .oracle import (
    DependenciesOracle,
    DependencyOracle,
    OracleInvocationError,
    filter_dependencies,
)

__all__ = [
    "DependenciesOracle",
    "DependencyOracle",
    "OracleInvocationError",
    "filter_dependencies",
]
