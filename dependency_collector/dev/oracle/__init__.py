from .mock import MockDependencyOracle

__all__ = ["MockDependencyOracle"]
