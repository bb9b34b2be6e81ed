"""Sample sources for circuitnet."""

from .synthetic import SyntheticClassification, one_hot

__all__ = ["SyntheticClassification", "one_hot"]
