"""
Common test strategies for Hypothesis-based property testing.
"""

from .flag_strategies import (
    descriptors,
    flag_names,
    input_values,
    json_values,
    registries,
    unrelated_documents,
)

__all__ = [
    "descriptors",
    "flag_names",
    "input_values",
    "json_values",
    "registries",
    "unrelated_documents",
]
