"""
n-tuple network module.

This module provides:
- The dihedral symmetries used to expand sampling patterns
- The n-tuple value function summing pattern weight lookups
- The weight tables and their binary persistence
"""

from .network import PATTERNS, NTupleNetwork, Pattern
from .symmetry import dihedral_orderings, dihedral_step, reflect, rotate, transpose
from .weights import TABLE_SIZE, WeightStore

__all__ = [
    'PATTERNS',
    'NTupleNetwork',
    'Pattern',
    'TABLE_SIZE',
    'WeightStore',
    'dihedral_orderings',
    'dihedral_step',
    'reflect',
    'rotate',
    'transpose',
]
