"""
Dense linear algebra: matrices and their determinants.

- Determinant: square-grid snapshot with Laplace expansion and cofactors
- Matrix: rectangular grid with arithmetic, transpose, adjugate and inverse
"""

from .determinant import Determinant
from .matrix import Matrix
from .tolerance import ToleranceMode, fuzzy_compare, round_half_away

__all__ = [
    "Determinant",
    "Matrix",
    "ToleranceMode",
    "fuzzy_compare",
    "round_half_away",
]
