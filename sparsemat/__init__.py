"""
Sparse matrices, storing only their non-zero entries in row-major order
"""

from .entries import Entry, EntryList
from .matrix import SparseMatrix, MatrixError, OutOfBounds, InvalidResize, DimensionMismatch
from .yaml import MatrixCase
