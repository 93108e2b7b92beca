# Data package for chetutils
"""
In-memory DataTable with filter and sort expressions, plus helpers for
loading JSON, filling gaps and mapping rows onto entities.
"""

from .expression import ExpressionError
from .table import DataColumn, DataRow, DataTable

__all__ = ["DataColumn", "DataRow", "DataTable", "ExpressionError"]
