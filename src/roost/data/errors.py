"""Data layer error hierarchy.

None of these are ``HTTPError``: a failing query is an unexpected
failure and answers 500.
"""

from roost.errors import RoostError


class DataError(RoostError):
    """Base for all roost.data errors."""


class QueryError(DataError):
    """Raised when a SQL statement fails."""


class EmptyResultError(DataError):
    """Raised when a query expected at least one row and got none."""
