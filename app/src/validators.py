"""
Validation checks for the Transit Map API.

This module centralizes guard logic for incoming query parameters.

All functions raise appropriate exceptions from `app.src.exceptions`
when validation fails, ensuring consistent error handling.
"""

from typing import Any

from app.src import exceptions


# ---------------------------------------------------------------------------
# Query parameter validation
# ---------------------------------------------------------------------------
def rangeBounds(lowerBound: Any, upperBound: Any, column) -> None:
    """
    Ensure an inclusive `*_ge` / `*_le` pair describes a non-empty range.

    Args:
        lowerBound (Any): Value of the `*_ge` parameter, or None.
        upperBound (Any): Value of the `*_le` parameter, or None.
        column: ORM attribute the bounds apply to, used in the error message.

    Raises:
        exceptions.InvalidRange: If both bounds are given and lower > upper.
    """
    if lowerBound is None or upperBound is None:
        return
    if lowerBound > upperBound:
        raise exceptions.InvalidRange(column)
