"""
Errors raised at the service boundary.

Single-entity problems (negative durations, unknown resource types, non-finite
coordinates) surface as pydantic.ValidationError when models are built.
YardInputError covers problems that only show up across entities.
"""


class YardInputError(ValueError):
    """Snapshot is inconsistent and cannot be planned on."""
