"""Custom exceptions for CoocRec.

Defines the input-contract errors raised by the collaborative filtering core
and the service-level errors raised around it. Every exception carries a
message, an HTTP status code and a details dict so the API can report it
without extra mapping.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Tag identifying which input contract a core call violated."""

    CO_MATRIX_WRONG_DIMENSIONS = "co_matrix_wrong_dimensions"
    USER_INDEX_OUT_OF_RANGE = "user_index_out_of_range"
    RATING_ARRAY_VALUE_INVALID = "rating_array_value_invalid"


class CoocRecException(Exception):
    """Base exception for CoocRec errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class CollaborativeFilteringError(CoocRecException):
    """Base class for input errors detected by the filtering pipeline.

    Subclasses set ``kind`` so callers can branch on the tag instead of the
    class when that is more convenient.
    """

    kind: ErrorKind


class CoMatrixWrongDimensions(CollaborativeFilteringError):
    """Raised when a co-occurrence matrix does not match the item count."""

    kind = ErrorKind.CO_MATRIX_WRONG_DIMENSIONS

    def __init__(self, actual_shape: Any, expected_size: int):
        message = (
            f"Co-occurrence matrix has shape {tuple(actual_shape)}, "
            f"expected ({expected_size}, {expected_size})"
        )
        super().__init__(
            message=message,
            status_code=422,
            details={
                "kind": self.kind.value,
                "actual_shape": list(actual_shape),
                "expected_size": expected_size,
            },
        )


class UserIndexOutOfRange(CollaborativeFilteringError):
    """Raised when a user index does not address a row of the ratings."""

    kind = ErrorKind.USER_INDEX_OUT_OF_RANGE

    def __init__(self, user_index: int, user_count: int):
        message = f"User index {user_index} is outside [0, {user_count})"
        super().__init__(
            message=message,
            status_code=404,
            details={
                "kind": self.kind.value,
                "user_index": user_index,
                "user_count": user_count,
            },
        )


class RatingArrayValueInvalid(CollaborativeFilteringError):
    """Raised when a ratings cell holds anything other than 0 or 1."""

    kind = ErrorKind.RATING_ARRAY_VALUE_INVALID

    def __init__(self, row: int, col: int, value: float):
        message = (
            f"Rating at ({row}, {col}) is {value}; ratings must be 0 or 1"
        )
        super().__init__(
            message=message,
            status_code=422,
            details={
                "kind": self.kind.value,
                "row": row,
                "col": col,
                "value": value,
            },
        )


class DataNotFoundError(CoocRecException):
    """Raised when the interaction data file cannot be found."""

    def __init__(self, data_path: str, details: Optional[Dict[str, Any]] = None):
        message = f"Interaction data not found at '{data_path}'."
        super().__init__(
            message=message,
            status_code=503,
            details=details or {"data_path": data_path},
        )


class UserNotFoundError(CoocRecException):
    """Raised when a user id does not appear in the interaction data."""

    def __init__(self, user_id: Any, details: Optional[Dict[str, Any]] = None):
        message = (
            f"User {user_id} not found in interaction data. "
            "Cannot generate personalized recommendations."
        )
        super().__init__(
            message=message,
            status_code=404,
            details=details or {"user_id": user_id},
        )

