# roilens/domain/common/result.py

"""
Result pattern implementation for error handling.

Services return either a success value or a DomainError instead of raising
for expected failures (no region selected, rate limited, cancelled selection).
"""
from typing import TypeVar, Generic, Optional, Union, Any, Dict

from roilens.domain.common.errors import DomainError, ErrorCategory

T = TypeVar('T')


class Result(Generic[T]):
    """
    Result type for representing success or failure of an operation.

    Attributes:
        value: The result value (if successful)
        error: Error object (if failed)
        is_success: Whether the operation was successful
        is_failure: Whether the operation failed
    """

    def __init__(self, value: Optional[T], error: Optional[Union[str, DomainError]]):
        self._value = value

        # Plain strings become uncategorized domain errors
        if isinstance(error, str):
            self._error = DomainError(message=error, category=ErrorCategory.UNKNOWN)
        else:
            self._error = error

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        """Create a successful result with a value."""
        return cls(value, None)

    @classmethod
    def fail(cls, error: Union[str, DomainError]) -> 'Result[T]':
        """Create a failed result with an error message or DomainError."""
        return cls(None, error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        """
        Get the success value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot access value of a failed result: {self._error}")
        return self._value

    @property
    def error(self) -> DomainError:
        """
        Get the error.

        Raises:
            ValueError: If the result is a success
        """
        if self.is_success:
            raise ValueError("Cannot access error of a successful result")
        return self._error

    @classmethod
    def from_operation(cls, operation_func, logger, error_type, error_message, **kwargs):
        """
        Create a Result from an operation that might fail.

        Args:
            operation_func: The function to execute
            logger: Logger to use for errors
            error_type: The DomainError subclass to create on failure
            error_message: Error message prefix
            **kwargs: Context information for error details

        Returns:
            The operation's own Result, or its return value wrapped in one
        """
        try:
            result = operation_func()
            if isinstance(result, Result):
                return result
            return cls.ok(result)
        except Exception as e:
            error = error_type(
                message=f"{error_message}: {e}",
                details=kwargs,
                inner_error=e
            )
            logger.error(str(error))
            return cls.fail(error)

    def to_dict(self, value_key: str = "value") -> Dict[str, Any]:
        """
        Convert the result to the uniform response shape used by callers.

        Args:
            value_key: Key the success value is stored under

        Returns:
            {"success": True, value_key: value} or
            {"success": False, "error": message, "code": code}
        """
        if self.is_success:
            return {"success": True, value_key: self._value}
        return {
            "success": False,
            "error": self._error.message,
            "code": self._error.code
        }
