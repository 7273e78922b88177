"""
Validation helpers for pixpro processors.

Provides the range guard used at construction time and reusable decorators
that apply it to method parameters. None of these run on the per-pixel path.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from pixpro.errors import ArgumentRangeError

F = TypeVar("F", bound=Callable[..., Any])


def _suggestion_for(param_name: str) -> str:
    if "brightness" in param_name:
        return " Use 0 for no change, >0 to brighten, <0 to darken."
    if "row" in param_name:
        return " Rows must satisfy 0 <= start_row <= end_row <= target height."
    if param_name in ("width", "height"):
        return " Sizes must be non-negative."
    return ""


def must_be_in_range(value: Any, min_val: float, max_val: float, param_name: str) -> None:
    """
    Raise if ``value`` is outside the inclusive range ``[min_val, max_val]``.

    Args:
        value: Value to check
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        param_name: Name of parameter for error messages

    Raises:
        TypeError: If value is not a number
        ArgumentRangeError: If value is outside the range

    Example:
        >>> must_be_in_range(150, -100, 100, "brightness")
        Traceback (most recent call last):
        ...
        pixpro.errors.ArgumentRangeError: brightness=150 is outside valid range [-100, 100]. ...
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(
            f"{param_name} must be a number, got {type(value).__name__}. "
            f"Provide a numeric value (int or float)."
        )

    if not min_val <= value <= max_val:
        raise ArgumentRangeError(param_name, value, min_val, max_val, _suggestion_for(param_name))


def must_be_integer(value: Any, param_name: str) -> None:
    """
    Raise ``TypeError`` unless ``value`` is an integer (``bool`` excluded).

    NumPy integer scalars are accepted.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{param_name} must be an integer, got {type(value).__name__}")


def _extract(args: tuple, kwargs: dict, param_name: str, param_index: int) -> tuple[bool, Any]:
    if len(args) > param_index:
        return True, args[param_index]
    if param_name in kwargs:
        return True, kwargs[param_name]
    return False, None


def validate_range(
    min_val: float,
    max_val: float,
    param_name: str = "value",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating numeric parameter ranges.

    Args:
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 1 = first arg after self)

    Returns:
        Decorated function with range validation

    Example:
        >>> class Brightness:
        ...     @validate_range(-100, 100, "brightness")
        ...     def __init__(self, brightness: int = 0):
        ...         self.value = brightness
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _extract(args, kwargs, param_name, param_index)
            if found:
                must_be_in_range(value, min_val, max_val, param_name)
            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_positive(param_name: str = "value", param_index: int = 1) -> Callable[[F], F]:
    """
    Decorator for validating positive numeric parameters.

    ``None`` is passed through untouched so optional knobs such as
    ``max_workers=None`` keep their "use the default" meaning.

    Args:
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with positive validation
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _extract(args, kwargs, param_name, param_index)
            if not found or value is None:
                return func(*args, **kwargs)

            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise TypeError(
                    f"{param_name} must be a number, got {type(value).__name__}. "
                    f"Provide a numeric value (int or float)."
                )

            if value <= 0:
                suggestion = ""
                if "workers" in param_name:
                    suggestion = " Use None to match the CPU count, or 1 for serial execution."
                raise ValueError(f"{param_name}={value} must be positive (> 0).{suggestion}")

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_type(
    expected_type: type | tuple[type, ...],
    param_name: str = "value",
    param_index: int = 1,
    allow_none: bool = False,
) -> Callable[[F], F]:
    """
    Decorator for validating parameter types.

    ``bool`` is rejected where ``int`` is expected, since it is almost
    always a caller mistake for pixel parameters.

    Args:
        expected_type: Expected type or tuple of types
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature
        allow_none: Let ``None`` through (for "use the default" knobs)

    Returns:
        Decorated function with type validation
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _extract(args, kwargs, param_name, param_index)
            if not found or (allow_none and value is None):
                return func(*args, **kwargs)

            if isinstance(value, bool) or not isinstance(value, expected_type):
                if isinstance(expected_type, tuple):
                    type_names = ", ".join(t.__name__ for t in expected_type)
                    raise TypeError(
                        f"{param_name} must be one of ({type_names}), got {type(value).__name__}"
                    )
                raise TypeError(
                    f"{param_name} must be {expected_type.__name__}, got {type(value).__name__}"
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
