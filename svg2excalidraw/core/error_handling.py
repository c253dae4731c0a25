"""Centralized error handling framework for svg2excalidraw."""

import functools
import logging
import traceback
from contextlib import contextmanager
from typing import Any, Callable, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., Any])


class Svg2ExcalidrawError(Exception):
    """Base exception for all svg2excalidraw errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParsingError(Svg2ExcalidrawError):
    """Raised when an SVG document or its path data cannot be parsed."""

    pass


class OutputError(Svg2ExcalidrawError):
    """Raised when a scene cannot be written."""

    pass


class ReferenceNotFoundError(Svg2ExcalidrawError):
    """Raised when a <use> element has no href or its target does not exist."""

    pass


class EmptyResolutionError(Svg2ExcalidrawError):
    """Raised when a resolved <use> reference produced no element."""

    pass


class CyclicReferenceError(Svg2ExcalidrawError):
    """Raised when a <use> reference refers back to itself."""

    pass


class InvalidSampleCountError(Svg2ExcalidrawError, ValueError):
    """Raised when a curve is sampled with a non-positive point count."""

    pass


class UnknownCurveTypeError(Svg2ExcalidrawError, ValueError):
    """Raised when a curve type is neither cubic nor quadratic."""

    pass


def handle_errors(
    error_types: Optional[Dict[Type[Exception], Type[Svg2ExcalidrawError]]] = None,
    default_error: Type[Svg2ExcalidrawError] = Svg2ExcalidrawError,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator that re-raises foreign exceptions as svg2excalidraw errors.

    Library errors pass through untouched.

    Args:
        error_types: Mapping of exception types to svg2excalidraw error types
        default_error: Error type for unmapped exceptions
        log_errors: Whether to log errors
    """
    if error_types is None:
        error_types = {}

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Svg2ExcalidrawError:
                raise
            except Exception as e:
                if log_errors:
                    logger.error(f"Error in {func.__name__}: {e}", exc_info=True)

                error_type = default_error
                for source_type, target_type in error_types.items():
                    if isinstance(e, source_type):
                        error_type = target_type
                        break

                details = {
                    "original_error": str(e),
                    "original_type": type(e).__name__,
                    "function": func.__name__,
                    "traceback": traceback.format_exc(),
                }

                raise error_type(
                    f"Error in {func.__name__}: {e}", details=details
                ) from e

        return wrapper

    return decorator


@contextmanager
def error_context(operation: str, **context_kwargs):
    """
    Context manager that annotates errors with the operation being performed.

    Args:
        operation: Description of the operation being performed
        **context_kwargs: Additional context information
    """
    try:
        yield
    except Exception as e:
        logger.error(f"Error during {operation}: {e}")

        if isinstance(e, Svg2ExcalidrawError):
            e.details.update({"operation": operation, **context_kwargs})

        raise
