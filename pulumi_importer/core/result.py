"""Discriminated success/error results for request-level operations.

Operations never raise to their caller. Every failure, whether it comes
from an SDK call, a subprocess or a mapping gap, is reported as an `Err`
carrying the exception class name and message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, Generic, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        value = self.value
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        elif isinstance(value, list):
            value = [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
        return {"ok": value}


@dataclass(frozen=True)
class Err:
    error: str

    @property
    def is_ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}


Result = Union[Ok[T], Err]


def describe_error(error: BaseException) -> str:
    """Format an exception as '<ClassName>: <message>'."""
    return f"{type(error).__name__}: {error}"


def capture_errors(operation_name: str) -> Callable[[Callable[..., Any]], Callable[..., Result]]:
    """Decorator converting exceptions into `Err` results.

    The wrapped function may return a plain value (wrapped in `Ok`) or a
    ready-made `Ok`/`Err`.

    Args:
        operation_name: Human-readable name for logging

    Usage:
        @capture_errors("search aws")
        def search_aws(request):
            ...
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Result]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Result:
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(f"{operation_name} failed: {describe_error(e)}")
                logger.debug("Traceback for %s", operation_name, exc_info=True)
                return Err(describe_error(e))
            if isinstance(result, (Ok, Err)):
                return result
            return Ok(result)

        return wrapper

    return decorator
