"""
Error types and the Result container used at fetch / orchestration boundaries.

Fetch and parse failures are returned inside a Result instead of being raised,
so callers can tell "could not analyse this URL" apart from "analysed it and
found problems".
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class WsgCheckError(Exception):
    """Base class for all wsg-check errors."""


class FetchError(WsgCheckError):
    """The target page could not be retrieved."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class ParseError(WsgCheckError):
    """Retrieved content could not be turned into page data."""


class ConfigError(WsgCheckError):
    """Configuration value is invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class CheckError(WsgCheckError):
    """Raised by a check that wants its failure attributed to a guideline."""

    def __init__(self, message: str, guideline_id: str):
        super().__init__(message)
        self.guideline_id = guideline_id


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an error, never both."""
    value: Optional[T] = None
    error: Optional[WsgCheckError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ok(value: T) -> Result[T]:
    return Result(value=value)


def err(error: WsgCheckError) -> Result:
    return Result(error=error)
