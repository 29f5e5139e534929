from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiFailure:
    message: str
    status: Optional[int] = None

    @property
    def not_found(self) -> bool:
        return self.status == 404


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one backend call; HTTP error statuses land in ``error``."""

    ok: bool
    data: Optional[T] = None
    error: Optional[ApiFailure] = None

    @classmethod
    def success(cls, data: T) -> "ApiResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, message: str, status: Optional[int] = None) -> "ApiResult[T]":
        return cls(ok=False, error=ApiFailure(message=message, status=status))
