"""Success/failure outcome for calls that fail without raising.

``Result`` is the only channel through which the freight-quote integration
reports both transport failures (HTTP errors, network errors) and domain
failures (invalid CEP, empty quote list) to its callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

SUCCESS_STATUS_CODE = 200


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable outcome: either ``success(value)`` or ``failure(code, message)``.

    Invariants (checked on construction):
    - success implies ``status_code == 200`` and an empty ``error_message``;
    - failure implies ``value is None``.
    """

    is_success: bool
    value: Optional[T] = None
    error_message: str = ""
    status_code: int = SUCCESS_STATUS_CODE

    def __post_init__(self) -> None:
        if self.is_success:
            if self.status_code != SUCCESS_STATUS_CODE or self.error_message:
                raise ValueError("A successful Result must carry status 200 and no error.")
        elif self.value is not None:
            raise ValueError("A failed Result cannot carry a value.")

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, status_code: int, error_message: str) -> Result[T]:
        return cls(
            is_success=False,
            value=None,
            error_message=error_message,
            status_code=status_code,
        )

    @property
    def is_failure(self) -> bool:
        return not self.is_success
