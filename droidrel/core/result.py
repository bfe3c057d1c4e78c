"""Result type for explicit error handling.

Fallible operations in droidrel return ``Ok(value)`` or ``Err(error)``
instead of raising. Callers narrow with ``isinstance`` or ``match``:

    match bump_gradle_file(path):
        case Ok(info):
            console.info(f"version {info.name}")
        case Err(error):
            print_release_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
