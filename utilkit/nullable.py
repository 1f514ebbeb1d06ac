"""A value that may be null, with comparisons passed through."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Nullable(Generic[T]):
    """Holds either a value or nothing; None means nothing."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: T | None = None) -> None:
        self._value = value
        self._null = value is None

    def is_null(self) -> bool:
        return self._null

    def get(self) -> T:
        """Return the value, raising ValueError if null."""
        if self._null:
            raise ValueError("Trying to retrieve value of NULL object.")
        return self._value  # type: ignore[return-value]

    def set(self, value: T) -> T:
        """Assign a value; the object is no longer null."""
        self._value = value
        self._null = False
        return value

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Nullable):
            # a null compared with a value raises, as get() does
            return (other.is_null() and self._null) or other.get() == self.get()
        return not self._null and other == self._value

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Nullable):
            return not other.is_null() and not self._null and self.get() < other.get()
        return not self._null and self._value < other

    def __gt__(self, other: Any) -> bool:
        return not (self < other or self == other)

    def __le__(self, other: Any) -> bool:
        return self < other or self == other

    def __ge__(self, other: Any) -> bool:
        return self > other or self == other

    def __repr__(self) -> str:
        return "Nullable(NULL)" if self._null else f"Nullable({self._value!r})"