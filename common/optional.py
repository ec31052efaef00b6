"""Presence-or-absence wrapper for lookups whose natural outcome may be 'not found'."""

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
V = TypeVar("V")


class Option(Generic[T]):
    """
    Wraps a value that may be absent.

    Absence means "does not exist". Failures are raised, never encoded as
    an empty Option.

    Usage:
        found = Option.of(scanned)
        missing = Option.empty()
        sizes = found.map(lambda f: f.size)
    """

    __slots__ = ("_value",)

    def __init__(self, value: Optional[T] = None):
        self._value = value

    @classmethod
    def of(cls, value: Optional[T]) -> "Option[T]":
        return cls(value)

    @classmethod
    def empty(cls) -> "Option[T]":
        return cls()

    @property
    def exists(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> Optional[T]:
        return self._value

    def map(
        self,
        mapper: Callable[[T], Optional[V]],
        empty_mapper: Optional[Callable[[], Optional[V]]] = None,
    ) -> "Option[V]":
        """
        Transform the contained value.

        Args:
            mapper: Applied to the value when present
            empty_mapper: Called when absent; without it the result stays empty

        Returns:
            New Option holding the mapped value
        """
        if self.exists:
            return Option.of(mapper(self._value))
        if empty_mapper is None:
            return Option.empty()
        return Option.of(empty_mapper())

    def get_or_else(self, default: V) -> "T | V":
        return self._value if self.exists else default

    def __bool__(self) -> bool:
        return self.exists

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self._value == other._value

    def __repr__(self) -> str:
        if self.exists:
            return f"Option.of({self._value!r})"
        return "Option.empty()"
