"""A store of values addressable both by name and by numeric id."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class RegistryError(ValueError):
    """Raised when a name is registered twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key already exists in the Registry: {key}")
        self.key = key


class Registry(Generic[T]):
    """Values registered under unique names; ids are assigned in registration order."""

    def __init__(self) -> None:
        self._ids_by_name: dict[str, int] = {}
        self._names: list[str] = []
        self._values: list[T] = []

    def register(self, name: str, value: T) -> int:
        """Register ``value`` under ``name`` and return its new id."""
        if name in self._ids_by_name:
            raise RegistryError(name)
        new_id = len(self._names)
        self._names.append(name)
        self._ids_by_name[name] = new_id
        self._values.append(value)
        return new_id

    def id_of(self, name: str) -> int | None:
        """Return the id registered for ``name``, or None."""
        return self._ids_by_name.get(name)

    def value_of(self, id: int) -> T | None:
        """Return the value with the given id, or None if there is none."""
        if 0 <= id < len(self._values):
            return self._values[id]
        return None

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"Registry({dict(zip(self._names, self._values))!r})"