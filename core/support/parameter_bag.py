"""
Parameter Bag

A small mutable container for named parameters with default-on-miss lookup.
Used for request input, query strings and (via HeaderBag) HTTP headers.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional


class ParameterBag:
    """
    Ordered key-value store.

    Usage:
        bag = ParameterBag({"a": 1})
        bag.set("b", 2)
        bag.get("missing", "fallback")  # -> "fallback"
        bag.all()                       # -> {"a": 1, "b": 2}
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None) -> None:
        self._parameters: dict[str, Any] = dict(parameters or {})

    def all(self) -> dict[str, Any]:
        """Get all parameters, in insertion order."""
        return dict(self._parameters)

    def keys(self) -> list[str]:
        return list(self._parameters)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the value of a parameter.

        Args:
            key: Parameter name
            default: Returned when the parameter is not present

        Returns:
            The stored value, or ``default``
        """
        return self._parameters.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a parameter, overwriting any existing value."""
        self._parameters[key] = value

    def has(self, key: str) -> bool:
        """Check if a parameter exists. A stored ``None`` counts as present."""
        return key in self._parameters

    def remove(self, key: str) -> None:
        """Remove a parameter. Removing an absent key is a no-op."""
        self._parameters.pop(key, None)

    def add(self, parameters: Mapping[str, Any]) -> None:
        """Merge parameters into the bag."""
        self._parameters.update(parameters)

    def replace(self, parameters: Mapping[str, Any]) -> None:
        """Replace all parameters."""
        self._parameters = dict(parameters)

    def __contains__(self, key: object) -> bool:
        return key in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._parameters!r})"
