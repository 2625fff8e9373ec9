"""Dotted C# style names: namespace, declaring types, name and generic arguments."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Iterable, Optional, Tuple


def _as_tuple(values: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    return None if values is None else tuple(values)


def _optional_key(value):
    """Order ``None`` before any present value."""
    return (value is not None, value if value is not None else ())


@total_ordering
@dataclass(frozen=True)
class NameComponents:
    """The parts of a fully qualified C# type name."""

    namespace: Optional[str] = None
    declaring_types: Optional[Tuple[str, ...]] = None
    name: str = ""
    generics: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _as_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _as_tuple(self.generics))

    @classmethod
    def from_name(cls, name: str) -> "NameComponents":
        """Components holding only a bare name."""
        return cls(name=name)

    def _sort_key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NameComponents):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def combine_all(self) -> str:
        """Full name as ``Namespace.Outer/Inner<A,B>``."""
        completed = self.name
        if self.declaring_types is not None:
            completed = f"{'/'.join(self.declaring_types)}/{completed}"
        if self.namespace is not None:
            completed = f"{self.namespace}.{completed}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        return completed

    def into_ref_generics(self) -> "NameComponents":
        """Copy with every generic argument replaced by ``void*``."""
        if self.generics is None:
            return self
        return replace(self, generics=tuple("void*" for _ in self.generics))

    def remove_generics(self) -> "NameComponents":
        return replace(self, generics=None)

    def remove_namespace(self) -> "NameComponents":
        return replace(self, namespace=None)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generic arguments if asked for and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name