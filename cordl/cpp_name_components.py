"""C++ qualified names built from namespace, declaring types, name and generics."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Iterable, Optional, Tuple

from cordl.name_components import NameComponents


def _as_tuple(values: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    return None if values is None else tuple(values)


def _optional_key(value):
    return (value is not None, value if value is not None else ())


@total_ordering
@dataclass(frozen=True)
class CppNameComponents:
    """The parts of a C++ type name, optionally a pointer."""

    namespace: Optional[str] = None
    declaring_types: Optional[Tuple[str, ...]] = None
    name: str = ""
    generics: Optional[Tuple[str, ...]] = None
    is_pointer: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "declaring_types", _as_tuple(self.declaring_types))
        object.__setattr__(self, "generics", _as_tuple(self.generics))

    @classmethod
    def from_name(cls, name: str) -> "CppNameComponents":
        return cls(name=name)

    @classmethod
    def from_name_components(cls, components: NameComponents) -> "CppNameComponents":
        return cls(
            namespace=components.namespace,
            declaring_types=components.declaring_types,
            name=components.name,
            generics=components.generics,
        )

    def _sort_key(self):
        return (
            _optional_key(self.namespace),
            _optional_key(self.declaring_types),
            self.name,
            _optional_key(self.generics),
            self.is_pointer,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppNameComponents):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def combine_all(self) -> str:
        """Fully qualified C++ spelling, e.g. ``::Ns::Name<A,B>*``.

        Declaring types, when present, are used as the prefix instead of the
        namespace.
        """
        if self.declaring_types is not None:
            scope: Optional[str] = "::".join(self.declaring_types)
        else:
            scope = self.namespace

        if scope is None:
            prefix = ""
        elif scope == "":
            prefix = "::"
        else:
            prefix = f"::{scope}::"

        completed = f"{prefix}{self.name}"
        if self.generics is not None:
            completed = f"{completed}<{','.join(self.generics)}>"
        if self.is_pointer:
            completed = f"{completed}*"
        return completed

    def into_ref_generics(self) -> "CppNameComponents":
        if self.generics is None:
            return self
        return replace(self, generics=tuple("void*" for _ in self.generics))

    def remove_generics(self) -> "CppNameComponents":
        return replace(self, generics=None)

    def as_pointer(self) -> "CppNameComponents":
        return replace(self, is_pointer=True)

    def remove_pointer(self) -> "CppNameComponents":
        return replace(self, is_pointer=False)

    def formatted_name(self, include_generics: bool) -> str:
        """The bare name, with generic arguments if asked for and present."""
        if self.generics is not None and include_generics:
            return f"{self.name}<{','.join(self.generics)}>"
        return self.name