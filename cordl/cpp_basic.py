"""Small C++ building blocks: templates, includes, aliases, forward declarations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import total_ordering
from pathlib import PurePath
from typing import Iterable, Iterator, Optional, TextIO, Tuple, Union


def _optional_key(value):
    return (value is not None, value if value is not None else ())


@dataclass(frozen=True, order=True)
class CppTemplate:
    """A ``template<...>`` header: pairs of (constraint, parameter name)."""

    names: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(tuple(pair) for pair in self.names))

    @classmethod
    def make_typenames(cls, names: Iterable[str]) -> "CppTemplate":
        """A template whose parameters are all plain ``typename``."""
        return cls(names=tuple(("typename", name) for name in names))

    def just_names(self) -> Iterator[str]:
        """The parameter names without their constraints."""
        return (name for _constraint, name in self.names)

    def write(self, out: TextIO) -> None:
        params = ",".join(f"{constraint} {name}" for constraint, name in self.names)
        out.write(f"template<{params}>\n")


@dataclass(frozen=True, order=True)
class CppStaticAssert:
    condition: str
    message: Optional[str] = None

    def write(self, out: TextIO) -> None:
        if self.message is None:
            out.write(f"static_assert({self.condition})\n")
        else:
            out.write(f'static_assert({self.condition}, "{self.message}");\n')


@dataclass(frozen=True, order=True)
class CppLine:
    """A single verbatim line of C++."""

    line: str

    def write(self, out: TextIO) -> None:
        out.write(self.line)
        out.write("\n")


@dataclass(frozen=True)
class CppForwardDeclare:
    """A forward declaration of a class or struct, optionally namespaced."""

    cpp_name: str
    is_struct: bool = False
    cpp_namespace: Optional[str] = None
    templates: Optional[CppTemplate] = None
    literals: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.literals is not None:
            object.__setattr__(self, "literals", tuple(self.literals))

    def write(self, out: TextIO) -> None:
        if self.cpp_namespace is not None:
            out.write(f"namespace {self.cpp_namespace} {{\n")
        if self.templates is not None:
            self.templates.write(out)
        if self.literals is not None and self.templates is None:
            out.write("template<>\n")

        name = self.cpp_name
        if self.literals is not None:
            name = f"{name}<{','.join(self.literals)}>"
        keyword = "struct" if self.is_struct else "class"
        out.write(f"{keyword} {name};\n")

        if self.cpp_namespace is not None:
            out.write("}\n")


@total_ordering
@dataclass(frozen=True)
class CppCommentedString:
    data: str
    comment: Optional[str] = None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppCommentedString):
            return NotImplemented
        return (self.data, _optional_key(self.comment)) < (
            other.data,
            _optional_key(other.comment),
        )

    def write(self, out: TextIO) -> None:
        out.write(f"{self.data}\n")
        if self.comment is not None:
            out.write(f"// {self.comment}\n")


@dataclass(frozen=True, order=True)
class CppInclude:
    """An ``#include`` directive, quoted or angle-bracketed."""

    include: PurePath
    system: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.include, PurePath):
            object.__setattr__(self, "include", PurePath(self.include))

    @classmethod
    def new_system(cls, path: Union[str, os.PathLike]) -> "CppInclude":
        return cls(include=PurePath(path), system=True)

    @classmethod
    def new_exact(cls, path: Union[str, os.PathLike]) -> "CppInclude":
        return cls(include=PurePath(path), system=False)

    def write(self, out: TextIO) -> None:
        path = self.include.as_posix()
        if self.system:
            out.write(f"#include <{path}>\n")
        else:
            out.write(f'#include "{path}"\n')


@total_ordering
@dataclass(frozen=True)
class CppUsingAlias:
    """``using alias = result;`` with an optional template header."""

    alias: str
    result: str
    template: Optional[CppTemplate] = None

    def _sort_key(self):
        return (self.result, self.alias, _optional_key(self.template))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppUsingAlias):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.template is not None:
            self.template.write(out)
        out.write(f"using {self.alias} = {self.result};\n")