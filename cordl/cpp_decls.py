"""C++ member declarations: parameters, fields, properties, nested structs and unions."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Iterable, List, Optional, Sequence, TextIO

from cordl.cpp_basic import CppTemplate


def _optional_key(value):
    """Order ``None`` before any present value."""
    return (value is not None, value if value is not None else ())


def _join_modifiers(mods: Iterable[str]) -> str:
    return " ".join(mods)


@total_ordering
@dataclass(frozen=True)
class CppParam:
    """A function parameter: type, modifiers such as ``const&`` and an optional default."""

    name: str
    ty: str
    modifiers: str = ""
    def_value: Optional[str] = None

    def _sort_key(self):
        return (self.name, self.ty, self.modifiers, _optional_key(self.def_value))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppParam):
            return NotImplemented
        return self._sort_key() < other._sort_key()


def params_as_args(params: Sequence[CppParam]) -> List[str]:
    """Parameters as they appear in a declaration, defaults included."""
    return [
        f"{p.ty}{p.modifiers} {p.name} = {p.def_value}"
        if p.def_value is not None
        else f"{p.ty} {p.modifiers} {p.name}"
        for p in params
    ]


def params_as_args_no_default(params: Sequence[CppParam]) -> List[str]:
    """Parameters as they appear in a definition, without defaults."""
    return [f"{p.ty} {p.modifiers} {p.name}" for p in params]


def params_names(params: Sequence[CppParam]) -> List[str]:
    return [p.name for p in params]


def params_types(params: Sequence[CppParam]) -> List[str]:
    return [p.ty for p in params]


def params_il2cpp_types(params: Sequence[CppParam]) -> List[str]:
    """Expressions extracting the il2cpp type of each parameter."""
    return [f"::il2cpp_utils::ExtractType({p.name})" for p in params]


@total_ordering
@dataclass(frozen=True)
class CppFieldDecl:
    """A field declared inside a type body."""

    cpp_name: str
    field_ty: str
    offset: Optional[int] = None
    instance: bool = True
    readonly: bool = False
    const_expr: bool = False
    value: Optional[str] = None
    brief_comment: Optional[str] = None
    is_private: bool = False

    def _sort_key(self):
        return (
            self.cpp_name,
            self.field_ty,
            _optional_key(self.offset),
            self.instance,
            self.readonly,
            self.const_expr,
            _optional_key(self.value),
            _optional_key(self.brief_comment),
            self.is_private,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppFieldDecl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.brief_comment is not None:
            out.write(f"/// @brief {self.brief_comment}\n")
        if self.is_private:
            out.write("private:\n")

        prefix_mods: List[str] = []
        suffix_mods: List[str] = []
        if not self.instance:
            prefix_mods.append("static")
        if self.const_expr:
            prefix_mods.append("constexpr")
        elif self.readonly:
            suffix_mods.append("const")

        prefixes = _join_modifiers(prefix_mods)
        suffixes = _join_modifiers(suffix_mods)
        ty = self.field_ty
        name = self.cpp_name

        if self.value is not None:
            out.write(f"{prefixes} {ty} {suffixes} {name}{{{self.value}}};\n")
        else:
            out.write(f"{prefixes} {ty} {suffixes} {name};\n")

        if self.is_private:
            out.write("public:\n")


@total_ordering
@dataclass(frozen=True)
class CppFieldImpl:
    """An out-of-class definition of a static field."""

    cpp_name: str
    field_ty: str
    declaring_type: str = ""
    declaring_type_template: Optional[CppTemplate] = None
    readonly: bool = False
    const_expr: bool = False
    value: str = ""

    @classmethod
    def from_decl(cls, decl: CppFieldDecl) -> "CppFieldImpl":
        """The definition matching ``decl``, with no declaring type yet."""
        return cls(
            cpp_name=decl.cpp_name,
            field_ty=decl.field_ty,
            declaring_type="",
            declaring_type_template=None,
            readonly=decl.readonly,
            const_expr=decl.const_expr,
            value=decl.value if decl.value is not None else "",
        )

    def _sort_key(self):
        return (
            self.declaring_type,
            _optional_key(self.declaring_type_template),
            self.cpp_name,
            self.field_ty,
            self.readonly,
            self.const_expr,
            self.value,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppFieldImpl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.declaring_type_template is not None:
            self.declaring_type_template.write(out)

        declaring_ty = self.declaring_type
        if declaring_ty.startswith("::"):
            declaring_ty = declaring_ty[2:]

        prefix_mods: List[str] = []
        suffix_mods: List[str] = []
        if self.const_expr:
            prefix_mods.append("constexpr")
        elif self.readonly:
            suffix_mods.append("const")

        prefixes = _join_modifiers(prefix_mods)
        suffixes = _join_modifiers(suffix_mods)
        out.write(
            f"{prefixes} {self.field_ty} {suffixes} "
            f"{declaring_ty}::{self.cpp_name}{{{self.value}}};\n"
        )


@total_ordering
@dataclass(frozen=True)
class CppPropertyDecl:
    """A ``__declspec(property)`` declaration backed by getter and setter methods."""

    cpp_name: str
    prop_ty: str
    instance: bool = True
    getter: Optional[str] = None
    setter: Optional[str] = None
    indexable: bool = False
    brief_comment: Optional[str] = None

    def _sort_key(self):
        return (
            self.cpp_name,
            self.prop_ty,
            self.instance,
            _optional_key(self.getter),
            _optional_key(self.setter),
            self.indexable,
            _optional_key(self.brief_comment),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppPropertyDecl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        accessors: List[str] = []
        if self.getter is not None:
            accessors.append(f"get={self.getter}")
        if self.setter is not None:
            accessors.append(f"put={self.setter}")
        prop = ", ".join(accessors)

        prefixes = ""
        suffixes = ""
        brackets = "[]" if self.indexable else ""

        if self.brief_comment is not None:
            out.write(f"/// @brief {self.brief_comment}\n")
        out.write(
            f"{prefixes} __declspec(property({prop})) {self.prop_ty} "
            f"{suffixes} {self.cpp_name}{brackets};\n"
        )


@dataclass
class CppNestedStruct:
    """A struct, class or enum declared inside another type."""

    declaring_name: str = ""
    base_type: Optional[str] = None
    declarations: List[Any] = field(default_factory=list)
    is_enum: bool = False
    is_class: bool = False
    is_private: bool = False
    brief_comment: Optional[str] = None
    packing: Optional[int] = None

    def write(self, out: TextIO) -> None:
        if self.is_private:
            out.write("private:\n")
        if self.brief_comment is not None:
            out.write(f"/// @brief {self.brief_comment}\n")
        if self.packing is not None:
            out.write(f"#pragma pack(push, tp, {self.packing})\n")

        keyword = "class" if self.is_class else "struct"
        base = f"public {self.base_type}" if self.base_type is not None else None
        if self.is_enum:
            base = self.base_type
            keyword = f"enum {keyword}"

        if base is not None:
            out.write(f"{keyword} {self.declaring_name} : {base} {{\n")
        else:
            out.write(f"{keyword} {self.declaring_name} {{\n")

        for member in self.declarations:
            member.write(out)

        out.write("};\n")
        if self.packing is not None:
            out.write("#pragma pack(pop, tp)\n")
        if self.is_private:
            out.write("public:\n")


@dataclass
class CppNestedUnion:
    """An anonymous union holding the given members."""

    declarations: List[Any] = field(default_factory=list)
    brief_comment: Optional[str] = None
    offset: int = 0
    is_private: bool = False

    def write(self, out: TextIO) -> None:
        if self.is_private:
            out.write("private:\n")
        if self.brief_comment is not None:
            out.write(f"/// @brief {self.brief_comment}\n")

        out.write("union {\n")
        for member in self.declarations:
            member.write(out)
        out.write("};\n")

        if self.is_private:
            out.write("public:\n")