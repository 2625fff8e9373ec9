"""C++ methods and constructors: declarations, out-of-class definitions and size structs."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple

from cordl.cpp_basic import CppTemplate
from cordl.cpp_decls import (
    CppParam,
    params_as_args,
    params_as_args_no_default,
    params_types,
)


def _optional_key(value):
    """Order ``None`` before any present value."""
    return (value is not None, value if value is not None else ())


def _debug_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _debug_params(params: Sequence[CppParam]) -> str:
    """Parameters rendered in a structured debug notation for comments."""
    items = []
    for p in params:
        default = "None" if p.def_value is None else f"Some({_debug_str(p.def_value)})"
        items.append(
            f"CppParam {{ name: {_debug_str(p.name)}, ty: {_debug_str(p.ty)}, "
            f"modifiers: {_debug_str(p.modifiers)}, def_value: {default} }}"
        )
    return f"[{', '.join(items)}]"


def _write_default_param_comments(out: TextIO, params: Sequence[CppParam]) -> None:
    for param in params:
        if param.def_value is not None:
            out.write(
                f"/// @param {param.name}: {param.ty} (default: {param.def_value})\n"
            )


def _initializers(
    initialized_values: Dict[str, str], base_ctor: Optional[Tuple[str, str]]
) -> str:
    if not initialized_values and base_ctor is None:
        return ""
    parts = [f"{name}({value})" for name, value in initialized_values.items()]
    if base_ctor is not None:
        base_name, args = base_ctor
        parts.insert(0, f"{base_name}({args})")
    return f": {','.join(parts)}"


def _write_body(out: TextIO, body: Sequence[Any]) -> None:
    for item in body:
        item.write(out)


@total_ordering
@dataclass(eq=False)
class CppMethodDecl:
    """A method declared inside a type body, optionally with an inline body."""

    cpp_name: str
    return_type: str = "void"
    parameters: List[CppParam] = field(default_factory=list)
    instance: bool = True
    template: Optional[CppTemplate] = None
    suffix_modifiers: List[str] = field(default_factory=list)
    prefix_modifiers: List[str] = field(default_factory=list)
    is_virtual: bool = False
    is_constexpr: bool = False
    is_const: bool = False
    is_no_except: bool = False
    is_implicit_operator: bool = False
    is_explicit_operator: bool = False
    is_inline: bool = False
    brief: Optional[str] = None
    body: Optional[List[Any]] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodDecl):
            return NotImplemented
        # Bodies cannot be compared; only their presence counts.
        return (
            self.cpp_name == other.cpp_name
            and self.return_type == other.return_type
            and list(self.parameters) == list(other.parameters)
            and self.instance == other.instance
            and self.template == other.template
            and list(self.suffix_modifiers) == list(other.suffix_modifiers)
            and list(self.prefix_modifiers) == list(other.prefix_modifiers)
            and self.is_virtual == other.is_virtual
            and self.is_constexpr == other.is_constexpr
            and self.is_const == other.is_const
            and self.is_no_except == other.is_no_except
            and self.is_implicit_operator == other.is_implicit_operator
            and self.is_inline == other.is_inline
            and self.brief == other.brief
            and (self.body is not None) == (other.body is not None)
        )

    def _sort_key(self):
        return (
            self.cpp_name,
            self.return_type,
            tuple(self.parameters),
            self.instance,
            _optional_key(self.template),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppMethodDecl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.brief is not None:
            out.write(f"/// @brief {self.brief}\n")
        _write_default_param_comments(out, self.parameters)
        if self.template is not None:
            self.template.write(out)

        prefix = list(self.prefix_modifiers)
        suffix = list(self.suffix_modifiers)
        if not self.instance:
            prefix.append("static")
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.is_inline:
            prefix.append("inline")
        if self.is_virtual:
            prefix.append("virtual")
        if self.is_explicit_operator:
            prefix.append("explicit operator")
        elif self.is_implicit_operator:
            prefix.append("operator")
        if self.is_const and self.instance:
            suffix.append("const")
        if self.is_no_except:
            suffix.append("noexcept")

        prefixes = " ".join(prefix)
        suffixes = " ".join(suffix)
        params = ", ".join(params_as_args(self.parameters))
        head = f"{prefixes} {self.return_type} {self.cpp_name}({params}) {suffixes}"

        if self.body is not None:
            out.write(f"{head} {{\n")
            _write_body(out, self.body)
            out.write("}\n")
        else:
            out.write(f"{head};\n")


@total_ordering
@dataclass(eq=False)
class CppMethodImpl:
    """An out-of-class method definition."""

    cpp_method_name: str
    declaring_cpp_full_name: str = ""
    return_type: str = "void"
    parameters: List[CppParam] = field(default_factory=list)
    instance: bool = True
    declaring_type_template: Optional[CppTemplate] = None
    template: Optional[CppTemplate] = None
    is_const: bool = False
    is_virtual: bool = False
    is_constexpr: bool = False
    is_no_except: bool = False
    is_operator: bool = False
    is_inline: bool = False
    suffix_modifiers: List[str] = field(default_factory=list)
    prefix_modifiers: List[str] = field(default_factory=list)
    brief: Optional[str] = None
    body: List[Any] = field(default_factory=list)

    @classmethod
    def from_decl(cls, decl: CppMethodDecl) -> "CppMethodImpl":
        """The definition matching ``decl``, with no declaring type yet."""
        return cls(
            cpp_method_name=decl.cpp_name,
            declaring_cpp_full_name="",
            return_type=decl.return_type,
            parameters=list(decl.parameters),
            instance=decl.instance,
            declaring_type_template=None,
            template=decl.template,
            is_const=decl.is_const,
            is_virtual=decl.is_virtual,
            is_constexpr=decl.is_constexpr,
            is_no_except=decl.is_no_except,
            is_operator=decl.is_implicit_operator,
            is_inline=decl.is_inline,
            suffix_modifiers=list(decl.suffix_modifiers),
            prefix_modifiers=list(decl.prefix_modifiers),
            brief=decl.brief,
            body=list(decl.body) if decl.body is not None else [],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppMethodImpl):
            return NotImplemented
        return (
            self.cpp_method_name == other.cpp_method_name
            and self.declaring_cpp_full_name == other.declaring_cpp_full_name
            and self.return_type == other.return_type
            and list(self.parameters) == list(other.parameters)
            and self.instance == other.instance
            and self.declaring_type_template == other.declaring_type_template
            and self.template == other.template
            and self.is_const == other.is_const
            and self.is_virtual == other.is_virtual
            and self.is_constexpr == other.is_constexpr
            and self.is_no_except == other.is_no_except
            and self.is_operator == other.is_operator
            and self.is_inline == other.is_inline
            and list(self.suffix_modifiers) == list(other.suffix_modifiers)
            and list(self.prefix_modifiers) == list(other.prefix_modifiers)
            and self.brief == other.brief
        )

    def _sort_key(self):
        return (
            self.cpp_method_name,
            self.declaring_cpp_full_name,
            self.return_type,
            tuple(self.parameters),
            self.instance,
            _optional_key(self.declaring_type_template),
            _optional_key(self.template),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppMethodImpl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.brief is not None:
            out.write(f"/// @brief {self.brief}\n")
        _write_default_param_comments(out, self.parameters)
        if self.declaring_type_template is not None:
            self.declaring_type_template.write(out)
        if self.template is not None:
            self.template.write(out)

        prefix = list(self.prefix_modifiers)
        suffix = list(self.suffix_modifiers)
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.is_inline:
            prefix.append("inline")
        if self.is_virtual:
            prefix.append("virtual")
        if self.is_const and self.instance:
            suffix.append("const")
        if self.is_no_except:
            suffix.append("noexcept")

        prefixes = " ".join(prefix)
        suffixes = " ".join(suffix)
        declaring_type = self.declaring_cpp_full_name
        if declaring_type.startswith("::"):
            declaring_type = declaring_type[2:]
        operator = "operator " if self.is_operator else ""
        params = ", ".join(params_as_args_no_default(self.parameters))

        out.write(
            f"{prefixes} {self.return_type} {declaring_type}::{operator}"
            f"{self.cpp_method_name}({params}) {suffixes} {{\n"
        )
        _write_body(out, self.body)
        out.write("}\n")


@total_ordering
@dataclass(eq=False)
class CppConstructorDecl:
    """A constructor declared inside a type body."""

    cpp_name: str
    parameters: List[CppParam] = field(default_factory=list)
    template: Optional[CppTemplate] = None
    is_constexpr: bool = False
    is_explicit: bool = False
    is_default: bool = False
    is_no_except: bool = False
    is_delete: bool = False
    is_protected: bool = False
    base_ctor: Optional[Tuple[str, str]] = None
    initialized_values: Dict[str, str] = field(default_factory=dict)
    brief: Optional[str] = None
    body: Optional[List[Any]] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorDecl):
            return NotImplemented
        return (
            self.cpp_name == other.cpp_name
            and list(self.parameters) == list(other.parameters)
            and self.template == other.template
            and self.is_constexpr == other.is_constexpr
            and self.is_explicit == other.is_explicit
            and self.is_default == other.is_default
            and self.is_no_except == other.is_no_except
            and self.is_delete == other.is_delete
            and self.is_protected == other.is_protected
            and self.base_ctor == other.base_ctor
            and self.initialized_values == other.initialized_values
            and self.brief == other.brief
            and (self.body is not None) == (other.body is not None)
        )

    def _sort_key(self):
        return (self.cpp_name, tuple(self.parameters), _optional_key(self.template))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorDecl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        if self.is_protected:
            out.write("protected:\n")
        out.write(f"// Ctor Parameters {_debug_params(self.parameters)}\n")
        if self.brief is not None:
            out.write(f"// @brief {self.brief}\n")
        if self.template is not None:
            self.template.write(out)

        name = self.cpp_name
        params = ", ".join(params_as_args(self.parameters))

        if self.is_delete:
            out.write(f"{name}({params}) = delete;\n")
            return

        prefix: List[str] = []
        suffix: List[str] = []
        if self.is_constexpr:
            prefix.append("constexpr")
        elif self.body is not None:
            prefix.append("inline")
        if self.is_explicit:
            prefix.append("explicit")
        if self.is_no_except:
            suffix.append("noexcept")

        prefixes = " ".join(prefix)
        suffixes = " ".join(suffix)

        if self.body is not None and not self.is_default:
            initializers = _initializers(self.initialized_values, self.base_ctor)
            out.write(f"{prefixes} {name}({params}) {suffixes} {initializers} {{\n")
            _write_body(out, self.body)
            out.write("}\n")
        elif self.is_default:
            out.write(f"{prefixes} {name}({params}) {suffixes} = default;\n")
        else:
            out.write(f"{prefixes} {name}({params}) {suffixes};\n")

        if self.is_protected:
            out.write("public:\n")


@total_ordering
@dataclass(eq=False)
class CppConstructorImpl:
    """An out-of-class constructor definition."""

    declaring_full_name: str
    declaring_name: str
    parameters: List[CppParam] = field(default_factory=list)
    base_ctor: Optional[Tuple[str, str]] = None
    initialized_values: Dict[str, str] = field(default_factory=dict)
    is_constexpr: bool = False
    is_no_except: bool = False
    is_default: bool = False
    template: Optional[CppTemplate] = None
    body: List[Any] = field(default_factory=list)

    @classmethod
    def from_decl(cls, decl: CppConstructorDecl) -> "CppConstructorImpl":
        """The definition matching ``decl``; both names start as the constructor name."""
        return cls(
            declaring_full_name=decl.cpp_name,
            declaring_name=decl.cpp_name,
            parameters=list(decl.parameters),
            base_ctor=decl.base_ctor,
            initialized_values=dict(decl.initialized_values),
            is_constexpr=decl.is_constexpr,
            is_no_except=decl.is_no_except,
            is_default=decl.is_default,
            template=decl.template,
            body=list(decl.body) if decl.body is not None else [],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorImpl):
            return NotImplemented
        return (
            self.declaring_full_name == other.declaring_full_name
            and self.declaring_name == other.declaring_name
            and list(self.parameters) == list(other.parameters)
            and self.base_ctor == other.base_ctor
            and self.initialized_values == other.initialized_values
            and self.is_constexpr == other.is_constexpr
            and self.is_no_except == other.is_no_except
            and self.is_default == other.is_default
            and self.template == other.template
        )

    def _sort_key(self):
        return (
            self.declaring_full_name,
            self.declaring_name,
            tuple(self.parameters),
            _optional_key(self.template),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CppConstructorImpl):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def write(self, out: TextIO) -> None:
        out.write(f"// Ctor Parameters {_debug_params(self.parameters)}\n")
        if self.template is not None:
            self.template.write(out)

        initializers = _initializers(self.initialized_values, self.base_ctor)
        suffixes = "noexcept" if self.is_no_except else ""
        prefixes = "constexpr" if self.is_constexpr else ""
        params = ", ".join(params_as_args_no_default(self.parameters))
        head = (
            f"{prefixes} {self.declaring_full_name}::{self.declaring_name}"
            f"({params}) {suffixes} {initializers}"
        )

        if self.is_default:
            out.write(f"{head} = default;\n")
        else:
            out.write(f"{head} {{\n")
            _write_body(out, self.body)
            out.write("}\n")


@dataclass(frozen=True, order=True)
class CppMethodData:
    """Estimated code size and address of a compiled method."""

    estimated_size: int
    addrs: int


@dataclass
class CppMethodSizeStruct:
    """A ``MetadataGetter`` specialisation that resolves a method's ``MethodInfo``."""

    cpp_method_name: str
    method_name: str
    declaring_type_name: str
    declaring_classof_call: str
    ret_ty: str
    instance: bool
    params: List[CppParam]
    method_data: CppMethodData
    method_info_lines: List[str] = field(default_factory=list)
    method_info_var: str = "___internal_method"
    declaring_template: Optional[CppTemplate] = None
    template: Optional[CppTemplate] = None
    generic_literals: Optional[List[str]] = None
    interface_clazz_of: str = ""
    is_final: bool = False
    slot: Optional[int] = None

    def write(self, out: TextIO) -> None:
        out.write(
            f"//  Writing Method size for method: "
            f"{self.declaring_type_name}.{self.cpp_method_name}\n"
        )

        template = self.template if self.template is not None else CppTemplate()
        var = self.method_info_var

        # Non-final methods with a vtable slot are resolved through the slot.
        if self.slot is not None and not self.is_final:
            method_info_lines = (
                "\n"
                f"                            static auto* {var} = "
                "THROW_UNLESS(::il2cpp_utils::ResolveVtableSlot(\n"
                f"                                {self.declaring_classof_call},\n"
                f"                                 {self.interface_clazz_of}(),\n"
                f"                                  {self.slot}\n"
                "                                ));"
            )
        else:
            method_info_lines = "\n".join(self.method_info_lines)

        f_ptr_prefix = f"{self.declaring_type_name}::" if self.instance else ""
        params_format = ", ".join(params_types(self.params))

        if self.declaring_template is not None:
            self.declaring_template.write(out)
        template.write(out)

        size = self.method_data.estimated_size
        addr = self.method_data.addrs
        out.write(
            "\n"
            "struct CORDL_HIDDEN ::il2cpp_utils::il2cpp_type_check::MetadataGetter"
            f"<static_cast<{self.ret_ty} ({f_ptr_prefix}*)({params_format})>"
            f"(&{self.declaring_type_name}::{self.cpp_method_name})> {{\n"
            f"  constexpr static std::size_t size = 0x{size:x};\n"
            f"  constexpr static std::size_t addrs = 0x{addr:x};\n"
            "\n"
            "  inline static const ::MethodInfo* methodInfo() {\n"
            f"    {method_info_lines}\n"
            f"    return {var};\n"
            "  }\n"
            "};\n"
        )