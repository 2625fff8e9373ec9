"""Accessor properties and getter/setter methods generated for fields."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from cordl.cpp_basic import CppLine, CppTemplate
from cordl.cpp_decls import CppParam, CppPropertyDecl
from cordl.cpp_methods import CppMethodDecl, CppMethodImpl

_MISSING_OFFSET = 0xFFFFFFFF
SETTER_VAR_NAME = "value"
INSTANCE_NULL_CHECK = "CORDL_FIELD_NULL_CHECK(static_cast<void const*>(this));"


class Accessors(NamedTuple):
    """Method declarations and their matching out-of-class definitions."""

    declarations: List[CppMethodDecl]
    implementations: List[CppMethodImpl]


class StaticAccessors(NamedTuple):
    """A static field's property with its setter and getter, declared and defined."""

    property: CppPropertyDecl
    declarations: List[CppMethodDecl]
    implementations: List[CppMethodImpl]


def _field_brief(field_name: str, offset: Optional[int], size: int) -> str:
    off = offset if offset is not None else _MISSING_OFFSET
    return f"Field {field_name}, offset 0x{off:x}, size 0x{size:x} "


def _useful_template(template: Optional[CppTemplate]) -> Optional[CppTemplate]:
    """The template, or ``None`` when it declares no parameters."""
    if template is None or not template.names:
        return None
    return template


def _impl_from(
    decl: CppMethodDecl,
    body: List[CppLine],
    declaring_cpp_name: str,
    template: Optional[CppTemplate],
) -> CppMethodImpl:
    impl = CppMethodImpl.from_decl(decl)
    impl.body = list(body)
    impl.declaring_cpp_full_name = declaring_cpp_name
    impl.template = template
    return impl


def accessor_method_names(field_cpp_name: str) -> Tuple[str, str]:
    """The internal getter and setter names for an instance field."""
    return (
        f"__cordl_internal_get_{field_cpp_name}",
        f"__cordl_internal_set_{field_cpp_name}",
    )


def make_property_decl(
    field_name: str,
    field_cpp_name: str,
    field_ty_cpp_name: str,
    offset: Optional[int],
    size: int,
) -> CppPropertyDecl:
    """A ``__declspec(property)`` for an instance field, using its internal accessors."""
    getter, setter = accessor_method_names(field_cpp_name)
    return CppPropertyDecl(
        cpp_name=field_cpp_name,
        prop_ty=field_ty_cpp_name,
        instance=True,
        getter=getter,
        setter=setter,
        indexable=False,
        brief_comment=_field_brief(field_name, offset, size),
    )


def make_instance_accessors(
    field_cpp_name: str,
    field_ty_cpp_name: str,
    backing_field_name: str,
    declaring_cpp_name: str,
    declaring_is_reference: bool,
    field_is_valuetype: bool,
    field_template: Optional[CppTemplate],
    declaring_template: Optional[CppTemplate],
    is_constexpr: bool,
) -> Accessors:
    """Getter, const getter and setter for an instance field stored in ``backing_field_name``.

    Reference-type fields on reference types are written through the GC write
    barrier, or through ``setInstanceField`` when the field's type is generic.
    """
    field_access = f"this->{backing_field_name}"
    getter_name, setter_name = accessor_method_names(field_cpp_name)

    getter_call = f"return {field_access};"
    if not field_is_valuetype and declaring_is_reference:
        if field_template is not None and field_template.names:
            setter_call = (
                f"::cordl_internals::setInstanceField(this, &{field_access}, "
                f"{SETTER_VAR_NAME});"
            )
        else:
            setter_call = (
                "il2cpp_functions::gc_wbarrier_set_field(this, "
                f"static_cast<void**>(static_cast<void*>(&{field_access})), "
                "cordl_internals::convert(std::forward<decltype("
                f"{SETTER_VAR_NAME})>({SETTER_VAR_NAME})));"
            )
    else:
        setter_call = f"{field_access} = {SETTER_VAR_NAME};"

    def decl(name: str, return_type: str, is_const: bool, params) -> CppMethodDecl:
        return CppMethodDecl(
            cpp_name=name,
            return_type=return_type,
            parameters=list(params),
            instance=True,
            is_const=is_const,
            is_constexpr=is_constexpr,
            is_inline=True,
        )

    getter_decl = decl(getter_name, f"{field_ty_cpp_name}&", False, [])
    const_getter_decl = decl(getter_name, f"{field_ty_cpp_name} const&", True, [])
    setter_decl = decl(
        setter_name,
        "void",
        False,
        [CppParam(name=SETTER_VAR_NAME, ty=field_ty_cpp_name, modifiers="")],
    )

    prelude = [CppLine(INSTANCE_NULL_CHECK)] if declaring_is_reference else []
    getter_body = prelude + [CppLine(getter_call)]
    setter_body = prelude + [CppLine(setter_call)]

    return Accessors(
        declarations=[getter_decl, const_getter_decl, setter_decl],
        implementations=[
            _impl_from(getter_decl, getter_body, declaring_cpp_name, declaring_template),
            _impl_from(
                const_getter_decl, getter_body, declaring_cpp_name, declaring_template
            ),
            _impl_from(setter_decl, setter_body, declaring_cpp_name, declaring_template),
        ],
    )


def make_static_accessors(
    field_name: str,
    field_cpp_name: str,
    field_ty_cpp_name: str,
    declaring_cpp_name: str,
    klass_resolver: str,
    helper_namespace: str,
    template: Optional[CppTemplate],
    offset: Optional[int],
    size: int,
) -> StaticAccessors:
    """Property plus static setter and getter that go through the runtime helpers."""
    getter_call = (
        f"return {helper_namespace}::getStaticField<{field_ty_cpp_name}, "
        f'"{field_name}", {klass_resolver}>();'
    )
    setter_call = (
        f"{helper_namespace}::setStaticField<{field_ty_cpp_name}, "
        f'"{field_name}", {klass_resolver}>'
        f"(std::forward<{field_ty_cpp_name}>({SETTER_VAR_NAME}));"
    )
    impl_template = _useful_template(template)

    getter_decl = CppMethodDecl(
        cpp_name=f"getStaticF_{field_cpp_name}",
        return_type=field_ty_cpp_name,
        instance=False,
        is_inline=True,
    )
    setter_decl = CppMethodDecl(
        cpp_name=f"setStaticF_{field_cpp_name}",
        return_type="void",
        parameters=[CppParam(name=SETTER_VAR_NAME, ty=field_ty_cpp_name, modifiers="")],
        instance=False,
        is_inline=True,
    )

    prop = CppPropertyDecl(
        cpp_name=field_cpp_name,
        prop_ty=field_ty_cpp_name,
        instance=False,
        getter=getter_decl.cpp_name,
        setter=setter_decl.cpp_name,
        indexable=False,
        brief_comment=_field_brief(field_name, offset, size),
    )

    return StaticAccessors(
        property=prop,
        declarations=[setter_decl, getter_decl],
        implementations=[
            _impl_from(
                setter_decl, [CppLine(setter_call)], declaring_cpp_name, impl_template
            ),
            _impl_from(
                getter_decl, [CppLine(getter_call)], declaring_cpp_name, impl_template
            ),
        ],
    )