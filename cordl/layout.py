"""Instance field layout: backing-field names, offset checks and explicit-layout unions."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from cordl.cpp_basic import CppStaticAssert
from cordl.cpp_decls import CppFieldDecl, CppNestedStruct, CppNestedUnion

SHADOWED_FIELD_PREFIX = "_cordl_"
OFFSET_MISMATCH_MESSAGE = "Offset mismatch!"
UNION_BRIEF = "Explicitly laid out type with union based offsets"
_MISSING_OFFSET = 0xFFFFFFFF


def fixup_backing_field(field_name: str, prefix: str) -> str:
    """The name of the storage field that backs an accessor property."""
    return f"{prefix}{field_name}"


def rename_shadowed_fields(
    fields: Iterable[CppFieldDecl], property_names: Iterable[str]
) -> List[CppFieldDecl]:
    """Instance fields with an offset, renamed and made private where a property shares the name."""
    taken = set(property_names)
    result: List[CppFieldDecl] = []
    for decl in fields:
        if decl.offset is None or not decl.instance:
            continue
        if decl.cpp_name in taken:
            decl = replace(
                decl,
                cpp_name=f"{SHADOWED_FIELD_PREFIX}{decl.cpp_name}",
                is_private=True,
            )
        result.append(decl)
    return result


def field_offset_asserts(
    cpp_name: str, fields: Iterable[CppFieldDecl]
) -> List[CppStaticAssert]:
    """One ``static_assert`` per field checking its ``offsetof`` in ``cpp_name``."""
    asserts = []
    for decl in fields:
        offset = decl.offset if decl.offset is not None else _MISSING_OFFSET
        asserts.append(
            CppStaticAssert(
                condition=f"offsetof({cpp_name}, {decl.cpp_name}) == 0x{offset:x}",
                message=OFFSET_MISMATCH_MESSAGE,
            )
        )
    return asserts


def field_into_offset_structs(
    min_offset: int, field: CppFieldDecl
) -> Tuple[CppNestedStruct, CppNestedStruct]:
    """Split a field into a byte-packed struct and an aligned struct, each padded to its offset.

    Raises ``ValueError`` for a field without an offset.
    """
    if field.offset is None:
        raise ValueError(
            f"field {field.cpp_name!r} has no offset; only instance fields can be laid out"
        )
    padding = field.offset

    packed_padding = CppFieldDecl(
        cpp_name=f"{field.cpp_name}_padding[0x{padding:x}]",
        field_ty="uint8_t",
        offset=padding,
        instance=True,
        readonly=False,
        const_expr=False,
        value=None,
        brief_comment=f"Padding field 0x{padding:x}",
        is_private=False,
    )
    alignment_padding = CppFieldDecl(
        cpp_name=f"{field.cpp_name}_padding_forAlignment[0x{padding:x}]",
        field_ty="uint8_t",
        offset=padding,
        instance=True,
        readonly=False,
        const_expr=False,
        value=None,
        brief_comment=f"Padding field 0x{padding:x} for alignment",
        is_private=False,
    )
    alignment_field = replace(
        field, cpp_name=f"{field.cpp_name}_forAlignment", is_private=False
    )
    packed_field = replace(field, is_private=False)

    packed_struct = CppNestedStruct(
        declaring_name="",
        base_type=None,
        declarations=[packed_padding, packed_field],
        is_enum=False,
        is_class=False,
        is_private=False,
        brief_comment=None,
        packing=1,
    )
    alignment_struct = CppNestedStruct(
        declaring_name="",
        base_type=None,
        declarations=[alignment_padding, alignment_field],
        is_enum=False,
        is_class=False,
        is_private=False,
        brief_comment=None,
        packing=None,
    )
    return packed_struct, alignment_struct


def pack_fields_into_single_union(fields: Sequence[CppFieldDecl]) -> CppNestedUnion:
    """Lay out explicitly placed fields as a private union of offset structs."""
    missing = [f.cpp_name for f in fields if f.offset is None]
    if missing:
        raise ValueError(f"fields without offsets cannot be packed: {missing}")

    min_offset = min((f.offset for f in fields), default=0)
    declarations = [
        struct
        for decl in fields
        for struct in field_into_offset_structs(min_offset, decl)
    ]
    return CppNestedUnion(
        declarations=declarations,
        brief_comment=UNION_BRIEF,
        offset=min_offset,
        is_private=True,
    )