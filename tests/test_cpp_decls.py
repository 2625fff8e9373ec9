import io

import pytest

from cordl.cpp_basic import CppLine, CppTemplate
from cordl.cpp_decls import (
    CppFieldDecl,
    CppFieldImpl,
    CppNestedStruct,
    CppNestedUnion,
    CppParam,
    CppPropertyDecl,
    params_as_args,
    params_as_args_no_default,
    params_il2cpp_types,
    params_names,
    params_types,
)


def render(obj) -> str:
    out = io.StringIO()
    obj.write(out)
    return out.getvalue()


@pytest.fixture
def params():
    return [
        CppParam(name="a", ty="int32_t", modifiers="", def_value=None),
        CppParam(name="b", ty="float_t", modifiers="&", def_value="0"),
    ]


def test_params_names_and_types(params):
    assert params_names(params) == ["a", "b"]
    assert params_types(params) == ["int32_t", "float_t"]


def test_params_as_args_default_included(params):
    args = params_as_args(params)
    assert len(args) == 2
    assert "=" not in args[0]
    assert args[1].endswith("= 0")
    assert args[1].startswith("float_t&")


def test_params_as_args_no_default_drops_defaults(params):
    args = params_as_args_no_default(params)
    assert all("=" not in a for a in args)
    assert [a.split()[-1] for a in args] == ["a", "b"]


def test_params_il2cpp_types(params):
    assert params_il2cpp_types(params) == [
        "::il2cpp_utils::ExtractType(a)",
        "::il2cpp_utils::ExtractType(b)",
    ]


def test_param_ordering_by_name():
    p1 = CppParam(name="a", ty="z")
    p2 = CppParam(name="b", ty="a")
    assert sorted([p2, p1]) == [p1, p2]


def test_field_decl_static_constexpr_value():
    decl = CppFieldDecl(
        cpp_name="X", field_ty="int32_t", instance=False, const_expr=True, value="5"
    )
    text = render(decl)
    assert text.split() == ["static", "constexpr", "int32_t", "X{5};"]


def test_field_decl_readonly_suffix_const():
    decl = CppFieldDecl(cpp_name="y", field_ty="bool", readonly=True)
    tokens = render(decl).split()
    assert tokens == ["bool", "const", "y;"]


def test_field_decl_private_wraps_access():
    decl = CppFieldDecl(
        cpp_name="z", field_ty="bool", brief_comment="note", is_private=True
    )
    lines = render(decl).splitlines()
    assert lines[0] == "/// @brief note"
    assert lines[1] == "private:"
    assert lines[-1] == "public:"


def test_field_impl_from_decl_round_trip():
    decl = CppFieldDecl(
        cpp_name="V", field_ty="int32_t", readonly=True, const_expr=True, value="3"
    )
    impl = CppFieldImpl.from_decl(decl)
    assert impl.cpp_name == decl.cpp_name
    assert impl.field_ty == decl.field_ty
    assert impl.value == "3"
    assert impl.declaring_type == ""
    assert impl.declaring_type_template is None


def test_field_impl_from_decl_missing_value_is_empty():
    impl = CppFieldImpl.from_decl(CppFieldDecl(cpp_name="V", field_ty="int"))
    assert impl.value == ""


def test_field_impl_write_strips_leading_scope():
    impl = CppFieldImpl(
        cpp_name="V",
        field_ty="int32_t",
        declaring_type="::Ns::Type",
        const_expr=True,
        value="3",
        declaring_type_template=CppTemplate.make_typenames(["T"]),
    )
    lines = render(impl).splitlines()
    assert lines[0] == "template<typename T>"
    assert "Ns::Type::V{3};" in lines[1]
    assert "::Ns::Type" not in lines[1]
    assert lines[1].split()[0] == "constexpr"


def test_property_decl_write():
    prop = CppPropertyDecl(
        cpp_name="Item",
        prop_ty="int32_t",
        getter="get_Item",
        setter="set_Item",
        indexable=True,
        brief_comment="c",
    )
    lines = render(prop).splitlines()
    assert lines[0] == "/// @brief c"
    assert "__declspec(property(get=get_Item, put=set_Item))" in lines[1]
    assert lines[1].endswith("Item[];")


def test_property_decl_getter_only():
    prop = CppPropertyDecl(cpp_name="P", prop_ty="bool", getter="get_P")
    text = render(prop)
    assert "put=" not in text
    assert text.rstrip().endswith("P;")


def test_nested_struct_packing_and_members():
    inner = CppFieldDecl(cpp_name="f", field_ty="uint8_t")
    s = CppNestedStruct(
        declaring_name="S",
        base_type="Base",
        declarations=[inner],
        packing=1,
        is_private=True,
    )
    lines = render(s).splitlines()
    assert lines[0] == "private:"
    assert lines[1] == "#pragma pack(push, tp, 1)"
    assert lines[2] == "struct S : public Base {"
    assert lines[3].split() == ["uint8_t", "f;"]
    assert lines[4:] == ["};", "#pragma pack(pop, tp)", "public:"]


def test_nested_enum_class_base_not_public():
    s = CppNestedStruct(
        declaring_name="E", base_type="int32_t", is_enum=True, is_class=True
    )
    first = render(s).splitlines()[0]
    assert first == "enum class E : int32_t {"


def test_nested_union_write():
    u = CppNestedUnion(
        declarations=[CppLine("int a;"), CppLine("float b;")],
        brief_comment="u",
        offset=0,
        is_private=True,
    )
    lines = render(u).splitlines()
    assert lines == [
        "private:",
        "/// @brief u",
        "union {",
        "int a;",
        "float b;",
        "};",
        "public:",
    ]