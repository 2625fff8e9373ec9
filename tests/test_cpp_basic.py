import io

from cordl.cpp_basic import (
    CppCommentedString,
    CppForwardDeclare,
    CppInclude,
    CppLine,
    CppStaticAssert,
    CppTemplate,
    CppUsingAlias,
)


def render(item):
    out = io.StringIO()
    item.write(out)
    return out.getvalue()


def test_make_typenames_and_just_names():
    t = CppTemplate.make_typenames(["T", "U"])
    assert list(t.just_names()) == ["T", "U"]
    assert all(constraint == "typename" for constraint, _ in t.names)


def test_template_write():
    t = CppTemplate.make_typenames(["T", "U"])
    assert render(t) == "template<typename T,typename U>\n"


def test_template_ordering_and_equality():
    a = CppTemplate.make_typenames(["A"])
    b = CppTemplate.make_typenames(["B"])
    assert a < b
    assert a == CppTemplate(names=[("typename", "A")])


def test_static_assert_with_and_without_message():
    with_msg = render(CppStaticAssert("sizeof(X) == 4", "Size mismatch!"))
    assert with_msg.startswith("static_assert(sizeof(X) == 4, ")
    assert with_msg.endswith('"Size mismatch!");\n')
    without = render(CppStaticAssert("true"))
    assert without.startswith("static_assert(true)")
    assert ";" not in without


def test_line_write():
    assert render(CppLine("return x;")) == "return x;\n"


def test_forward_declare_plain_class():
    fd = CppForwardDeclare(cpp_name="Foo", cpp_namespace="Bar")
    lines = render(fd).splitlines()
    assert lines[0] == "namespace Bar {"
    assert lines[1] == "class Foo;"
    assert lines[-1] == "}"


def test_forward_declare_struct_with_template():
    fd = CppForwardDeclare(
        cpp_name="List_1",
        is_struct=True,
        cpp_namespace="System",
        templates=CppTemplate.make_typenames(["T"]),
    )
    lines = render(fd).splitlines()
    assert lines[1] == render(CppTemplate.make_typenames(["T"])).rstrip("\n")
    assert lines[2] == "struct List_1;"
    assert "template<>" not in lines


def test_forward_declare_literals_specialisation():
    fd = CppForwardDeclare(cpp_name="List_1", literals=["int32_t", "float_t"])
    lines = render(fd).splitlines()
    assert lines[0] == "template<>"
    assert lines[1] == "class List_1<int32_t,float_t>;"
    assert not any(line.startswith("namespace") for line in lines)


def test_forward_declare_literals_with_template_has_single_header():
    fd = CppForwardDeclare(
        cpp_name="X",
        templates=CppTemplate.make_typenames(["T"]),
        literals=["T"],
    )
    text = render(fd)
    assert text.count("template<") == 1
    assert text.endswith("class X<T>;\n")


def test_commented_string():
    assert render(CppCommentedString("int x;")) == "int x;\n"
    with_comment = render(CppCommentedString("int x;", "note"))
    assert with_comment.splitlines() == ["int x;", "// note"]


def test_include_quoted_and_system():
    exact = CppInclude.new_exact("beatsaber-hook/shared/utils/typedefs.h")
    assert render(exact) == '#include "beatsaber-hook/shared/utils/typedefs.h"\n'
    system = CppInclude.new_system("cstdint")
    assert render(system) == "#include <cstdint>\n"
    assert system.system and not exact.system


def test_include_sorting_and_dedup():
    a = CppInclude.new_exact("b/x.hpp")
    b = CppInclude.new_exact("a/x.hpp")
    c = CppInclude.new_exact("a/x.hpp")
    assert sorted({a, b, c}) == [b, a]


def test_using_alias_plain():
    alias = CppUsingAlias(alias="Foo", result="::Bar::Baz")
    assert render(alias) == "using Foo = ::Bar::Baz;\n"


def test_using_alias_with_template():
    template = CppTemplate.make_typenames(["T"])
    alias = CppUsingAlias(alias="Foo", result="Bar<T>", template=template)
    lines = render(alias).splitlines()
    assert lines[0] == render(template).rstrip("\n")
    assert lines[1] == "using Foo = Bar<T>;"


def test_using_alias_ordering_by_result_first():
    a = CppUsingAlias(alias="Z", result="A")
    b = CppUsingAlias(alias="A", result="B")
    c = CppUsingAlias(alias="A", result="B", template=CppTemplate.make_typenames(["T"]))
    assert sorted([c, b, a]) == [a, b, c]