import pytest

from cordl.name_components import NameComponents


@pytest.fixture
def full():
    return NameComponents(
        namespace="System",
        declaring_types=["Outer"],
        name="Inner",
        generics=["T", "U"],
    )


def test_combine_all_full(full):
    assert full.combine_all() == "System.Outer/Inner<T,U>"


def test_combine_all_bare_name():
    assert NameComponents.from_name("Foo").combine_all() == "Foo"


def test_from_name_defaults():
    c = NameComponents.from_name("Bar")
    assert (c.namespace, c.declaring_types, c.name, c.generics) == (None, None, "Bar", None)


def test_into_ref_generics(full):
    refd = full.into_ref_generics()
    assert refd.generics == ("void*", "void*")
    assert refd.name == full.name
    assert full.generics == ("T", "U")


def test_into_ref_generics_without_generics():
    c = NameComponents.from_name("X")
    assert c.into_ref_generics().generics is None


def test_remove_generics(full):
    stripped = full.remove_generics()
    assert stripped.generics is None
    assert "<" not in stripped.combine_all()
    assert full.combine_all().startswith(stripped.combine_all())


def test_remove_namespace(full):
    stripped = full.remove_namespace()
    assert stripped.namespace is None
    assert full.combine_all() == f"System.{stripped.combine_all()}"


def test_formatted_name(full):
    assert full.formatted_name(True) == "Inner<T,U>"
    assert full.formatted_name(False) == "Inner"


def test_ordering_none_first():
    a = NameComponents(name="Z")
    b = NameComponents(namespace="A", name="A")
    assert sorted([b, a]) == [a, b]


def test_ordering_by_name():
    a = NameComponents(namespace="N", name="A")
    b = NameComponents(namespace="N", name="B")
    assert a < b
    assert not b < a


def test_hashable_and_equal(full):
    same = NameComponents(
        namespace="System", declaring_types=("Outer",), name="Inner", generics=("T", "U")
    )
    assert same == full
    assert len({same, full}) == 1