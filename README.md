# cordl

`cordl` is a library of building blocks for writing C++ header text that
describes types found in IL2CPP metadata. It holds type-name models,
C++ declaration objects that write themselves to any text stream, helpers
for field layout and field accessors, and a wrapper that runs
`clang-format` over a tree of generated files.

It has no runtime dependencies beyond the standard library.

## Modules

- `cordl.name_components`: `NameComponents` is the C#-side view of a type
  name: namespace, declaring types, name and generic arguments.
  `combine_all()` gives `Namespace.Outer/Inner<A,B>`. The instances are
  frozen and ordered. `remove_generics()`, `remove_namespace()`,
  `into_ref_generics()` (every generic argument becomes `void*`) and
  `formatted_name(include_generics)` each return a new value.
- `cordl.cpp_name_components`: `CppNameComponents` is the C++-side view,
  with an extra `is_pointer` flag. `combine_all()` gives
  `::Ns::Name<A,B>*`. When declaring types are present they are used as the
  `::` prefix instead of the namespace. There are also `as_pointer()`,
  `remove_pointer()`, `remove_generics()`, `into_ref_generics()` and
  `from_name_components()`.
- `cordl.cpp_basic` holds `CppTemplate`, `CppStaticAssert`, `CppLine`,
  `CppForwardDeclare`, `CppCommentedString`, `CppInclude` (with
  `new_system` and `new_exact`) and `CppUsingAlias`.
- `cordl.cpp_decls` holds `CppParam` and the `params_as_args`,
  `params_as_args_no_default`, `params_names`, `params_types` and
  `params_il2cpp_types` helpers. It also holds `CppFieldDecl`,
  `CppFieldImpl` (with `from_decl`), `CppPropertyDecl` (a
  `__declspec(property)`), `CppNestedStruct` and `CppNestedUnion`.
- `cordl.cpp_methods` holds `CppMethodDecl`, `CppMethodImpl`,
  `CppConstructorDecl`, `CppConstructorImpl`, `CppMethodData` and
  `CppMethodSizeStruct`. The size struct is a `MetadataGetter`
  specialisation that resolves a `MethodInfo`, through the vtable slot
  when the method is not final.
- `cordl.layout` lays out instance fields:
  - `fixup_backing_field` builds the name of a backing field.
  - `rename_shadowed_fields` adds a `_cordl_` prefix to fields that clash
    with a property and makes them private.
  - `field_offset_asserts` builds `offsetof` static asserts.
  - `field_into_offset_structs` and `pack_fields_into_single_union` lay
    out explicit-layout fields as a union of padded structs.

  A field without an offset raises `ValueError`.
- `cordl.accessors` builds accessors for fields:
  - `accessor_method_names` and `make_property_decl` give the names and the
    property for a field.
  - `make_instance_accessors` builds a getter, a const getter and a setter,
    using the GC write barrier or `setInstanceField` for reference fields on
    reference types.
  - `make_static_accessors` builds a property plus static getter and setter
    that go through the runtime helpers.
- `cordl.formatting`:
  - `collect_files(root)` lists every file under a directory, largest
    first.
  - `format_files(root)` runs `clang-format -i` on each of them in
    parallel.

  `FormattingError` is raised if `clang-format` is missing from `PATH` or
  fails on a file.

Every declaration object has a `write(out)` method that writes to any
text stream, such as a file or an `io.StringIO`. The output is not
indented and can have extra spaces between tokens. Run `format_files` over
the output directory to tidy it.

## Example

```python
import io

from cordl.name_components import NameComponents
from cordl.cpp_name_components import CppNameComponents
from cordl.cpp_basic import CppInclude, CppTemplate

cs_name = NameComponents(
    namespace="System.Collections.Generic",
    name="List`1",
    generics=["T"],
)
print(cs_name.combine_all())
# System.Collections.Generic.List`1<T>

cpp_name = CppNameComponents(namespace="System", name="Object", is_pointer=True)
print(cpp_name.combine_all())
# ::System::Object*

out = io.StringIO()
CppInclude.new_system("cstdint").write(out)
CppTemplate.make_typenames(["T", "U"]).write(out)
print(out.getvalue(), end="")
# #include <cstdint>
# template<typename T,typename U>
```

## What it does not do

`cordl` does not read IL2CPP metadata files and does not resolve types. It
does not turn C# names into safe C++ identifiers, namespaces or header
paths, so keywords and macro names are not escaped for you. It does not
put together or write whole header files, include lists or per-namespace
headers. Every part is called from your own code; there is no command-line
program.

## Tests

The test suite uses pytest, which the `test` extra installs.