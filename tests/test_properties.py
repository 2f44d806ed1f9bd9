from hypothesis import given, settings
from hypothesis import strategies as st

from typeshape.descriptors import (
    Collection,
    Map,
    MemberDescriptor,
    NullableValue,
    Primitive,
    SerializationAnnotation,
    TypeDescriptor,
    UserType,
    iter_named_references,
)
from typeshape.generator import TypeScriptCodeGenerator
from typeshape.grouping import group_by_namespace, render_import_lines
from typeshape.members import resolve_member, resolve_member_name
from typeshape.naming import NamingStyle
from typeshape.options import SerializerOption, TranspilationOptions
from typeshape.type_mapper import DEFAULT_PRIMITIVE_TYPE_MAP, TypeMapper


identifiers = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,12}", fullmatch=True)
namespaces = st.sampled_from(["Alpha", "Beta", "Beta.Sub", "Gamma"])
naming_styles = st.sampled_from(list(NamingStyle))

primitive_references = st.sampled_from(sorted(DEFAULT_PRIMITIVE_TYPE_MAP)).map(Primitive)
user_references = st.builds(UserType, st.sampled_from(["Foo", "Bar", "Baz"]), namespaces)
type_references = st.recursive(
    st.one_of(primitive_references, user_references),
    lambda children: st.one_of(
        st.builds(Collection, children),
        st.builds(Map, primitive_references, children),
    ),
    max_leaves=6,
)


@given(name=identifiers, serialized_name=identifiers, naming_style=naming_styles)
def test_rename_annotation_beats_naming_style(name, serialized_name, naming_style):
    options = TranspilationOptions(naming_style=naming_style, serializer=SerializerOption.JSON)
    member = MemberDescriptor(
        name,
        Primitive("int"),
        annotations=(SerializationAnnotation("JsonPropertyName", serialized_name),),
    )
    assert resolve_member_name(member, options) == (True, serialized_name)


@given(name=identifiers, naming_style=naming_styles, serializer=st.sampled_from(["json", "messagepack"]))
def test_ignore_annotation_always_excludes(name, naming_style, serializer):
    options = TranspilationOptions(naming_style=naming_style, serializer=serializer)
    ignore_identifier = "JsonIgnore" if serializer == "json" else "IgnoreMember"
    member = MemberDescriptor(name, Primitive("int"), annotations=(SerializationAnnotation(ignore_identifier),))
    assert resolve_member(member, options) is None


@given(reference=type_references)
def test_nullable_value_maps_like_its_inner_type(reference):
    mapper = TypeMapper.from_options(TranspilationOptions())
    assert mapper.map_to(NullableValue(reference)) == mapper.map_to(reference)
    assert "null" not in mapper.map_to(NullableValue(reference))


@given(member_specs=st.lists(st.tuples(identifiers, st.booleans()), max_size=8, unique_by=lambda spec: spec[0]))
def test_field_count_equals_included_members(member_specs):
    options = TranspilationOptions(serializer=SerializerOption.JSON)
    members = tuple(
        MemberDescriptor(
            name,
            Primitive("int"),
            annotations=(SerializationAnnotation("JsonIgnore"),) if is_ignored else (),
        )
        for name, is_ignored in member_specs
    )
    descriptor = TypeDescriptor(name="Shape", namespace="Geo", members=members)

    text = TypeScriptCodeGenerator([descriptor], options).generate()[0].text
    field_lines = [line for line in text.splitlines() if line.endswith(": number;")]

    assert len(field_lines) == sum(1 for _, is_ignored in member_specs if not is_ignored)


@settings(max_examples=50)
@given(
    type_specs=st.lists(
        st.tuples(namespaces, st.lists(type_references, max_size=4)),
        min_size=1,
        max_size=6,
    )
)
def test_imports_are_exact_and_deterministic(type_specs):
    options = TranspilationOptions()
    catalog = [
        TypeDescriptor(
            name=f"Type{index}",
            namespace=namespace,
            members=tuple(MemberDescriptor(f"M{position}", reference) for position, reference in enumerate(references)),
        )
        for index, (namespace, references) in enumerate(type_specs)
    ]

    first_run = group_by_namespace(catalog, options)
    second_run = group_by_namespace(catalog, options)

    for group, repeated_group in zip(first_run, second_run):
        expected_namespaces = {
            reference.namespace
            for descriptor in group.types
            for member in descriptor.members
            for reference in iter_named_references(member.type)
        } - {group.namespace}

        assert set(group.imports) == expected_namespaces
        assert group.namespace not in group.imports
        assert render_import_lines(group, options) == render_import_lines(repeated_group, options)
