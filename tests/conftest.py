import pytest

from typeshape.descriptors import MemberDescriptor, Primitive, SerializationAnnotation, TypeDescriptor, UserType
from typeshape.naming import NamingStyle
from typeshape.options import SerializerOption, TranspilationOptions
from typeshape.type_mapper import TypeMapper


@pytest.fixture
def plain_options():
    """Identity naming, no serializer annotations."""
    return TranspilationOptions(naming_style=NamingStyle.NONE, serializer=SerializerOption.NONE)


@pytest.fixture
def json_options():
    return TranspilationOptions(naming_style=NamingStyle.CAMEL_CASE, serializer=SerializerOption.JSON)


@pytest.fixture
def messagepack_options():
    return TranspilationOptions(naming_style=NamingStyle.CAMEL_CASE, serializer=SerializerOption.MESSAGE_PACK)


@pytest.fixture
def mapper(plain_options):
    return TypeMapper.from_options(plain_options)


@pytest.fixture
def point_type():
    """Point { X: int, Y: int } in namespace Geo."""
    return TypeDescriptor(
        name="Point",
        namespace="Geo",
        members=(
            MemberDescriptor("X", Primitive("int")),
            MemberDescriptor("Y", Primitive("int")),
        ),
    )


@pytest.fixture
def make_member():
    """Build a string property carrying the given annotations."""

    def factory(name="UserName", *annotations, reference=None, **kwargs):
        return MemberDescriptor(
            name,
            reference or Primitive("string"),
            annotations=tuple(
                SerializationAnnotation(*annotation) if isinstance(annotation, tuple) else SerializationAnnotation(annotation)
                for annotation in annotations
            ),
            **kwargs,
        )

    return factory


@pytest.fixture
def referencing_type():
    """Build a plain type in `namespace` with one member per referenced (namespace, name)."""

    def factory(name, namespace, *references):
        return TypeDescriptor(
            name=name,
            namespace=namespace,
            members=tuple(
                MemberDescriptor(f"Field{index}", UserType(referenced_name, referenced_namespace))
                for index, (referenced_namespace, referenced_name) in enumerate(references)
            ),
        )

    return factory
