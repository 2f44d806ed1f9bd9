"""
JSON interchange format for catalogs produced by a front end.

A catalog looks like:

    {
      "types": [
        {"name": "Color", "namespace": "Shop", "kind": "enum",
         "enum_members": [{"name": "Red", "value": 0}]},
        {"name": "Item", "namespace": "Shop",
         "members": [
           {"name": "Id", "type": {"kind": "primitive", "name": "int"}},
           {"name": "Tint", "type": {"kind": "nullable",
                                     "inner": {"kind": "enum", "name": "Color", "namespace": "Shop"}}},
           {"name": "Secret", "type": {"kind": "primitive", "name": "string"},
            "annotations": [{"name": "JsonIgnore"}]}
         ]}
      ]
    }
"""
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .descriptors import (
    Collection,
    EnumMember,
    Enumeration,
    GenericUserType,
    Map,
    MemberDescriptor,
    NullableValue,
    Primitive,
    SerializationAnnotation,
    TypeDescriptor,
    TypeParameter,
    TypeReference,
    UserType,
)
from .errors import ConfigurationError


class CatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ============================================================
# Type references (discriminated on "kind")
# ============================================================

class PrimitiveModel(CatalogModel):
    kind: Literal["primitive"]
    name: str

    def to_reference(self) -> TypeReference:
        return Primitive(self.name)


class CollectionModel(CatalogModel):
    kind: Literal["collection"]
    element: "TypeReferenceModel"

    def to_reference(self) -> TypeReference:
        return Collection(self.element.to_reference())


class MapModel(CatalogModel):
    kind: Literal["map"]
    key: "TypeReferenceModel"
    value: "TypeReferenceModel"

    def to_reference(self) -> TypeReference:
        return Map(self.key.to_reference(), self.value.to_reference())


class NullableModel(CatalogModel):
    kind: Literal["nullable"]
    inner: "TypeReferenceModel"

    def to_reference(self) -> TypeReference:
        return NullableValue(self.inner.to_reference())


class GenericUserTypeModel(CatalogModel):
    kind: Literal["generic"]
    name: str
    arguments: list["TypeReferenceModel"] = Field(default_factory=list)
    namespace: Optional[str] = None

    def to_reference(self) -> GenericUserType:
        return GenericUserType(
            self.name,
            tuple(argument.to_reference() for argument in self.arguments),
            self.namespace,
        )


class UserTypeModel(CatalogModel):
    kind: Literal["user"]
    name: str
    namespace: str = ""

    def to_reference(self) -> UserType:
        return UserType(self.name, self.namespace)


class EnumerationModel(CatalogModel):
    kind: Literal["enum"]
    name: str
    namespace: str = ""
    values: list[Union[int, str]] = Field(default_factory=list)

    def to_reference(self) -> TypeReference:
        return Enumeration(self.name, self.namespace, tuple(self.values))


class TypeParameterModel(CatalogModel):
    kind: Literal["parameter"]
    name: str

    def to_reference(self) -> TypeReference:
        return TypeParameter(self.name)


TypeReferenceModel = Annotated[
    Union[
        PrimitiveModel,
        CollectionModel,
        MapModel,
        NullableModel,
        GenericUserTypeModel,
        UserTypeModel,
        EnumerationModel,
        TypeParameterModel,
    ],
    Field(discriminator="kind"),
]

BaseTypeModel = Annotated[Union[UserTypeModel, GenericUserTypeModel], Field(discriminator="kind")]


# ============================================================
# Members + types
# ============================================================

class AnnotationModel(CatalogModel):
    name: str
    argument: Union[int, str, None] = None


class MemberModel(CatalogModel):
    name: str
    type: TypeReferenceModel
    nullable: bool = False
    annotations: list[AnnotationModel] = Field(default_factory=list)
    static: bool = False
    member_kind: Literal["field", "property", "method", "event"] = "property"
    display: Optional[str] = None

    def to_descriptor(self) -> MemberDescriptor:
        return MemberDescriptor(
            name=self.name,
            type=self.type.to_reference(),
            is_nullable=self.nullable,
            annotations=tuple(
                SerializationAnnotation(annotation.name, annotation.argument) for annotation in self.annotations
            ),
            is_static=self.static,
            member_kind=self.member_kind,
            source_type_display=self.display,
        )


class EnumMemberModel(CatalogModel):
    name: str
    value: Union[int, str]


class TypeModel(CatalogModel):
    name: str = Field(min_length=1)
    namespace: str = ""
    kind: Literal["plain", "enum", "external"] = "plain"
    members: list[MemberModel] = Field(default_factory=list)
    base_type: Optional[BaseTypeModel] = None
    typescript_type: Optional[str] = None
    enum_members: list[EnumMemberModel] = Field(default_factory=list)
    type_parameters: list[str] = Field(default_factory=list)

    def to_descriptor(self) -> TypeDescriptor:
        return TypeDescriptor(
            name=self.name,
            namespace=self.namespace,
            kind=self.kind,
            members=tuple(member.to_descriptor() for member in self.members),
            base_type=self.base_type.to_reference() if self.base_type is not None else None,
            typescript_type=self.typescript_type,
            enum_members=tuple(EnumMember(member.name, member.value) for member in self.enum_members),
            type_parameters=tuple(self.type_parameters),
        )


class Catalog(CatalogModel):
    types: list[TypeModel] = Field(default_factory=list)

    def to_descriptors(self) -> list[TypeDescriptor]:
        return [type_model.to_descriptor() for type_model in self.types]


for _model in (CollectionModel, MapModel, NullableModel, GenericUserTypeModel, MemberModel, TypeModel, Catalog):
    _model.model_rebuild()


def parse_catalog(data: Any) -> list[TypeDescriptor]:
    """Validate an already-decoded catalog document."""
    return Catalog.model_validate(data).to_descriptors()


def load_catalog(path: Path) -> list[TypeDescriptor]:
    """Read and validate a catalog JSON file."""
    try:
        source_text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise ConfigurationError(f"Cannot read catalog {path}: {error}") from error

    try:
        catalog = Catalog.model_validate_json(source_text)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid catalog {path}:\n{error}") from error
    return catalog.to_descriptors()
