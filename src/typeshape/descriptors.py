"""Immutable description of the source types handed over by the catalog producer."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union

from .errors import ConfigurationError


# ============================================================
# Type references
# ============================================================

@dataclass(frozen=True)
class Primitive:
    """A built-in scalar such as int, double, string or datetime."""
    kind: str


@dataclass(frozen=True)
class Collection:
    """A sequence of elements (arrays, lists, sets)."""
    element: "TypeReference"


@dataclass(frozen=True)
class Map:
    """A dictionary keyed by `key` holding `value`."""
    key: "TypeReference"
    value: "TypeReference"


@dataclass(frozen=True)
class NullableValue:
    """A value type wrapped to admit null (T?)."""
    inner: "TypeReference"


@dataclass(frozen=True)
class GenericUserType:
    """A constructed generic user type such as Page<Note>."""
    name: str
    arguments: tuple["TypeReference", ...] = ()
    namespace: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))


@dataclass(frozen=True)
class UserType:
    """A reference, by name, to another user-declared type."""
    name: str
    namespace: str = ""


@dataclass(frozen=True)
class Enumeration:
    """A reference, by name, to an enumeration and its literal values."""
    name: str
    namespace: str = ""
    values: tuple[Union[int, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class TypeParameter:
    """An open type parameter of a generic declaration (the T in Page<T>)."""
    name: str


TypeReference = Union[
    Primitive,
    Collection,
    Map,
    NullableValue,
    GenericUserType,
    UserType,
    Enumeration,
    TypeParameter,
]


def iter_named_references(reference: TypeReference) -> Iterator[Union[UserType, Enumeration, GenericUserType]]:
    """Yield every user/enumeration/generic reference reachable from `reference`."""
    pending: list[TypeReference] = [reference]
    while pending:
        current = pending.pop()
        if isinstance(current, (UserType, Enumeration)):
            yield current
        elif isinstance(current, GenericUserType):
            yield current
            pending.extend(reversed(current.arguments))
        elif isinstance(current, Collection):
            pending.append(current.element)
        elif isinstance(current, Map):
            pending.append(current.value)
            pending.append(current.key)
        elif isinstance(current, NullableValue):
            pending.append(current.inner)


def describe_reference(reference: TypeReference) -> str:
    """Render a source-side display name for doc comments."""
    if isinstance(reference, Primitive):
        return reference.kind
    if isinstance(reference, NullableValue):
        return f"{describe_reference(reference.inner)}?"
    if isinstance(reference, Collection):
        return f"Collection<{describe_reference(reference.element)}>"
    if isinstance(reference, Map):
        return f"Map<{describe_reference(reference.key)}, {describe_reference(reference.value)}>"
    if isinstance(reference, GenericUserType):
        arguments = ", ".join(describe_reference(argument) for argument in reference.arguments)
        qualified_name = qualify(reference.namespace or "", reference.name)
        return f"{qualified_name}<{arguments}>"
    if isinstance(reference, (UserType, Enumeration)):
        return qualify(reference.namespace, reference.name)
    if isinstance(reference, TypeParameter):
        return reference.name
    raise TypeError(f"Unsupported type reference: {reference!r}")


def qualify(namespace: str, name: str) -> str:
    """Join a namespace and a type name with a dot (no dot for the global namespace)."""
    return f"{namespace}.{name}" if namespace else name


# ============================================================
# Members + types
# ============================================================

class MemberKind(str, enum.Enum):
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"


class TypeKind(str, enum.Enum):
    PLAIN_DATA = "plain"
    ENUMERATION = "enum"
    EXTERNALLY_CONFIGURED = "external"


@dataclass(frozen=True)
class SerializationAnnotation:
    """An attribute on a member, identified by a well-known string, plus its first argument."""
    identifier: str
    argument: Union[str, int, None] = None


@dataclass(frozen=True)
class MemberDescriptor:
    """One field or property of a source type."""
    name: str
    type: TypeReference
    is_nullable: bool = False
    annotations: tuple[SerializationAnnotation, ...] = ()
    is_static: bool = False
    member_kind: MemberKind = MemberKind.PROPERTY
    source_type_display: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "annotations", tuple(self.annotations))
        object.__setattr__(self, "member_kind", MemberKind(self.member_kind))

    @property
    def type_display(self) -> str:
        if self.source_type_display:
            return self.source_type_display
        # Nullability shows up as `?` on the field, so the comment names the inner type.
        if isinstance(self.type, NullableValue):
            return describe_reference(self.type.inner)
        return describe_reference(self.type)


@dataclass(frozen=True)
class EnumMember:
    name: str
    value: Union[int, str]


@dataclass(frozen=True)
class TypeDescriptor:
    """
    A source type to translate.

    `typescript_type` is the explicit override used by externally configured types;
    `enum_members` is only populated for enumerations.
    """
    name: str
    namespace: str = ""
    kind: TypeKind = TypeKind.PLAIN_DATA
    members: tuple[MemberDescriptor, ...] = ()
    base_type: Optional[Union[UserType, GenericUserType]] = None
    typescript_type: Optional[str] = None
    enum_members: tuple[EnumMember, ...] = ()
    type_parameters: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", TypeKind(self.kind))
        object.__setattr__(self, "members", tuple(self.members))
        object.__setattr__(self, "enum_members", tuple(self.enum_members))
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))

        if not self.name:
            raise ConfigurationError("Type descriptor is missing a name.")
        if self.kind is TypeKind.EXTERNALLY_CONFIGURED and not self.typescript_type:
            raise ConfigurationError(
                f"Externally configured type {self.full_name} must declare a TypeScript type override."
            )
        if self.kind is TypeKind.ENUMERATION and self.members:
            raise ConfigurationError(
                f"Enumeration {self.full_name} declares members; use enum_members for its literals."
            )

    @property
    def full_name(self) -> str:
        return qualify(self.namespace, self.name)

    @property
    def key(self) -> tuple[str, str]:
        return (self.namespace, self.name)

    def instance_members(self) -> Iterable[MemberDescriptor]:
        return (member for member in self.members if not member.is_static)
