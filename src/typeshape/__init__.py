"""Translate source type descriptors into TypeScript type declarations."""
from __future__ import annotations

from .catalog import load_catalog, parse_catalog
from .descriptors import (
    Collection,
    EnumMember,
    Enumeration,
    GenericUserType,
    Map,
    MemberDescriptor,
    MemberKind,
    NullableValue,
    Primitive,
    SerializationAnnotation,
    TypeDescriptor,
    TypeKind,
    TypeParameter,
    TypeReference,
    UserType,
)
from .diagnostics import Diagnostic, Severity
from .errors import ConfigurationError, TypeShapeError, UnmappableMemberError
from .generator import GeneratedModule, TypeScriptCodeGenerator, generate_typescript
from .grouping import NamespaceGroup, group_by_namespace
from .members import ResolvedMember, resolve_member
from .naming import NamingStyle
from .options import (
    AnnotationBehavior,
    AnnotationRule,
    NewLineOption,
    SerializerOption,
    TranspilationOptions,
)
from .type_mapper import TypeMapper
from .writer import CodeWriter

__all__ = [
    "AnnotationBehavior",
    "AnnotationRule",
    "CodeWriter",
    "Collection",
    "ConfigurationError",
    "Diagnostic",
    "EnumMember",
    "Enumeration",
    "GeneratedModule",
    "GenericUserType",
    "Map",
    "MemberDescriptor",
    "MemberKind",
    "NamespaceGroup",
    "NamingStyle",
    "NewLineOption",
    "NullableValue",
    "Primitive",
    "ResolvedMember",
    "SerializationAnnotation",
    "SerializerOption",
    "Severity",
    "TranspilationOptions",
    "TypeDescriptor",
    "TypeKind",
    "TypeMapper",
    "TypeParameter",
    "TypeReference",
    "TypeScriptCodeGenerator",
    "TypeShapeError",
    "UnmappableMemberError",
    "UserType",
    "generate_typescript",
    "group_by_namespace",
    "load_catalog",
    "parse_catalog",
    "resolve_member",
]
