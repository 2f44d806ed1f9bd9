"""One translator per type category; each writes a single `export type` declaration."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Callable, Union

from .descriptors import EnumMember, TypeDescriptor, TypeKind
from .members import resolve_member
from .options import TranspilationOptions
from .type_mapper import TypeMapper
from .writer import CodeWriter


IDENTIFIER_REGEX = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class TranslationContext:
    """Read-only inputs shared by every translator in a run."""
    options: TranspilationOptions
    type_mapper: TypeMapper
    source_type_keys: frozenset[tuple[str, str]]

    def is_source_type(self, namespace: str | None, name: str) -> bool:
        return (namespace or "", name) in self.source_type_keys


def to_property_key(name: str) -> str:
    """Quote serialized names that are not valid TypeScript identifiers."""
    if IDENTIFIER_REGEX.match(name):
        return name
    return json.dumps(name)


def to_literal(value: Union[int, str]) -> str:
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)


def declaration_head(descriptor: TypeDescriptor) -> str:
    """`export type Name = ` or `export type Name<T, U> = `."""
    type_parameters = ""
    if descriptor.type_parameters:
        type_parameters = f"<{', '.join(descriptor.type_parameters)}>"
    return f"export type {descriptor.name}{type_parameters} = "


def write_doc_comment(writer: CodeWriter, descriptor: TypeDescriptor) -> None:
    writer.append_line(f"/** Transpiled from {descriptor.full_name} */")


# ============================================================
# Translators
# ============================================================

def translate_configured_type(descriptor: TypeDescriptor, writer: CodeWriter, context: TranslationContext) -> None:
    """Emit the override verbatim; members are never inspected."""
    write_doc_comment(writer, descriptor)
    writer.append_line(f"{declaration_head(descriptor)}{descriptor.typescript_type};")


def translate_message_type(descriptor: TypeDescriptor, writer: CodeWriter, context: TranslationContext) -> None:
    """Emit an object literal type, intersected with the base type when the base is also translated."""
    if descriptor.typescript_type:
        translate_configured_type(descriptor, writer, context)
        return

    write_doc_comment(writer, descriptor)
    writer.append_line(f"{declaration_head(descriptor)}{{")

    for member in descriptor.instance_members():
        resolved_member = resolve_member(member, context.options, owner_name=descriptor.full_name)
        if resolved_member is None:
            continue

        typescript_type = context.type_mapper.map_to(resolved_member.type_reference)
        optional_marker = "?" if resolved_member.is_optional else ""
        writer.append_line(f"/** Transpiled from {member.type_display} */", depth=1)
        writer.append_line(
            f"{to_property_key(resolved_member.name)}{optional_marker}: {typescript_type};",
            depth=1,
        )

    base_type = descriptor.base_type
    if base_type is not None and context.is_source_type(base_type.namespace, base_type.name):
        writer.append_line(f"}} & {context.type_mapper.map_to(base_type)};")
    else:
        writer.append_line("};")


def enum_literals(
    descriptor: TypeDescriptor,
    context: TranslationContext,
) -> list[str]:
    """Literal values in declaration order; duplicates dropped only when uniqueness is requested."""
    literals: list[str] = []
    seen_values: dict[Union[int, str], EnumMember] = {}

    for enum_member in descriptor.enum_members:
        if context.options.unique_enum_literals and enum_member.value in seen_values:
            first_member = seen_values[enum_member.value]
            context.type_mapper.diagnostics.warn(
                f"Enum member {enum_member.name} repeats the value {enum_member.value!r} "
                f"of {first_member.name}; literal dropped.",
                subject=descriptor.full_name,
            )
            continue
        seen_values.setdefault(enum_member.value, enum_member)
        literals.append(to_literal(enum_member.value))

    return literals


def translate_enum_type(descriptor: TypeDescriptor, writer: CodeWriter, context: TranslationContext) -> None:
    """Emit a union of the enumeration's literal values (`never` when it has none)."""
    if descriptor.typescript_type:
        translate_configured_type(descriptor, writer, context)
        return

    literals = enum_literals(descriptor, context)
    union_text = " | ".join(literals) if literals else "never"

    write_doc_comment(writer, descriptor)
    writer.append_line(f"{declaration_head(descriptor)}{union_text};")


TypeTranslator = Callable[[TypeDescriptor, CodeWriter, TranslationContext], None]

TRANSLATORS_BY_KIND: dict[TypeKind, TypeTranslator] = {
    TypeKind.PLAIN_DATA: translate_message_type,
    TypeKind.ENUMERATION: translate_enum_type,
    TypeKind.EXTERNALLY_CONFIGURED: translate_configured_type,
}


def translate_type(descriptor: TypeDescriptor, writer: CodeWriter, context: TranslationContext) -> None:
    """Dispatch on the descriptor's kind."""
    translator = TRANSLATORS_BY_KIND.get(descriptor.kind)
    if translator is None:
        raise TypeError(f"No translator registered for type kind {descriptor.kind!r}")
    translator(descriptor, writer, context)
