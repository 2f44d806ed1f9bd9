"""Decide whether a member is emitted, under which name, and whether it is optional."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .descriptors import MemberDescriptor, MemberKind, NullableValue, TypeReference
from .errors import UnmappableMemberError
from .options import AnnotationBehavior, SerializerOption, TranspilationOptions


TRANSLATABLE_MEMBER_KINDS = frozenset({MemberKind.FIELD, MemberKind.PROPERTY})


@dataclass(frozen=True)
class ResolvedMember:
    """A member that survives serializer rules, ready to be written as `name?: type`."""
    name: str
    type_reference: TypeReference
    is_optional: bool
    source: MemberDescriptor


def resolve_member_type(member: MemberDescriptor) -> tuple[TypeReference, bool]:
    """
    Unwrap nullable value types.

    Returns the reference to map plus a single optionality flag that is true for
    `T?` value types and for members declared reference-nullable.
    """
    if isinstance(member.type, NullableValue):
        return member.type.inner, True
    return member.type, member.is_nullable


def resolve_member_name(member: MemberDescriptor, options: TranspilationOptions) -> tuple[bool, str]:
    """
    Apply serializer annotations, then the naming style.

    Annotations are scanned in declaration order. Under the active serializer the
    first ignore annotation excludes the member and the first usable rename
    annotation is used verbatim. Returns (is_included, name).
    """
    if options.serializer is not SerializerOption.NONE:
        for annotation in member.annotations:
            rule = options.lookup_annotation(annotation.identifier)
            if rule is None or rule.serializer is not options.serializer:
                continue

            if rule.behavior is AnnotationBehavior.IGNORE:
                return False, ""

            if rule.behavior is AnnotationBehavior.RENAME:
                if annotation.argument is None:
                    continue
                if rule.requires_string_argument and not isinstance(annotation.argument, str):
                    continue
                return True, str(annotation.argument)

    return True, options.naming_style.transform(member.name)


def resolve_member(
    member: MemberDescriptor,
    options: TranspilationOptions,
    *,
    owner_name: str = "",
) -> Optional[ResolvedMember]:
    """Resolve one instance member; None when a serializer annotation excludes it."""
    if member.member_kind not in TRANSLATABLE_MEMBER_KINDS:
        raise UnmappableMemberError(owner_name or "<unknown>", member.name, member.member_kind.value)

    is_included, serialized_name = resolve_member_name(member, options)
    if not is_included:
        return None

    type_reference, is_optional = resolve_member_type(member)
    return ResolvedMember(
        name=serialized_name,
        type_reference=type_reference,
        is_optional=is_optional,
        source=member,
    )
