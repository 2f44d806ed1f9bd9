"""Partition translated types by namespace and compute each module's import header."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Sequence

from .descriptors import (
    GenericUserType,
    TypeDescriptor,
    TypeReference,
    iter_named_references,
)
from .options import TranspilationOptions
from .type_mapper import GenericTypeMap, generic_template_applies
from .writer import CodeWriter


LINT_DISABLE_PREAMBLE = (
    "/* eslint-disable */",
    "/* tslint:disable */",
)


@dataclass(frozen=True)
class NamespaceGroup:
    """All types declared in one namespace, plus the names they import from other namespaces."""
    namespace: str
    types: tuple[TypeDescriptor, ...]
    imports: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def imported_namespaces(self) -> tuple[str, ...]:
        return tuple(self.imports)


def iter_importable_references(
    reference: TypeReference,
    generic_type_map: GenericTypeMap,
) -> Iterator[tuple[str, str]]:
    """(namespace, name) for each named reference whose name appears in the mapped type text."""
    for named_reference in iter_named_references(reference):
        if isinstance(named_reference, GenericUserType) and (
            named_reference.namespace is None or generic_template_applies(generic_type_map, named_reference)
        ):
            # Arguments are still yielded by the walk; only the generic's own name is skipped.
            continue
        yield (named_reference.namespace or "", named_reference.name)


def iter_referenced_types(
    descriptor: TypeDescriptor,
    source_type_keys: frozenset[tuple[str, str]] = frozenset(),
    generic_type_map: GenericTypeMap = MappingProxyType({}),
) -> Iterator[tuple[str, str]]:
    """
    Yield (namespace, name) for every named type a descriptor depends on.

    Member references are walked through collections, maps, nullable wrappers and
    generic arguments. Generic references without a namespace cannot be imported
    and are skipped, as are generics rendered through a template. The base type
    counts only when it is itself translated.
    """
    for member in descriptor.instance_members():
        yield from iter_importable_references(member.type, generic_type_map)

    base_type = descriptor.base_type
    if base_type is not None and (base_type.namespace or "", base_type.name) in source_type_keys:
        yield from iter_importable_references(base_type, generic_type_map)


def resolve_imports(
    namespace: str,
    descriptors: Iterable[TypeDescriptor],
    options: TranspilationOptions,
    source_type_keys: frozenset[tuple[str, str]] = frozenset(),
    generic_type_map: GenericTypeMap = MappingProxyType({}),
) -> dict[str, tuple[str, ...]]:
    """Map each external namespace to the sorted, distinct names used from it."""
    names_by_namespace: dict[str, set[str]] = {}
    for descriptor in descriptors:
        for referenced_namespace, referenced_name in iter_referenced_types(
            descriptor, source_type_keys, generic_type_map
        ):
            if referenced_namespace == namespace:
                continue
            names_by_namespace.setdefault(referenced_namespace, set()).add(referenced_name)

    return {
        referenced_namespace: tuple(sorted(names_by_namespace[referenced_namespace]))
        for referenced_namespace in options.sort_namespaces(list(names_by_namespace))
    }


def group_by_namespace(
    descriptors: Sequence[TypeDescriptor],
    options: TranspilationOptions,
    generic_type_map: GenericTypeMap = MappingProxyType({}),
) -> list[NamespaceGroup]:
    """Group descriptors by namespace in first-seen order, keeping discovery order inside each group."""
    descriptors_by_namespace: dict[str, list[TypeDescriptor]] = {}
    for descriptor in descriptors:
        descriptors_by_namespace.setdefault(descriptor.namespace, []).append(descriptor)

    source_type_keys = frozenset(descriptor.key for descriptor in descriptors)
    return [
        NamespaceGroup(
            namespace=namespace,
            types=tuple(grouped_descriptors),
            imports=resolve_imports(namespace, grouped_descriptors, options, source_type_keys, generic_type_map),
        )
        for namespace, grouped_descriptors in descriptors_by_namespace.items()
    ]


def render_import_lines(group: NamespaceGroup, options: TranspilationOptions) -> list[str]:
    """`import { A, B } from './Other.Namespace';` per referenced namespace."""
    import_lines: list[str] = []
    for referenced_namespace, referenced_names in group.imports.items():
        module_path = options.module_path(referenced_namespace)
        if not module_path.startswith("./") and not module_path.startswith("../"):
            module_path = f"./{module_path}"
        import_lines.append(f"import {{ {', '.join(referenced_names)} }} from '{module_path}';")
    return import_lines


def write_header(group: NamespaceGroup, writer: CodeWriter, options: TranspilationOptions) -> None:
    """Lint-disable preamble, imports, then one blank separator line."""
    for preamble_line in LINT_DISABLE_PREAMBLE:
        writer.append_line(preamble_line)
    for import_line in render_import_lines(group, options):
        writer.append_line(import_line)
    writer.append_line()
