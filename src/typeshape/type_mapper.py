"""Map a type reference to a TypeScript type expression."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .descriptors import (
    Collection,
    Enumeration,
    GenericUserType,
    Map,
    NullableValue,
    Primitive,
    TypeParameter,
    TypeReference,
    UserType,
)
from .diagnostics import DiagnosticSink
from .options import TranspilationOptions


UNKNOWN_TYPE = "unknown"

# Placeholder replaced by TranspilationOptions.date_type.
DATE_TYPE_PLACEHOLDER = "{date}"

DEFAULT_PRIMITIVE_TYPE_MAP: Mapping[str, str] = {
    "bool": "boolean",
    "boolean": "boolean",
    "byte": "number",
    "sbyte": "number",
    "short": "number",
    "ushort": "number",
    "int": "number",
    "uint": "number",
    "long": "number",
    "ulong": "number",
    "int8": "number",
    "int16": "number",
    "int32": "number",
    "int64": "number",
    "uint8": "number",
    "uint16": "number",
    "uint32": "number",
    "uint64": "number",
    "float": "number",
    "double": "number",
    "decimal": "number",
    "float32": "number",
    "float64": "number",
    "char": "string",
    "string": "string",
    "str": "string",
    "guid": "string",
    "uuid": "string",
    "uri": "string",
    "timespan": "string",
    "datetime": DATE_TYPE_PLACEHOLDER,
    "datetimeoffset": DATE_TYPE_PLACEHOLDER,
    "date": DATE_TYPE_PLACEHOLDER,
    "dateonly": DATE_TYPE_PLACEHOLDER,
    "time": DATE_TYPE_PLACEHOLDER,
    "timeonly": DATE_TYPE_PLACEHOLDER,
    "bytes": "Uint8Array",
    "binary": "Uint8Array",
    "object": UNKNOWN_TYPE,
    "any": "any",
}


def load_type_mapping(path: Path) -> tuple[dict[str, str], dict[str, tuple[list[str], str]]]:
    """Load primitive and generic type mappings from a YAML-like file."""
    if not path.exists():
        return {}, {}

    primitive_mapping: dict[str, str] = {}
    generic_mapping: dict[str, tuple[list[str], str]] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in stripped:
            continue
        key, value = stripped.split(":", 1)
        key = key.strip()
        value = value.strip().strip("\"'")

        if "<" in key and key.endswith(">"):
            base_name, params_part = key.split("<", 1)
            params = [param.strip() for param in params_part[:-1].split(",") if param.strip()]
            if not params:
                continue
            generic_mapping[base_name.strip()] = (params, value)
            continue

        primitive_mapping[key] = value
    return primitive_mapping, generic_mapping


def build_primitive_type_map(options: TranspilationOptions) -> dict[str, str]:
    """Merge the default table with user overrides and resolve the configured date type."""
    merged: dict[str, str] = {}
    for kind, typescript_type in DEFAULT_PRIMITIVE_TYPE_MAP.items():
        merged[kind.lower()] = typescript_type
    for kind, typescript_type in options.type_overrides.items():
        merged[kind.lower()] = typescript_type
    return {
        kind: options.date_type if typescript_type == DATE_TYPE_PLACEHOLDER else typescript_type
        for kind, typescript_type in merged.items()
    }


GenericTypeMap = Mapping[str, tuple[list[str], str]]


def generic_template_applies(generic_type_map: GenericTypeMap, reference: GenericUserType) -> bool:
    """True when `reference` is rendered through a template instead of its own name."""
    template_spec = generic_type_map.get(reference.name)
    return template_spec is not None and len(template_spec[0]) == len(reference.arguments)


def render_generic_template(template: str, param_names: list[str], arg_types: list[str]) -> str:
    """Fill a `Paged<{T}>`-style template with translated argument types."""
    rendered = template
    if "{T}" in rendered:
        rendered = rendered.replace("{T}", arg_types[0] if arg_types else UNKNOWN_TYPE)
    for index, arg_type in enumerate(arg_types, start=1):
        rendered = rendered.replace(f"{{T{index}}}", arg_type)
    for param_name, arg_type in zip(param_names, arg_types):
        rendered = rendered.replace(f"{{{param_name}}}", arg_type)
    return rendered


@dataclass
class TypeMapper:
    """Translate TypeReference trees into TypeScript type strings."""
    primitive_type_map: Mapping[str, str]
    generic_type_map: GenericTypeMap = field(default_factory=dict)
    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    _reported_kinds: set[str] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def from_options(
        cls,
        options: TranspilationOptions,
        *,
        generic_type_map: GenericTypeMap | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> "TypeMapper":
        return cls(
            primitive_type_map=build_primitive_type_map(options),
            generic_type_map=dict(generic_type_map or {}),
            diagnostics=diagnostics if diagnostics is not None else DiagnosticSink(),
        )

    def map_to(self, reference: TypeReference) -> str:
        """Translate a reference; user types are referenced by name, never inlined."""
        # Optionality is rendered at the member site (`name?: T`), not as `T | null`.
        if isinstance(reference, NullableValue):
            return self.map_to(reference.inner)

        if isinstance(reference, Primitive):
            return self._map_primitive(reference.kind)

        if isinstance(reference, Collection):
            element_type = self.map_to(reference.element)
            if " " in element_type and not element_type.endswith(">"):
                element_type = f"({element_type})"
            return f"{element_type}[]"

        if isinstance(reference, Map):
            return f"Record<{self.map_to(reference.key)}, {self.map_to(reference.value)}>"

        if isinstance(reference, GenericUserType):
            arg_types = [self.map_to(argument) for argument in reference.arguments]
            if generic_template_applies(self.generic_type_map, reference):
                param_names, template = self.generic_type_map[reference.name]
                return render_generic_template(template, param_names, arg_types)
            if not arg_types:
                return reference.name
            return f"{reference.name}<{', '.join(arg_types)}>"

        if isinstance(reference, (UserType, Enumeration, TypeParameter)):
            return reference.name

        raise TypeError(f"Unmapped type reference category: {type(reference).__name__}")

    def _map_primitive(self, kind: str) -> str:
        typescript_type = self.primitive_type_map.get(kind.lower())
        if typescript_type is not None:
            return typescript_type

        if kind not in self._reported_kinds:
            self._reported_kinds.add(kind)
            self.diagnostics.warn(
                f"No TypeScript mapping for primitive kind '{kind}'; emitting '{UNKNOWN_TYPE}'.",
                subject=kind,
            )
        return UNKNOWN_TYPE
