"""Drive grouping, translation and header emission for a whole catalog."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .descriptors import TypeDescriptor
from .diagnostics import DiagnosticSink
from .errors import ConfigurationError
from .grouping import NamespaceGroup, group_by_namespace, write_header
from .options import TranspilationOptions
from .translators import TranslationContext, translate_type
from .type_mapper import TypeMapper
from .writer import CodeWriter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedModule:
    """The TypeScript text for one namespace."""
    namespace: str
    module_path: str
    text: str
    type_names: tuple[str, ...] = ()

    @property
    def file_name(self) -> str:
        return f"{self.module_path}.ts"


class TypeScriptCodeGenerator:
    """
    Translate a fully materialized catalog into one TypeScript module per namespace.

    Example:
        generator = TypeScriptCodeGenerator(descriptors, TranspilationOptions(indent=4))
        for module in generator.generate():
            print(module.file_name, module.text)
    """

    def __init__(
        self,
        catalog: Sequence[TypeDescriptor],
        options: Optional[TranspilationOptions] = None,
        *,
        generic_type_map: Optional[Mapping[str, tuple[list[str], str]]] = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.options = options or TranspilationOptions()
        self.diagnostics = DiagnosticSink()

        descriptors_by_key: dict[tuple[str, str], TypeDescriptor] = {}
        for descriptor in self.catalog:
            if descriptor.key in descriptors_by_key:
                raise ConfigurationError(
                    f"Type {descriptor.full_name} is declared more than once in the catalog."
                )
            descriptors_by_key[descriptor.key] = descriptor

        self.type_mapper = TypeMapper.from_options(
            self.options,
            generic_type_map=generic_type_map,
            diagnostics=self.diagnostics,
        )
        self.context = TranslationContext(
            options=self.options,
            type_mapper=self.type_mapper,
            source_type_keys=frozenset(descriptors_by_key),
        )

    def groups(self) -> list[NamespaceGroup]:
        return group_by_namespace(self.catalog, self.options, self.type_mapper.generic_type_map)

    def add_header(self, group: NamespaceGroup, writer: CodeWriter) -> None:
        write_header(group, writer, self.options)

    def add_type(self, descriptor: TypeDescriptor, writer: CodeWriter) -> None:
        translate_type(descriptor, writer, self.context)

    def generate_group(self, group: NamespaceGroup) -> GeneratedModule:
        """Header, then each declaration in discovery order separated by a blank line."""
        writer = CodeWriter.for_options(self.options)
        self.add_header(group, writer)

        for type_index, descriptor in enumerate(group.types):
            if type_index > 0:
                writer.append_line()
            self.add_type(descriptor, writer)

        logger.debug(
            "Translated %d type(s) in namespace %r with %d import(s)",
            len(group.types),
            group.namespace,
            len(group.imports),
        )
        return GeneratedModule(
            namespace=group.namespace,
            module_path=self.options.module_path(group.namespace),
            text=writer.to_string(),
            type_names=tuple(descriptor.name for descriptor in group.types),
        )

    def generate(self) -> list[GeneratedModule]:
        return [self.generate_group(group) for group in self.groups()]


def generate_typescript(
    catalog: Sequence[TypeDescriptor],
    options: Optional[TranspilationOptions] = None,
) -> dict[str, str]:
    """Convenience wrapper returning {module_path: text}."""
    generator = TypeScriptCodeGenerator(catalog, options)
    return {module.module_path: module.text for module in generator.generate()}
