"""Run-wide translation options, validated when constructed."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .errors import ConfigurationError
from .naming import NamingStyle


class SerializerOption(str, enum.Enum):
    NONE = "none"
    JSON = "json"
    MESSAGE_PACK = "messagepack"

    @classmethod
    def parse(cls, raw_value: "str | SerializerOption") -> "SerializerOption":
        if isinstance(raw_value, cls):
            return raw_value
        normalized = str(raw_value).strip().replace("-", "").replace("_", "").lower()
        for option in cls:
            if normalized in (option.value, option.name.replace("_", "").lower()):
                return option
        raise ValueError(f"Unknown serializer: {raw_value!r}")


class NewLineOption(str, enum.Enum):
    LF = "lf"
    CRLF = "crlf"

    @classmethod
    def parse(cls, raw_value: "str | NewLineOption") -> "NewLineOption":
        if isinstance(raw_value, cls):
            return raw_value
        if raw_value == "\n":
            return cls.LF
        if raw_value == "\r\n":
            return cls.CRLF
        return cls(str(raw_value).strip().lower())

    def to_newline_string(self) -> str:
        return "\r\n" if self is NewLineOption.CRLF else "\n"


# ============================================================
# Annotation vocabulary
# ============================================================

class AnnotationBehavior(str, enum.Enum):
    IGNORE = "ignore"
    RENAME = "rename"


@dataclass(frozen=True)
class AnnotationRule:
    """What a well-known annotation means, and under which serializer."""
    serializer: SerializerOption
    behavior: AnnotationBehavior
    # MessagePack keys may be integers; only string keys rename the member.
    requires_string_argument: bool = False


DEFAULT_ANNOTATION_RULES: Mapping[str, AnnotationRule] = MappingProxyType(
    {
        "JsonIgnore": AnnotationRule(SerializerOption.JSON, AnnotationBehavior.IGNORE),
        "JsonPropertyName": AnnotationRule(SerializerOption.JSON, AnnotationBehavior.RENAME),
        "IgnoreMember": AnnotationRule(SerializerOption.MESSAGE_PACK, AnnotationBehavior.IGNORE),
        "Key": AnnotationRule(
            SerializerOption.MESSAGE_PACK,
            AnnotationBehavior.RENAME,
            requires_string_argument=True,
        ),
    }
)


def short_annotation_name(identifier: str) -> str:
    """`Serialization.JsonIgnoreAttribute` -> `JsonIgnore`."""
    short_name = identifier.rsplit(".", 1)[-1]
    if short_name.endswith("Attribute") and len(short_name) > len("Attribute"):
        short_name = short_name[: -len("Attribute")]
    return short_name


def default_module_path(namespace: str) -> str:
    """One module per namespace, named after the namespace (`index` for the global namespace)."""
    return namespace or "index"


# ============================================================
# Options
# ============================================================

@dataclass(frozen=True)
class TranspilationOptions:
    """Immutable configuration for one generation run."""
    naming_style: NamingStyle = NamingStyle.NONE
    serializer: SerializerOption = SerializerOption.JSON
    indent: int = 2
    newline: NewLineOption = NewLineOption.LF
    module_path: Callable[[str], str] = default_module_path
    namespace_sort_key: Optional[Callable[[str], Any]] = None
    date_type: str = "string"
    type_overrides: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, AnnotationRule] = field(default_factory=lambda: DEFAULT_ANNOTATION_RULES)
    unique_enum_literals: bool = False

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "naming_style", NamingStyle.parse(self.naming_style))
            object.__setattr__(self, "serializer", SerializerOption.parse(self.serializer))
            object.__setattr__(self, "newline", NewLineOption.parse(self.newline))
        except ValueError as error:
            raise ConfigurationError(str(error)) from error

        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ConfigurationError(f"Indent width must be an integer, got {self.indent!r}.")
        if self.indent < 0:
            raise ConfigurationError(f"Indent width must be non-negative, got {self.indent}.")
        if not callable(self.module_path):
            raise ConfigurationError("module_path must be a callable mapping a namespace to a module path.")
        if self.namespace_sort_key is not None and not callable(self.namespace_sort_key):
            raise ConfigurationError("namespace_sort_key must be callable when given.")
        if not self.date_type or not self.date_type.strip():
            raise ConfigurationError("date_type must be a non-empty TypeScript type.")

        for annotation_identifier, rule in self.annotations.items():
            if not isinstance(rule, AnnotationRule):
                raise ConfigurationError(
                    f"Annotation {annotation_identifier!r} must map to an AnnotationRule, got {rule!r}."
                )

        object.__setattr__(self, "type_overrides", MappingProxyType(dict(self.type_overrides)))
        object.__setattr__(
            self,
            "annotations",
            MappingProxyType({short_annotation_name(name): rule for name, rule in self.annotations.items()}),
        )

    @property
    def indent_string(self) -> str:
        return " " * self.indent

    @property
    def newline_string(self) -> str:
        return self.newline.to_newline_string()

    def lookup_annotation(self, identifier: str) -> Optional[AnnotationRule]:
        """Find the rule for an annotation identifier, accepting qualified or `...Attribute` spellings."""
        return self.annotations.get(short_annotation_name(identifier))

    def sort_namespaces(self, namespaces: "set[str] | list[str]") -> list[str]:
        if self.namespace_sort_key is None:
            return sorted(namespaces)
        return sorted(namespaces, key=lambda namespace: (self.namespace_sort_key(namespace), namespace))
