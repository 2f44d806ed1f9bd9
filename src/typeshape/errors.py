"""Exceptions raised by the translation engine."""
from __future__ import annotations


class TypeShapeError(RuntimeError):
    """Base class for every error raised by typeshape."""


class ConfigurationError(TypeShapeError):
    """Options, descriptors or catalogs that are malformed before translation starts."""


class UnmappableMemberError(TypeShapeError):
    """A member reached the resolver that is neither a field nor a property."""

    def __init__(self, type_name: str, member_name: str, member_kind: str) -> None:
        self.type_name = type_name
        self.member_name = member_name
        self.member_kind = member_kind
        super().__init__(
            f"Internal error: member {type_name}.{member_name} has kind '{member_kind}'.\n"
            "Only fields and properties can be translated; the catalog producer must filter other members."
        )
