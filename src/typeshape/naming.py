"""Naming styles applied to member names that carry no explicit serialized name."""
from __future__ import annotations

import enum
import re


def to_camel_case(text: str) -> str:
    """Lower-case the first character: `UserName` -> `userName`."""
    if not text:
        return text
    return text[:1].lower() + text[1:]


def to_pascal_case(text: str) -> str:
    """Upper-case the first character: `userName` -> `UserName`."""
    if not text:
        return text
    return text[:1].upper() + text[1:]


def to_snake_case(text: str) -> str:
    """Split on case boundaries and join with underscores: `UserID2Name` -> `user_id2_name`."""
    if not text:
        return text
    spaced = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", spaced)
    return spaced.replace("-", "_").lower()


class NamingStyle(str, enum.Enum):
    NONE = "none"
    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SNAKE_CASE = "snake_case"

    def transform(self, name: str) -> str:
        return _TRANSFORMS[self](name)

    @classmethod
    def parse(cls, raw_value: "str | NamingStyle") -> "NamingStyle":
        """Accept the enum, its value, or its name in any case (`camel`, `CAMEL_CASE`, `camelCase`)."""
        if isinstance(raw_value, cls):
            return raw_value
        normalized = str(raw_value).strip().replace("-", "").replace("_", "").lower()
        for style in cls:
            candidates = {style.value.replace("_", "").lower(), style.name.replace("_", "").lower()}
            candidates.add(style.name.split("_")[0].lower())
            if normalized in candidates:
                return style
        raise ValueError(f"Unknown naming style: {raw_value!r}")


_TRANSFORMS = {
    NamingStyle.NONE: lambda name: name,
    NamingStyle.CAMEL_CASE: to_camel_case,
    NamingStyle.PASCAL_CASE: to_pascal_case,
    NamingStyle.SNAKE_CASE: to_snake_case,
}
