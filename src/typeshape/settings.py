from __future__ import annotations

from pathlib import Path
from typing import Literal, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .options import TranspilationOptions
from .type_mapper import load_type_mapping


class GeneratorSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TYPESHAPE_",
        env_file=(".env", ".typeshape.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Output shape
    naming_style: str = Field(default="none")
    serializer: str = Field(default="json")
    indent: int = Field(default=2, ge=0)
    newline: Literal["lf", "crlf"] = Field(default="lf")

    # Type mapping
    date_type: str = Field(default="string", min_length=1)
    type_map_path: Optional[Path] = Field(default=None)
    unique_enum_literals: bool = Field(default=False)

    def load_type_maps(self) -> tuple[dict[str, str], dict[str, tuple[list[str], str]]]:
        if self.type_map_path is None:
            return {}, {}
        return load_type_mapping(self.type_map_path)

    def to_generator_inputs(self) -> tuple[TranspilationOptions, dict[str, tuple[list[str], str]]]:
        """Options and generic templates from a single read of the type map file."""
        primitive_overrides, generic_type_map = self.load_type_maps()
        return self._build_options(primitive_overrides), generic_type_map

    def to_options(self) -> TranspilationOptions:
        options, _ = self.to_generator_inputs()
        return options

    def _build_options(self, primitive_overrides: Mapping[str, str]) -> TranspilationOptions:
        return TranspilationOptions(
            naming_style=self.naming_style,
            serializer=self.serializer,
            indent=self.indent,
            newline=self.newline,
            date_type=self.date_type,
            type_overrides=primitive_overrides,
            unique_enum_literals=self.unique_enum_literals,
        )
