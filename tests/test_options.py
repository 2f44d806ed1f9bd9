import dataclasses

import pytest
from pydantic import ValidationError

from typeshape.errors import ConfigurationError
from typeshape.naming import NamingStyle, to_camel_case, to_pascal_case, to_snake_case
from typeshape.options import (
    DEFAULT_ANNOTATION_RULES,
    NewLineOption,
    SerializerOption,
    TranspilationOptions,
    short_annotation_name,
)
from typeshape import settings as settings_module
from typeshape.settings import GeneratorSettings


def test_defaults():
    options = TranspilationOptions()
    assert options.naming_style is NamingStyle.NONE
    assert options.serializer is SerializerOption.JSON
    assert options.indent_string == "  "
    assert options.newline_string == "\n"
    assert options.module_path("Shop.Orders") == "Shop.Orders"
    assert options.module_path("") == "index"


def test_default_annotation_vocabulary_comes_from_a_factory():
    # A mappingproxy class default is rejected by @dataclass before Python 3.12.
    annotations_field = next(
        options_field
        for options_field in dataclasses.fields(TranspilationOptions)
        if options_field.name == "annotations"
    )
    assert annotations_field.default is dataclasses.MISSING
    assert annotations_field.default_factory() is DEFAULT_ANNOTATION_RULES

    options = TranspilationOptions()
    assert dict(options.annotations) == dict(DEFAULT_ANNOTATION_RULES)
    assert options.lookup_annotation("JsonIgnore") is DEFAULT_ANNOTATION_RULES["JsonIgnore"]


def test_string_values_are_parsed():
    options = TranspilationOptions(naming_style="camelCase", serializer="MessagePack", newline="CRLF")
    assert options.naming_style is NamingStyle.CAMEL_CASE
    assert options.serializer is SerializerOption.MESSAGE_PACK
    assert options.newline is NewLineOption.CRLF
    assert options.newline_string == "\r\n"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"indent": -1},
        {"indent": True},
        {"indent": "2"},
        {"serializer": "xml"},
        {"naming_style": "kebab"},
        {"newline": "cr"},
        {"module_path": "Shop"},
        {"namespace_sort_key": 3},
        {"date_type": "  "},
        {"annotations": {"JsonIgnore": "ignore"}},
    ],
)
def test_malformed_options_are_rejected_eagerly(kwargs):
    with pytest.raises(ConfigurationError):
        TranspilationOptions(**kwargs)


def test_options_are_immutable():
    options = TranspilationOptions()
    with pytest.raises(AttributeError):
        options.indent = 4
    with pytest.raises(TypeError):
        options.type_overrides["int"] = "bigint"


def test_annotation_lookup_accepts_qualified_names():
    options = TranspilationOptions()
    assert options.lookup_annotation("JsonIgnore") is DEFAULT_ANNOTATION_RULES["JsonIgnore"]
    assert options.lookup_annotation("Serialization.JsonIgnoreAttribute") is DEFAULT_ANNOTATION_RULES["JsonIgnore"]
    assert options.lookup_annotation("Obsolete") is None
    assert short_annotation_name("Attribute") == "Attribute"


def test_namespace_sorting():
    assert TranspilationOptions().sort_namespaces({"b", "a", "a.b"}) == ["a", "a.b", "b"]
    by_length = TranspilationOptions(namespace_sort_key=len)
    assert by_length.sort_namespaces(["ccc", "a", "bb", "b"]) == ["a", "b", "bb", "ccc"]


@pytest.mark.parametrize(
    "text,camel,pascal,snake",
    [
        ("UserName", "userName", "UserName", "user_name"),
        ("userName", "userName", "UserName", "user_name"),
        ("ID", "iD", "ID", "id"),
        ("HTTPStatus", "hTTPStatus", "HTTPStatus", "http_status"),
        ("", "", "", ""),
    ],
)
def test_case_conversions(text, camel, pascal, snake):
    assert to_camel_case(text) == camel
    assert to_pascal_case(text) == pascal
    assert to_snake_case(text) == snake


@pytest.mark.parametrize(
    "raw_value,expected",
    [
        ("none", NamingStyle.NONE),
        ("camelCase", NamingStyle.CAMEL_CASE),
        ("camel", NamingStyle.CAMEL_CASE),
        ("PASCAL_CASE", NamingStyle.PASCAL_CASE),
        ("snake_case", NamingStyle.SNAKE_CASE),
        (NamingStyle.PASCAL_CASE, NamingStyle.PASCAL_CASE),
    ],
)
def test_naming_style_parse(raw_value, expected):
    assert NamingStyle.parse(raw_value) is expected


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TYPESHAPE_INDENT", "4")
    monkeypatch.setenv("TYPESHAPE_NAMING_STYLE", "camelCase")
    monkeypatch.setenv("TYPESHAPE_NEWLINE", "crlf")

    options = GeneratorSettings().to_options()

    assert options.indent == 4
    assert options.naming_style is NamingStyle.CAMEL_CASE
    assert options.newline is NewLineOption.CRLF


def test_settings_from_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("TYPESHAPE_SERIALIZER=messagepack\nTYPESHAPE_DATE_TYPE=Date\n", encoding="utf-8")

    options = GeneratorSettings().to_options()

    assert options.serializer is SerializerOption.MESSAGE_PACK
    assert options.date_type == "Date"


def test_settings_reject_negative_indent(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TYPESHAPE_INDENT", "-2")
    with pytest.raises(ValidationError):
        GeneratorSettings()


def test_settings_load_type_map(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    type_map = tmp_path / "types.yaml"
    type_map.write_text("decimal: string\nPaged<T>: Array<{T}>\n", encoding="utf-8")

    settings = GeneratorSettings(type_map_path=type_map)

    assert settings.to_options().type_overrides == {"decimal": "string"}
    assert settings.load_type_maps()[1] == {"Paged": (["T"], "Array<{T}>")}


def test_settings_read_type_map_once(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    type_map = tmp_path / "types.yaml"
    type_map.write_text("decimal: string\nPaged<T>: Array<{T}>\n", encoding="utf-8")

    loaded_paths = []
    real_load_type_mapping = settings_module.load_type_mapping

    def counting_load_type_mapping(path):
        loaded_paths.append(path)
        return real_load_type_mapping(path)

    monkeypatch.setattr(settings_module, "load_type_mapping", counting_load_type_mapping)

    options, generic_type_map = GeneratorSettings(type_map_path=type_map).to_generator_inputs()

    assert loaded_paths == [type_map]
    assert options.type_overrides == {"decimal": "string"}
    assert generic_type_map == {"Paged": (["T"], "Array<{T}>")}
