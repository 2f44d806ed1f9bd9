"""Generate TypeScript modules from a JSON type catalog."""
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from watchfiles import DefaultFilter, watch

from .catalog import load_catalog
from .errors import TypeShapeError
from .generator import GeneratedModule, TypeScriptCodeGenerator
from .settings import GeneratorSettings


class CatalogFilter(DefaultFilter):
    """Only react to changes of the watched catalog (and the optional type map)."""

    def __init__(self, *watched_files: Path) -> None:
        super().__init__()
        self.watched_paths = {watched_file.resolve().as_posix() for watched_file in watched_files}

    def __call__(self, change, path: str) -> bool:
        return Path(path).resolve().as_posix() in self.watched_paths


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="typeshape", description=__doc__)
    parser.add_argument("catalog", help="JSON catalog of type descriptors")
    parser.add_argument(
        "--out",
        dest="out",
        default=None,
        help="Directory receiving one <module>.ts per namespace (default: print to stdout).",
    )
    parser.add_argument("--naming-style", dest="naming_style", default=None, help="none | camelCase | PascalCase | snake_case")
    parser.add_argument("--serializer", dest="serializer", default=None, help="json | messagepack | none")
    parser.add_argument("--indent", dest="indent", type=int, default=None)
    parser.add_argument("--newline", dest="newline", choices=("lf", "crlf"), default=None)
    parser.add_argument("--date-type", dest="date_type", default=None, help='TypeScript type for dates (default: "string").')
    parser.add_argument(
        "--type-map",
        dest="type_map_path",
        default=None,
        help="File of `kind: tsType` lines overriding the primitive table (and `Name<T>: template` generics).",
    )
    parser.add_argument(
        "--unique-enum-literals",
        dest="unique_enum_literals",
        action="store_true",
        default=None,
        help="Drop repeated enum values instead of emitting them twice.",
    )
    parser.add_argument("--watch", action="store_true", help="Regenerate whenever the catalog changes.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def build_settings(parsed_args: argparse.Namespace) -> GeneratorSettings:
    """Environment and .env values first, command line flags on top."""
    overrides: dict[str, Any] = {}
    for setting_name in (
        "naming_style",
        "serializer",
        "indent",
        "newline",
        "date_type",
        "type_map_path",
        "unique_enum_literals",
    ):
        raw_value = getattr(parsed_args, setting_name)
        if raw_value is not None:
            overrides[setting_name] = raw_value
    return GeneratorSettings(**overrides)


def write_modules(modules: list[GeneratedModule], out_dir: Path) -> list[Path]:
    written_paths: list[Path] = []
    for module in modules:
        output_path = out_dir / module.file_name
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps CRLF output byte-exact on every platform
        with output_path.open("w", encoding="utf-8", newline="") as output_file:
            output_file.write(module.text)
        written_paths.append(output_path)
    return written_paths


def run_generation(catalog_path: Path, settings: GeneratorSettings, out_dir: Path | None) -> int:
    """One full catalog -> TypeScript pass."""
    descriptors = load_catalog(catalog_path)
    options, generic_type_map = settings.to_generator_inputs()

    generator = TypeScriptCodeGenerator(descriptors, options, generic_type_map=generic_type_map)
    modules = generator.generate()

    for diagnostic in generator.diagnostics:
        print(f"[typeshape] {diagnostic}", file=sys.stderr)

    if out_dir is None:
        for module in modules:
            sys.stdout.write(f"// {module.file_name}\n")
            sys.stdout.write(module.text)
        return 0

    written_paths = write_modules(modules, out_dir)
    print(f"[typeshape] OK -> {len(written_paths)} module(s) in {out_dir}", file=sys.stderr)
    return 0


def run_watch(catalog_path: Path, settings: GeneratorSettings, out_dir: Path | None) -> int:
    watched_files = [catalog_path]
    if settings.type_map_path is not None:
        watched_files.append(settings.type_map_path)

    watch_dirs = sorted({str(watched_file.resolve().parent) for watched_file in watched_files})
    print("[typeshape] Watching:", file=sys.stderr)
    for watched_file in watched_files:
        print("  -", watched_file, file=sys.stderr)

    for changes in watch(*watch_dirs, watch_filter=CatalogFilter(*watched_files), debounce=300):
        changed = sorted({changed_path.replace("\\", "/") for (_change, changed_path) in changes})
        print("\n[typeshape] Change detected:", file=sys.stderr)
        for changed_path in changed:
            print("  -", changed_path, file=sys.stderr)
        try:
            run_generation(catalog_path, settings, out_dir)
        except (TypeShapeError, ValidationError, OSError) as error:
            print(f"[typeshape] FAILED: {error}", file=sys.stderr)
        time.sleep(0.05)

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    catalog_path = Path(parsed_args.catalog)
    out_dir = Path(parsed_args.out) if parsed_args.out else None

    try:
        settings = build_settings(parsed_args)
        exit_code = run_generation(catalog_path, settings, out_dir)
    except (TypeShapeError, ValidationError, OSError) as exc:
        print(f"typeshape: {exc}", file=sys.stderr)
        return 1

    if parsed_args.watch:
        return run_watch(catalog_path, settings, out_dir)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
