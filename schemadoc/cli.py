# schemadoc/cli.py
"""
schemadoc CLI -- Click commands with a rich terminal UI.

Provides the ``schemadoc`` console entry-point declared in pyproject.toml as
``schemadoc.cli:cli``.  Commands call into the library modules:

- generate:    per-method JSON Schema documents (spec file or Python classes)
- definitions: the shared definitions table only
- validate:    reference and name checks for a specification
- config:      SchemadocConfig display

Generated documents go to stdout (or ``--output``); status lines go to stderr.
"""

from __future__ import annotations

import importlib
import json
import time
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape as _esc
from rich.padding import Padding

from . import __version__
from . import cli_theme as theme
from .config import get_config

console = Console(stderr=True)


def _print_version(
    ctx: click.Context,
    _param: click.Parameter,
    value: bool,
) -> None:
    if not value or ctx.resilient_parsing:
        return
    theme.print_version(__version__, console)
    ctx.exit()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_spec_file(path: Path) -> Any:
    from .spec.loader import SpecificationLoadError, load_specification_file

    try:
        return load_specification_file(path)
    except SpecificationLoadError as exc:
        raise click.ClickException(str(exc))


def _import_class(target: str) -> type:
    """Import ``package.module:ClassName``."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(
            f"expected 'module:ClassName', got {target!r}", param_hint="--from-class"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.ClickException(f"Cannot import {module_name!r}: {exc}")
    obj: Any = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise click.ClickException(f"{module_name!r} has no attribute {attr!r}")
    if not isinstance(obj, type):
        raise click.ClickException(f"{target!r} is not a class")
    return obj


def _spec_from_classes(targets: tuple[str, ...]) -> Any:
    from .spec.builder import build_specification, service_from_class

    services = [service_from_class(_import_class(t)) for t in targets]
    return build_specification(services)


def _resolve_source(spec_file: Optional[Path], from_class: tuple[str, ...]) -> tuple[Any, str]:
    if spec_file is not None and from_class:
        raise click.UsageError("Give either SPEC_FILE or --from-class, not both.")
    if spec_file is not None:
        return _load_spec_file(spec_file), str(spec_file)
    if from_class:
        return _spec_from_classes(from_class), ", ".join(from_class)
    raise click.UsageError("Missing SPEC_FILE (or --from-class).")


def _dump(data: Any, fmt: str, indent: int) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return json.dumps(data, indent=indent or None, ensure_ascii=False) + "\n"


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(theme.ok(f"Wrote {_esc(str(output))}"))


# ---------------------------------------------------------------------------
# Main CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Also log to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """schemadoc -- JSON Schema documentation for service specifications."""
    from .utils.logging import setup_logging

    cfg = get_config()
    ctx.ensure_object(dict)
    ctx.obj["log_file"] = setup_logging(
        level=cfg.log_level,
        log_dir=cfg.log_dir,
        console_output=verbose,
    )


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=False)
@click.option("--from-class", "from_class", multiple=True, help="Service class to introspect, as module:ClassName (repeatable).")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write to this file instead of stdout.")
@click.option("--format", "fmt", type=click.Choice(["json", "yaml"], case_sensitive=False), default=None, help="Output format (default from config).")
@click.option("--indent", type=int, default=None, help="JSON indent (0 for compact).")
@click.option("--strict/--lenient", default=None, help="Fail on dangling references and duplicate names.")
@click.option("--method", "methods", multiple=True, help="Only emit methods with this name or $id (repeatable).")
def generate(
    spec_file: Optional[Path],
    from_class: tuple[str, ...],
    output: Optional[Path],
    fmt: Optional[str],
    indent: Optional[int],
    strict: Optional[bool],
    methods: tuple[str, ...],
) -> None:
    """Generate one JSON Schema document per method.

    \b
    Examples:
      schemadoc generate service.yaml -o schemas.json
      schemadoc generate --from-class myapp.api:AnimalService --format yaml
    """
    from .json_schema import generate as generate_schemas
    from .spec.validation import UnresolvedReferenceError
    from .utils.logging import get_logger, log_generation_complete, log_generation_start, log_schema_info

    cfg = get_config()
    logger = get_logger(__name__)
    fmt = (fmt or cfg.output_format).lower()
    indent = cfg.json_indent if indent is None else indent
    strict = cfg.strict_references if strict is None else strict

    specification, source = _resolve_source(spec_file, from_class)
    log_generation_start(
        logger,
        source,
        services=len(specification.services),
        structs=len(specification.structs),
        enums=len(specification.enums),
    )

    started = time.perf_counter()
    try:
        schemas = generate_schemas(specification, strict=strict)
    except UnresolvedReferenceError as exc:
        log_generation_complete(logger, source, success=False)
        raise click.ClickException(str(exc))

    if methods:
        wanted = set(methods)
        schemas = [s for s in schemas if s["title"] in wanted or s["$id"] in wanted]
        if not schemas:
            raise click.ClickException(f"No method matches {', '.join(methods)}")

    for schema in schemas:
        log_schema_info(logger, schema["$id"], json.dumps(schema, ensure_ascii=False))

    _write(_dump(schemas, fmt, indent), output)
    log_generation_complete(
        logger,
        source,
        success=True,
        schemas=len(schemas),
        output=str(output) if output else "stdout",
        total_duration=time.perf_counter() - started,
    )
    console.print(theme.info(f"{len(schemas)} method schema(s) from {_esc(source)}"))


# ---------------------------------------------------------------------------
# definitions
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write to this file instead of stdout.")
@click.option("--format", "fmt", type=click.Choice(["json", "yaml"], case_sensitive=False), default=None, help="Output format (default from config).")
@click.option("--indent", type=int, default=None, help="JSON indent (0 for compact).")
def definitions(spec_file: Path, output: Optional[Path], fmt: Optional[str], indent: Optional[int]) -> None:
    """Print the shared definitions table of a specification.

    \b
    Examples:
      schemadoc definitions service.yaml
    """
    from .json_schema import generate_definitions

    cfg = get_config()
    indent = cfg.json_indent if indent is None else indent
    table = generate_definitions(_load_spec_file(spec_file))
    _write(_dump(table, (fmt or cfg.output_format).lower(), indent), output)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx: click.Context, spec_file: Path) -> None:
    """Check a specification for dangling references and duplicate names.

    Exits with status 1 when problems are found.

    \b
    Examples:
      schemadoc validate service.yaml
    """
    from .spec.validation import find_duplicate_names, find_unresolved_references

    specification = _load_spec_file(spec_file)

    theme.section("Specification", console, number="01")
    t = theme.make_kv_table()
    t.add_row("Services", str(len(specification.services)))
    t.add_row("Methods", str(sum(1 for _ in specification.iter_methods())))
    t.add_row("Structs", str(len(specification.structs)))
    t.add_row("Enums", str(len(specification.enums)))
    t.add_row("Exceptions", str(len(specification.exceptions)))
    console.print(Padding(t, (0, 0, 0, 2)))

    unresolved = find_unresolved_references(specification)
    duplicates = find_duplicate_names(specification)

    theme.section("References", console, number="02")
    if unresolved:
        rt = theme.make_clean_table()
        rt.add_column("Owner", style=f"bold {theme.TEAL}", no_wrap=True)
        rt.add_column("Field")
        rt.add_column("Target", style=theme.MUTED)
        for ref in unresolved:
            rt.add_row(_esc(ref.owner), _esc(ref.field), _esc(f"{ref.kind.value} {ref.target}"))
        console.print(Padding(rt, (0, 0, 0, 2)))
    for name in duplicates:
        console.print(theme.warn(f"Duplicate definition name: {_esc(name)}"))

    if unresolved or duplicates:
        console.print(theme.err(f"{len(unresolved)} unresolved reference(s), {len(duplicates)} duplicate name(s)"))
        ctx.exit(1)
    console.print(theme.ok("All references resolve"))


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@cli.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    from .utils.logging import get_current_log_file

    cfg = get_config()
    theme.section("Configuration", console)
    t = theme.make_kv_table()
    t.add_row("output_format", cfg.output_format)
    t.add_row("json_indent", str(cfg.json_indent))
    t.add_row("strict_references", str(cfg.strict_references))
    t.add_row("log_level", cfg.log_level)
    t.add_row("home_dir", _esc(str(cfg.home_dir)))
    t.add_row("log_file", _esc(str(get_current_log_file() or "-")))
    console.print(Padding(t, (0, 0, 0, 2)))


if __name__ == "__main__":
    cli()
