"""Command-line entry point for structgen.

Reads one JSON Schema document (file or URL), converts it to a type graph
and prints C# readonly structs to stdout. Diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence
from urllib.parse import urlparse

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .codegen import (
    build_graph,
    generate_code,
    get_generator,
    list_all_language_info,
)
from .codegen.core.config import ConfigError, load_config
from .codegen.core.naming import NameSanitizer, NamingCase
from .codegen.core.schema import SchemaError
from .codegen.registry import RegistryError
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoaderError, is_url, load_schema

logger = get_logger(__name__)

# Diagnostics only; generated code is written to stdout directly
console = Console(stderr=True)

LANGUAGE = "csharp"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="structgen",
        description="Generate immutable C# readonly structs from a JSON Schema.",
    )
    parser.add_argument("schema", nargs="?", metavar="SCHEMA", help="JSON Schema file path or http(s) URL")

    output_group = parser.add_argument_group("output options")
    output_group.add_argument("--top-level", metavar="NAME", help="Name for the top-level record")
    output_group.add_argument("--namespace", metavar="NS", help="C# namespace for generated types")
    output_group.add_argument("--config", metavar="FILE", help="Configuration file path (JSON)")
    output_group.add_argument(
        "--access-modifier",
        choices=["public", "internal", "none"],
        help="Accessibility of generated structs",
    )
    output_group.add_argument(
        "--array-type",
        choices=["array", "list"],
        help="Declare arrays as T[] or List<T>",
    )
    output_group.add_argument(
        "--no-json-attributes",
        action="store_true",
        help="Omit [JsonPropertyName] attributes",
    )
    output_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Omit documentation comments",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported target languages and exit",
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Diagnostic verbosity (default: WARNING)",
    )
    return parser


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect configuration overrides given on the command line."""
    overrides: dict[str, Any] = {}
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.access_modifier:
        overrides["access_modifier"] = args.access_modifier
    if args.array_type:
        overrides["array_type"] = args.array_type
    if args.no_json_attributes:
        overrides["json_attributes"] = False
    if args.no_comments:
        overrides["add_comments"] = False
    return overrides


def top_level_name(args: argparse.Namespace, schema: dict) -> str:
    """Pick the top-level record name: option, schema title, then source name."""
    if args.top_level:
        return args.top_level

    title = schema.get("title")
    if isinstance(title, str) and title.strip():
        return title

    source = urlparse(args.schema).path if is_url(args.schema) else args.schema
    stem = Path(source).stem
    name = NameSanitizer().sanitize_name(stem, NamingCase.PASCAL_CASE, unique=False)
    return name or "Root"


def generate(args: argparse.Namespace) -> list[str]:
    """Run the whole pipeline and return the generated source lines."""
    _, schema = load_schema(args.schema)

    config = load_config(LANGUAGE, custom_config=build_overrides(args), config_file=args.config)
    generator = get_generator(LANGUAGE, config)

    graph = build_graph(schema, generator, top_level_name(args, schema))
    result = generate_code(generator, graph)

    if not result.success:
        raise CLIError(result.error_message)

    logger.info(
        "Generated %d records (%d properties)",
        result.metadata["record_count"],
        result.metadata["property_count"],
    )
    return result.lines


def list_languages() -> int:
    """Print the supported languages as a table."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    Console().print(table)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Exit code: 0 on success, 1 on load or generation errors. Usage
        errors exit with status 2 through argparse.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.list_languages:
        return list_languages()

    if not args.schema:
        parser.error("the following arguments are required: SCHEMA")

    try:
        lines = generate(args)
    except (SchemaLoaderError, SchemaError, ConfigError, RegistryError, CLIError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
