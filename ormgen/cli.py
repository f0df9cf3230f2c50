"""
Command-line interface for ormgen.

Loads a schema definition, runs the behavior-driven generation pass and
writes (or prints) the generated data-access classes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table as RichTable

from .behaviors.parameters import ConfigurationError
from .core.config import ConfigError, load_config
from .core.generator import GenerationResult, generate_code
from .core.schema import SchemaError, tables_from_definition
from .logging_config import get_logger, setup_logging
from .registry import RegistryError, get_behavior_info, list_behaviors
from .utils import SchemaLoaderError, load_schema_definition

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ormgen",
        description="Generate data-access classes from a schema definition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ormgen schema.json --output models/
  ormgen --url https://example.com/schema.json
  ormgen schema.json --table article --verbose
  ormgen --list-behaviors
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("schema", nargs="?", help="JSON schema definition file")
    input_group.add_argument("--url", help="URL to fetch the schema definition from")

    parser.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: stdout)"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--table",
        action="append",
        metavar="NAME",
        help="Only generate the named table (repeatable)",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add docstrings to generated code",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Generate tables on N worker threads",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation details"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-behaviors",
        action="store_true",
        help="List available behaviors and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``ormgen`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.list_behaviors:
            return _list_behaviors()

        if not (args.schema or args.url):
            console.print("[red]✗[/red] Input source required (schema file or --url)")
            return 1

        return _generate(args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except (SchemaLoaderError, SchemaError, RegistryError, ConfigError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_behaviors() -> int:
    """List registered behaviors and their default parameters."""
    table = RichTable(title="📋 Available Behaviors", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Behavior", style="bold green", no_wrap=True)
    table.add_column("Aliases", style="blue")
    table.add_column("Parameters", style="dim")

    for name in list_behaviors():
        info = get_behavior_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        parameters = "\n".join(f"{key}={value}" for key, value in info["parameters"].items())
        table.add_row(f"🔧 {name}", aliases, parameters)

    console.print()
    console.print(table)
    console.print()
    return 0


def _generate(args: argparse.Namespace) -> int:
    """Run generation for the parsed arguments."""
    source, definition = load_schema_definition(file_path=args.schema, url=args.url)
    tables = tables_from_definition(definition)

    if args.table:
        wanted = set(args.table)
        missing = wanted - {table.name for table in tables}
        if missing:
            raise CLIError(f"Unknown table(s): {', '.join(sorted(missing))}")
        tables = [table for table in tables if table.name in wanted]

    overrides = {}
    if args.output:
        overrides["output_dir"] = args.output
    if args.no_comments:
        overrides["add_comments"] = False
    if args.workers:
        overrides["max_workers"] = args.workers
    config = load_config(custom_config=overrides, config_file=args.config)

    logger.info("Generating %d table(s) from %s", len(tables), source)
    result = generate_code(tables, config)

    if not result.success:
        _print_failure(result)
        return 1

    for warning in result.warnings:
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    if config.output_dir:
        written = write_generated_files(result.files, Path(config.output_dir))
        console.print(f"[green]✓[/green] Wrote {len(written)} file(s) to {config.output_dir}")
    else:
        _print_files(result.files)

    if args.verbose:
        _print_metadata(result)

    return 0


def write_generated_files(files: Dict[str, Dict[str, str]], output_dir: Path) -> List[Path]:
    """
    Write generated sources to disk.

    Args:
        files: Generated sources keyed by table name then file name
        output_dir: Directory to write into (created if missing)

    Returns:
        Paths of the written files
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for table_files in files.values():
        for file_name, code in table_files.items():
            path = output_dir / file_name
            path.write_text(code, encoding="utf-8")
            logger.info("Wrote %s", path)
            written.append(path)

    init_file = output_dir / "__init__.py"
    if not init_file.exists():
        init_file.write_text("", encoding="utf-8")
        written.append(init_file)

    return written


def _print_files(files: Dict[str, Dict[str, str]]) -> None:
    for table_name, table_files in files.items():
        for file_name, code in table_files.items():
            console.print(
                Panel(
                    Syntax(code, "python", line_numbers=False),
                    title=f"{table_name}: {file_name}",
                    border_style="blue",
                )
            )


def _print_failure(result: GenerationResult) -> None:
    details = result.error_message or "Unknown error"
    exception = result.exception
    if isinstance(exception, ConfigurationError):
        if exception.table_name:
            details += f"\n[bold]Table:[/bold] {exception.table_name}"
        if exception.parameter:
            details += f"\n[bold]Parameter:[/bold] {exception.parameter}"

    console.print(Panel(details, title="✗ Generation failed", border_style="red"))


def _print_metadata(result: GenerationResult) -> None:
    table = RichTable(title="📊 Generation Summary", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Table", style="bold green")
    table.add_column("Columns")
    table.add_column("Files", style="cyan")

    for table_name, table_files in result.files.items():
        columns = result.metadata.get("columns", {}).get(table_name, [])
        table.add_row(table_name, ", ".join(columns), ", ".join(table_files))

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
