"""
Command line interface for kalamgen.

Generates kalam bindings from a binary FileDescriptorSet, as written by
``protoc --include_imports --descriptor_set_out=<file>``.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .core.config import DEFAULT_LANGUAGE, ConfigError, GeneratorConfig, load_config
from .core.descriptors import ResolutionError, load_file_set
from .core.driver import Driver, GenerationResult
from .core.generator import GeneratorError
from .core.templates import TemplateError
from .logging_config import configure_logging, get_logger
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


GENERATION_ERRORS = (
    CLIError,
    ConfigError,
    GeneratorError,
    RegistryError,
    ResolutionError,
    TemplateError,
)

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kalamgen",
        description="Generate kalam RPC bindings from a protobuf descriptor set",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  protoc --include_imports --descriptor_set_out=api.pb api/*.proto
  kalamgen api.pb --language kotlin --output gen/
  kalamgen api.pb -l swift --file api/chat.proto --dry-run
  kalamgen --list-languages
  kalamgen --language-info dart
        """.strip(),
    )

    parser.add_argument(
        "descriptor_set",
        nargs="?",
        help="Binary FileDescriptorSet produced by protoc",
    )

    parser.add_argument(
        "--language",
        "-l",
        default=DEFAULT_LANGUAGE,
        help=f"Target language (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument(
        "--output", "-o", default=".", help="Output directory (default: current directory)"
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--file",
        action="append",
        dest="files",
        metavar="PROTO",
        help="Generate only this schema file (repeatable)",
    )
    parser.add_argument(
        "--no-runtime",
        action="store_true",
        help="Don't write the runtime support file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the files that would be written, without writing them",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only print errors")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )
    info_group.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Runtime", style="magenta")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        runtime = info["runtime"] or "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], runtime, aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] kalamgen [dim]api.pb[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] kalamgen --language-info [cyan]LANGUAGE[/cyan]",
            title="Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not is_language_supported(language):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print(f"[dim]Supported languages: {', '.join(list_supported_languages())}[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Template:[/bold] {info['template']}
[bold]Generator Class:[/bold] {info['class']}"""
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"{info['name'].title()} Generator", border_style="green"))

    capabilities = Table(
        title="Capabilities",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    capabilities.add_column("Setting", style="bold")
    capabilities.add_column("Value", style="green")
    capabilities.add_row("Namespace fallback", str(info["namespace_fallback"]))
    capabilities.add_row("Emits enums/messages", str(info["emits_types"]))
    capabilities.add_row("Flat namespace prefix", str(info["flat_namespace"]))
    capabilities.add_row("Runtime file", str(info["runtime"]))
    capabilities.add_row("Granularity", info["granularity"])

    scalars = Table(title="Scalar Types", box=box.SIMPLE, header_style="bold cyan")
    scalars.add_column("Proto kind", style="bold")
    scalars.add_column(info["name"].title(), style="green")
    for kind, type_name in info["scalar_types"].items():
        scalars.add_row(kind, type_name)

    console.print()
    console.print(capabilities)
    console.print(scalars)
    return 0


def _read_descriptor_set(path: str) -> descriptor_pb2.FileDescriptorSet:
    file_set = descriptor_pb2.FileDescriptorSet()
    try:
        file_set.ParseFromString(Path(path).read_bytes())
    except OSError as e:
        raise CLIError(f"Cannot read descriptor set {path}: {e}") from e
    except DecodeError as e:
        raise CLIError(f"Invalid descriptor set {path}: {e}") from e
    return file_set


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    overrides = {}
    if args.no_runtime:
        overrides["bundle_runtime"] = False
    return load_config(args.language, overrides or None, args.config)


def _print_result(result: GenerationResult, output_dir: Path, dry_run: bool):
    table = Table(
        title=f"Generated files in {output_dir}" + (" (dry run)" if dry_run else ""),
        box=box.SIMPLE,
        header_style="bold cyan",
    )
    table.add_column("File", style="green")
    table.add_column("Bytes", justify="right")
    for generated in result.files:
        table.add_row(generated.name, str(len(generated.content)))
    console.print(table)


def write_files(result: GenerationResult, output_dir: Path):
    """Write every generated file under ``output_dir``."""
    for generated in result.files:
        target = output_dir / generated.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(generated.content)
        logger.debug("Wrote %s", target)


def generate(args: argparse.Namespace) -> int:
    if not args.descriptor_set:
        raise CLIError("A descriptor set file is required (see --help)")

    file_set = _read_descriptor_set(args.descriptor_set)
    config = _build_config(args)
    generator = get_generator(args.language, config)
    files = load_file_set(file_set, args.files)

    # Nothing touches the disk until the whole run has succeeded
    result = Driver(generator).run(files)
    output_dir = Path(args.output)

    if not args.dry_run:
        try:
            write_files(result, output_dir)
        except OSError as e:
            raise CLIError(f"Failed to write output: {e}") from e

    if not args.quiet:
        _print_result(result, output_dir, args.dry_run)
        if not args.dry_run:
            console.print(f"[green]✓[/green] Wrote {len(result.files)} file(s) to {output_dir}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging()

    try:
        if args.list_languages:
            return _list_languages()
        if args.language_info:
            return _show_language_info(args.language_info)
        return generate(args)
    except GENERATION_ERRORS as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
