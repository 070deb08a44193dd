"""Generate and inspect commands - Build embedded template modules."""
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from tmplpack import Option, configure_logging, load_config_file, new_configuration, write_artifact
from tmplpack import options as opts
from tmplpack.constants import DEFAULT_CONFIG_FILE

from .utils import console, handle_error, info, success


def build_options(
    config_file: Optional[str],
    base_dir: Optional[str],
    sources: Optional[List[str]],
    exts: Optional[List[str]],
    package_name: Optional[str],
    prefix: Optional[str],
    text: bool,
    html: bool,
    compress: bool,
    workers: int,
) -> List[Option]:
    """
    Translate command line flags into options.

    Options from the config file come first so explicit flags override them.
    ``tmplpack.yaml`` in the current directory is used when no --config is given.
    """
    result: List[Option] = []
    if config_file is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_file = DEFAULT_CONFIG_FILE
    if config_file is not None:
        result.extend(load_config_file(config_file))

    if package_name is not None:
        result.append(opts.package(package_name))
    if prefix is not None:
        result.append(opts.function_prefix(prefix))
    if base_dir is not None:
        result.append(opts.base(base_dir))
    if exts:
        result.append(opts.extensions(exts))
    if sources:
        result.append(opts.mappings([{"source": s} for s in sources]))
    if text:
        result.append(opts.enable_text_templates())
    if html:
        result.append(opts.enable_html_templates())
    if compress:
        result.append(opts.enable_compression())
    if workers > 1:
        result.append(opts.parallel(workers))
    return result


def generate(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help=f"YAML config file (default: ./{DEFAULT_CONFIG_FILE} if present)"
    ),
    base_dir: Optional[str] = typer.Option(None, "--base", "-b", help="Base directory for mappings"),
    sources: Optional[List[str]] = typer.Option(
        None, "--source", "-s", help="Mapping subdirectory below the base (repeatable)"
    ),
    exts: Optional[List[str]] = typer.Option(
        None, "--ext", "-e", help="Only embed files ending with this suffix (repeatable)"
    ),
    package_name: Optional[str] = typer.Option(None, "--package", "-p", help="Package name"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Function name prefix"),
    text: bool = typer.Option(False, "--text", help="Emit the text template helper"),
    html: bool = typer.Option(False, "--html", help="Emit the HTML template helpers"),
    compress: bool = typer.Option(False, "--compress", help="zlib-compress embedded payloads"),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Threads used to read mappings"),
    output: str = typer.Option("-", "--output", "-o", help="Output file, or - for stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    Generate a Python module embedding every matching template file.

    Examples:
        tmplpack generate --source templates --ext .html -o app/templates.py
        tmplpack generate --html --prefix app > embedded.py
        tmplpack generate --config tmplpack.yaml
    """
    configure_logging("debug" if verbose else "warning")
    try:
        config = new_configuration(
            *build_options(
                config_file, base_dir, sources, exts, package_name, prefix, text, html, compress, workers
            )
        )
        artifact = config.render()
        write_artifact(artifact, output)

        if output != "-":
            success(
                f"Embedded {len(config.sources)} templates into [bold cyan]{escape(output)}[/bold cyan]"
            )
            console.print(
                f"[dim]  Load with {config.function_name('template')}(name) "
                f"from package {config.package}[/dim]"
            )
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        info("\nGeneration cancelled by user")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)


def inspect(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    base_dir: Optional[str] = typer.Option(None, "--base", "-b", help="Base directory for mappings"),
    sources: Optional[List[str]] = typer.Option(None, "--source", "-s", help="Mapping subdirectory"),
    exts: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="Suffix filter (repeatable)"),
    show: Optional[str] = typer.Option(None, "--show", help="Print the content of one logical name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """
    List the files that would be embedded, without rendering anything.

    Examples:
        tmplpack inspect --source templates --ext .html
        tmplpack inspect --show index.html
    """
    configure_logging("debug" if verbose else "warning")
    try:
        config = new_configuration(
            *build_options(config_file, base_dir, sources, exts, None, None, False, False, False, 1)
        )

        if show is not None:
            typer.echo(config.lookup(show).decode("utf-8", errors="replace"), nl=False)
            return

        table = Table(title="Collected templates", show_header=True, header_style="bold cyan")
        table.add_column("Logical name", style="cyan", no_wrap=True)
        table.add_column("Bytes", justify="right", style="green")
        table.add_column("Root", style="dim")
        for mapping in config.mappings:
            for name in sorted(mapping.sources):
                table.add_row(escape(name), str(len(mapping.sources[name])), escape(str(mapping.root)))
        console.print(table)
        info(f"{len(config.sources)} templates from {len(config.mappings)} mapping(s)")
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
