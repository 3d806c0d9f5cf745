"""Command-line interface for the JSON Reformatter."""

import logging
import sys
import click
from pathlib import Path
from typing import Optional
from . import __version__
from .json_reformatter import JSONReformatter
from .types import FormatMode, ReformatError


def _fragment_options(command):
    """Options shared by every reformatting command."""
    command = click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')(command)
    command = click.option('--ascii', 'ascii_only', is_flag=True,
                           help='Escape non-ASCII characters')(command)
    command = click.option('--indent', default=2, show_default=True, type=click.IntRange(min=0),
                           help='Spaces per nesting level')(command)
    command = click.option('--in-place', '-i', is_flag=True,
                           help='Write the result back to SOURCE')(command)
    command = click.option('--offset', '-p', type=click.IntRange(min=0),
                           help='Reformat the fragment enclosing this character offset '
                                '(default: first fragment in SOURCE)')(command)
    command = click.argument('source', type=click.Path(exists=True, dir_okay=False,
                                                       allow_dash=True, path_type=Path))(command)
    return command


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.CRITICAL,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_source(source: Path) -> str:
    if str(source) == '-':
        return click.get_text_stream('stdin').read()
    return source.read_text(encoding='utf-8')


def _run(source: Path, mode: FormatMode, offset: Optional[int], in_place: bool,
         indent: int, ascii_only: bool, verbose: bool, depth: Optional[int] = None) -> None:
    _configure_logging(verbose)

    if in_place and str(source) == '-':
        raise click.UsageError("--in-place cannot be used when reading from stdin")

    document = _read_source(source)
    reformatter = JSONReformatter(indent_width=indent, ensure_ascii=ascii_only)

    try:
        result = reformatter.reformat_at(document, offset, mode, depth)
    except ReformatError as e:
        response = reformatter.error_handler.handle_reformat_error(e)
        click.echo(f"❌ Error: {e}", err=True)
        click.echo(f"   • {response.suggested_action}", err=True)
        if verbose and response.diagnostic_text is not None:
            click.echo("Text that failed to parse:", err=True)
            click.echo(response.diagnostic_text, err=True)
        sys.exit(1)

    output = result.apply(document)

    if in_place:
        source.write_text(output, encoding='utf-8')
        click.echo(f"✅ Reformatted {source} (column {result.column})", err=True)
    else:
        click.echo(output, nl=not output.endswith("\n"))


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Reformatter - Expand, compact and repair JSON embedded in text."""
    pass


@main.command()
@_fragment_options
def expand(source: Path, offset: Optional[int], in_place: bool, indent: int,
           ascii_only: bool, verbose: bool):
    """Expand every nested array and object."""
    _run(source, FormatMode.FULL, offset, in_place, indent, ascii_only, verbose)


@main.command()
@_fragment_options
def compact(source: Path, offset: Optional[int], in_place: bool, indent: int,
            ascii_only: bool, verbose: bool):
    """Put each top-level member on its own line."""
    _run(source, FormatMode.COMPACT, offset, in_place, indent, ascii_only, verbose)


@main.command()
@click.argument('levels', type=click.IntRange(min=0))
@_fragment_options
def depth(levels: int, source: Path, offset: Optional[int], in_place: bool, indent: int,
          ascii_only: bool, verbose: bool):
    """Expand nesting down to LEVELS, minifying anything deeper."""
    _run(source, FormatMode.DEPTH, offset, in_place, indent, ascii_only, verbose, depth=levels)


@main.command()
@_fragment_options
def cleanup(source: Path, offset: Optional[int], in_place: bool, indent: int,
            ascii_only: bool, verbose: bool):
    """Repair common malformations, then expand fully."""
    _run(source, FormatMode.CLEANUP, offset, in_place, indent, ascii_only, verbose)


@main.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False,
                                          allow_dash=True, path_type=Path))
@click.option('--verbose', '-v', is_flag=True, help='List the repair steps that changed the text')
def repair(source: Path, verbose: bool):
    """Print SOURCE after the repair pipeline, without parsing it."""
    _configure_logging(verbose)
    text = _read_source(source)
    reformatter = JSONReformatter(enable_profiling=False)

    if verbose:
        for step_name, _ in reformatter.repair_pipeline.trace(text):
            click.echo(f"   • {step_name}", err=True)

    click.echo(reformatter.repair(text))


@main.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False,
                                          allow_dash=True, path_type=Path))
def check(source: Path):
    """Check whether SOURCE is valid JSON."""
    _configure_logging(False)
    reformatter = JSONReformatter(enable_profiling=False)
    result = reformatter.error_handler.validate_input(_read_source(source))

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}")

    if result.is_valid:
        click.echo("✅ Valid JSON")
        return

    click.echo("❌ Invalid JSON:")
    for error in result.errors:
        location = f" ({error.location})" if error.location else ""
        click.echo(f"   • {error.message}{location}")
    sys.exit(1)


if __name__ == '__main__':
    main()
