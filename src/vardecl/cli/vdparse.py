"""
vdparse - Declaration Parser Command-Line Interface
===================================================

This module implements the command-line interface around vardecl.parse().
It reads one declaration, parses it and prints the resulting AST.

Usage Examples
--------------
Parse a declaration given on the command line:
    $ vdparse "const x = 1 + 2 * 3"

Parse the declaration stored in a file:
    $ vdparse -f decl.txt

JSON output:
    $ vdparse --format json "let y: number = (1 + 2) * 3"

Verbose mode (debug logging of every token):
    $ vdparse -v "var z = -1"
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from vardecl import __version__
from vardecl.ast import ASTPrinter
from vardecl.cli.errors import handle_cli_exception
from vardecl.parser import parse


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("source", required=False)
@click.option(
    "-f", "--file", "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the declaration from a file instead of the SOURCE argument",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["tree", "json", "repr"], case_sensitive=False),
    default="tree",
    show_default=True,
    help="How to print the AST",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="vdparse")
def main(
    source: Optional[str],
    input_file: Optional[Path],
    output_format: str,
    verbose: bool,
) -> None:
    """
    Parse a variable declaration and print its syntax tree.

    SOURCE is the declaration text, for example "const x = 1 + 2".

    \b
    Examples:
        vdparse "const x = 1"              # Indented tree
        vdparse --format json "let y = 2"  # JSON document
        vdparse -f decl.txt                # Read from a file
    """
    if (source is None) == (input_file is None):
        raise click.UsageError("Provide exactly one of SOURCE or --file.")

    setup_logging(verbose)

    try:
        filename = "<input>"
        if input_file is not None:
            filename = str(input_file)
            source = input_file.read_text().strip()

        logger.debug("Parsing %s", filename)
        ast = parse(source, filename)

        output_format = output_format.lower()
        if output_format == "json":
            click.echo(json.dumps(ast.to_dict(), indent=2))
        elif output_format == "repr":
            click.echo(repr(ast))
        else:
            click.echo(ASTPrinter().print(ast))

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
