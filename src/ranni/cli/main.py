"""
ranni - Command-Line Interface
==============================

This module implements the ``ranni`` command.

Usage Examples
--------------
Parse a file and print its syntax tree:
    $ ranni compile main.rni

Read the program from stdin and print the dataclass dump instead:
    $ echo "let x = 5 x" | ranni compile - --format repr

Run the language server (for editors):
    $ ranni lsp

Exit Codes
----------
0 - Success
1 - Lexical or syntax errors in the input
2 - Invalid arguments or unreadable input
3 - Internal error
"""

import logging
import sys
from typing import TextIO

import click

from ranni import __version__
from ranni.cli.errors import handle_cli_exception
from ranni.compiler import Compiler, CompilerOptions
from ranni.syntax.ast import ASTPrinter

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores options given to the group before the subcommand.
    """

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity; stdout stays free for output."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s",
            stream=sys.stderr,
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging and tracebacks for internal errors",
)
@click.version_option(version=__version__, prog_name="ranni")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Front-end tools for the ranni expression language.

    Use 'ranni compile FILE' to check a program and print its syntax tree.
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Compile Command
# =============================================================================

@main.command("compile")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--format", "output_format",
    type=click.Choice(["tree", "repr"]),
    default="tree",
    show_default=True,
    help="Syntax tree output format",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many errors",
)
@pass_context
def compile_command(
    ctx: Context,
    source: TextIO,
    output_format: str,
    max_errors: int,
) -> None:
    """
    Parse SOURCE and print its syntax tree.

    SOURCE is a file path, or '-' to read from stdin. Errors are printed
    to stderr followed by a summary line.

    Example:
        ranni compile main.rni
        ranni compile - --format repr < main.rni
    """
    filename = source.name
    options = CompilerOptions(max_errors=max_errors, default_filename=filename)

    try:
        text = source.read()
        logger.debug("Read %d characters from %s", len(text), filename)

        result = Compiler(options).compile_source(text)

        if output_format == "repr":
            click.echo(repr(result.ast))
        else:
            click.echo(ASTPrinter().print(result.ast))

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)


# =============================================================================
# Language Server Command
# =============================================================================

@main.command("lsp")
def lsp_command() -> None:
    """
    Run the language server on stdin/stdout.

    Speaks the Language Server Protocol over stdio. Only the lifecycle
    (initialize, initialized, shutdown, exit) is handled.
    """
    from ranni.lsp.server import main as lsp_main

    lsp_main()


if __name__ == "__main__":
    main()
