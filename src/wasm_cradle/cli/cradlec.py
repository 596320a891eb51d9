"""
cradlec - Translator Command-Line Interface
===========================================

This module implements the command-line interface for the translator.
It reads a source file (or stdin), translates it, and writes the
stack-machine text to a file or to stdout.

Usage Examples
--------------
Control-flow program to stdout:
    $ cradlec loop.cr

Expression with output file:
    $ cradlec --mode expression sum.cr -o sum.wat

From stdin:
    $ echo 'x=6*7' | cradlec --mode assign -

Verbose mode:
    $ cradlec -v loop.cr

Exit Codes
----------
0 - Success
1 - Translation error
2 - Invalid arguments, configuration or missing file
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from wasm_cradle import __version__
from wasm_cradle.cli.errors import handle_cli_exception
from wasm_cradle.translator import MODES, Translator, TranslatorOptions, strip_line_break

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def build_options(
    overflow: Optional[str],
    strict_redeclaration: bool,
    max_depth: Optional[int],
    indent: Optional[int],
) -> TranslatorOptions:
    """Environment configuration, overridden by any option given on the command line."""
    options = TranslatorOptions.from_env()

    return TranslatorOptions(
        redeclaration="error" if strict_redeclaration else options.redeclaration,
        overflow=overflow.lower() if overflow else options.overflow,
        max_depth=max_depth if max_depth is not None else options.max_depth,
        indent=indent if indent is not None else options.indent,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-m", "--mode",
    type=click.Choice(MODES, case_sensitive=False),
    default="control",
    show_default=True,
    help="Source language: control-flow program, single expression, "
         "or assignment script.",
)
@click.option(
    "--overflow",
    type=click.Choice(["reject", "wrap"], case_sensitive=False),
    default=None,
    help="32-bit overflow policy (default: reject, or CRADLE_OVERFLOW).",
)
@click.option(
    "--strict-redeclaration",
    is_flag=True,
    help="Treat declaring the same local twice as an error.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Deepest nesting accepted (default: 200, or CRADLE_MAX_DEPTH).",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=None,
    help="Spaces per nesting level in the output (default: 2, or CRADLE_INDENT).",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="cradlec")
def main(
    input_file: Path,
    output: Optional[Path],
    mode: str,
    overflow: Optional[str],
    strict_redeclaration: bool,
    max_depth: Optional[int],
    indent: Optional[int],
    verbose: bool,
) -> None:
    """
    Translate a source program into stack-machine text.

    INPUT_FILE is the source to translate, or - for stdin.

    \b
    Control-flow language (--mode control):
        i<c> ... [l ...] e    if / else
        w<c> ... e            while (pre-check)
        p ... e               loop
        r ... u<c>            repeat until (post-check)
        e                     ends the program
        any other character   declares a local of that name

    \b
    Arithmetic (--mode expression / assign):
        x=(1+2)*3; y=x/2; z=f()
    """
    setup_logging(verbose)

    try:
        options = build_options(overflow, strict_redeclaration, max_depth, indent)
        translator = Translator(options)
        mode = mode.lower()

        if str(input_file) == "-":
            # Decoded like files so that any byte reaches the translator
            raw = click.get_binary_stream("stdin").read()
            text = raw.decode("latin-1").replace("\r\n", "\n").replace("\r", "\n")
            source = strip_line_break(text)
            result = translator.translate(source, mode, "<stdin>")
        else:
            logger.info(f"Translating {input_file} ({mode})")
            result = translator.translate_file(str(input_file), mode)

        if output is None:
            click.echo(result.text, nl=False)
        else:
            output.write_text(result.text)
            logger.info(f"Wrote {len(result.instructions)} instructions to {output}")

        if result.value is not None:
            logger.info(f"Result value: {result.value}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
