"""
xtrans - X to x86-64 Translator Command-Line Interface
======================================================

Translates a binary program for the X architecture into x86-64 assembly
that can be assembled together with the runtime providing the `debug`
and `outchar` routines.

Usage Examples
--------------
Translate to stdout:
    $ xtrans program.xo

Write to a file:
    $ xtrans program.xo -o program.s

Name the generated procedure:
    $ xtrans program.xo --entry main

Show each decoded instruction on stderr:
    $ xtrans program.xo -v

Exit Codes
----------
0 - Success
1 - Input cannot be opened, is truncated, or uses an unmapped register
2 - Invalid arguments

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from xtrans import __version__
from xtrans.cli.errors import handle_cli_exception
from xtrans.config import get_default_config
from xtrans.errors import InputFileError
from xtrans.translator import XTranslator

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: stdout)",
)
@click.option(
    "-e", "--entry",
    type=str,
    default=None,
    help="Global symbol of the generated procedure (default: test)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Log each decoded instruction to stderr",
)
@click.version_option(version=__version__, prog_name="xtrans")
def main(
    input_file: Path,
    output: Optional[Path],
    entry: Optional[str],
    verbose: bool,
) -> None:
    """
    Translate an X architecture binary to x86-64 assembly.

    INPUT_FILE is the binary program, ending with the 0x0000 instruction.

    Examples:

        # Print the translation
        xtrans program.xo

        # Save it under a different entry symbol
        xtrans program.xo --entry main -o program.s
    """
    setup_logging(verbose)

    config = get_default_config()
    if entry:
        config = replace(config, entry_symbol=entry)

    translator = XTranslator(config)

    try:
        try:
            stream = open(input_file, "rb")
        except OSError as e:
            raise InputFileError(str(input_file), e.strerror or str(e)) from e

        logger.debug("Translating %s", input_file)

        with stream:
            if output:
                with open(output, "w", encoding="utf-8") as out:
                    for line in translator.translate_stream(stream):
                        out.write(line + "\n")
                if verbose:
                    click.echo(f"Output written to: {output}", err=True)
            else:
                for line in translator.translate_stream(stream):
                    click.echo(line)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
