"""
xtrans - X Architecture to x86-64 Translator
============================================

This package translates programs for the X architecture, a simplified
16-bit RISC instruction set, into x86-64 assembly in AT&T syntax.

The translation is a single forward pass: each X instruction becomes a
label for its address followed by zero or more x86-64 instructions. The
output is one procedure that can be assembled and linked with a small
runtime providing the `debug` and `outchar` routines.

Main Components
---------------
- **cpu**: X instruction encoding and the X to x86-64 register mapping
- **translator**: decoder, opcode dispatcher and stream driver
- **cli**: the `xtrans` command

Quick Start
-----------
Translate a program:
    >>> from xtrans import XTranslator
    >>> translator = XTranslator()
    >>> print(translator.translate_to_text(open("prog.xo", "rb").read()))

Or use the command-line tool:
    $ xtrans prog.xo -o prog.s

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from xtrans.config import TranslatorConfig, get_default_config, set_default_config
from xtrans.errors import (
    XTransError,
    TranslationError,
    ShortReadError,
    UnmappedRegisterError,
    InputFileError,
)
from xtrans.cpu import OperandClass, RegisterWidth, map_register
from xtrans.translator import (
    XTranslator,
    TranslationContext,
    DecodedInstruction,
    decode,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Configuration
    "TranslatorConfig",
    "get_default_config",
    "set_default_config",
    # Exception hierarchy
    "XTransError",
    "TranslationError",
    "ShortReadError",
    "UnmappedRegisterError",
    "InputFileError",
    # Architecture
    "OperandClass",
    "RegisterWidth",
    "map_register",
    # Engine
    "XTranslator",
    "TranslationContext",
    "DecodedInstruction",
    "decode",
]
