"""
X Translator Engine
===================

Decode-and-emit engine translating X architecture machine code into
x86-64 assembly:

- decoder: bit-field extraction of X instructions
- context: address counter, labels and debug flag
- dispatch: per-opcode assembly emitters
- translator: the stream driver tying them together

Usage:
    from xtrans.translator import XTranslator

    translator = XTranslator()
    with open("program.xo", "rb") as f:
        for line in translator.translate_stream(f):
            print(line)
"""

from .context import TranslationContext, format_label, signed_byte
from .decoder import DecodedInstruction, decode, is_sentinel, combine_immediate
from .dispatch import Dispatcher
from .translator import XTranslator

__all__ = [
    "TranslationContext",
    "format_label",
    "signed_byte",
    "DecodedInstruction",
    "decode",
    "is_sentinel",
    "combine_immediate",
    "Dispatcher",
    "XTranslator",
]
