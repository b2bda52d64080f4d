"""
X to x86-64 Translator
======================

Drives the decoder and dispatcher over a binary X program and produces a
complete x86-64 assembly procedure.

Output Structure
----------------
    .global test            ; prologue
    test:
        push %rbp
        mov %rsp, %rbp
    .L0000:                 ; one label per instruction address
        call debug          ; only while debug mode is on
        ...                 ; translated instruction, zero or more lines
    .L0002:                 ; label of the end-of-program marker
        pop %rbp            ; epilogue
        ret

Streaming
---------
The input is consumed strictly forward, two bytes at a time plus two more
for extended instructions. Nothing is buffered or re-read. translate_stream()
is a generator: each line is yielded before the next read is attempted, so
a consumer that writes lines as they arrive has already written everything
up to a failing read when ShortReadError is raised.

Usage:
    >>> translator = XTranslator()
    >>> translator.translate(bytes([0x42, 0x12, 0x00, 0x00]))[4:]
    ['.L0000:', '    not %rbx', '.L0002:', '    pop %rbp', '    ret']

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import io
import logging
from typing import BinaryIO, Iterator, List, Optional

from xtrans.config import TranslatorConfig, get_default_config
from xtrans.cpu.xarch import EXTENSION_WORD_SIZE, INSTRUCTION_WORD_SIZE, OperandClass
from xtrans.errors import ShortReadError, UnmappedRegisterError
from xtrans.translator.context import TranslationContext
from xtrans.translator.decoder import (
    DecodedInstruction,
    decode,
    is_sentinel,
    operand_class_of,
)
from xtrans.translator.dispatch import Dispatcher

logger = logging.getLogger(__name__)


class XTranslator:
    """
    Translator from X machine code to x86-64 assembly text.

    Attributes:
        config: Names used in the generated code
        dispatcher: Per-opcode emitters
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        self.config = config or get_default_config()
        self.dispatcher = Dispatcher(self.config)

    # =========================================================================
    # Fixed Sections
    # =========================================================================

    def prologue(self) -> List[str]:
        """Procedure entry: global symbol and stack frame setup."""
        entry = self.config.entry_symbol
        indent = self.config.indent
        return [
            f".global {entry}",
            f"{entry}:",
            f"{indent}push %rbp",
            f"{indent}mov %rsp, %rbp",
        ]

    def epilogue(self) -> List[str]:
        """Procedure exit: stack frame teardown and return."""
        indent = self.config.indent
        return [
            f"{indent}pop %rbp",
            f"{indent}ret",
        ]

    # =========================================================================
    # Single Instruction
    # =========================================================================

    def translate_instruction(
        self,
        instruction: DecodedInstruction,
        context: TranslationContext,
    ) -> List[str]:
        """
        Translate one decoded instruction and advance the address counter.

        The label and debug call for the instruction are not included; they
        are emitted by translate_stream() before the instruction is read.

        Raises:
            UnmappedRegisterError: With the instruction address filled in
        """
        try:
            lines = self.dispatcher.dispatch(instruction, context)
        except UnmappedRegisterError as e:
            raise UnmappedRegisterError(e.index, e.width, address=context.address) from e

        context.advance(instruction.size)
        return lines

    # =========================================================================
    # Streams
    # =========================================================================

    def _read_exact(self, stream: BinaryIO, count: int, address: int) -> bytes:
        data = stream.read(count)
        if data is None or len(data) < count:
            received = 0 if data is None else len(data)
            logger.debug(
                "Short read at .L%04x: wanted %d byte(s), got %d",
                address, count, received,
            )
            raise ShortReadError(count, received, address=address)
        return data

    def translate_stream(
        self,
        stream: BinaryIO,
        context: Optional[TranslationContext] = None,
    ) -> Iterator[str]:
        """
        Translate a binary stream, yielding assembly lines as they are produced.

        Args:
            stream: Binary input with a read(n) method
            context: Starting state (default: address 0, debug mode off)

        Yields:
            Prologue, per-instruction labels and code, and the epilogue

        Raises:
            ShortReadError: If the input ends before the end-of-program marker
            UnmappedRegisterError: If an operand register has no mapping
        """
        if context is None:
            context = TranslationContext()

        yield from self.prologue()

        count = 0
        while True:
            yield f"{context.label()}:"
            if context.debug_mode:
                yield f"{self.config.indent}call {self.config.debug_routine}"

            word = self._read_exact(stream, INSTRUCTION_WORD_SIZE, context.address)
            byte0, byte1 = word[0], word[1]

            if is_sentinel(byte0, byte1):
                logger.debug("End of program at %s", context.label())
                break

            extension = None
            if operand_class_of(byte0) == OperandClass.EXTENDED:
                extension = self._read_exact(stream, EXTENSION_WORD_SIZE, context.address)

            instruction = decode(byte0, byte1, extension)
            logger.debug(
                "%s: %s -> class %d, disc %d, opcode %d, r%d, r%d",
                context.label(),
                instruction.raw_bytes.hex(),
                instruction.operand_class,
                instruction.discriminator,
                instruction.opcode,
                instruction.reg1,
                instruction.reg2,
            )

            yield from self.translate_instruction(instruction, context)
            count += 1

        logger.debug("Translated %d instruction(s)", count)
        yield from self.epilogue()

    def translate(self, data: bytes) -> List[str]:
        """
        Translate an in-memory X program.

        Args:
            data: Program bytes, ending with the 0x0000 marker

        Returns:
            List of assembly lines
        """
        return list(self.translate_stream(io.BytesIO(data)))

    def translate_to_text(self, data: bytes) -> str:
        """Translate an in-memory program to newline-terminated assembly text."""
        return "\n".join(self.translate(data)) + "\n"
