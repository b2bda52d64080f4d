"""
X Instruction Decoder
=====================

Pure bit-field extraction for X architecture instructions. The decoder
does no I/O: the caller supplies the two instruction bytes and, for
extended (class 3) instructions, the two operand bytes that follow.

Usage:
    >>> instr = decode(0x42, 0x12)
    >>> instr.operand_class, instr.opcode, instr.reg1
    (<OperandClass.ONE_OPERAND: 1>, 2, 1)

    >>> instr = decode(0xE1, 0x30, bytes([0x12, 0x34]))
    >>> hex(instr.immediate)
    '0x1234'

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional

from xtrans.cpu.xarch import (
    CLASS_SHIFT,
    CLASS_MASK,
    DISCRIMINATOR_SHIFT,
    DISCRIMINATOR_MASK,
    OPCODE_MASK,
    REG1_SHIFT,
    REG_MASK,
    EXTENSION_WORD_SIZE,
    OperandClass,
)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class DecodedInstruction:
    """
    A single decoded X instruction.

    Attributes:
        byte0: First instruction byte (class, discriminator, opcode)
        byte1: Second instruction byte (register fields or displacement)
        operand_class: Operand class from the top two bits of byte0
        discriminator: Register (0) or immediate (1) form selector
        opcode: Operation number within the class (0-31)
        reg1: High nibble of byte1
        reg2: Low nibble of byte1
        immediate: 16-bit operand word of extended instructions, else None
    """
    byte0: int
    byte1: int
    operand_class: OperandClass
    discriminator: int
    opcode: int
    reg1: int
    reg2: int
    immediate: Optional[int] = None

    @property
    def is_extended(self) -> bool:
        return self.operand_class == OperandClass.EXTENDED

    @property
    def size(self) -> int:
        """Instruction length in bytes (2, or 4 for extended instructions)."""
        return self.operand_class.size

    @property
    def raw_bytes(self) -> bytes:
        raw = bytes([self.byte0, self.byte1])
        if self.immediate is not None:
            raw += self.immediate.to_bytes(EXTENSION_WORD_SIZE, "big")
        return raw

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "class": int(self.operand_class),
            "discriminator": self.discriminator,
            "opcode": self.opcode,
            "reg1": self.reg1,
            "reg2": self.reg2,
            "immediate": self.immediate,
            "size": self.size,
            "bytes": [f"{b:02x}" for b in self.raw_bytes],
        }


# =============================================================================
# Decoding
# =============================================================================

def operand_class_of(byte0: int) -> OperandClass:
    """Extract the operand class from the first instruction byte."""
    return OperandClass((byte0 >> CLASS_SHIFT) & CLASS_MASK)


def combine_immediate(high: int, low: int) -> int:
    """Combine two operand bytes, high byte first, into a 16-bit value."""
    return ((high & 0xFF) << 8) | (low & 0xFF)


def decode(
    byte0: int,
    byte1: int,
    extension: Optional[bytes] = None,
) -> DecodedInstruction:
    """
    Decode one X instruction.

    Args:
        byte0: First instruction byte
        byte1: Second instruction byte
        extension: The two operand bytes of an extended instruction.
                   Required for class 3, ignored otherwise.

    Returns:
        DecodedInstruction with every field extracted

    Raises:
        ValueError: If a class 3 instruction is decoded without its
                    two operand bytes
    """
    operand_class = operand_class_of(byte0)

    immediate = None
    if operand_class == OperandClass.EXTENDED:
        if extension is None or len(extension) != EXTENSION_WORD_SIZE:
            raise ValueError(
                "extended instruction requires exactly "
                f"{EXTENSION_WORD_SIZE} operand bytes"
            )
        immediate = combine_immediate(extension[0], extension[1])

    return DecodedInstruction(
        byte0=byte0,
        byte1=byte1,
        operand_class=operand_class,
        discriminator=(byte0 >> DISCRIMINATOR_SHIFT) & DISCRIMINATOR_MASK,
        opcode=byte0 & OPCODE_MASK,
        reg1=(byte1 >> REG1_SHIFT) & REG_MASK,
        reg2=byte1 & REG_MASK,
        immediate=immediate,
    )


def is_sentinel(byte0: int, byte1: int) -> bool:
    """Check for the all-zero end-of-program instruction word."""
    return byte0 == 0x00 and byte1 == 0x00
