"""
X Architecture Instruction Encoding
===================================

Definitions for the simplified 16-bit X instruction set: field layout,
operand classes, and the opcode numbers of every instruction the
translator knows about.

Instruction Format
------------------
Every instruction starts with a 2-byte word:

    byte 0:  C C D O O O O O
             | | | +-------- opcode within class (5 bits)
             | | +---------- discriminator (register vs immediate form)
             +-+------------ operand class (0-3)

    byte 1:  A A A A B B B B
             |       +------ register field 2 (rD / rS2)
             +-------------- register field 1 (rS / rD / rS1)

Class 3 (extended) instructions are followed by a 16-bit big-endian
operand word, making them 4 bytes long. All other classes are 2 bytes.

The word 0x0000 is reserved as the end-of-program marker.

Opcodes that are not listed in the tables below are unassigned. They
translate to nothing, but still occupy space in the address map.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import IntEnum


# =============================================================================
# Field Layout
# =============================================================================

CLASS_SHIFT = 6
CLASS_MASK = 0x03
DISCRIMINATOR_SHIFT = 5
DISCRIMINATOR_MASK = 0x01
OPCODE_MASK = 0x1F
REG1_SHIFT = 4
REG_MASK = 0x0F

INSTRUCTION_WORD_SIZE = 2
EXTENSION_WORD_SIZE = 2

SENTINEL = bytes([0x00, 0x00])


# =============================================================================
# Operand Classes
# =============================================================================

class OperandClass(IntEnum):
    """Top-level instruction category, taken from the top two bits of byte 0."""
    ZERO_OPERAND = 0
    ONE_OPERAND = 1
    TWO_OPERAND = 2
    EXTENDED = 3

    @property
    def size(self) -> int:
        """Instruction length in bytes, used to advance the address counter."""
        if self == OperandClass.EXTENDED:
            return INSTRUCTION_WORD_SIZE + EXTENSION_WORD_SIZE
        return INSTRUCTION_WORD_SIZE


# =============================================================================
# Opcode Tables
# =============================================================================

class ZeroOperandOp(IntEnum):
    """Class 0 opcodes."""
    RET = 1
    CLD = 2
    STD = 3


class RegisterOp(IntEnum):
    """Class 1 opcodes, discriminator 0 (register operand in field 1)."""
    NEG = 1
    NOT = 2
    PUSH = 3
    POP = 4
    OUT = 7
    INC = 8
    DEC = 9


class RelativeOp(IntEnum):
    """Class 1 opcodes, discriminator 1 (byte 1 is a relative displacement)."""
    BR = 1
    JR = 2


class TwoOperandOp(IntEnum):
    """Class 2 opcodes (register field 1 is the source, field 2 the destination)."""
    ADD = 1
    SUB = 2
    MUL = 3
    AND = 5
    OR = 6
    XOR = 7
    TEST = 10
    CMP = 11
    EQU = 12
    MOV = 13
    LOAD = 14
    STOR = 15
    LOADB = 16
    STORB = 17


class AbsoluteOp(IntEnum):
    """Class 3 opcodes, discriminator 0 (operand word is a target address)."""
    JMP = 1
    CALL = 2


class ImmediateOp(IntEnum):
    """Class 3 opcodes, discriminator 1 (operand word is an immediate value)."""
    LOADI = 1


def lookup_opcode(enum_type: type, opcode: int):
    """
    Look up an opcode number in one of the opcode enums.

    Returns:
        The enum member, or None if the opcode is unassigned
    """
    try:
        return enum_type(opcode)
    except ValueError:
        return None
