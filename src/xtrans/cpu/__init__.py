"""
X Translator CPU Package
========================

Architecture definitions shared by the decoder and the dispatcher: the
X instruction encoding (source side) and the x86-64 register mapping
(target side).

Modules:
    xarch: X instruction field layout, operand classes and opcode tables
    registers: X register to x86-64 register name mapping

Usage:
    from xtrans.cpu import OperandClass, TwoOperandOp, map_register
"""

from xtrans.cpu.xarch import (
    # Field layout
    CLASS_SHIFT,
    CLASS_MASK,
    DISCRIMINATOR_SHIFT,
    DISCRIMINATOR_MASK,
    OPCODE_MASK,
    REG1_SHIFT,
    REG_MASK,
    INSTRUCTION_WORD_SIZE,
    EXTENSION_WORD_SIZE,
    SENTINEL,
    # Classes and opcodes
    OperandClass,
    ZeroOperandOp,
    RegisterOp,
    RelativeOp,
    TwoOperandOp,
    AbsoluteOp,
    ImmediateOp,
    lookup_opcode,
)
from xtrans.cpu.registers import (
    RegisterWidth,
    REGISTERS_8,
    REGISTERS_16,
    REGISTERS_64,
    REGISTER_TABLES,
    FLAG_REGISTER,
    FRAME_POINTER,
    STACK_POINTER,
    map_register,
    reg8,
    reg16,
    reg64,
    is_mapped,
)

__all__ = [
    # Field layout
    "CLASS_SHIFT",
    "CLASS_MASK",
    "DISCRIMINATOR_SHIFT",
    "DISCRIMINATOR_MASK",
    "OPCODE_MASK",
    "REG1_SHIFT",
    "REG_MASK",
    "INSTRUCTION_WORD_SIZE",
    "EXTENSION_WORD_SIZE",
    "SENTINEL",
    # Classes and opcodes
    "OperandClass",
    "ZeroOperandOp",
    "RegisterOp",
    "RelativeOp",
    "TwoOperandOp",
    "AbsoluteOp",
    "ImmediateOp",
    "lookup_opcode",
    # Registers
    "RegisterWidth",
    "REGISTERS_8",
    "REGISTERS_16",
    "REGISTERS_64",
    "REGISTER_TABLES",
    "FLAG_REGISTER",
    "FRAME_POINTER",
    "STACK_POINTER",
    "map_register",
    "reg8",
    "reg16",
    "reg64",
    "is_mapped",
]
