"""
X Architecture Register Mapping
===============================

The X architecture has 16 logical registers (r0-r15). The translator maps
each one onto a fixed x86-64 register, so translated code never needs to
spill or allocate.

Register Mapping
----------------
| X reg | 64-bit | 16-bit | 8-bit  | Notes                   |
|-------|--------|--------|--------|-------------------------|
| r0    | %rax   | %ax    | %al    |                         |
| r1    | %rbx   | %bx    | %bl    |                         |
| r2    | %rcx   | %cx    | %cl    |                         |
| r3    | %rdx   | %dx    | %dl    |                         |
| r4    | %rsi   | %si    | -      |                         |
| r5    | %rdi   | %di    | -      |                         |
| r6    | %r8    | %r8w   | %r8b   |                         |
| r7    | %r9    | %r9w   | %r9b   |                         |
| r8    | %r10   | %r10w  | %r10b  |                         |
| r9    | %r11   | %r11w  | %r11b  |                         |
| r10   | %r12   | %r12w  | %r12b  |                         |
| r11   | %r13   | %r13w  | %r13b  |                         |
| r12   | %r14   | %r14w  | %r14b  |                         |
| r13   | %r15   | %r15w  | %r15b  | condition flag register |
| r14   | %rbp   | %bp    | -      | frame pointer           |
| r15   | %rsp   | %sp    | -      | stack pointer           |

The 8-bit table deliberately has no entries for r4, r5, r14 and r15.
Asking for one of them raises UnmappedRegisterError.

Usage:
    >>> map_register(1, RegisterWidth.QUAD)
    '%rbx'
    >>> map_register(14, 16)
    '%bp'

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import IntEnum
from typing import Dict

from xtrans.errors import UnmappedRegisterError


class RegisterWidth(IntEnum):
    """Operand widths the translator can request, in bits."""
    BYTE = 8
    WORD = 16
    QUAD = 64


REGISTERS_64: Dict[int, str] = {
    0: "%rax",
    1: "%rbx",
    2: "%rcx",
    3: "%rdx",
    4: "%rsi",
    5: "%rdi",
    6: "%r8",
    7: "%r9",
    8: "%r10",
    9: "%r11",
    10: "%r12",
    11: "%r13",
    12: "%r14",
    13: "%r15",
    14: "%rbp",
    15: "%rsp",
}

REGISTERS_16: Dict[int, str] = {
    0: "%ax",
    1: "%bx",
    2: "%cx",
    3: "%dx",
    4: "%si",
    5: "%di",
    6: "%r8w",
    7: "%r9w",
    8: "%r10w",
    9: "%r11w",
    10: "%r12w",
    11: "%r13w",
    12: "%r14w",
    13: "%r15w",
    14: "%bp",
    15: "%sp",
}

# r4, r5, r14 and r15 have no byte alias here
REGISTERS_8: Dict[int, str] = {
    0: "%al",
    1: "%bl",
    2: "%cl",
    3: "%dl",
    6: "%r8b",
    7: "%r9b",
    8: "%r10b",
    9: "%r11b",
    10: "%r12b",
    11: "%r13b",
    12: "%r14b",
    13: "%r15b",
}

REGISTER_TABLES: Dict[RegisterWidth, Dict[int, str]] = {
    RegisterWidth.BYTE: REGISTERS_8,
    RegisterWidth.WORD: REGISTERS_16,
    RegisterWidth.QUAD: REGISTERS_64,
}

# X register used as the condition flag by test/cmp/equ and br
FLAG_REGISTER = 13
FRAME_POINTER = 14
STACK_POINTER = 15


def map_register(index: int, width: int) -> str:
    """
    Get the x86-64 register name for an X register at a given width.

    Args:
        index: X register number (0-15)
        width: Requested width in bits (8, 16 or 64)

    Returns:
        AT&T register name, including the '%' prefix

    Raises:
        UnmappedRegisterError: If the index has no register at that width
        ValueError: If width is not 8, 16 or 64
    """
    table = REGISTER_TABLES[RegisterWidth(width)]
    try:
        return table[index]
    except KeyError:
        raise UnmappedRegisterError(index, int(width)) from None


def reg8(index: int) -> str:
    """Byte register for an X register index."""
    return map_register(index, RegisterWidth.BYTE)


def reg16(index: int) -> str:
    """Word register for an X register index."""
    return map_register(index, RegisterWidth.WORD)


def reg64(index: int) -> str:
    """Quad register for an X register index."""
    return map_register(index, RegisterWidth.QUAD)


def is_mapped(index: int, width: int) -> bool:
    """Check whether an X register has a name at the given width."""
    return index in REGISTER_TABLES[RegisterWidth(width)]
