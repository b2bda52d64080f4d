"""
Opcode Dispatcher
=================

Turns one decoded X instruction into x86-64 assembly lines (AT&T syntax).

Each operand class has its own opcode table mapping an opcode enum member
to an emitter method. An opcode that is not in the table hits the default
arm of the lookup: nothing is emitted and the instruction is skipped. The
address counter still advances for skipped instructions, which keeps
labels in step with the instruction lengths of the input.

Generated Code Conventions
--------------------------
- X registers map to fixed x86-64 registers (see xtrans.cpu.registers)
- r13 (%r15) holds the condition flag; compares write its low byte
  (%r15b) and br tests its low bit
- out passes its argument in %rdi, which is saved and restored around
  the call because the output routine may clobber it
- Branch and call targets are the labels the translator emits for every
  instruction address

Example output for `not r1`:
        not %rbx

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from typing import Callable, Dict, List

from xtrans.config import TranslatorConfig
from xtrans.cpu.registers import FLAG_REGISTER, reg8, reg16, reg64
from xtrans.cpu.xarch import (
    OperandClass,
    ZeroOperandOp,
    RegisterOp,
    RelativeOp,
    TwoOperandOp,
    AbsoluteOp,
    ImmediateOp,
    lookup_opcode,
)
from xtrans.translator.context import TranslationContext, format_label
from xtrans.translator.decoder import DecodedInstruction

logger = logging.getLogger(__name__)

# First argument register of the x86-64 calling convention
CALL_ARG_REGISTER = "%rdi"
CALL_ARG_REGISTER_16 = "%di"

# Two-operand ALU instructions that map one-to-one onto x86 mnemonics
ALU_MNEMONICS: Dict[TwoOperandOp, str] = {
    TwoOperandOp.ADD: "add",
    TwoOperandOp.SUB: "sub",
    TwoOperandOp.MUL: "imul",
    TwoOperandOp.AND: "and",
    TwoOperandOp.OR: "or",
    TwoOperandOp.XOR: "xor",
    TwoOperandOp.MOV: "mov",
}

# Compare instructions: (x86 compare mnemonic, setcc mnemonic).
# cmp uses setg on the operands in encoded order.
COMPARE_MNEMONICS: Dict[TwoOperandOp, tuple] = {
    TwoOperandOp.TEST: ("test", "setnz"),
    TwoOperandOp.CMP: ("cmp", "setg"),
    TwoOperandOp.EQU: ("cmp", "sete"),
}

UNARY_MNEMONICS: Dict[RegisterOp, str] = {
    RegisterOp.NEG: "neg",
    RegisterOp.NOT: "not",
    RegisterOp.PUSH: "push",
    RegisterOp.POP: "pop",
    RegisterOp.INC: "inc",
    RegisterOp.DEC: "dec",
}

Emitter = Callable[[DecodedInstruction, TranslationContext], List[str]]


class Dispatcher:
    """
    Dispatches decoded instructions to per-opcode emitters.

    The dispatcher is stateless apart from its configuration. Everything
    that changes between instructions lives in the TranslationContext
    passed to dispatch(); dispatch() updates the debug flag but leaves the
    address counter for the caller to advance.
    """

    def __init__(self, config: TranslatorConfig):
        self.config = config

        self._zero_operand: Dict[ZeroOperandOp, Emitter] = {
            ZeroOperandOp.RET: self._emit_ret,
            ZeroOperandOp.CLD: self._emit_cld,
            ZeroOperandOp.STD: self._emit_std,
        }
        self._register: Dict[RegisterOp, Emitter] = {
            op: self._emit_unary for op in UNARY_MNEMONICS
        }
        self._register[RegisterOp.OUT] = self._emit_out
        self._relative: Dict[RelativeOp, Emitter] = {
            RelativeOp.BR: self._emit_br,
            RelativeOp.JR: self._emit_jr,
        }
        self._two_operand: Dict[TwoOperandOp, Emitter] = {
            op: self._emit_alu for op in ALU_MNEMONICS
        }
        self._two_operand.update({op: self._emit_compare for op in COMPARE_MNEMONICS})
        self._two_operand.update({
            TwoOperandOp.LOAD: self._emit_load,
            TwoOperandOp.STOR: self._emit_stor,
            TwoOperandOp.LOADB: self._emit_loadb,
            TwoOperandOp.STORB: self._emit_storb,
        })
        self._absolute: Dict[AbsoluteOp, Emitter] = {
            AbsoluteOp.JMP: self._emit_jmp,
            AbsoluteOp.CALL: self._emit_call,
        }
        self._immediate: Dict[ImmediateOp, Emitter] = {
            ImmediateOp.LOADI: self._emit_loadi,
        }

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _table_for(self, instruction: DecodedInstruction) -> tuple:
        """Select (opcode enum, emitter table) for an instruction's form."""
        match instruction.operand_class:
            case OperandClass.ZERO_OPERAND:
                return ZeroOperandOp, self._zero_operand
            case OperandClass.ONE_OPERAND if instruction.discriminator:
                return RelativeOp, self._relative
            case OperandClass.ONE_OPERAND:
                return RegisterOp, self._register
            case OperandClass.TWO_OPERAND:
                return TwoOperandOp, self._two_operand
            case OperandClass.EXTENDED if instruction.discriminator:
                return ImmediateOp, self._immediate
            case OperandClass.EXTENDED:
                return AbsoluteOp, self._absolute
            case _:
                raise ValueError(
                    f"unknown operand class {instruction.operand_class!r}"
                )

    def dispatch(
        self,
        instruction: DecodedInstruction,
        context: TranslationContext,
    ) -> List[str]:
        """
        Translate one instruction.

        Args:
            instruction: The decoded instruction
            context: Current translation state; context.address must be the
                     address of this instruction

        Returns:
            Assembly lines (without labels), possibly empty

        Raises:
            UnmappedRegisterError: If an operand register has no mapping at
                                   the width the instruction needs
        """
        enum_type, table = self._table_for(instruction)
        op = lookup_opcode(enum_type, instruction.opcode)

        emitter = table.get(op) if op is not None else None
        if emitter is None:
            logger.debug(
                "Skipping unassigned opcode at %s: class %d, disc %d, opcode %d",
                context.label(),
                instruction.operand_class,
                instruction.discriminator,
                instruction.opcode,
            )
            return []

        return emitter(instruction, context)

    def _line(self, text: str) -> str:
        return f"{self.config.indent}{text}"

    # =========================================================================
    # Class 0: no operands
    # =========================================================================

    def _emit_ret(self, instruction, context):
        return [self._line("ret")]

    def _emit_cld(self, instruction, context):
        logger.debug("Debug mode off at %s", context.label())
        context.debug_mode = False
        return []

    def _emit_std(self, instruction, context):
        logger.debug("Debug mode on at %s", context.label())
        context.debug_mode = True
        return []

    # =========================================================================
    # Class 1: one operand
    # =========================================================================

    def _emit_unary(self, instruction, context):
        mnemonic = UNARY_MNEMONICS[RegisterOp(instruction.opcode)]
        return [self._line(f"{mnemonic} {reg64(instruction.reg1)}")]

    def _emit_out(self, instruction, context):
        return [
            self._line(f"push {CALL_ARG_REGISTER}"),
            self._line(f"mov {reg16(instruction.reg1)}, {CALL_ARG_REGISTER_16}"),
            self._line(f"call {self.config.output_routine}"),
            self._line(f"pop {CALL_ARG_REGISTER}"),
        ]

    def _emit_br(self, instruction, context):
        target = context.resolve_relative(instruction.byte1, instruction.size)
        return [
            self._line(f"test $1, {reg64(FLAG_REGISTER)}"),
            self._line(f"jne {format_label(target)}"),
        ]

    def _emit_jr(self, instruction, context):
        target = context.resolve_relative(instruction.byte1, instruction.size)
        return [self._line(f"jmp {format_label(target)}")]

    # =========================================================================
    # Class 2: two registers
    # =========================================================================

    def _emit_alu(self, instruction, context):
        mnemonic = ALU_MNEMONICS[TwoOperandOp(instruction.opcode)]
        source = reg64(instruction.reg1)
        dest = reg64(instruction.reg2)
        return [self._line(f"{mnemonic} {source}, {dest}")]

    def _emit_compare(self, instruction, context):
        compare, setcc = COMPARE_MNEMONICS[TwoOperandOp(instruction.opcode)]
        first = reg64(instruction.reg1)
        second = reg64(instruction.reg2)
        return [
            self._line(f"{compare} {first}, {second}"),
            self._line(f"{setcc} {reg8(FLAG_REGISTER)}"),
        ]

    def _emit_load(self, instruction, context):
        return [self._line(f"mov ({reg64(instruction.reg1)}), {reg64(instruction.reg2)}")]

    def _emit_stor(self, instruction, context):
        return [self._line(f"mov {reg64(instruction.reg1)}, ({reg64(instruction.reg2)})")]

    def _emit_loadb(self, instruction, context):
        return [self._line(f"mov ({reg64(instruction.reg1)}), {reg8(instruction.reg2)}")]

    def _emit_storb(self, instruction, context):
        return [self._line(f"mov {reg8(instruction.reg1)}, ({reg64(instruction.reg2)})")]

    # =========================================================================
    # Class 3: extended (16-bit operand word)
    # =========================================================================

    def _emit_jmp(self, instruction, context):
        return [self._line(f"jmp {format_label(instruction.immediate)}")]

    def _emit_call(self, instruction, context):
        return [self._line(f"call {format_label(instruction.immediate)}")]

    def _emit_loadi(self, instruction, context):
        return [self._line(f"mov ${instruction.immediate}, {reg64(instruction.reg1)}")]
