"""
Unit Tests for the Translator Engine
====================================

This module tests the dispatcher and the stream driver together:

- Every assigned opcode of every operand class
- Label addresses and the address counter
- Relative and absolute branch targets
- Debug mode toggling
- Unassigned opcodes (skipped, address still advances)
- End-of-program marker, short reads and unmapped registers

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import io

import pytest

from xtrans.config import TranslatorConfig
from xtrans.errors import ShortReadError, UnmappedRegisterError
from xtrans.translator import (
    XTranslator,
    Dispatcher,
    TranslationContext,
    decode,
    format_label,
    signed_byte,
)


PROLOGUE = [
    ".global test",
    "test:",
    "    push %rbp",
    "    mov %rsp, %rbp",
]

EPILOGUE = [
    "    pop %rbp",
    "    ret",
]

END = [0x00, 0x00]


def body(lines):
    """Strip prologue and epilogue from a translation."""
    assert lines[:len(PROLOGUE)] == PROLOGUE
    assert lines[-len(EPILOGUE):] == EPILOGUE
    return lines[len(PROLOGUE):-len(EPILOGUE)]


def labels(lines):
    return [line for line in lines if line.startswith(".L")]


# =============================================================================
# Whole Program Tests
# =============================================================================

class TestProgramStructure:
    """Tests for prologue, labels and epilogue."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    def test_not_example(self):
        """not r1 followed by the end marker."""
        lines = self.translator.translate(bytes([0x42, 0x12] + END))

        assert lines == PROLOGUE + [
            ".L0000:",
            "    not %rbx",
            ".L0002:",
        ] + EPILOGUE

    def test_empty_program(self):
        """Only the end marker: one label, then the epilogue."""
        lines = self.translator.translate(bytes(END))

        assert lines == PROLOGUE + [".L0000:"] + EPILOGUE

    def test_epilogue_emitted_once(self):
        lines = self.translator.translate(bytes([0x01, 0x00, 0x01, 0x00] + END))

        assert lines.count("    pop %rbp") == 1
        assert lines[-2:] == EPILOGUE

    def test_label_addresses_follow_instruction_sizes(self):
        """Labels advance by 2, or by 4 after an extended instruction."""
        program = [
            0x81, 0x12,              # add r1, r2
            0xE1, 0x10, 0x00, 0x05,  # loadi 5, r1
            0x01, 0x00,              # ret
        ] + END
        lines = self.translator.translate(bytes(program))

        assert labels(lines) == [".L0000:", ".L0002:", ".L0006:", ".L0008:"]

    def test_translate_to_text(self):
        text = self.translator.translate_to_text(bytes([0x01, 0x00] + END))

        assert text.endswith("    ret\n")
        assert ".L0000:\n    ret\n.L0002:\n" in text

    def test_data_after_end_marker_is_ignored(self):
        lines = self.translator.translate(bytes(END + [0x81, 0x12]))

        assert body(lines) == [".L0000:"]

    def test_custom_names(self):
        """Entry symbol and routine names come from the configuration."""
        config = TranslatorConfig(
            entry_symbol="main",
            debug_routine="trace",
            output_routine="putc",
        )
        translator = XTranslator(config)
        lines = translator.translate(bytes([0x03, 0x00, 0x47, 0x00] + END))

        assert lines[:2] == [".global main", "main:"]
        assert "    call trace" in lines
        assert "    call putc" in lines


# =============================================================================
# Per-Class Dispatch Tests
# =============================================================================

class TestZeroOperand:
    """Tests for class 0 instructions."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    def test_ret(self):
        lines = self.translator.translate(bytes([0x01, 0x00] + END))
        assert body(lines) == [".L0000:", "    ret", ".L0002:"]

    def test_opcode_zero_with_operand_byte_is_skipped(self):
        """0x00 0x05 is not the end marker; it is an unassigned opcode."""
        lines = self.translator.translate(bytes([0x00, 0x05] + END))
        assert body(lines) == [".L0000:", ".L0002:"]


class TestOneOperand:
    """Tests for class 1 instructions."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    @pytest.mark.parametrize("byte0, expected", [
        (0x41, "    neg %rcx"),
        (0x42, "    not %rcx"),
        (0x43, "    push %rcx"),
        (0x44, "    pop %rcx"),
        (0x48, "    inc %rcx"),
        (0x49, "    dec %rcx"),
    ])
    def test_register_form(self, byte0, expected):
        lines = self.translator.translate(bytes([byte0, 0x20] + END))
        assert body(lines) == [".L0000:", expected, ".L0002:"]

    def test_register_form_frame_pointer(self):
        lines = self.translator.translate(bytes([0x43, 0xE0] + END))
        assert "    push %rbp" in body(lines)

    def test_out_saves_rdi(self):
        """out r3 preserves %rdi around the call."""
        lines = self.translator.translate(bytes([0x47, 0x30] + END))

        assert body(lines) == [
            ".L0000:",
            "    push %rdi",
            "    mov %dx, %di",
            "    call outchar",
            "    pop %rdi",
            ".L0002:",
        ]

    def test_out_uses_word_register(self):
        lines = self.translator.translate(bytes([0x47, 0xF0] + END))
        assert "    mov %sp, %di" in lines

    def test_jr_forward(self):
        """jr at address 2 with displacement 6 targets address 8."""
        program = [0x81, 0x01, 0x62, 0x06] + END
        lines = self.translator.translate(bytes(program))

        assert body(lines) == [
            ".L0000:",
            "    add %rax, %rbx",
            ".L0002:",
            "    jmp .L0008",
            ".L0004:",
        ]

    def test_br_backward(self):
        """br at address 4 with displacement -2 targets address 2."""
        program = [0x81, 0x01, 0x81, 0x01, 0x61, 0xFE] + END
        lines = self.translator.translate(bytes(program))

        assert body(lines)[-3:] == [
            "    test $1, %r15",
            "    jne .L0002",
            ".L0006:",
        ]

    def test_jr_to_itself(self):
        lines = self.translator.translate(bytes([0x62, 0x00] + END))
        assert "    jmp .L0000" in lines

    def test_register_opcode_zero_is_skipped(self):
        """0x40 0x12 decodes to opcode 0, which has no instruction."""
        lines = self.translator.translate(bytes([0x40, 0x12] + END))
        assert body(lines) == [".L0000:", ".L0002:"]

    def test_unassigned_register_opcode(self):
        lines = self.translator.translate(bytes([0x45, 0x10] + END))
        assert body(lines) == [".L0000:", ".L0002:"]

    def test_unassigned_immediate_opcode(self):
        lines = self.translator.translate(bytes([0x63, 0x10] + END))
        assert body(lines) == [".L0000:", ".L0002:"]


class TestTwoOperand:
    """Tests for class 2 instructions (r1 source/first, r2 destination/second)."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    @pytest.mark.parametrize("byte0, expected", [
        (0x81, ["    add %rbx, %rcx"]),
        (0x82, ["    sub %rbx, %rcx"]),
        (0x83, ["    imul %rbx, %rcx"]),
        (0x85, ["    and %rbx, %rcx"]),
        (0x86, ["    or %rbx, %rcx"]),
        (0x87, ["    xor %rbx, %rcx"]),
        (0x8A, ["    test %rbx, %rcx", "    setnz %r15b"]),
        (0x8B, ["    cmp %rbx, %rcx", "    setg %r15b"]),
        (0x8C, ["    cmp %rbx, %rcx", "    sete %r15b"]),
        (0x8D, ["    mov %rbx, %rcx"]),
        (0x8E, ["    mov (%rbx), %rcx"]),
        (0x8F, ["    mov %rbx, (%rcx)"]),
        (0x90, ["    mov (%rbx), %cl"]),
        (0x91, ["    mov %bl, (%rcx)"]),
    ])
    def test_opcodes(self, byte0, expected):
        lines = self.translator.translate(bytes([byte0, 0x12] + END))
        assert body(lines) == [".L0000:"] + expected + [".L0002:"]

    def test_unassigned_opcode(self):
        """Opcode 4 has no instruction."""
        lines = self.translator.translate(bytes([0x84, 0x12] + END))
        assert body(lines) == [".L0000:", ".L0002:"]

    def test_loadb_into_unmapped_byte_register(self):
        """r4 has no byte register."""
        program = [0x01, 0x00, 0x90, 0x14] + END
        with pytest.raises(UnmappedRegisterError) as exc_info:
            self.translator.translate(bytes(program))

        assert exc_info.value.index == 4
        assert exc_info.value.width == 8
        assert exc_info.value.address == 2
        assert ".L0002" in str(exc_info.value)

    def test_storb_from_unmapped_byte_register(self):
        with pytest.raises(UnmappedRegisterError):
            self.translator.translate(bytes([0x91, 0xF1] + END))


class TestExtended:
    """Tests for class 3 instructions."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    def test_jmp(self):
        lines = self.translator.translate(bytes([0xC1, 0x00, 0x00, 0x1A] + END))
        assert body(lines) == [".L0000:", "    jmp .L001a", ".L0004:"]

    def test_call(self):
        lines = self.translator.translate(bytes([0xC2, 0x00, 0x12, 0x34] + END))
        assert body(lines) == [".L0000:", "    call .L1234", ".L0004:"]

    def test_loadi_decimal_value(self):
        lines = self.translator.translate(bytes([0xE1, 0x20, 0x01, 0x00] + END))
        assert body(lines) == [".L0000:", "    mov $256, %rcx", ".L0004:"]

    def test_loadi_unsigned(self):
        lines = self.translator.translate(bytes([0xE1, 0x00, 0xFF, 0xFF] + END))
        assert "    mov $65535, %rax" in lines

    def test_unassigned_extended_opcodes(self):
        """Unassigned extended opcodes still consume and count 4 bytes."""
        program = [0xC3, 0x00, 0x00, 0x00, 0xE2, 0x00, 0x00, 0x00] + END
        lines = self.translator.translate(bytes(program))

        assert body(lines) == [".L0000:", ".L0004:", ".L0008:"]


# =============================================================================
# Debug Mode Tests
# =============================================================================

class TestDebugMode:
    """Tests for std/cld."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    def test_std_then_cld(self):
        program = [
            0x03, 0x00,  # std
            0x81, 0x12,  # add r1, r2
            0x02, 0x00,  # cld
            0x81, 0x12,  # add r1, r2
        ] + END
        lines = self.translator.translate(bytes(program))

        assert body(lines) == [
            ".L0000:",
            ".L0002:",
            "    call debug",
            "    add %rbx, %rcx",
            ".L0004:",
            "    call debug",
            ".L0006:",
            "    add %rbx, %rcx",
            ".L0008:",
        ]

    def test_debug_line_before_end_marker(self):
        """The end marker's label still gets a debug call."""
        lines = self.translator.translate(bytes([0x03, 0x00] + END))

        assert body(lines) == [".L0000:", ".L0002:", "    call debug"]

    def test_std_is_idempotent(self):
        lines = self.translator.translate(bytes([0x03, 0x00, 0x03, 0x00] + END))
        assert lines.count("    call debug") == 2


# =============================================================================
# Error Tests
# =============================================================================

class TestShortReads:
    """Tests for truncated input."""

    def setup_method(self):
        self.translator = XTranslator(TranslatorConfig())

    def test_empty_input(self):
        with pytest.raises(ShortReadError) as exc_info:
            self.translator.translate(b"")

        assert exc_info.value.requested == 2
        assert exc_info.value.received == 0

    def test_half_instruction(self):
        with pytest.raises(ShortReadError) as exc_info:
            self.translator.translate(bytes([0x81, 0x12, 0x81]))

        assert exc_info.value.received == 1
        assert exc_info.value.address == 2

    def test_truncated_operand_word(self):
        with pytest.raises(ShortReadError) as exc_info:
            self.translator.translate(bytes([0xC1, 0x00, 0x00]))

        assert exc_info.value.requested == 2
        assert exc_info.value.received == 1
        assert exc_info.value.address == 0

    def test_missing_end_marker(self):
        with pytest.raises(ShortReadError):
            self.translator.translate(bytes([0x01, 0x00]))

    def test_lines_before_failure_are_yielded(self):
        """The stream yields everything up to the failing read."""
        produced = []
        stream = io.BytesIO(bytes([0x42, 0x00]))

        with pytest.raises(ShortReadError):
            for line in self.translator.translate_stream(stream):
                produced.append(line)

        assert produced == PROLOGUE + [".L0000:", "    not %rax", ".L0002:"]


# =============================================================================
# Context and Single Instruction Tests
# =============================================================================

class TestTranslationContext:
    """Tests for the address counter and branch arithmetic."""

    def test_initial_state(self):
        context = TranslationContext()

        assert context.address == 0
        assert context.debug_mode is False
        assert context.label() == ".L0000"

    def test_advance(self):
        context = TranslationContext()
        context.advance(2)
        context.advance(4)

        assert context.address == 6

    @pytest.mark.parametrize("address, displacement, target", [
        (0, 0x00, 0x0000),
        (0x10, 0x06, 0x0016),
        (0x10, 0x7F, 0x008F),
        (0x10, 0xF0, 0x0000),
        (0x100, 0x80, 0x0080),
    ])
    def test_resolve_relative(self, address, displacement, target):
        """Target is the branch address plus the signed displacement."""
        context = TranslationContext(address=address)
        assert context.resolve_relative(displacement) == target

    def test_resolve_relative_wraps_below_zero(self):
        context = TranslationContext(address=0)
        assert context.resolve_relative(0xFE) == 0xFFFE

    def test_format_label(self):
        assert format_label(0x1A) == ".L001a"
        assert format_label(0xBEEF) == ".Lbeef"

    def test_signed_byte(self):
        assert signed_byte(0x7F) == 127
        assert signed_byte(0x80) == -128
        assert signed_byte(0xFF) == -1

    def test_translate_instruction_advances(self):
        translator = XTranslator(TranslatorConfig())
        context = TranslationContext(address=0x20)

        lines = translator.translate_instruction(decode(0x62, 0x04), context)

        assert lines == ["    jmp .L0024"]
        assert context.address == 0x22

    def test_translate_instruction_sets_debug(self):
        translator = XTranslator(TranslatorConfig())
        context = TranslationContext()

        assert translator.translate_instruction(decode(0x03, 0x00), context) == []
        assert context.debug_mode is True
        assert context.address == 2

    def test_extended_instruction_advances_by_four(self):
        translator = XTranslator(TranslatorConfig())
        context = TranslationContext()

        translator.translate_instruction(decode(0xC1, 0x00, bytes([0, 8])), context)

        assert context.address == 4


class TestDispatcherForms:
    """Every operand class and discriminator reaches its own opcode table."""

    def setup_method(self):
        self.dispatcher = Dispatcher(TranslatorConfig())

    @pytest.mark.parametrize("raw, expected", [
        ((0x01, 0x00), ["    ret"]),
        ((0x42, 0x10), ["    not %rbx"]),
        ((0x62, 0x04), ["    jmp .L0004"]),
        ((0x8D, 0x10), ["    mov %rbx, %rax"]),
        ((0xC1, 0x00, bytes([0x00, 0x20])), ["    jmp .L0020"]),
        ((0xE1, 0x10, bytes([0x00, 0x20])), ["    mov $32, %rbx"]),
    ])
    def test_each_form(self, raw, expected):
        instruction = decode(*raw)
        assert self.dispatcher.dispatch(instruction, TranslationContext()) == expected

    def test_dispatch_leaves_address_alone(self):
        context = TranslationContext(address=6)
        self.dispatcher.dispatch(decode(0x42, 0x10), context)

        assert context.address == 6
