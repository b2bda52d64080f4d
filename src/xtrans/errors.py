"""
X Translator Error Hierarchy
============================

This module defines the exception hierarchy for the X architecture
translator. All exceptions inherit from XTransError, allowing callers to
catch every translator-related error with a single except clause.

Exception Hierarchy
-------------------
XTransError (base)
├── TranslationError (engine-related)
│   ├── ShortReadError - input ended in the middle of an instruction
│   └── UnmappedRegisterError - register index has no name at a width
└── InputFileError - input binary cannot be opened

Every error is fatal to a translation run. Nothing is retried and nothing
is downgraded to a warning. Unrecognized opcodes are deliberately NOT
errors: the dispatcher skips them silently and the address still advances.

Error messages follow this format when the instruction address is known:
    error at .L0012: description

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class XTransError(Exception):
    """
    Base exception for all translator errors.

        try:
            lines = XTranslator().translate(data)
        except XTransError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Translation Exceptions
# =============================================================================

class TranslationError(XTransError):
    """
    Base exception for errors raised while translating an instruction stream.

    Attributes:
        message: The error description
        address: Address of the instruction being translated (optional)
    """

    def __init__(self, message: str, address: Optional[int] = None):
        self.message = message
        self.address = address
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.address is not None:
            return f"error at .L{self.address:04x}: {self.message}"
        return f"error: {self.message}"


class ShortReadError(TranslationError):
    """
    The byte source returned fewer bytes than an instruction needs.

    Raised for the 2-byte instruction word and for the 2-byte operand of
    extended instructions alike. Short reads are never retried.
    """

    def __init__(
        self,
        requested: int,
        received: int,
        address: Optional[int] = None,
    ):
        self.requested = requested
        self.received = received
        super().__init__(
            f"short read: requested {requested} byte(s), got {received}",
            address=address,
        )


class UnmappedRegisterError(TranslationError):
    """
    A register index has no target register at the requested width.

    Only the 8-bit table has holes (indices 4, 5, 14 and 15). Raising
    here keeps an error message from ever landing in the emitted
    assembly as if it were a register operand.
    """

    def __init__(self, index: int, width: int, address: Optional[int] = None):
        self.index = index
        self.width = width
        super().__init__(
            f"register r{index} has no {width}-bit mapping",
            address=address,
        )


# =============================================================================
# Input Exceptions
# =============================================================================

class InputFileError(XTransError):
    """
    The input binary cannot be opened for reading.

    Attributes:
        path: The path that was requested
        reason: Operating system reason for the failure
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not open file '{path}' for reading: {reason}")
