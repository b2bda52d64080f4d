"""
Translation Context
===================

The only mutable state of a translation run: the address counter and the
debug-mode flag. Both are held in an explicit TranslationContext that is
threaded through the dispatcher, so the engine can be driven one
instruction at a time without any file I/O.

Address Arithmetic
------------------
The address counter starts at 0 and advances by the length of each
instruction (2 bytes, or 4 for extended instructions). It is never reset
or decremented.

Relative branches (br, jr) encode a signed 8-bit displacement D in byte 1.
For a branch at address A the target is computed against the address of
the following instruction and then biased back by 2:

    target = (A + 2) + D - 2 = A + D
"""

from dataclasses import dataclass

# Labels address a 16-bit space
ADDRESS_MASK = 0xFFFF


def format_label(address: int) -> str:
    """Format an address as a label name, e.g. 0x1A -> '.L001a'."""
    return f".L{address:04x}"


def signed_byte(value: int) -> int:
    """Sign-extend an 8-bit value."""
    value &= 0xFF
    return value - 0x100 if value >= 0x80 else value


@dataclass
class TranslationContext:
    """
    Running state of a translation.

    Attributes:
        address: Address of the instruction about to be translated
        debug_mode: When set, a debug call follows every label
    """
    address: int = 0
    debug_mode: bool = False

    def label(self) -> str:
        """Label for the current address."""
        return format_label(self.address)

    def advance(self, size: int) -> None:
        """Move the address counter past an instruction of `size` bytes."""
        self.address += size

    def resolve_relative(self, displacement: int, size: int = 2) -> int:
        """
        Resolve a relative branch at the current address to an absolute target.

        Args:
            displacement: Raw byte 1 of the branch, read as a signed byte
            size: Length of the branch instruction

        Returns:
            Target address. Targets before address 0 wrap around the
            top of the 16-bit address space.
        """
        next_address = self.address + size
        target = next_address + signed_byte(displacement) - 2
        if target < 0:
            target &= ADDRESS_MASK
        return target
