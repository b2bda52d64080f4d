"""
X Translator Configuration
==========================

Names the translator writes into its output that are not dictated by the
X instruction set: the global entry symbol of the generated procedure and
the external routines called for debugging and character output.

Configuration can come from:
- Default values (defined here)
- Environment variables (TranslatorConfig.from_env)
- Command-line options (xtrans --entry)
"""

from dataclasses import dataclass
from typing import Optional
import os


@dataclass
class TranslatorConfig:
    """
    Configuration for a translation run.

    Attributes:
        entry_symbol: Global symbol of the generated procedure (default: "test")
        debug_routine: Routine called after each label in debug mode (default: "debug")
        output_routine: Routine called by the out instruction (default: "outchar")
        indent: Prefix of every instruction line (default: four spaces)
    """
    entry_symbol: str = "test"
    debug_routine: str = "debug"
    output_routine: str = "outchar"
    indent: str = "    "

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Create TranslatorConfig from environment variables.

        Environment variables (all optional, empty values are ignored):
            XTRANS_ENTRY_SYMBOL: Global entry symbol
            XTRANS_DEBUG_ROUTINE: Debug routine name
            XTRANS_OUTPUT_ROUTINE: Character output routine name

        Returns:
            TranslatorConfig with values from environment variables
        """
        config = cls()

        if entry := os.environ.get("XTRANS_ENTRY_SYMBOL"):
            config.entry_symbol = entry

        if debug := os.environ.get("XTRANS_DEBUG_ROUTINE"):
            config.debug_routine = debug

        if output := os.environ.get("XTRANS_OUTPUT_ROUTINE"):
            config.output_routine = output

        return config


# =============================================================================
# Default Configuration
# =============================================================================

_default_config: Optional[TranslatorConfig] = None


def get_default_config() -> TranslatorConfig:
    """
    Get the default translator configuration.

    Created from environment variables on first access. Can be overridden
    by calling set_default_config().
    """
    global _default_config
    if _default_config is None:
        _default_config = TranslatorConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TranslatorConfig]) -> None:
    """Replace the default configuration (None re-reads the environment)."""
    global _default_config
    _default_config = config
