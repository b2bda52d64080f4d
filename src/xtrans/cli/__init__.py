"""
X Translator Command-Line Interface
===================================

This package provides the `xtrans` command, a Click-based front end to
the translator engine.
"""

__all__ = ["xtrans"]
