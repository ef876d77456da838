"""
EntropyForge Errors
====================

Exception hierarchy raised by the generators and the analysis pipeline.
The analyzer itself is total and never raises.
"""

from __future__ import annotations


class ForgeError(Exception):
    """Base class for all EntropyForge failures."""


class EntropyFailure(ForgeError):
    """The operating-system CSPRNG refused to supply randomness.

    Raised chained from the underlying :class:`OSError`.  There is no
    fallback to a weaker source.
    """


class CorruptWordList(ForgeError):
    """A dice-roll key did not resolve, or the embedded list is malformed."""


class InvalidOptions(ForgeError, ValueError):
    """Generation was requested with unusable parameters."""
