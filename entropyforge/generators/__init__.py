"""
EntropyForge Generators
========================

Password generation: the CSPRNG-backed uniform source, the Diceware word
list registry, reusable buffers and the generator itself.
"""

from entropyforge.generators.buffers import BufferPool, default_pool, reset_buffer
from entropyforge.generators.generator import (
    CHARSET,
    SYMBOLS,
    PasswordGenerator,
    csprng,
    csprng_into,
    default_generator,
    diceware,
    diceware_into,
    titlecase,
)
from entropyforge.generators.random_source import RandomSource, default_source
from entropyforge.generators.wordlist import WordListRegistry, get_registry

__all__ = [
    "BufferPool",
    "CHARSET",
    "PasswordGenerator",
    "RandomSource",
    "SYMBOLS",
    "WordListRegistry",
    "csprng",
    "csprng_into",
    "default_generator",
    "default_pool",
    "default_source",
    "diceware",
    "diceware_into",
    "get_registry",
    "reset_buffer",
    "titlecase",
]
