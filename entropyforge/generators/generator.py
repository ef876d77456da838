"""
Password Generator
===================

Two families of passwords:

1. **CSPRNG strings** -- every character drawn uniformly from a fixed
   72-symbol charset (``a-z A-Z 0-9 ! @ # $ % ^ & * | /``), roughly
   6.17 bits per character.
2. **Diceware passphrases** -- five fair dice select one of 7776 words,
   roughly 12.9 bits per word, with optional transformations:

   - ``uppercase``: one word (index U) rendered fully uppercase
   - ``add_symbols``: one symbol appended after word S
   - ``add_numbers``: an integer in ``[0, number_bound)`` appended after word N
   - ``capitalize``: every word not chosen as U is titlecased

Each word slot is emitted as
``[separator if not first] [word] [symbol if S] [number if N]``,
so transformations stay attached to their word and a symbol precedes a
number when both land on the same slot.

The ``*_into`` variants write into a caller-owned :class:`io.StringIO`
after resetting it; the allocating variants wrap them.  On error the
buffer contents are undefined.

References:
    - Reinhold, A. G. (1995). The Diceware Passphrase Home Page.
      https://theworld.com/~reinhold/diceware.html
"""

from __future__ import annotations

import io
import string

from entropyforge.core.errors import CorruptWordList, InvalidOptions
from entropyforge.core.models import DicewareOptions
from entropyforge.generators.buffers import reset_buffer
from entropyforge.generators.random_source import RandomSource, default_source
from entropyforge.generators.wordlist import (
    DICE_FACES,
    KEY_LENGTH,
    WordListRegistry,
    get_registry,
)

CHARSET: str = (
    string.ascii_lowercase + string.ascii_uppercase + string.digits + "!@#$%^&*|/"
)
SYMBOLS: str = "!@#$%^&*/|"


def titlecase(word: str) -> str:
    """Uppercase the first code point and lowercase the remainder.

    Locale-neutral: ``str.upper`` / ``str.lower`` use the Unicode default
    case mappings with no language-specific rules.
    """
    if not word:
        return word
    return word[0].upper() + word[1:].lower()


class PasswordGenerator:
    """CSPRNG and Diceware password generation.

    Usage::

        gen = PasswordGenerator()
        token = gen.csprng(24)
        phrase = gen.diceware(DicewareOptions(word_count=6, capitalize=True))

    Args:
        source: Uniform integer source.  Defaults to the OS CSPRNG.
        registry: Dice-key word list.  Defaults to the embedded list.
    """

    def __init__(
        self,
        source: RandomSource | None = None,
        registry: WordListRegistry | None = None,
    ) -> None:
        self.source = source if source is not None else default_source()
        self.registry = registry if registry is not None else get_registry()

    # ------------------------------------------------------------------ #
    #  CSPRNG strings
    # ------------------------------------------------------------------ #

    def csprng(self, length: int) -> str:
        """Return *length* characters drawn uniformly from :data:`CHARSET`."""
        buffer = io.StringIO()
        self.csprng_into(length, buffer)
        return buffer.getvalue()

    def csprng_into(self, length: int, buffer: io.StringIO) -> None:
        """Reset *buffer* and write a *length*-character CSPRNG string to it.

        Raises:
            InvalidOptions: If *length* is negative.
            EntropyFailure: If the entropy source fails.
        """
        reset_buffer(buffer)
        if length < 0:
            raise InvalidOptions(f"Length must be >= 0, got {length}")

        size = len(CHARSET)
        for _ in range(length):
            buffer.write(CHARSET[self.source.uniform(size)])

    # ------------------------------------------------------------------ #
    #  Diceware passphrases
    # ------------------------------------------------------------------ #

    def diceware(self, opts: DicewareOptions) -> str:
        """Return a Diceware passphrase built according to *opts*."""
        buffer = io.StringIO()
        self.diceware_into(opts, buffer)
        return buffer.getvalue()

    def diceware_into(self, opts: DicewareOptions, buffer: io.StringIO) -> None:
        """Reset *buffer* and write a Diceware passphrase to it.

        Raises:
            InvalidOptions: If ``word_count`` or ``number_bound`` is below 1.
            CorruptWordList: If a rolled key is missing from the registry.
            EntropyFailure: If the entropy source fails.
        """
        reset_buffer(buffer)
        validate_options(opts)

        count = opts.word_count
        upper_index = self.source.uniform(count) if opts.uppercase else -1

        symbol_index, symbol = -1, ""
        if opts.add_symbols:
            symbol_index = self.source.uniform(count)
            symbol = SYMBOLS[self.source.uniform(len(SYMBOLS))]

        number_index, number = -1, ""
        if opts.add_numbers:
            number_index = self.source.uniform(count)
            number = str(self.source.uniform(opts.number_bound))

        for i in range(count):
            word = self.roll_word()
            if i > 0:
                buffer.write(opts.separator)
            if i == upper_index:
                buffer.write(word.upper())
            elif opts.capitalize:
                buffer.write(titlecase(word))
            else:
                buffer.write(word)
            if i == symbol_index:
                buffer.write(symbol)
            if i == number_index:
                buffer.write(number)

    def roll_dice(self) -> str:
        """Roll five dice and return the key, e.g. ``"16345"``."""
        return "".join(
            DICE_FACES[self.source.uniform(len(DICE_FACES))]
            for _ in range(KEY_LENGTH)
        )

    def roll_word(self) -> str:
        """Roll a key and resolve it in the registry.

        Raises:
            CorruptWordList: If the key does not resolve.
        """
        key = self.roll_dice()
        word, present = self.registry.lookup(key)
        if not present:
            raise CorruptWordList(f"Word not found for dice roll: {key}")
        return word


def validate_options(opts: DicewareOptions) -> None:
    """Raise :class:`InvalidOptions` for options no passphrase can satisfy."""
    if opts.word_count < 1:
        raise InvalidOptions(
            f"word_count must be >= 1, got {opts.word_count}"
        )
    if opts.add_numbers and opts.number_bound < 1:
        raise InvalidOptions(
            f"number_bound must be >= 1, got {opts.number_bound}"
        )


# ===================================================================== #
#  Module-level convenience over a shared default generator
# ===================================================================== #

_DEFAULT_GENERATOR = PasswordGenerator()


def default_generator() -> PasswordGenerator:
    """The process-wide generator (OS CSPRNG, embedded word list)."""
    return _DEFAULT_GENERATOR


def csprng(length: int) -> str:
    """Generate a CSPRNG string with the default generator."""
    return _DEFAULT_GENERATOR.csprng(length)


def csprng_into(length: int, buffer: io.StringIO) -> None:
    """Generate a CSPRNG string into *buffer* with the default generator."""
    _DEFAULT_GENERATOR.csprng_into(length, buffer)


def diceware(opts: DicewareOptions) -> str:
    """Generate a Diceware passphrase with the default generator."""
    return _DEFAULT_GENERATOR.diceware(opts)


def diceware_into(opts: DicewareOptions, buffer: io.StringIO) -> None:
    """Generate a Diceware passphrase into *buffer* with the default generator."""
    _DEFAULT_GENERATOR.diceware_into(opts, buffer)
