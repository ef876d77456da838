"""
Diceware Word List Registry
============================

Maps five-digit dice-roll keys (each digit ``1``-``6``) to words.  The
release word list ships as ``entropyforge/data/words.json`` and is loaded
once, on first import of this module; the mapping is read-only afterwards
and needs no locking.

A malformed or incomplete embedded list raises :class:`CorruptWordList`
at import, so a process never starts generating from a broken registry.
"""

from __future__ import annotations

import json
from importlib import resources
from types import MappingProxyType
from typing import Iterator, Mapping

from entropyforge.core.errors import CorruptWordList

DICE_FACES = "123456"
KEY_LENGTH = 5
FULL_SIZE = len(DICE_FACES) ** KEY_LENGTH  # 7776


class WordListRegistry:
    """Immutable dice-roll key to word mapping.

    Args:
        mapping: Key/word pairs.  Keys must be five characters drawn from
            ``1``-``6``; words must be non-empty strings.

    Raises:
        CorruptWordList: If any key or word is malformed.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        for key, word in mapping.items():
            if not _is_dice_key(key):
                raise CorruptWordList(f"Malformed dice key: {key!r}")
            if not isinstance(word, str) or not word:
                raise CorruptWordList(f"Empty or non-string word for key {key}")
        self._words: Mapping[str, str] = MappingProxyType(dict(mapping))

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_json(cls, blob: str | bytes) -> WordListRegistry:
        """Decode a JSON object of the shape ``{"11111": "word", ...}``."""
        try:
            data = json.loads(blob)
        except ValueError as exc:
            raise CorruptWordList(f"Word list is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptWordList("Word list must be a JSON object")
        return cls(data)

    @classmethod
    def load_embedded(cls) -> WordListRegistry:
        """Load the word list shipped inside the package.

        Raises:
            CorruptWordList: If the asset is unreadable, malformed, or does
                not cover every one of the 7776 dice keys.
        """
        try:
            blob = (
                resources.files("entropyforge.data")
                .joinpath("words.json")
                .read_bytes()
            )
        except OSError as exc:
            raise CorruptWordList(f"Embedded word list unreadable: {exc}") from exc

        registry = cls.from_json(blob)
        if not registry.is_complete:
            raise CorruptWordList(
                f"Embedded word list has {len(registry)} of {FULL_SIZE} keys"
            )
        return registry

    # ------------------------------------------------------------------ #
    #  Lookup
    # ------------------------------------------------------------------ #

    def lookup(self, key: str) -> tuple[str, bool]:
        """Resolve a dice key.

        Returns:
            ``(word, True)`` when present, ``("", False)`` otherwise.
        """
        word = self._words.get(key)
        if word is None:
            return "", False
        return word, True

    @property
    def is_complete(self) -> bool:
        """Whether every possible five-dice key resolves."""
        return len(self._words) == FULL_SIZE

    @property
    def words(self) -> Mapping[str, str]:
        """Read-only view of the underlying mapping."""
        return self._words

    def keys(self) -> list[str]:
        """All keys in dice order (``11111`` first)."""
        return sorted(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, key: object) -> bool:
        return key in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


def _is_dice_key(key: object) -> bool:
    return (
        isinstance(key, str)
        and len(key) == KEY_LENGTH
        and all(ch in DICE_FACES for ch in key)
    )


_REGISTRY = WordListRegistry.load_embedded()


def get_registry() -> WordListRegistry:
    """The process-wide registry loaded from the embedded word list."""
    return _REGISTRY
