import json

import pytest

from entropyforge.core.errors import CorruptWordList
from entropyforge.generators.wordlist import (
    FULL_SIZE,
    WordListRegistry,
    get_registry,
)


def test_embedded_list_is_complete():
    registry = get_registry()
    assert len(registry) == FULL_SIZE == 7776
    assert registry.is_complete
    assert registry.keys()[0] == "11111"
    assert registry.keys()[-1] == "66666"


def test_embedded_words_are_distinct():
    words = list(get_registry().words.values())
    assert len(set(words)) == len(words)
    assert all(words)


def test_lookup_present_and_missing(small_registry):
    assert small_registry.lookup("11112") == ("bravo", True)
    assert small_registry.lookup("66666") == ("", False)
    assert "11111" in small_registry
    assert "99999" not in small_registry


def test_registry_is_read_only(small_registry):
    with pytest.raises(TypeError):
        small_registry.words["11111"] = "other"


@pytest.mark.parametrize("key", ["1111", "111111", "11117", "1111a", "01111"])
def test_malformed_keys_are_rejected(key):
    with pytest.raises(CorruptWordList):
        WordListRegistry({key: "word"})


def test_empty_word_is_rejected():
    with pytest.raises(CorruptWordList):
        WordListRegistry({"11111": ""})


def test_from_json_rejects_garbage():
    with pytest.raises(CorruptWordList):
        WordListRegistry.from_json("{not json")
    with pytest.raises(CorruptWordList):
        WordListRegistry.from_json(json.dumps(["11111", "word"]))


def test_from_json_round_trips_mapping():
    registry = WordListRegistry.from_json('{"11111": "abacus", "66666": "zoo"}')
    assert len(registry) == 2
    assert not registry.is_complete
    assert list(registry) == ["11111", "66666"]
