import io

import pytest

from conftest import ScriptedSource, seeded_source

from entropyforge.core.errors import CorruptWordList, InvalidOptions
from entropyforge.core.models import DicewareOptions
from entropyforge.generators import generator as gen_module
from entropyforge.generators.generator import (
    CHARSET,
    SYMBOLS,
    PasswordGenerator,
    titlecase,
)
from entropyforge.generators.wordlist import get_registry

_DICE_ALPHA = [0, 0, 0, 0, 0]    # 11111
_DICE_BRAVO = [0, 0, 0, 0, 1]    # 11112
_DICE_CHARLIE = [0, 0, 0, 0, 2]  # 11113


def test_charset_layout():
    assert len(CHARSET) == 72
    assert len(set(CHARSET)) == 72
    assert CHARSET.endswith("!@#$%^&*|/")
    assert SYMBOLS == "!@#$%^&*/|"


def test_csprng_length_and_alphabet(seeded_generator):
    for length in (1, 16, 128):
        password = seeded_generator.csprng(length)
        assert len(password) == length
        assert set(password) <= set(CHARSET)


def test_csprng_zero_length_is_empty(seeded_generator):
    assert seeded_generator.csprng(0) == ""


def test_csprng_negative_length_rejected(seeded_generator):
    with pytest.raises(InvalidOptions):
        seeded_generator.csprng(-1)


def test_csprng_maps_draws_onto_charset(small_registry):
    generator = PasswordGenerator(ScriptedSource([0, 25, 26, 61, 71]), small_registry)
    assert generator.csprng(5) == "azA9/"


def test_csprng_into_resets_buffer(seeded_generator):
    buffer = io.StringIO()
    buffer.write("stale contents that must vanish")
    seeded_generator.csprng_into(8, buffer)
    assert len(buffer.getvalue()) == 8


def test_same_seed_same_output():
    first = PasswordGenerator(seeded_source(99)).csprng(32)
    second = PasswordGenerator(seeded_source(99)).csprng(32)
    assert first == second


@pytest.mark.parametrize("seed", [7, 99, 2024])
def test_csprng_into_matches_csprng_for_same_seed(seed):
    buffer = io.StringIO()
    buffer.write("leftover")
    PasswordGenerator(seeded_source(seed)).csprng_into(40, buffer)
    assert buffer.getvalue() == PasswordGenerator(seeded_source(seed)).csprng(40)


@pytest.mark.parametrize("seed", [7, 99, 2024])
def test_diceware_into_matches_diceware_for_same_seed(seed):
    opts = DicewareOptions(
        word_count=7,
        separator="_",
        capitalize=True,
        uppercase=True,
        add_numbers=True,
        add_symbols=True,
    )
    buffer = io.StringIO()
    buffer.write("leftover")
    PasswordGenerator(seeded_source(seed)).diceware_into(opts, buffer)
    assert buffer.getvalue() == PasswordGenerator(seeded_source(seed)).diceware(opts)


def test_plain_diceware_uses_separator(small_registry):
    source = ScriptedSource(_DICE_ALPHA + _DICE_BRAVO + _DICE_CHARLIE)
    generator = PasswordGenerator(source, small_registry)
    opts = DicewareOptions(word_count=3, separator=" ")
    assert generator.diceware(opts) == "alpha bravo charlie"
    assert source.bounds == [6] * 15


def test_empty_separator_concatenates(small_registry):
    source = ScriptedSource(_DICE_ALPHA + _DICE_BRAVO)
    generator = PasswordGenerator(source, small_registry)
    assert generator.diceware(DicewareOptions(word_count=2, separator="")) == "alphabravo"


def test_all_transformations_draw_order_and_placement(small_registry):
    # U=1, S=2 with symbol '!', N=2 with number 42, then three dice keys
    source = ScriptedSource(
        [1, 2, 0, 2, 42] + _DICE_ALPHA + _DICE_BRAVO + _DICE_CHARLIE
    )
    generator = PasswordGenerator(source, small_registry)
    opts = DicewareOptions(
        word_count=3,
        separator="-",
        capitalize=True,
        uppercase=True,
        add_numbers=True,
        add_symbols=True,
    )
    assert generator.diceware(opts) == "Alpha-BRAVO-Charlie!42"
    assert source.bounds[:5] == [3, 3, len(SYMBOLS), 3, 696_969]


def test_symbol_precedes_number_on_uppercased_slot(small_registry):
    source = ScriptedSource([0, 0, 9, 0, 7] + _DICE_ALPHA + _DICE_BRAVO)
    generator = PasswordGenerator(source, small_registry)
    opts = DicewareOptions(
        word_count=2, uppercase=True, add_numbers=True, add_symbols=True
    )
    assert generator.diceware(opts) == "ALPHA|7-bravo"


def test_number_bound_is_honoured(small_registry):
    source = ScriptedSource([0, 4] + _DICE_ALPHA)
    generator = PasswordGenerator(source, small_registry)
    opts = DicewareOptions(word_count=1, add_numbers=True, number_bound=5)
    assert generator.diceware(opts) == "alpha4"
    assert source.bounds[:2] == [1, 5]


@pytest.mark.parametrize("count", [0, -3])
def test_word_count_below_one_rejected(seeded_generator, count):
    with pytest.raises(InvalidOptions):
        seeded_generator.diceware(DicewareOptions(word_count=count))


def test_number_bound_below_one_rejected(seeded_generator):
    with pytest.raises(InvalidOptions):
        seeded_generator.diceware(
            DicewareOptions(word_count=2, add_numbers=True, number_bound=0)
        )


def test_missing_key_raises_corrupt_word_list(small_registry):
    source = ScriptedSource([5, 5, 5, 5, 5])
    generator = PasswordGenerator(source, small_registry)
    with pytest.raises(CorruptWordList, match="66666"):
        generator.diceware(DicewareOptions(word_count=1))


def test_six_plain_words_come_from_registry(seeded_generator):
    words = seeded_generator.diceware(DicewareOptions(word_count=6, separator=" ")).split(" ")
    assert len(words) == 6
    vocabulary = set(get_registry().words.values())
    assert all(word in vocabulary for word in words)


def test_capitalize_and_uppercase_invariant(seeded_generator):
    opts = DicewareOptions(word_count=5, separator=" ", capitalize=True, uppercase=True)
    for _ in range(20):
        words = seeded_generator.diceware(opts).split(" ")
        upper = [w for w in words if w == w.upper()]
        assert len(upper) >= 1
        assert all(w == titlecase(w) or w == w.upper() for w in words)


def test_exactly_one_symbol_with_add_symbols(seeded_generator):
    opts = DicewareOptions(word_count=4, separator=" ", add_symbols=True)
    for _ in range(20):
        phrase = seeded_generator.diceware(opts)
        assert sum(ch in SYMBOLS for ch in phrase) == 1


def test_diceware_into_resets_buffer(seeded_generator):
    buffer = io.StringIO("leftover")
    buffer.seek(0, io.SEEK_END)
    seeded_generator.diceware_into(DicewareOptions(word_count=1), buffer)
    assert "leftover" not in buffer.getvalue()


@pytest.mark.parametrize(
    "word, expected",
    [("", ""), ("a", "A"), ("hELLO", "Hello"), ("éclair", "Éclair")],
)
def test_titlecase(word, expected):
    assert titlecase(word) == expected


def test_module_level_functions_use_default_generator():
    assert len(gen_module.csprng(12)) == 12
    buffer = io.StringIO()
    gen_module.diceware_into(DicewareOptions(word_count=3), buffer)
    assert buffer.getvalue().count("-") >= 2
    assert gen_module.diceware(DicewareOptions(word_count=2, separator="+")).count("+") >= 1
