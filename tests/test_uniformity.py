import pytest

from conftest import ScriptedSource, seeded_source

from entropyforge.analyzers.uniformity import UniformityTester
from entropyforge.generators.generator import PasswordGenerator


@pytest.fixture
def tester():
    return UniformityTester(PasswordGenerator(seeded_source(2024)), alpha=0.001)


def test_charset_uniformity_passes(tester):
    result = tester.charset_uniformity(runs=720, length=10)
    assert result.name == "charset"
    assert result.samples == 7_200
    assert result.categories == 72
    assert result.passed


def test_dice_uniformity_passes(tester):
    result = tester.dice_uniformity(runs=1_200)
    assert result.samples == 6_000
    assert result.categories == 6
    assert result.passed


def test_word_uniformity_passes(tester):
    result = tester.word_uniformity(runs=6_480)
    assert result.samples == 38_880
    assert result.categories == 7_776
    assert result.passed


def test_biased_source_is_rejected():
    stuck = ScriptedSource(iter(lambda: 0, None))
    result = UniformityTester(PasswordGenerator(stuck), alpha=0.01).charset_uniformity(500)
    assert not result.passed
    assert result.p_value < 0.01


def test_invalid_parameters(tester):
    with pytest.raises(ValueError):
        tester.dice_uniformity(runs=0)
    with pytest.raises(ValueError):
        UniformityTester(PasswordGenerator(), alpha=1.5)
