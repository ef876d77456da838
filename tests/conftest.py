"""Shared fixtures for the EntropyForge test suite."""

from __future__ import annotations

import random
from typing import Iterable

import pytest

from forgekit.config import ForgeConfig, GlobalConfig

from entropyforge.core.engine import ForgeEngine
from entropyforge.generators.generator import PasswordGenerator
from entropyforge.generators.random_source import RandomSource
from entropyforge.generators.wordlist import WordListRegistry


class ScriptedSource(RandomSource):
    """Returns pre-arranged draws and records each requested bound."""

    def __init__(self, values: Iterable[int]) -> None:
        super().__init__()
        self._values = iter(values)
        self.bounds: list[int] = []

    def uniform(self, n: int) -> int:
        value = next(self._values)
        assert 0 <= value < n, f"scripted draw {value} outside [0, {n})"
        self.bounds.append(n)
        return value


def seeded_source(seed: int) -> RandomSource:
    return RandomSource(random.Random(seed).randbytes)


@pytest.fixture
def seeded_generator() -> PasswordGenerator:
    return PasswordGenerator(source=seeded_source(1234))


@pytest.fixture
def small_registry() -> WordListRegistry:
    return WordListRegistry({
        "11111": "alpha",
        "11112": "bravo",
        "11113": "charlie",
        "11114": "delta",
    })


@pytest.fixture
def quiet_config() -> ForgeConfig:
    return ForgeConfig(global_settings=GlobalConfig(console_logging=False))


@pytest.fixture
def engine(quiet_config, seeded_generator) -> ForgeEngine:
    return ForgeEngine(quiet_config, generator=seeded_generator)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "entropyforge.toml"
    path.write_text(
        "[global]\n"
        "console_logging = false\n"
        "\n"
        "[uniformity]\n"
        "alpha = 0.001\n",
        encoding="utf-8",
    )
    return path
